"""
API routes module.
"""

from workqueue.api.routes.board import router as board_router
from workqueue.api.routes.health import router as health_router
from workqueue.api.routes.records import router as records_router

__all__ = ["board_router", "records_router", "health_router"]
