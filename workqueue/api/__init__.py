"""
API module.
Contains the FastAPI application, the board page and the JSON routes.
"""

from workqueue.api.main import create_app, run

__all__ = ["create_app", "run"]
