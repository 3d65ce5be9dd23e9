"""
Work Queue Tracker

A single-page tracker for freelance/commission jobs: customers' work moves
through pending, in progress, completed or cancelled, with deadline-first
listing, urgency flags and revenue from completed work.
"""

__version__ = "1.0.0"
