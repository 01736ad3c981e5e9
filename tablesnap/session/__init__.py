"""
Session Module for TableSnap.

The review session state machine: idle, processing, workspace, error.
"""

from .review_session import ReviewSession, AppPhase, TRANSITIONS

__all__ = ['ReviewSession', 'AppPhase', 'TRANSITIONS']
