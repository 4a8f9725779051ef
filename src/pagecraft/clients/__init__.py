"""
Client modules for external service communication
"""

from .activity import SessionTracker

__all__ = ["SessionTracker"]
