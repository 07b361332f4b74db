"""
Service layer for the tennis tracker.
"""

from .match_service import MatchService, create_match_service

__all__ = ['MatchService', 'create_match_service']
