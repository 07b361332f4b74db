"""
Statistics package: player stats, head-to-head records and duplicate handling.
"""

from .player_stats import PlayerStatsAggregator, SortCriteria, DateRangeFilter
from .head_to_head import HeadToHeadAggregator
from .consolidation import DuplicatePlayerConsolidator, DuplicateMatchDetector, ConsolidationResult

__all__ = [
    'PlayerStatsAggregator', 'SortCriteria', 'DateRangeFilter', 'HeadToHeadAggregator',
    'DuplicatePlayerConsolidator', 'DuplicateMatchDetector', 'ConsolidationResult'
]
