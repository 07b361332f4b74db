"""
Scoring package: set/match validation, form validation and live winner calculation.
"""

from .validation import MatchValidator
from .match_form import SetInput, MatchForm, compute_validation_errors
from .completion import MatchCompletionCalculator

__all__ = ['MatchValidator', 'SetInput', 'MatchForm', 'compute_validation_errors',
           'MatchCompletionCalculator']
