"""
Utility functions package for the tennis tracker.
"""

from .name_utils import NameUtils
from .text_utils import TextUtils

__all__ = ['NameUtils', 'TextUtils']
