"""
Configuration package for the tennis tracker.
"""

from .config_manager import ConfigManager

__all__ = ['ConfigManager']
