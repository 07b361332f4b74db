"""
Configuration management for the tennis tracker.
"""

import copy
import logging
import yaml
from typing import Dict, Any

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading and provides default values."""

    @staticmethod
    def load_config(config_file: str) -> Dict[str, Any]:
        """Load configuration from YAML file, filling in defaults for missing keys."""
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning(f"Configuration file '{config_file}' not found. Using default configuration.")
            return ConfigManager.get_default_config()
        except yaml.YAMLError as e:
            logger.warning(f"Error parsing configuration file: {e}. Using default configuration.")
            return ConfigManager.get_default_config()

        if not isinstance(loaded, dict):
            logger.warning(f"Configuration file '{config_file}' is not a mapping. Using default configuration.")
            return ConfigManager.get_default_config()

        return ConfigManager.merge_config(ConfigManager.get_default_config(), loaded)

    @staticmethod
    def merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge overrides into a copy of base."""
        merged = copy.deepcopy(base)
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = ConfigManager.merge_config(merged[key], value)
            else:
                merged[key] = value
        return merged

    @staticmethod
    def get_default_config() -> Dict[str, Any]:
        """Return default configuration if config file is not available."""
        return {
            'database': {
                'path': 'tennis_tracker.db'
            },
            'store': {
                'backend': 'sqlite',
                'account_id': 'local'
            },
            'remote': {
                'base_url': '',
                'auth_url': '',
                'api_key': '',
                'timeout': 30
            },
            'statistics': {
                'recent_form_matches': 5,
                'top_performers_min_matches': 3,
                'top_performers_limit': 5
            },
            'duplicates': {
                'match_window_seconds': 3600
            },
            'reports': {
                'output_directory': 'reports_output'
            },
            'logging': {
                'level': 'INFO'
            }
        }
