"""
Text processing utilities for the tennis tracker.
"""

from typing import Optional


class TextUtils:
    """Utilities for text processing and score parsing."""

    @staticmethod
    def clean_text(text: Optional[str]) -> str:
        """Strip surrounding whitespace, treating None as empty."""
        if not text:
            return ""
        return text.strip()

    @staticmethod
    def optional_text(text: Optional[str]) -> Optional[str]:
        """Return the stripped text, or None when nothing is left."""
        cleaned = TextUtils.clean_text(text)
        return cleaned if cleaned else None

    @staticmethod
    def parse_int(text: Optional[str]) -> Optional[int]:
        """
        Parse a score entered as free text.
        Returns None when the value is blank or not an integer.
        """
        if text is None:
            return None
        if isinstance(text, int):
            return text

        cleaned = text.strip()
        if not cleaned:
            return None

        try:
            return int(cleaned)
        except ValueError:
            return None
