"""
Name utilities for player identity matching.
"""

from typing import Callable, Dict, Iterable, List, TypeVar

T = TypeVar('T')


class NameUtils:
    """Utilities for name normalisation and grouping."""

    @staticmethod
    def normalize(name: str) -> str:
        """Normalize a player name for identity comparison (trim + case-fold)."""
        if name is None:
            return ""
        return name.strip().casefold()

    @staticmethod
    def names_match(first: str, second: str) -> bool:
        """Check whether two names denote the same player."""
        return NameUtils.normalize(first) == NameUtils.normalize(second)

    @staticmethod
    def group_by_normalized_name(items: Iterable[T], name_of: Callable[[T], str]) -> Dict[str, List[T]]:
        """
        Group items by the normalized form of their name.
        Groups and their members keep first-encounter order.
        """
        groups: Dict[str, List[T]] = {}
        for item in items:
            key = NameUtils.normalize(name_of(item))
            groups.setdefault(key, []).append(item)
        return groups

    @staticmethod
    def has_duplicates(names: Iterable[str]) -> bool:
        """Check whether any two names normalize to the same value."""
        seen = set()
        for name in names:
            key = NameUtils.normalize(name)
            if key in seen:
                return True
            seen.add(key)
        return False
