"""List normalization utilities for environment variables."""

from __future__ import annotations


class ListNormalizer:
    """Normalizes delimited values such as ``INT, HUP ,KILL``."""

    @staticmethod
    def split_and_normalize(raw_value: str, separator: str, strip_items: bool) -> list[str]:
        """
        Split *raw_value* on *separator* (no split when empty).

        With *strip_items* each item is stripped and blank items are dropped.
        """
        parts = raw_value.split(separator) if separator else [raw_value]
        if not strip_items:
            return list(parts)
        return [item.strip() for item in parts if item.strip()]
