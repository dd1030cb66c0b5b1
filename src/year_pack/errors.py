"""Exceptions raised by the year_pack engine."""

from typing import List, Optional


class ConfigurationError(ValueError):
    """Invalid engine configuration, rejected before any processing.

    ``violations`` lists one human readable entry per violated constraint,
    e.g. ``"maxSamples: Input should be less than or equal to 100"``.
    """

    def __init__(self, message: str, violations: Optional[List[str]] = None):
        super().__init__(message)
        self.violations = list(violations or [])


class RecordFormatError(ValueError):
    """A record export that cannot be read as JSON or JSON Lines."""
