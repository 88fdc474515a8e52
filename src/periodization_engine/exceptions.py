"""Custom exceptions for the periodization engine."""

from __future__ import annotations


class PeriodizationError(Exception):
    """Base exception for all periodization engine errors."""


class ConfigurationError(PeriodizationError):
    """Raised when detection or scoring configuration is invalid."""


class UnknownModelError(ConfigurationError):
    """Raised when a target periodization model name is not recognised."""


class InvalidInputError(PeriodizationError):
    """Raised when an input record cannot be parsed.

    Attributes:
        record_index: Position of the offending record in its list, if known.
    """

    def __init__(self, message: str, record_index: int | None = None) -> None:
        super().__init__(message)
        self.record_index = record_index
