"""Errors raised for invalid fee schedules and amounts."""

from __future__ import annotations


class FeeError(ValueError):
    """Base class for caller errors detected by the fee calculator."""

    def __init__(self, field: str, constraint: str):
        self.field = field
        self.constraint = constraint
        super().__init__(f"{field}: {constraint}")


class InvalidConfiguration(FeeError):
    """A fee schedule field was given a value outside its allowed range."""


class InvalidAmount(FeeError):
    """An amount passed to a computation is not a non-negative integer."""
