"""
Paystack Fees — Input Validation Strategies

A calculator is wired with one validator when it is built:

- StrictValidator checks every configuration value and amount with pydantic
  and raises InvalidConfiguration / InvalidAmount on the first violation.
- NoopValidator accepts anything. Invalid values then flow straight into the
  fee math and produce meaningless results. Building one logs a warning once
  per process.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Annotated, Any

import structlog
from pydantic import BeforeValidator, Field, TypeAdapter, ValidationError

from paystack_fees.config import ValidationMode
from paystack_fees.exceptions import InvalidAmount, InvalidConfiguration

logger = structlog.get_logger(__name__)

_validation_disabled_warned = False


def _require_number(value: Any) -> Any:
    """Reject bools and strings, and move floats onto Decimal exactly as written."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValueError("must be a number")
    if isinstance(value, float):
        return Decimal(str(value))
    return value


def _require_whole_number(value: Any) -> Any:
    """Like _require_number, but whole floats and Decimals become int (10000.0 → 10000)."""
    value = _require_number(value)
    if isinstance(value, Decimal) and value.is_finite() and value == value.to_integral_value():
        return int(value)
    return value


Percentage = Annotated[
    Decimal,
    Field(ge=0, lt=1, allow_inf_nan=False),
    BeforeValidator(_require_number),
]
MinorUnits = Annotated[int, Field(strict=True, ge=0), BeforeValidator(_require_whole_number)]
PositiveMinorUnits = Annotated[
    int,
    Field(strict=True, gt=0),
    BeforeValidator(_require_whole_number),
]

_FIELD_ADAPTERS: dict[str, TypeAdapter] = {
    "percentage": TypeAdapter(Percentage),
    "additional_charge": TypeAdapter(MinorUnits),
    "threshold": TypeAdapter(MinorUnits),
    "cap": TypeAdapter(PositiveMinorUnits),
}
_AMOUNT_ADAPTER: TypeAdapter = TypeAdapter(MinorUnits)


def _describe(exc: ValidationError) -> str:
    return "; ".join(error["msg"] for error in exc.errors())


class ScheduleValidator(ABC):
    """Checks fee schedule fields and computation amounts."""

    @abstractmethod
    def check_field(self, field: str, value: Any) -> Any:
        """Return the value to store for ``field`` or raise InvalidConfiguration."""

    @abstractmethod
    def check_amount(self, name: str, value: Any) -> Any:
        """Return the amount to compute with or raise InvalidAmount."""


class StrictValidator(ScheduleValidator):
    def check_field(self, field: str, value: Any) -> Any:
        adapter = _FIELD_ADAPTERS.get(field)
        if adapter is None:
            raise InvalidConfiguration(field, "unknown fee schedule field")
        try:
            return adapter.validate_python(value)
        except ValidationError as exc:
            raise InvalidConfiguration(field, _describe(exc)) from exc

    def check_amount(self, name: str, value: Any) -> Any:
        try:
            return _AMOUNT_ADAPTER.validate_python(value)
        except ValidationError as exc:
            raise InvalidAmount(name, _describe(exc)) from exc


class NoopValidator(ScheduleValidator):
    def __init__(self) -> None:
        global _validation_disabled_warned
        if not _validation_disabled_warned:
            _validation_disabled_warned = True
            logger.warning(
                "fee_validation_disabled",
                detail="invalid fee schedules and amounts will not be rejected",
            )

    def check_field(self, field: str, value: Any) -> Any:
        return value

    def check_amount(self, name: str, value: Any) -> Any:
        return value


def build_validator(mode: ValidationMode | str) -> ScheduleValidator:
    """Create the validator for a configured mode."""
    mode = ValidationMode(mode)
    if mode == ValidationMode.STRICT:
        return StrictValidator()
    return NoopValidator()
