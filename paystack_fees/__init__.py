"""Paystack Fees — fee and fee-inclusive amount calculator for minor-unit amounts."""

from paystack_fees.engine.calculator import FeeCalculator
from paystack_fees.engine.schedule import FeeSchedule
from paystack_fees.engine.validation import (
    NoopValidator,
    ScheduleValidator,
    StrictValidator,
    build_validator,
)
from paystack_fees.exceptions import FeeError, InvalidAmount, InvalidConfiguration

__all__ = [
    "FeeCalculator",
    "FeeError",
    "FeeSchedule",
    "InvalidAmount",
    "InvalidConfiguration",
    "NoopValidator",
    "ScheduleValidator",
    "StrictValidator",
    "build_validator",
]
