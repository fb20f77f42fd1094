from paystack_fees.engine.calculator import FeeCalculator
from paystack_fees.engine.schedule import FeeSchedule
from paystack_fees.engine.validation import (
    NoopValidator,
    ScheduleValidator,
    StrictValidator,
    build_validator,
)

__all__ = [
    "FeeCalculator",
    "FeeSchedule",
    "NoopValidator",
    "ScheduleValidator",
    "StrictValidator",
    "build_validator",
]
