"""
Paystack Fees — Fee Calculator

Forward:   fee = min(ceil(P × gross + flat), cap), flat only when gross > threshold
Inverse:   gross such that gross - fee(gross) >= net, evaluated by regime:

    P == 0                net + min(cap, flat)
    net > flatline        net + cap
    net > crossover       ceil((net + flat) / (1 - P))
    otherwise             ceil(net / (1 - P)), at least 1

All amounts are integer minor units. Every fractional result is rounded up so
the processor never under-collects and the receiver is never under-settled.

Usage:
    calculator = FeeCalculator().with_percentage(0.02).with_cap(150000)
    calculator.fee_for(500000)
    calculator.amount_to_charge(500000)
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import fields, replace
from decimal import ROUND_CEILING, Decimal, InvalidOperation, localcontext
from typing import Any, Iterator, Optional

import structlog

from paystack_fees.config import Settings, settings
from paystack_fees.engine.schedule import FeeSchedule, as_decimal
from paystack_fees.engine.validation import ScheduleValidator, build_validator

logger = structlog.get_logger(__name__)

_ZERO = Decimal("0")
_GUARD_DIGITS = 28


@contextmanager
def _rounding_up(*operands: Decimal) -> Iterator[None]:
    """
    Decimal context wide enough for every operand, rounding toward +inf.

    Sums and products of the operands are then exact, and any inexact
    quotient is rounded up, so the ceiling of a result is never too low.
    """
    digits = sum(
        len(operand.as_tuple().digits) + abs(operand.adjusted())
        for operand in operands
        if operand.is_finite()
    )
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, digits + _GUARD_DIGITS)
        ctx.rounding = ROUND_CEILING
        yield


def _ceil(value: Decimal) -> int:
    if not value.is_finite():
        raise InvalidOperation(f"cannot round {value} to minor units")
    return int(value.to_integral_value(rounding=ROUND_CEILING))


def _divide(amount: Decimal, divider: Decimal) -> Decimal:
    # Only reachable with P == 1, which strict validation rejects.
    if divider == _ZERO:
        return _ZERO
    return amount / divider


class FeeCalculator:
    """
    Fee schedule plus the validator it was built with.

    Instances never change: each ``with_*`` call validates its value and
    returns a new calculator, so configuration can be chained and a failed
    call leaves the original untouched.
    """

    def __init__(
        self,
        schedule: Optional[FeeSchedule] = None,
        validator: Optional[ScheduleValidator] = None,
    ):
        self._validator = validator or build_validator(settings.VALIDATION_MODE)
        schedule = schedule or FeeSchedule.from_settings(settings)
        self._schedule = replace(
            schedule,
            **{
                f.name: self._validator.check_field(f.name, getattr(schedule, f.name))
                for f in fields(schedule)
            },
        )

    @classmethod
    def from_settings(cls, config: Settings = settings) -> FeeCalculator:
        """Build a calculator from a Settings instance's defaults and validation mode."""
        return cls(
            schedule=FeeSchedule.from_settings(config),
            validator=build_validator(config.VALIDATION_MODE),
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(schedule={self._schedule!r}, "
            f"validator={type(self._validator).__name__})"
        )

    @property
    def schedule(self) -> FeeSchedule:
        return self._schedule

    @property
    def validator(self) -> ScheduleValidator:
        return self._validator

    # -----------------------------------------------------------------------
    # Configuration
    # -----------------------------------------------------------------------

    def _with(self, field: str, value: Any) -> FeeCalculator:
        checked = self._validator.check_field(field, value)
        return type(self)(replace(self._schedule, **{field: checked}), self._validator)

    def with_percentage(self, percentage: Any) -> FeeCalculator:
        """Set the percentage rate, a number in [0, 1)."""
        return self._with("percentage", percentage)

    def with_additional_charge(self, additional_charge: Any) -> FeeCalculator:
        """Set the flat charge added once an amount is over the threshold."""
        return self._with("additional_charge", additional_charge)

    def with_threshold(self, threshold: Any) -> FeeCalculator:
        """Set the amount beyond which the additional charge applies."""
        return self._with("threshold", threshold)

    def with_cap(self, cap: Any) -> FeeCalculator:
        """Set the maximum fee ever charged; must be positive."""
        return self._with("cap", cap)

    # -----------------------------------------------------------------------
    # Computation
    # -----------------------------------------------------------------------

    def amount_to_charge(self, net_amount: Any) -> int:
        """
        Amount to charge so that ``net_amount`` is settled after fees.

        Args:
            net_amount: Minor units the receiver must end up with.

        Returns:
            Gross amount in minor units, never less than 1.

        Raises:
            InvalidAmount: If net_amount is not a non-negative integer
                (strict validation only).
        """
        net_amount = self._validator.check_amount("net_amount", net_amount)
        schedule = self._schedule
        net = as_decimal(net_amount)
        flat = as_decimal(schedule.additional_charge)
        cap = as_decimal(schedule.cap)
        threshold = as_decimal(schedule.threshold)

        with _rounding_up(net, flat, cap, threshold, schedule.rate):
            if schedule.rate == _ZERO:
                regime = "flat_only"
                result = _ceil(net + min(cap, flat))
            elif net > schedule.flatline:
                regime = "capped"
                result = _ceil(net + cap)
            elif net > schedule.crossover:
                regime = "flat_applied"
                result = _ceil(_divide(net + flat, schedule.charge_divider))
            else:
                regime = "percentage_only"
                result = _ceil(_divide(net, schedule.charge_divider)) or 1

        logger.debug(
            "charge_amount_calculated",
            net_amount=str(net_amount),
            regime=regime,
            amount_to_charge=result,
        )
        return result

    def fee_for(self, gross_amount: Any) -> int:
        """
        Fee deducted from a transaction of ``gross_amount``.

        Args:
            gross_amount: Minor units sent to the processor.

        Returns:
            Fee in minor units, at most the cap.

        Raises:
            InvalidAmount: If gross_amount is not a non-negative integer
                (strict validation only).
        """
        gross_amount = self._validator.check_amount("gross_amount", gross_amount)
        schedule = self._schedule
        gross = as_decimal(gross_amount)

        threshold = as_decimal(schedule.threshold)
        charge = as_decimal(schedule.additional_charge)

        with _rounding_up(gross, threshold, charge, schedule.rate):
            flat = charge if gross > threshold else _ZERO
            fee = min(_ceil(schedule.rate * gross + flat), schedule.cap)

        logger.debug(
            "fee_calculated",
            gross_amount=str(gross_amount),
            flat_applied=flat != _ZERO,
            fee=fee,
        )
        return fee
