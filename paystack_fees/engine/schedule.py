"""
Paystack Fees — Fee Schedule

The four numbers that define the pricing model, plus the boundary amounts
where the active fee formula changes:

    charge_divider       = 1 - P
    crossover            = threshold × charge_divider - flat
    flatline_plus_charge = (cap - flat) / P
    flatline             = flatline_plus_charge - cap

Below the crossover only the percentage applies, between crossover and
flatline the flat charge applies as well, and above the flatline the fee is
saturated at the cap. Derived values are recomputed on every access.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from paystack_fees.config import Settings, settings

_ZERO = Decimal("0")
_ONE = Decimal("1")


def as_decimal(value: Any) -> Decimal:
    """Convert a number to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


@dataclass(frozen=True)
class FeeSchedule:
    """Percentage rate, flat charge, threshold and cap in minor units."""

    percentage: Decimal
    additional_charge: int
    threshold: int
    cap: int

    @classmethod
    def from_settings(cls, config: Settings = settings) -> FeeSchedule:
        return cls(
            percentage=config.DEFAULT_PERCENTAGE,
            additional_charge=config.DEFAULT_ADDITIONAL_CHARGE,
            threshold=config.DEFAULT_THRESHOLD,
            cap=config.DEFAULT_CAP,
        )

    @property
    def rate(self) -> Decimal:
        return as_decimal(self.percentage)

    @property
    def charge_divider(self) -> Decimal:
        return _ONE - self.rate

    @property
    def crossover(self) -> Decimal:
        return as_decimal(self.threshold) * self.charge_divider - as_decimal(self.additional_charge)

    @property
    def flatline_plus_charge(self) -> Optional[Decimal]:
        """Gross amount at which the fee reaches the cap; None for a zero rate."""
        if self.rate == _ZERO:
            return None
        return (as_decimal(self.cap) - as_decimal(self.additional_charge)) / self.rate

    @property
    def flatline(self) -> Optional[Decimal]:
        """Net amount above which the fee is always the cap; None for a zero rate."""
        flatline_plus_charge = self.flatline_plus_charge
        if flatline_plus_charge is None:
            return None
        return flatline_plus_charge - as_decimal(self.cap)
