"""Tests for the validation strategies and how calculators pick one."""

from __future__ import annotations

from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from paystack_fees.config import ValidationMode
from paystack_fees.engine.calculator import FeeCalculator
from paystack_fees.engine.validation import NoopValidator, StrictValidator, build_validator
from paystack_fees.exceptions import InvalidAmount, InvalidConfiguration


class TestStrictValidator:
    def test_percentage_normalized_to_decimal(self) -> None:
        assert StrictValidator().check_field("percentage", 0.015) == Decimal("0.015")

    def test_integer_fields_pass_through(self) -> None:
        validator = StrictValidator()
        assert validator.check_field("additional_charge", 10000) == 10000
        assert validator.check_field("threshold", 0) == 0
        assert validator.check_field("cap", 1) == 1

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(InvalidConfiguration, match="unknown fee schedule field"):
            StrictValidator().check_field("discount", 1)

    def test_constraint_names_the_bound(self) -> None:
        with pytest.raises(InvalidConfiguration) as exc_info:
            StrictValidator().check_field("cap", 0)
        assert "greater than 0" in exc_info.value.constraint

    def test_amount_must_be_non_negative(self) -> None:
        with pytest.raises(InvalidAmount) as exc_info:
            StrictValidator().check_amount("gross_amount", -5)
        assert exc_info.value.field == "gross_amount"
        assert "greater than or equal to 0" in exc_info.value.constraint

    def test_amount_zero_accepted(self) -> None:
        assert StrictValidator().check_amount("net_amount", 0) == 0


class TestNoopValidator:
    def test_everything_passes_through(self) -> None:
        validator = NoopValidator()
        assert validator.check_field("percentage", 7) == 7
        assert validator.check_field("cap", "nonsense") == "nonsense"
        assert validator.check_amount("net_amount", -1.5) == -1.5

    def test_warns_once_per_process(self) -> None:
        with capture_logs() as logs:
            NoopValidator()
            NoopValidator()

        warnings = [entry for entry in logs if entry["event"] == "fee_validation_disabled"]
        assert len(warnings) == 1
        assert warnings[0]["log_level"] == "warning"

    def test_strict_validator_does_not_warn(self) -> None:
        with capture_logs() as logs:
            StrictValidator()
        assert logs == []


class TestBuildValidator:
    def test_strict_mode(self) -> None:
        assert isinstance(build_validator(ValidationMode.STRICT), StrictValidator)

    def test_disabled_mode_by_value(self) -> None:
        assert isinstance(build_validator("disabled"), NoopValidator)

    def test_unknown_mode_rejected(self) -> None:
        with pytest.raises(ValueError):
            build_validator("sometimes")

    def test_calculator_uses_injected_validator(self) -> None:
        validator = NoopValidator()
        assert FeeCalculator(validator=validator).validator is validator
