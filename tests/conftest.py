"""
Paystack Fees — Shared pytest Fixtures & Configuration

Provides common fixtures for all test modules:
- Calculators wired with strict and disabled validation
- Reset of the once-per-process validation warning
- Environment isolation for settings tests
"""

from __future__ import annotations

import os
from typing import Iterator

import pytest
import structlog

from paystack_fees.engine import validation
from paystack_fees.engine.calculator import FeeCalculator
from paystack_fees.engine.validation import NoopValidator, StrictValidator


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_validation_warning(monkeypatch: pytest.MonkeyPatch) -> None:
    """Each test starts as if no NoopValidator had been built yet."""
    monkeypatch.setattr(validation, "_validation_disabled_warned", False)


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Drop any PAYSTACK_FEES_* variables inherited from the shell."""
    for key in list(os.environ):
        if key.startswith("PAYSTACK_FEES_"):
            monkeypatch.delenv(key)
    return monkeypatch


# ---------------------------------------------------------------------------
# Calculators
# ---------------------------------------------------------------------------


@pytest.fixture
def calculator() -> FeeCalculator:
    """Default schedule with strict validation."""
    return FeeCalculator(validator=StrictValidator())


@pytest.fixture
def lenient_calculator() -> FeeCalculator:
    """Default schedule with validation disabled."""
    return FeeCalculator(validator=NoopValidator())
