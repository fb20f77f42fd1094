"""
Paystack Fees — Configuration & Constants

Default fee schedule and runtime switches. Every rate, charge and cap the
calculator starts from lives here. No hardcoded values in business logic.

Usage:
    from paystack_fees.config import settings
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic_settings import BaseSettings


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ValidationMode(str, Enum):
    """Which validator a calculator is wired with."""
    STRICT = "strict"       # reject invalid configuration and amounts
    DISABLED = "disabled"   # skip checks, warn once per process


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """
    Central configuration for the fee calculator.

    Loads from PAYSTACK_FEES_* environment variables with fallback defaults.
    Amounts are integer minor units (kobo).
    """

    model_config = {"env_prefix": "PAYSTACK_FEES_"}

    # -----------------------------------------------------------------------
    # Default fee schedule
    # fee = min(ceil(P × amount + flat), cap), flat applies above threshold
    # -----------------------------------------------------------------------
    DEFAULT_PERCENTAGE: Decimal = Decimal("0.015")   # 1.5%
    DEFAULT_ADDITIONAL_CHARGE: int = 10000           # ₦100
    DEFAULT_THRESHOLD: int = 250000                  # ₦2,500
    DEFAULT_CAP: int = 200000                        # ₦2,000

    # -----------------------------------------------------------------------
    # Validation & logging
    # -----------------------------------------------------------------------
    VALIDATION_MODE: ValidationMode = ValidationMode.STRICT
    LOG_LEVEL: str = "INFO"


# Singleton instance
settings = Settings()
