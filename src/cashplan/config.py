"""Environment-driven settings."""

import os
from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping, Optional

DEFAULT_ADVISOR_URL = "http://localhost:8080/v1/cashflow/optimize"
DEFAULT_ADVISOR_MODEL = "gemini-2.5-flash"
DEFAULT_ADVISOR_TIMEOUT = 120
DEFAULT_HORIZON_DAYS = 90
DEFAULT_MAX_DEFERRAL_DAYS = 30
DEFAULT_EUR_USD = Decimal("1.08")
DEFAULT_USD_EGP = Decimal("48.50")


@dataclass(frozen=True)
class Settings:
    """Runtime settings. CLI options override these values."""

    advisor_url: str = DEFAULT_ADVISOR_URL
    advisor_api_key: Optional[str] = None
    advisor_model: str = DEFAULT_ADVISOR_MODEL
    advisor_timeout: int = DEFAULT_ADVISOR_TIMEOUT
    horizon_days: int = DEFAULT_HORIZON_DAYS
    max_deferral_days: int = DEFAULT_MAX_DEFERRAL_DAYS
    eur_usd: Decimal = DEFAULT_EUR_USD
    usd_egp: Decimal = DEFAULT_USD_EGP
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``CASHPLAN_*`` environment variables.

        Args:
            environ: Mapping to read from, defaults to ``os.environ``

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        env = os.environ if environ is None else environ
        return cls(
            advisor_url=env.get("CASHPLAN_ADVISOR_URL", DEFAULT_ADVISOR_URL),
            advisor_api_key=env.get("CASHPLAN_ADVISOR_API_KEY") or None,
            advisor_model=env.get("CASHPLAN_ADVISOR_MODEL", DEFAULT_ADVISOR_MODEL),
            advisor_timeout=int(env.get("CASHPLAN_ADVISOR_TIMEOUT", DEFAULT_ADVISOR_TIMEOUT)),
            horizon_days=int(env.get("CASHPLAN_HORIZON_DAYS", DEFAULT_HORIZON_DAYS)),
            max_deferral_days=int(
                env.get("CASHPLAN_MAX_DEFERRAL_DAYS", DEFAULT_MAX_DEFERRAL_DAYS)
            ),
            eur_usd=Decimal(env.get("CASHPLAN_EUR_USD", str(DEFAULT_EUR_USD))),
            usd_egp=Decimal(env.get("CASHPLAN_USD_EGP", str(DEFAULT_USD_EGP))),
            log_level=env.get("CASHPLAN_LOG_LEVEL", "WARNING").upper(),
        )
