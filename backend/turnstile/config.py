"""Configuration for the turnstile system."""

import logging
import os
from typing import FrozenSet, List, Optional, Tuple

from dotenv import load_dotenv

from turnstile.models import AccumulativeCard, CardCategory, PeriodKind

load_dotenv()


def _split_origins(raw: Optional[str]) -> List[str]:
    if not raw:
        return [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:8000",
            "http://127.0.0.1:8000",
        ]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Settings:
    """Application settings."""

    # API Settings
    API_TITLE = "Transit Turnstile"
    API_VERSION = "1.0.0"
    API_DESCRIPTION = (
        "Fare card validation, turnstile passage decisions and passage statistics"
    )

    # CORS Settings
    CORS_ORIGINS = _split_origins(os.getenv("CORS_ORIGINS"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    # Business rules - fixed, not read from the environment
    FARE = AccumulativeCard.FARE
    DISALLOWED_PERIOD_COMBINATIONS: FrozenSet[Tuple[CardCategory, PeriodKind]] = frozenset({
        (CardCategory.REGULAR, PeriodKind.TEN_DAYS),
    })

    @classmethod
    def is_period_allowed(cls, category: CardCategory, period_kind: PeriodKind) -> bool:
        """Check whether a period card may be issued for this category."""
        return (category, period_kind) not in cls.DISALLOWED_PERIOD_COMBINATIONS

    @classmethod
    def period_rejection_message(cls, category: CardCategory, period_kind: PeriodKind) -> str:
        """Error text for a disallowed category/period combination."""
        return f"{category.value} cards cannot have a {period_kind.value} period"

    @classmethod
    def as_dict(cls) -> dict:
        """Effective settings, for display."""
        return {
            "api_title": cls.API_TITLE,
            "api_version": cls.API_VERSION,
            "cors_origins": list(cls.CORS_ORIGINS),
            "log_level": cls.LOG_LEVEL,
            "fare": cls.FARE,
            "disallowed_period_combinations": sorted(
                f"{category.value}+{period.value}"
                for category, period in cls.DISALLOWED_PERIOD_COMBINATIONS
            ),
        }


settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Set up root logging from settings."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO),
        format=settings.LOG_FORMAT,
    )
