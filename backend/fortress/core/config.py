import os
from dataclasses import dataclass, field
from decimal import Decimal
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "Fiscal Fortress"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    # Database - SQLite locally, PostgreSQL in production
    FORTRESS_DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./fortress.db")

    # Advisor (text completion)
    GEMINI_API_KEY: str = ""
    ADVISOR_MODEL: str = "gemini-1.5-flash"

    # Safe-to-spend policy
    LOW_BALANCE_THRESHOLD: Decimal = Decimal("100.00")
    BILLS_PRESSURE_RATIO: Decimal = Decimal("0.5")
    SAVINGS_TARGET: Decimal = Decimal("200.00")
    TAX_RESERVE: Decimal = Decimal("0.00")

    # Urgency windows, in days
    FUNDING_URGENT_DAYS: int = 3
    URGENT_DAYS: int = 3
    MUST_HAVE_URGENT_DAYS: int = 2
    WARNING_DAYS: int = 7

    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

settings = Settings()


@dataclass(frozen=True)
class Policy:
    """Thresholds the decision engine runs against. Unset fields come from settings."""

    low_balance_threshold: Decimal = field(default_factory=lambda: settings.LOW_BALANCE_THRESHOLD)
    bills_pressure_ratio: Decimal = field(default_factory=lambda: settings.BILLS_PRESSURE_RATIO)
    savings_target: Decimal = field(default_factory=lambda: settings.SAVINGS_TARGET)
    tax_reserve: Decimal = field(default_factory=lambda: settings.TAX_RESERVE)
    funding_urgent_days: int = field(default_factory=lambda: settings.FUNDING_URGENT_DAYS)
    urgent_days: int = field(default_factory=lambda: settings.URGENT_DAYS)
    must_have_urgent_days: int = field(default_factory=lambda: settings.MUST_HAVE_URGENT_DAYS)
    warning_days: int = field(default_factory=lambda: settings.WARNING_DAYS)

    @classmethod
    def from_settings(cls, s: Settings = settings) -> "Policy":
        return cls(
            low_balance_threshold=s.LOW_BALANCE_THRESHOLD,
            bills_pressure_ratio=s.BILLS_PRESSURE_RATIO,
            savings_target=s.SAVINGS_TARGET,
            tax_reserve=s.TAX_RESERVE,
            funding_urgent_days=s.FUNDING_URGENT_DAYS,
            urgent_days=s.URGENT_DAYS,
            must_have_urgent_days=s.MUST_HAVE_URGENT_DAYS,
            warning_days=s.WARNING_DAYS,
        )
