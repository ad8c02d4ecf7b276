import os
from dataclasses import dataclass
from pathlib import Path

# Load environment variables from .env file in package directory
from dotenv import load_dotenv
env_path = Path(__file__).parent / ".env"
load_dotenv(dotenv_path=env_path)


DATE_FALLBACK_MODES = ("now", "received")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    counterparty_max_length: int = 50
    # "now" uses today's date for messages without a parsable date,
    # "received" uses the message's receipt timestamp when one is known.
    date_fallback: str = "now"
    max_count: int = 100
    days_back: int = 30


def load_settings() -> Settings:
    """Read settings from the environment (and ``.env``)."""

    date_fallback = os.getenv("SMSLEDGER_DATE_FALLBACK", "now").strip().lower()
    if date_fallback not in DATE_FALLBACK_MODES:
        raise ValueError(
            f"SMSLEDGER_DATE_FALLBACK must be one of {DATE_FALLBACK_MODES}, got {date_fallback!r}"
        )

    counterparty_max_length = _int_env("SMSLEDGER_COUNTERPARTY_MAX_LENGTH", 50)
    if counterparty_max_length < 1:
        raise ValueError("SMSLEDGER_COUNTERPARTY_MAX_LENGTH must be positive")

    return Settings(
        log_level=os.getenv("SMSLEDGER_LOG_LEVEL", "INFO").upper(),
        counterparty_max_length=counterparty_max_length,
        date_fallback=date_fallback,
        max_count=_int_env("SMSLEDGER_MAX_COUNT", 100),
        days_back=_int_env("SMSLEDGER_DAYS_BACK", 30),
    )


settings = load_settings()
