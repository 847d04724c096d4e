"""Runtime settings read from the environment (and a local .env file)."""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from scoring.recompute import DuplicateRoundPolicy

load_dotenv()

logger = logging.getLogger(__name__)


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


def _int_from_env(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return max(1, int(value))
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", name, value)
        return default


def _policy_from_env(value: Optional[str]) -> DuplicateRoundPolicy:
    policy = DuplicateRoundPolicy.parse(value)
    if value and policy.value != value.strip().lower():
        logger.warning("Unknown DUPLICATE_ROUND_POLICY %r, using %s", value, policy.value)
    return policy


@dataclass
class Settings:
    database_url: Optional[str] = None
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:5173"])
    duplicate_round_policy: DuplicateRoundPolicy = DuplicateRoundPolicy.KEEP_ALL
    pool_min_size: int = 1
    pool_max_size: int = 10

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.environ.get("CORS_ORIGINS")
        return cls(
            database_url=os.environ.get("DATABASE_URL"),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            cors_origins=_split_origins(origins) if origins else ["http://localhost:5173"],
            duplicate_round_policy=_policy_from_env(os.environ.get("DUPLICATE_ROUND_POLICY")),
            pool_min_size=_int_from_env("DB_POOL_MIN_SIZE", 1),
            pool_max_size=_int_from_env("DB_POOL_MAX_SIZE", 10),
        )


def get_settings() -> Settings:
    return Settings.from_env()
