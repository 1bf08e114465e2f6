"""Runtime settings read from environment variables."""

import os
from dataclasses import dataclass
from functools import lru_cache


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value not in (None, "") else default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else default


@dataclass(frozen=True)
class Settings:
    """Storefront configuration.

    Pricing values feed the order workflow; the JWT values feed credential
    issue and verification in the identity context.
    """

    jwt_secret: str = "storefront-development-secret"
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 7 * 24 * 60
    bcrypt_rounds: int = 12
    tax_rate: float = 0.18
    free_shipping_threshold: float = 500.0
    flat_shipping_cost: float = 50.0
    stock_retry_attempts: int = 3
    order_deadline_seconds: float = 10.0
    cors_origins: tuple[str, ...] = ("*",)

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("CORS_ORIGINS")
        return cls(
            jwt_secret=os.getenv("JWT_SECRET", cls.jwt_secret),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", cls.jwt_algorithm),
            jwt_expires_minutes=_env_int("JWT_EXPIRES_MINUTES", cls.jwt_expires_minutes),
            bcrypt_rounds=_env_int("BCRYPT_ROUNDS", cls.bcrypt_rounds),
            tax_rate=_env_float("TAX_RATE", cls.tax_rate),
            free_shipping_threshold=_env_float("FREE_SHIPPING_THRESHOLD", cls.free_shipping_threshold),
            flat_shipping_cost=_env_float("FLAT_SHIPPING_COST", cls.flat_shipping_cost),
            stock_retry_attempts=_env_int("STOCK_RETRY_ATTEMPTS", cls.stock_retry_attempts),
            order_deadline_seconds=_env_float("ORDER_DEADLINE_SECONDS", cls.order_deadline_seconds),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()) if origins else cls.cors_origins,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
