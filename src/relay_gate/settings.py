"""
relay_gate.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Carry the owner identity as an immutable value injected at startup.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_JWT_SECRET = "dev-secret-change-me"


class Settings(BaseSettings):
    """
    Process-wide configuration, read once at startup and passed explicitly.
    Policy code never reads the environment on its own.
    """

    model_config = SettingsConfigDict(
        env_prefix="RELAY_",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
    )

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "relay-gate"
    log_level: str = "INFO"
    log_json: bool = True

    api_host: str = "0.0.0.0"
    api_port: int = 3334

    # The owner is implicitly authorized everywhere and is the only management caller.
    # Required: there is no fallback identity that could silently gain owner rights.
    owner_pubkey: str = Field(
        ...,
        validation_alias=AliasChoices("RELAY_PUBKEY", "RELAY_OWNER_PUBKEY"),
    )

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./relay.db"

    # Structural limits applied before identity checks.
    max_tag_value_len: int = Field(default=100, ge=1)

    # Auth for the management API
    jwt_alg: str = "HS256"
    jwt_issuer: str = "relay-gate"
    jwt_audience: str = "relay-management"
    jwt_secret: str = Field(default=DEV_JWT_SECRET, repr=False)

    @field_validator("owner_pubkey")
    @classmethod
    def _owner_pubkey_shape(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("owner pubkey must not be empty")
        if len(v) > 64:
            raise ValueError("owner pubkey must be at most 64 characters")
        return v

    @model_validator(mode="after")
    def _no_dev_secret_in_prod(self) -> Settings:
        # Anyone knowing the dev secret could mint an owner token.
        if self.env == "prod" and self.jwt_secret == DEV_JWT_SECRET:
            raise ValueError("RELAY_JWT_SECRET must be set in prod")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# RELAY_PUBKEY is the variable name used by existing deployments; RELAY_OWNER_PUBKEY
# is accepted as a clearer alternative.
