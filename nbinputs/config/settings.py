from __future__ import annotations

import functools
import socket
from typing import Any, Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BRIDGE_TIMEOUT_SECONDS_DEFAULT = 10.0
BRIDGE_CONNECT_TIMEOUT_SECONDS_DEFAULT = 3.0
PERSISTENT_ID_LENGTH_DEFAULT = 32
PERSISTENT_ID_LENGTH_MIN = 16
PERSISTENT_ID_LENGTH_MAX = 64


def _default_subscription_manager() -> str:
    return f"subscription_manager@{socket.gethostname()}"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # Host bridge
    bridge_url: Optional[str] = Field(None, alias="NBINPUTS_BRIDGE_URL")
    bridge_token: Optional[str] = Field(None, alias="NBINPUTS_BRIDGE_TOKEN")
    bridge_timeout_seconds: float = Field(BRIDGE_TIMEOUT_SECONDS_DEFAULT, alias="NBINPUTS_BRIDGE_TIMEOUT_SECONDS")
    bridge_connect_timeout_seconds: float = Field(
        BRIDGE_CONNECT_TIMEOUT_SECONDS_DEFAULT, alias="NBINPUTS_BRIDGE_CONNECT_TIMEOUT_SECONDS"
    )

    # Event bus / identity
    subscription_manager: str = Field(default_factory=_default_subscription_manager, alias="NBINPUTS_SUBSCRIPTION_MANAGER")
    persistent_id_length: int = Field(PERSISTENT_ID_LENGTH_DEFAULT, alias="NBINPUTS_PERSISTENT_ID_LENGTH")

    # Uploaded files
    nonexistent_dir_name: str = Field("nonexistent", alias="NBINPUTS_NONEXISTENT_DIR")

    @field_validator("bridge_url", "bridge_token", mode="before")
    @classmethod
    def blank_as_none(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @field_validator("bridge_url")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        return v.rstrip("/") if v else v

    @field_validator("bridge_timeout_seconds")
    @classmethod
    def clamp_timeout(cls, v: float) -> float:
        return v if v > 0 else BRIDGE_TIMEOUT_SECONDS_DEFAULT

    @field_validator("bridge_connect_timeout_seconds")
    @classmethod
    def clamp_connect_timeout(cls, v: float) -> float:
        return v if v > 0 else BRIDGE_CONNECT_TIMEOUT_SECONDS_DEFAULT

    @field_validator("persistent_id_length")
    @classmethod
    def clamp_id_length(cls, v: int) -> int:
        return max(PERSISTENT_ID_LENGTH_MIN, min(PERSISTENT_ID_LENGTH_MAX, v))

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        return (v or "INFO").upper()

    @field_validator("subscription_manager", "nonexistent_dir_name")
    @classmethod
    def non_empty(cls, v: str) -> str:
        text = (v or "").strip()
        if not text:
            raise ValueError("must not be empty")
        return text

    @property
    def standalone(self) -> bool:
        return self.bridge_url is None


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def settings_public_summary(settings: Optional[Settings] = None) -> Dict[str, Any]:
    s = settings or get_settings()
    return {
        "bridge_url": s.bridge_url,
        "bridge_token": "[redacted]" if s.bridge_token else None,
        "bridge_timeout_seconds": s.bridge_timeout_seconds,
        "bridge_connect_timeout_seconds": s.bridge_connect_timeout_seconds,
        "subscription_manager": s.subscription_manager,
        "persistent_id_length": s.persistent_id_length,
        "standalone": s.standalone,
        "log_level": s.log_level,
    }


__all__ = ["Settings", "get_settings", "settings_public_summary"]
