"""Application configuration via pydantic-settings.

Reads from .env file or environment variables. Only ambient concerns live
here (logging, scenario replay). Escrow economics such as the platform fee
and multisig thresholds are domain constants and cannot be overridden.

Usage:
    from litigation_escrow.config import get_settings
    settings = get_settings()
    print(settings.scenario_dir)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for litigation escrow tooling."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_env: Literal["development", "staging", "production"] = "development"
    app_log_level: str = "INFO"
    app_json_logs: bool = False

    # --- Scenario replay ---
    scenario_dir: Path = Path("scenarios")
    # Campaign deadline = first funding timestamp + this offset
    scenario_deadline_offset: int = 100
    # Refund window start = deadline + this offset
    scenario_refund_window_offset: int = 200
    # Used when a scenario has no initial_funding event
    scenario_default_deadline: int = 1100

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def use_json_logs(self) -> bool:
        """JSON logs are forced outside development."""
        return self.app_json_logs or not self.is_development


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton of the application settings."""
    return Settings()
