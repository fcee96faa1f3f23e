from __future__ import annotations

import shlex
import sys
from enum import Enum

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SimulatorMode(str, Enum):
    PROCESS = "process"
    HTTP = "http"


def default_simulator_command() -> str:
    return f"{shlex.quote(sys.executable)} -m linkgateway.simulator"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="APP_",
        case_sensitive=False,
    )

    env: str = Field(default="development")
    debug: bool = Field(default=False)
    docs_enabled: bool = Field(default=True)
    log_level: str = Field(default="INFO", pattern=r"(?i)^(debug|info|warning|error|critical)$")

    cors_origins: list[str] = Field(default_factory=list)
    trusted_hosts: list[str] = Field(default_factory=lambda: ["localhost", "127.0.0.1"])

    simulator_mode: SimulatorMode = Field(default=SimulatorMode.PROCESS)
    simulator_command: str = Field(default_factory=default_simulator_command, min_length=1)
    simulator_url: AnyHttpUrl = Field(default="http://localhost:8082")
    simulator_timeout_ms: int = Field(default=5000, ge=100, le=120_000)

    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"

    @property
    def simulator_timeout_seconds(self) -> float:
        return self.simulator_timeout_ms / 1000.0


def load_settings() -> Settings:
    settings = Settings()
    if not settings.cors_origins:
        settings.cors_origins = ["*"]
    return settings
