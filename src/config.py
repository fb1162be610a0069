"""
Configuration Management Module

Responsibilities:
1. Read application settings from environment variables (preferred)
2. Read reporting settings from reporting_config.json when present
3. Config validation and defaults

Environment Variables:
    PCP_DB_PATH                                   - SQLite database file
    PCP_LOG_LEVEL                                 - Root log level (default: INFO)
    PCP_LOG_FILE                                  - Optional log file path
    PCP_REPORTING__TIMEZONE                       - IANA zone used for month bucketing
    PCP_REPORTING__DASHBOARD_WINDOW_MONTHS        - Dashboard series length
    PCP_REPORTING__CRITICAL_PROGRESS_THRESHOLD    - Critical demand cut-off (%)
"""

import json
from datetime import tzinfo
from functools import lru_cache
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.exceptions import ConfigError


class ReportingConfig(BaseModel):
    """Settings shared by the demand, performance and dashboard reports."""

    timezone: str = Field("UTC", description="IANA timezone for month bucketing")
    dashboard_window_months: int = Field(6, ge=1, le=24, description="Months shown on the dashboard")
    critical_progress_threshold: float = Field(
        25.0, ge=0, le=100, description="Demands below this progress are critical"
    )

    @field_validator("timezone")
    def validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @property
    def tzinfo(self) -> tzinfo:
        return ZoneInfo(self.timezone)

    @staticmethod
    def read_file(path: str) -> dict:
        """Raw settings from a JSON file, empty when the file is missing."""
        config_path = Path(path)
        if not config_path.exists():
            return {}
        try:
            with config_path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid reporting config {path}: {exc}") from exc

    @classmethod
    def load(cls, path: str = "reporting_config.json") -> "ReportingConfig":
        """Load reporting settings from a JSON file, falling back to defaults."""
        return cls(**cls.read_file(path))


class AppConfig(BaseSettings):
    """PCP Tracker application settings.

    Values are loaded in this priority order:
    1. Environment variables (PCP_*)
    2. .env file (if exists)
    3. Field defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="PCP_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    db_path: Path = Field(Path("data/pcp_tracker.db"), description="SQLite database file")
    log_level: str = Field("INFO", description="Root log level")
    log_file: Optional[Path] = Field(None, description="Optional log file")
    reporting: ReportingConfig = Field(default_factory=ReportingConfig)

    @field_validator("log_level")
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {value}")
        return level

    @classmethod
    def load(cls, reporting_path: str = "reporting_config.json") -> "AppConfig":
        """Factory method to load config.

        Application settings: Environment variables > .env
        Reporting settings: environment > reporting_config.json > defaults, per field
        """
        config = cls()
        data = ReportingConfig.read_file(reporting_path)
        data.update(config.reporting.model_dump(exclude_unset=True))
        config.reporting = ReportingConfig(**data)
        return config


@lru_cache()
def get_config() -> AppConfig:
    """Get config instance (cached for performance)."""
    return AppConfig.load()
