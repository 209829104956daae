#!/usr/bin/env python3
"""
Configuration Management for the SpareBank1 → YNAB sync

Builds a single Config value from environment variables (optionally loaded
from an env file written by the setup wizard). The value is created once at
process start and passed explicitly to everything that needs it.
"""

import logging
import os
from dataclasses import dataclass, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .errors import ConfigError

DEFAULT_ENV_FILES = (".env", "budget.env")
DEFAULT_REFRESH_TOKEN_FILE = "refresh_token.txt"


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class SpareBank1Config:
    """SpareBank1 API and OAuth client settings."""

    client_id: str
    client_secret: str
    fin_inst: str
    initial_refresh_token: str
    refresh_token_file: Path = Path(DEFAULT_REFRESH_TOKEN_FILE)
    base_url: str = "https://api.sparebank1.no/personal/banking"
    auth_url: str = "https://api-auth.sparebank1.no"
    timeout: int = 30


@dataclass
class YnabConfig:
    """YNAB API configuration."""

    access_token: str
    budget_id: str
    base_url: str = "https://api.ynab.com/v1"
    timeout: int = 30


@dataclass
class Config:
    """
    Main configuration for a sync run.

    Required environment variables:
        SPAREBANK1_CLIENT_ID, SPAREBANK1_CLIENT_SECRET, SPAREBANK1_FIN_INST,
        INITIAL_REFRESH_TOKEN, YNAB_ACCESS_TOKEN, YNAB_BUDGET_ID,
        ACCOUNT_CONFIG_PATH

    Optional:
        REFRESH_TOKEN_FILE_PATH (default: refresh_token.txt), DRY_RUN,
        LOG_LEVEL, DEBUG, SYNC_ENV, SPAREBANK1_TIMEOUT, YNAB_TIMEOUT
    """

    environment: Environment
    sparebank1: SpareBank1Config
    ynab: YnabConfig
    account_config_path: Path

    dry_run: bool = False
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls, env_file: str | Path | None = None) -> "Config":
        """
        Create configuration from environment variables.

        Values already present in the process environment win over values
        from the env file.
        """
        _load_env_file(env_file)

        try:
            environment = Environment(os.getenv("SYNC_ENV", "production"))
        except ValueError as e:
            raise ConfigError(f"Invalid SYNC_ENV: {os.getenv('SYNC_ENV')}") from e

        return cls.with_values(
            sparebank1_client_id=os.getenv("SPAREBANK1_CLIENT_ID", ""),
            sparebank1_client_secret=os.getenv("SPAREBANK1_CLIENT_SECRET", ""),
            sparebank1_fin_inst=os.getenv("SPAREBANK1_FIN_INST", ""),
            ynab_access_token=os.getenv("YNAB_ACCESS_TOKEN", ""),
            ynab_budget_id=os.getenv("YNAB_BUDGET_ID", ""),
            account_config_path=os.getenv("ACCOUNT_CONFIG_PATH", ""),
            refresh_token_file_path=os.getenv("REFRESH_TOKEN_FILE_PATH") or None,
            initial_refresh_token=os.getenv("INITIAL_REFRESH_TOKEN", ""),
            dry_run=_parse_bool(os.getenv("DRY_RUN", "false")),
            environment=environment,
            debug=_parse_bool(os.getenv("DEBUG", "false")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            sparebank1_timeout=_parse_int("SPAREBANK1_TIMEOUT", "30"),
            ynab_timeout=_parse_int("YNAB_TIMEOUT", "30"),
        )

    @classmethod
    def with_values(
        cls,
        sparebank1_client_id: str,
        sparebank1_client_secret: str,
        sparebank1_fin_inst: str,
        ynab_access_token: str,
        ynab_budget_id: str,
        account_config_path: str | Path,
        refresh_token_file_path: str | Path | None,
        initial_refresh_token: str,
        dry_run: bool = False,
        environment: Environment = Environment.PRODUCTION,
        debug: bool = False,
        log_level: str = "INFO",
        sparebank1_timeout: int = 30,
        ynab_timeout: int = 30,
    ) -> "Config":
        """Create configuration from explicit values (no validation)."""
        return cls(
            environment=environment,
            sparebank1=SpareBank1Config(
                client_id=sparebank1_client_id,
                client_secret=sparebank1_client_secret,
                fin_inst=sparebank1_fin_inst,
                initial_refresh_token=initial_refresh_token,
                refresh_token_file=Path(refresh_token_file_path or DEFAULT_REFRESH_TOKEN_FILE),
                timeout=sparebank1_timeout,
            ),
            ynab=YnabConfig(
                access_token=ynab_access_token,
                budget_id=ynab_budget_id,
                timeout=ynab_timeout,
            ),
            account_config_path=Path(account_config_path),
            dry_run=dry_run,
            debug=debug,
            log_level=log_level,
        )

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        required = [
            ("SPAREBANK1_CLIENT_ID", self.sparebank1.client_id),
            ("SPAREBANK1_CLIENT_SECRET", self.sparebank1.client_secret),
            ("SPAREBANK1_FIN_INST", self.sparebank1.fin_inst),
            ("YNAB_ACCESS_TOKEN", self.ynab.access_token),
            ("YNAB_BUDGET_ID", self.ynab.budget_id),
            ("ACCOUNT_CONFIG_PATH", str(self.account_config_path)),
            ("INITIAL_REFRESH_TOKEN", self.sparebank1.initial_refresh_token),
        ]
        for env_name, value in required:
            # Path("") renders as "."
            if not value or not value.strip() or value == ".":
                errors.append(f"{env_name} is required")

        if self.sparebank1.timeout <= 0:
            errors.append("SPAREBANK1_TIMEOUT must be positive")
        if self.ynab.timeout <= 0:
            errors.append("YNAB_TIMEOUT must be positive")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = logging.DEBUG if self.debug else getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")
        logging.getLogger("sparebank1_ynab").setLevel(level)

        # Reduce noise from external libraries
        if self.environment != Environment.DEVELOPMENT:
            logging.getLogger("urllib3").setLevel(logging.WARNING)
            logging.getLogger("requests").setLevel(logging.WARNING)

    def get_sensitive_fields(self) -> list:
        """Get list of field names that contain sensitive data."""
        return [
            "sparebank1.client_secret",
            "sparebank1.initial_refresh_token",
            "ynab.access_token",
        ]

    def to_dict(self, include_sensitive: bool = False) -> dict[str, Any]:
        """Convert configuration to dictionary, optionally excluding sensitive data."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if is_dataclass(field_value):
                nested_dict: dict[str, Any] = {}
                for nested_name, nested_value in field_value.__dict__.items():
                    full_field_name = f"{field_name}.{nested_name}"

                    if not include_sensitive and full_field_name in self.get_sensitive_fields():
                        nested_dict[nested_name] = "***REDACTED***"
                    else:
                        nested_dict[nested_name] = _plain(nested_value)

                result[field_name] = nested_dict
            else:
                result[field_name] = _plain(field_value)

        return result


def _plain(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value


def _load_env_file(env_file: str | Path | None) -> None:
    if env_file is not None:
        env_path = Path(env_file)
        if not env_path.exists():
            raise ConfigError(f"Env file not found: {env_path}")
        load_dotenv(env_path)
        return

    for candidate in DEFAULT_ENV_FILES:
        if Path(candidate).exists():
            load_dotenv(candidate)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_int(env_name: str, default: str) -> int:
    raw = os.getenv(env_name, default)
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{env_name} must be an integer, got {raw!r}") from e


def load_config(env_file: str | Path | None = None) -> Config:
    """
    Load, validate and activate configuration.

    Raises:
        ConfigError: If any required value is missing or invalid
    """
    config = Config.from_environment(env_file)

    errors = config.validate()
    if errors:
        raise ConfigError(f"Configuration validation failed: {'; '.join(errors)}")

    config.setup_logging()
    return config
