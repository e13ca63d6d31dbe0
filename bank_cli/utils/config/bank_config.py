# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
from threading import Lock
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .config_loader import (
    BANK_CONFIG_ENV,
    DEFAULT_BANK_CONF,
    load_json_config,
    resolve_config_path,
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class BankConfig(BaseModel):
    """Main configuration for bank."""

    default_type: str = Field(
        default="file",
        description="Type used for ambiguous paths when no rule matches: 'file' or 'directory'",
    )

    timezone: str = Field(
        default="local",
        description="How naive --date values and --timestamp stamps are read: 'local' or 'utc'",
    )

    output: str = Field(default="plain", description="Default output format: plain, table, json")

    log_level: str = Field(
        default="WARNING", description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )

    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )

    log_output: str = Field(
        default="stderr", description="Log output: stdout, stderr, or file path"
    )

    model_config = {"extra": "forbid"}

    @field_validator("default_type")
    @classmethod
    def _check_default_type(cls, v: str) -> str:
        v = v.lower()
        if v not in ("file", "directory"):
            raise ValueError("default_type must be 'file' or 'directory'")
        return v

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, v: str) -> str:
        v = v.lower()
        if v not in ("local", "utc"):
            raise ValueError("timezone must be 'local' or 'utc'")
        return v

    @field_validator("output")
    @classmethod
    def _check_output(cls, v: str) -> str:
        v = v.lower()
        if v not in ("plain", "table", "json"):
            raise ValueError("output must be one of: plain, table, json")
        return v

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(LOG_LEVELS)}")
        return v

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "BankConfig":
        """Create configuration from dictionary."""
        return cls(**config)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()


class BankConfigSingleton:
    """Global singleton for BankConfig.

    Resolution chain for bank.conf:
      1. Explicit path passed to initialize()
      2. BANK_CONFIG_FILE environment variable
      3. ~/.bank/bank.conf
      4. Built-in defaults
    """

    _instance: Optional[BankConfig] = None
    _lock: Lock = Lock()

    @classmethod
    def get_instance(cls) -> BankConfig:
        """Get the global singleton instance, loading it on first use."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls._load(None)
        return cls._instance

    @classmethod
    def initialize(
        cls,
        config_dict: Optional[Dict[str, Any]] = None,
        config_path: Optional[str] = None,
    ) -> BankConfig:
        """Initialize the global singleton.

        Args:
            config_dict: Direct config dictionary (highest priority).
            config_path: Explicit path to bank.conf.

        Raises:
            FileNotFoundError: An explicit ``config_path`` does not exist.
            ValueError: The config file is not valid JSON or fails validation.
        """
        with cls._lock:
            if config_dict is not None:
                cls._instance = cls._validate(config_dict, "<dict>")
            else:
                cls._instance = cls._load(config_path)
        return cls._instance

    @classmethod
    def _load(cls, config_path: Optional[str]) -> BankConfig:
        path = resolve_config_path(config_path, BANK_CONFIG_ENV, DEFAULT_BANK_CONF)
        if path is None:
            if config_path:
                raise FileNotFoundError(f"Config file does not exist: {config_path}")
            return BankConfig()
        return cls._validate(load_json_config(path), str(path))

    @staticmethod
    def _validate(data: Dict[str, Any], source: str) -> BankConfig:
        try:
            return BankConfig.from_dict(data)
        except ValidationError as e:
            raise ValueError(f"Invalid bank configuration in {source}: {e}") from e

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance (mainly for testing)."""
        with cls._lock:
            cls._instance = None


def get_bank_config() -> BankConfig:
    """Get the global BankConfig instance."""
    return BankConfigSingleton.get_instance()
