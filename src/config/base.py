"""
Environment-driven settings shared by every configuration section.

Values come from process environment variables, with a .env file in the
working directory loaded first.
"""

import os
import logging
from pathlib import Path
from typing import Any, Dict, Optional, List
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

ENVIRONMENTS = ("local", "test", "dev", "staging", "production")
TRUTHY = ("true", "1", "yes", "on")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ConfigError(Exception):
    """A setting is missing, malformed or inconsistent."""
    pass


@dataclass
class BaseConfig:
    """Settings every section inherits: deployment environment and log level."""

    PROJECT_ROOT: Path = Path(__file__).parent.parent.parent

    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "local")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def __post_init__(self):
        self._setup_logging()
        self._validate_config()

    def _setup_logging(self):
        level = logging.getLevelName(self.LOG_LEVEL.upper())
        if not isinstance(level, int):
            raise ConfigError(f"Invalid log level: {self.LOG_LEVEL}")
        logging.basicConfig(level=level, format=LOG_FORMAT)

    def _validate_config(self):
        if self.ENVIRONMENT not in ENVIRONMENTS:
            raise ConfigError(
                f"Invalid environment: {self.ENVIRONMENT} (expected one of {', '.join(ENVIRONMENTS)})"
            )

    @staticmethod
    def get_env(key: str, default: Optional[str] = None, required: bool = False) -> str:
        """
        Read an environment variable.

        Raises:
            ConfigError: required is set and the variable is missing
        """
        value = os.getenv(key, default)
        if required and value is None:
            raise ConfigError(f"Required environment variable '{key}' is not set")
        return value

    @staticmethod
    def get_env_int(key: str, default: Optional[int] = None, required: bool = False) -> int:
        raw = BaseConfig.get_env(key, None if default is None else str(default), required)
        try:
            return int(raw)
        except (ValueError, TypeError):
            raise ConfigError(f"Environment variable '{key}' must be an integer, got: {raw}")

    @staticmethod
    def get_env_bool(key: str, default: bool = False) -> bool:
        return BaseConfig.get_env(key, str(default)).lower() in TRUTHY

    @staticmethod
    def get_env_list(key: str, default: Optional[List[str]] = None, separator: str = ",") -> List[str]:
        """Read a separated list, dropping blank entries."""
        raw = BaseConfig.get_env(key)
        if raw is None:
            return list(default or [])
        return [item.strip() for item in raw.split(separator) if item.strip()]

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.__dataclass_fields__}
