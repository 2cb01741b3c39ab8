"""
Configuration Management for Curricula

Dataclass-based application configuration with per-environment defaults,
dictionary loading and environment variable overrides.
"""

import logging
import os
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class Environment(Enum):
    """Application environments"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


@dataclass
class PersistenceConfig:
    """Document store configuration"""
    backend: str = "memory"  # memory | firestore
    project: Optional[str] = None
    database: Optional[str] = None
    seed_fixtures: bool = False


@dataclass
class WebConfig:
    """HTTP server configuration"""
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class ApplicationConfig:
    """Complete application configuration"""
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False

    persistence: PersistenceConfig = field(default_factory=PersistenceConfig)
    web: WebConfig = field(default_factory=WebConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def for_environment(cls, environment: Environment) -> 'ApplicationConfig':
        """Create configuration for specific environment"""
        config = cls(environment=environment)

        if environment == Environment.DEVELOPMENT:
            config.debug = True
            config.web.debug = True
            config.logging.level = "DEBUG"
            config.persistence.seed_fixtures = True

        elif environment == Environment.TESTING:
            config.persistence.backend = "memory"
            config.logging.level = "WARNING"

        elif environment == Environment.PRODUCTION:
            config.debug = False
            config.web.debug = False
            config.web.host = "0.0.0.0"
            config.persistence.backend = "firestore"

        return config

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> 'ApplicationConfig':
        """
        Create configuration from a dictionary.

        Starts from the defaults of the given ``environment`` (development if
        absent); unknown keys are ignored.
        """
        environment = Environment(config_dict.get("environment", Environment.DEVELOPMENT.value))
        config = cls.for_environment(environment)

        if "debug" in config_dict:
            config.debug = bool(config_dict["debug"])

        for section in ("persistence", "web", "logging"):
            target = getattr(config, section)
            for key, value in config_dict.get(section, {}).items():
                if hasattr(target, key):
                    setattr(target, key, value)

        return config

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ApplicationConfig':
        """Create configuration from ``CURRICULA_*`` environment variables"""
        environ = os.environ if environ is None else environ
        config = cls.for_environment(Environment(environ.get("CURRICULA_ENV", "development")))

        if environ.get("CURRICULA_BACKEND"):
            config.persistence.backend = environ["CURRICULA_BACKEND"]

        if environ.get("CURRICULA_PROJECT"):
            config.persistence.project = environ["CURRICULA_PROJECT"]

        if environ.get("CURRICULA_SEED"):
            config.persistence.seed_fixtures = environ["CURRICULA_SEED"].lower() in ("1", "true", "yes")

        if environ.get("CURRICULA_LOG_LEVEL"):
            config.logging.level = environ["CURRICULA_LOG_LEVEL"].upper()

        if environ.get("CURRICULA_HOST"):
            config.web.host = environ["CURRICULA_HOST"]

        if environ.get("CURRICULA_PORT"):
            config.web.port = int(environ["CURRICULA_PORT"])

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        data = asdict(self)
        data["environment"] = self.environment.value
        return data


def configure_logging(config: LoggingConfig) -> None:
    """Install a root handler (if none is set up yet) and the package log level."""
    level = config.level.upper()
    logging.basicConfig(level=level, format=config.format)
    logging.getLogger("curricula").setLevel(level)


__all__ = [
    "ApplicationConfig", "Environment", "PersistenceConfig", "WebConfig",
    "LoggingConfig", "configure_logging",
]
