"""
SwiftGuard - Configuration Management

This module provides configuration management for the MT103 validation
service, covering the field schema, compliance rules, dedup ledger backend,
message generators and the HTTP binding.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .exceptions import ConfigurationException


DEFAULT_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "mt103.schema.json"


class Environment(str, Enum):
    """Deployment environments."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LedgerBackend(str, Enum):
    """Supported dedup ledger backends."""

    MEMORY = "memory"
    REDIS = "redis"


class GeneratorProvider(str, Enum):
    """Supported message generator providers."""

    TEMPLATE = "template"
    OPENAI = "openai"
    GROQ = "groq"
    DEEPSEEK = "deepseek"
    GEMINI = "gemini"


WEEKDAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def _default_sanctioned_jurisdictions() -> Dict[str, str]:
    return {
        "KP": "North Korea",
        "IR": "Iran",
        "SY": "Syria",
        "CU": "Cuba",
    }


@dataclass
class BusinessHoursConfig:
    """Business-hours gate configuration."""

    enabled: bool = False
    start_hour: int = 9
    end_hour: int = 17
    weekdays: List[str] = field(
        default_factory=lambda: ["monday", "tuesday", "wednesday", "thursday", "friday"]
    )
    timezone: str = "UTC"

    def validate(self) -> None:
        """Validate business-hours configuration."""
        errors = []

        if not 0 <= self.start_hour <= 23:
            errors.append("Business hours start_hour must be between 0 and 23")
        if not 1 <= self.end_hour <= 24:
            errors.append("Business hours end_hour must be between 1 and 24")
        if self.start_hour >= self.end_hour:
            errors.append("Business hours start_hour must be before end_hour")

        unknown = [day for day in self.weekdays if day.lower() not in WEEKDAY_NAMES]
        if unknown:
            errors.append(f"Unknown weekdays: {', '.join(unknown)}")

        if errors:
            raise ConfigurationException(
                f"Business hours config validation failed: {'; '.join(errors)}"
            )


@dataclass
class ComplianceConfig:
    """Compliance gate configuration."""

    sanctions_enabled: bool = True
    sanctioned_jurisdictions: Dict[str, str] = field(
        default_factory=_default_sanctioned_jurisdictions
    )
    screened_fields: List[str] = field(
        default_factory=lambda: ["orderingCustomer", "beneficiaryCustomer"]
    )
    business_hours: BusinessHoursConfig = field(default_factory=BusinessHoursConfig)

    def validate(self) -> None:
        """Validate compliance configuration."""
        errors = []

        for code in self.sanctioned_jurisdictions:
            if len(code) != 2 or not code.isalpha() or not code.isupper():
                errors.append(f"Sanctioned jurisdiction code must be ISO alpha-2: {code}")

        if not self.screened_fields:
            errors.append("At least one screened field is required")

        if errors:
            raise ConfigurationException(
                f"Compliance config validation failed: {'; '.join(errors)}"
            )

        self.business_hours.validate()


@dataclass
class LedgerConfig:
    """Dedup ledger configuration."""

    backend: LedgerBackend = LedgerBackend.MEMORY
    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = "swiftguard:ref:"

    def validate(self) -> None:
        if self.backend == LedgerBackend.REDIS and not self.redis_url:
            raise ConfigurationException(
                "Redis URL is required for the redis ledger backend", "ledger.redis_url"
            )


@dataclass
class GeneratorConfig:
    """Message generator configuration."""

    provider: GeneratorProvider = GeneratorProvider.TEMPLATE
    api_key: Optional[str] = None
    model: Optional[str] = None
    base_url: Optional[str] = None
    temperature: float = 1.0
    max_tokens: int = 1024
    timeout: float = 30.0

    def validate(self) -> None:
        errors = []

        if not 0.0 <= self.temperature <= 2.0:
            errors.append("Generator temperature must be between 0.0 and 2.0")
        if self.max_tokens <= 0:
            errors.append("Generator max_tokens must be positive")
        if self.timeout <= 0:
            errors.append("Generator timeout must be positive")

        if errors:
            raise ConfigurationException(
                f"Generator config validation failed: {'; '.join(errors)}"
            )


@dataclass
class ApiConfig:
    """HTTP binding configuration."""

    host: str = "0.0.0.0"
    port: int = 1934
    max_body_bytes: int = 1024 * 1024

    def validate(self) -> None:
        if not 0 < self.port < 65536:
            raise ConfigurationException(f"Invalid API port: {self.port}", "api.port")
        if self.max_body_bytes <= 0:
            raise ConfigurationException(
                "API max_body_bytes must be positive", "api.max_body_bytes"
            )


@dataclass
class Config:
    """Main configuration class."""

    # Environment and basic settings
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    log_level: LogLevel = LogLevel.INFO
    structured_logging: bool = False
    service_name: str = "swiftguard"
    version: str = "1.0.0"

    # Field schema
    schema_path: str = str(DEFAULT_SCHEMA_PATH)

    # Component configurations
    compliance: ComplianceConfig = field(default_factory=ComplianceConfig)
    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    api: ApiConfig = field(default_factory=ApiConfig)

    @classmethod
    def load_from_file(cls, config_path: Union[str, Path]) -> "Config":
        """Load configuration from YAML file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationException(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r") as f:
                config_data = yaml.safe_load(f) or {}

            return cls._from_dict(config_data)

        except yaml.YAMLError as e:
            raise ConfigurationException(f"Invalid YAML in configuration file: {e}")
        except ConfigurationException:
            raise
        except Exception as e:
            raise ConfigurationException(f"Error loading configuration file: {e}")

    @classmethod
    def load_from_env(cls, prefix: str = "SWIFTGUARD_") -> "Config":
        """Load configuration from environment variables."""
        try:
            return cls._from_env(prefix)
        except ValueError as e:
            raise ConfigurationException(f"Invalid environment configuration: {e}")

    @classmethod
    def _from_env(cls, prefix: str) -> "Config":
        config = cls()

        # Load basic settings
        config.environment = Environment(
            os.getenv(f"{prefix}ENVIRONMENT", config.environment.value)
        )
        config.debug = os.getenv(f"{prefix}DEBUG", str(config.debug)).lower() == "true"
        config.log_level = LogLevel(
            os.getenv(f"{prefix}LOG_LEVEL", config.log_level.value).upper()
        )
        config.structured_logging = (
            os.getenv(f"{prefix}STRUCTURED_LOGGING", str(config.structured_logging)).lower()
            == "true"
        )
        config.schema_path = os.getenv(f"{prefix}SCHEMA_PATH", config.schema_path)

        # Load compliance configuration
        if os.getenv(f"{prefix}SANCTIONED_JURISDICTIONS"):
            # Format: "KP=North Korea,IR=Iran"
            jurisdictions = {}
            for item in os.getenv(f"{prefix}SANCTIONED_JURISDICTIONS", "").split(","):
                code, _, name = item.partition("=")
                if code.strip():
                    jurisdictions[code.strip().upper()] = name.strip() or code.strip().upper()
            config.compliance.sanctioned_jurisdictions = jurisdictions
        if os.getenv(f"{prefix}BUSINESS_HOURS_ENABLED"):
            config.compliance.business_hours.enabled = (
                os.getenv(f"{prefix}BUSINESS_HOURS_ENABLED", "false").lower() == "true"
            )

        # Load ledger configuration
        if os.getenv(f"{prefix}LEDGER_BACKEND"):
            config.ledger.backend = LedgerBackend(
                os.getenv(f"{prefix}LEDGER_BACKEND", config.ledger.backend.value)
            )
            config.ledger.redis_url = os.getenv(
                f"{prefix}REDIS_URL", config.ledger.redis_url
            )

        # Load generator configuration
        if os.getenv(f"{prefix}GENERATOR_PROVIDER"):
            config.generator.provider = GeneratorProvider(
                os.getenv(f"{prefix}GENERATOR_PROVIDER", config.generator.provider.value)
            )
            config.generator.api_key = os.getenv(
                f"{prefix}GENERATOR_API_KEY", config.generator.api_key
            )
            config.generator.model = os.getenv(
                f"{prefix}GENERATOR_MODEL", config.generator.model
            )
            config.generator.base_url = os.getenv(
                f"{prefix}GENERATOR_BASE_URL", config.generator.base_url
            )

        # Load API configuration
        config.api.host = os.getenv(f"{prefix}HOST", config.api.host)
        config.api.port = int(os.getenv(f"{prefix}PORT", str(config.api.port)))

        return config

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create configuration from dictionary."""
        config = cls()

        # Update basic settings
        if "environment" in data:
            config.environment = Environment(data["environment"])
        if "debug" in data:
            config.debug = data["debug"]
        if "log_level" in data:
            config.log_level = LogLevel(str(data["log_level"]).upper())
        if "structured_logging" in data:
            config.structured_logging = data["structured_logging"]
        if "schema_path" in data:
            config.schema_path = str(data["schema_path"])

        # Update component configurations
        if "compliance" in data:
            compliance_data = dict(data["compliance"])
            business_hours = compliance_data.pop("business_hours", None)
            config.compliance = ComplianceConfig(**compliance_data)
            if business_hours is not None:
                config.compliance.business_hours = BusinessHoursConfig(**business_hours)
        if "ledger" in data:
            ledger_data = dict(data["ledger"])
            if "backend" in ledger_data:
                ledger_data["backend"] = LedgerBackend(ledger_data["backend"])
            config.ledger = LedgerConfig(**ledger_data)
        if "generator" in data:
            generator_data = dict(data["generator"])
            if "provider" in generator_data:
                generator_data["provider"] = GeneratorProvider(generator_data["provider"])
            config.generator = GeneratorConfig(**generator_data)
        if "api" in data:
            config.api = ApiConfig(**data["api"])

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "environment": self.environment.value,
            "debug": self.debug,
            "log_level": self.log_level.value,
            "structured_logging": self.structured_logging,
            "service_name": self.service_name,
            "version": self.version,
            "schema_path": self.schema_path,
            "compliance": {
                "sanctions_enabled": self.compliance.sanctions_enabled,
                "sanctioned_jurisdictions": dict(self.compliance.sanctioned_jurisdictions),
                "screened_fields": list(self.compliance.screened_fields),
                "business_hours": {
                    "enabled": self.compliance.business_hours.enabled,
                    "start_hour": self.compliance.business_hours.start_hour,
                    "end_hour": self.compliance.business_hours.end_hour,
                    "weekdays": list(self.compliance.business_hours.weekdays),
                    "timezone": self.compliance.business_hours.timezone,
                },
            },
            "ledger": {
                "backend": self.ledger.backend.value,
                "key_prefix": self.ledger.key_prefix,
                # Don't include connection URL in serialization
            },
            "generator": {
                "provider": self.generator.provider.value,
                "model": self.generator.model,
                # Don't include api key in serialization
            },
            "api": {
                "host": self.api.host,
                "port": self.api.port,
            },
        }

    def validate(self) -> None:
        """Validate configuration settings."""
        if not self.schema_path:
            raise ConfigurationException("Schema path must be set", "schema_path")

        self.compliance.validate()
        self.ledger.validate()
        self.generator.validate()
        self.api.validate()


# Global configuration instance
_config: Optional[Config] = None

# Path of a YAML file preferred over plain environment variables by get_config()
CONFIG_FILE_ENV = "SWIFTGUARD_CONFIG_FILE"


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config_path = os.getenv(CONFIG_FILE_ENV)
        if config_path:
            _config = Config.load_from_file(config_path)
        else:
            _config = Config.load_from_env()
    return _config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _config
    config.validate()
    _config = config


def load_config(config_path: Union[str, Path]) -> Config:
    """Load and set configuration from file."""
    config = Config.load_from_file(config_path)
    set_config(config)
    return config
