"""
Configuration management for the Trip Planner service.

This module handles loading configuration from environment variables
(optionally via a .env file), covering API keys, storage, authentication
policy and the itinerary generation model.
"""

import os
from dataclasses import dataclass, field
from enum import Enum

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class LogLevel(str, Enum):
    """Log levels supported by the system."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AgentModelConfig(BaseModel):
    """Configuration for an agent's LLM model."""

    name: str = Field(..., description="Model name to use")
    temperature: float = Field(default=0.7, description="Model temperature")
    max_tokens: int | None = Field(default=None, description="Max tokens to generate")

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, value: float) -> float:
        """Validate temperature is within reasonable bounds."""
        if not (0.0 <= value <= 1.0):
            raise ValueError(f"Temperature must be between 0.0 and 1.0, got {value}")
        return value

    @classmethod
    def from_env(cls, prefix: str = "") -> "AgentModelConfig":
        """Create an AgentModelConfig from environment variables."""
        prefix = f"{prefix}_" if prefix else ""
        return cls(
            name=os.getenv(f"{prefix}MODEL", "gemini-2.5-flash"),
            temperature=float(os.getenv(f"{prefix}TEMPERATURE", "0.7")),
            max_tokens=int(os.getenv(f"{prefix}MAX_TOKENS", "0")) or None,
        )


class APIConfig(BaseModel):
    """Configuration for external services."""

    gemini_api_key: str = Field(..., description="Gemini API key")
    aws_region: str = Field(default="ap-northeast-1", description="AWS region")
    dynamodb_table_name: str = Field(
        default="trip-planner", description="DynamoDB table name"
    )
    dynamodb_endpoint: str | None = Field(
        default=None, description="DynamoDB endpoint URL (for local dev)"
    )
    google_client_id: str | None = Field(
        default=None, description="OAuth client id that Google ID tokens must be issued for"
    )

    class ValidationError(Exception):
        """Exception raised for API configuration validation errors."""

        def __init__(self, missing_keys: list[str]):
            self.missing_keys = missing_keys
            super().__init__(f"Missing required settings: {', '.join(missing_keys)}")

    @classmethod
    def from_env(cls) -> "APIConfig":
        """Create an APIConfig from environment variables."""
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            aws_region=os.getenv("AWS_REGION", "ap-northeast-1"),
            dynamodb_table_name=os.getenv("DYNAMODB_TABLE_NAME", "trip-planner"),
            dynamodb_endpoint=os.getenv("DYNAMODB_ENDPOINT"),
            google_client_id=os.getenv("GOOGLE_CLIENT_ID"),
        )

    def validate(self, raise_error: bool = False) -> bool:
        """
        Validate that required settings are present.

        Args:
            raise_error: If True, raise ValidationError instead of returning False

        Returns:
            True if all required settings are present, False otherwise
        """
        missing_keys = []
        if not self.gemini_api_key:
            missing_keys.append("GEMINI_API_KEY")
        if not self.dynamodb_table_name:
            missing_keys.append("DYNAMODB_TABLE_NAME")

        if missing_keys:
            logger.error(f"Missing required settings: {', '.join(missing_keys)}")
            if raise_error:
                raise self.ValidationError(missing_keys)
            return False

        return True


class SystemConfig(BaseModel):
    """System-wide configuration."""

    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    environment: str = Field(
        default="development",
        description="Environment (development, staging, production)",
    )

    @classmethod
    def from_env(cls) -> "SystemConfig":
        """Create a SystemConfig from environment variables."""
        return cls(
            log_level=LogLevel(os.getenv("LOG_LEVEL", "INFO").upper()),
            environment=os.getenv("ENVIRONMENT", "development"),
        )


class AuthConfig(BaseModel):
    """Session and password policy."""

    session_ttl_seconds: int = Field(
        default=7 * 24 * 3600, description="Lifetime of a login session"
    )
    min_password_length: int = Field(default=6, description="Minimum password length")
    password_hash_iterations: int = Field(
        default=390_000, description="PBKDF2 iterations for stored passwords"
    )

    @classmethod
    def from_env(cls) -> "AuthConfig":
        """Create an AuthConfig from environment variables."""
        return cls(
            session_ttl_seconds=int(os.getenv("SESSION_TTL_SECONDS", "604800")),
            min_password_length=int(os.getenv("MIN_PASSWORD_LENGTH", "6")),
            password_hash_iterations=int(
                os.getenv("PASSWORD_HASH_ITERATIONS", "390000")
            ),
        )


class GenerationConfig(BaseModel):
    """Retry policy for the itinerary generation call."""

    max_attempts: int = Field(default=3, description="Attempts per generation")
    retry_min_wait: float = Field(default=1.0, description="Minimum backoff (s)")
    retry_max_wait: float = Field(default=10.0, description="Maximum backoff (s)")

    @classmethod
    def from_env(cls) -> "GenerationConfig":
        """Create a GenerationConfig from environment variables."""
        return cls(
            max_attempts=int(os.getenv("GENERATION_MAX_ATTEMPTS", "3")),
            retry_min_wait=float(os.getenv("GENERATION_RETRY_MIN_WAIT", "1")),
            retry_max_wait=float(os.getenv("GENERATION_RETRY_MAX_WAIT", "10")),
        )


@dataclass
class TripPlannerConfig:
    """Main configuration class for the Trip Planner service."""

    api: APIConfig = field(default_factory=APIConfig.from_env)
    system: SystemConfig = field(default_factory=SystemConfig.from_env)
    auth: AuthConfig = field(default_factory=AuthConfig.from_env)
    generation: GenerationConfig = field(default_factory=GenerationConfig.from_env)
    agent_models: dict[str, AgentModelConfig] = field(default_factory=dict)

    def __post_init__(self):
        """Initialize agent models if not provided."""
        if not self.agent_models:
            self.agent_models = {
                "itinerary": AgentModelConfig.from_env("ITINERARY"),
            }

    class ConfigurationError(Exception):
        """Exception raised for configuration validation errors."""

        pass

    def validate(self, raise_error: bool = False) -> bool:
        """
        Validate the entire configuration.

        Args:
            raise_error: If True, raise ConfigurationError instead of returning False

        Returns:
            True if configuration is valid, False otherwise

        Raises:
            ConfigurationError: If raise_error is True and validation fails
        """
        try:
            self.api.validate(raise_error=True)

            if self.auth.session_ttl_seconds <= 0:
                raise ValueError("Session TTL must be positive")
            if self.generation.max_attempts <= 0:
                raise ValueError("Generation max attempts must be positive")

            return True

        except Exception as e:
            if not isinstance(e, self.api.ValidationError):
                logger.error(f"Configuration validation failed: {e!s}")

            if raise_error:
                raise self.ConfigurationError(
                    f"Configuration validation failed: {e!s}"
                ) from e

            return False

    def get_agent_model(self, agent_type: str) -> AgentModelConfig:
        """
        Get model configuration for a specific agent type.

        Args:
            agent_type: Type of agent to get model config for

        Returns:
            AgentModelConfig for the requested agent type, or a default if not found
        """
        return self.agent_models.get(
            agent_type, AgentModelConfig(name="gemini-2.5-flash")
        )


# Global configuration instance
config = TripPlannerConfig()


def initialize_config(
    custom_config_path: str | None = None,
    validate: bool = True,
    raise_on_error: bool = False,
) -> TripPlannerConfig:
    """
    Initialize and validate the configuration.

    Args:
        custom_config_path: Path to a custom .env file to load
        validate: Whether to validate the configuration
        raise_on_error: Whether to raise an exception on validation failure

    Returns:
        Initialized and validated configuration object

    Raises:
        TripPlannerConfig.ConfigurationError: If validation fails and
            raise_on_error is True
        FileNotFoundError: If custom_config_path is provided but does not exist
    """
    if custom_config_path:
        if not os.path.exists(custom_config_path):
            error_msg = f"Custom configuration file not found: {custom_config_path}"
            logger.error(error_msg)
            raise FileNotFoundError(error_msg)

        logger.info(f"Loading custom configuration from {custom_config_path}")
        load_dotenv(custom_config_path, override=True)

        # Refresh the shared instance in place so importers see the new values
        config.api = APIConfig.from_env()
        config.system = SystemConfig.from_env()
        config.auth = AuthConfig.from_env()
        config.generation = GenerationConfig.from_env()
        config.agent_models = {}
        config.__post_init__()

    if validate:
        is_valid = config.validate(raise_error=raise_on_error)
        if not is_valid:
            logger.warning(
                "Configuration validation failed. The service may not function "
                "correctly. Required environment variables: GEMINI_API_KEY, "
                "DYNAMODB_TABLE_NAME"
            )

    return config
