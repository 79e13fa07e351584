"""Configuration management for the Workflow Simulator."""

import os
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field, field_validator
from enum import Enum

from .core.exceptions import ConfigurationError
from .core.logging import DEFAULT_LOG_FORMAT

ENV_PREFIX = "FLOWSIM_"


class LogLevel(str, Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AppConfig(BaseModel):
    """Application configuration settings."""

    # Application settings
    app_name: str = Field(default="Workflow Simulator", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=4000, description="Server port")
    reload: bool = Field(default=False, description="Enable auto-reload in development")

    # Simulation settings
    simulation_timeout: float = Field(
        default=10.0,
        description="Timeout in seconds around a single simulate or validate call"
    )
    simulation_delay: float = Field(
        default=0.0,
        description="Artificial latency in seconds added before answering a simulation"
    )
    check_cycles: bool = Field(
        default=False,
        description="Reject cyclic workflows during validation by default"
    )

    # Logging settings
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_format: str = Field(
        default=DEFAULT_LOG_FORMAT,
        description="Log message format"
    )
    log_structured: bool = Field(default=False, description="Emit JSON log lines")
    log_file: Optional[str] = Field(default=None, description="Log file path")
    log_max_size: int = Field(default=10485760, description="Maximum log file size in bytes")  # 10MB
    log_backup_count: int = Field(default=5, description="Number of log backup files to keep")

    # Performance monitoring settings
    slow_request_threshold: float = Field(
        default=5.0,
        description="Slow request threshold in seconds"
    )
    enable_performance_monitoring: bool = Field(
        default=True,
        description="Enable performance monitoring middleware"
    )

    # Security settings
    cors_origins: list = Field(
        default=["*"],
        description="CORS allowed origins"
    )
    cors_methods: list = Field(
        default=["GET", "POST"],
        description="CORS allowed methods"
    )

    @field_validator('port')
    @classmethod
    def validate_port(cls, v):
        """Validate port number."""
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @field_validator('simulation_timeout')
    @classmethod
    def validate_simulation_timeout(cls, v):
        """Validate the simulation timeout."""
        if v <= 0:
            raise ValueError("Simulation timeout must be positive")
        return v

    @field_validator('simulation_delay')
    @classmethod
    def validate_simulation_delay(cls, v):
        """Validate the artificial simulation latency."""
        if v < 0:
            raise ValueError("Simulation delay cannot be negative")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return not self.debug and not self.reload

    def get_uvicorn_config(self) -> Dict[str, Any]:
        """Get Uvicorn server configuration."""
        return {
            "host": self.host,
            "port": self.port,
            "reload": self.reload,
            "log_level": self.log_level.value.lower(),
            "access_log": self.debug
        }

    @classmethod
    def from_env(cls) -> 'AppConfig':
        """Create configuration from environment variables."""
        def get_env(key: str, default=None, type_func=str):
            """Get environment variable with type conversion."""
            value = os.getenv(f"{ENV_PREFIX}{key}")
            if value is None:
                return default
            if type_func == bool:
                return str(value).lower() in ('true', '1', 'yes', 'on')
            elif type_func == list:
                return value.split(',') if value else default
            try:
                return type_func(value)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid value for {ENV_PREFIX}{key}: {value!r}",
                    config_key=key
                ) from e

        return cls(
            app_name=get_env("APP_NAME", "Workflow Simulator"),
            app_version=get_env("APP_VERSION", "1.0.0"),
            debug=get_env("DEBUG", False, bool),
            host=get_env("HOST", "0.0.0.0"),
            port=get_env("PORT", 4000, int),
            reload=get_env("RELOAD", False, bool),
            simulation_timeout=get_env("SIMULATION_TIMEOUT", 10.0, float),
            simulation_delay=get_env("SIMULATION_DELAY", 0.0, float),
            check_cycles=get_env("CHECK_CYCLES", False, bool),
            log_level=get_env("LOG_LEVEL", LogLevel.INFO, lambda v: LogLevel(v.upper())),
            log_format=get_env("LOG_FORMAT", DEFAULT_LOG_FORMAT),
            log_structured=get_env("LOG_STRUCTURED", False, bool),
            log_file=get_env("LOG_FILE", None),
            log_max_size=get_env("LOG_MAX_SIZE", 10485760, int),
            log_backup_count=get_env("LOG_BACKUP_COUNT", 5, int),
            slow_request_threshold=get_env("SLOW_REQUEST_THRESHOLD", 5.0, float),
            enable_performance_monitoring=get_env("ENABLE_PERFORMANCE_MONITORING", True, bool),
            cors_origins=get_env("CORS_ORIGINS", ["*"], list),
            cors_methods=get_env("CORS_METHODS", ["GET", "POST"], list)
        )


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def load_config(config_file: Optional[str] = None) -> AppConfig:
    """Load configuration from a .env file and environment variables."""
    global _config

    if config_file and os.path.exists(config_file):
        from dotenv import load_dotenv
        load_dotenv(config_file)
    elif os.path.exists('.env'):
        from dotenv import load_dotenv
        load_dotenv('.env')

    _config = AppConfig.from_env()

    return _config


def reset_config():
    """Reset the global configuration instance (mainly for testing)."""
    global _config
    _config = None


def validate_config(config: AppConfig) -> None:
    """Validate configuration settings that depend on the environment."""
    errors = []

    if config.log_file:
        log_dir = os.path.dirname(config.log_file)
        if log_dir and not os.path.exists(log_dir):
            try:
                os.makedirs(log_dir, exist_ok=True)
            except OSError as e:
                errors.append(f"Cannot create log directory {log_dir}: {e}")

    if config.simulation_delay >= config.simulation_timeout:
        errors.append("Simulation delay must be shorter than the simulation timeout")

    if errors:
        raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")


# Environment-specific configurations
def get_development_config() -> AppConfig:
    """Get development configuration."""
    return AppConfig(
        debug=True,
        reload=True,
        log_level=LogLevel.DEBUG,
        enable_performance_monitoring=True
    )


def get_production_config() -> AppConfig:
    """Get production configuration."""
    return AppConfig(
        debug=False,
        reload=False,
        log_level=LogLevel.INFO,
        log_structured=True,
        enable_performance_monitoring=True,
        cors_origins=[]  # Restrict CORS in production
    )


def get_testing_config() -> AppConfig:
    """Get testing configuration."""
    return AppConfig(
        debug=True,
        log_level=LogLevel.WARNING,
        simulation_timeout=5.0
    )
