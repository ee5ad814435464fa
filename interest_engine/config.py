"""Configuration management for the interest engine."""

from dataclasses import dataclass

from .core import ConfigurationError


LOG_FORMATS = ("standard", "json")


@dataclass
class EngineConfig:
    """
    Settings needed to stand up a LoanRegistry.

    Attributes:
        admin: The single identity allowed to create loans and set overrides.
        name: Registry identifier, used in log messages.
        log_level: Level passed to setup_logging().
        log_format: "standard" or "json".
    """

    admin: str
    name: str = "default"
    log_level: str = "INFO"
    log_format: str = "standard"

    def validate(self) -> None:
        """Raise ConfigurationError if any setting is unusable."""
        if not self.admin or not self.admin.strip():
            raise ConfigurationError("admin identity cannot be empty")
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"log_format must be one of {LOG_FORMATS}, got {self.log_format!r}"
            )

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create config from environment variables.

        INTEREST_ENGINE_ADMIN is required. INTEREST_ENGINE_NAME, LOG_LEVEL and
        LOG_FORMAT fall back to the dataclass defaults.
        """
        import os

        admin = os.getenv("INTEREST_ENGINE_ADMIN")
        if not admin:
            raise ConfigurationError("INTEREST_ENGINE_ADMIN is not set")

        config = cls(
            admin=admin,
            name=os.getenv("INTEREST_ENGINE_NAME", "default"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
        config.validate()
        return config
