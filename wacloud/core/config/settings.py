"""
Settings for the wacloud webhook engine.

Environment variable configuration for the webhook endpoint, signature
checks and the dispatch response policy.
"""

import os
import tomllib
from pathlib import Path

from dotenv import load_dotenv

# Load .env file for local development - look in current working directory
load_dotenv(".env")

DEFAULT_MAX_PAYLOAD_BYTES = 3 * 1024 * 1024

_TRUTHY = {"1", "true", "yes", "on"}


def _get_version_from_pyproject() -> str:
    """
    Read version from pyproject.toml file.

    Returns:
        Version string from pyproject.toml, or fallback version
    """
    current_path = Path(__file__)
    for parent in [current_path.parent, *current_path.parents]:
        pyproject_path = parent / "pyproject.toml"
        if pyproject_path.exists():
            try:
                with open(pyproject_path, "rb") as f:
                    pyproject_data = tomllib.load(f)
                    version = pyproject_data.get("project", {}).get("version")
                    if version:
                        return version
            except (OSError, tomllib.TOMLDecodeError):
                continue

    return "0.1.0"


def _get_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


class Settings:
    """Application settings with environment-based configuration."""

    def __init__(self):
        # ================================================================
        # Version
        # ================================================================
        self.version: str = _get_version_from_pyproject()

        # ================================================================
        # Environment & Logging
        # ================================================================
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.log_dir: str = os.getenv("LOG_DIR", "./logs")
        self.environment: str = os.getenv("ENVIRONMENT", "DEV")

        # ================================================================
        # WhatsApp Webhook
        # ================================================================
        self.whatsapp_webhook_verify_token: str | None = os.getenv(
            "WHATSAPP_WEBHOOK_VERIFY_TOKEN"
        )
        self.whatsapp_app_secret: str | None = os.getenv("WHATSAPP_APP_SECRET")
        self.validate_signature: bool = _get_bool("WEBHOOK_VALIDATE_SIGNATURE")

        # ================================================================
        # Dispatch
        # ================================================================
        self.partial_failure_as_500: bool = _get_bool(
            "WEBHOOK_PARTIAL_FAILURE_AS_500"
        )
        self.max_payload_bytes: int = int(
            os.getenv("WEBHOOK_MAX_PAYLOAD_BYTES", str(DEFAULT_MAX_PAYLOAD_BYTES))
        )

        self._validate_settings()

    def _validate_settings(self):
        """Validate settings values."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        self.log_level = self.log_level.upper()

        valid_environments = ["DEV", "PROD"]
        if self.environment.upper() not in valid_environments:
            self.environment = "DEV"  # Default fallback
        self.environment = self.environment.upper()

        if self.max_payload_bytes <= 0:
            raise ValueError("WEBHOOK_MAX_PAYLOAD_BYTES must be positive")

        if self.validate_signature and not self.whatsapp_app_secret:
            raise ValueError(
                "WHATSAPP_APP_SECRET is required when WEBHOOK_VALIDATE_SIGNATURE is on"
            )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "DEV"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "PROD"


# Global settings instance
settings = Settings()
