"""
Application settings and configuration.

Centralizes all configurable values. Values come from the environment
(optionally loaded from a .env file) and are resolved once at startup into
a plain ClientConfig handed to the core components.
"""

import os
from dataclasses import dataclass, replace
from typing import Optional, Dict, Any
from dotenv import load_dotenv

from ..core.exceptions import ValidationError

# Load environment variables
load_dotenv()

DEFAULT_BASE_URL = 'https://app.verifactuapi.es/api'
DEFAULT_OUTPUT_DIR = './resultats'
DEFAULT_TIMEOUT_MS = 30000


def _read_timeout_ms() -> int:
    """
    Read VERIFACTU_TIMEOUT_MS as a positive integer.

    Raises:
        ValidationError: If the variable is set to anything else
    """
    raw = os.getenv('VERIFACTU_TIMEOUT_MS', str(DEFAULT_TIMEOUT_MS))
    try:
        timeout_ms = int(raw)
    except ValueError:
        timeout_ms = 0
    if timeout_ms <= 0:
        raise ValidationError(f"VERIFACTU_TIMEOUT_MS must be a positive integer, got {raw!r}")
    return timeout_ms


@dataclass(frozen=True)
class ClientConfig:
    """Configuration handed to the API client and result writer."""

    base_url: str = DEFAULT_BASE_URL
    output_dir: str = DEFAULT_OUTPUT_DIR
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0


class Settings:
    """
    Application settings.

    Centralizes all configuration values.
    """

    def __init__(self):
        """Initialize settings from environment and defaults."""
        # API Settings
        self.base_url = os.getenv('VERIFACTU_BASE_URL', DEFAULT_BASE_URL)
        self.username = os.getenv('VERIFACTU_USERNAME')
        self.api_key = os.getenv('VERIFACTU_API_KEY')
        self.timeout_ms = _read_timeout_ms()

        # Output Settings
        self.output_dir = os.getenv('OUTPUT_DIR', DEFAULT_OUTPUT_DIR)

        # Logging Settings
        self.log_level = os.getenv('LOG_LEVEL', 'INFO')
        self.log_format = os.getenv(
            'LOG_FORMAT',
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        self.log_file = os.getenv('LOG_FILE')

    def to_client_config(
        self,
        base_url: Optional[str] = None,
        output_dir: Optional[str] = None,
        timeout_ms: Optional[int] = None
    ) -> ClientConfig:
        """
        Build the client configuration, letting explicit values win.

        Args:
            base_url: Override for the API base URL
            output_dir: Override for the artifact directory
            timeout_ms: Override for the request deadline in milliseconds

        Returns:
            ClientConfig with every field resolved
        """
        config = ClientConfig(
            base_url=self.base_url,
            output_dir=self.output_dir,
            timeout_ms=self.timeout_ms
        )
        overrides = {
            key: value for key, value in (
                ('base_url', base_url),
                ('output_dir', output_dir),
                ('timeout_ms', timeout_ms),
            ) if value is not None
        }
        return replace(config, **overrides)

    def has_credentials(self) -> bool:
        return bool(self.username and self.api_key)

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary (excluding sensitive data)."""
        return {
            'base_url': self.base_url,
            'username': self.username,
            'timeout_ms': self.timeout_ms,
            'output_dir': self.output_dir,
            'log_level': self.log_level,
            'log_file': self.log_file,
        }


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Optional[Settings]):
    """Set the global settings instance (useful for testing)."""
    global _settings
    _settings = settings
