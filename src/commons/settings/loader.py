"""Settings loader with hierarchical configuration support."""

import json
import os
from pathlib import Path
from typing import Any

from src.commons.settings.models import Settings


class SettingsLoader:
    """Loads and merges configuration from multiple sources.

    Configuration precedence (highest to lowest):
    1. Environment variables (TUBELY__SECTION__KEY)
    2. Environment-specific config (appsettings.{env}.json)
    3. Base config (appsettings.json)
    """

    ENV_PREFIX = "TUBELY__"

    def __init__(
        self,
        config_dir: Path | None = None,
        environment: str | None = None,
    ) -> None:
        """Initialize the settings loader.

        Args:
            config_dir: Directory containing configuration files.
                       Defaults to 'config' in current working directory.
            environment: Environment name (dev, staging, prod).
                        Defaults to TUBELY__APP__ENVIRONMENT or 'dev'.
        """
        self.config_dir = config_dir or Path("config")
        self.environment = environment or os.getenv("TUBELY__APP__ENVIRONMENT", "dev")

    def load(self) -> Settings:
        """Load settings with proper precedence.

        Returns:
            Fully resolved Settings instance.
        """
        config = self._load_json("appsettings.json")
        config = self._deep_merge(
            config, self._load_json(f"appsettings.{self.environment}.json")
        )
        config = self._deep_merge(config, self._load_env_vars())
        return Settings(**config)

    def _load_env_vars(self) -> dict[str, Any]:
        """Collect TUBELY__ environment variables into a nested dict.

        ``TUBELY__BLOB_STORAGE__BUCKETS__VIDEOS=x`` becomes
        ``{"blob_storage": {"buckets": {"videos": "x"}}}``. Scalar values are
        left as strings so pydantic can coerce them against the field type
        (a numeric JWT secret must stay a string).
        """
        result: dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(self.ENV_PREFIX):
                continue

            key_path = key[len(self.ENV_PREFIX) :].lower().split("__")

            current = result
            for part in key_path[:-1]:
                current = current.setdefault(part, {})

            current[key_path[-1]] = self._decode_value(value)

        return result

    @staticmethod
    def _decode_value(value: str) -> Any:
        """Decode JSON lists/objects (e.g. CORS origins); keep scalars as text."""
        if value.startswith(("[", "{")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass
        return value

    def _load_json(self, filename: str) -> dict[str, Any]:
        """Load a JSON config file, or an empty dict if it doesn't exist."""
        path = self.config_dir / filename
        if path.exists():
            with path.open(encoding="utf-8") as f:
                return dict(json.load(f))
        return {}

    def _deep_merge(
        self,
        base: dict[str, Any],
        override: dict[str, Any],
    ) -> dict[str, Any]:
        """Recursively merge ``override`` into a copy of ``base``."""
        result = base.copy()
        for key, value in override.items():
            if isinstance(result.get(key), dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result


_settings: Settings | None = None


def get_settings(
    config_dir: Path | None = None,
    environment: str | None = None,
    *,
    reload: bool = False,
) -> Settings:
    """Get or create the process-wide settings instance.

    Settings are read once at startup and treated as read-only afterwards;
    components receive them explicitly rather than calling this function.

    Args:
        config_dir: Optional config directory override.
        environment: Optional environment override.
        reload: Force reload settings from files.

    Returns:
        Settings instance.
    """
    global _settings  # noqa: PLW0603
    if _settings is None or reload:
        loader = SettingsLoader(config_dir=config_dir, environment=environment)
        _settings = loader.load()
    return _settings


def reset_settings() -> None:
    """Reset the cached settings instance. Useful for testing."""
    global _settings  # noqa: PLW0603
    _settings = None
