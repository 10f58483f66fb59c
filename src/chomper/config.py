"""Configuration management for Chomper."""

import json
import os
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, Field

from chomper.models.core import TaskFilter

ENV_URL = "CHOMPER_URL"
ENV_ANON_KEY = "CHOMPER_ANON_KEY"


class APIConfig(BaseModel):
    """Hosted backend configuration."""

    url: str = Field(default="http://localhost:54321")
    anon_key: str = Field(default="")
    timeout: int = Field(default=30)


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="pretty")


class AnimationConfig(BaseModel):
    """Chomper animation configuration."""

    enabled: bool = Field(default=True)
    chomp_seconds: float = Field(default=1.0, ge=0)
    dance_seconds: float = Field(default=3.0, ge=0)


class UIConfig(BaseModel):
    """UI configuration."""

    # None shows the Today/Tomorrow/Upcoming/Someday buckets
    default_filter: Optional[TaskFilter] = Field(default=None)


class Config(BaseModel):
    """Main configuration."""

    api: APIConfig = Field(default_factory=APIConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    animation: AnimationConfig = Field(default_factory=AnimationConfig)
    ui: UIConfig = Field(default_factory=UIConfig)


class ConfigManager:
    """Manages Chomper configuration and stored sessions."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir("chomper"))
        self.data_dir = Path(user_data_dir("chomper"))
        self.config_file = self.config_dir / f"{profile}.json"
        self.credentials_file = self.data_dir / f"{profile}.credentials.json"

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file, then apply environment overrides."""
        config = Config()
        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
                config = Config(**data)
            except (OSError, ValueError):
                # If config is corrupted, return default
                config = Config()

        if os.getenv(ENV_URL):
            config.api.url = os.environ[ENV_URL]
        if os.getenv(ENV_ANON_KEY):
            config.api.anon_key = os.environ[ENV_ANON_KEY]
        return config

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(config.model_dump(mode="json"), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key."""
        keys = key.split(".")
        config_dict = self.config.model_dump(mode="json")

        # Navigate to the nested dictionary
        current = config_dict
        for k in keys[:-1]:
            if k not in current or not isinstance(current[k], dict):
                raise KeyError(key)
            current = current[k]
        if keys[-1] not in current:
            raise KeyError(key)

        current[keys[-1]] = value

        # Reload config from the modified dictionary (validates the new value)
        self._config = Config(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration to defaults."""
        if key is None:
            self._config = Config()
            self.save_config()
            return

        default_value = self.get_from_config(Config(), key)
        if isinstance(default_value, BaseModel):
            default_value = default_value.model_dump(mode="json")
        self.set(key, default_value)

    def has(self, key: str) -> bool:
        """Whether a dot-separated key names a configuration field."""
        value: Any = Config()
        for k in key.split("."):
            if not isinstance(value, BaseModel) or k not in type(value).model_fields:
                return False
            value = getattr(value, k)
        return True

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        keys = key.split(".")
        value: Any = config
        for k in keys:
            if isinstance(value, BaseModel):
                if k not in type(value).model_fields:
                    return None
                value = getattr(value, k)
            else:
                return None
        return value

    def save_credentials(
        self,
        token: str,
        refresh_token: Optional[str] = None,
        *,
        user_id: Optional[str] = None,
        email: Optional[str] = None,
    ) -> None:
        """Save the signed-in session."""
        credentials = {"token": token}
        if refresh_token:
            credentials["refresh_token"] = refresh_token
        if user_id:
            credentials["user_id"] = user_id
        if email:
            credentials["email"] = email

        with open(self.credentials_file, "w", encoding="utf-8") as f:
            json.dump(credentials, f, indent=2)

        # Set file permissions to be readable only by owner
        self.credentials_file.chmod(0o600)

    def load_credentials(self) -> Optional[dict[str, str]]:
        """Load the signed-in session, if any."""
        if self.credentials_file.exists():
            try:
                with open(self.credentials_file, "r", encoding="utf-8") as f:
                    return json.load(f)
            except (OSError, ValueError):
                return None
        return None

    def clear_credentials(self) -> None:
        """Forget the signed-in session."""
        if self.credentials_file.exists():
            self.credentials_file.unlink()


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager


def reset_config_manager() -> None:
    """Drop the cached manager so the next call re-reads the disk."""
    global _config_manager
    _config_manager = None
