"""
Config loader

Loads settings.yaml and derives runtime settings
"""

from dataclasses import dataclass
from pathlib import Path

import yaml

from core.constants import Defaults, Paths
from core.types import AppMode


@dataclass(frozen=True)
class AppConfig:
    """Application config (loaded from settings.yaml)

    Immutable so it cannot be changed at runtime
    """

    mode: AppMode
    web_secret_key: str
    token_algorithm: str = Defaults.TOKEN_ALGORITHM


class ConfigLoadError(Exception):
    """settings.yaml could not be loaded"""

    pass


def load_config(path: Path | None = None) -> AppConfig:
    """Load settings.yaml

    Args:
        path: settings.yaml path (None uses the default path)

    Returns:
        AppConfig instance

    Raises:
        ConfigLoadError: file missing or malformed
        ValueError: invalid mode
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        raise ConfigLoadError(f"settings.yaml not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Failed to parse settings.yaml: {e}") from e

    if data is None:
        raise ConfigLoadError("settings.yaml is empty")

    mode_str = data.get("mode")
    if mode_str is None:
        raise ConfigLoadError("settings.yaml has no 'mode' field")

    try:
        mode = AppMode(mode_str)
    except ValueError as e:
        valid_modes = [m.value for m in AppMode]
        raise ValueError(
            f"Invalid mode: '{mode_str}'. "
            f"Valid values: {valid_modes}"
        ) from e

    web_config = data.get("web") or {}
    web_secret_key = web_config.get("secret_key", "")

    if not web_secret_key:
        raise ConfigLoadError(
            "settings.yaml web section has no 'secret_key'"
        )

    token_algorithm = web_config.get("token_algorithm") or Defaults.TOKEN_ALGORITHM

    return AppConfig(
        mode=mode,
        web_secret_key=web_secret_key,
        token_algorithm=token_algorithm,
    )


def get_db_path(config: AppConfig) -> Path:
    """Return the DB path for the configured mode

    Args:
        config: AppConfig instance

    Returns:
        DB file path
    """
    if config.mode == AppMode.PRODUCTION:
        return Paths.PROD_DB
    else:
        return Paths.DEV_DB


class Settings:
    """Application settings (singleton)

    Loads settings.yaml once and exposes the derived values
    """

    _instance: "Settings | None" = None
    _config: AppConfig | None = None

    def __new__(cls, config_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, config_path: Path | None = None) -> None:
        if self._config is None:
            self._config = load_config(config_path)

    @property
    def mode(self) -> AppMode:
        """Current mode"""
        assert self._config is not None
        return self._config.mode

    @property
    def web_secret_key(self) -> str:
        """JWT signing key for session tokens"""
        assert self._config is not None
        return self._config.web_secret_key

    @property
    def token_algorithm(self) -> str:
        """JWT algorithm"""
        assert self._config is not None
        return self._config.token_algorithm

    @property
    def db_path(self) -> Path:
        """DB path for the current mode"""
        assert self._config is not None
        return get_db_path(self._config)

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton (tests)"""
        cls._instance = None
        cls._config = None


def get_settings(config_path: Path | None = None) -> Settings:
    """Return the Settings instance

    Args:
        config_path: settings.yaml path (None uses the default path)

    Returns:
        Settings singleton
    """
    return Settings(config_path)
