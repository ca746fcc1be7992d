"""Configuration management for Checklister."""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .data_store import DEFAULT_SLOT
from .taxonomy import Taxonomy, get_taxonomy, load_taxonomy


@dataclass
class DataConfig:
    """Data storage configuration."""

    storage_dir: Path
    list_slot: str = DEFAULT_SLOT


@dataclass
class ServiceConfig:
    """Remote categorization service configuration."""

    url: str = ""
    api_key: str = ""
    timeout: float = 30.0

    @property
    def enabled(self) -> bool:
        return bool(self.url)


@dataclass
class TaxonomyConfig:
    """Which taxonomy to use."""

    name: str = "uae"
    path: Path | None = None


@dataclass
class DisplayConfig:
    """Display configuration."""

    currency: str = "AED"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"


@dataclass
class Config:
    """Complete application configuration."""

    data: DataConfig
    service: ServiceConfig
    taxonomy: TaxonomyConfig
    display: DisplayConfig
    logging: LoggingConfig


class ConfigManager:
    """Manages application configuration from TOML files."""

    def __init__(self, config_path: Path | None = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional explicit path to config file.
                        If not provided, searches standard locations.
        """
        self.config_path = config_path or self._find_config()
        self._config = self._load_config()

    @property
    def data(self) -> DataConfig:
        """Get data configuration."""
        return self._config.data

    @property
    def service(self) -> ServiceConfig:
        """Get service configuration."""
        return self._config.service

    @property
    def taxonomy(self) -> TaxonomyConfig:
        """Get taxonomy configuration."""
        return self._config.taxonomy

    @property
    def display(self) -> DisplayConfig:
        """Get display configuration."""
        return self._config.display

    @property
    def logging(self) -> LoggingConfig:
        """Get logging configuration."""
        return self._config.logging

    def load_taxonomy(self) -> Taxonomy:
        """Resolve the configured taxonomy; a file path wins over a name.

        Raises:
            TaxonomyError: If the taxonomy cannot be found or is invalid
        """
        if self.taxonomy.path is not None:
            return load_taxonomy(self.taxonomy.path)
        return get_taxonomy(self.taxonomy.name)

    def _find_config(self) -> Path:
        """Find config file in standard locations."""
        locations = [
            Path.cwd() / "config.toml",
            Path.home() / ".config" / "checklister" / "config.toml",
            Path.home() / ".checklister" / "config.toml",
        ]

        for loc in locations:
            if loc.exists():
                return loc

        # Return default location if none found
        return Path.home() / ".config" / "checklister" / "config.toml"

    def _load_config(self) -> Config:
        """Load configuration from TOML file."""
        if not self.config_path.exists():
            return self._default_config()

        with open(self.config_path, "rb") as f:
            data = tomllib.load(f)

        taxonomy_path = data.get("taxonomy", {}).get("path")

        return Config(
            data=DataConfig(
                storage_dir=Path(
                    data.get("data", {}).get("storage_dir", "~/checklister/data")
                ).expanduser(),
                list_slot=data.get("data", {}).get("list_slot", DEFAULT_SLOT),
            ),
            service=ServiceConfig(
                url=data.get("service", {}).get("url", ""),
                api_key=data.get("service", {}).get("api_key", ""),
                timeout=float(data.get("service", {}).get("timeout", 30.0)),
            ),
            taxonomy=TaxonomyConfig(
                name=data.get("taxonomy", {}).get("name", "uae"),
                path=Path(taxonomy_path).expanduser() if taxonomy_path else None,
            ),
            display=DisplayConfig(
                currency=data.get("display", {}).get("currency", "AED"),
            ),
            logging=LoggingConfig(
                level=data.get("logging", {}).get("level", "INFO"),
            ),
        )

    def _default_config(self) -> Config:
        """Return default configuration."""
        return Config(
            data=DataConfig(storage_dir=Path.home() / "checklister" / "data"),
            service=ServiceConfig(),
            taxonomy=TaxonomyConfig(),
            display=DisplayConfig(),
            logging=LoggingConfig(),
        )

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get config value by dot-notation path.

        Args:
            key_path: Dot-separated path like 'service.url'
            default: Default value if path not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split(".")
        value: Any = self._config

        for key in keys:
            if hasattr(value, key):
                value = getattr(value, key)
            elif isinstance(value, dict):
                value = value.get(key)
                if value is None:
                    return default
            else:
                return default

        return value if value is not None else default
