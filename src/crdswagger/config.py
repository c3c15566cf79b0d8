"""Configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from crdswagger.errors import ConfigError, ConfigNotFoundError
from crdswagger.naming.mapper import generic_cleanup
from crdswagger.types import NamingMode

__all__ = ["Config", "GeneratorConfig"]


class Config:
    """Configuration accessor with dot-path key support."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def from_yaml(cls, path: str | Path) -> Config:
        """Load configuration from a YAML mapping file."""
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigNotFoundError(config_path=str(config_path))

        try:
            parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(message=f"Invalid YAML in config file: {config_path}", cause=e) from e

        if parsed is None:
            return cls()
        if not isinstance(parsed, dict):
            raise ConfigError(message=f"Config file must be a YAML mapping: {config_path}")
        return cls(parsed)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current


@dataclass(frozen=True)
class GeneratorConfig:
    """Immutable settings for one generation pass.

    Attributes:
        root_namespace: Only kinds under this namespace path count towards
            group naming profiles. ``None`` disables the filter.
        naming_mode: Reversed (platform convention) or legacy group labels.
        foreign_key_prefix: Definition keys with this prefix belong to the base
            API document and are never emitted.
        foreign_namespaces: Namespace path prefixes whose unknown types are
            never loaded on demand.
        api_version: Version string written to the document info block.
    """

    root_namespace: str | None = None
    naming_mode: NamingMode = NamingMode.REVERSED
    foreign_key_prefix: str = "io.k8s"
    foreign_namespaces: tuple[str, ...] = ("k8s.io",)
    api_version: str = "v1.18.2"

    def __post_init__(self) -> None:
        # Unknown foreign types are never loaded, so their keys must carry the foreign prefix.
        for namespace in self.foreign_namespaces:
            key = generic_cleanup(namespace, "").rstrip(".")
            if not key.startswith(self.foreign_key_prefix):
                raise ConfigError(
                    message=f"Foreign namespace '{namespace}' maps to '{key}', which does not start with "
                    f"foreign_key_prefix '{self.foreign_key_prefix}'",
                )

    @classmethod
    def from_config(cls, config: Config) -> GeneratorConfig:
        """Build from the ``swagger.*`` keys of a Config."""
        mode_raw = config.get("swagger.naming_mode", NamingMode.REVERSED.value)
        try:
            naming_mode = NamingMode(mode_raw)
        except ValueError as e:
            raise ConfigError(
                message=f"Invalid swagger.naming_mode '{mode_raw}', expected one of "
                f"{[m.value for m in NamingMode]}",
                cause=e,
            ) from e

        foreign_namespaces = config.get("swagger.foreign_namespaces", ["k8s.io"])
        if isinstance(foreign_namespaces, str):
            foreign_namespaces = [foreign_namespaces]

        return cls(
            root_namespace=config.get("swagger.root_namespace"),
            naming_mode=naming_mode,
            foreign_key_prefix=config.get("swagger.foreign_key_prefix", "io.k8s"),
            foreign_namespaces=tuple(foreign_namespaces),
            api_version=str(config.get("swagger.api_version", "v1.18.2")),
        )
