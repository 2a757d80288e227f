#!/usr/bin/env python3
"""
Configuration loading for version stamping.

Settings can live in JSON, YAML or TOML files, either at the root of the
document or under a ``stamp`` section.
"""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from loguru import logger

from .exceptions import ConfigurationError
from .models import ClockKind


@dataclass
class StampConfig:
    """Settings controlling how versions are produced and stamped into files."""

    build: int = 0
    major: int = 0
    parts: int = 4
    clock: ClockKind = ClockKind.UTC
    placeholders: Dict[str, str] = field(default_factory=dict)
    strict_placeholders: bool = True

    def merged(self, **overrides: Any) -> StampConfig:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        unknown = set(changes) - {f.name for f in fields(self)}
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration option(s): {', '.join(sorted(unknown))}",
                invalid_option=sorted(unknown)[0],
            )
        if "clock" in changes:
            changes["clock"] = ClockKind(changes["clock"])
        return StampConfigLoader.validate(replace(self, **changes))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "build": self.build,
            "major": self.major,
            "parts": self.parts,
            "clock": self.clock.value,
            "placeholders": dict(self.placeholders),
            "strict_placeholders": self.strict_placeholders,
        }


class StampConfigLoader:
    """Loads StampConfig objects from configuration files."""

    _SUPPORTED_EXTENSIONS = {
        ".json": "json",
        ".yaml": "yaml",
        ".yml": "yaml",
        ".toml": "toml",
    }

    @classmethod
    def load_from_file(cls, file_path: Union[Path, str]) -> StampConfig:
        """
        Load stamping configuration from a file.

        Args:
            file_path: Path to a ``.json``, ``.yaml``/``.yml`` or ``.toml`` file.

        Returns:
            StampConfig: The validated configuration.

        Raises:
            ConfigurationError: If the file is missing, has an unsupported
                format, cannot be parsed or holds invalid values.
        """
        config_path = Path(file_path)

        if not config_path.is_file():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}", config_file=config_path
            )

        suffix = config_path.suffix.lower()
        if suffix not in cls._SUPPORTED_EXTENSIONS:
            supported = ", ".join(cls._SUPPORTED_EXTENSIONS)
            raise ConfigurationError(
                f"Unsupported configuration file format: {suffix}. Supported formats: {supported}",
                config_file=config_path,
            )

        try:
            content = config_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Failed to read configuration file: {e}",
                config_file=config_path,
                original_error=e,
            ) from e

        format_type = cls._SUPPORTED_EXTENSIONS[suffix]
        logger.debug(f"Loading {format_type.upper()} configuration from {config_path}")
        match format_type:
            case "json":
                return cls.load_from_json(content, config_path)
            case "yaml":
                return cls.load_from_yaml(content, config_path)
            case _:
                return cls.load_from_toml(content, config_path)

    @classmethod
    def load_from_json(cls, json_str: str, source_file: Optional[Path] = None) -> StampConfig:
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON configuration: {e}", config_file=source_file, original_error=e
            ) from e
        return cls.from_mapping(data, source_file)

    @classmethod
    def load_from_yaml(cls, yaml_str: str, source_file: Optional[Path] = None) -> StampConfig:
        try:
            data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML configuration: {e}", config_file=source_file, original_error=e
            ) from e
        return cls.from_mapping({} if data is None else data, source_file)

    @classmethod
    def load_from_toml(cls, toml_str: str, source_file: Optional[Path] = None) -> StampConfig:
        try:
            data = tomllib.loads(toml_str)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(
                f"Invalid TOML configuration: {e}", config_file=source_file, original_error=e
            ) from e
        return cls.from_mapping(data, source_file)

    @classmethod
    def from_mapping(cls, data: Any, source_file: Optional[Path] = None) -> StampConfig:
        """Build a StampConfig from parsed data, unwrapping a ``stamp`` section."""
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration must be a mapping/dictionary", config_file=source_file
            )
        if isinstance(data.get("stamp"), dict):
            data = data["stamp"]

        known = {f.name for f in fields(StampConfig)}
        ignored = sorted(set(data) - known)
        if ignored:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(ignored)}")

        values = {k: v for k, v in data.items() if k in known}
        try:
            if "clock" in values:
                values["clock"] = ClockKind(str(values["clock"]).lower())
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid clock {values['clock']!r}; expected 'utc' or 'local'",
                config_file=source_file,
                invalid_option="clock",
                original_error=e,
            ) from e

        return cls.validate(StampConfig(**values), source_file)

    @staticmethod
    def validate(config: StampConfig, source_file: Optional[Path] = None) -> StampConfig:
        """Check field types and ranges, returning *config* unchanged when valid."""
        for name in ("build", "major"):
            value = getattr(config, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ConfigurationError(
                    f"{name} must be a non-negative integer, got {value!r}",
                    config_file=source_file,
                    invalid_option=name,
                )
        parts = config.parts
        if not isinstance(parts, int) or isinstance(parts, bool) or parts not in (3, 4):
            raise ConfigurationError(
                f"parts must be 3 or 4, got {config.parts!r}",
                config_file=source_file,
                invalid_option="parts",
            )
        if not isinstance(config.placeholders, dict):
            raise ConfigurationError(
                "placeholders must be a mapping of names to values",
                config_file=source_file,
                invalid_option="placeholders",
            )
        if not isinstance(config.strict_placeholders, bool):
            raise ConfigurationError(
                "strict_placeholders must be a boolean",
                config_file=source_file,
                invalid_option="strict_placeholders",
            )
        return config
