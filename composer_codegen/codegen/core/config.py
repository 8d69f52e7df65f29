"""
Generator settings.

A GeneratorConfig is built from the built-in defaults, then an optional JSON
settings file, then explicit overrides, each layer replacing the keys it
names. Keys the dataclass does not know are kept under ``custom``.
"""

import copy
import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class ConfigError(Exception):
    """Raised when a settings file is missing, unreadable or malformed."""

    pass


DEFAULT_LICENSE_LINES = [
    "Copyright IBM Corp. 2017 All Rights Reserved.",
    "",
    "SPDX-License-Identifier: Apache-2.0",
]


@dataclass
class GeneratorConfig:
    """Settings shared by the model visitor and the engine generator."""

    # Layout of generated sources
    indent: str = "\t"
    file_extension: str = ".java"
    template_dir: Optional[str] = None

    annotation_prefix: str = "org.hyperledger.composer.annotation"

    # Escape rule
    escape_types: List[str] = field(
        default_factory=lambda: ["Transaction", "Asset", "Participant"]
    )
    object_type: str = "Object"

    ignore_system: bool = False

    # File header
    license_lines: List[str] = field(default_factory=lambda: list(DEFAULT_LICENSE_LINES))
    generated_warning: str = "this code is generated and should not be modified"

    # Engine interface
    engine_package: str = "org.hyperledger.composer"
    engine_interface: str = "Engine"
    engine_version_constant: str = "COMPOSER_VERSION"
    # COMPOSER_VERSION is this package's own version unless runtime_version is set
    # or runtime_distribution names the installed runtime to report instead
    runtime_distribution: str = "composer-codegen"
    runtime_version: Optional[str] = None

    custom: Dict[str, Any] = field(default_factory=dict)


FIELD_NAMES = frozenset(f.name for f in fields(GeneratorConfig))


class ConfigManager:
    """Layers settings files and overrides on top of the defaults."""

    def __init__(self, defaults: Optional[GeneratorConfig] = None):
        self._defaults = asdict(defaults or GeneratorConfig())

    def get_config(self, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Build a configuration.

        Args:
            custom_config: Keys that win over both the defaults and the file
            config_file: JSON settings file

        Returns:
            A fresh GeneratorConfig; list and dict values are never shared
            between calls
        """
        settings = copy.deepcopy(self._defaults)
        layers = []
        if config_file:
            layers.append(self.read_config_file(config_file))
        if custom_config:
            layers.append(custom_config)

        for layer in layers:
            for key, value in layer.items():
                if key in FIELD_NAMES and key != "custom":
                    settings[key] = value
                elif key == "custom":
                    if not isinstance(value, dict):
                        raise ConfigError(
                            f"'custom' must be a JSON object, got {type(value).__name__}"
                        )
                    settings["custom"].update(value)
                else:
                    settings["custom"][key] = value

        return GeneratorConfig(**settings)

    def read_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Parse a JSON settings file into a dict of keys."""
        path = Path(config_path)

        if path.suffix.lower() != ".json":
            raise ConfigError(f"Settings file must be JSON: {path}")

        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ConfigError(f"Settings file not found: {path}") from None
        except OSError as e:
            raise ConfigError(f"Cannot read settings file {path}: {e}") from e

        try:
            settings = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in settings file {path}: {e}") from e

        if not isinstance(settings, dict):
            raise ConfigError(f"Settings file must hold a JSON object: {path}")
        return settings

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Write a configuration back out as a flat JSON settings file."""
        settings = asdict(config)
        settings.update(settings.pop("custom"))

        try:
            Path(output_path).write_text(
                json.dumps(settings, indent=2, ensure_ascii=False), encoding="utf-8"
            )
        except OSError as e:
            raise ConfigError(f"Cannot write settings file {output_path}: {e}") from e

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """Return one message per setting that would produce invalid Java."""
        problems = []

        if not config.file_extension.startswith("."):
            problems.append(f"File extension should start with '.': {config.file_extension}")

        if config.indent.strip():
            problems.append(f"Indent must be whitespace: {config.indent!r}")

        if not config.object_type.isidentifier():
            problems.append(f"Invalid placeholder type name: {config.object_type}")

        problems.extend(
            f"Escape types must be short names: {name!r}"
            for name in config.escape_types
            if not name or "." in name
        )

        if not all(segment.isidentifier() for segment in config.engine_package.split(".")):
            problems.append(f"Invalid engine package: {config.engine_package}")

        if not config.engine_interface.isidentifier():
            problems.append(f"Invalid engine interface name: {config.engine_interface}")

        return problems


_config_manager = None


def get_config_manager() -> ConfigManager:
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """Build a configuration with the shared ConfigManager."""
    return get_config_manager().get_config(custom_config, config_file)
