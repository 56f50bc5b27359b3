"""Configuration classes for model loading.

Each stage of the pipeline has its own dataclass, validated in
``__post_init__``. ``LoaderConfig`` composes them into one immutable object
with override, serialization and preset helpers.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

_COMPONENTS = ("grammar", "extraction", "packing", "global_")
_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass(frozen=True)
class GrammarConfig:
    """Configuration for document parsing."""

    strict_close_tags: bool = False       # Closing names must match opening names
    allow_trailing_content: bool = True   # Ignore text after the root element

    def __post_init__(self) -> None:
        """Validate grammar configuration."""
        if not isinstance(self.strict_close_tags, bool):
            raise ValueError("strict_close_tags must be a bool")
        if not isinstance(self.allow_trailing_content, bool):
            raise ValueError("allow_trailing_content must be a bool")


@dataclass(frozen=True)
class ExtractionConfig:
    """Configuration for geometry extraction."""

    position_key: str = "position"
    normal_key: str = "normal"
    texcoord_key: str = "map"
    require_texture_coordinates: bool = True
    identity_when_no_transform: bool = True

    def __post_init__(self) -> None:
        """Validate extraction configuration."""
        for name in ("position_key", "normal_key", "texcoord_key"):
            if not getattr(self, name):
                raise ValueError(f"{name} cannot be empty")


@dataclass(frozen=True)
class PackingConfig:
    """Configuration for vertex packing."""

    deduplicate_vertices: bool = False
    pack_on_load: bool = True

    def __post_init__(self) -> None:
        """Validate packing configuration."""
        if self.deduplicate_vertices and not self.pack_on_load:
            raise ValueError("deduplicate_vertices requires pack_on_load")


@dataclass(frozen=True)
class GlobalConfig:
    """Settings shared by every stage."""

    logging_level: str = "INFO"
    enable_correlation_tracking: bool = True
    max_input_size_bytes: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in _LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {_LOGGING_LEVELS}")
        if self.max_input_size_bytes is not None and self.max_input_size_bytes <= 0:
            raise ValueError("max_input_size_bytes must be > 0 or None")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class LoaderConfig:
    """Complete configuration for parsing, extraction and packing.

    Frozen, sections included, so one instance can be shared between loaders.
    """

    grammar: GrammarConfig = field(default_factory=GrammarConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    packing: PackingConfig = field(default_factory=PackingConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete loader configuration."""
        try:
            self.grammar.__post_init__()
            self.extraction.__post_init__()
            self.packing.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

        keys = [
            self.extraction.position_key,
            self.extraction.normal_key,
            self.extraction.texcoord_key,
        ]
        if len(set(keys)) != len(keys):
            raise ConfigValidationError(
                "Extraction source keys must be distinct",
                field_name="extraction",
                suggestions=["Give positions, normals and texcoords different keys"],
            )

    def override(self, **kwargs: Any) -> "LoaderConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = LoaderConfig().override(
            ...     grammar__strict_close_tags=True,
            ...     extraction__texcoord_key="uv",
            ... )
        """
        nested: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" not in key:
                top_level[key] = value
                continue
            # "global___field" must resolve to the "global_" component.
            for component in _COMPONENTS:
                prefix = component + "__"
                if key.startswith(prefix):
                    nested.setdefault(component, {})[key[len(prefix):]] = value
                    break
            else:
                raise ConfigValidationError(
                    f"Unknown configuration component: {key.split('__', 1)[0]}",
                    field_name=key,
                    suggestions=list(_COMPONENTS),
                )

        new_fields: Dict[str, Any] = dict(top_level)
        for component, values in nested.items():
            try:
                new_fields[component] = replace(getattr(self, component), **values)
            except (TypeError, ValueError) as e:
                raise ConfigValidationError(str(e), field_name=component) from e
        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a nested dictionary."""
        result: Dict[str, Any] = {}
        for component in _COMPONENTS:
            section = getattr(self, component)
            result[component] = {
                name: getattr(section, name) for name in section.__dataclass_fields__
            }
        result["name"] = self.name
        result["description"] = self.description
        return result

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoaderConfig":
        """Create configuration from a dictionary produced by ``to_dict``."""
        sections = {
            "grammar": GrammarConfig,
            "extraction": ExtractionConfig,
            "packing": PackingConfig,
            "global_": GlobalConfig,
        }
        values: Dict[str, Any] = {}
        for component, section_class in sections.items():
            section = data.get(component) or {}
            if not isinstance(section, dict):
                raise ConfigValidationError(
                    f"Section {component} must be an object", field_name=component
                )
            try:
                values[component] = section_class(**section)
            except (TypeError, ValueError) as e:
                raise ConfigValidationError(str(e), field_name=component) from e
        return cls(name=data.get("name"), description=data.get("description"), **values)

    @classmethod
    def from_json(cls, json_str: str) -> "LoaderConfig":
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def lenient(cls) -> "LoaderConfig":
        """Defaults: unchecked closing names, identity for missing transforms."""
        return cls(name="lenient", description="Accept anything the grammar reads")

    @classmethod
    def strict(cls) -> "LoaderConfig":
        """Well-formed input only; every array and the transform required."""
        return cls(
            grammar=GrammarConfig(strict_close_tags=True, allow_trailing_content=False),
            extraction=ExtractionConfig(
                require_texture_coordinates=True,
                identity_when_no_transform=False,
            ),
            name="strict",
            description="Reject mismatched tags, trailing content and missing data",
        )

    @classmethod
    def positions_only(cls) -> "LoaderConfig":
        """Meshes without texture coordinates, no interleaved buffer."""
        return cls(
            extraction=ExtractionConfig(require_texture_coordinates=False),
            packing=PackingConfig(pack_on_load=False),
            name="positions_only",
            description="Load geometry arrays without building vertices",
        )


PRESETS = {
    "lenient": LoaderConfig.lenient,
    "strict": LoaderConfig.strict,
    "positions_only": LoaderConfig.positions_only,
}
