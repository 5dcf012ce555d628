"""
Layer Loader — Load layer configurations from YAML files.

Presets ship in the package's ``presets/`` directory; any other file can
be loaded by path.
"""

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from annoguard.core.logging import LogChannel, get_logger
from annoguard.layers.models import LayerConfiguration
from annoguard.model.enums import CapabilityKind
from annoguard.model.schema import LayerDescriptor

# Default preset directory
PRESETS_DIR = Path(__file__).parent / "presets"

log = get_logger(LogChannel.CONFIG)


def load_layers(name: str = "default") -> LayerConfiguration:
    """
    Load a layer preset by name.

    Args:
        name: Preset name (without .yaml extension)

    Returns:
        Parsed LayerConfiguration

    Raises:
        FileNotFoundError: If the preset doesn't exist
    """
    path = PRESETS_DIR / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Layer preset not found: {path}")
    return load_layers_from_path(path)


def load_layers_from_path(path: Union[str, Path]) -> LayerConfiguration:
    """Load a layer configuration from an arbitrary path."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    return parse_configuration(data, default_name=Path(path).stem)


def parse_configuration(data: dict, default_name: str = "unnamed") -> LayerConfiguration:
    """
    Parse a layer configuration from a dictionary.

    Invalid layers are skipped with a warning. Duplicate layer IDs keep the
    first definition.
    """
    layers: list[LayerDescriptor] = []
    seen: set[str] = set()

    for layer_data in data.get("layers", []):
        layer = parse_layer(layer_data)
        if layer is None:
            continue
        if layer.id in seen:
            log.warning("duplicate_layer_skipped", layer=layer.id)
            continue
        seen.add(layer.id)
        layers.append(layer)

    config = LayerConfiguration(
        name=data.get("name", default_name),
        description=data.get("description", ""),
        layers=layers,
    )
    log.verbose("layers_loaded", configuration=config.name, layers=len(layers))
    return config


def parse_layer(data: dict) -> Optional[LayerDescriptor]:
    """Parse a single layer from a dictionary, or None if it is invalid."""
    try:
        return LayerDescriptor(
            id=data["id"],
            name=data.get("name", data["id"]),
            annotation_type_name=data["type"],
            capability_kind=CapabilityKind.from_string(data.get("capability", "span")),
            allows_cross_sentence=data.get("cross_sentence", False),
            allows_stacking=data.get("allow_stacking", True),
            link_type_name=data.get("link_type"),
            enabled=data.get("enabled", True),
        )
    except (KeyError, ValueError, TypeError, AttributeError, ValidationError) as e:
        log.warning("invalid_layer_skipped", layer=repr(data)[:80], error=str(e))
        return None


def list_presets() -> list[str]:
    """List available preset names."""
    return sorted(p.stem for p in PRESETS_DIR.glob("*.yaml"))


# Cache for loaded presets
_cache: dict[str, LayerConfiguration] = {}


def get_layers(name: str = "default", use_cache: bool = True) -> LayerConfiguration:
    """Get a preset, using cache by default."""
    if use_cache and name in _cache:
        return _cache[name]

    config = load_layers(name)
    _cache[name] = config
    return config


def clear_cache() -> None:
    """Clear the preset cache."""
    _cache.clear()
