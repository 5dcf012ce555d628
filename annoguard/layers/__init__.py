"""
Layers — Layer configuration loaded from YAML presets.
"""

from annoguard.layers.loader import (
    clear_cache,
    get_layers,
    list_presets,
    load_layers,
    load_layers_from_path,
    parse_configuration,
    parse_layer,
)
from annoguard.layers.models import LayerConfiguration

__all__ = [
    "LayerConfiguration",
    "clear_cache",
    "get_layers",
    "list_presets",
    "load_layers",
    "load_layers_from_path",
    "parse_configuration",
    "parse_layer",
]
