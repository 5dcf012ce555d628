"""
Layer Models — A named set of layer descriptors.
"""

from dataclasses import dataclass, field
from typing import Optional

from annoguard.model.schema import LayerDescriptor


@dataclass
class LayerConfiguration:
    """A complete layer configuration (one project's layer setup)."""
    name: str
    description: str = ""
    layers: list[LayerDescriptor] = field(default_factory=list)

    def get_by_type(self, type_name: str) -> Optional[LayerDescriptor]:
        """Get the layer whose annotations have the given type."""
        for layer in self.layers:
            if layer.annotation_type_name == type_name:
                return layer
        return None

    def get_by_id(self, layer_id: str) -> Optional[LayerDescriptor]:
        """Get a layer by ID."""
        for layer in self.layers:
            if layer.id == layer_id:
                return layer
        return None

    def enabled(self) -> list[LayerDescriptor]:
        """Enabled layers in configuration order."""
        return [layer for layer in self.layers if layer.enabled]
