"""
Behavior Registry — Per-layer behavior lists and phase dispatch.

Usage:
    registry = BehaviorRegistry(DEFAULT_BEHAVIORS, config.layers)
    request = registry.on_create(layer, request)      # may raise
    registry.on_render(layer, vdoc, span_index)       # adds comments
    messages = registry.on_validate(layer, document)  # returns findings

Behaviors are matched against every layer once, when the registry is
built. The registry is immutable afterwards and safe to share.
"""

from types import MappingProxyType
from typing import Iterable, Optional, Sequence

from annoguard.behaviors.base import LayerBehavior, SpanIndex
from annoguard.behaviors.cross_sentence import SpanCrossSentenceBehavior
from annoguard.behaviors.stacking import SpanStackingBehavior
from annoguard.core.document import AnnotationDocument
from annoguard.core.errors import LayerConstraintViolation
from annoguard.core.logging import LogChannel, get_component_logger
from annoguard.core.requests import CreateSpanRequest
from annoguard.model.schema import LayerDescriptor, ValidationMessage
from annoguard.render.model import VDocument

# Built-in behaviors in registration order
DEFAULT_BEHAVIORS: tuple[LayerBehavior, ...] = (
    SpanCrossSentenceBehavior(),
    SpanStackingBehavior(),
)

log = get_component_logger("registry", LogChannel.CREATE)


class BehaviorRegistry:
    """Ordered behaviors per layer, resolved at construction."""

    def __init__(
        self,
        behaviors: Sequence[LayerBehavior],
        layers: Iterable[LayerDescriptor],
    ) -> None:
        self._behaviors = tuple(behaviors)
        self._layers = MappingProxyType({layer.id: layer for layer in layers})
        self._by_layer = MappingProxyType({
            layer_id: tuple(b for b in self._behaviors if b.accepts(layer.capability_kind))
            for layer_id, layer in self._layers.items()
        })

        log.debug(
            "registry_built",
            behaviors=[b.name for b in self._behaviors],
            layers={k: [b.name for b in v] for k, v in self._by_layer.items()},
        )

    @property
    def behaviors(self) -> tuple[LayerBehavior, ...]:
        return self._behaviors

    @property
    def layers(self) -> list[LayerDescriptor]:
        return list(self._layers.values())

    def behaviors_for(self, layer: LayerDescriptor) -> tuple[LayerBehavior, ...]:
        """
        Behaviors applicable to a layer, in registration order.

        Raises:
            KeyError: If the layer was not configured when the registry was built
        """
        try:
            return self._by_layer[layer.id]
        except KeyError:
            raise KeyError(f"Layer '{layer.id}' is not registered") from None

    # =========================================================================
    # Phases
    # =========================================================================

    def on_create(self, layer: LayerDescriptor, request: CreateSpanRequest) -> CreateSpanRequest:
        """
        Run the create phase. The first violation aborts and propagates.

        Raises:
            LayerConstraintViolation: If any behavior rejects the request
        """
        for behavior in self.behaviors_for(layer):
            try:
                request = behavior.on_create(layer, request)
            except LayerConstraintViolation as e:
                log.verbose(
                    "create_refused",
                    layer=layer.id,
                    behavior=behavior.name,
                    begin=request.begin,
                    end=request.end,
                    reason=str(e),
                )
                raise
        return request

    def on_render(self, layer: LayerDescriptor, vdoc: VDocument, span_index: SpanIndex) -> None:
        """Run the render phase. Every behavior runs; comments accumulate in ``vdoc``."""
        for behavior in self.behaviors_for(layer):
            behavior.on_render(layer, vdoc, span_index)

    def on_validate(
        self, layer: LayerDescriptor, document: AnnotationDocument
    ) -> list[ValidationMessage]:
        """Run the validate phase. Messages of all behaviors, in registration order."""
        messages: list[ValidationMessage] = []
        for behavior in self.behaviors_for(layer):
            messages.extend(behavior.on_validate(layer, document))
        return messages


def default_registry(
    layers: Iterable[LayerDescriptor],
    behaviors: Optional[Sequence[LayerBehavior]] = None,
) -> BehaviorRegistry:
    """Build a registry over ``layers`` with the built-in behaviors."""
    return BehaviorRegistry(DEFAULT_BEHAVIORS if behaviors is None else behaviors, layers)
