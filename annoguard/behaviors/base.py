"""
Layer Behaviors — Reusable structural constraints on annotation layers.

A behavior is checked in three independent places:
- on_create: before a span is persisted; raising aborts the creation
- on_render: after the visual projection is built; may only add comments
- on_validate: over all persisted spans; returns findings as data

Behaviors are stateless. One instance is shared by every layer it accepts
and by every concurrent caller, so hooks must derive everything from
their arguments.
"""

from abc import ABC
from typing import ClassVar, Mapping

from annoguard.core.document import AnnotationDocument
from annoguard.core.requests import CreateSpanRequest
from annoguard.model.enums import CapabilityKind
from annoguard.model.schema import LayerDescriptor, PersistedSpan, ValidationMessage
from annoguard.render.model import VDocument, VSpan

# Render phase input: persisted span -> its visual projection
SpanIndex = Mapping[PersistedSpan, VSpan]


class LayerBehavior(ABC):
    """
    Base class for layer behaviors.

    Every hook has a pass-through default, so a behavior only overrides the
    phases it cares about.
    """

    capability: ClassVar[CapabilityKind]

    @property
    def name(self) -> str:
        """Behavior name, used as the source of validation messages."""
        return type(self).__name__

    def accepts(self, capability_kind: CapabilityKind) -> bool:
        """Whether this behavior applies to layers of the given kind."""
        return capability_kind == self.capability

    def on_create(self, layer: LayerDescriptor, request: CreateSpanRequest) -> CreateSpanRequest:
        return request

    def on_render(self, layer: LayerDescriptor, vdoc: VDocument, span_index: SpanIndex) -> None:
        return None

    def on_validate(
        self, layer: LayerDescriptor, document: AnnotationDocument
    ) -> list[ValidationMessage]:
        return []

    def __repr__(self) -> str:
        return f"<{self.name}>"


class SpanLayerBehavior(LayerBehavior):
    """Behavior for plain span layers."""

    capability = CapabilityKind.SPAN
