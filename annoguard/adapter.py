"""
Adapters — Create annotations on a layer through its behaviors.

The adapter is the only writer of the annotation store. It runs the
registry's create phase first and persists only if no behavior objects,
so a rejected request leaves the document untouched.
"""

from annoguard.behaviors.registry import BehaviorRegistry
from annoguard.core.document import AnnotationDocument
from annoguard.core.requests import CreateSpanRequest
from annoguard.model.enums import CapabilityKind
from annoguard.model.schema import ChainLink, LayerDescriptor, PersistedSpan, ValidationMessage


class SpanAdapter:
    """Creates and validates span annotations of one layer."""

    def __init__(self, layer: LayerDescriptor, registry: BehaviorRegistry) -> None:
        self.layer = layer
        self.registry = registry

    @property
    def annotation_type_name(self) -> str:
        return self.layer.annotation_type_name

    def add_span(self, document: AnnotationDocument, begin: int, end: int) -> PersistedSpan:
        """
        Create a span annotation.

        Raises:
            ValueError: If the offsets are invalid for the document
            LayerConstraintViolation: If a behavior rejects the request
        """
        request = CreateSpanRequest(document=document, begin=begin, end=end)
        request = self.registry.on_create(self.layer, request)
        return document.add_span(self.annotation_type_name, request.begin, request.end)

    def select(self, document: AnnotationDocument) -> list[PersistedSpan]:
        return document.select(self.annotation_type_name)

    def validate(self, document: AnnotationDocument) -> list[ValidationMessage]:
        return self.registry.on_validate(self.layer, document)


class ChainAdapter(SpanAdapter):
    """
    Creates chain elements and the links between them.

    Elements go through the create phase like any span. Links are not
    span-shaped, so span behaviors never see them.
    """

    @property
    def link_type_name(self) -> str:
        return self.layer.link_type_name or f"{self.layer.annotation_type_name}Link"

    def add_link(
        self,
        document: AnnotationDocument,
        source: PersistedSpan,
        target: PersistedSpan,
    ) -> ChainLink:
        """
        Link two chain elements of this layer.

        Raises:
            ValueError: If either span is not an element of this chain layer
        """
        for element in (source, target):
            if element.type_name != self.annotation_type_name:
                raise ValueError(
                    f"Span {element.id} of type {element.type_name} is not an element "
                    f"of chain layer '{self.layer.id}'"
                )
        return document.add_link(self.link_type_name, source, target)


def get_adapter(layer: LayerDescriptor, registry: BehaviorRegistry) -> SpanAdapter:
    """
    Get the adapter for a layer.

    Raises:
        ValueError: For relation layers, which have no span annotations
    """
    if layer.capability_kind == CapabilityKind.CHAIN:
        return ChainAdapter(layer, registry)
    if layer.capability_kind == CapabilityKind.SPAN:
        return SpanAdapter(layer, registry)
    raise ValueError(f"Layer '{layer.id}' ({layer.capability_kind.value}) has no span adapter")
