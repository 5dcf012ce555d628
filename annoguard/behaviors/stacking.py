"""
Stacking Behavior — No two annotations at the same location.

Applies to span layers that disable stacking. Two spans of the layer's
type are stacked when they have identical offsets.
"""

from collections import Counter

from annoguard.behaviors.base import SpanIndex, SpanLayerBehavior
from annoguard.core.document import AnnotationDocument
from annoguard.core.errors import StackingViolation
from annoguard.core.requests import CreateSpanRequest
from annoguard.model.enums import CommentKind
from annoguard.model.schema import LayerDescriptor, ValidationMessage
from annoguard.render.model import VComment, VDocument

VIOLATION_MESSAGE = "Stacking is not permitted."


class SpanStackingBehavior(SpanLayerBehavior):
    """Reject and report spans that share their offsets on non-stacking layers."""

    def on_create(self, layer: LayerDescriptor, request: CreateSpanRequest) -> CreateSpanRequest:
        if layer.allows_stacking:
            return request

        for span in request.document.select(layer.annotation_type_name):
            if span.begin == request.begin and span.end == request.end:
                raise StackingViolation(
                    f"Cannot create another annotation of layer [{layer.name}] at this "
                    "location - stacking is not enabled for this layer."
                )

        return request

    def on_render(self, layer: LayerDescriptor, vdoc: VDocument, span_index: SpanIndex) -> None:
        if layer.allows_stacking:
            return

        counts = Counter((s.begin, s.end) for s in span_index)
        for span in span_index:
            if counts[(span.begin, span.end)] > 1:
                vdoc.add(VComment(vid=span.id, kind=CommentKind.ERROR, text=VIOLATION_MESSAGE))

    def on_validate(
        self, layer: LayerDescriptor, document: AnnotationDocument
    ) -> list[ValidationMessage]:
        if layer.allows_stacking:
            return []

        spans = document.select(layer.annotation_type_name)
        counts = Counter((s.begin, s.end) for s in spans)
        return [
            ValidationMessage.error(self.name, VIOLATION_MESSAGE, span)
            for span in spans
            if counts[(span.begin, span.end)] > 1
        ]
