"""
Cross-Sentence Behavior — Annotations must stay within one sentence.

For chain layers the check applies to the chain elements only. Chain
links are not spans and may still cross sentence boundaries.
"""

from annoguard.behaviors.base import SpanIndex, SpanLayerBehavior
from annoguard.core.document import AnnotationDocument
from annoguard.core.errors import MultipleSentenceViolation
from annoguard.core.requests import CreateSpanRequest
from annoguard.model.enums import CapabilityKind, CommentKind
from annoguard.model.schema import LayerDescriptor, ValidationMessage
from annoguard.render.model import VComment, VDocument
from annoguard.text.sentences import SentenceOracle, is_same_sentence

CREATE_MESSAGE = "Annotation covers multiple sentences, limit your annotation to single sentence!"
VIOLATION_MESSAGE = "Crossing sentence boundaries is not permitted."


class SpanCrossSentenceBehavior(SpanLayerBehavior):
    """Ensure that annotations do not cross sentence boundaries."""

    def __init__(self, oracle: SentenceOracle = is_same_sentence) -> None:
        self._oracle = oracle

    def accepts(self, capability_kind: CapabilityKind) -> bool:
        return super().accepts(capability_kind) or capability_kind == CapabilityKind.CHAIN

    def on_create(self, layer: LayerDescriptor, request: CreateSpanRequest) -> CreateSpanRequest:
        if layer.allows_cross_sentence:
            return request

        if not self._oracle(request.document, request.begin, request.end):
            raise MultipleSentenceViolation(CREATE_MESSAGE)

        return request

    def on_render(self, layer: LayerDescriptor, vdoc: VDocument, span_index: SpanIndex) -> None:
        if layer.allows_cross_sentence:
            return

        # The renderer splits spans at sentence boundaries, so a span with
        # several ranges crosses one. No oracle needed.
        for span, vspan in span_index.items():
            if len(vspan.ranges) > 1:
                vdoc.add(VComment(vid=span.id, kind=CommentKind.ERROR, text=VIOLATION_MESSAGE))

    def on_validate(
        self, layer: LayerDescriptor, document: AnnotationDocument
    ) -> list[ValidationMessage]:
        if layer.allows_cross_sentence:
            return []

        messages = []
        for span in document.select(layer.annotation_type_name):
            if not self._oracle(document, span.begin, span.end):
                messages.append(ValidationMessage.error(self.name, VIOLATION_MESSAGE, span))

        return messages
