"""
Renderer — Build the visual projection of a document.

Spans are split into one display range per sentence they touch, then the
registry's render phase runs over the finished projection of each layer.
"""

import math
from bisect import bisect_right
from typing import Optional

from annoguard.core.document import AnnotationDocument
from annoguard.core.logging import LogChannel, get_component_logger
from annoguard.model.enums import CapabilityKind
from annoguard.model.schema import LayerDescriptor, PersistedSpan, Sentence
from annoguard.render.model import VDocument, VRange, VSpan

log = get_component_logger("renderer", LogChannel.RENDER)


def sentence_rows(document: AnnotationDocument) -> list[tuple[int, int]]:
    """
    Partition the text into one row per sentence.

    A row runs from its sentence start to the start of the next sentence, so
    whitespace between sentences belongs to the preceding row. The first row
    starts at 0 and the last one ends at the end of the text.
    """
    sentences: list[Sentence] = document.sentences
    rows = []
    for i, sentence in enumerate(sentences):
        row_begin = 0 if i == 0 else sentence.begin
        row_end = sentences[i + 1].begin if i + 1 < len(sentences) else len(document.text)
        rows.append((row_begin, max(row_end, sentence.end)))
    return rows


def split_into_ranges(
    document: AnnotationDocument,
    begin: int,
    end: int,
    rows: Optional[list[tuple[int, int]]] = None,
) -> tuple[VRange, ...]:
    """
    Split ``[begin, end)`` at sentence boundaries.

    Every sentence row the span overlaps contributes the part of the span it
    covers, so the ranges are ordered, disjoint and together cover the span.
    Whitespace outside a sentence at either end of the span is displayed as
    a range of its own. Zero-width spans and spans inside one sentence keep
    a single range.

    Pass ``rows`` from ``sentence_rows`` when splitting many spans of the
    same document.
    """
    if begin == end:
        return (VRange(begin=begin, end=end),)
    if rows is None:
        rows = sentence_rows(document)

    sentences = document.sentences
    ranges: list[VRange] = []
    # Last row starting at or before ``begin``; rows are sorted and contiguous
    i = max(bisect_right(rows, (begin, math.inf)) - 1, 0)
    while i < len(rows) and rows[i][0] < end:
        row_begin, row_end = rows[i]
        sentence = sentences[i]
        i += 1
        if row_end <= begin:
            continue
        piece_begin, piece_end = max(begin, row_begin), min(end, row_end)

        cuts = [piece_begin]
        if piece_begin == begin and piece_begin < sentence.begin < piece_end:
            cuts.append(sentence.begin)
        if piece_end == end and piece_begin < sentence.end < piece_end:
            cuts.append(sentence.end)
        cuts.append(piece_end)

        ranges.extend(VRange(begin=a, end=b) for a, b in zip(cuts, cuts[1:]))

    return tuple(ranges) or (VRange(begin=begin, end=end),)


def render_span(
    document: AnnotationDocument,
    layer: LayerDescriptor,
    span: PersistedSpan,
    rows: Optional[list[tuple[int, int]]] = None,
) -> VSpan:
    return VSpan(
        vid=span.id,
        layer_id=layer.id,
        type_name=span.type_name,
        ranges=split_into_ranges(document, span.begin, span.end, rows),
    )


def build_span_index(
    document: AnnotationDocument, layer: LayerDescriptor
) -> dict[PersistedSpan, VSpan]:
    """Visual projection of every span of a layer, in index order."""
    rows = sentence_rows(document)
    return {
        span: render_span(document, layer, span, rows)
        for span in document.select(layer.annotation_type_name)
    }


def render_document(document: AnnotationDocument, layers, registry) -> VDocument:
    """
    Render all enabled span-shaped layers and run the render phase.

    Args:
        document: The document to render
        layers: Layer descriptors in display order
        registry: BehaviorRegistry built over ``layers``

    Returns:
        VDocument with spans and behavior comments
    """
    vdoc = VDocument(document_id=document.id)

    for layer in layers:
        if not layer.enabled:
            continue
        # Relation layers render as arcs, which carry no display ranges
        if layer.capability_kind == CapabilityKind.RELATION:
            continue

        span_index = build_span_index(document, layer)
        for vspan in span_index.values():
            vdoc.add_span(vspan)

        registry.on_render(layer, vdoc, span_index)

        log.debug("layer_rendered", layer=layer.id, spans=len(span_index))

    log.verbose(
        "document_rendered",
        document=document.id,
        spans=len(vdoc.spans),
        comments=len(vdoc.comments),
    )
    return vdoc
