"""
AnnotationDocument — The annotation store for one document.

Holds the text, its sentences, and every persisted span and chain link.
Behaviors read from it; only adapters write to it.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union
from uuid import uuid4

import yaml

from annoguard.model.schema import ChainLink, PersistedSpan, Sentence
from annoguard.text.segmenters import RegexSentenceSegmenter, SentenceSegmenter


@dataclass
class AnnotationDocument:
    """
    Mutable annotation store for one document.

    Spans are kept per annotation type. ``select`` returns them in index
    order (begin ascending, longer spans first), which is the order every
    validation pass scans them in.
    """

    text: str
    id: str = field(default_factory=lambda: str(uuid4()))
    sentences: list[Sentence] = field(default_factory=list)

    spans: dict[str, list[PersistedSpan]] = field(default_factory=dict)
    chain_links: dict[str, list[ChainLink]] = field(default_factory=dict)

    # Next store address
    _next_id: int = field(default=1, repr=False)

    # =========================================================================
    # Offsets
    # =========================================================================

    def check_offsets(self, begin: int, end: int) -> None:
        """
        Ensure ``[begin, end)`` is a valid range over the text.

        Raises:
            ValueError: If the range is reversed or out of bounds
        """
        if begin > end:
            raise ValueError(f"Begin offset {begin} is after end offset {end}")
        if begin < 0 or end > len(self.text):
            raise ValueError(
                f"Offsets [{begin}, {end}) outside document bounds [0, {len(self.text)}]"
            )

    def covered_text(self, span: PersistedSpan) -> str:
        """Text covered by a span."""
        return self.text[span.begin:span.end]

    # =========================================================================
    # Spans
    # =========================================================================

    def select(self, type_name: str) -> list[PersistedSpan]:
        """All spans of a type in index order."""
        return sorted(
            self.spans.get(type_name, []),
            key=lambda s: (s.begin, -s.end, s.id),
        )

    def add_span(self, type_name: str, begin: int, end: int) -> PersistedSpan:
        """Persist a new span and return it."""
        self.check_offsets(begin, end)
        span = PersistedSpan(id=self._allocate_id(), type_name=type_name, begin=begin, end=end)
        self.spans.setdefault(type_name, []).append(span)
        return span

    def get_span_by_id(self, span_id: int) -> Optional[PersistedSpan]:
        """Get a span by store address."""
        for spans in self.spans.values():
            for span in spans:
                if span.id == span_id:
                    return span
        return None

    # =========================================================================
    # Chain links
    # =========================================================================

    def add_link(self, type_name: str, source: PersistedSpan, target: PersistedSpan) -> ChainLink:
        """Persist a link between two existing chain elements."""
        for element in (source, target):
            if self.get_span_by_id(element.id) is None:
                raise ValueError(f"Chain element {element.id} is not part of this document")
        link = ChainLink(
            id=self._allocate_id(),
            type_name=type_name,
            source_id=source.id,
            target_id=target.id,
        )
        self.chain_links.setdefault(type_name, []).append(link)
        return link

    def links(self, type_name: str) -> list[ChainLink]:
        """All links of a type in creation order."""
        return list(self.chain_links.get(type_name, []))

    def _allocate_id(self) -> int:
        address = self._next_id
        self._next_id += 1
        return address


# =============================================================================
# Loading
# =============================================================================

def _offset_pairs(value: Any, where: str) -> list[tuple[int, int]]:
    """Read a list of ``[a, b]`` integer pairs."""
    if not isinstance(value, list):
        raise ValueError(f"{where} must be a list of pairs, got {type(value).__name__}")
    pairs = []
    for item in value:
        if (
            not isinstance(item, (list, tuple))
            or len(item) != 2
            or not all(isinstance(n, int) and not isinstance(n, bool) for n in item)
        ):
            raise ValueError(f"{where} contains an invalid pair: {item!r}")
        pairs.append((item[0], item[1]))
    return pairs


def _mapping(value: Any, where: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{where} must be a mapping of type name to pairs")
    return value


def document_from_dict(
    data: dict[str, Any],
    segmenter: Optional[SentenceSegmenter] = None,
) -> AnnotationDocument:
    """
    Build a document from a plain dictionary.

    Format::

        id: doc-1
        text: "Alice met Bob. He left early."
        sentences: [[0, 14], [15, 29]]     # optional, segmented if absent
        annotations:
          NamedEntity: [[0, 5], [10, 13]]
        links:
          CorefLink: [[1, 2]]              # store addresses, 1-based, load order

    Raises:
        ValueError: If the data is malformed
    """
    if "text" not in data:
        raise ValueError("Document data has no 'text'")

    text = data["text"]
    if not isinstance(text, str):
        raise ValueError(f"Document 'text' must be a string, got {type(text).__name__}")
    doc = AnnotationDocument(text=text, id=str(data.get("id") or uuid4()))

    if data.get("sentences") is not None:
        sentences = []
        for begin, end in _offset_pairs(data["sentences"], "'sentences'"):
            doc.check_offsets(begin, end)
            sentences.append(Sentence(begin=begin, end=end))
        doc.sentences = sorted(sentences, key=lambda s: s.begin)
    else:
        doc.sentences = (segmenter or RegexSentenceSegmenter()).segment(text)

    for type_name, offsets in _mapping(data.get("annotations"), "'annotations'").items():
        for begin, end in _offset_pairs(offsets, f"Annotations of {type_name}"):
            doc.add_span(str(type_name), begin, end)

    for type_name, pairs in _mapping(data.get("links"), "'links'").items():
        for source_id, target_id in _offset_pairs(pairs, f"Links of {type_name}"):
            source = doc.get_span_by_id(source_id)
            target = doc.get_span_by_id(target_id)
            if source is None or target is None:
                raise ValueError(f"Link {type_name} references unknown span {source_id}/{target_id}")
            doc.add_link(str(type_name), source, target)

    return doc


def load_document(
    path: Union[str, Path],
    segmenter: Optional[SentenceSegmenter] = None,
) -> AnnotationDocument:
    """
    Load a document from a YAML (or JSON) file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not a well-formed document
    """
    path = Path(path)
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Document file {path} is not valid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Document file {path} does not contain a mapping")
    return document_from_dict(data, segmenter)
