"""
Sentence Segmenters — Turn document text into sentence offsets.

Segmenters are sensors, not authorities: a document may also carry
sentence offsets produced elsewhere, and the oracle only ever looks at
those offsets.
"""

import re
from abc import ABC, abstractmethod

from annoguard.model.schema import Sentence

# A sentence ends at terminal punctuation (plus closing quotes/brackets)
# followed by whitespace or end of text
SENTENCE_END_PATTERN = re.compile(r"[.!?]+[\"')\]]*(?=\s|$)")


class SentenceSegmenter(ABC):
    """
    Abstract interface for sentence segmentation.

    Implementations must:
    - Return sentences ordered by offset
    - Return non-overlapping sentences
    - Exclude leading/trailing whitespace from each sentence
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name for tracing."""
        ...

    @abstractmethod
    def segment(self, text: str) -> list[Sentence]:
        """Split text into sentences with character offsets."""
        ...


def _trimmed(text: str, start: int, end: int) -> tuple[int, int]:
    while start < end and text[start].isspace():
        start += 1
    while end > start and text[end - 1].isspace():
        end -= 1
    return start, end


class RegexSentenceSegmenter(SentenceSegmenter):
    """
    Deterministic punctuation-based segmenter.

    "Alice met Bob. He left early." -> [0, 14), [15, 29)
    """

    @property
    def name(self) -> str:
        return "regex"

    def segment(self, text: str) -> list[Sentence]:
        sentences: list[Sentence] = []
        start = 0

        for match in SENTENCE_END_PATTERN.finditer(text):
            begin, end = _trimmed(text, start, match.end())
            if end > begin:
                sentences.append(Sentence(begin=begin, end=end))
            start = match.end()

        # Trailing text without terminal punctuation
        begin, end = _trimmed(text, start, len(text))
        if end > begin:
            sentences.append(Sentence(begin=begin, end=end))

        return sentences


class SpacySentenceSegmenter(SentenceSegmenter):
    """Segmenter backed by the shared spaCy model."""

    def __init__(self, model_name: str = None) -> None:
        self._model_name = model_name

    @property
    def name(self) -> str:
        return "spacy"

    def segment(self, text: str) -> list[Sentence]:
        from annoguard.text.spacy_loader import DEFAULT_MODEL, get_nlp

        nlp = get_nlp(self._model_name or DEFAULT_MODEL)
        doc = nlp(text)

        sentences: list[Sentence] = []
        for sent in doc.sents:
            begin, end = _trimmed(text, sent.start_char, sent.end_char)
            if end > begin:
                sentences.append(Sentence(begin=begin, end=end))
        return sentences


_SEGMENTERS = {
    "regex": RegexSentenceSegmenter,
    "spacy": SpacySentenceSegmenter,
}


def get_segmenter(name: str = "regex") -> SentenceSegmenter:
    """
    Get a segmenter by backend name.

    Raises:
        ValueError: If the backend is unknown
    """
    try:
        return _SEGMENTERS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown segmenter '{name}' (available: {', '.join(sorted(_SEGMENTERS))})"
        )
