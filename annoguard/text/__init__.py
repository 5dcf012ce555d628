"""
Text — Sentence segmentation and the sentence oracle.
"""

from annoguard.text.segmenters import (
    RegexSentenceSegmenter,
    SentenceSegmenter,
    SpacySentenceSegmenter,
    get_segmenter,
)
from annoguard.text.sentences import (
    SentenceOracle,
    is_same_sentence,
)

__all__ = [
    "RegexSentenceSegmenter",
    "SentenceOracle",
    "SentenceSegmenter",
    "SpacySentenceSegmenter",
    "get_segmenter",
    "is_same_sentence",
]
