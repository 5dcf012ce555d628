"""
Sentence Oracle — Answers "is this offset range inside one sentence?".

The oracle only reads ``document.sentences``. It must give the same answer
as long as those sentences do not change, because the renderer splits
display ranges over the very same sentences.
"""

from typing import Protocol


class SentenceOracle(Protocol):
    """Protocol for sentence containment checks."""

    def __call__(self, document, begin: int, end: int) -> bool:
        """Return True if ``begin`` and ``end`` fall in the same sentence."""
        ...


def is_same_sentence(document, begin: int, end: int) -> bool:
    """
    Check whether two offsets fall within the same sentence.

    Sentence bounds are inclusive on both sides, so an annotation ending
    exactly at the end of a sentence is still inside it. Two equal offsets
    are trivially in the same sentence.

    Args:
        document: Anything with an offset-ordered ``sentences`` list
        begin: Reference offset
        end: Compared offset

    Returns:
        True if one sentence contains both offsets
    """
    if begin == end:
        return True

    low, high = min(begin, end), max(begin, end)

    for sentence in document.sentences:
        if sentence.begin <= low <= sentence.end:
            return sentence.begin <= high <= sentence.end
        # Sentences are sorted, nothing further can contain the offsets
        if high < sentence.begin:
            return False

    return False
