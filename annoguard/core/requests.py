"""
Requests — Create requests flowing through the behavior pipeline.
"""

from dataclasses import dataclass, replace

from annoguard.core.document import AnnotationDocument


@dataclass(frozen=True)
class CreateSpanRequest:
    """
    A request to create a span annotation over ``[begin, end)``.

    Built by the adapter when a user draws an annotation; behaviors either
    pass it on (possibly as a modified copy) or reject it.
    """

    document: AnnotationDocument
    begin: int
    end: int

    def __post_init__(self) -> None:
        self.document.check_offsets(self.begin, self.end)

    def with_offsets(self, begin: int, end: int) -> "CreateSpanRequest":
        """Copy of this request with different offsets."""
        return replace(self, begin=begin, end=end)

    @property
    def covered_text(self) -> str:
        return self.document.text[self.begin:self.end]
