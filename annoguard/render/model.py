"""
Render Model — Visual projection of a document.

A VSpan is the render-time view of a persisted span. Its ranges are split
wherever the span crosses a sentence, so a span with more than one range
is a span that crosses a sentence boundary.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from annoguard.model.enums import CommentKind


class VRange(BaseModel):
    """One contiguous display range of a span."""

    model_config = ConfigDict(frozen=True)

    begin: int
    end: int


class VSpan(BaseModel):
    """A rendered span: one or more ordered, non-overlapping ranges."""

    model_config = ConfigDict(frozen=True)

    vid: int = Field(..., description="Id of the persisted span this renders")
    layer_id: str = Field(..., description="Layer the span belongs to")
    type_name: str = Field(..., description="Annotation type")
    ranges: tuple[VRange, ...] = Field(..., min_length=1, description="Display ranges")

    @property
    def is_fragmented(self) -> bool:
        return len(self.ranges) > 1


class VComment(BaseModel):
    """A non-blocking note attached to a rendered annotation."""

    model_config = ConfigDict(frozen=True)

    vid: int = Field(..., description="Id of the annotation the comment targets")
    kind: CommentKind = Field(..., description="Severity")
    text: str = Field(..., description="User-facing text")


class VDocument(BaseModel):
    """
    Render result accumulated by the renderer and the render phase.

    Comments are a set in insertion order: adding an identical comment
    twice keeps one.
    """

    document_id: str
    spans: list[VSpan] = Field(default_factory=list)
    comments: list[VComment] = Field(default_factory=list)

    # Comments already in ``comments``, for constant-time dedup
    _seen: set[VComment] = PrivateAttr(default_factory=set)

    def model_post_init(self, __context) -> None:
        self._seen = set(self.comments)

    def add_span(self, vspan: VSpan) -> None:
        self.spans.append(vspan)

    def add(self, comment: VComment) -> None:
        """Attach a comment unless the same comment is already present."""
        if comment not in self._seen:
            self._seen.add(comment)
            self.comments.append(comment)

    def comments_for(self, vid: int) -> list[VComment]:
        return [c for c in self.comments if c.vid == vid]

    def get_span(self, vid: int) -> VSpan | None:
        for vspan in self.spans:
            if vspan.vid == vid:
                return vspan
        return None
