"""
Validation Report — Findings of one validation pass over a document.
"""

from __future__ import annotations

from collections import Counter

from pydantic import BaseModel, Field

from annoguard.model.enums import MessageLevel
from annoguard.model.schema import ValidationMessage


class ValidationReport(BaseModel):
    """All messages produced for one document, in scan order."""

    document_id: str = Field(..., description="Validated document")
    layers: list[str] = Field(default_factory=list, description="IDs of the validated layers")
    messages: list[ValidationMessage] = Field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(1 for m in self.messages if m.level == MessageLevel.ERROR)

    @property
    def is_valid(self) -> bool:
        """True if no message is an error."""
        return self.error_count == 0

    def summary(self) -> dict[str, int]:
        """Count of messages per source behavior."""
        return dict(Counter(m.source for m in self.messages))

    def messages_for(self, span_id: int) -> list[ValidationMessage]:
        return [m for m in self.messages if m.subject.id == span_id]
