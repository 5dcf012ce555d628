"""
Model Schema — Pydantic models shared by behaviors, renderer and validator.

All models here are immutable. Layers and persisted annotations are owned
by the configuration and document subsystems; behaviors only read them.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from annoguard.model.enums import CapabilityKind, MessageLevel


class LayerDescriptor(BaseModel):
    """Per-layer configuration consumed by behaviors."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique layer identifier")
    name: str = Field(..., description="Human readable layer name")
    annotation_type_name: str = Field(
        ..., description="Type of the span annotations (chain elements for chain layers)"
    )
    capability_kind: CapabilityKind = Field(
        default=CapabilityKind.SPAN, description="What kind of annotations the layer holds"
    )
    allows_cross_sentence: bool = Field(
        default=False, description="Annotations may cross sentence boundaries"
    )
    allows_stacking: bool = Field(
        default=True, description="Several annotations may share the same offsets"
    )
    link_type_name: Optional[str] = Field(
        default=None, description="Type of the links between chain elements"
    )
    enabled: bool = Field(default=True, description="Disabled layers are skipped")


class Sentence(BaseModel):
    """A sentence as reported by segmentation, as character offsets."""

    model_config = ConfigDict(frozen=True)

    begin: int = Field(..., ge=0, description="Offset of the first character")
    end: int = Field(..., ge=0, description="Offset after the last character")

    @model_validator(mode="after")
    def _check_order(self) -> "Sentence":
        if self.end < self.begin:
            raise ValueError(f"Sentence end {self.end} before begin {self.begin}")
        return self


class PersistedSpan(BaseModel):
    """A stored span annotation over ``[begin, end)``."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Store address of the annotation")
    type_name: str = Field(..., description="Annotation type")
    begin: int = Field(..., ge=0, description="Start offset")
    end: int = Field(..., ge=0, description="End offset (exclusive)")

    @model_validator(mode="after")
    def _check_order(self) -> "PersistedSpan":
        if self.end < self.begin:
            raise ValueError(f"Span end {self.end} before begin {self.begin}")
        return self


class ChainLink(BaseModel):
    """A link between two chain elements. Links are not span-shaped."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Store address of the link")
    type_name: str = Field(..., description="Link type")
    source_id: int = Field(..., description="Chain element the link starts at")
    target_id: int = Field(..., description="Chain element the link points to")


class ValidationMessage(BaseModel):
    """A single finding of a validation pass, paired with the offending span."""

    model_config = ConfigDict(frozen=True)

    level: MessageLevel = Field(default=MessageLevel.ERROR)
    source: str = Field(..., description="Behavior that produced the message")
    message: str = Field(..., description="User-facing text")
    subject: PersistedSpan = Field(..., description="Annotation the message refers to")

    @classmethod
    def error(cls, source: str, message: str, subject: PersistedSpan) -> "ValidationMessage":
        """Shortcut for an error-level message."""
        return cls(level=MessageLevel.ERROR, source=source, message=message, subject=subject)
