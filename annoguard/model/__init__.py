"""
Model — Enums and immutable value types.
"""

from annoguard.model.enums import CapabilityKind, CommentKind, MessageLevel
from annoguard.model.schema import (
    ChainLink,
    LayerDescriptor,
    PersistedSpan,
    Sentence,
    ValidationMessage,
)

__all__ = [
    # Enums
    "CapabilityKind",
    "CommentKind",
    "MessageLevel",
    # Models
    "ChainLink",
    "LayerDescriptor",
    "PersistedSpan",
    "Sentence",
    "ValidationMessage",
]
