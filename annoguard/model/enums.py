"""
Model Enums — Layer kinds, comment kinds and message levels.

No stringly-typed constants scattered across behaviors.
"""

from enum import Enum


class CapabilityKind(str, Enum):
    """
    What kind of annotations a layer holds.

    Behaviors declare which kinds they apply to; the registry matches
    them against every configured layer once, at build time.
    """

    SPAN = "span"            # Plain span layer
    CHAIN = "chain"          # Chain layer: span elements joined by links
    RELATION = "relation"    # Arc layer, not span-shaped

    @classmethod
    def from_string(cls, s: str) -> "CapabilityKind":
        """Parse a capability kind, raising ValueError on unknown input."""
        return cls(s.strip().lower())


class CommentKind(str, Enum):
    """Severity of a render-time comment."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class MessageLevel(str, Enum):
    """Severity of a validation message."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
