"""
Behaviors — Structural constraints applied at create, render and validate time.
"""

from annoguard.behaviors.base import LayerBehavior, SpanIndex, SpanLayerBehavior
from annoguard.behaviors.cross_sentence import SpanCrossSentenceBehavior
from annoguard.behaviors.registry import (
    DEFAULT_BEHAVIORS,
    BehaviorRegistry,
    default_registry,
)
from annoguard.behaviors.stacking import SpanStackingBehavior

__all__ = [
    # Core
    "LayerBehavior",
    "SpanLayerBehavior",
    "SpanIndex",
    "BehaviorRegistry",
    "DEFAULT_BEHAVIORS",
    "default_registry",
    # Built-in behaviors
    "SpanCrossSentenceBehavior",
    "SpanStackingBehavior",
]
