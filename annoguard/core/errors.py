"""
Errors — Exceptions raised while creating annotations.

Only creation-time checks raise. Render-time and validation-time findings
are returned as data.
"""


class AnnotationException(Exception):
    """Base class for failures of an annotation edit operation."""


class LayerConstraintViolation(AnnotationException):
    """A layer behavior refused a create request."""


class MultipleSentenceViolation(LayerConstraintViolation):
    """The requested annotation covers more than one sentence."""


class StackingViolation(LayerConstraintViolation):
    """An annotation with the same offsets already exists on a non-stacking layer."""


__all__ = [
    "AnnotationException",
    "LayerConstraintViolation",
    "MultipleSentenceViolation",
    "StackingViolation",
]
