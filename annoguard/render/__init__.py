"""
Render — Visual projection of documents (spans split into display ranges).
"""

from annoguard.render.model import VComment, VDocument, VRange, VSpan

__all__ = [
    "VComment",
    "VDocument",
    "VRange",
    "VSpan",
]
