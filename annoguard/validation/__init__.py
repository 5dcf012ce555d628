"""
Validation — Offline, document-wide checks of persisted annotations.
"""

from annoguard.validation.report import ValidationReport
from annoguard.validation.runner import validate_document

__all__ = [
    "ValidationReport",
    "validate_document",
]
