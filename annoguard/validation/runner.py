"""
Validation Runner — Check a whole persisted document against its layers.

Runs offline: no rendering, no visual projection. Behaviors inspect the
stored spans directly. Findings are returned, never raised.
"""

from typing import Iterable

from annoguard.behaviors.registry import BehaviorRegistry
from annoguard.core.document import AnnotationDocument
from annoguard.core.logging import LogChannel, get_component_logger
from annoguard.model.schema import LayerDescriptor
from annoguard.validation.report import ValidationReport

log = get_component_logger("validation", LogChannel.VALIDATE)


def validate_document(
    document: AnnotationDocument,
    layers: Iterable[LayerDescriptor],
    registry: BehaviorRegistry,
) -> ValidationReport:
    """
    Validate every enabled layer of a document.

    Args:
        document: The persisted document
        layers: Layers in configuration order
        registry: BehaviorRegistry built over ``layers``

    Returns:
        ValidationReport with the messages of all layers, layer by layer
    """
    report = ValidationReport(document_id=document.id)

    for layer in layers:
        if not layer.enabled:
            continue

        messages = registry.on_validate(layer, document)
        report.layers.append(layer.id)
        report.messages.extend(messages)

        log.verbose("layer_validated", layer=layer.id, messages=len(messages))

    log.info(
        "document_validated",
        document=document.id,
        layers=len(report.layers),
        errors=report.error_count,
    )
    return report
