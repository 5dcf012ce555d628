"""
Shared fixtures: a two-sentence document and a small set of layers.
"""

import pytest

from annoguard.behaviors.registry import default_registry
from annoguard.core.document import AnnotationDocument
from annoguard.model.enums import CapabilityKind
from annoguard.model.schema import LayerDescriptor
from annoguard.text.segmenters import RegexSentenceSegmenter

# Sentences: [0, 14) "Alice met Bob." and [15, 29) "He left early."
TEXT = "Alice met Bob. He left early."


@pytest.fixture
def document():
    """The two-sentence document, no annotations yet."""
    doc = AnnotationDocument(text=TEXT, id="doc-1")
    doc.sentences = RegexSentenceSegmenter().segment(TEXT)
    return doc


@pytest.fixture
def make_layer():
    """Factory for layer descriptors with test defaults."""
    def _make(**overrides) -> LayerDescriptor:
        data = {
            "id": "named_entity",
            "name": "Named entity",
            "annotation_type_name": "NamedEntity",
        }
        data.update(overrides)
        return LayerDescriptor(**data)
    return _make


@pytest.fixture
def span_layer(make_layer):
    """Span layer that forbids crossing sentences."""
    return make_layer()


@pytest.fixture
def crossing_layer(make_layer):
    """Span layer that allows crossing sentences."""
    return make_layer(
        id="discourse",
        name="Discourse segment",
        annotation_type_name="DiscourseSegment",
        allows_cross_sentence=True,
    )


@pytest.fixture
def chain_layer(make_layer):
    """Chain layer whose elements must stay within a sentence."""
    return make_layer(
        id="coreference",
        name="Coreference",
        annotation_type_name="CoreferenceElement",
        capability_kind=CapabilityKind.CHAIN,
        link_type_name="CoreferenceLink",
    )


@pytest.fixture
def relation_layer(make_layer):
    """Relation layer, not span-shaped."""
    return make_layer(
        id="dependency",
        name="Dependency",
        annotation_type_name="Dependency",
        capability_kind=CapabilityKind.RELATION,
    )


@pytest.fixture
def layers(span_layer, crossing_layer, chain_layer, relation_layer):
    return [span_layer, crossing_layer, chain_layer, relation_layer]


@pytest.fixture
def registry(layers):
    """Registry with the built-in behaviors over all test layers."""
    return default_registry(layers)
