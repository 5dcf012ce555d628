"""
Unit tests for the annotation store and document loading.
"""

import pytest

from annoguard.core.document import AnnotationDocument, document_from_dict, load_document
from annoguard.core.requests import CreateSpanRequest
from annoguard.model.schema import Sentence
from annoguard.text.segmenters import RegexSentenceSegmenter


class TestAnnotationStore:
    """Tests for span and link storage."""

    def test_add_span_allocates_ids(self, document):
        """Verify every span gets a fresh store address."""
        first = document.add_span("NamedEntity", 0, 5)
        second = document.add_span("NamedEntity", 10, 13)

        assert first.id != second.id
        assert document.get_span_by_id(second.id) == second

    def test_select_is_offset_ordered(self, document):
        """Verify select returns spans by begin, longer spans first."""
        late = document.add_span("NamedEntity", 15, 17)
        short = document.add_span("NamedEntity", 0, 5)
        long = document.add_span("NamedEntity", 0, 13)

        assert document.select("NamedEntity") == [long, short, late]

    def test_select_unknown_type(self, document):
        """Verify an unknown type selects nothing."""
        assert document.select("Missing") == []

    def test_covered_text(self, document):
        """Verify covered text follows the offsets."""
        span = document.add_span("NamedEntity", 10, 13)

        assert document.covered_text(span) == "Bob"

    def test_out_of_bounds_rejected(self, document):
        """Verify offsets beyond the text raise ValueError."""
        with pytest.raises(ValueError, match="outside document bounds"):
            document.add_span("NamedEntity", 20, 40)

    def test_reversed_offsets_rejected(self, document):
        """Verify begin after end raises ValueError."""
        with pytest.raises(ValueError, match="after end"):
            document.add_span("NamedEntity", 5, 2)

    def test_add_link(self, document):
        """Verify links reference their elements by id."""
        alice = document.add_span("CoreferenceElement", 0, 5)
        he = document.add_span("CoreferenceElement", 15, 17)

        link = document.add_link("CoreferenceLink", alice, he)

        assert (link.source_id, link.target_id) == (alice.id, he.id)
        assert document.links("CoreferenceLink") == [link]

    def test_add_link_to_foreign_span(self, document):
        """Verify linking a span from another document fails."""
        alice = document.add_span("CoreferenceElement", 0, 5)
        other = AnnotationDocument(text=document.text)
        other.add_span("CoreferenceElement", 0, 5)
        foreign = other.add_span("CoreferenceElement", 15, 17)

        with pytest.raises(ValueError, match="not part of this document"):
            document.add_link("CoreferenceLink", alice, foreign)


class TestCreateSpanRequest:
    """Tests for create requests."""

    def test_offsets_checked(self, document):
        """Verify requests outside the text are refused at construction."""
        with pytest.raises(ValueError):
            CreateSpanRequest(document=document, begin=0, end=100)

    def test_with_offsets(self, document):
        """Verify with_offsets returns a modified copy."""
        request = CreateSpanRequest(document=document, begin=0, end=5)
        moved = request.with_offsets(10, 13)

        assert (request.begin, request.end) == (0, 5)
        assert moved.covered_text == "Bob"
        assert moved.document is document


class TestDocumentLoading:
    """Tests for building documents from data and files."""

    def test_segments_when_sentences_missing(self):
        """Verify sentences are segmented if not given."""
        doc = document_from_dict({"text": "Alice met Bob. He left early."})

        assert doc.sentences == [Sentence(begin=0, end=14), Sentence(begin=15, end=29)]

    def test_given_sentences_are_kept(self):
        """Verify explicit sentence offsets win over segmentation."""
        doc = document_from_dict(
            {"text": "Alice met Bob. He left early.", "sentences": [[15, 29], [0, 29]]},
            segmenter=RegexSentenceSegmenter(),
        )

        assert doc.sentences[0] == Sentence(begin=0, end=29)

    def test_annotations_and_links(self):
        """Verify annotations load in order and links use their ids."""
        doc = document_from_dict({
            "id": "doc-7",
            "text": "Alice met Bob. He left early.",
            "annotations": {"CoreferenceElement": [[10, 13], [15, 17]]},
            "links": {"CoreferenceLink": [[1, 2]]},
        })

        assert doc.id == "doc-7"
        link = doc.links("CoreferenceLink")[0]
        assert doc.covered_text(doc.get_span_by_id(link.source_id)) == "Bob"
        assert doc.covered_text(doc.get_span_by_id(link.target_id)) == "He"

    def test_link_to_unknown_span(self):
        """Verify a link to a missing span is refused."""
        with pytest.raises(ValueError, match="unknown span"):
            document_from_dict({"text": "Hi.", "links": {"L": [[1, 2]]}})

    def test_missing_text(self):
        """Verify a document without text is refused."""
        with pytest.raises(ValueError, match="no 'text'"):
            document_from_dict({"annotations": {}})

    def test_load_yaml(self, tmp_path):
        """Verify documents load from YAML files."""
        path = tmp_path / "doc.yaml"
        path.write_text(
            "id: from-file\n"
            "text: Alice met Bob. He left early.\n"
            "annotations:\n"
            "  NamedEntity: [[0, 5]]\n"
        )

        doc = load_document(path)

        assert doc.id == "from-file"
        assert len(doc.select("NamedEntity")) == 1

    @pytest.mark.parametrize("data,match", [
        ({"text": 42}, "must be a string"),
        ({"text": "Hi.", "annotations": {"NamedEntity": 5}}, "must be a list of pairs"),
        ({"text": "Hi.", "annotations": [[0, 2]]}, "must be a mapping"),
        ({"text": "Hi.", "annotations": {"NamedEntity": [[0, 1, 2]]}}, "invalid pair"),
        ({"text": "Hi.", "annotations": {"NamedEntity": [["a", "b"]]}}, "invalid pair"),
        ({"text": "Hi.", "links": {"L": "1-2"}}, "must be a list of pairs"),
        ({"text": "Hi.", "sentences": [[0, 40]]}, "outside document bounds"),
    ])
    def test_malformed_data(self, data, match):
        """Verify malformed documents raise ValueError with a readable message."""
        with pytest.raises(ValueError, match=match):
            document_from_dict(data)

    def test_load_invalid_yaml(self, tmp_path):
        """Verify YAML syntax errors surface as ValueError."""
        path = tmp_path / "broken.yaml"
        path.write_text("text: [unclosed\n")

        with pytest.raises(ValueError, match="not valid YAML"):
            load_document(path)

    def test_load_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ValueError, match="does not contain a mapping"):
            load_document(path)
