"""
Tests for the command line interface.
"""

import json

import pytest

from annoguard.cli.main import EXIT_INVALID, EXIT_OK, EXIT_REJECTED, main
from annoguard.layers.loader import clear_cache


@pytest.fixture(autouse=True)
def _fresh_presets():
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def doc_file(tmp_path):
    """Document with one entity crossing the sentence break."""
    path = tmp_path / "doc.yaml"
    path.write_text(
        "id: cli-doc\n"
        "text: Alice met Bob. He left early.\n"
        "annotations:\n"
        "  NamedEntity: [[10, 20]]\n"
        "  DiscourseSegment: [[10, 20]]\n"
    )
    return str(path)


@pytest.fixture
def clean_doc_file(tmp_path):
    path = tmp_path / "clean.yaml"
    path.write_text(
        "text: Alice met Bob. He left early.\n"
        "annotations:\n"
        "  NamedEntity: [[0, 5], [10, 13]]\n"
    )
    return str(path)


def _run(*argv):
    return main([*argv, "--log-level", "silent"])


def test_validate_reports_crossing_entity(doc_file, capsys):
    """validate should list the violation and exit with EXIT_INVALID."""
    code = _run("validate", doc_file)

    out = capsys.readouterr().out
    assert code == EXIT_INVALID
    assert "ERROR [NamedEntity #1 10-20] Crossing sentence boundaries is not permitted." in out
    assert "1 message(s), 1 error(s)" in out


def test_validate_clean_document(clean_doc_file, capsys):
    assert _run("validate", clean_doc_file) == EXIT_OK
    assert "0 message(s), 0 error(s)" in capsys.readouterr().out


def test_validate_json(doc_file, capsys):
    """JSON output should be a serialized report."""
    code = _run("validate", doc_file, "--format", "json")

    report = json.loads(capsys.readouterr().out)
    assert code == EXIT_INVALID
    assert report["document_id"] == "cli-doc"
    assert [m["source"] for m in report["messages"]] == ["SpanCrossSentenceBehavior"]


def test_check_rejected(doc_file, capsys):
    """check should refuse 'Bob. He' on the entity layer."""
    code = _run("check", doc_file, "--type", "NamedEntity", "--begin", "10", "--end", "20")

    assert code == EXIT_REJECTED
    assert "Rejected: Annotation covers multiple sentences" in capsys.readouterr().err


def test_check_accepted(doc_file, capsys):
    code = _run("check", doc_file, "--type", "NamedEntity", "--begin", "0", "--end", "5")

    assert code == EXIT_OK
    assert "OK: NamedEntity 0-5 'Alice'" in capsys.readouterr().out


def test_check_unknown_type(doc_file, capsys):
    code = _run("check", doc_file, "--type", "Missing", "--begin", "0", "--end", "5")

    assert code == EXIT_REJECTED
    assert "No layer configured" in capsys.readouterr().err


def test_render(doc_file, capsys):
    """render should fragment both spans, commenting only the entity."""
    assert _run("render", doc_file) == EXIT_OK

    vdoc = json.loads(capsys.readouterr().out)
    assert [len(s["ranges"]) for s in vdoc["spans"]] == [2, 2]
    assert [c["vid"] for c in vdoc["comments"]] == [1]


def test_layers(capsys):
    assert _run("layers") == EXIT_OK

    listing = json.loads(capsys.readouterr().out)
    assert listing["name"] == "default"
    assert "named_entity" in [layer["id"] for layer in listing["layers"]]


def test_layers_file(doc_file, tmp_path, capsys):
    """A custom layer file should replace the preset."""
    layers = tmp_path / "layers.yaml"
    layers.write_text(
        "name: lenient\n"
        "layers:\n"
        "  - id: named_entity\n"
        "    type: NamedEntity\n"
        "    cross_sentence: true\n"
    )

    code = _run("validate", doc_file, "--layers-file", str(layers))

    assert code == EXIT_OK
    assert "0 message(s)" in capsys.readouterr().out


def test_missing_document(tmp_path, capsys):
    code = _run("validate", str(tmp_path / "missing.yaml"))

    assert code == EXIT_REJECTED
    assert capsys.readouterr().err.startswith("Error:")


def test_no_command(capsys):
    assert main([]) == EXIT_OK


@pytest.mark.parametrize("content,match", [
    ("text: [unclosed\n", "not valid YAML"),
    ("text: Alice met Bob.\nannotations:\n  NamedEntity: 5\n", "must be a list of pairs"),
])
def test_malformed_document(tmp_path, capsys, content, match):
    """Malformed documents should be reported, not crash with a traceback."""
    path = tmp_path / "bad.yaml"
    path.write_text(content)

    code = _run("validate", str(path))

    err = capsys.readouterr().err
    assert code == EXIT_REJECTED
    assert err.startswith("Error:")
    assert match in err


def test_validate_output_then_report(doc_file, tmp_path, capsys):
    """A report saved by validate should print the same text via report."""
    saved = tmp_path / "out" / "report.json"

    assert _run("validate", doc_file, "--output", str(saved)) == EXIT_INVALID
    validated = capsys.readouterr().out

    assert json.loads(saved.read_text())["document_id"] == "cli-doc"
    assert _run("report", str(saved)) == EXIT_INVALID
    assert capsys.readouterr().out == validated


def test_report_rejects_non_report(tmp_path, capsys):
    path = tmp_path / "other.json"
    path.write_text('{"layers": []}')

    assert _run("report", str(path)) == EXIT_REJECTED
    assert "Not a validation report" in capsys.readouterr().err
