"""
Report Export — Text and JSON renditions of validation reports.

JSON is the archival format: a saved report can be loaded back and
printed again without re-validating the document.
"""

from pathlib import Path
from typing import Union

from pydantic import ValidationError

from annoguard.validation.report import ValidationReport

FORMATS = ("text", "json")


def format_text(report: ValidationReport) -> str:
    """One line per message in scan order, followed by a totals line."""
    lines = []
    for message in report.messages:
        span = message.subject
        lines.append(
            f"{message.level.value.upper()} [{span.type_name} #{span.id} "
            f"{span.begin}-{span.end}] {message.message} ({message.source})"
        )
    lines.append(f"{len(report.messages)} message(s), {report.error_count} error(s)")
    return "\n".join(lines)


def to_json(report: ValidationReport, indent: int = 2) -> str:
    return report.model_dump_json(indent=indent)


def from_json(json_str: str) -> ValidationReport:
    """
    Parse a report exported with ``to_json``.

    Raises:
        ValueError: If the JSON is not a validation report
    """
    try:
        return ValidationReport.model_validate_json(json_str)
    except ValidationError as e:
        raise ValueError(f"Not a validation report: {e.error_count()} error(s)") from e


def render(report: ValidationReport, format: str = "text") -> str:
    """Render a report in one of ``FORMATS``."""
    if format == "json":
        return to_json(report)
    if format == "text":
        return format_text(report)
    raise ValueError(f"Unknown report format '{format}' (available: {', '.join(FORMATS)})")


def save(report: ValidationReport, path: Union[str, Path], format: str = "json") -> Path:
    """Write a report to ``path``, creating parent directories. Returns the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render(report, format) + "\n")
    return path


def load(path: Union[str, Path]) -> ValidationReport:
    """
    Load a report saved in JSON format.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not a JSON validation report
    """
    return from_json(Path(path).read_text())
