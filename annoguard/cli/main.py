"""
AnnoGuard CLI — Validate, render and check annotated documents.
"""

import argparse
import json
import sys
from typing import Optional

from annoguard import __version__
from annoguard.adapter import get_adapter
from annoguard.behaviors.registry import default_registry
from annoguard.core.document import load_document
from annoguard.core.errors import AnnotationException
from annoguard.core.logging import bind_request_context, clear_request_context, configure_logging
from annoguard.layers.loader import load_layers, load_layers_from_path
from annoguard.layers.models import LayerConfiguration
from annoguard.render.renderer import render_document
from annoguard.text.segmenters import get_segmenter
from annoguard.validation.runner import validate_document
from annoguard.validation.export import FORMATS
from annoguard.validation.export import load as load_report
from annoguard.validation.export import render as render_report
from annoguard.validation.export import save as save_report

# Exit codes
EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_INVALID = 2


def _common_arguments() -> argparse.ArgumentParser:
    """Options shared by every command."""
    common = argparse.ArgumentParser(add_help=False)
    layers = common.add_mutually_exclusive_group()
    layers.add_argument(
        "--layers",
        type=str,
        default="default",
        help="Layer preset to use (default: default)",
    )
    layers.add_argument(
        "--layers-file",
        type=str,
        default=None,
        help="Path to a layer configuration YAML file",
    )
    common.add_argument(
        "--segmenter",
        choices=["regex", "spacy"],
        default="regex",
        help="Sentence segmenter for documents without sentence offsets (default: regex)",
    )

    # Logging configuration
    common.add_argument(
        "--log-level",
        type=str,
        choices=["silent", "info", "verbose", "debug"],
        default=None,
        help="Log verbosity level (default: info, or ANNOGUARD_LOG_LEVEL env var)",
    )
    common.add_argument(
        "--log-channel",
        type=str,
        default=None,
        help="Comma-separated log channels to show (create,render,validate,config,system). Default: all",
    )
    return common


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="annoguard",
        description="Layer behaviors for annotation editing",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"annoguard {__version__}",
    )

    common = _common_arguments()
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate", parents=[common], help="Validate a persisted document"
    )
    validate_parser.add_argument("document", type=str, help="Path to a document YAML/JSON file")
    validate_parser.add_argument(
        "--format",
        choices=FORMATS,
        default="text",
        help="Output format (default: text)",
    )
    validate_parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Also save the report as JSON to this path",
    )

    # Check command
    check_parser = subparsers.add_parser(
        "check", parents=[common], help="Check whether an annotation could be created"
    )
    check_parser.add_argument("document", type=str, help="Path to a document YAML/JSON file")
    check_parser.add_argument("--type", required=True, help="Annotation type of the new span")
    check_parser.add_argument("--begin", type=int, required=True, help="Begin offset")
    check_parser.add_argument("--end", type=int, required=True, help="End offset")

    # Render command
    render_parser = subparsers.add_parser(
        "render", parents=[common], help="Render a document with behavior comments as JSON"
    )
    render_parser.add_argument("document", type=str, help="Path to a document YAML/JSON file")

    # Report command
    report_parser = subparsers.add_parser(
        "report", parents=[common], help="Print a report saved with validate --output"
    )
    report_parser.add_argument("report", type=str, help="Path to a saved JSON report")
    report_parser.add_argument(
        "--format",
        choices=FORMATS,
        default="text",
        help="Output format (default: text)",
    )

    # Layers command
    subparsers.add_parser("layers", parents=[common], help="List the configured layers")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    channels = None
    if args.log_channel:
        channels = [ch.strip() for ch in args.log_channel.split(",")]
    configure_logging(level=args.log_level, channels=channels, force=True)

    commands = {
        "validate": run_validate,
        "check": run_check,
        "render": run_render,
        "report": run_report,
        "layers": run_layers,
    }
    try:
        return commands[args.command](args)
    except (FileNotFoundError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_REJECTED
    finally:
        clear_request_context()


def _load_configuration(args: argparse.Namespace) -> LayerConfiguration:
    if args.layers_file:
        return load_layers_from_path(args.layers_file)
    return load_layers(args.layers)


def _load_document(args: argparse.Namespace):
    document = load_document(args.document, segmenter=get_segmenter(args.segmenter))
    bind_request_context(document=document.id)
    return document


def run_validate(args: argparse.Namespace) -> int:
    """Run validation command."""
    config = _load_configuration(args)
    document = _load_document(args)
    registry = default_registry(config.layers)

    report = validate_document(document, config.layers, registry)

    print(render_report(report, args.format))
    if args.output:
        path = save_report(report, args.output)
        print(f"Report saved to {path}", file=sys.stderr)

    return EXIT_OK if report.is_valid else EXIT_INVALID


def run_check(args: argparse.Namespace) -> int:
    """Run check command: attempt a creation without saving the document."""
    config = _load_configuration(args)
    layer = config.get_by_type(args.type)
    if layer is None:
        raise ValueError(f"No layer configured for annotation type '{args.type}'")

    document = _load_document(args)
    adapter = get_adapter(layer, default_registry(config.layers))

    try:
        span = adapter.add_span(document, args.begin, args.end)
    except AnnotationException as e:
        print(f"Rejected: {e}", file=sys.stderr)
        return EXIT_REJECTED

    print(f"OK: {span.type_name} {span.begin}-{span.end} {document.covered_text(span)!r}")
    return EXIT_OK


def run_render(args: argparse.Namespace) -> int:
    """Run render command."""
    config = _load_configuration(args)
    document = _load_document(args)

    vdoc = render_document(document, config.layers, default_registry(config.layers))
    print(vdoc.model_dump_json(indent=2))
    return EXIT_OK


def run_report(args: argparse.Namespace) -> int:
    """Run report command: reprint a saved report without re-validating."""
    report = load_report(args.report)
    print(render_report(report, args.format))
    return EXIT_OK if report.is_valid else EXIT_INVALID


def run_layers(args: argparse.Namespace) -> int:
    """Run layers command."""
    config = _load_configuration(args)
    rows = [
        {
            "id": layer.id,
            "type": layer.annotation_type_name,
            "capability": layer.capability_kind.value,
            "cross_sentence": layer.allows_cross_sentence,
            "allow_stacking": layer.allows_stacking,
            "enabled": layer.enabled,
        }
        for layer in config.layers
    ]
    print(json.dumps({"name": config.name, "layers": rows}, indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
