from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from mdmgen.adapters.registry_file import RegistryFileError
from mdmgen.app import generate_model_metadata
from mdmgen.config import ConfigurationError, configure_logging, get_generation_config
from mdmgen.domain.model import SynthesisMatch

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from mdmgen.config import GenerationConfig

log = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid integer: {value}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("Value must be non-negative")
    return parsed


def _add_generation_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "registry",
        type=Path,
        help="Registry document (.json or .toml) declaring entities and their fields",
    )
    parser.add_argument(
        "--synthesis-match",
        choices=[member.value for member in SynthesisMatch],
        default=None,
        help="How input-only fields are detected (defaults to config)",
    )
    parser.add_argument(
        "--workers",
        type=_non_negative_int,
        default=None,
        help="Threads used to build entities; 0 builds sequentially (defaults to config)",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate client metadata from a schema registry")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    data = subparsers.add_parser("data", help="Build the metadata document")
    _add_generation_options(data)
    data.add_argument(
        "-o",
        "--output",
        type=Path,
        help="File to write the JSON document to (stdout when omitted)",
    )
    data.add_argument(
        "--indent",
        type=_non_negative_int,
        default=None,
        help="JSON indentation; 0 writes compact output (defaults to config)",
    )

    check = subparsers.add_parser("check", help="Validate a registry and report dropped fields")
    _add_generation_options(check)
    check.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any field index collision is found",
    )

    return parser.parse_args(list(argv))


def _build_config(args: argparse.Namespace) -> GenerationConfig:
    synthesis_match = (
        SynthesisMatch(args.synthesis_match) if args.synthesis_match is not None else None
    )
    return get_generation_config().with_overrides(
        synthesis_match=synthesis_match,
        workers=args.workers,
        indent=getattr(args, "indent", None),
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(verbose=parsed_args.verbose, force=True)
        config = _build_config(parsed_args)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "data":
            summary = generate_model_metadata(
                parsed_args.registry,
                output_path=parsed_args.output,
                config=config,
            )
            if parsed_args.output is None:
                sys.stdout.write(summary.document + "\n")
        elif parsed_args.command == "check":
            summary = generate_model_metadata(parsed_args.registry, config=config)
            for skipped in summary.result.skipped:
                log.info("Skipped %s: %s", skipped.class_name, skipped.reason)
            for collision in summary.result.collisions:
                log.warning(
                    "Entity %s: %s index %s kept %s, dropped %s (%s)",
                    collision.entity_index,
                    collision.kind,
                    collision.field_index,
                    collision.kept,
                    collision.dropped,
                    collision.stage,
                )
            if parsed_args.strict and summary.result.collisions:
                sys.exit(1)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except RegistryFileError:
        log.exception("Invalid registry document")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during generation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
