"""Command-line entry point: validates one codice fiscale.

Usage:
    python -m cfvalidator.main [CODE] [--dataset PATH] [--format scan|json]

Reads the code from the argument or, if absent, from an interactive prompt.
Exit status: 0 valid, 1 invalid, 2 dataset could not be loaded.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

import structlog

from cfvalidator.config import settings
from cfvalidator.decoders.codice_fiscale import normalize_cf, validate_codice_fiscale
from cfvalidator.decoders.municipalities import (
    FORMATS,
    DatasetLoadError,
    get_municipalities,
    load_municipalities,
)
from cfvalidator.schemas.validation import ValidationResult

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_DATASET_ERROR = 2

PROMPT = "Enter fiscal code: "

logger = structlog.get_logger(__name__)


# ── Logging setup ────────────────────────────────────────────────────


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


# ── Input / output ───────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cf-validate",
        description="Validate an Italian codice fiscale.",
    )
    parser.add_argument("code", nargs="?", help="Fiscal code (prompted for if omitted)")
    parser.add_argument(
        "--dataset",
        default=None,
        help=f"Municipality dataset file (default: {settings.dataset.municipalities_path})",
    )
    parser.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        help=f"Dataset format (default: {settings.dataset.municipalities_format})",
    )
    return parser


def read_code(argument: str | None) -> str:
    """Return the normalized code from the argument or an interactive prompt."""
    if argument is not None:
        return normalize_cf(argument)
    try:
        return normalize_cf(input(PROMPT))
    except EOFError:
        return ""


def render(result: ValidationResult) -> str:
    lines = [f"Code: {result.codice_fiscale}", f"Valid: {result.valid}"]
    lines.extend(f"- {msg}" for msg in result.messages)
    return "\n".join(lines)


# ── Entry point ──────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> int:
    """Run the validator and return the process exit status."""
    args = build_parser().parse_args(argv)
    configure_logging(settings.log_level)

    cf = read_code(args.code)

    dataset_path = args.dataset or settings.dataset.municipalities_path
    dataset_format = args.format or settings.dataset.municipalities_format
    try:
        if args.dataset is None and args.format is None:
            municipalities = get_municipalities()
        else:
            municipalities = load_municipalities(dataset_path, dataset_format)
    except DatasetLoadError as exc:
        logger.error("dataset_load_failed", path=str(dataset_path), error=str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_DATASET_ERROR

    result = validate_codice_fiscale(cf, municipalities)
    logger.info(
        "cf_validated",
        environment=settings.environment,
        valid=result.valid,
        checks=len(result.messages),
    )

    print(render(result))
    return EXIT_VALID if result.valid else EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
