"""Argument parsing configuration for the rdf-encode CLI."""

import argparse

from ..constants import DEFAULT_MAX_DEPTH
from ..emitters import FORMAT_ALIASES


def create_argument_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with one subparser per command."""
    parser = argparse.ArgumentParser(
        prog="rdf-encode",
        description="Encode structured JSON values into RDF triples using a mapping document",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")

    sub = parser.add_subparsers(dest="command")

    sp_encode = sub.add_parser("encode", help="Encode a values document into triples")
    sp_encode.add_argument("mapping", help="Mapping configuration (JSON)")
    sp_encode.add_argument("values", help='Values document (JSON, records carry "@type")')
    sp_encode.add_argument("--output", "-o", default=None, help="Output file (default: stdout)")
    sp_encode.add_argument(
        "--format", "-f",
        default="nt",
        choices=sorted(FORMAT_ALIASES),
        help="Output syntax (default: nt)",
    )
    sp_encode.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Maximum record nesting depth (default: {DEFAULT_MAX_DEPTH})",
    )
    sp_encode.add_argument("--verbose", "-v", action="store_true", help="Print an encoding summary")

    sp_validate = sub.add_parser("validate", help="Validate a mapping configuration")
    sp_validate.add_argument("mapping", help="Mapping configuration (JSON)")

    return parser
