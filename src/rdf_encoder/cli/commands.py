"""
CLI command implementations.

Each command is a small class with an execute(args) method returning the
process exit code, dispatched from main.py.
"""

import argparse
import logging
import sys
from abc import ABC, abstractmethod
from pathlib import Path

from ..encoding import encode_with_result
from ..errors import EncodingError
from ..models.config import load_mapping_config
from ..models.values import from_json
from .helpers import load_json_document, print_footer, print_header

logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """Base class for CLI commands."""

    @abstractmethod
    def execute(self, args: argparse.Namespace) -> int:
        """Run the command and return the exit code."""
        pass


class EncodeCommand(BaseCommand):
    """
    Encode a JSON values document into RDF triples.

    Usage:
        encode <mapping.json> <values.json> [--output FILE] [--format nt|turtle]
    """

    def execute(self, args: argparse.Namespace) -> int:
        try:
            config = load_mapping_config(args.mapping)
            value = from_json(load_json_document(args.values), args.max_depth)
            result = encode_with_result(
                value,
                config,
                output_format=args.format,
                max_depth=args.max_depth,
            )
        except FileNotFoundError as e:
            print(f"✗ {e}", file=sys.stderr)
            return 1
        except EncodingError as e:
            logger.error(f"Encoding failed: {e}")
            print(f"✗ Encoding failed: {e}", file=sys.stderr)
            return 1
        except ValueError as e:
            print(f"✗ {e}", file=sys.stderr)
            return 1

        if args.output:
            try:
                Path(args.output).write_text(result.text, encoding='utf-8')
            except OSError as e:
                print(f"✗ Could not write output: {e}", file=sys.stderr)
                return 1
            print(f"✓ Wrote {result.triple_count} triples to {args.output}", file=sys.stderr)
        else:
            sys.stdout.write(result.text)

        if args.verbose:
            print(result.get_summary(), file=sys.stderr)
        return 0


class ValidateCommand(BaseCommand):
    """
    Load and validate a mapping document.

    Usage:
        validate <mapping.json>
    """

    def execute(self, args: argparse.Namespace) -> int:
        try:
            config = load_mapping_config(args.mapping)
        except FileNotFoundError as e:
            print(f"✗ {e}")
            return 1
        except EncodingError as e:
            print(f"✗ Invalid mapping: {e}")
            return 1

        print_header("MAPPING VALIDATION")
        print(f"✓ {args.mapping} is a valid mapping.")
        print(config.get_summary())
        print_footer()
        return 0
