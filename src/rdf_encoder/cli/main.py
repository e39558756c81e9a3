"""
rdf-encode command-line entry point.

Usage:
    rdf-encode encode <mapping.json> <values.json> [--output FILE] [--format nt|turtle]
    rdf-encode validate <mapping.json>
"""

import sys
from typing import List, Optional

from .commands import EncodeCommand, ValidateCommand
from .helpers import setup_logging
from .parsers import create_argument_parser

# Command mapping from command name to Command class
COMMAND_MAP = {
    'encode': EncodeCommand,
    'validate': ValidateCommand,
}


def run(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, dispatch to a command and return its exit code."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.log_level, args.log_file)

    command = COMMAND_MAP[args.command]()
    return command.execute(args)


def main() -> None:
    sys.exit(run())


if __name__ == '__main__':
    main()
