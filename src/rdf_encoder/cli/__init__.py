"""
CLI module for the RDF encoder.

- commands.py: Command implementations (encode, validate)
- parsers.py: Argument parsing configuration
- helpers.py: Shared CLI utilities (logging, JSON loading)
- main.py: Entry point and command dispatch
"""

from .commands import BaseCommand, EncodeCommand, ValidateCommand
from .parsers import create_argument_parser
from .helpers import setup_logging, load_json_document

__all__ = [
    'BaseCommand',
    'EncodeCommand',
    'ValidateCommand',
    'create_argument_parser',
    'setup_logging',
    'load_json_document',
]
