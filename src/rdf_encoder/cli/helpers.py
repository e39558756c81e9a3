"""
CLI helper utilities.

This module provides shared utilities for CLI commands including:
- Logging setup
- JSON document loading
- Output formatting
"""

import json
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Literal, Optional, Union

# Type alias for log levels
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setup_logging(
    level: LogLevel = "WARNING",
    log_file: Optional[str] = None
) -> Optional[str]:
    """
    Setup logging configuration with a fallback location.

    Log records go to stderr so they never mix with triples written to
    stdout. If the requested log file cannot be created, the system temp
    directory is tried before falling back to console-only logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path. If None, logs to console only.

    Returns:
        The actual log file path used, or None if logging to console only.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list = [logging.StreamHandler(sys.stderr)]
    actual_log_file = None

    if log_file:
        log_filename = os.path.basename(log_file) or "rdf_encoder.log"
        fallback_locations = [
            log_file,
            os.path.join(tempfile.gettempdir(), log_filename),
        ]

        for fallback_path in fallback_locations:
            try:
                log_dir = os.path.dirname(fallback_path)
                if log_dir:
                    os.makedirs(log_dir, exist_ok=True)
                handlers.append(logging.FileHandler(fallback_path, encoding='utf-8'))
                actual_log_file = fallback_path
                if fallback_path != log_file:
                    print(f"Note: Using fallback log file: {fallback_path}", file=sys.stderr)
                break
            except OSError as e:
                print(f"  Could not create log at {fallback_path}: {e}", file=sys.stderr)

        if actual_log_file is None:
            print("Warning: Could not write log file, logging to console only", file=sys.stderr)

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )

    logger = logging.getLogger(__name__)
    if actual_log_file:
        logger.info(f"Logging to: {actual_log_file}")

    return actual_log_file


def load_json_document(path: Union[str, Path]) -> Any:
    """
    Load a UTF-8 JSON document.

    Args:
        path: Path to the document.

    Returns:
        The decoded JSON value.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file is not valid UTF-8 JSON or nests too deeply.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in {path} at line {e.lineno}, column {e.colno}: {e.msg}"
        ) from e
    except UnicodeDecodeError as e:
        raise ValueError(f"File encoding error in {path}: {e}") from e
    except RecursionError as e:
        raise ValueError(f"JSON in {path} is nested too deeply to decode") from e


def print_header(title: str, width: int = 60) -> None:
    """Print a formatted header with the given title."""
    print("\n" + "=" * width)
    print(title)
    print("=" * width)


def print_footer(width: int = 60) -> None:
    """Print a footer line."""
    print("=" * width + "\n")
