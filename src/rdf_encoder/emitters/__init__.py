"""
Triple emitters - sinks that serialize the encoder's triple stream.

Components:
- base: TripleEmitter protocol and the rdflib-backed BaseEmitter
- ntriples: NTriplesEmitter, line-per-triple output in emission order (default)
- turtle: TurtleEmitter, prefix-compacted Turtle via an rdflib Graph

Usage:
    from rdf_encoder.emitters import create_emitter

    emitter = create_emitter("turtle", namespaces={"ex": "https://example.org/ns#"})
"""

from typing import Dict, Mapping, Optional

from .base import BaseEmitter, TripleEmitter, TripleObject, is_absolute_iri
from .ntriples import NTriplesEmitter
from .turtle import TurtleEmitter

DEFAULT_FORMAT = "nt"

FORMAT_ALIASES: Dict[str, str] = {
    "nt": "nt",
    "ntriples": "nt",
    "n-triples": "nt",
    "ttl": "turtle",
    "turtle": "turtle",
}

SUPPORTED_FORMATS = frozenset(FORMAT_ALIASES.values())


def normalize_format(output_format: Optional[str]) -> str:
    """
    Normalize a user-provided output format name or alias.

    Raises:
        ValueError: If the format is not supported.
    """
    if not output_format:
        return DEFAULT_FORMAT
    fmt = output_format.strip().lower()
    normalized = FORMAT_ALIASES.get(fmt)
    if normalized is None:
        raise ValueError(
            f"Unsupported output format '{output_format}'. "
            f"Supported formats: {sorted(FORMAT_ALIASES)}"
        )
    return normalized


def create_emitter(
    output_format: Optional[str] = DEFAULT_FORMAT,
    namespaces: Optional[Mapping[str, str]] = None,
) -> BaseEmitter:
    """Create a fresh emitter for the given output format."""
    if normalize_format(output_format) == "turtle":
        return TurtleEmitter(namespaces)
    return NTriplesEmitter()


__all__ = [
    "BaseEmitter",
    "TripleEmitter",
    "TripleObject",
    "is_absolute_iri",
    "NTriplesEmitter",
    "TurtleEmitter",
    "create_emitter",
    "normalize_format",
    "SUPPORTED_FORMATS",
]
