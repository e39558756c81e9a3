"""N-Triples emitter: one canonical line per triple, in call order."""

import io
import logging

from rdflib import URIRef
from rdflib.term import Identifier

from .base import BaseEmitter

logger = logging.getLogger(__name__)


class NTriplesEmitter(BaseEmitter):
    """
    Writes each triple as ``<s> <p> <o> .`` on its own line.

    Triples are never reordered or deduplicated, so output order is exactly
    the order in which the encoder emitted them.
    """

    def __init__(self) -> None:
        super().__init__()
        self._buffer = io.StringIO()

    def _write(self, subject: URIRef, predicate: URIRef, obj: Identifier) -> None:
        # Render every term before writing so a bad term leaves no partial line
        line = f"{subject.n3()} {predicate.n3()} {obj.n3()} .\n"
        self._buffer.write(line)

    def _render(self) -> str:
        return self._buffer.getvalue()
