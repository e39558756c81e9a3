"""
Turtle emitter.

Collects triples into an rdflib Graph and serializes them as Turtle on
finish(), binding the mapping configuration's namespaces as prefixes.
Turtle output groups triples by subject, so call order is not preserved;
use the N-Triples emitter where order matters.
"""

import logging
from typing import Mapping, Optional

from rdflib import Graph, Namespace, URIRef
from rdflib.term import Identifier

from .base import BaseEmitter

logger = logging.getLogger(__name__)


class TurtleEmitter(BaseEmitter):
    """Accumulates triples in a graph and serializes Turtle."""

    def __init__(self, namespaces: Optional[Mapping[str, str]] = None) -> None:
        super().__init__()
        self.graph = Graph()
        for prefix, iri in (namespaces or {}).items():
            self.graph.bind(prefix, Namespace(iri), override=True)
            logger.debug(f"Bound prefix {prefix}: <{iri}>")

    def _write(self, subject: URIRef, predicate: URIRef, obj: Identifier) -> None:
        self.graph.add((subject, predicate, obj))

    def _render(self) -> str:
        return self.graph.serialize(format="turtle")
