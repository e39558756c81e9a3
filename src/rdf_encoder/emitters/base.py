"""
Triple emitter protocol and abstract base.

An emitter is the sink the encoder drives: it accepts one
(subject, predicate, object) triple at a time, appends its serialized form,
and hands back the accumulated text from finish().
"""

import logging
from abc import ABC, abstractmethod
from typing import Protocol, Tuple, Union, runtime_checkable
from urllib.parse import urlparse

from rdflib import URIRef
from rdflib.term import Identifier

from ..errors import EmitterFailure
from ..models.literals import Literal

logger = logging.getLogger(__name__)

# Object position: an IRI reference or a literal
TripleObject = Union[URIRef, Literal]


def is_absolute_iri(iri: str) -> bool:
    """Check that an IRI carries a scheme, as N-Triples requires."""
    return bool(urlparse(iri).scheme)


@runtime_checkable
class TripleEmitter(Protocol):
    """
    Protocol defining the interface for triple sinks.

    Example:
        >>> class CountingEmitter:
        ...     def __init__(self):
        ...         self.count = 0
        ...     def format(self, subject, predicate, obj):
        ...         self.count += 1
        ...     def finish(self):
        ...         return f"{self.count} triples"
        >>>
        >>> emitter: TripleEmitter = CountingEmitter()
    """

    def format(self, subject: str, predicate: str, obj: TripleObject) -> None:
        """
        Append one triple.

        Args:
            subject: Subject IRI.
            predicate: Predicate IRI.
            obj: Object IRI (as URIRef) or Literal.
        """
        ...

    def finish(self) -> str:
        """
        Return the serialized text of all appended triples.

        Returns:
            The accumulated output.
        """
        ...


class BaseEmitter(ABC):
    """
    Abstract base class for emitters backed by rdflib terms.

    Converts positions to rdflib terms and wraps any failure from the
    concrete writer in EmitterFailure. Subclasses implement _write() and
    _render().
    """

    def __init__(self) -> None:
        self.finished = False

    @staticmethod
    def to_terms(
        subject: str,
        predicate: str,
        obj: TripleObject,
    ) -> Tuple[URIRef, URIRef, Identifier]:
        """
        Convert triple positions to rdflib terms.

        Raises:
            ValueError: If an IRI position holds a relative IRI
        """
        iris = [subject, predicate] if isinstance(obj, Literal) else [subject, predicate, obj]
        for iri in iris:
            if not is_absolute_iri(iri):
                raise ValueError(f"<{iri}> is not an absolute IRI")
        if isinstance(obj, Literal):
            obj_term = obj.to_rdflib()
        else:
            obj_term = URIRef(obj)
        return URIRef(subject), URIRef(predicate), obj_term

    def format(self, subject: str, predicate: str, obj: TripleObject) -> None:
        if self.finished:
            raise EmitterFailure("Cannot format a triple after finish()")
        try:
            self._write(*self.to_terms(subject, predicate, obj))
        except EmitterFailure:
            raise
        except Exception as e:
            raise EmitterFailure(
                f"Could not format triple <{subject}> <{predicate}> {obj!r}: {e}"
            ) from e

    def finish(self) -> str:
        try:
            text = self._render()
        except Exception as e:
            raise EmitterFailure(f"Could not render output: {e}") from e
        self.finished = True
        return text

    @abstractmethod
    def _write(self, subject: URIRef, predicate: URIRef, obj: Identifier) -> None:
        """Append one triple of rdflib terms."""
        pass

    @abstractmethod
    def _render(self) -> str:
        """Produce the serialized text."""
        pass

    def get_format_name(self) -> str:
        """Human-readable name of the output syntax (e.g. "NTriples")."""
        return self.__class__.__name__.replace("Emitter", "")
