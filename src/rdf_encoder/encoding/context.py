"""
Subject Context Stack - the chain of records currently being encoded.

Entering a record resolves its subject rule, computes the subject IRI,
emits the rdf:type triple and pushes a context. Contexts are popped in
strict reverse order, so a nested record's context is always gone before
its parent's.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List

from rdflib import URIRef

from ..constants import DEFAULT_MAX_DEPTH, RDF_TYPE
from ..emitters.base import is_absolute_iri
from ..errors import CyclicReference, InvalidIdentifier, MaxDepthExceeded, NoActiveSubject
from ..models.config import SubjectRule
from .resolver import MappingResolver

logger = logging.getLogger(__name__)

# Callable receiving (subject, predicate, object) for each triple
EmitFunc = Callable[[str, str, object], None]


@dataclass(frozen=True)
class SubjectContext:
    """State for one record instance while its fields are encoded."""
    subject_iri: str
    type_name: str
    rule: SubjectRule


class SubjectContextStack:
    """
    Stack of active subject contexts for one encode call.

    Guards against runaway nesting with max_depth and against a record
    re-entering a subject that is still open further up the stack.

    Cycles are detected by subject IRI, not by object identity. A nested
    record whose IRI equals an open ancestor's is rejected even when the
    value itself is a finite tree, since its link triple would make the
    subject reference itself through its own description. The same IRI may
    appear again once its subject has been exited.
    """

    def __init__(
        self,
        resolver: MappingResolver,
        emit: EmitFunc,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.resolver = resolver
        self.max_depth = max_depth
        self._emit = emit
        self._stack: List[SubjectContext] = []

    def __len__(self) -> int:
        return len(self._stack)

    @property
    def is_empty(self) -> bool:
        return not self._stack

    def enter(self, type_name: str, identifier: str) -> SubjectContext:
        """
        Open a subject for a record and emit its rdf:type triple.

        Args:
            type_name: Record type name
            identifier: Lexical form of the record's identifier literal

        Returns:
            The pushed context

        Raises:
            MissingSubjectRule: If the type has no subject rule
            InvalidIdentifier: If the subject IRI is not absolute
            MaxDepthExceeded: If the stack is already max_depth deep
            CyclicReference: If the subject is already open
        """
        rule = self.resolver.resolve_subject(type_name)
        if len(self._stack) >= self.max_depth:
            raise MaxDepthExceeded(self.max_depth, type_name)

        subject_iri = self.resolver.subject_iri(rule, identifier)
        if not is_absolute_iri(subject_iri):
            raise InvalidIdentifier(
                type_name,
                rule.identifier_field,
                f"subject IRI <{subject_iri}> is not absolute; set identifier_prefix or base_iri",
            )
        if any(ctx.subject_iri == subject_iri for ctx in self._stack):
            raise CyclicReference(subject_iri, type_name)

        self._emit(subject_iri, RDF_TYPE, URIRef(rule.rdf_type))
        context = SubjectContext(subject_iri, type_name, rule)
        self._stack.append(context)
        logger.debug(f"Entered {type_name} <{subject_iri}> at depth {len(self._stack)}")
        return context

    def current(self) -> SubjectContext:
        """
        Return the innermost open subject.

        Raises:
            NoActiveSubject: If no record is being encoded
        """
        if not self._stack:
            raise NoActiveSubject()
        return self._stack[-1]

    def exit(self) -> SubjectContext:
        """Close the innermost subject and return its context."""
        if not self._stack:
            raise RuntimeError("exit() called on an empty subject context stack")
        context = self._stack.pop()
        logger.debug(f"Exited {context.type_name} <{context.subject_iri}>")
        return context
