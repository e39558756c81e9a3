"""
Structured-Value Encoder - walks a value and emits its triples.

Traversal is depth-first and driven by the shape of the value:

1. A record resolves its identifier to one literal and enters a subject,
   which emits the rdf:type triple before any property.
2. Each remaining field, in declaration order:
   - the identifier field and unmapped fields are skipped
   - scalars and multilingual text emit one triple per literal
   - sequences emit one triple per element (flattened) for literals, and
     for records encode each element then emit one link triple to it
   - a nested record is fully encoded first, then linked from the parent
3. The record's subject is exited.

Variants are transparent when they carry one value, behave as a positional
sequence when they carry several, and encode as their tag when they carry
none.

Any error aborts the whole call; no partial text is ever returned.
"""

import logging
from typing import Any, List, Optional

from rdflib import URIRef

from ..constants import DEFAULT_MAX_DEPTH
from ..emitters import BaseEmitter, TripleEmitter, TripleObject, create_emitter
from ..errors import (
    EncodingError,
    InvalidIdentifier,
    MaxDepthExceeded,
    NoActiveSubject,
    UnsupportedValueShape,
)
from ..models.config import MappingConfiguration, PropertyRule
from ..models.literals import Literal, LiteralMapper
from ..models.result import EncodingResult, SkippedField
from ..models.values import (
    LangString,
    Record,
    Sequence,
    StructuredValue,
    UNIT,
    Variant,
    describe,
    from_python,
)
from .context import SubjectContext, SubjectContextStack
from .resolver import FieldRole, MappingResolver

logger = logging.getLogger(__name__)


class StructuredValueEncoder:
    """
    Encodes structured values into RDF triples using a mapping configuration.

    An encoder owns its emitter and subject stack, so each instance encodes
    exactly one value. The configuration is only read and may be shared
    between encoders running concurrently.

    Example:
        >>> encoder = StructuredValueEncoder(config)
        >>> result = encoder.encode(Record("Test", (("id", Scalar("my-id")),)))
        >>> result.triple_count
        1
    """

    def __init__(
        self,
        config: MappingConfiguration,
        emitter: Optional[TripleEmitter] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        """
        Initialize the encoder.

        Args:
            config: Mapping configuration describing every record type
            emitter: Triple sink; defaults to an N-Triples emitter
            max_depth: Maximum nesting depth, counting records and sequences
        """
        self.config = config
        self.max_depth = max_depth
        self.resolver = MappingResolver(config)
        self.emitter = emitter if emitter is not None else create_emitter()
        self.stack = SubjectContextStack(self.resolver, self._emit, max_depth)
        self.result = EncodingResult()
        self._sequence_depth = 0
        self._used = False

    def encode(self, value: Any) -> EncodingResult:
        """
        Encode a value and return the serialized triples with statistics.

        Args:
            value: A structured value, or a Python object accepted by from_python()

        Returns:
            EncodingResult whose text holds every emitted triple

        Raises:
            EncodingError: On the first configuration or value defect
            RuntimeError: If the encoder was already used
        """
        if self._used:
            raise RuntimeError("StructuredValueEncoder instances encode a single value")
        self._used = True

        self._encode_top(from_python(value, self.max_depth))

        if not self.stack.is_empty:
            raise RuntimeError(
                f"Subject context stack not empty after encoding ({len(self.stack)} open)"
            )

        self.result.text = self.emitter.finish()
        logger.info(
            f"Encoded {self.result.subject_count} subjects into "
            f"{self.result.triple_count} triples"
        )
        return self.result

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _encode_top(self, value: StructuredValue) -> None:
        value = self._unwrap(value)
        if value is UNIT:
            logger.debug("Top-level value is unit, nothing to encode")
        elif isinstance(value, Record):
            self._encode_record(value)
        elif isinstance(value, Sequence):
            self._enter_sequence(value)
            for item in value:
                self._encode_top(item)
            self._sequence_depth -= 1
        else:
            # A literal outside any record has no subject to attach to
            raise NoActiveSubject()

    def _encode_record(self, record: Record) -> str:
        """Encode a record and its nested records, returning its subject IRI."""
        rule = self.resolver.resolve_subject(record.type_name)
        identifier = self._identifier_literal(record, rule.identifier_field)
        if self._nesting() >= self.max_depth:
            raise MaxDepthExceeded(self.max_depth, record.type_name)

        context = self.stack.enter(record.type_name, identifier.value)
        counts = self.result.subjects_by_type
        counts[record.type_name] = counts.get(record.type_name, 0) + 1

        for field_name, field_value in record.fields:
            resolution = self.resolver.resolve_field(context.rule, field_name)
            if resolution.role is FieldRole.IDENTIFIER:
                continue
            if resolution.role is FieldRole.UNMAPPED:
                self._skip(context, field_name, "unmapped")
                continue
            try:
                self._encode_property(resolution.rule, field_value)
            except EncodingError as e:
                if e.type_name is None and e.field_name is None:
                    e.type_name = record.type_name
                    e.field_name = field_name
                raise

        self.stack.exit()
        return context.subject_iri

    def _encode_property(self, prop: PropertyRule, value: StructuredValue) -> None:
        value = self._unwrap(value)

        if value is UNIT:
            self._skip(self.stack.current(), prop.field_name, "unit")
        elif isinstance(value, Record):
            child_iri = self._encode_record(value)
            # Parent context is current again once the child has exited
            parent = self.stack.current()
            self._emit(parent.subject_iri, prop.predicate_iri, URIRef(child_iri))
            self.result.link_count += 1
        elif isinstance(value, Sequence):
            self._enter_sequence(value)
            for item in value:
                self._encode_property(prop, item)
            self._sequence_depth -= 1
        else:
            subject_iri = self.stack.current().subject_iri
            for literal in LiteralMapper.literals_for(value):
                self._emit(subject_iri, prop.predicate_iri, literal)

    @staticmethod
    def _unwrap(value: StructuredValue) -> StructuredValue:
        """Reduce newtype variants to their value and tuple variants to sequences."""
        while isinstance(value, Variant) and value.values:
            if len(value.values) == 1:
                value = value.values[0]
            else:
                value = Sequence(value.values)
        return value

    def _nesting(self) -> int:
        """Open records plus open sequences on the current path."""
        return len(self.stack) + self._sequence_depth

    def _enter_sequence(self, value: Sequence) -> None:
        if self._nesting() >= self.max_depth:
            raise MaxDepthExceeded(self.max_depth)
        self._sequence_depth += 1

    @staticmethod
    def _identifier_literal(record: Record, field_name: str) -> Literal:
        value = record.get(field_name)
        if value is None:
            raise InvalidIdentifier(record.type_name, field_name, "field is missing")

        value = StructuredValueEncoder._unwrap(value)
        if value is UNIT:
            raise InvalidIdentifier(record.type_name, field_name, "value is unit")
        if isinstance(value, (Record, Sequence, LangString)):
            raise InvalidIdentifier(
                record.type_name, field_name, f"{describe(value)} is not a scalar"
            )
        try:
            literals: List[Literal] = LiteralMapper.literals_for(value)
        except UnsupportedValueShape as e:
            raise InvalidIdentifier(record.type_name, field_name, e.message) from e

        if len(literals) != 1 or not literals[0].value:
            raise InvalidIdentifier(record.type_name, field_name, "identifier is empty")
        return literals[0]

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def _emit(self, subject: str, predicate: str, obj: TripleObject) -> None:
        self.emitter.format(subject, predicate, obj)
        self.result.triple_count += 1

    def _skip(self, context: SubjectContext, field_name: str, reason: str) -> None:
        logger.debug(f"Skipping {context.type_name}.{field_name} ({reason})")
        self.result.skipped_fields.append(
            SkippedField(context.type_name, field_name, reason, context.subject_iri)
        )


def encode_with_result(
    value: Any,
    config: MappingConfiguration,
    *,
    output_format: str = "nt",
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> EncodingResult:
    """
    Encode a value and return the text together with encoding statistics.

    Args:
        value: Structured value or Python object accepted by from_python()
        config: Mapping configuration
        output_format: "nt" (default) or "turtle"
        max_depth: Maximum nesting depth, counting records and sequences

    Returns:
        EncodingResult
    """
    emitter: BaseEmitter = create_emitter(output_format, config.namespaces)
    return StructuredValueEncoder(config, emitter, max_depth).encode(value)


def encode(
    value: Any,
    config: MappingConfiguration,
    *,
    output_format: str = "nt",
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    """
    Encode a value into RDF text.

    Args:
        value: Structured value or Python object accepted by from_python()
        config: Mapping configuration
        output_format: "nt" (default) or "turtle"
        max_depth: Maximum nesting depth, counting records and sequences

    Returns:
        The serialized triples

    Raises:
        EncodingError: On the first configuration or value defect
    """
    return encode_with_result(
        value, config, output_format=output_format, max_depth=max_depth
    ).text
