"""Configuration-driven encoder from structured values to RDF triples."""

__version__ = "1.0.0"
__author__ = "RDF Struct Encoder Contributors"

from .constants import IsoCode, RDF_TYPE, DEFAULT_MAX_DEPTH

from .errors import (
    EncodingError,
    ConfigurationError,
    MissingSubjectRule,
    UnknownLanguageCode,
    InvalidIdentifier,
    UnsupportedValueShape,
    NoActiveSubject,
    EmitterFailure,
    MaxDepthExceeded,
    CyclicReference,
)

from .models import (
    Scalar,
    UNIT,
    Sequence,
    LangString,
    Record,
    Variant,
    from_python,
    from_json,
    Literal,
    LiteralKind,
    LiteralMapper,
    MappingConfiguration,
    SubjectRule,
    PropertyRule,
    load_mapping_config,
    EncodingResult,
    SkippedField,
)

from .emitters import NTriplesEmitter, TurtleEmitter, TripleEmitter, create_emitter

from .encoding import StructuredValueEncoder, encode, encode_with_result

__all__ = [
    # Entry points
    "encode",
    "encode_with_result",
    "StructuredValueEncoder",
    # Values
    "Scalar",
    "UNIT",
    "Sequence",
    "LangString",
    "Record",
    "Variant",
    "from_python",
    "from_json",
    "IsoCode",
    # Literals
    "Literal",
    "LiteralKind",
    "LiteralMapper",
    # Configuration
    "MappingConfiguration",
    "SubjectRule",
    "PropertyRule",
    "load_mapping_config",
    # Emitters
    "TripleEmitter",
    "NTriplesEmitter",
    "TurtleEmitter",
    "create_emitter",
    # Results
    "EncodingResult",
    "SkippedField",
    # Errors
    "EncodingError",
    "ConfigurationError",
    "MissingSubjectRule",
    "UnknownLanguageCode",
    "InvalidIdentifier",
    "UnsupportedValueShape",
    "NoActiveSubject",
    "EmitterFailure",
    "MaxDepthExceeded",
    "CyclicReference",
    # Constants
    "RDF_TYPE",
    "DEFAULT_MAX_DEPTH",
]
