"""
Data models for the RDF encoder.

- values: the structured value tree and reflection helpers
- literals: RDF literal forms and scalar-to-literal mapping
- config: mapping configuration (subject and property rules)
- result: encoding result reporting
"""

from .values import (
    Scalar,
    UnitValue,
    UNIT,
    Sequence,
    LangString,
    Record,
    Variant,
    StructuredValue,
    from_python,
    from_json,
)
from .literals import Literal, LiteralKind, LiteralMapper
from .config import (
    MappingConfiguration,
    SubjectRule,
    PropertyRule,
    load_mapping_config,
)
from .result import EncodingResult, SkippedField

__all__ = [
    # Values
    "Scalar",
    "UnitValue",
    "UNIT",
    "Sequence",
    "LangString",
    "Record",
    "Variant",
    "StructuredValue",
    "from_python",
    "from_json",
    # Literals
    "Literal",
    "LiteralKind",
    "LiteralMapper",
    # Configuration
    "MappingConfiguration",
    "SubjectRule",
    "PropertyRule",
    "load_mapping_config",
    # Results
    "EncodingResult",
    "SkippedField",
]
