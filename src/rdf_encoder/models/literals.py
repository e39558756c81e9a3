"""
Literal Model - RDF literal forms and scalar-to-literal mapping.

This module represents the three RDF literal forms (simple, language-tagged,
datatyped) independently of the source value, and maps scalar structured
values to exactly one literal each.

Mapping table:
    bool              -> "true"/"false"^^xsd:boolean
    int               -> decimal^^xsd:integer
    float             -> decimal^^xsd:double (INF, -INF, NaN for specials)
    str               -> text^^xsd:string
    bytes             -> base64^^xsd:base64Binary
    multilingual text -> one "text"@lang per entry
    unit              -> no literal
"""

import base64
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Type

from rdflib import Literal as RDFLiteral, URIRef, XSD

from ..constants import IsoCode
from ..errors import UnsupportedValueShape
from .values import LangString, Scalar, StructuredValue, UNIT, Variant, describe

logger = logging.getLogger(__name__)

# Python scalar type to XSD datatype IRI. bool must be checked before int.
PYTHON_TO_XSD_TYPE: Dict[Type, str] = {
    bool: str(XSD.boolean),
    int: str(XSD.integer),
    float: str(XSD.double),
    str: str(XSD.string),
    bytes: str(XSD.base64Binary),
}


class LiteralKind(Enum):
    """The three RDF literal forms."""
    SIMPLE = "simple"
    LANGUAGE_TAGGED = "language_tagged"
    TYPED = "typed"


@dataclass(frozen=True)
class Literal:
    """
    An RDF literal occupying an object position.

    Attributes:
        value: The lexical form
        kind: Which of the three literal forms this is
        language: Language tag, for language-tagged strings
        datatype: Datatype IRI, for typed literals
    """
    value: str
    kind: LiteralKind = LiteralKind.SIMPLE
    language: Optional[str] = None
    datatype: Optional[str] = None

    @classmethod
    def simple(cls, value: str) -> "Literal":
        return cls(value)

    @classmethod
    def language_tagged(cls, value: str, language: str) -> "Literal":
        return cls(value, LiteralKind.LANGUAGE_TAGGED, language=language)

    @classmethod
    def typed(cls, value: str, datatype: str) -> "Literal":
        return cls(value, LiteralKind.TYPED, datatype=datatype)

    def to_rdflib(self) -> RDFLiteral:
        """Convert to an rdflib Literal, keeping the lexical form as-is."""
        if self.kind is LiteralKind.LANGUAGE_TAGGED:
            return RDFLiteral(self.value, lang=self.language)
        if self.kind is LiteralKind.TYPED:
            return RDFLiteral(self.value, datatype=URIRef(self.datatype), normalize=False)
        return RDFLiteral(self.value)


class LiteralMapper:
    """
    Maps scalar structured values to RDF literals.

    Pure functions of the value: no state, no side effects.

    Example:
        >>> LiteralMapper.from_scalar(Scalar(True)).value
        'true'
        >>> LiteralMapper.from_scalar(Scalar(42)).datatype
        'http://www.w3.org/2001/XMLSchema#integer'
    """

    @staticmethod
    def get_xsd_type(python_type: Type) -> str:
        """
        Map a Python scalar type to its XSD datatype IRI.

        Args:
            python_type: One of bool, int, float, str, bytes

        Returns:
            The XSD datatype IRI string

        Raises:
            UnsupportedValueShape: For types outside the fixed scalar set
        """
        for scalar_type, xsd_type in PYTHON_TO_XSD_TYPE.items():
            if issubclass(python_type, scalar_type):
                return xsd_type
        raise UnsupportedValueShape(f"No XSD datatype for {python_type.__name__}")

    @staticmethod
    def lexical_form(value) -> str:
        """Canonical lexical form of a scalar for its XSD datatype."""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            if math.isnan(value):
                return "NaN"
            if math.isinf(value):
                return "INF" if value > 0 else "-INF"
            return repr(value)
        if isinstance(value, bytes):
            return base64.b64encode(value).decode("ascii")
        return value

    @classmethod
    def from_scalar(cls, scalar: Scalar) -> Literal:
        """
        Produce the single literal for a scalar value.

        Args:
            scalar: The scalar to map

        Returns:
            A typed literal carrying the scalar's lexical form
        """
        value = scalar.value
        return Literal.typed(cls.lexical_form(value), cls.get_xsd_type(type(value)))

    @staticmethod
    def from_lang_string(text: LangString) -> List[Literal]:
        """
        Produce one language-tagged literal per multilingual text entry.

        Args:
            text: The multilingual text

        Returns:
            Literals in entry order
        """
        return [
            Literal.language_tagged(value, IsoCode.parse(code).tag)
            for code, value in text.entries
        ]

    @classmethod
    def literals_for(cls, value: StructuredValue) -> List[Literal]:
        """
        Produce the literals for a literal-like value.

        Scalars produce one literal, multilingual text one per entry, unit
        variants one string literal of their tag, unit nothing.

        Args:
            value: A scalar, multilingual text, unit variant or unit

        Returns:
            The literals, possibly empty

        Raises:
            UnsupportedValueShape: If the value is not literal-like
        """
        if value is UNIT:
            return []
        if isinstance(value, Scalar):
            return [cls.from_scalar(value)]
        if isinstance(value, LangString):
            return cls.from_lang_string(value)
        if isinstance(value, Variant):
            if not value.values:
                return [Literal.typed(value.tag, str(XSD.string))]
            if len(value.values) == 1:
                return cls.literals_for(value.values[0])
        raise UnsupportedValueShape(f"Cannot produce a literal from {describe(value)}")
