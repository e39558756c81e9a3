"""
Structured values - the closed set of shapes the encoder understands.

A structured value is a tree built from six node kinds:

- Scalar: bool, int, float, str (a character is a one-character str) or bytes
- Unit: an absent value, never emitted
- Sequence: ordered list of structured values
- LangString: multilingual text, language code -> text
- Record: a named type with ordered (field name, value) pairs
- Variant: a named case of a sum type carrying zero or more values

Callers either build the tree directly or reflect ordinary Python objects
with from_python() (dataclasses, lists, dicts, enums) or decoded JSON
documents with from_json().
"""

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Mapping, Optional, Set, Tuple, Union

from ..constants import DEFAULT_MAX_DEPTH, IsoCode
from ..errors import MaxDepthExceeded, UnsupportedValueShape

logger = logging.getLogger(__name__)

ScalarType = Union[bool, int, float, str, bytes]

# JSON document keys with special meaning in from_json()
JSON_TYPE_KEY = "@type"
JSON_LANGUAGE_KEY = "@language"


@dataclass(frozen=True)
class Scalar:
    """A single primitive value."""
    value: ScalarType

    def __post_init__(self) -> None:
        if isinstance(self.value, bytearray):
            object.__setattr__(self, "value", bytes(self.value))
        if not isinstance(self.value, (bool, int, float, str, bytes)):
            raise UnsupportedValueShape(
                f"Scalar cannot hold {type(self.value).__name__} values"
            )
        if isinstance(self.value, str):
            _check_text(self.value, "Scalar text")


def _check_text(text: str, where: str) -> None:
    """Reject strings that cannot be written as UTF-8 (lone surrogates)."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise UnsupportedValueShape(
            f"{where} is not valid Unicode at position {e.start}: {text[e.start:e.end]!r}"
        ) from e


class UnitValue:
    """The absent value. Use the UNIT singleton."""

    _instance: Optional["UnitValue"] = None

    def __new__(cls) -> "UnitValue":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNIT"


UNIT = UnitValue()


@dataclass(frozen=True)
class Sequence:
    """An ordered list of structured values."""
    items: Tuple["StructuredValue", ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["StructuredValue"]:
        return iter(self.items)


@dataclass(frozen=True)
class LangString:
    """
    Multilingual text: one text per language code.

    Entries keep the order they were given in, so encoding the same value
    twice always emits the same triples in the same order.

    Example:
        >>> name = LangString.of({"en": "Bern", "fr": "Berne"})
        >>> [code.tag for code, _ in name.entries]
        ['en', 'fr']
    """
    entries: Tuple[Tuple[IsoCode, str], ...] = ()

    def __post_init__(self) -> None:
        for code, text in self.entries:
            where = f"Multilingual text entry '{IsoCode.parse(code).tag}'"
            if not isinstance(text, str):
                raise UnsupportedValueShape(
                    f"{where} must be a string, got {type(text).__name__}"
                )
            _check_text(text, where)

    @classmethod
    def of(cls, mapping: Mapping[Any, Any]) -> "LangString":
        """
        Build multilingual text from a mapping of language code to text.

        Args:
            mapping: Keys are IsoCode members or two-letter codes, values are str

        Returns:
            A LangString with the mapping's entries in iteration order

        Raises:
            UnknownLanguageCode: If a key is not a supported language code
            UnsupportedValueShape: If a value is not a string or not valid Unicode
        """
        return cls(tuple((IsoCode.parse(code), text) for code, text in mapping.items()))

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class Record:
    """A named type with ordered fields."""
    type_name: str
    fields: Tuple[Tuple[str, "StructuredValue"], ...] = ()

    def get(self, field_name: str) -> Optional["StructuredValue"]:
        """Return the value of a field, or None if the record has no such field."""
        for name, value in self.fields:
            if name == field_name:
                return value
        return None


@dataclass(frozen=True)
class Variant:
    """
    A case of a sum type.

    A variant without values is a unit variant and encodes as its tag; with
    one value it is transparent; with several it behaves as a positional
    sequence.
    """
    type_name: str
    tag: str
    values: Tuple["StructuredValue", ...] = ()


StructuredValue = Union[Scalar, UnitValue, Sequence, LangString, Record, Variant]

STRUCTURED_TYPES = (Scalar, UnitValue, Sequence, LangString, Record, Variant)


def is_structured(obj: Any) -> bool:
    """Check whether obj is already a structured value node."""
    return isinstance(obj, STRUCTURED_TYPES)


def from_python(obj: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> StructuredValue:
    """
    Reflect an ordinary Python object into a structured value.

    Mapping rules:
    - structured value nodes pass through unchanged
    - None -> UNIT
    - bool, int, float, str, bytes -> Scalar
    - dataclass instance -> Record named after its class, fields in declaration order
    - list, tuple -> Sequence
    - dict -> LangString (keys must be language codes)
    - Enum member -> unit Variant tagged with the member name

    Args:
        obj: The object to reflect
        max_depth: Maximum nesting of dataclasses and lists/tuples

    Returns:
        The structured value tree

    Raises:
        UnsupportedValueShape: For objects outside these rules or cyclic containers
        UnknownLanguageCode: For dict keys that are not language codes
        MaxDepthExceeded: If containers nest deeper than max_depth
    """
    return _reflect(obj, set(), 1, max_depth)


def _reflect(obj: Any, active: Set[int], depth: int, max_depth: int) -> StructuredValue:
    if is_structured(obj):
        return obj
    if obj is None:
        return UNIT
    if isinstance(obj, Enum):
        return Variant(type(obj).__name__, obj.name)
    if isinstance(obj, (bool, int, float, str, bytes, bytearray)):
        return Scalar(obj)
    if isinstance(obj, dict):
        return LangString.of(obj)

    is_dataclass = dataclasses.is_dataclass(obj) and not isinstance(obj, type)
    if not is_dataclass and not isinstance(obj, (list, tuple)):
        raise UnsupportedValueShape(
            f"Cannot reflect value of type {type(obj).__name__}"
        )

    # Containers on the current path; revisiting one means a reference cycle
    if id(obj) in active:
        raise UnsupportedValueShape(
            f"Cyclic reference through {type(obj).__name__} object"
        )
    if depth > max_depth:
        raise MaxDepthExceeded(max_depth, type(obj).__name__)

    active.add(id(obj))
    try:
        if is_dataclass:
            fields = tuple(
                (f.name, _reflect(getattr(obj, f.name), active, depth + 1, max_depth))
                for f in dataclasses.fields(obj)
            )
            return Record(type(obj).__name__, fields)
        return Sequence(tuple(_reflect(item, active, depth + 1, max_depth) for item in obj))
    finally:
        active.discard(id(obj))


def from_json(data: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> StructuredValue:
    """
    Reflect a decoded JSON document into a structured value.

    Objects use JSON-LD style keys:
    - {"@type": "Project", "id": "p-1", ...} is a Record; every other key,
      "@id" included, is a field in document order
    - {"@language": {"en": "Bern", "fr": "Berne"}} is multilingual text

    Arrays become sequences, null becomes UNIT, everything else a Scalar.

    Args:
        data: Output of json.load / json.loads
        max_depth: Maximum nesting of objects and arrays

    Returns:
        The structured value tree

    Raises:
        UnsupportedValueShape: For objects without "@type" or "@language"
        MaxDepthExceeded: If objects and arrays nest deeper than max_depth
    """
    return _from_json(data, 1, max_depth)


def _from_json(data: Any, depth: int, max_depth: int) -> StructuredValue:
    if data is None:
        return UNIT
    if isinstance(data, (list, dict)) and depth > max_depth:
        kind = "array" if isinstance(data, list) else str(data.get(JSON_TYPE_KEY, "object"))
        raise MaxDepthExceeded(max_depth, kind)
    if isinstance(data, list):
        return Sequence(tuple(_from_json(item, depth + 1, max_depth) for item in data))
    if isinstance(data, dict):
        if JSON_TYPE_KEY in data:
            type_name = data[JSON_TYPE_KEY]
            if not isinstance(type_name, str) or not type_name:
                raise UnsupportedValueShape(
                    f"'{JSON_TYPE_KEY}' must be a non-empty string, got {type_name!r}"
                )
            fields = tuple(
                (key, _from_json(value, depth + 1, max_depth))
                for key, value in data.items()
                if key != JSON_TYPE_KEY
            )
            return Record(type_name, fields)
        if set(data) == {JSON_LANGUAGE_KEY}:
            entries = data[JSON_LANGUAGE_KEY]
            if not isinstance(entries, dict):
                raise UnsupportedValueShape(
                    f"'{JSON_LANGUAGE_KEY}' must map language codes to text"
                )
            return LangString.of(entries)
        raise UnsupportedValueShape(
            f"JSON object needs '{JSON_TYPE_KEY}' or '{JSON_LANGUAGE_KEY}', "
            f"got keys: {sorted(data)}"
        )
    return Scalar(data)


def describe(value: StructuredValue) -> str:
    """Short human-readable name of a value's shape, for messages."""
    if isinstance(value, Record):
        return f"record '{value.type_name}'"
    if isinstance(value, Variant):
        return f"variant '{value.type_name}::{value.tag}'"
    if isinstance(value, Scalar):
        return f"scalar {type(value.value).__name__}"
    if isinstance(value, LangString):
        return "multilingual text"
    if isinstance(value, Sequence):
        return f"sequence of {len(value)}"
    if value is UNIT:
        return "unit"
    return type(value).__name__

