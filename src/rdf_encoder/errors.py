"""
Encoding errors.

Every failure raised while resolving configuration or traversing a value
derives from EncodingError, so callers can surface a single tagged failure.
Errors carry the type and field names needed to locate the configuration
defect, since an incomplete mapping is the usual cause.
"""

from typing import Optional


class EncodingError(Exception):
    """Base exception for all encoding failures.

    Attributes:
        type_name: Record type being encoded when the error occurred, if known
        field_name: Field being encoded when the error occurred, if known
    """

    def __init__(
        self,
        message: str,
        type_name: Optional[str] = None,
        field_name: Optional[str] = None,
    ):
        self.type_name = type_name
        self.field_name = field_name
        self.message = message
        super().__init__(message)


class ConfigurationError(EncodingError):
    """Raised when a mapping configuration is malformed or incomplete."""
    pass


class MissingSubjectRule(ConfigurationError):
    """Raised when a record type has no subject rule in the configuration."""

    def __init__(self, type_name: str):
        super().__init__(
            f"No subject rule configured for record type '{type_name}'",
            type_name=type_name,
        )


class UnknownLanguageCode(ConfigurationError):
    """Raised when a multilingual text entry uses an unsupported language code."""

    def __init__(self, code: object, type_name: Optional[str] = None, field_name: Optional[str] = None):
        self.code = code
        super().__init__(
            f"Unknown language code {code!r}",
            type_name=type_name,
            field_name=field_name,
        )


class InvalidIdentifier(EncodingError):
    """Raised when a record's identifier field is missing or not a literal."""

    def __init__(self, type_name: str, field_name: str, reason: str = "missing"):
        self.reason = reason
        super().__init__(
            f"Invalid identifier field '{field_name}' on '{type_name}': {reason}",
            type_name=type_name,
            field_name=field_name,
        )


class UnsupportedValueShape(EncodingError):
    """Raised when a value cannot be classified by the encoder."""
    pass


class NoActiveSubject(EncodingError):
    """Raised when a property is encountered outside of any record."""

    def __init__(self, field_name: Optional[str] = None):
        where = f" for field '{field_name}'" if field_name else ""
        super().__init__(
            f"No active subject{where}: properties must belong to a record",
            field_name=field_name,
        )


class EmitterFailure(EncodingError):
    """Raised when the triple emitter cannot format or flush a triple."""
    pass


class MaxDepthExceeded(EncodingError):
    """Raised when records or sequences nest deeper than the configured maximum."""

    def __init__(self, max_depth: int, type_name: Optional[str] = None):
        self.max_depth = max_depth
        where = f" while entering '{type_name}'" if type_name else ""
        super().__init__(
            f"Maximum nesting depth ({max_depth}) exceeded{where}",
            type_name=type_name,
        )


class CyclicReference(EncodingError):
    """Raised when a record is re-entered while it is still being encoded."""

    def __init__(self, subject_iri: str, type_name: Optional[str] = None):
        self.subject_iri = subject_iri
        super().__init__(
            f"Cyclic reference to <{subject_iri}> while encoding '{type_name}'",
            type_name=type_name,
        )
