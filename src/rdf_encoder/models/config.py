"""
Mapping Configuration - how record types map onto an RDF vocabulary.

A MappingConfiguration holds one SubjectRule per record type name. Each
rule names the RDF class, the field supplying the subject identifier, the
IRI prefix for that identifier and the PropertyRules mapping fields to
predicates.

Configurations are immutable once built so a single instance can be shared
by any number of concurrent encode calls.

Usage:
    config = MappingConfiguration.from_dict({
        "base_iri": "",
        "namespaces": {"ex": "https://example.org/ns#"},
        "subjects": {
            "Test": {
                "rdf_type": "https://example.org/ns#Test",
                "identifier_field": "id",
                "identifier_prefix": "https://ark.example/ark:/1/",
                "properties": [
                    {"field_name": "name", "predicate_iri": "https://example.org/ns#hasName"}
                ]
            }
        }
    })
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropertyRule:
    """Maps one record field to the predicate emitted for it."""
    field_name: str
    predicate_iri: str

    def to_dict(self) -> Dict[str, str]:
        return {"field_name": self.field_name, "predicate_iri": self.predicate_iri}


@dataclass(frozen=True)
class SubjectRule:
    """
    Describes how instances of one record type become RDF subjects.

    Attributes:
        type_name: Record type name this rule applies to
        rdf_type: IRI of the RDF class emitted with rdf:type
        identifier_field: Field supplying the subject's local identifier
        identifier_prefix: IRI prefix prepended to the identifier
        properties: Field to predicate rules, in emission order
    """
    type_name: str
    rdf_type: str
    identifier_field: str
    identifier_prefix: str = ""
    properties: Tuple[PropertyRule, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", tuple(self.properties))
        seen = set()
        for prop in self.properties:
            if prop.field_name in seen:
                raise ConfigurationError(
                    f"Duplicate property rule for field '{prop.field_name}' "
                    f"in subject rule '{self.type_name}'",
                    type_name=self.type_name,
                    field_name=prop.field_name,
                )
            seen.add(prop.field_name)
        if self.identifier_field in seen:
            logger.warning(
                f"Subject rule '{self.type_name}' lists identifier field "
                f"'{self.identifier_field}' as a property; it will only be used as the identifier"
            )

    def get_property(self, field_name: str) -> Optional[PropertyRule]:
        """Return the property rule for a field, or None if the field is unmapped."""
        for prop in self.properties:
            if prop.field_name == field_name:
                return prop
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type_name": self.type_name,
            "rdf_type": self.rdf_type,
            "identifier_field": self.identifier_field,
            "identifier_prefix": self.identifier_prefix,
            "properties": [p.to_dict() for p in self.properties],
        }


@dataclass(frozen=True)
class MappingConfiguration:
    """
    Complete mapping from record types to RDF subjects.

    Attributes:
        base_iri: Default IRI prefix, used when a rule's identifier_prefix is empty
        namespaces: Prefix to IRI bindings, for display in Turtle output
        subjects: Record type name to SubjectRule
    """
    base_iri: str = ""
    namespaces: Mapping[str, str] = field(default_factory=dict)
    subjects: Mapping[str, SubjectRule] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "namespaces", MappingProxyType(dict(self.namespaces)))
        object.__setattr__(self, "subjects", MappingProxyType(dict(self.subjects)))
        for key, rule in self.subjects.items():
            if key != rule.type_name:
                raise ConfigurationError(
                    f"Subject key '{key}' does not match rule type name '{rule.type_name}'",
                    type_name=key,
                )

    @classmethod
    def from_rules(
        cls,
        rules: Iterable[SubjectRule],
        base_iri: str = "",
        namespaces: Optional[Mapping[str, str]] = None,
    ) -> "MappingConfiguration":
        """Build a configuration keyed by each rule's type name."""
        return cls(
            base_iri=base_iri,
            namespaces=namespaces or {},
            subjects={rule.type_name: rule for rule in rules},
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MappingConfiguration":
        """
        Build a configuration from a decoded mapping document.

        Args:
            data: Dictionary with optional "base_iri" and "namespaces" and a
                "subjects" object keyed by record type name

        Returns:
            The validated configuration

        Raises:
            ConfigurationError: If the document is structurally invalid
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Mapping document must be a JSON object, got {type(data).__name__}"
            )

        base_iri = _expect_str(data.get("base_iri", ""), "base_iri")

        namespaces = data.get("namespaces", {}) or {}
        if not isinstance(namespaces, Mapping):
            raise ConfigurationError("'namespaces' must be an object of prefix -> IRI")
        for prefix, iri in namespaces.items():
            _expect_str(iri, f"namespaces.{prefix}")

        subjects_data = data.get("subjects")
        if not isinstance(subjects_data, Mapping):
            raise ConfigurationError("'subjects' must be an object keyed by record type name")

        subjects = {
            type_name: _subject_rule_from_dict(type_name, rule_data)
            for type_name, rule_data in subjects_data.items()
        }
        return cls(base_iri=base_iri, namespaces=dict(namespaces), subjects=subjects)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the mapping document format accepted by from_dict()."""
        return {
            "base_iri": self.base_iri,
            "namespaces": dict(self.namespaces),
            "subjects": {name: rule.to_dict() for name, rule in self.subjects.items()},
        }

    def get_summary(self) -> str:
        """Human-readable summary of the configured subjects."""
        lines = [
            "Mapping Summary:",
            f"  Subjects: {len(self.subjects)}",
            f"  Namespaces: {len(self.namespaces)}",
        ]
        for name, rule in self.subjects.items():
            lines.append(f"    - {name} -> <{rule.rdf_type}> ({len(rule.properties)} properties)")
        return "\n".join(lines)


def _expect_str(value: Any, location: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(
            f"'{location}' must be a string, got {type(value).__name__}"
        )
    return value


def _subject_rule_from_dict(type_name: str, data: Any) -> SubjectRule:
    if not isinstance(data, Mapping):
        raise ConfigurationError(
            f"Subject rule '{type_name}' must be an object", type_name=type_name
        )

    for required in ("rdf_type", "identifier_field"):
        if required not in data:
            raise ConfigurationError(
                f"Subject rule '{type_name}' is missing '{required}'", type_name=type_name
            )

    declared_name = _expect_str(data.get("type_name", type_name), f"subjects.{type_name}.type_name")

    properties_data = data.get("properties", []) or []
    if not isinstance(properties_data, list):
        raise ConfigurationError(
            f"'subjects.{type_name}.properties' must be a list", type_name=type_name
        )

    properties = []
    for index, prop in enumerate(properties_data):
        location = f"subjects.{type_name}.properties[{index}]"
        if not isinstance(prop, Mapping):
            raise ConfigurationError(f"'{location}' must be an object", type_name=type_name)
        for required in ("field_name", "predicate_iri"):
            if required not in prop:
                raise ConfigurationError(
                    f"'{location}' is missing '{required}'", type_name=type_name
                )
        properties.append(PropertyRule(
            field_name=_expect_str(prop["field_name"], f"{location}.field_name"),
            predicate_iri=_expect_str(prop["predicate_iri"], f"{location}.predicate_iri"),
        ))

    return SubjectRule(
        type_name=declared_name,
        rdf_type=_expect_str(data["rdf_type"], f"subjects.{type_name}.rdf_type"),
        identifier_field=_expect_str(data["identifier_field"], f"subjects.{type_name}.identifier_field"),
        identifier_prefix=_expect_str(
            data.get("identifier_prefix", ""), f"subjects.{type_name}.identifier_prefix"
        ),
        properties=tuple(properties),
    )


def load_mapping_config(
    config_path: Union[str, Path],
    encoding: str = "utf-8",
) -> MappingConfiguration:
    """
    Load a mapping configuration from a JSON file.

    Args:
        config_path: Path to the mapping document
        encoding: File encoding (default utf-8)

    Returns:
        The validated configuration

    Raises:
        ValueError: If config_path is empty
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the file is not valid JSON or not a valid mapping
    """
    if not config_path:
        raise ValueError("config_path cannot be empty")

    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(f"Mapping file not found: {config_path}")

    try:
        with open(path, "r", encoding=encoding) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in mapping file {path} at line {e.lineno}, column {e.colno}: {e.msg}"
        ) from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"File encoding error in {path}: {e}") from e

    config = MappingConfiguration.from_dict(data)
    logger.debug(f"Loaded mapping with {len(config.subjects)} subject rules from {path}")
    return config
