"""
Mapping Resolver - turns type and field names into configured rules.

Given a record's type name the resolver returns its SubjectRule; given a
field of a resolved rule it says whether the field is the identifier, a
mapped property, or unmapped (silently ignored).
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import MissingSubjectRule
from ..models.config import MappingConfiguration, PropertyRule, SubjectRule

logger = logging.getLogger(__name__)


class FieldRole(Enum):
    """What a record field means to the encoder."""
    IDENTIFIER = "identifier"
    PROPERTY = "property"
    UNMAPPED = "unmapped"


@dataclass(frozen=True)
class FieldResolution:
    """Outcome of resolving one field; rule is set only for properties."""
    role: FieldRole
    rule: Optional[PropertyRule] = None


IDENTIFIER_FIELD = FieldResolution(FieldRole.IDENTIFIER)
UNMAPPED_FIELD = FieldResolution(FieldRole.UNMAPPED)


class MappingResolver:
    """
    Read-only view over a MappingConfiguration.

    Example:
        >>> resolver = MappingResolver(config)
        >>> rule = resolver.resolve_subject("Project")
        >>> resolver.resolve_field(rule, "id").role
        <FieldRole.IDENTIFIER: 'identifier'>
    """

    def __init__(self, config: MappingConfiguration):
        self.config = config

    def resolve_subject(self, type_name: str) -> SubjectRule:
        """
        Return the subject rule for a record type.

        Raises:
            MissingSubjectRule: If the type has no rule
        """
        rule = self.config.subjects.get(type_name)
        if rule is None:
            raise MissingSubjectRule(type_name)
        return rule

    @staticmethod
    def resolve_field(rule: SubjectRule, field_name: str) -> FieldResolution:
        """
        Classify a field of a record governed by rule.

        The identifier field always resolves as the identifier, even when a
        property rule also names it.
        """
        if field_name == rule.identifier_field:
            return IDENTIFIER_FIELD
        prop = rule.get_property(field_name)
        if prop is None:
            return UNMAPPED_FIELD
        return FieldResolution(FieldRole.PROPERTY, prop)

    def subject_iri(self, rule: SubjectRule, identifier: str) -> str:
        """
        Build the subject IRI for an identifier.

        The rule's identifier_prefix is used; when it is empty the
        configuration's base_iri takes its place.
        """
        prefix = rule.identifier_prefix or self.config.base_iri
        return f"{prefix}{identifier}"
