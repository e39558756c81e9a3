"""
Encoding result data types.

This module defines data structures for reporting what an encode call
produced: the serialized text, triple and subject counts, and the fields
that were deliberately not emitted.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class SkippedField:
    """
    A record field that produced no triple.

    Fields are skipped when no property rule maps them or when their value
    is unit (absent). Neither is an error.

    Attributes:
        type_name: Record type carrying the field.
        field_name: The skipped field.
        reason: Why no triple was emitted ("unmapped" or "unit").
        subject_iri: Subject the field belonged to.
    """
    type_name: str
    field_name: str
    reason: str
    subject_iri: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary format for serialization."""
        return {
            "type": self.type_name,
            "field": self.field_name,
            "reason": self.reason,
            "subject": self.subject_iri,
        }


@dataclass
class EncodingResult:
    """
    Results of one successful encode call.

    Attributes:
        text: The serialized triples.
        triple_count: Total triples emitted, rdf:type and link triples included.
        link_count: Triples linking a parent subject to a nested subject.
        subjects_by_type: Number of subjects emitted per record type.
        skipped_fields: Fields that produced no triple.
    """
    text: str = ""
    triple_count: int = 0
    link_count: int = 0
    subjects_by_type: Dict[str, int] = field(default_factory=dict)
    skipped_fields: List[SkippedField] = field(default_factory=list)

    @property
    def subject_count(self) -> int:
        """Total number of subjects emitted."""
        return sum(self.subjects_by_type.values())

    @property
    def has_skipped_fields(self) -> bool:
        return len(self.skipped_fields) > 0

    def get_summary(self) -> str:
        """
        Get a human-readable summary of the encoding.

        Returns:
            Summary string with subject and triple counts.
        """
        lines = [
            "Encoding Summary:",
            f"  Subjects: {self.subject_count}",
        ]
        for type_name, count in sorted(self.subjects_by_type.items()):
            lines.append(f"      - {type_name}: {count}")
        lines.append(f"  Triples: {self.triple_count} ({self.link_count} links)")

        if self.skipped_fields:
            lines.append(f"  Skipped fields: {len(self.skipped_fields)}")
            for item in self.skipped_fields[:5]:
                lines.append(f"      - {item.type_name}.{item.field_name} ({item.reason})")
            if len(self.skipped_fields) > 5:
                lines.append(f"      ... and {len(self.skipped_fields) - 5} more")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the counts (not the text) to dictionary format."""
        return {
            "triple_count": self.triple_count,
            "link_count": self.link_count,
            "subject_count": self.subject_count,
            "subjects_by_type": dict(self.subjects_by_type),
            "skipped_fields": [item.to_dict() for item in self.skipped_fields],
        }
