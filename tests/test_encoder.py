"""
Unit tests for the structured-value encoder.

Run with: python -m pytest tests/test_encoder.py -v
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

import pytest
from rdflib import Graph, Literal as RDFLiteral, RDF, URIRef, XSD

from conftest import ARK, NS
from rdf_encoder import (
    UNIT,
    CyclicReference,
    EmitterFailure,
    InvalidIdentifier,
    LangString,
    MappingConfiguration,
    MaxDepthExceeded,
    MissingSubjectRule,
    NoActiveSubject,
    PropertyRule,
    Record,
    Scalar,
    Sequence,
    StructuredValueEncoder,
    SubjectRule,
    Variant,
    encode,
    encode_with_result,
    from_json,
)

RDF_TYPE_IRI = "<http://www.w3.org/1999/02/22-rdf-syntax-ns#type>"


def record(type_name, **fields):
    """Build a Record, wrapping plain Python scalars."""
    return Record(type_name, tuple(
        (name, value if not isinstance(value, (str, int, float, bytes)) else Scalar(value))
        for name, value in fields.items()
    ))


def nested_sequence(depth):
    """Build a one-element sequence wrapped depth times, without recursion."""
    value = Scalar("x")
    for _ in range(depth):
        value = Sequence((value,))
    return value


def parse(text):
    graph = Graph()
    graph.parse(data=text, format="nt")
    return graph


@pytest.mark.unit
class TestBasicEncoding:
    """Subject identity and rdf:type emission."""

    def test_single_record_emits_one_type_triple(self, simple_config):
        """A record with only an identifier produces exactly its rdf:type triple."""
        text = encode(record("Test", id="my-id"), simple_config)

        expected = (
            "<https://ark.example/ark:/1/my-id> "
            "<http://www.w3.org/1999/02/22-rdf-syntax-ns#type> "
            "<https://example.org/ns#Test> .\n"
        )
        assert text == expected

    def test_base_iri_used_when_prefix_empty(self):
        """An empty identifier_prefix falls back to the configuration's base_iri."""
        config = MappingConfiguration.from_rules(
            [SubjectRule("Test", "https://example.org/ns#Test", "id")],
            base_iri="https://base.example/",
        )
        text = encode(record("Test", id="x"), config)
        assert text.startswith("<https://base.example/x> ")

    def test_identifier_not_emitted_as_property(self):
        """An identifier field listed among the properties only seeds the subject."""
        config = MappingConfiguration.from_rules([
            SubjectRule(
                "Test", "https://example.org/ns#Test", "id", "https://example.org/t/",
                properties=(PropertyRule("id", "https://example.org/ns#id"),),
            )
        ])
        result = encode_with_result(record("Test", id="a"), config)
        assert result.triple_count == 1
        assert "https://example.org/ns#id" not in result.text

    def test_integer_identifier(self, simple_config):
        """Non-string scalar identifiers use their lexical form."""
        text = encode(record("Test", id=42), simple_config)
        assert text.startswith("<https://ark.example/ark:/1/42> ")

    def test_encoding_is_idempotent(self, project_config):
        """Encoding the same value twice gives byte-identical output."""
        value = record(
            "Project",
            id="p-1",
            name=LangString.of({"en": "Bern", "fr": "Berne", "de": "Bern"}),
            keywords=Sequence((Scalar("music"), Scalar("history"))),
            datasets=Sequence((record("Dataset", id="d-1"), record("Dataset", id="d-2"))),
        )
        assert encode(value, project_config) == encode(value, project_config)


@pytest.mark.unit
class TestPropertyEncoding:
    """Literal properties, flattening and linking."""

    def test_multilingual_text_flattens(self, project_config):
        """Each language entry becomes its own language-tagged triple."""
        value = record("Project", id="p-1", name=LangString.of({"en": "Bern", "fr": "Berne"}))
        lines = encode(value, project_config).splitlines()

        subject = f"<{ARK}p-1>"
        assert lines[1] == f'{subject} <{NS}hasName> "Bern"@en .'
        assert lines[2] == f'{subject} <{NS}hasName> "Berne"@fr .'
        assert len(lines) == 3

    def test_scalar_sequence_flattens(self, project_config):
        """A sequence of n scalars gives n triples sharing subject and predicate."""
        keywords = Sequence(tuple(Scalar(k) for k in ("a", "b", "c")))
        text = encode(record("Project", id="p-1", keywords=keywords), project_config)

        graph = parse(text)
        objects = list(graph.objects(URIRef(f"{ARK}p-1"), URIRef(f"{NS}hasKeyword")))
        assert len(objects) == 3
        assert RDFLiteral("b", datatype=XSD.string) in objects

    def test_typed_scalars(self):
        """Booleans, integers and floats carry their XSD datatypes."""
        ex = "https://example.org/ns#"
        config = MappingConfiguration.from_rules([
            SubjectRule(
                "Thing", f"{ex}Thing", "id", "https://example.org/thing/",
                properties=(
                    PropertyRule("active", f"{ex}active"),
                    PropertyRule("count", f"{ex}count"),
                    PropertyRule("ratio", f"{ex}ratio"),
                ),
            )
        ])
        value = Record("Thing", (
            ("id", Scalar("t")),
            ("active", Scalar(True)),
            ("count", Scalar(7)),
            ("ratio", Scalar(0.5)),
        ))
        graph = parse(encode(value, config))
        subject = URIRef("https://example.org/thing/t")

        assert (subject, URIRef(f"{ex}active"), RDFLiteral("true", datatype=XSD.boolean)) in graph
        assert (subject, URIRef(f"{ex}count"), RDFLiteral("7", datatype=XSD.integer)) in graph
        assert (subject, URIRef(f"{ex}ratio"), RDFLiteral("0.5", datatype=XSD.double)) in graph

    def test_nested_record_type_before_link(self, project_config):
        """A nested record's rdf:type triple precedes the parent's link to it."""
        value = record("Project", id="p-1", datasets=record("Dataset", id="d-1"))
        lines = encode(value, project_config).splitlines()

        assert lines == [
            f"<{ARK}p-1> {RDF_TYPE_IRI} <{NS}Project> .",
            f"<{ARK}d-1> {RDF_TYPE_IRI} <{NS}Dataset> .",
            f"<{ARK}p-1> <{NS}hasDataset> <{ARK}d-1> .",
        ]

    def test_record_sequence_links_each_element(self, project_config):
        """n nested records give n link triples plus each record's own triples."""
        datasets = Sequence(tuple(
            record("Dataset", id=f"d-{i}", title=f"Title {i}") for i in range(3)
        ))
        result = encode_with_result(record("Project", id="p-1", datasets=datasets), project_config)
        lines = result.text.splitlines()

        assert result.link_count == 3
        assert result.subjects_by_type == {"Project": 1, "Dataset": 3}
        # 1 project type + 3 * (type + title) + 3 links
        assert result.triple_count == 10
        for i in range(3):
            type_line = lines.index(f"<{ARK}d-{i}> {RDF_TYPE_IRI} <{NS}Dataset> .")
            link_line = lines.index(f"<{ARK}p-1> <{NS}hasDataset> <{ARK}d-{i}> .")
            assert type_line < link_line

    def test_link_order_follows_element_order(self, project_config):
        """Link triples appear in sequence order."""
        datasets = Sequence((record("Dataset", id="b"), record("Dataset", id="a")))
        lines = encode(record("Project", id="p", datasets=datasets), project_config).splitlines()
        links = [line for line in lines if f"<{NS}hasDataset>" in line]
        assert links == [
            f"<{ARK}p> <{NS}hasDataset> <{ARK}b> .",
            f"<{ARK}p> <{NS}hasDataset> <{ARK}a> .",
        ]

    def test_unmapped_field_ignored(self, project_config):
        """Fields without a property rule are skipped and reported."""
        value = record("Project", id="p-1", internal_note="not for RDF")
        result = encode_with_result(value, project_config)

        assert result.triple_count == 1
        assert "not for RDF" not in result.text
        assert [(s.field_name, s.reason) for s in result.skipped_fields] == [
            ("internal_note", "unmapped")
        ]

    def test_unit_field_omitted(self, project_config):
        """Unit-valued fields emit nothing."""
        value = Record("Project", (("id", Scalar("p-1")), ("shortcode", UNIT)))
        result = encode_with_result(value, project_config)

        assert result.triple_count == 1
        assert result.skipped_fields[0].reason == "unit"


@pytest.mark.unit
class TestVariants:
    """Tagged variant handling."""

    @pytest.fixture
    def config(self):
        return MappingConfiguration.from_rules([
            SubjectRule(
                "Item", "https://example.org/ns#Item", "id", "https://example.org/item/",
                properties=(PropertyRule("status", "https://example.org/ns#status"),),
            )
        ])

    def test_unit_variant_encodes_tag(self, config):
        value = Record("Item", (("id", Scalar("i")), ("status", Variant("Status", "Active"))))
        graph = parse(encode(value, config))
        assert RDFLiteral("Active", datatype=XSD.string) in set(graph.objects())

    def test_newtype_variant_is_transparent(self, config):
        value = Record("Item", (
            ("id", Scalar("i")),
            ("status", Variant("Status", "Code", (Scalar(3),))),
        ))
        graph = parse(encode(value, config))
        assert RDFLiteral("3", datatype=XSD.integer) in set(graph.objects())

    def test_tuple_variant_flattens(self, config):
        value = Record("Item", (
            ("id", Scalar("i")),
            ("status", Variant("Status", "Pair", (Scalar("x"), Scalar("y")))),
        ))
        result = encode_with_result(value, config)
        assert result.triple_count == 3


@pytest.mark.unit
class TestEncodingErrors:
    """Failure classification; no partial output is returned."""

    def test_missing_subject_rule(self, project_config):
        """A nested type absent from the mapping fails the whole call."""
        value = record("Project", id="p-1", datasets=record("Unknown", id="u"))
        with pytest.raises(MissingSubjectRule) as exc_info:
            encode(value, project_config)
        assert exc_info.value.type_name == "Unknown"

    def test_missing_top_level_rule(self, simple_config):
        with pytest.raises(MissingSubjectRule, match="Other"):
            encode(record("Other", id="x"), simple_config)

    def test_missing_identifier_field(self, simple_config):
        with pytest.raises(InvalidIdentifier) as exc_info:
            encode(record("Test", name="no id"), simple_config)
        assert exc_info.value.type_name == "Test"
        assert exc_info.value.field_name == "id"

    @pytest.mark.parametrize("bad_id", [
        UNIT,
        Sequence((Scalar("a"),)),
        LangString.of({"en": "x"}),
        Record("Test", (("id", Scalar("inner")),)),
        Scalar(""),
    ])
    def test_non_literal_identifier(self, simple_config, bad_id):
        with pytest.raises(InvalidIdentifier):
            encode(Record("Test", (("id", bad_id),)), simple_config)

    def test_top_level_scalar_has_no_subject(self, simple_config):
        with pytest.raises(NoActiveSubject):
            encode(Scalar("loose"), simple_config)

    def test_top_level_lang_string_has_no_subject(self, simple_config):
        with pytest.raises(NoActiveSubject):
            encode(LangString.of({"en": "loose"}), simple_config)

    def test_invalid_iri_is_emitter_failure(self, simple_config):
        """An identifier producing an unserializable IRI surfaces as EmitterFailure."""
        with pytest.raises(EmitterFailure):
            encode(record("Test", id="has space"), simple_config)

    def test_field_context_attached(self, project_config):
        """Errors raised while encoding a field name the record and field."""
        value = record("Project", id="p-1", name=record("Dataset", id="bad id"))
        with pytest.raises(EmitterFailure) as exc_info:
            encode(value, project_config)
        assert exc_info.value.field_name == "name"
        assert exc_info.value.type_name == "Project"

    def test_max_depth_exceeded(self, node_config):
        value = record("Node", id="a", child=record("Node", id="b", child=record("Node", id="c")))
        with pytest.raises(MaxDepthExceeded):
            encode(value, node_config, max_depth=2)

    def test_max_depth_allows_exact_depth(self, node_config):
        value = record("Node", id="a", child=record("Node", id="b"))
        result = encode_with_result(value, node_config, max_depth=2)
        assert result.subject_count == 2

    def test_cyclic_reference(self, node_config):
        """Re-entering an open subject is rejected."""
        value = record("Node", id="a", child=record("Node", id="b", child=record("Node", id="a")))
        with pytest.raises(CyclicReference) as exc_info:
            encode(value, node_config)
        assert exc_info.value.subject_iri == "https://example.org/node/a"

    def test_same_subject_in_sibling_positions_allowed(self, node_config):
        """The same subject may appear again once it has been closed."""
        value = Sequence((record("Node", id="a"), record("Node", id="a")))
        result = encode_with_result(value, node_config)
        assert result.subject_count == 2

    def test_deeply_nested_sequences_rejected(self, node_config):
        """Sequence nesting counts toward max_depth, so deep lists fail cleanly."""
        value = record("Node", id="a", label=nested_sequence(5000))
        with pytest.raises(MaxDepthExceeded) as exc_info:
            encode(value, node_config)
        assert exc_info.value.type_name == "Node"
        assert exc_info.value.field_name == "label"

    def test_tuple_variants_count_as_sequences(self, node_config):
        value = Scalar("x")
        for _ in range(200):
            value = Variant("Pair", "Both", (value, Scalar("y")))
        with pytest.raises(MaxDepthExceeded):
            encode(record("Node", id="a", label=value), node_config)

    def test_sequence_within_max_depth(self, node_config):
        """A record plus one sequence level fits in a depth of two."""
        value = record("Node", id="a", label=nested_sequence(1))
        assert encode_with_result(value, node_config, max_depth=2).triple_count == 2
        with pytest.raises(MaxDepthExceeded):
            encode(record("Node", id="a", label=nested_sequence(2)), node_config, max_depth=2)

    def test_deeply_nested_python_lists_rejected(self, simple_config):
        items = ["x"]
        for _ in range(5000):
            items = [items]
        with pytest.raises(MaxDepthExceeded):
            encode(items, simple_config)

    def test_relative_subject_iri_rejected(self):
        """Without prefix or base_iri the identifier alone is not an absolute IRI."""
        config = MappingConfiguration.from_rules([
            SubjectRule("Test", "https://example.org/ns#Test", "id")
        ])
        with pytest.raises(InvalidIdentifier) as exc_info:
            encode(record("Test", id="my-id"), config)
        assert "not absolute" in str(exc_info.value)

    def test_relative_predicate_iri_rejected(self):
        config = MappingConfiguration.from_rules([
            SubjectRule(
                "Test", "https://example.org/ns#Test", "id", "https://example.org/t/",
                properties=(PropertyRule("name", "hasName"),),
            )
        ])
        with pytest.raises(EmitterFailure):
            encode(record("Test", id="a", name="x"), config)

    def test_json_ld_id_as_identifier(self):
        config = MappingConfiguration.from_rules([
            SubjectRule("Test", "https://example.org/ns#Test", "@id", "https://example.org/t/")
        ])
        text = encode(from_json({"@type": "Test", "@id": "a"}), config)
        assert text.startswith("<https://example.org/t/a> ")

    def test_encoder_is_single_use(self, simple_config):
        encoder = StructuredValueEncoder(simple_config)
        encoder.encode(record("Test", id="a"))
        with pytest.raises(RuntimeError):
            encoder.encode(record("Test", id="b"))


@pytest.mark.unit
class TestTopLevelShapes:

    def test_top_level_sequence_of_records(self, simple_config):
        value = Sequence((record("Test", id="a"), record("Test", id="b")))
        lines = encode(value, simple_config).splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("<https://ark.example/ark:/1/a> ")

    def test_top_level_unit_is_empty(self, simple_config):
        assert encode(UNIT, simple_config) == ""


class IsoStatus(Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"


@dataclass
class Dataset:
    id: str
    title: Optional[str] = None


@dataclass
class Project:
    id: str
    name: Dict[str, str]
    shortcode: str
    keywords: List[str] = field(default_factory=list)
    datasets: List[Dataset] = field(default_factory=list)
    status: IsoStatus = IsoStatus.ACTIVE


@pytest.mark.unit
class TestPythonObjects:
    """Encoding ordinary dataclass instances."""

    def test_dataclass_project(self, project_config):
        project = Project(
            id="p-1",
            name={"en": "Hôtel de Musique Bern"},
            shortcode="0001",
            keywords=["music", "theatre"],
            datasets=[Dataset("d-1", "Programs"), Dataset("d-2")],
        )
        result = encode_with_result(project, project_config)
        graph = parse(result.text)
        p1 = URIRef(f"{ARK}p-1")

        assert (p1, RDF.type, URIRef(f"{NS}Project")) in graph
        assert (p1, URIRef(f"{NS}hasName"), RDFLiteral("Hôtel de Musique Bern", lang="en")) in graph
        assert (p1, URIRef(f"{NS}hasDataset"), URIRef(f"{ARK}d-2")) in graph
        assert len(list(graph.objects(p1, URIRef(f"{NS}hasKeyword")))) == 2
        # status is unmapped, d-2 has no title
        reasons = {(s.type_name, s.field_name): s.reason for s in result.skipped_fields}
        assert reasons[("Project", "status")] == "unmapped"
        assert reasons[("Dataset", "title")] == "unit"

    def test_turtle_output(self, project_config):
        project = Project(id="p-1", name={"en": "Bern"}, shortcode="0001")
        text = encode(project, project_config, output_format="turtle")

        graph = Graph()
        graph.parse(data=text, format="turtle")
        assert len(graph) == 3
        assert "@prefix repo:" in text
