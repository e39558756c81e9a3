"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # CLI and file I/O tests
"""

import json
import os
import sys

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from rdf_encoder import MappingConfiguration, PropertyRule, SubjectRule  # noqa: E402

NS = "https://ns.example.org/repository#"
ARK = "https://ark.example.org/ark:/72163/1/"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: CLI and file I/O tests")


@pytest.fixture
def project_mapping():
    """Mapping document for Project -> Dataset, as decoded JSON."""
    return {
        "base_iri": "",
        "namespaces": {"repo": NS},
        "subjects": {
            "Project": {
                "type_name": "Project",
                "rdf_type": f"{NS}Project",
                "identifier_field": "id",
                "identifier_prefix": ARK,
                "properties": [
                    {"field_name": "name", "predicate_iri": f"{NS}hasName"},
                    {"field_name": "description", "predicate_iri": f"{NS}hasDescription"},
                    {"field_name": "shortcode", "predicate_iri": f"{NS}hasShortcode"},
                    {"field_name": "keywords", "predicate_iri": f"{NS}hasKeyword"},
                    {"field_name": "datasets", "predicate_iri": f"{NS}hasDataset"},
                ],
            },
            "Dataset": {
                "type_name": "Dataset",
                "rdf_type": f"{NS}Dataset",
                "identifier_field": "id",
                "identifier_prefix": ARK,
                "properties": [
                    {"field_name": "title", "predicate_iri": f"{NS}hasTitle"},
                ],
            },
        },
    }


@pytest.fixture
def project_config(project_mapping):
    """MappingConfiguration built from project_mapping."""
    return MappingConfiguration.from_dict(project_mapping)


@pytest.fixture
def simple_config():
    """Single-type configuration with no properties."""
    return MappingConfiguration.from_rules([
        SubjectRule(
            type_name="Test",
            rdf_type="https://example.org/ns#Test",
            identifier_field="id",
            identifier_prefix="https://ark.example/ark:/1/",
            properties=(),
        )
    ])


@pytest.fixture
def node_config():
    """Self-referencing type used for nesting depth and cycle tests."""
    return MappingConfiguration.from_rules([
        SubjectRule(
            type_name="Node",
            rdf_type="https://example.org/ns#Node",
            identifier_field="id",
            identifier_prefix="https://example.org/node/",
            properties=(
                PropertyRule("label", "https://example.org/ns#label"),
                PropertyRule("child", "https://example.org/ns#child"),
            ),
        )
    ])


@pytest.fixture
def mapping_file(tmp_path, project_mapping):
    """project_mapping written to a temporary JSON file."""
    path = tmp_path / "mapping.json"
    path.write_text(json.dumps(project_mapping), encoding="utf-8")
    return str(path)
