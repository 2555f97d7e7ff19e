"""Tests for loading pre-resolved ontology models"""

import pytest

from ontograph import OntologyLoader, load_ontology_model
from ontograph.ir.errors import MalformedInputError, UnknownRelationKindError
from ontograph.ir.models import EdgeFlag, PropertyType, PropertyValue, Relation, RelationKind

ONTOLOGY_YAML = """
ontology_uri: "http://example.org/"
prefixes:
  "ex:": "http://example.org/"
  "owl:": "http://www.w3.org/2002/07/owl#"
classes:
  - name: "ex:A"
    label: "A (ex:A)"
    super_classes:
      - "ex:B"
      - "b1"
  - name: "ex:Age"
    class_type: d
properties:
  - name: "ex:knows"
    label: "knows (ex:knows)"
    type: o
    flags:
      - functional
      - symmetric
  - name: "ex:age"
    type: d
    domains:
      - "ex:A"
individuals:
  - name: "ex:bob"
    types:
      - "A (ex:A)"
    datatype_properties:
      - ["ex:age", '"42"^^xsd:int']
    object_properties:
      - predicate: "ex:knows"
        value: "ex:carol"
restrictions:
  - name: "b1"
    details:
      - "onProperty ex:knows"
      - "someValuesFrom ex:B"
  - name: "ex:Age"
    class_restriction: false
    details:
      - "onDatatype xsd:int"
equivalents:
  "ex:A":
    - ["eq", "ex:C"]
    - kind: dis
      target: "ex:D"
connectives:
  "b2":
    - ["un", "ex:C"]
"""


def test_load_from_yaml_string():
    model = load_ontology_model(ONTOLOGY_YAML)

    assert model.ontology_uri == "http://example.org/"
    assert [(p.prefix, p.url) for p in model.sorted_prefixes()][0] == ("ex:", "http://example.org/")

    a, age = model.classes
    assert (a.label, a.super_classes) == ("A (ex:A)", ["ex:B", "b1"])
    assert age.is_datatype and age.label == "ex:Age"

    knows, age_prop = model.properties
    assert knows.property_type is PropertyType.OBJECT
    assert knows.flags == frozenset([EdgeFlag.FUNCTIONAL, EdgeFlag.SYMMETRIC])
    assert age_prop.property_type is PropertyType.DATATYPE

    bob = model.individuals[0]
    assert bob.datatype_properties == [PropertyValue("ex:age", '"42"^^xsd:int')]
    assert bob.object_properties == [PropertyValue("ex:knows", "ex:carol")]

    assert model.find_restriction("b1").is_class_restriction is True
    assert model.find_restriction("ex:Age").is_class_restriction is False
    assert model.equivalents["ex:A"] == [
        Relation(RelationKind.EQUIVALENT, "ex:C"),
        Relation(RelationKind.DISJOINT, "ex:D"),
    ]
    assert model.connectives["b2"] == [Relation(RelationKind.UNION, "ex:C")]


def test_domain_and_range_defaults(caplog):
    model = load_ontology_model(ONTOLOGY_YAML)
    knows, age = model.properties

    assert (knows.domains, knows.ranges) == (["owl:Thing"], ["owl:Thing"])
    assert (age.domains, age.ranges) == (["ex:A"], ["rdfs:Literal"])
    assert "ex:knows has no domain" in caplog.text


def test_load_from_dict():
    model = load_ontology_model({
        "classes": [{"name": "ex:A"}],
        "prefixes": [{"prefix": "ex:", "url": "http://example.org/"}],
    })
    assert model.classes[0].label == "ex:A"
    assert model.prefixes[0].prefix == "ex:"
    assert model.ontology_uri is None


def test_file_loads_are_cached(tmp_path):
    path = tmp_path / "onto.yaml"
    path.write_text(ONTOLOGY_YAML)
    loader = OntologyLoader()

    first = loader.load(str(path))
    assert loader.load(str(path)) is first
    assert loader.load(str(path), reload=True) is not first


def test_unknown_relationship_tag():
    with pytest.raises(UnknownRelationKindError):
        load_ontology_model({"equivalents": {"ex:A": [["same", "ex:B"]]}})


def test_malformed_pair():
    with pytest.raises(MalformedInputError):
        load_ontology_model({"individuals": [{"name": "ex:bob", "object_properties": [["ex:knows"]]}]})


def test_non_mapping_document():
    with pytest.raises(MalformedInputError):
        load_ontology_model("- just\n- a list\n")
