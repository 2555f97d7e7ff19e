"""Tests for property collapsing and VOWL property splitting"""

from ontograph.assemblers import collapse_properties
from ontograph.assemblers.property_view import vowl_split
from ontograph.ir.models import EdgeFlag, PropertyRecord, PropertyType
from ontograph.schemas import parse_request
from ontograph.visual import StyleResolver, build_convention_style


def make_property(name, domains, ranges, property_type=PropertyType.OBJECT, flags=()):
    return PropertyRecord(name, name, property_type, list(domains), list(ranges), frozenset(flags))


def make_vowl_styles():
    request = parse_request({"graph_title": "Test", "visualization": "vowl", "graph_type": "property"})
    return StyleResolver(build_convention_style(request, "property"), "ex:")


# ---- Collapse ---- #

def test_collapse_groups_by_type_domain_and_range():
    collapsed = collapse_properties([
        make_property("ex:p1", ["ex:A"], ["ex:B"]),
        make_property("ex:p2", ["ex:A"], ["ex:B"], flags=[EdgeFlag.FUNCTIONAL]),
        make_property("ex:p3", ["ex:A"], ["ex:B"]),
        make_property("ex:d1", ["ex:A"], ["ex:B"], PropertyType.DATATYPE),
    ])

    assert len(collapsed) == 2
    grouped = collapsed[0]
    assert grouped.label == "ex:p1,\nex:p2 (functional),\nex:p3"
    assert grouped.name == "ex:Aex:B"
    assert (grouped.domains, grouped.ranges) == (["ex:A"], ["ex:B"])
    assert grouped.property_type is PropertyType.OBJECT
    assert collapsed[1].label == "ex:d1"


def test_collapse_expands_multiple_domains_and_ranges():
    collapsed = collapse_properties([make_property("ex:p", ["ex:A", "ex:B"], ["ex:C", "ex:D"])])
    assert [(c.domains[0], c.ranges[0]) for c in collapsed] == [
        ("ex:A", "ex:C"), ("ex:A", "ex:D"), ("ex:B", "ex:C"), ("ex:B", "ex:D"),
    ]


def test_collapse_uses_prefixed_names_from_labels():
    collapsed = collapse_properties([make_property("ex:p", ["A (ex:A)"], ["B (ex:B)"])])
    assert collapsed[0].name == "ex:Aex:B"


# ---- VOWL splitting ---- #

def test_datatype_ranges_split_per_property():
    styles = make_vowl_styles()
    age = make_property("ex:age", ["ex:A"], ["xsd:int"], PropertyType.DATATYPE)

    domain, range_, nodes = vowl_split(styles, age, "ex:A", "xsd:int")

    assert (domain, range_) == ("ex:A", "ex:agexsd:int")
    assert [n.id for n in nodes] == ["ex:agexsd:int"]
    assert ">int</y:NodeLabel>" in nodes[0].xml
    assert "#FFCC33" in nodes[0].xml


def test_object_property_to_thing_gets_private_thing():
    styles = make_vowl_styles()
    prop = make_property("ex:p", ["ex:A"], ["owl:Thing"])

    domain, range_, nodes = vowl_split(styles, prop, "ex:A", "owl:Thing")

    assert (domain, range_) == ("ex:A", "owl:Thingex:pex:A")
    assert ">Thing</y:NodeLabel>" in nodes[0].xml


def test_universal_domain_and_range():
    styles = make_vowl_styles()
    prop = make_property("ex:p", ["owl:Thing"], ["owl:Thing"])
    domain, range_, nodes = vowl_split(styles, prop, "owl:Thing", "owl:Thing")
    assert (domain, range_) == ("owl:Thing", "owl:Thingex:powl:Thing")
    assert len(nodes) == 1


def test_rdf_property_with_literal_range():
    styles = make_vowl_styles()
    prop = make_property("ex:r", ["ex:A"], ["rdfs:Literal"], PropertyType.RDF)
    domain, range_, nodes = vowl_split(styles, prop, "ex:A", "rdfs:Literal")
    assert range_ == "ex:rrdfs:Literal"
    assert ">Literal</y:NodeLabel>" in nodes[0].xml


def test_rdf_property_with_resource_domain():
    styles = make_vowl_styles()
    prop = make_property("ex:r", ["rdfs:Resource"], ["ex:B"], PropertyType.RDF)
    domain, range_, nodes = vowl_split(styles, prop, "rdfs:Resource", "ex:B")
    assert domain == "rdfs:Resourceex:rex:B"
    assert ">Resource</y:NodeLabel>" in nodes[0].xml


def test_class_to_class_is_not_split():
    styles = make_vowl_styles()
    prop = make_property("ex:p", ["ex:A"], ["ex:B"])
    assert vowl_split(styles, prop, "ex:A", "ex:B") == ("ex:A", "ex:B", [])


def test_vowl_property_edge_label_colors():
    styles = make_vowl_styles()
    own, _ = styles.property_edge(make_property("ex:p", ["ex:A"], ["ex:B"]))
    external, _ = styles.property_edge(make_property("foaf:knows", ["ex:A"], ["ex:B"]))
    annotation, _ = styles.property_edge(make_property("ex:note", ["ex:A"], ["xsd:string"], PropertyType.ANNOTATION))

    assert own.label_background == "#AACCFF"
    assert external.label_background == "#3366CC"
    assert annotation.label == "note\n(annotation)"
