"""Tests for label text, node sizing and UML box geometry"""

import pytest

from ontograph.assemblers.uml_view import attribute_text, blank_node_id
from ontograph.ir.models import EdgeFlag, PropertyRecord, PropertyType, RelationKind
from ontograph.renderer.graphml_primitives import node_id, uml_box_size
from ontograph.schemas import parse_request
from ontograph.visual import NodeKind, NodeStyle, StyleResolver, build_convention_style
from ontograph.visual.labels import (
    attribute_details,
    display_label,
    escape_brackets,
    is_external,
    prefixed_name_from_label,
    truncate,
)


def make_styles(visualization="custom", graph_type="class", view="class", ontology_prefix=""):
    request = parse_request({"graph_title": "Test", "visualization": visualization, "graph_type": graph_type})
    return StyleResolver(build_convention_style(request, view), ontology_prefix)


def make_node_style(shape):
    return NodeStyle(shape=shape, fill_color="#FFFF00", text_color="#000000",
                     border_color="#000000", border_type="solid")


# ---- Labels ---- #

def test_prefixed_name_from_label():
    assert prefixed_name_from_label("Person (ex:Person)") == "ex:Person"
    assert prefixed_name_from_label("a (b) (ex:Thing)") == "ex:Thing"
    assert prefixed_name_from_label("ex:Person") == "ex:Person"


def test_truncate():
    assert truncate("VeryLongClassName") == "VeryLongClas..."
    assert truncate("Short") == "Short"
    assert len(truncate("x" * 40)) == 15


def test_attribute_details():
    assert attribute_details("abc") == (0, 3)
    assert attribute_details("ab\ncdef\n") == (2, 4)
    assert attribute_details("ab\ncdef") == (1, 2)


def test_escape_brackets():
    assert escape_brackets("List<String>") == "List&lt;String&gt;"


@pytest.mark.parametrize("name,expected", [
    ("ex:A", False),
    ("foaf:Agent", True),
    ("owl:Thing", False),
    ("rdfs:Literal", False),
    ("b1", False),
    ("_:genid7", False),
])
def test_is_external(name, expected):
    assert is_external("ex:", name) is expected


def test_display_label_per_convention():
    assert display_label("custom", "", "ex:A", "A (ex:A)", True) == "A (ex:A)"
    assert display_label("graffoo", "", "ex:A", "A (ex:A)", True) == "ex:A"
    assert display_label("vowl", "ex:", "ex:A", "A (ex:A)", True) == "A"
    assert display_label("vowl", "ex:", "foaf:Agent", "foaf:Agent", True) == "Agent\n(external)"
    assert display_label("vowl", "ex:", "foaf:Agent", "foaf:Agent", False) == "Agent"
    assert display_label("vowl", "", "x", "http://example.org/onto#Person", False) == "Person"
    assert display_label("vowl", "", "x", "http://example.org/Person", False) == "Person"


# ---- Node sizing ---- #

def test_small_circle_is_fixed_size():
    style = StyleResolver.size_for_shape(make_node_style("smallCircle"), "anything at all")
    assert (style.shape, style.width, style.height) == ("ellipse", "20.0", "20.0")
    assert (style.model_name, style.model_position) == ("eight_pos", "e")


def test_circle_grows_with_label():
    assert StyleResolver.size_for_shape(make_node_style("circle"), "ex:A").width == "50.0"
    big = StyleResolver.size_for_shape(make_node_style("circle"), "ex:LongClassName")
    assert (big.shape, big.width, big.height) == ("ellipse", "176.0", "176.0")


def test_shapeless_node_becomes_white_rectangle():
    style = StyleResolver.size_for_shape(make_node_style("none"), "ab\ncd\n")
    assert (style.shape, style.fill_color, style.border_color) == ("squareRectangle", "#FFFFFF", "#FFFFFF")
    assert (style.width, style.height) == ("22.0", "60.0")


def test_rectangle_height_follows_lines():
    style = StyleResolver.size_for_shape(make_node_style("roundRectangle"), "ex:A")
    assert (style.width, style.height) == ("44.0", "50.0")


def test_vowl_universal_classes():
    styles = make_styles("vowl", ontology_prefix="ex:")
    thing = styles.resolve_node_style(NodeKind.CLASS, "owl:Thing", "Thing")
    resource = styles.resolve_node_style(NodeKind.CLASS, "rdfs:Resource", "Resource")
    assert (thing.fill_color, thing.border_type, thing.width) == ("#FFFFFF", "dashed", "90.0")
    assert resource.fill_color == "#CC99CC"


def test_vowl_datatype_nodes():
    style = make_styles("vowl", ontology_prefix="ex:").resolve_node_style(
        NodeKind.DATATYPE, "30", '"30"', is_datatype=True
    )
    assert (style.shape, style.fill_color, style.width, style.height) == ("squareRectangle", "#FFCC33", "100.0", "20.0")


def test_uml_relationship_edges_use_plain_arrows():
    styles = make_styles("uml", view="uml")
    assert styles.relationship_edge(RelationKind.EQUIVALENT).target_arrow == "angleBracket"
    assert styles.relationship_edge(RelationKind.SUPER).label == ""
    assert styles.reset(styles.relationship_edge(RelationKind.EQUIVALENT)).line_type == "solid"


def test_graffoo_property_edges_use_preset_colors():
    styles = make_styles("graffoo", graph_type="property", view="property")
    edge, id_prefix = styles.property_edge(
        PropertyRecord("ex:p", "p (ex:p)", PropertyType.DATATYPE, ["ex:A"], ["xsd:int"])
    )
    assert (edge.line_color, edge.source_arrow, edge.target_arrow) == ("#008000", "circleEmpty", "triangleEmpty")
    assert (edge.label, id_prefix) == ("ex:p", "dex:p")


# ---- Ids and UML geometry ---- #

def test_node_id_strips_blank_prefix_and_separators():
    assert node_id("_:bnode 1,2") == "bnode12"


def test_uml_box_size():
    assert uml_box_size("ex:A", []) == (36.0, 40.0)
    assert uml_box_size("Person", ["age : xsd:int", "name : xsd:string"]) == (153.0, 80.0)
    assert uml_box_size("X", ["a"] * 12) == (9.0, 210.0)


def test_blank_node_id():
    assert blank_node_id("bnode_123_45") == "blankNode_45"
    assert blank_node_id("b1") == "blankNode_b1"
    assert blank_node_id("_:genid7") == "blankNode_genid7"


def test_attribute_text_collects_blank_ranges():
    blanks = {}
    prop = PropertyRecord("ex:size", "size (ex:size)", PropertyType.DATATYPE, ["ex:A"],
                          ["rdfs:Literal", "b1"], frozenset([EdgeFlag.FUNCTIONAL]))
    assert attribute_text(prop, "ex:size", blanks) == "ex:size : xsd:String, blankNode_b1 [0..1]"
    assert list(blanks) == ["b1"]
