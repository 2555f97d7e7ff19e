"""Tests for render request validation"""

import pytest

from ontograph.ir.errors import MalformedInputError, RequestValidationError
from ontograph.schemas import GraphType, Visualization, parse_request


def make_request(**kwargs):
    data = {"graph_title": "Test", "visualization": "custom", "graph_type": "class"}
    data.update(kwargs)
    return data


def test_defaults():
    request = parse_request(make_request())
    assert request.visualization is Visualization.CUSTOM
    assert request.graph_type is GraphType.CLASS
    assert request.collapse_edges is False
    assert request.class_node_shape == "roundRectangle"


@pytest.mark.parametrize("graph_type", ["class", "property", "both"])
def test_uml_non_individual_becomes_class(graph_type):
    assert parse_request(make_request(visualization="uml", graph_type=graph_type)).graph_type is GraphType.CLASS


def test_uml_individual_kept():
    request = parse_request(make_request(visualization="uml", graph_type="individual"))
    assert request.graph_type is GraphType.INDIVIDUAL


def test_vowl_individual_rejected():
    with pytest.raises(RequestValidationError) as exc:
        parse_request(make_request(visualization="vowl", graph_type="individual"))
    assert "'Individual' graph type" in str(exc.value)


def test_vowl_collapse_rejected():
    with pytest.raises(RequestValidationError) as exc:
        parse_request(make_request(visualization="vowl", collapse_edges=True))
    assert "collapsed edges" in str(exc.value)


def test_field_errors_are_aggregated():
    with pytest.raises(RequestValidationError) as exc:
        parse_request(make_request(class_fill_color="yellow", obj_node_shape="star", rdf_prop_edge_type="wavy"))

    fields = sorted(m.split(":")[0] for m in exc.value.messages)
    assert fields == ["class_fill_color", "obj_node_shape", "rdf_prop_edge_type"]
    assert isinstance(exc.value, MalformedInputError)


def test_short_hex_colors_accepted():
    assert parse_request(make_request(class_fill_color="#abc")).class_fill_color == "#abc"


def test_missing_selectors():
    with pytest.raises(RequestValidationError) as exc:
        parse_request({"graph_title": "Test"})
    assert sorted(m.split(":")[0] for m in exc.value.messages) == ["graph_type", "visualization"]


def test_unknown_visualization():
    with pytest.raises(RequestValidationError):
        parse_request(make_request(visualization="mermaid"))


def test_custom_style_file_sits_under_request(tmp_path):
    style_file = tmp_path / "style.yaml"
    style_file.write_text('class_fill_color: "#123456"\nobj_fill_color: "#654321"\n')

    request = parse_request(make_request(obj_fill_color="#000000"), style_file=str(style_file))

    assert request.class_fill_color == "#123456"
    assert request.obj_fill_color == "#000000"


def test_custom_style_file_with_unknown_fields(tmp_path):
    style_file = tmp_path / "style.yaml"
    style_file.write_text("class_colour: red\n")
    with pytest.raises(RequestValidationError) as exc:
        parse_request(make_request(), style_file=str(style_file))
    assert "class_colour" in str(exc.value)
