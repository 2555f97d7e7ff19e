"""Tests for GraphML primitives, document bookkeeping and composition"""

import logging

from ontograph.ir.models import EdgeFlag, PrefixRecord
from ontograph.renderer import GraphDocument, compose_document, finalize_body
from ontograph.renderer.graphml_primitives import (
    GraphElement,
    add_edge,
    add_image,
    add_node,
    add_note,
    add_uml_node,
    close_vowl_graph,
    read_image_resource,
)
from ontograph.visual import EdgeStyle, NodeStyle, NoteStyle

GENERATED = "Thu Jan 01 00:00:00 UTC 2026"


def make_node(element_id, marker=""):
    return GraphElement("node", element_id, f"<node id=\"{element_id}\">{marker}</node>\n")


def make_edge(source, target):
    return GraphElement("edge", source + target, f"<edge id=\"{source}{target}\"/>\n", source, target)


# ---- Primitives ---- #

def test_add_node_uses_yed_tokens():
    style = NodeStyle(shape="parallelogramRight", fill_color="#CCFFCC", text_color="#000000",
                      border_color="#000000", border_type="dashedDotted")
    element = add_node(style, "_:bnode 1", "_:bnode1")
    assert element.id == "bnode1"
    assert 'type="parallelogram"' in element.xml
    assert 'type="dashed_dotted"' in element.xml
    assert ">Blank Node</y:NodeLabel>" in element.xml


def test_add_edge_id_and_label():
    style = EdgeStyle(source_arrow="circleSolid", target_arrow="triangleSolid", label="ex:p")
    element = add_edge(style, "ex:A", "ex:B", "oex:p", [EdgeFlag.TRANSITIVE, EdgeFlag.FUNCTIONAL])
    assert (element.id, element.source, element.target) == ("oex:pex:Aex:B", "ex:A", "ex:B")
    assert 'source="circle" target="delta"' in element.xml
    assert 'visible="true">ex:p\n(functional, transitive)</y:EdgeLabel>' in element.xml


def test_add_edge_keeps_complete_id_prefix():
    element = add_edge(EdgeStyle(), "ex:A", "ex:B", "oex:Aex:B")
    assert element.id == "oex:Aex:B"
    assert 'visible="false"> </y:EdgeLabel>' in element.xml


def test_add_note_geometry():
    element = add_note(NoteStyle(line_type="dashed", height=45, width=170), "b1", "Restriction:\nx < 3")
    assert element.id == "b1"
    assert 'height="45.0" width="170.0"' in element.xml
    assert 'type="dashed"' in element.xml
    assert ">Restriction:\nx &lt; 3  </y:NodeLabel>" in element.xml


def test_every_node_primitive_uses_edge_endpoint_ids():
    note = add_note(NoteStyle(line_type="solid", height=45, width=120), "_:b 1", "Restriction:")
    image = add_image("_:b,2", "union")
    box = add_uml_node("_:blank node", "blankNode_x", [], "#FFFF99")

    assert (note.id, image.id, box.id) == ("b1", "b2", "blanknode")
    for element in (note, image, box):
        assert element.xml.startswith(f'<node id="{element.id}">')

    edges = [add_edge(EdgeStyle(), "ex:A", name, "link") for name in ("_:b 1", "_:b,2", "_:blank node")]
    assert [e.target for e in edges] == ["b1", "b2", "blanknode"]


def test_bundled_marker_images_are_png():
    for image_type in ("complement", "union", "intersection", "disjoint"):
        assert read_image_resource(image_type).startswith("iVBORw0KGgo")


def test_missing_image_resource_embeds_empty_image(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        assert read_image_resource("union", str(tmp_path)) == ""
    assert "not found" in caplog.text

    (tmp_path / "union.txt").write_text("aGVsbG8=\n")
    footer = close_vowl_graph(str(tmp_path))
    assert '<y:Resource id="union" type="java.awt.image.BufferedImage">aGVsbG8=</y:Resource>' in footer
    assert '<y:Resource id="disjoint" type="java.awt.image.BufferedImage"></y:Resource>' in footer


# ---- GraphDocument ---- #

def test_remove_duplicates_keeps_first():
    doc = GraphDocument([make_node("ex:A", "first"), make_edge("ex:A", "ex:B"), make_node("ex:A", "second")])
    assert doc.remove_duplicates() == 1
    assert [e.xml for e in doc.nodes] == ['<node id="ex:A">first</node>\n']
    assert len(doc) == 2


def test_remove_unused_only_when_unconnected():
    doc = GraphDocument([make_node("owl:Thing"), make_node("ex:A"), make_node("rdfs:Class")])
    doc.add(make_edge("ex:A", "rdfs:Class"))

    assert doc.remove_unused("owl:Thing") is True
    assert doc.remove_unused("rdfs:Class") is False
    assert doc.remove_unused("rdfs:Resource") is False
    assert [e.id for e in doc.nodes] == ["ex:A", "rdfs:Class"]
    assert not doc.has_node("owl:Thing")


def test_finalize_body():
    doc = GraphDocument([make_node("owl:Thing"), make_node("ex:A"), make_node("ex:A")])
    finalize_body(doc)
    assert [e.id for e in doc.elements] == ["ex:A"]


def test_node_lookups_accept_raw_names():
    doc = GraphDocument([add_note(NoteStyle(line_type="solid", height=45, width=120), "_:b1", "Restriction:")])
    assert doc.has_node("_:b1") and doc.has_node("b1")
    assert doc.remove_unused("_:b1") is True
    assert len(doc) == 0


def test_element_keys_are_a_copy():
    doc = GraphDocument([make_node("ex:A")])
    keys = doc.element_keys()
    keys.add(("node", "ex:B"))
    assert not doc.has_node("ex:B")


# ---- Composer ---- #

def test_compose_document_frame():
    body = GraphDocument([make_node("ex:A")])
    prefixes = [PrefixRecord("ex:", "http://example.org/")]

    document = compose_document(body, "custom", "Test", None, prefixes, generated=GENERATED)

    assert document.startswith('<?xml version="1.0" encoding="UTF-8" standalone="no"?>')
    assert document.endswith("</graphml>")
    assert '<node id="prefixes" yfiles.foldertype="group">' in document
    assert "Ontology URI:  None defined" in document
    assert document.index('id="title"') < document.index('id="prefixes"') < document.index('<node id="ex:A">')
    assert "<y:Resources/>" in document


def test_compose_document_without_prefixes():
    document = compose_document(GraphDocument(), "graffoo", "Test", "http://example.org/", [], generated=GENERATED)
    assert 'id="prefixes"' not in document


def test_compose_vowl_document(tmp_path):
    prefixes = [PrefixRecord("ex:", "http://example.org/")]
    document = compose_document(GraphDocument(), "vowl", "Test", None, prefixes,
                                generated=GENERATED, image_dir=str(tmp_path))
    assert 'id="prefixes"' not in document
    assert '<y:Resource id="complement"' in document
