"""
yEd GraphML fragments.

Pure formatting: every function turns already resolved styles into the XML of one
element. Element templates (attribute order, placeholder geometry, spacing) are what
yEd writes itself and must not drift, the editor parses them structurally.
"""

import logging
import os
import time
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from ontograph import config
from ontograph.ir.models import PrefixRecord, flags_text
from ontograph.visual.labels import NEW_LINE, attribute_details, escape_brackets
from ontograph.visual.visual_schema import EdgeStyle, NodeStyle, NoteStyle
from ontograph.visual.visual_style import ARROW_SHAPES, LINE_TYPES, NODE_SHAPES

logger = logging.getLogger(__name__)

VOWL_IMAGE_TYPES = ("complement", "intersection", "union", "disjoint")

# UML box heights by number of attribute lines
_UML_HEIGHTS = (40, 60, 80, 100, 120, 140, 150, 160, 170, 180)


@dataclass(frozen=True)
class GraphElement:
    kind: str                               # node | edge
    id: str
    xml: str
    source: str = ""
    target: str = ""


def _join(lines: List[str]) -> str:
    return NEW_LINE.join(lines) + NEW_LINE


def _strip_id(value: str) -> str:
    return value.replace("_:", "").replace(" ", "").replace(",", "")


def node_id(name: str) -> str:
    return _strip_id(name).replace(NEW_LINE, "")


# ------------------------------------------------------------------ #
# Document frame
# ------------------------------------------------------------------ #

def graph_header() -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="no"?>' + NEW_LINE
        + '<graphml xmlns="http://graphml.graphdrawing.org/xmlns" '
        'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
        'xmlns:sys="http://www.yworks.com/xml/yfiles-common/markup/primitives/2.0" '
        'xmlns:x="http://www.yworks.com/xml/yfiles-common/markup/2.0" '
        'xmlns:y="http://www.yworks.com/xml/graphml" '
        'xmlns:yed="http://www.yworks.com/xml/yed/3" '
        'xsi:schemaLocation="http://graphml.graphdrawing.org/xmlns '
        'http://www.yworks.com/xml/schema/graphml/1.1/ygraphml.xsd"> ' + NEW_LINE
        + NEW_LINE
        + '<key attr.name="Description" attr.type="string" for="graph" id="d0"/>'
        '<key for="port" id="d1" yfiles.type="portgraphics"/>' + NEW_LINE
        + '<key for="port" id="d2" yfiles.type="portgeometry"/>' + NEW_LINE
        + '<key for="port" id="d3" yfiles.type="portuserdata"/>' + NEW_LINE
        + '<key attr.name="url" attr.type="string" for="node" id="d4"/>' + NEW_LINE
        + '<key attr.name="description" attr.type="string" for="node" id="d5"/>' + NEW_LINE
        + '<key for="node" id="d6" yfiles.type="nodegraphics"/>' + NEW_LINE
        + '<key for="graphml" id="d7" yfiles.type="resources"/>' + NEW_LINE
        + '<key attr.name="url" attr.type="string" for="edge" id="d8"/>' + NEW_LINE
        + '<key attr.name="description" attr.type="string" for="edge" id="d9"/>' + NEW_LINE
        + '<key for="edge" id="d10" yfiles.type="edgegraphics"/>' + NEW_LINE
        + NEW_LINE
        + '<graph edgedefault="directed" id="G">' + NEW_LINE
        + '  <data key="d0"/>' + NEW_LINE
    )


def close_graph() -> str:
    return _join([
        "</graph>",
        '<data key="d7">',
        "   <y:Resources/>",
        "</data>",
    ]) + "</graphml>"


def read_image_resource(image_type: str, image_dir: Optional[str] = None) -> str:
    """Base64 payload of one VOWL marker image, '' when the resource file is missing."""
    image_dir = image_dir or config.ONTOGRAPH_IMAGE_DIR
    path = os.path.join(image_dir, f"{image_type}.txt")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except FileNotFoundError:
        logger.warning("[GraphML] Image resource %s not found, embedding an empty image", path)
        return ""


def close_vowl_graph(image_dir: Optional[str] = None) -> str:
    lines = [
        "</graph>",
        '<data key="d7">',
        "   <y:Resources>",
    ]
    for image_type in VOWL_IMAGE_TYPES:
        lines.append(
            f'      <y:Resource id="{image_type}" type="java.awt.image.BufferedImage">'
            f"{read_image_resource(image_type, image_dir)}</y:Resource>"
        )
    lines += [
        "   </y:Resources>",
        "</data>",
    ]
    return _join(lines) + "</graphml>"


# ------------------------------------------------------------------ #
# Front matter boxes
# ------------------------------------------------------------------ #

def add_box(text1: str, text2: str = "") -> str:
    """Grouped box: the title box when text2 is empty, otherwise the prefixes legend."""
    if text2:
        box_id, heading, background = "prefixes", "Prefixes   ", "#B7B69E"
    else:
        box_id, heading, background = "title", "Graph Information   ", "#99CCFF"

    lines = [
        f'<node id="{box_id}" yfiles.foldertype="group">',
        '  <data key="d4"/>',
        '  <data key="d6">',
        "    <y:ProxyAutoBoundsNode>",
        '      <y:Realizers active="0">',
        "        <y:GroupNode>",
        '          <y:Geometry height="112.2" width="449.12" x="123.59" y="878.39"/>',
        '          <y:Fill color="#FFFFFF" transparent="false"/>',
        '          <y:BorderStyle color="#000000" type="line" width="1.0"/>',
        f'          <y:NodeLabel alignment="right" autoSizePolicy="node_width" backgroundColor="{background}" '
        'borderDistance="0.0" fontFamily="Dialog" fontSize="15" fontStyle="bold" hasLineColor="false" '
        'height="21.67" horizontalTextPosition="center" iconTextGap="4" modelName="internal" modelPosition="t" '
        'textColor="#000000" verticalTextPosition="bottom" visible="true" width="449.12" x="0.0" y="0.0">'
        f"{heading}</y:NodeLabel>",
        '          <y:Shape type="rectangle"/>',
        '          <y:DropShadow color="#D2D2D2" offsetX="4" offsetY="4"/>',
        '          <y:State closed="false" closedHeight="74.51" closedWidth="387.83" innerGraphDisplayEnabled="false"/>',
        '          <y:Insets bottom="15" bottomF="15.0" left="15" leftF="15.0" right="15" rightF="15.0" top="15" '
        'topF="15.0"/>',
        '          <y:BorderInsets bottom="0" bottomF="0.0" left="4" leftF="4.47" right="0" rightF="0.0" top="0" '
        'topF="0.0"/>',
        "        </y:GroupNode>",
        "        <y:GroupNode>",
        '          <y:Geometry height="50.0" width="50.0" x="-25.0" y="-25.0"/>',
        '          <y:Fill color="#F2F0D8" transparent="false"/>',
        '          <y:BorderStyle color="#000000" type="line" width="1.0"/>',
        '          <y:NodeLabel alignment="right" autoSizePolicy="node_width" backgroundColor="#B7B69E" '
        'borderDistance="0.0" fontFamily="Dialog" fontSize="15" fontStyle="plain" hasLineColor="false" '
        'height="21.67" horizontalTextPosition="center" iconTextGap="4" modelName="internal" modelPosition="t" '
        'textColor="#000000" verticalTextPosition="bottom" visible="true" width="63.76" x="-6.88" y="0.0"> '
        "</y:NodeLabel>",
        '          <y:Shape type="rectangle"/>',
        '          <y:DropShadow color="#D2D2D2" offsetX="4" offsetY="4"/>',
        '          <y:State closed="true" closedHeight="50.0" closedWidth="50.0" innerGraphDisplayEnabled="false"/>',
        '          <y:Insets bottom="5" bottomF="5.0" left="5" leftF="5.0" right="5" rightF="5.0" top="5" '
        'topF="5.0"/>',
        '          <y:BorderInsets bottom="0" bottomF="0.0" left="0" leftF="0.0" right="0" rightF="0.0" top="0" '
        'topF="0.0"/>',
        "        </y:GroupNode>",
        "      </y:Realizers>",
        "    </y:ProxyAutoBoundsNode>",
        "  </data>",
        f'  <graph edgedefault="directed" id="{box_id}:">',
    ]
    lines += _box_text_node(f"{box_id}::n0", "150.0", "310.0", "bold", "-5.04", text1)
    if text2:
        lines += _box_text_node(f"{box_id}::n1", "430.0", "148.09", "plain", "-66.3", text2)
    lines += [
        "  </graph>",
        "</node>",
    ]
    return _join(lines)


def _box_text_node(element_id: str, width: str, x: str, font_style: str, label_x: str, text: str) -> List[str]:
    return [
        f'    <node id="{element_id}">',
        '      <data key="d6">',
        "        <y:ShapeNode>",
        f'          <y:Geometry height="25.0" width="{width}" x="{x}" y="934.20"/>',
        '          <y:Fill hasColor="false" transparent="false"/>',
        '          <y:BorderStyle hasColor="false" type="line" width="1.0"/>',
        '          <y:NodeLabel alignment="left" autoSizePolicy="content" borderDistance="0.0" '
        f'fontFamily="Dialog" fontSize="16" fontStyle="{font_style}" hasBackgroundColor="false" '
        'hasLineColor="false" height="90.53" horizontalTextPosition="center" iconTextGap="4" '
        'modelName="internal" modelPosition="c" textColor="#000000" verticalTextPosition="bottom" '
        f'visible="true" width="140.44" x="{label_x}" y="-19.145">{escape_brackets(text)}</y:NodeLabel>',
        '          <y:Shape type="rectangle"/>',
        "        </y:ShapeNode>",
        "      </data>",
        "    </node>",
    ]


def title_box(title: str, ontology_uri: Optional[str], generated: Optional[str] = None) -> str:
    if generated is None:
        generated = time.strftime("%a %b %d %H:%M:%S %Z %Y")
    text = (
        f"Title:  {title}{NEW_LINE}{NEW_LINE}"
        f"Ontology URI:  {ontology_uri or 'None defined'}{NEW_LINE}{NEW_LINE}"
        f"Generated:  {generated}"
    )
    return add_box(text)


def prefixes_box(prefixes: Sequence[PrefixRecord]) -> str:
    names = "".join(p.prefix + NEW_LINE for p in prefixes)
    urls = "".join(p.url + NEW_LINE for p in prefixes)
    return add_box(names, urls)


# ------------------------------------------------------------------ #
# Graph elements
# ------------------------------------------------------------------ #

def add_node(style: NodeStyle, name: str, label: str) -> GraphElement:
    element_id = node_id(name)
    text = "Blank Node" if label.startswith("_:bnode") else escape_brackets(label)

    xml = _join([
        f'<node id="{element_id}">',
        '  <data key="d6">',
        "    <y:ShapeNode>",
        f'      <y:Geometry height="{style.height}" width="{style.width}" x="385.3" y="187.0"/>',
        f'      <y:Fill color="{style.fill_color}" transparent="false"/>',
        f'      <y:BorderStyle color="{style.border_color}" type="{LINE_TYPES[style.border_type]}" '
        f'width="{style.border_width}"/>',
        '      <y:NodeLabel alignment="center" autoSizePolicy="content" fontFamily="Dialog" fontSize="16" '
        'fontStyle="plain" hasBackgroundColor="false" hasLineColor="false" height="22.84" '
        f'modelName="{style.model_name}" modelPosition="{style.model_position}" textColor="{style.text_color}" '
        f'visible="true" width="44.84" x="18.56" y="10.58">{text}</y:NodeLabel>',
        f'      <y:Shape type="{NODE_SHAPES[style.shape]}"/>',
        "    </y:ShapeNode>",
        "  </data>",
        "</node>",
    ])
    return GraphElement("node", element_id, xml)


def add_note(style: NoteStyle, name: str, text: str) -> GraphElement:
    element_id = node_id(name)
    xml = _join([
        f'<node id="{element_id}">',
        '  <data key="d4"/>',
        '  <data key="d5"><![CDATA[UMLNote]]></data>',
        '  <data key="d6">',
        "    <y:UMLNoteNode>",
        f'      <y:Geometry height="{float(style.height)}" width="{float(style.width)}" x="572.71" y="764.98"/>',
        '      <y:Fill color="#FFFFFF" transparent="false"/>',
        f'      <y:BorderStyle color="#000000" type="{LINE_TYPES[style.line_type]}" width="1.0"/>',
        f'      <y:NodeLabel alignment="left" autoSizePolicy="content" fontFamily="Dialog" fontSize="{style.font_size}" '
        'fontStyle="plain" hasBackgroundColor="false" hasLineColor="false" '
        f'height="{style.height}.0" width="{style.width}.0" horizontalTextPosition="center" iconTextGap="4" '
        'modelName="internal" modelPosition="c" textColor="#000000" verticalTextPosition="bottom" '
        f'visible="true" x="19.156" y="16.5085">{escape_brackets(text)}  </y:NodeLabel>',
        "    </y:UMLNoteNode>",
        "</data>",
        "</node>",
    ])
    return GraphElement("node", element_id, xml)


def add_edge(style: EdgeStyle, source: str, target: str, id_prefix: str, flags: Iterable = ()) -> GraphElement:
    edge_id = id_prefix
    if source not in edge_id or target not in edge_id:
        edge_id = id_prefix + source + target
    edge_id = _strip_id(edge_id)
    source_id = node_id(source)
    target_id = node_id(target)

    label_open = (
        f'      <y:EdgeLabel alignment="center" backgroundColor="{style.label_background}" distance="2.0" '
        f'fontFamily="Dialog" fontSize="{style.font_size}" fontStyle="plain" hasLineColor="false" '
        'height="22.84" modelName="centered" modelPosition="center" preferredPlacement="anywhere" ratio="0.5" '
        f'textColor="{style.label_color}" width="76.16" x="102.14" y="-11.42" '
    )
    if not style.label:
        label_open += 'visible="false"> '
    else:
        label = style.label
        flag_names = flags_text(flags)
        if flag_names:
            label += f"{NEW_LINE}({flag_names})"
        label_open += 'visible="true">' + escape_brackets(label)

    xml = _join([
        f'<edge id="{edge_id}" source="{source_id}" target="{target_id}">',
        '  <data key="d10">',
        "    <y:PolyLineEdge>",
        '      <y:Path sx="0.0" sy="0.0" tx="0.0" ty="0.0"/>',
        f'      <y:LineStyle color="{style.line_color}" type="{LINE_TYPES[style.line_type]}" '
        f'width="{style.line_width}"/>',
        f'      <y:Arrows source="{ARROW_SHAPES[style.source_arrow]}" target="{ARROW_SHAPES[style.target_arrow]}"/>',
        label_open + "</y:EdgeLabel>",
        '      <y:BendStyle smoothed="false"/>',
        "    </y:PolyLineEdge>",
        "  </data>",
        "</edge>",
    ])
    return GraphElement("edge", edge_id, xml, source_id, target_id)


def add_image(name: str, image_type: str) -> GraphElement:
    element_id = node_id(name)
    xml = _join([
        f'<node id="{element_id}">',
        '  <data key="d6">',
        "    <y:ImageNode>",
        '      <y:Geometry height="72.53" width="76.0" x="-163.76" y="557.0"/>',
        '      <y:Fill hasColor="false" transparent="false"/>',
        '      <y:BorderStyle hasColor="false" type="line" width="1.0"/>',
        '      <y:NodeLabel alignment="center" autoSizePolicy="content" fontFamily="Dialog" fontSize="12" '
        'fontStyle="plain" hasBackgroundColor="false" hasLineColor="false" hasText="false" height="4.0" '
        'horizontalTextPosition="center" iconTextGap="4" modelName="sandwich" modelPosition="s" '
        'textColor="#000000" verticalTextPosition="bottom" visible="false" width="4.0" x="36.0" y="76.53"/>',
        f'      <y:Image alphaImage="true" refid="{image_type}"/>',
        "    </y:ImageNode>",
        "  </data>",
        "</node>",
    ])
    return GraphElement("node", element_id, xml)


def uml_box_size(label: str, attributes: Sequence[str]):
    """(width, height) of a UML box: 9 units per character, height stepped by attribute lines."""
    longest = len(label)
    extra_lines = 0
    for attribute in attributes:
        lines, attribute_length = attribute_details(attribute)
        extra_lines += lines
        longest = max(longest, attribute_length)

    size = len(attributes) + extra_lines
    if size <= 9:
        height = float(_UML_HEIGHTS[size])
    else:
        height = 180.0 + 10 * (size - 9)
    return float(longest * 9), height


def add_uml_node(name: str, label: str, attributes: Sequence[str], color: str) -> GraphElement:
    width, height = uml_box_size(label, attributes)
    element_id = node_id(name)

    if attributes:
        attribute_text = "".join(escape_brackets(a) + NEW_LINE for a in attributes)
    else:
        attribute_text = NEW_LINE

    xml = _join([
        f'<node id="{element_id}">',
        '  <data key="d5"/>',
        '  <data key="d6">',
        '    <y:GenericNode configuration="com.yworks.entityRelationship.big_entity">',
        f'      <y:Geometry height="{height}" width="{width}" x="385.30" y="187.01"/>',
        f'      <y:Fill color="{color}" transparent="false"/>',
        '      <y:BorderStyle color="#000000" type="line" width="1.0"/>',
        f'      <y:NodeLabel alignment="center" autoSizePolicy="content" backgroundColor="{color}" '
        'configuration="com.yworks.entityRelationship.label.name" fontFamily="Dialog" fontSize="12" '
        'fontStyle="plain" hasLineColor="false" height="18.13" modelName="internal" modelPosition="t" '
        f'textColor="#000000" visible="true" width="36.67" x="21.67" y="4.0">{escape_brackets(label)}</y:NodeLabel>',
        '      <y:NodeLabel alignment="left" autoSizePolicy="content" '
        'configuration="com.yworks.entityRelationship.label.attributes" fontFamily="Dialog" fontSize="12" '
        'fontStyle="plain" hasBackgroundColor="false" hasLineColor="false" height="46.40" modelName="custom" '
        f'textColor="#000000" visible="true" width="65.54" x="2.0" y="30.13">{attribute_text}'
        "        <y:LabelModel>",
        "          <y:ErdAttributesNodeLabelModel/>",
        "        </y:LabelModel>",
        "        <y:ModelParameter>",
        "          <y:ErdAttributesNodeLabelModelParameter/>",
        "        </y:ModelParameter>",
        "      </y:NodeLabel>",
        "      <y:StyleProperties>",
        '          <y:Property class="java.lang.Boolean" name="y.view.ShadowNodePainter.SHADOW_PAINTING" '
        'value="false"/>',
        "      </y:StyleProperties>",
        "    </y:GenericNode>",
        "  </data>",
        "</node>",
    ])
    return GraphElement("node", element_id, xml)
