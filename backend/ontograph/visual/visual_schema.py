from dataclasses import dataclass
from enum import Enum


class NodeKind(Enum):
    CLASS = "class"
    DATATYPE = "data"
    INDIVIDUAL = "individual"
    OBJECT = "object"                       # domain/range class in the property view


class EdgeKind(Enum):
    SUBCLASS = "subclass"
    TYPE_OF = "type"
    DATA = "data"
    OBJECT = "object"


@dataclass(frozen=True)
class NodeStyle:
    shape: str                              # request token, e.g. roundRectangle
    fill_color: str
    text_color: str
    border_color: str
    border_type: str                        # solid, dashed, dotted, dashedDotted, none
    border_width: str = "1.0"
    width: str = "50.0"
    height: str = "50.0"
    model_name: str = "internal"
    model_position: str = "c"


@dataclass(frozen=True)
class EdgeStyle:
    source_arrow: str = "none"
    target_arrow: str = "none"
    line_type: str = "solid"
    line_color: str = "#000000"
    line_width: str = "1.0"
    label: str = ""
    label_background: str = "#FFFFFF"
    label_color: str = "#000000"
    font_size: str = "16"


@dataclass(frozen=True)
class NoteStyle:
    line_type: str
    height: int
    width: int
    font_size: str = "16"


@dataclass(frozen=True)
class ConventionStyle:
    """Resolved styling for one view of one render call."""
    visualization: str
    graph_type: str
    collapse_edges: bool
    class_node: NodeStyle
    data_node: NodeStyle
    individual_node: NodeStyle
    object_node: NodeStyle
    subclass_edge: EdgeStyle
    type_edge: EdgeStyle
    data_prop_edge: EdgeStyle
    obj_prop_edge: EdgeStyle
    ann_prop_edge: EdgeStyle
    rdf_prop_edge: EdgeStyle
    uml_node_color: str = "#FFFF99"
    uml_data_node_color: str = "#CCCC66"

    @property
    def line_width(self) -> str:
        return "2.0" if self.visualization == "vowl" else "1.0"

    @property
    def font_size(self) -> str:
        return "12" if self.visualization == "uml" else "16"
