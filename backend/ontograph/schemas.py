from enum import Enum
from typing import Annotated, Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from ontograph import config
from ontograph.ir.errors import RequestValidationError


class Visualization(str, Enum):
    CUSTOM = "custom"
    GRAFFOO = "graffoo"
    VOWL = "vowl"
    UML = "uml"


class GraphType(str, Enum):
    CLASS = "class"
    PROPERTY = "property"
    INDIVIDUAL = "individual"
    BOTH = "both"


HexColor = Annotated[str, Field(pattern=r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")]

NodeShape = Literal[
    "circle", "smallCircle", "diamond", "ellipse", "hexagon", "parallelogramRight",
    "parallelogramLeft", "roundRectangle", "squareRectangle", "none",
]

ArrowShape = Literal[
    "angleBracket", "backslash", "circleSolid", "circleEmpty", "diamondSolid",
    "diamondEmpty", "triangleSolid", "triangleEmpty", "none",
]

LineType = Literal["solid", "dashed", "dotted", "dashedDotted", "none"]


class GraphRequest(BaseModel):
    """Render request. Styling fields only matter for the custom visualization."""
    graph_title: str = Field(min_length=1)
    visualization: Visualization
    graph_type: GraphType
    collapse_edges: bool = False

    # Nodes
    class_node_shape: NodeShape = "roundRectangle"
    class_fill_color: HexColor = "#FFFF00"
    class_text_color: HexColor = "#000000"
    class_border_color: HexColor = "#000000"
    class_border_type: LineType = "solid"

    data_node_shape: NodeShape = "parallelogramRight"
    data_fill_color: HexColor = "#CCFFCC"
    data_text_color: HexColor = "#000000"
    data_border_color: HexColor = "#000000"
    data_border_type: LineType = "solid"

    individual_node_shape: NodeShape = "smallCircle"
    individual_fill_color: HexColor = "#FF7FC1"
    individual_text_color: HexColor = "#000000"
    individual_border_color: HexColor = "#000000"
    individual_border_type: LineType = "solid"

    obj_node_shape: NodeShape = "roundRectangle"
    obj_fill_color: HexColor = "#FFFF00"
    obj_text_color: HexColor = "#000000"
    obj_border_color: HexColor = "#000000"
    obj_border_type: LineType = "solid"

    # Edges
    subclass_of_source_shape: ArrowShape = "none"
    subclass_of_target_shape: ArrowShape = "triangleSolid"
    subclass_of_line_type: LineType = "solid"
    subclass_of_line_color: HexColor = "#000000"

    type_of_source_shape: ArrowShape = "none"
    type_of_target_shape: ArrowShape = "triangleSolid"
    type_of_line_type: LineType = "solid"
    type_of_line_color: HexColor = "#000000"

    data_prop_source_shape: ArrowShape = "circleEmpty"
    data_prop_target_shape: ArrowShape = "triangleEmpty"
    data_prop_edge_type: LineType = "solid"
    data_prop_edge_color: HexColor = "#008000"

    obj_prop_source_shape: ArrowShape = "circleSolid"
    obj_prop_target_shape: ArrowShape = "triangleSolid"
    obj_prop_edge_type: LineType = "solid"
    obj_prop_edge_color: HexColor = "#000080"

    ann_prop_source_shape: ArrowShape = "backslash"
    ann_prop_target_shape: ArrowShape = "angleBracket"
    ann_prop_edge_type: LineType = "solid"
    ann_prop_edge_color: HexColor = "#993300"

    rdf_prop_source_shape: ArrowShape = "none"
    rdf_prop_target_shape: ArrowShape = "angleBracket"
    rdf_prop_edge_type: LineType = "solid"
    rdf_prop_edge_color: HexColor = "#000000"

    # UML
    uml_node_color: HexColor = "#FFFF99"
    uml_data_node_color: HexColor = "#CCCC66"

    @model_validator(mode="after")
    def check_visualization_rules(self):
        errors = []
        if self.visualization == Visualization.VOWL:
            if self.graph_type == GraphType.INDIVIDUAL:
                errors.append(
                    "A selection of an 'Individual' graph type is not valid for a VOWL visualization."
                )
            if self.collapse_edges:
                errors.append(
                    "Defining collapsed edges is not valid for a VOWL visualization since it mandates "
                    "the use of class and property splitting."
                )
        if errors:
            raise ValueError(" ".join(errors))

        # Class, property or both all translate to a class diagram for UML
        if self.visualization == Visualization.UML and self.graph_type != GraphType.INDIVIDUAL:
            self.graph_type = GraphType.CLASS
        return self


def load_custom_style(path: str) -> Dict[str, Any]:
    """Read default styling values for custom requests from a YAML mapping."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise RequestValidationError([f"Custom style file {path} must contain a mapping."])
    unknown = sorted(set(data) - set(GraphRequest.model_fields))
    if unknown:
        raise RequestValidationError([f"Unknown style fields in {path}: {', '.join(unknown)}"])
    return data


def parse_request(data: Dict[str, Any], style_file: Optional[str] = None) -> GraphRequest:
    """
    Validate raw request data.
    Values from the custom style file (argument or ONTOGRAPH_CUSTOM_STYLE_FILE) sit under
    the explicit request values.
    """
    style_file = style_file or config.ONTOGRAPH_CUSTOM_STYLE_FILE
    merged: Dict[str, Any] = {}
    if style_file:
        merged.update(load_custom_style(style_file))
    merged.update(data)

    try:
        return GraphRequest.model_validate(merged)
    except ValidationError as e:
        messages = []
        for err in e.errors():
            location = ".".join(str(part) for part in err["loc"]) or "request"
            messages.append(f"{location}: {err['msg']}")
        raise RequestValidationError(messages) from e
