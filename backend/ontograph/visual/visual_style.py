from types import MappingProxyType

from ontograph.visual.visual_schema import ConventionStyle, EdgeStyle, NodeStyle


def _frozen(table):
    return MappingProxyType({k: MappingProxyType(v) if isinstance(v, dict) else v for k, v in table.items()})


BLACK = "#000000"
WHITE = "#FFFFFF"

# Request tokens -> yEd attribute values
NODE_SHAPES = MappingProxyType({
    "circle": "circle",
    "smallCircle": "smallCircle",
    "diamond": "diamond",
    "ellipse": "ellipse",
    "hexagon": "hexagon",
    "parallelogramRight": "parallelogram",
    "parallelogramLeft": "parallelogram2",
    "roundRectangle": "roundrectangle",
    "squareRectangle": "rectangle",
    "none": "rectangle",
})

ARROW_SHAPES = MappingProxyType({
    "angleBracket": "plain",
    "backslash": "skewed_dash",
    "circleSolid": "circle",
    "circleEmpty": "transparent_circle",
    "diamondSolid": "diamond",
    "diamondEmpty": "white_diamond",
    "triangleSolid": "delta",
    "triangleEmpty": "white_delta",
    "none": "none",
})

LINE_TYPES = MappingProxyType({
    "solid": "line",
    "dashed": "dashed",
    "dotted": "dotted",
    "dashedDotted": "dashed_dotted",
    "none": "none",
    "Graffoo Connectives": "dotted",
})

COLORS = MappingProxyType({
    "graffoo_class": "#FFFF00",
    "graffoo_individual": "#FF7FC1",
    "graffoo_datatype": "#CCFFCC",
    "graffoo_annotation_edge": "#993300",
    "graffoo_datatype_edge": "#008000",
    "graffoo_object_edge": "#000080",
    "graffoo_restriction": "#FFFFAA",
    "graffoo_datatype_restriction": "#ECFFEC",
    "vowl_class": "#AACCFF",
    "vowl_rdfs_class": "#CC99CC",
    "vowl_external_class": "#3366CC",
    "vowl_object_label": "#AACCFF",
    "vowl_datatype_label": "#99CC66",
    "vowl_rdf_label": "#CC99CC",
    "vowl_datatype": "#FFCC33",
    "vowl_edge": BLACK,
    "uml_class": "#FFFF99",
    "uml_datatype": "#CCCC66",
})

EDGE_TEXT_DEFAULTS = MappingProxyType({
    "subclass_of_text": "rdfs:subClassOf",
    "type_of_text": "rdf:type",
})

_GRAFFOO_CLASS_NODES = {
    "class_node_shape": "roundRectangle",
    "class_fill_color": COLORS["graffoo_class"],
    "class_text_color": BLACK,
    "class_border_color": BLACK,
    "class_border_type": "solid",
}

_GRAFFOO_DATA_NODES = {
    "data_node_shape": "parallelogramRight",
    "data_fill_color": COLORS["graffoo_datatype"],
    "data_text_color": BLACK,
    "data_border_color": BLACK,
    "data_border_type": "solid",
}

_VOWL_DATA_NODES = {
    "data_node_shape": "squareRectangle",
    "data_fill_color": COLORS["vowl_datatype"],
    "data_text_color": BLACK,
    "data_border_color": BLACK,
    "data_border_type": "solid",
}


def _edge_keys(prefix: str):
    # subclassOf/typeOf fields are named *_line_type/*_line_color, property edges *_edge_type/*_edge_color
    if prefix in ("subclass_of", "type_of"):
        return (f"{prefix}_source_shape", f"{prefix}_target_shape", f"{prefix}_line_type", f"{prefix}_line_color")
    return (f"{prefix}_source_shape", f"{prefix}_target_shape", f"{prefix}_edge_type", f"{prefix}_edge_color")


def _edge(prefix: str, source: str, target: str, color: str, line: str = "solid") -> dict:
    return dict(zip(_edge_keys(prefix), (source, target, line, color)))


# Field overrides applied over the request, per visualization and per view
CONVENTION_PRESETS = _frozen({
    "graffoo": _frozen({
        "class": {
            **_GRAFFOO_CLASS_NODES,
            **_GRAFFOO_DATA_NODES,
            **_edge("subclass_of", "none", "triangleSolid", BLACK),
            "subclass_of_text": "rdfs:subClassOf",
        },
        "property": {
            **_GRAFFOO_DATA_NODES,
            "obj_node_shape": "roundRectangle",
            "obj_fill_color": COLORS["graffoo_class"],
            "obj_text_color": BLACK,
            "obj_border_color": BLACK,
            "obj_border_type": "solid",
            **_edge("data_prop", "circleEmpty", "triangleEmpty", COLORS["graffoo_datatype_edge"]),
            **_edge("obj_prop", "circleSolid", "triangleSolid", COLORS["graffoo_object_edge"]),
            **_edge("ann_prop", "backslash", "angleBracket", COLORS["graffoo_annotation_edge"]),
            **_edge("rdf_prop", "none", "angleBracket", BLACK),
        },
        "individual": {
            **_GRAFFOO_CLASS_NODES,
            "individual_node_shape": "smallCircle",
            "individual_fill_color": COLORS["graffoo_individual"],
            "individual_text_color": BLACK,
            "individual_border_color": BLACK,
            "individual_border_type": "solid",
            "data_node_shape": "none",
            "data_fill_color": WHITE,
            "data_text_color": BLACK,
            "data_border_color": WHITE,
            "data_border_type": "solid",
            **_edge("type_of", "none", "triangleSolid", BLACK),
            **_edge("data_prop", "none", "triangleSolid", BLACK),
            **_edge("obj_prop", "none", "triangleSolid", BLACK),
            "type_of_text": "rdf:type",
        },
    }),
    "vowl": _frozen({
        "class": {
            "class_node_shape": "circle",
            "class_fill_color": COLORS["vowl_class"],
            "class_text_color": BLACK,
            "class_border_color": BLACK,
            "class_border_type": "solid",
            **_VOWL_DATA_NODES,
            **_edge("subclass_of", "none", "triangleEmpty", BLACK, "dotted"),
            "subclass_of_text": "Subclass of",
        },
        "property": {
            **_VOWL_DATA_NODES,
            "obj_node_shape": "ellipse",
            "obj_fill_color": COLORS["vowl_class"],
            "obj_text_color": BLACK,
            "obj_border_color": BLACK,
            "obj_border_type": "solid",
            **_edge("data_prop", "none", "triangleSolid", COLORS["vowl_edge"]),
            **_edge("obj_prop", "none", "triangleSolid", COLORS["vowl_edge"]),
            **_edge("ann_prop", "none", "triangleSolid", COLORS["vowl_edge"]),
            **_edge("rdf_prop", "none", "triangleSolid", COLORS["vowl_edge"]),
        },
    }),
    "uml": _frozen({
        "uml": {
            "class_fill_color": COLORS["uml_class"],
            "class_border_color": BLACK,
            "data_fill_color": COLORS["uml_datatype"],
            "data_border_color": BLACK,
            **_edge("subclass_of", "none", "triangleEmpty", BLACK),
            "subclass_of_text": "",
            **_edge("obj_prop", "none", "angleBracket", BLACK),
            **_edge("rdf_prop", "none", "angleBracket", BLACK),
        },
    }),
    "custom": _frozen({}),
})


def _node(values: dict, prefix: str, border_width: str) -> NodeStyle:
    return NodeStyle(
        shape=values[f"{prefix}_node_shape"],
        fill_color=values[f"{prefix}_fill_color"],
        text_color=values[f"{prefix}_text_color"],
        border_color=values[f"{prefix}_border_color"],
        border_type=values[f"{prefix}_border_type"],
        border_width=border_width,
    )


def _edge_style(values: dict, prefix: str, line_width: str, font_size: str, label: str = "") -> EdgeStyle:
    source_key, target_key, line_key, color_key = _edge_keys(prefix)
    return EdgeStyle(
        source_arrow=values[source_key],
        target_arrow=values[target_key],
        line_type=values[line_key],
        line_color=values[color_key],
        line_width=line_width,
        label=label,
        font_size=font_size,
    )


def build_convention_style(request, view: str) -> ConventionStyle:
    """
    Resolve the request into the immutable style record for one view.
    view is one of: class, property, individual, uml.
    """
    visualization = request.visualization.value
    graph_type = request.graph_type.value

    values = request.model_dump(mode="json")
    values.update(EDGE_TEXT_DEFAULTS)
    values.update(CONVENTION_PRESETS[visualization].get(view, {}))

    # Custom class+property graphs draw classes the way property domains/ranges are drawn
    if visualization == "custom" and view == "class" and graph_type == "both":
        for part in ("node_shape", "fill_color", "text_color", "border_color", "border_type"):
            values[f"class_{part}"] = values[f"obj_{part}"]

    line_width = "2.0" if visualization == "vowl" else "1.0"
    font_size = "12" if visualization == "uml" else "16"

    return ConventionStyle(
        visualization=visualization,
        graph_type=graph_type,
        collapse_edges=request.collapse_edges and visualization != "vowl",
        class_node=_node(values, "class", line_width),
        data_node=_node(values, "data", line_width),
        individual_node=_node(values, "individual", line_width),
        object_node=_node(values, "obj", line_width),
        subclass_edge=_edge_style(values, "subclass_of", line_width, font_size, values["subclass_of_text"]),
        type_edge=_edge_style(values, "type_of", line_width, font_size, values["type_of_text"]),
        data_prop_edge=_edge_style(values, "data_prop", line_width, font_size),
        obj_prop_edge=_edge_style(values, "obj_prop", line_width, font_size),
        ann_prop_edge=_edge_style(values, "ann_prop", line_width, font_size),
        rdf_prop_edge=_edge_style(values, "rdf_prop", line_width, font_size),
        uml_node_color=values["uml_node_color"],
        uml_data_node_color=values["uml_data_node_color"],
    )
