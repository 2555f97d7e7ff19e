from dataclasses import replace
from typing import Optional, Tuple

from ontograph.ir.errors import UnknownRelationKindError
from ontograph.ir.models import (
    OWL_NOTHING,
    OWL_THING,
    RDFS_CLASS,
    RDFS_RESOURCE,
    PropertyRecord,
    PropertyType,
    RelationKind,
    is_blank,
)
from ontograph.visual import labels
from ontograph.visual.visual_schema import (
    ConventionStyle,
    EdgeKind,
    EdgeStyle,
    NodeKind,
    NodeStyle,
    NoteStyle,
)
from ontograph.visual.visual_style import BLACK, COLORS, WHITE


# Label backgrounds for VOWL property edges
_VOWL_PROPERTY_BACKGROUNDS = {
    PropertyType.OBJECT: COLORS["vowl_object_label"],
    PropertyType.DATATYPE: COLORS["vowl_datatype_label"],
    PropertyType.RDF: COLORS["vowl_rdf_label"],
    PropertyType.ANNOTATION: COLORS["vowl_datatype_label"],
}


def _dimension(value: int) -> str:
    return f"{value}.0"


class StyleResolver:
    """
    Turns one view's ConventionStyle into concrete node, edge and note styles.

    Every method returns a fresh frozen record; callers derive variants with
    dataclasses.replace instead of mutating shared style state.
    """

    def __init__(self, convention: ConventionStyle, ontology_prefix: str = ""):
        self.convention = convention
        self.ontology_prefix = ontology_prefix

    @property
    def visualization(self) -> str:
        return self.convention.visualization

    @property
    def graph_type(self) -> str:
        return self.convention.graph_type

    @property
    def is_vowl(self) -> bool:
        return self.visualization == "vowl"

    @property
    def is_graffoo(self) -> bool:
        return self.visualization == "graffoo"

    @property
    def is_uml(self) -> bool:
        return self.visualization == "uml"

    # ------------------------------------------------------------------ #
    # Labels
    # ------------------------------------------------------------------ #

    def display_label(self, name: str, label: str, for_node: bool = True) -> str:
        return labels.display_label(self.visualization, self.ontology_prefix, name, label, for_node)

    # ------------------------------------------------------------------ #
    # Nodes
    # ------------------------------------------------------------------ #

    def base_node_style(self, kind: NodeKind) -> NodeStyle:
        c = self.convention
        if kind is NodeKind.CLASS:
            return c.class_node
        if kind is NodeKind.INDIVIDUAL:
            return c.individual_node
        if kind is NodeKind.OBJECT:
            return c.object_node
        if kind is NodeKind.DATATYPE:
            if self.is_uml:
                return NodeStyle(
                    shape="squareRectangle",
                    fill_color=c.uml_data_node_color,
                    text_color=BLACK,
                    border_color=WHITE,
                    border_type="solid",
                    border_width=c.line_width,
                )
            return c.data_node
        raise AssertionError(f"Unhandled node kind: {kind!r}")

    @staticmethod
    def size_for_shape(style: NodeStyle, label: str) -> NodeStyle:
        """Geometry for non-VOWL nodes, derived from the label and the shape family."""
        if style.shape == "smallCircle":
            return replace(
                style, width="20.0", height="20.0",
                model_name="eight_pos", model_position="e", shape="ellipse",
            )

        lines, longest = labels.attribute_details(label)
        width = longest * 11

        if style.shape == "circle":
            if width <= 50:
                return replace(style, shape="ellipse", width="50.0", height="50.0")
            return replace(style, shape="ellipse", width=_dimension(width), height=_dimension(width))
        if style.shape == "none":
            return replace(
                style, shape="squareRectangle", fill_color=WHITE, border_color=WHITE,
                width=_dimension(width), height=_dimension(lines * 20 + 20),
            )
        return replace(style, width=_dimension(width), height=_dimension(lines * 23 + 50))

    def resolve_node_style(self, kind: NodeKind, name: str, label: str, is_datatype: bool = False) -> NodeStyle:
        style = replace(self.base_node_style(kind), model_name="internal", model_position="c")

        if not self.is_vowl:
            return self.size_for_shape(style, label)

        style = replace(style, shape="ellipse", width="150.0", height="150.0")
        if is_datatype:
            return self._vowl_datatype(style, label)
        if (name.startswith(OWL_THING) or OWL_NOTHING in name
                or RDFS_CLASS in name or name.startswith(RDFS_RESOURCE)):
            fill = WHITE if ("Thing" in name or "Nothing" in name) else COLORS["vowl_rdfs_class"]
            return replace(
                style, fill_color=fill, text_color=BLACK, border_type="dashed",
                width="90.0", height="90.0",
            )
        if not is_blank(name) and (self.ontology_prefix == "" or not name.startswith(self.ontology_prefix)):
            return replace(style, fill_color=COLORS["vowl_external_class"], text_color=WHITE)
        return replace(style, fill_color=COLORS["vowl_class"], border_type="solid", text_color=BLACK)

    @staticmethod
    def _vowl_datatype(style: NodeStyle, label: str) -> NodeStyle:
        lines, longest = labels.attribute_details(label)
        width = max(longest * 11, 100)
        return replace(
            style, shape="squareRectangle", fill_color=COLORS["vowl_datatype"],
            text_color=BLACK, border_type="solid",
            width=_dimension(width), height=_dimension(lines * 20 + 20),
        )

    def datatype_node_style(self, label: str) -> NodeStyle:
        """Datatype nodes keep the configured shape token, only geometry and colors follow the label."""
        base = self.base_node_style(NodeKind.DATATYPE)
        return replace(self.size_for_shape(base, label), shape=base.shape)

    def graffoo_marker_style(self, is_class_restriction: bool, width: int, height: int) -> NodeStyle:
        """Graffoo draws restrictions, connectives and enumerations as dashed nodes."""
        if is_class_restriction:
            shape, fill = "roundRectangle", COLORS["graffoo_restriction"]
        else:
            shape, fill = "parallelogramRight", COLORS["graffoo_datatype_restriction"]
        return NodeStyle(
            shape=shape, fill_color=fill, text_color=BLACK, border_color=BLACK,
            border_type="dashed", border_width="1.0",
            width=_dimension(width), height=_dimension(height),
        )

    @staticmethod
    def graffoo_individual_style() -> NodeStyle:
        return NodeStyle(
            shape="ellipse", fill_color=COLORS["graffoo_individual"], text_color=BLACK,
            border_color=BLACK, border_type="solid", border_width="1.0",
            width="20.0", height="20.0", model_name="eight_pos", model_position="e",
        )

    @staticmethod
    def vowl_split_node(property_type: PropertyType, name: str) -> Tuple[NodeStyle, str]:
        """Style and label of a synthetic terminal node created by VOWL splitting."""
        style = NodeStyle(
            shape="ellipse", fill_color=WHITE, text_color=BLACK, border_color=BLACK,
            border_type="dashed", border_width="2.0", width="90.0", height="90.0",
        )
        if property_type is PropertyType.RDF:
            return replace(style, fill_color=COLORS["vowl_rdfs_class"]), "Resource"
        if property_type in (PropertyType.DATATYPE, PropertyType.ANNOTATION):
            style = replace(style, shape="squareRectangle", fill_color=COLORS["vowl_datatype"], height="30.0")
            return style, name[name.rfind(":") + 1:]
        return style, "Thing"

    # ------------------------------------------------------------------ #
    # Notes
    # ------------------------------------------------------------------ #

    def note_style(self, height: int, width: int, line_type: str = "solid") -> NoteStyle:
        return NoteStyle(line_type=line_type, height=height, width=width, font_size=self.convention.font_size)

    # ------------------------------------------------------------------ #
    # Edges
    # ------------------------------------------------------------------ #

    def relationship_edge(self, kind: Optional[RelationKind]) -> EdgeStyle:
        """Edge for equivalent, disjoint and subclass relationships (and anything blank-node related)."""
        if kind is not None and not isinstance(kind, RelationKind):
            raise UnknownRelationKindError(f"Unknown relationship kind: {kind!r}")

        target_arrow = "triangleSolid"
        line_type = "solid"
        label = "owl:equivalentClass"
        if self.is_uml:
            target_arrow = "angleBracket"
        if self.is_vowl:
            target_arrow = "triangleEmpty"
            line_type = "dashed"
            label = "Equivalent to"

        if kind is RelationKind.DISJOINT:
            label = "Disjoint with" if self.is_vowl else "owl:disjointWith"
        elif kind is RelationKind.SUPER:
            target_arrow = self.convention.subclass_edge.target_arrow
            line_type = self.convention.subclass_edge.line_type
            if self.is_vowl:
                label = "Subclass of"
            elif self.is_uml:
                label = ""
            else:
                label = "rdfs:subClassOf"

        return EdgeStyle(
            source_arrow="none",
            target_arrow=target_arrow,
            line_type=line_type,
            line_color=BLACK,
            line_width=self.convention.line_width,
            label=label,
            label_background=WHITE,
            label_color=BLACK,
            font_size=self.convention.font_size,
        )

    def reset(self, edge: EdgeStyle) -> EdgeStyle:
        """Unlabeled, and dashed except for UML."""
        if self.is_uml:
            return replace(edge, label="")
        return replace(edge, label="", line_type="dashed")

    def typed_edge(self, kind: EdgeKind) -> EdgeStyle:
        c = self.convention
        if kind is EdgeKind.SUBCLASS:
            return c.subclass_edge
        if kind is EdgeKind.TYPE_OF:
            return c.type_edge
        if kind is EdgeKind.DATA:
            return c.data_prop_edge
        if kind is EdgeKind.OBJECT:
            return c.obj_prop_edge
        raise AssertionError(f"Unhandled edge kind: {kind!r}")

    def _property_type_edge(self, property_type: PropertyType) -> EdgeStyle:
        c = self.convention
        if property_type is PropertyType.OBJECT:
            return c.obj_prop_edge
        if property_type is PropertyType.DATATYPE:
            return c.data_prop_edge
        if property_type is PropertyType.RDF:
            return c.rdf_prop_edge
        if property_type is PropertyType.ANNOTATION:
            return c.ann_prop_edge
        raise AssertionError(f"Unhandled property type: {property_type!r}")

    def property_edge(self, prop: PropertyRecord) -> Tuple[EdgeStyle, str]:
        """
        Returns the edge style for a property and the id prefix of its edges
        (the property type tag followed by the property name).
        """
        if self.convention.collapse_edges:
            # Collapsed labels already list every grouped name with its flags
            label = prop.label
        else:
            label = labels.prefixed_name_from_label(prop.label)

        base = self._property_type_edge(prop.property_type)
        background = WHITE
        if self.is_vowl:
            background = _VOWL_PROPERTY_BACKGROUNDS[prop.property_type]

        id_prefix = prop.property_type.value + prop.name

        if self.is_vowl:
            if not id_prefix.startswith(prop.property_type.value + self.ontology_prefix):
                background = COLORS["vowl_external_class"]
            label = labels.truncate(
                labels.display_label("vowl", self.ontology_prefix, id_prefix, prop.label, False)
            )
            if prop.property_type is PropertyType.ANNOTATION:
                label += labels.NEW_LINE + "(annotation)"

        edge = EdgeStyle(
            source_arrow=base.source_arrow,
            target_arrow=base.target_arrow,
            line_type=base.line_type,
            line_color=base.line_color,
            line_width=self.convention.line_width,
            label=label,
            label_background=background,
            label_color=BLACK,
            font_size=self.convention.font_size,
        )
        return edge, id_prefix

    def uml_association_edge(self) -> EdgeStyle:
        """Unlabeled edge in object-property styling, used for UML attribute and type links."""
        return replace(self.convention.obj_prop_edge, label="", label_background=WHITE, label_color=BLACK)
