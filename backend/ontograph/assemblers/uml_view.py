"""
UML class and individual diagrams.

Classes become entity boxes listing their datatype attributes, object (and class-valued
rdf) properties become associations between the boxes. Blank nodes used as attribute
ranges or individual types get a readable "blankNode_..." name and are drawn once.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

from ontograph.assemblers.class_view import add_relationship_entries
from ontograph.assemblers.property_view import add_property_edges
from ontograph.engine.resolver import Referenced, RelationshipResolver
from ontograph.ir.models import (
    RDFS_CLASS,
    RDFS_LITERAL,
    RDFS_RESOURCE,
    EdgeFlag,
    IndividualRecord,
    OntologyModel,
    PropertyRecord,
    PropertyType,
    Relation,
    RelationKind,
    is_blank,
)
from ontograph.renderer.graph_document import GraphDocument
from ontograph.renderer.graphml_primitives import add_edge, add_uml_node
from ontograph.visual.labels import prefixed_name_from_label

logger = logging.getLogger(__name__)


def blank_node_id(blank: str) -> str:
    """Readable stand-in for a blank node id."""
    if blank.startswith("_:"):
        blank = blank[2:]
    if blank.startswith("bnode"):
        return "blankNode" + blank[blank.rfind("_"):]
    return "blankNode_" + blank


# ------------------------------------------------------------------ #
# Class diagram
# ------------------------------------------------------------------ #

def attribute_text(prop: PropertyRecord, attribute: str, blanks: Dict[str, None]) -> str:
    """'attr : range, range [0..1]', collecting blank ranges into blanks."""
    ranges = []
    for range_ in prop.ranges:
        if range_ == RDFS_LITERAL:
            ranges.append("xsd:String")
        elif is_blank(range_):
            blanks[range_] = None
            ranges.append(blank_node_id(range_))
        else:
            ranges.append(range_)

    text = attribute + " : " + ", ".join(ranges)
    if EdgeFlag.FUNCTIONAL in prop.flags:
        text += " [0..1]"
    return text


def assemble_uml_class_view(model: OntologyModel, resolver: RelationshipResolver,
                            properties: Optional[Sequence[PropertyRecord]] = None) -> GraphDocument:
    """
    properties are the (possibly collapsed) associations to draw. Attribute ranges always
    come from the declared properties.
    """
    styles = resolver.styles
    convention = styles.convention
    associations = model.properties if properties is None else properties
    doc = GraphDocument()

    blank_supers: List[Tuple[str, str]] = []
    attribute_blanks: Dict[str, None] = {}
    link = styles.uml_association_edge()

    for cl in model.uml_classes:
        class_blanks: Dict[str, None] = {}
        attributes = []
        for attribute in cl.attributes:
            for prop in model.properties:
                if attribute in prop.name:
                    attributes.append(attribute_text(prop, attribute, class_blanks))
                    break

        for blank in class_blanks:
            edge = replace(link, label="Attribute type: " + blank_node_id(blank))
            doc.add(add_edge(edge, cl.name, blank, "typeOf"))
        attribute_blanks.update(class_blanks)

        color = convention.uml_data_node_color if cl.is_datatype else convention.uml_node_color
        doc.add(add_uml_node(cl.name, cl.label, attributes, color))
        doc.extend(resolver.add_subclass_edges(cl.name, cl.super_classes))
        blank_supers += [(cl.name, sc) for sc in cl.super_classes if is_blank(sc)]

    referenced: Referenced = {}
    doc.extend(resolver.add_blank_superclasses(blank_supers, referenced))

    for blank in attribute_blanks:
        doc.extend(resolver.resolve_blank_node(blank, "", None, referenced))

    _add_associations(doc, model, resolver, associations)

    add_relationship_entries(doc, resolver, referenced)

    for ref in referenced:
        name = prefixed_name_from_label(ref)
        if not doc.has_node(name):
            doc.add(add_uml_node(name, ref, [], convention.uml_node_color))

    logger.debug("[UMLView] %d classes -> %d elements", len(model.uml_classes), len(doc))
    return doc


def _class_valued(range_: str) -> bool:
    if range_ in (RDFS_CLASS, RDFS_RESOURCE):
        return True
    return not ("rdfs:" in range_ or "rdf:" in range_ or "xsd:" in range_)


def _add_associations(doc: GraphDocument, model: OntologyModel, resolver: RelationshipResolver,
                      properties: Sequence[PropertyRecord]) -> None:
    """Object properties, and rdf properties with class ranges, as edges between boxes."""
    styles = resolver.styles
    class_labels = {cl.label for cl in model.classes}
    added: Dict[str, None] = {}

    for prop in properties:
        if prop.property_type in (PropertyType.DATATYPE, PropertyType.ANNOTATION):
            # Shown inside the class boxes
            continue

        if prop.property_type is PropertyType.OBJECT:
            ends = list(prop.domains) + list(prop.ranges)
        else:
            class_ranges = [r for r in prop.ranges if _class_valued(r)]
            ends = list(prop.domains) + class_ranges if class_ranges else []

        if not ends:
            continue

        for end in ends:
            name = prefixed_name_from_label(end)
            if end in class_labels or name in class_labels or end in added:
                continue
            added[end] = None
            if is_blank(end):
                doc.extend(resolver.add_related("", [Relation(RelationKind.EQUIVALENT, end)], {}))
            else:
                doc.add(add_uml_node(name, end, [], styles.convention.uml_node_color))

        doc.extend(add_property_edges(styles, prop))


# ------------------------------------------------------------------ #
# Individual diagram
# ------------------------------------------------------------------ #

def attribute_values(indiv: IndividualRecord) -> List[str]:
    """Literal properties as 'predicate : datatype = value'."""
    attributes = []
    for pv in indiv.datatype_properties:
        value = pv.value
        datatype = ""
        if '"' in pv.value:
            value = pv.value[1:pv.value.rindex('"')]
        if "xsd:" in pv.value:
            datatype = pv.value[pv.value.index("xsd:") + len("xsd:"):]
        attributes.append(f"{pv.predicate} : {datatype} = {value}")
    return attributes


def individual_box_label(indiv: IndividualRecord, types: List[str], blanks: Dict[str, None]) -> str:
    if not types or types[0] == "":
        return indiv.label + " : Unknown"

    shown = []
    for type_label in types:
        if is_blank(type_label):
            blanks[type_label] = None
            shown.append(blank_node_id(type_label))
        else:
            shown.append(type_label)
    return indiv.label + " : " + ", ".join(shown)


def assemble_uml_individual_view(model: OntologyModel, resolver: RelationshipResolver) -> GraphDocument:
    styles = resolver.styles
    color = styles.convention.uml_node_color
    link = styles.uml_association_edge()
    doc = GraphDocument()

    created: Dict[str, None] = {}
    referenced_individuals: Dict[str, None] = {}
    type_blanks: Dict[str, None] = {}

    for indiv in model.individuals:
        created[indiv.name] = None
        types = sorted(indiv.type_labels)
        label = individual_box_label(indiv, types, type_blanks)
        doc.add(add_uml_node(indiv.name, label, attribute_values(indiv), color))

        for type_label in types:
            if type_label and is_blank(type_label):
                type_blanks[type_label] = None
                edge = replace(link, label="Type: " + blank_node_id(type_label))
                doc.add(add_edge(edge, indiv.name, type_label, "typeOf"))

        # Only individual-to-individual links are drawn as associations
        for pv in indiv.object_properties:
            prop = PropertyRecord(
                name=pv.predicate, label=pv.predicate, full_name=pv.predicate,
                property_type=PropertyType.OBJECT, domains=[indiv.name], ranges=[pv.value],
            )
            doc.extend(add_property_edges(styles, prop))
            referenced_individuals[pv.value] = None

    for ref in referenced_individuals:
        if ref not in created:
            doc.add(add_uml_node(ref, ref + " : Unknown", [""], color))

    referenced: Referenced = {}
    for blank in type_blanks:
        doc.extend(resolver.resolve_blank_node(blank, "", None, referenced))

    for ref in referenced:
        if ref not in type_blanks:
            doc.add(add_uml_node(prefixed_name_from_label(ref), ref, [], color))

    logger.debug("[UMLView] %d individuals -> %d elements", len(model.individuals), len(doc))
    return doc
