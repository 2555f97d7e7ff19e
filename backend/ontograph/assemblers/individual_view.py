import logging
from dataclasses import replace
from typing import Dict, List

from ontograph.assemblers.property_view import referenced_class_node
from ontograph.engine.resolver import Referenced, RelationshipResolver
from ontograph.ir.models import IndividualRecord, OntologyModel, Relation, RelationKind, is_blank
from ontograph.renderer.graph_document import GraphDocument
from ontograph.renderer.graphml_primitives import GraphElement, add_edge, add_node
from ontograph.visual.labels import prefixed_name_from_label
from ontograph.visual.visual_schema import EdgeKind, NodeKind

logger = logging.getLogger(__name__)


def assemble_individual_view(model: OntologyModel, resolver: RelationshipResolver) -> GraphDocument:
    """
    Type, literal and object-property edges per individual. Individual and type nodes
    are drawn once at the end, after every individual has been seen.
    """
    styles = resolver.styles
    doc = GraphDocument()

    # Ordered sets (dict keys)
    individuals: Dict[str, None] = {}
    types: Dict[str, None] = {}
    referenced: Referenced = {}

    for indiv in model.individuals:
        doc.extend(_type_edges(resolver, indiv, referenced))
        if indiv.label != indiv.name:
            # A bare reference seen earlier is replaced by the full label
            individuals.pop(indiv.name, None)
        individuals[indiv.label] = None
        for type_label in indiv.type_labels:
            types[type_label] = None

        for pv in indiv.datatype_properties:
            doc.extend(_literal_value(resolver, indiv.name, pv.predicate, pv.value))

        edge = styles.typed_edge(EdgeKind.OBJECT)
        for pv in indiv.object_properties:
            doc.add(add_edge(replace(edge, label=pv.predicate), indiv.name, pv.value, pv.predicate))
            _add_unique_individual(individuals, pv.value)

    for label in individuals:
        name = prefixed_name_from_label(label)
        display = styles.display_label(name, label)
        doc.add(add_node(styles.resolve_node_style(NodeKind.INDIVIDUAL, name, display), name, display))

    for type_label in types:
        # Blank types were drawn while resolving the type edges
        if is_blank(type_label):
            continue
        name = prefixed_name_from_label(type_label)
        display = styles.display_label(name, type_label)
        doc.add(add_node(styles.resolve_node_style(NodeKind.CLASS, name, display), name, display))

    for ref in referenced:
        doc.add(referenced_class_node(styles, ref, NodeKind.CLASS))

    logger.debug("[IndividualView] %d individuals -> %d elements", len(model.individuals), len(doc))
    return doc


def _type_edges(resolver: RelationshipResolver, indiv: IndividualRecord, referenced: Referenced) -> List[GraphElement]:
    out: List[GraphElement] = []
    edge = resolver.styles.typed_edge(EdgeKind.TYPE_OF)
    for type_label in indiv.type_labels:
        if not type_label:
            continue
        type_name = prefixed_name_from_label(type_label)
        if is_blank(type_name):
            out.extend(resolver.add_related("", [Relation(RelationKind.EQUIVALENT, type_name)], referenced))
        out.append(add_edge(edge, indiv.name, type_name, "typeOf"))
    return out


def _literal_value(resolver: RelationshipResolver, individual: str, predicate: str, value: str) -> List[GraphElement]:
    styles = resolver.styles
    # One literal node per attribute, equal values on different individuals stay apart
    name = individual + predicate + value.replace('"', "")
    style = styles.resolve_node_style(NodeKind.DATATYPE, name, value, is_datatype=True)
    edge = replace(styles.typed_edge(EdgeKind.DATA), label=predicate)
    return [
        add_node(style, name, value),
        add_edge(edge, individual, name, predicate),
    ]


def _add_unique_individual(individuals: Dict[str, None], value: str) -> None:
    # "label (ex:i1)" already covers a bare ex:i1 reference
    if not any(value in known for known in individuals):
        individuals[value] = None
