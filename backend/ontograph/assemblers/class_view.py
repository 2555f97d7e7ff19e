import logging
from typing import List, Tuple

from ontograph.engine.resolver import RelationshipResolver
from ontograph.ir.models import OntologyModel, RelationKind, is_blank
from ontograph.renderer.graph_document import GraphDocument
from ontograph.renderer.graphml_primitives import add_node
from ontograph.visual.visual_schema import NodeKind

logger = logging.getLogger(__name__)


def assemble_class_view(model: OntologyModel, resolver: RelationshipResolver) -> GraphDocument:
    """
    Class hierarchy: one node per class, subclass edges, then every blank superclass
    and every equivalent/disjoint/one-of entry resolved once.
    """
    styles = resolver.styles
    doc = GraphDocument()
    blank_supers: List[Tuple[str, str]] = []

    for cl in model.classes:
        label = styles.display_label(cl.name, cl.label)
        doc.add(add_node(styles.resolve_node_style(NodeKind.CLASS, cl.name, label), cl.name, label))
        doc.extend(resolver.add_subclass_edges(cl.name, cl.super_classes))
        blank_supers += [(cl.name, sc) for sc in cl.super_classes if is_blank(sc)]

    # Class diagrams never materialize referenced classes, they are all declared
    referenced = {}
    doc.extend(resolver.add_blank_superclasses(blank_supers, referenced))
    add_relationship_entries(doc, resolver, referenced)

    logger.debug("[ClassView] %d classes -> %d elements", len(model.classes), len(doc))
    return doc


def add_relationship_entries(doc: GraphDocument, resolver: RelationshipResolver, referenced) -> None:
    """
    Named entries first, then blank entries that no named entry reached. A blank entry
    holding only one-of members is drawn as its own enumeration.
    """
    blank_entries = []
    for name, relations in resolver.equivalents.items():
        if is_blank(name):
            blank_entries.append((name, relations))
        else:
            doc.extend(resolver.add_related(name, relations, referenced))

    for name, relations in blank_entries:
        if name in resolver.rendered_blanks:
            continue
        if all(r.kind is RelationKind.ONE_OF for r in relations):
            doc.extend(resolver.resolve_blank_node(name, "", None, referenced))
        else:
            doc.extend(resolver.add_related(name, relations, referenced))


def add_datatype_restrictions(doc: GraphDocument, model: OntologyModel, resolver: RelationshipResolver) -> None:
    """Datatypes defined in the ontology carry their own restriction (facets, unions, one-of)."""
    for cl in model.classes:
        # A bare rdfs:Datatype declaration has nothing to draw
        if cl.is_datatype and model.find_restriction(cl.name) is not None:
            doc.extend(resolver.render_restriction(cl.name, ""))
