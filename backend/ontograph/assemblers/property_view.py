import logging
from typing import Dict, List, Optional, Sequence, Tuple

from ontograph.engine.resolver import Referenced, RelationshipResolver
from ontograph.ir.models import (
    OWL_THING,
    RDFS_CLASS,
    RDFS_RESOURCE,
    OntologyModel,
    PropertyRecord,
    PropertyType,
    Relation,
    RelationKind,
    flags_text,
    is_blank,
)
from ontograph.renderer.graph_document import GraphDocument
from ontograph.renderer.graphml_primitives import GraphElement, add_edge, add_node
from ontograph.visual.labels import NEW_LINE, prefixed_name_from_label
from ontograph.visual.style_resolver import StyleResolver
from ontograph.visual.visual_schema import NodeKind

logger = logging.getLogger(__name__)

_UNIVERSAL = (OWL_THING, RDFS_RESOURCE)


# ------------------------------------------------------------------ #
# Collapse
# ------------------------------------------------------------------ #

def collapse_properties(properties: Sequence[PropertyRecord]) -> List[PropertyRecord]:
    """
    One synthetic property per (type, domain, range). Its label lists the grouped
    property names (with their characteristics) in encounter order.
    """
    groups: Dict[Tuple[PropertyType, str, str], List[str]] = {}
    for prop in properties:
        name = prop.name
        flags = flags_text(prop.flags)
        if flags:
            name += f" ({flags})"
        for domain in prop.domains:
            for range_ in prop.ranges:
                groups.setdefault((prop.property_type, domain, range_), []).append(name)

    collapsed = []
    for (property_type, domain, range_), names in groups.items():
        collapsed.append(PropertyRecord(
            name=prefixed_name_from_label(domain) + prefixed_name_from_label(range_),
            label=("," + NEW_LINE).join(names),
            property_type=property_type,
            domains=[domain],
            ranges=[range_],
        ))

    logger.debug("[PropertyView] Collapsed %d properties into %d edges", len(properties), len(collapsed))
    return collapsed


# ------------------------------------------------------------------ #
# Property edges
# ------------------------------------------------------------------ #

def add_property_edges(styles: StyleResolver, prop: PropertyRecord) -> List[GraphElement]:
    """One edge per (domain, range) pair, plus the split nodes VOWL needs."""
    edge, id_prefix = styles.property_edge(prop)
    out: List[GraphElement] = []

    for domain in prop.domains:
        for range_ in prop.ranges:
            source = prefixed_name_from_label(domain)
            target = prefixed_name_from_label(range_)
            if styles.is_vowl and not is_blank(range_):
                source, target, split_nodes = vowl_split(styles, prop, source, target)
                out.extend(split_nodes)
            out.append(add_edge(edge, source, target, id_prefix, prop.flags))
    return out


def vowl_split(styles: StyleResolver, prop: PropertyRecord, domain: str, range_: str):
    """
    VOWL never shares owl:Thing, rdfs:Resource or literal nodes between properties.
    Returns the (possibly renamed) domain and range and the nodes created for them.
    """
    name = prop.name
    property_type = prop.property_type
    new_domain, new_range = domain, range_

    if domain in _UNIVERSAL and range_ in _UNIVERSAL:
        new_range = domain + name + range_
    elif property_type is PropertyType.OBJECT and domain == OWL_THING:
        new_domain = OWL_THING + name + range_
    elif property_type is PropertyType.OBJECT and range_ == OWL_THING:
        new_range = OWL_THING + name + domain
    elif property_type in (PropertyType.DATATYPE, PropertyType.ANNOTATION):
        new_range = name + range_
    elif (range_ not in (RDFS_CLASS, RDFS_RESOURCE)
          and range_.startswith(("rdfs:", "rdf:", "xsd:"))):
        # rdf:Property with a literal range behaves like a datatype property
        new_range = name + range_
        property_type = PropertyType.DATATYPE
    elif domain == RDFS_RESOURCE:
        new_domain = RDFS_RESOURCE + name + range_
    elif range_ == RDFS_RESOURCE:
        new_range = RDFS_RESOURCE + name + domain

    nodes = []
    for old, new in ((domain, new_domain), (range_, new_range)):
        if new != old:
            style, label = styles.vowl_split_node(property_type, new)
            nodes.append(add_node(style, new, label))
    return new_domain, new_range, nodes


# ------------------------------------------------------------------ #
# View
# ------------------------------------------------------------------ #

def assemble_property_view(model: OntologyModel, resolver: RelationshipResolver,
                           properties: Optional[Sequence[PropertyRecord]] = None,
                           known: Optional[GraphDocument] = None) -> GraphDocument:
    """
    Property edges first, then the domain/range classes, the classes only reached
    through blank domains/ranges, and finally the datatype ranges.

    known is the document of an earlier pass (the class pass of a combined view);
    referenced classes it already holds are not drawn again.
    """
    styles = resolver.styles
    properties = model.properties if properties is None else properties
    doc = GraphDocument()

    # Ordered sets (dict keys)
    domain_or_range: Dict[str, None] = {}
    datatypes: Dict[str, None] = {}

    for prop in properties:
        for domain in prop.domains:
            domain_or_range[domain] = None
        targets = domain_or_range if prop.property_type is PropertyType.OBJECT else datatypes
        for range_ in prop.ranges:
            targets[range_] = None
        doc.extend(add_property_edges(styles, prop))

    referenced: Referenced = {}
    _add_class_nodes(doc, resolver, domain_or_range, referenced)
    _add_referenced_classes(doc, styles, domain_or_range, referenced, known)

    named = []
    for datatype in datatypes:
        if is_blank(datatype):
            # Datatype restriction
            doc.extend(resolver.resolve_blank_node(datatype, "", None, {}))
        else:
            named.append(datatype)

    # VOWL already drew a literal node per property while splitting
    if not styles.is_vowl:
        for datatype in named:
            doc.add(add_node(styles.datatype_node_style(datatype), datatype, datatype))

    logger.debug("[PropertyView] %d properties -> %d elements", len(properties), len(doc))
    return doc


def _add_class_nodes(doc: GraphDocument, resolver: RelationshipResolver,
                     domain_or_range: Dict[str, None], referenced: Referenced) -> None:
    styles = resolver.styles
    for entry in domain_or_range:
        name = entry
        label = entry
        if "(" in entry:
            name = prefixed_name_from_label(entry)
            if styles.is_vowl:
                label = entry[:entry.rindex("(") - 1]

        if is_blank(name):
            # No owning class in a property diagram, so no edge to one
            doc.extend(resolver.add_related("", [Relation(RelationKind.EQUIVALENT, name)], referenced))
        else:
            label = styles.display_label(name, label)
            doc.add(add_node(styles.resolve_node_style(NodeKind.OBJECT, name, label), name, label))


def _add_referenced_classes(doc: GraphDocument, styles: StyleResolver, domain_or_range: Dict[str, None],
                            referenced: Referenced, known: Optional[GraphDocument]) -> None:
    """Classes reached only through a union/intersection/complement still need a node."""
    for ref in referenced:
        if any(ref in entry for entry in domain_or_range):
            continue
        name = prefixed_name_from_label(ref)
        if doc.has_node(name) or (known is not None and known.has_node(name)):
            continue
        doc.add(referenced_class_node(styles, ref, NodeKind.OBJECT))


def referenced_class_node(styles: StyleResolver, ref: str, kind: NodeKind) -> GraphElement:
    name = prefixed_name_from_label(ref)
    label = styles.display_label(name, ref)
    return add_node(styles.resolve_node_style(kind, name, label), name, label)
