import logging
from typing import Optional, Sequence

from ontograph.assemblers.class_view import add_datatype_restrictions, assemble_class_view
from ontograph.assemblers.property_view import assemble_property_view
from ontograph.engine.resolver import RelationshipResolver
from ontograph.ir.models import OntologyModel, PropertyRecord
from ontograph.renderer.graph_document import GraphDocument

logger = logging.getLogger(__name__)


def assemble_combined_view(model: OntologyModel, class_resolver: RelationshipResolver,
                           property_resolver: RelationshipResolver,
                           properties: Optional[Sequence[PropertyRecord]] = None) -> GraphDocument:
    """
    Class pass followed by the property pass. Property-pass elements whose (kind, id)
    the class pass already emitted are dropped.
    """
    doc = assemble_class_view(model, class_resolver)
    add_datatype_restrictions(doc, model, class_resolver)

    known = doc.element_keys()
    property_doc = assemble_property_view(model, property_resolver, properties, known=doc)

    skipped = 0
    for element in property_doc.elements:
        if (element.kind, element.id) in known:
            skipped += 1
            continue
        doc.add(element)

    logger.debug("[CombinedView] Skipped %d property elements already drawn by the class pass", skipped)
    return doc
