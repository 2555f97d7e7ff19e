import logging
from typing import Optional, Sequence

from ontograph.ir.models import OWL_THING, RDFS_CLASS, RDFS_RESOURCE, PrefixRecord
from ontograph.renderer.graph_document import GraphDocument
from ontograph.renderer.graphml_primitives import (
    close_graph,
    close_vowl_graph,
    graph_header,
    prefixes_box,
    title_box,
)

logger = logging.getLogger(__name__)

# Universal nodes that are only drawn when something points at them
UNUSED_CANDIDATES = (OWL_THING, RDFS_CLASS, RDFS_RESOURCE)


def finalize_body(doc: GraphDocument) -> GraphDocument:
    for node in UNUSED_CANDIDATES:
        doc.remove_unused(node)
    doc.remove_duplicates()
    return doc


def compose_document(
    body: GraphDocument,
    visualization: str,
    title: str,
    ontology_uri: Optional[str],
    prefixes: Sequence[PrefixRecord] = (),
    generated: Optional[str] = None,
    image_dir: Optional[str] = None,
) -> str:
    """
    Wrap a finished body with the GraphML header, the front matter boxes and the footer.
    VOWL has no prefix legend and embeds its connective marker images in the footer.
    """
    parts = [graph_header(), title_box(title, ontology_uri, generated)]

    is_vowl = visualization == "vowl"
    if not is_vowl and prefixes:
        parts.append(prefixes_box(prefixes))

    parts.append(body.serialize())
    parts.append(close_vowl_graph(image_dir) if is_vowl else close_graph())

    logger.debug("[Composer] %d nodes, %d edges", len(body.nodes), len(body.edges))
    return "".join(parts)
