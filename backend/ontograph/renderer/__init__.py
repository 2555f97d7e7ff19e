# GraphML renderer module
# Element primitives, per-render document bookkeeping and final document composition

from ontograph.renderer.graphml_primitives import GraphElement, add_edge, add_image, add_node, add_note, add_uml_node
from ontograph.renderer.graph_document import GraphDocument
from ontograph.renderer.composer import compose_document, finalize_body

__all__ = [
    "GraphElement",
    "add_edge",
    "add_image",
    "add_node",
    "add_note",
    "add_uml_node",
    "GraphDocument",
    "compose_document",
    "finalize_body",
]
