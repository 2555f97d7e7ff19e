import logging
from typing import Iterable, List, Set, Tuple

from ontograph.renderer.graphml_primitives import GraphElement, node_id

logger = logging.getLogger(__name__)


class GraphDocument:
    """
    Ordered collection of node and edge fragments for one document body.

    Elements are kept structured until serialize() so that the combined
    class+property view and the post-processing passes work on ids rather
    than on substrings of the rendered XML.
    """

    def __init__(self, elements: Iterable[GraphElement] = ()):
        self.elements: List[GraphElement] = []
        self._keys: Set[Tuple[str, str]] = set()
        self.extend(elements)

    def __len__(self) -> int:
        return len(self.elements)

    def add(self, element: GraphElement):
        self.elements.append(element)
        self._keys.add((element.kind, element.id))

    def extend(self, elements: Iterable[GraphElement]):
        for element in elements:
            self.add(element)

    def has_id(self, kind: str, element_id: str) -> bool:
        return (kind, element_id) in self._keys

    def has_node(self, name: str) -> bool:
        return self.has_id("node", node_id(name))

    def element_keys(self) -> Set[Tuple[str, str]]:
        return set(self._keys)

    @property
    def nodes(self) -> List[GraphElement]:
        return [e for e in self.elements if e.kind == "node"]

    @property
    def edges(self) -> List[GraphElement]:
        return [e for e in self.elements if e.kind == "edge"]

    def _rebuild_keys(self):
        self._keys = {(e.kind, e.id) for e in self.elements}

    # ------------------------------------------------------------------ #
    # Post-processing
    # ------------------------------------------------------------------ #

    def remove_unused(self, name: str) -> bool:
        """Drop the node with this id when no edge starts or ends at it."""
        element_id = node_id(name)
        if not self.has_id("node", element_id):
            return False
        for edge in self.edges:
            if edge.source == element_id or edge.target == element_id:
                return False

        self.elements = [e for e in self.elements if not (e.kind == "node" and e.id == element_id)]
        self._rebuild_keys()
        logger.debug("[GraphDocument] Removed unreferenced node %s", element_id)
        return True

    def remove_duplicates(self) -> int:
        """Keep the first node/edge for every id. Returns the number of dropped elements."""
        seen: Set[Tuple[str, str]] = set()
        kept: List[GraphElement] = []
        for element in self.elements:
            key = (element.kind, element.id)
            if key in seen:
                continue
            seen.add(key)
            kept.append(element)

        dropped = len(self.elements) - len(kept)
        self.elements = kept
        if dropped:
            logger.debug("[GraphDocument] Dropped %d duplicate elements", dropped)
        return dropped

    def serialize(self) -> str:
        return "".join(e.xml for e in self.elements)
