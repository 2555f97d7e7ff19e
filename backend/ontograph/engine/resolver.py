"""
Relationship resolution: equivalent/disjoint/subclass edges and anonymous class expressions.

Blank nodes are resolved with an explicit stack. Expanding a node yields an ordered list of
steps (fragments to emit, child nodes to resolve) which are pushed in reverse, so the output
order is the same as a depth first walk of the expression tree. A blank node reached again from
one of its own members, or nested deeper than the configured ceiling, is malformed input. A blank
node shared by two members is drawn once and linked from both.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple, Union

from ontograph import config
from ontograph.engine.relation_map import normalize_relation_map
from ontograph.engine.restrictions import BLANK, RESTRICTION, BlankTask, Fragment, RestrictionRenderer, Step
from ontograph.ir.errors import MalformedInputError
from ontograph.ir.models import (
    OWL_THING,
    RDFS_DATATYPE,
    OntologyModel,
    Relation,
    RelationKind,
    is_blank,
)
from ontograph.renderer.graphml_primitives import add_edge, add_image, add_node, add_note, node_id
from ontograph.visual.labels import NEW_LINE, max_length
from ontograph.visual.style_resolver import StyleResolver
from ontograph.visual.visual_schema import EdgeKind

logger = logging.getLogger(__name__)

# Ordered set of referenced class labels (dict keys keep insertion order)
Referenced = Dict[str, None]

ENUMERATION_HEADING = "Enumeration Individuals (OneOf)"

_MARKER_TEXT = {
    RelationKind.COMPLEMENT: " Complement of ",
    RelationKind.UNION: " Union of ",
    RelationKind.INTERSECTION: " Intersection of ",
}

_MARKER_IMAGE = {
    RelationKind.COMPLEMENT: "complement",
    RelationKind.UNION: "union",
    RelationKind.INTERSECTION: "intersection",
}


@dataclass(frozen=True)
class _Leave:
    """Stack marker: every member of node has been resolved."""
    node: str


class RelationshipResolver(RestrictionRenderer):
    """
    Resolves relationship records of one view into graph elements.

    A resolver belongs to a single render call: the equivalents map is normalized
    once when it is built and the set of rendered blank nodes only grows.
    """

    def __init__(self, model: OntologyModel, styles: StyleResolver,
                 equivalents: Optional[Dict[str, List[Relation]]] = None,
                 max_depth: Optional[int] = None):
        self.model = model
        self.styles = styles
        if equivalents is None:
            equivalents = normalize_relation_map(model.equivalents)
        self.equivalents = equivalents
        self.connectives = model.connectives
        self.max_depth = config.ONTOGRAPH_MAX_BLANK_DEPTH if max_depth is None else max_depth
        self.rendered_blanks: Set[str] = set()

    # ------------------------------------------------------------------ #
    # Entry points
    # ------------------------------------------------------------------ #

    def add_related(self, class_name: str, relations: Sequence[Relation],
                    referenced: Optional[Referenced] = None) -> Fragment:
        """Edges and blank-node sub-graphs for the relationship records of one entity."""
        referenced = {} if referenced is None else referenced
        out: Fragment = []
        members: List[str] = []

        for relation in relations:
            if relation.kind is RelationKind.ONE_OF:
                members.append(relation.target)
            elif is_blank(relation.target):
                out.extend(self.resolve_blank_node(relation.target, class_name, relation.kind, referenced))
            else:
                out.extend(self._equivalent_disjoint(class_name, relation.target, relation.kind))

        if members:
            restriction = self.model.find_restriction(class_name)
            is_class_restriction = restriction.is_class_restriction if restriction else True
            out.extend(self._enumeration(is_class_restriction, class_name + "OneOf", class_name, members))
        return out

    def resolve_blank_node(self, blank: str, related: str, kind: Optional[RelationKind],
                           referenced: Optional[Referenced] = None) -> Fragment:
        return self._traverse(BlankTask(blank, related, kind, 0, BLANK), referenced)

    def render_restriction(self, entity: str, related: str = "",
                           referenced: Optional[Referenced] = None) -> Fragment:
        return self._traverse(BlankTask(entity, related, None, 0, RESTRICTION), referenced)

    def add_blank_superclasses(self, pairs: Iterable[Tuple[str, str]],
                               referenced: Optional[Referenced] = None) -> Fragment:
        """pairs of (class name, blank superclass), collected while the class nodes were emitted."""
        out: Fragment = []
        for class_name, blank in pairs:
            out.extend(self.add_related(class_name, [Relation(RelationKind.SUPER, blank)], referenced))
        return out

    def add_subclass_edges(self, class_name: str, super_classes: Iterable[str]) -> Fragment:
        edge = self.styles.typed_edge(EdgeKind.SUBCLASS)
        out: Fragment = []
        for super_class in super_classes:
            if is_blank(super_class) or super_class == OWL_THING:
                continue
            if super_class == RDFS_DATATYPE:
                out.append(add_edge(replace(edge, label=""), class_name, super_class, "datatype"))
            else:
                out.append(add_edge(edge, class_name, super_class, "subClassOf"))
        return out

    def prefixed_class_name(self, name: str) -> str:
        if name.startswith("http://") or name.startswith("urn:"):
            cl = self.model.find_class(name)
            if cl is not None:
                return cl.name
        return name

    # ------------------------------------------------------------------ #
    # Traversal
    # ------------------------------------------------------------------ #

    def _traverse(self, root: BlankTask, referenced: Optional[Referenced]) -> Fragment:
        referenced = {} if referenced is None else referenced
        out: Fragment = []
        path: Set[str] = set()
        expanded: Set[str] = set()
        stack: List[Union[Step, _Leave]] = [root]

        while stack:
            step = stack.pop()
            if isinstance(step, list):
                out.extend(step)
                continue
            if isinstance(step, _Leave):
                path.discard(step.node)
                continue

            if step.depth > self.max_depth:
                raise MalformedInputError(
                    f"Blank node {step.node} is nested deeper than {self.max_depth} levels", step.node
                )
            if step.node in path:
                raise MalformedInputError(
                    f"Blank node {step.node} refers back to itself through {step.related or 'its members'}",
                    step.node,
                )
            if step.node in expanded:
                # Shared sub-expression: link it again, draw it once
                out.extend(self._connecting_edges(step, referenced))
                continue

            path.add(step.node)
            expanded.add(step.node)
            self.rendered_blanks.add(step.node)
            logger.debug("[Resolver] Resolving %s %s (related %r, depth %d)",
                         step.mode, step.node, step.related, step.depth)

            stack.append(_Leave(step.node))
            stack.extend(reversed(self._expand(step, referenced)))

        return out

    def _expand(self, task: BlankTask, referenced: Referenced) -> List[Step]:
        if task.mode == RESTRICTION:
            return self._expand_restriction(task)
        return self._expand_blank(task, referenced)

    def _connecting_edges(self, task: BlankTask, referenced: Referenced) -> Fragment:
        """Edges that reach task.node from its new owner, without the node's own contents."""
        own_id = node_id(task.node)
        return [
            element
            for step in self._expand(task, referenced)
            if isinstance(step, list)
            for element in step
            if element.kind == "edge" and element.source != own_id
        ]

    def _expand_blank(self, task: BlankTask, referenced: Referenced) -> List[Step]:
        blank, class_name = task.node, task.related
        if blank not in self.connectives and blank not in self.equivalents:
            return self._expand_restriction(task)

        complement, unions, intersections, individuals = self._connective_members(blank)

        edge = self.styles.relationship_edge(task.kind)
        if is_blank(class_name):
            edge = self.styles.reset(edge)

        steps: List[Step] = []
        for kind, members in (
            (RelationKind.COMPLEMENT, [complement] if complement else []),
            (RelationKind.UNION, unions),
            (RelationKind.INTERSECTION, intersections),
        ):
            if not members:
                continue
            fragment = [self._connective_marker(blank, kind)]
            if class_name:
                fragment.append(add_edge(edge, class_name, blank, _MARKER_IMAGE[kind] + "Of"))
            edge = self.styles.reset(edge)
            steps.append(fragment)

            for member in members:
                if is_blank(member):
                    steps.append(BlankTask(member, blank, kind, task.depth + 1, BLANK))
                else:
                    steps.append(self._referenced_member(blank, member, kind, edge, referenced))

        if individuals:
            steps.append(self._enumeration(True, blank, class_name, individuals))
        return steps

    def _connective_members(self, blank: str):
        complement = ""
        unions: List[str] = []
        intersections: List[str] = []
        individuals: List[str] = []

        for relation in self.connectives.get(blank, []) + self.equivalents.get(blank, []):
            if relation.kind is RelationKind.COMPLEMENT:
                complement = relation.target
            elif relation.kind is RelationKind.UNION:
                if relation.target not in unions:
                    unions.append(relation.target)
            elif relation.kind is RelationKind.INTERSECTION:
                if relation.target not in intersections:
                    intersections.append(relation.target)
            elif relation.kind is RelationKind.ONE_OF:
                individuals.append(relation.target)
            else:
                raise MalformedInputError(
                    f"Unexpected {relation.kind.value} relationship to {relation.target} in blank node {blank}",
                    blank,
                )
        return complement, unions, intersections, individuals

    def _referenced_member(self, blank: str, member: str, kind: RelationKind, edge,
                           referenced: Referenced) -> Fragment:
        name = self.prefixed_class_name(member)
        cl = self.model.find_class(member)
        referenced[cl.label if cl is not None else name] = None
        return [add_edge(edge, blank, name, kind.value)]

    # ------------------------------------------------------------------ #
    # Fragments
    # ------------------------------------------------------------------ #

    def _connective_marker(self, blank: str, kind: RelationKind):
        if self.styles.is_vowl:
            return add_image(blank, _MARKER_IMAGE[kind])

        text = _MARKER_TEXT[kind]
        width = len(text) * 9
        if self.styles.is_graffoo:
            return add_node(self.styles.graffoo_marker_style(True, width, 50), blank, text)
        return add_note(self.styles.note_style(50, width), blank, text)

    def _equivalent_disjoint(self, class_name: str, related: str, kind: RelationKind) -> Fragment:
        edge = self.styles.relationship_edge(kind)
        source = self.prefixed_class_name(class_name)
        target = self.prefixed_class_name(related)

        if kind is RelationKind.DISJOINT and self.styles.is_vowl:
            edge = replace(edge, label="", target_arrow="none")
            image = source + target + "dis"
            return [
                add_image(image, "disjoint"),
                add_edge(edge, source, image, "disjoint"),
                add_edge(edge, target, image, "disjoint"),
            ]
        id_prefix = "disjoint" if kind is RelationKind.DISJOINT else "equiv"
        return [add_edge(edge, source, target, id_prefix)]

    def _enumeration(self, is_class_restriction: bool, blank: str, enum_class: str,
                     individuals: List[str], edge_label: str = "") -> Fragment:
        """
        One-of members of blank, linked from enum_class when there is one.

        Graffoo draws a marker node plus one node per member, every other convention
        lists the members in a single note.
        """
        out: Fragment = []
        edge = self.styles.relationship_edge(RelationKind.EQUIVALENT)
        if not is_class_restriction:
            edge = self.styles.reset(edge)
        width = max_length(individuals, ENUMERATION_HEADING) * 9

        if self.styles.is_graffoo:
            individual_view = self.styles.graph_type == "individual"
            target = enum_class
            if not individual_view or not enum_class:
                target = blank
                out.append(add_node(
                    self.styles.graffoo_marker_style(is_class_restriction, width, 50), blank, ENUMERATION_HEADING
                ))
            member_edge = replace(edge, label="")
            for individual in individuals:
                out.append(add_node(
                    self.styles.graffoo_individual_style(), individual,
                    self.styles.display_label(individual, individual),
                ))
                out.append(add_edge(member_edge, target, individual, "oneOf"))
            if individual_view:
                return out
        else:
            if "ValuesFrom" in edge_label:
                edge = replace(edge, label=edge_label)
            height = (len(individuals) + 3) * 13
            text = NEW_LINE + ENUMERATION_HEADING + ":" + NEW_LINE + "".join(
                "  " + individual + NEW_LINE for individual in individuals
            )
            line_type = "dashed" if self.styles.is_vowl else "solid"
            out.append(add_note(self.styles.note_style(height, width, line_type), blank, text))

        if enum_class:
            out.append(add_edge(edge, enum_class, blank, "oneOf"))
        return out
