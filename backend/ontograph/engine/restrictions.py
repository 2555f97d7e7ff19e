"""
Restriction notes and the someValuesFrom/allValuesFrom links that leave them.

Restrictions are expanded into "steps" (emitted fragments and follow-up tasks)
instead of being rendered recursively, the traversal loop in resolver.py drives
the steps in order.
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Union

from ontograph.ir.errors import MalformedInputError
from ontograph.ir.models import RelationKind, is_blank
from ontograph.renderer.graphml_primitives import GraphElement, add_edge, add_node, add_note
from ontograph.visual.labels import NEW_LINE, max_length

logger = logging.getLogger(__name__)

BLANK = "blank"
RESTRICTION = "restriction"

SOME_VALUES_FROM = "someValuesFrom"
ALL_VALUES_FROM = "allValuesFrom"

# Detail prefix -> (note heading, edge id prefix, offset of the datatype list)
_DATATYPE_CONNECTIVES = (
    ("unionOf ", "Union of", "unionOf", len("unionOf ")),
    ("intersectionOf ", "Intersection of", "intersectionOf", len("intersectionOf ")),
    ("complementOf ", "Complement of", "complementOf", len("complementOf ")),
)


@dataclass(frozen=True)
class BlankTask:
    node: str                               # blank id, or a named datatype for restrictions
    related: str                            # owning entity, '' when there is none
    kind: Optional[RelationKind]
    depth: int
    mode: str = BLANK                       # blank | restriction


Fragment = List[GraphElement]
Step = Union[Fragment, BlankTask]


class RestrictionRenderer:
    """Mixin of RelationshipResolver: restriction notes, datatype connectives and values-from links."""

    def _expand_restriction(self, task: BlankTask) -> List[Step]:
        entity, related = task.node, task.related
        restriction = self.model.find_restriction(entity)
        if restriction is None:
            raise MalformedInputError(
                f"Blank node {entity} has no relationship or restriction details", entity
            )

        edge = self.styles.reset(self.styles.relationship_edge(RelationKind.EQUIVALENT))
        steps: List[Step] = []
        heading = "Restriction:"
        text_lines: List[str] = []
        values_from = ""
        is_one_of = False

        for detail in restriction.details:
            connective = _datatype_connective(detail)
            if connective is not None:
                # A connective replaces whatever was collected so far
                heading, id_prefix, datatypes = connective
                text_lines = []
                for datatype in datatypes:
                    steps.append([
                        add_node(self.styles.datatype_node_style(datatype), entity + datatype, datatype),
                        add_edge(edge, entity, entity + datatype, id_prefix + entity + datatype),
                    ])
            elif SOME_VALUES_FROM + " " in detail or ALL_VALUES_FROM + " " in detail:
                kind = ALL_VALUES_FROM if ALL_VALUES_FROM + " " in detail else SOME_VALUES_FROM
                values_from = detail[detail.index("ValuesFrom ") + len("ValuesFrom "):]
                steps.extend(self._values_from(task, values_from, kind))
            elif "oneOf " in detail:
                is_one_of = True
            else:
                text_lines.append(detail)

        if is_one_of or not restriction.details:
            return steps

        text = heading + "".join(NEW_LINE + line for line in text_lines)
        steps.append([self._restriction_note(entity, text, text_lines, values_from, restriction.is_class_restriction)])
        if related and related != entity:
            steps.append([add_edge(edge, related, entity, "restriction")])
        return steps

    def _restriction_note(self, name: str, text: str, lines: List[str], values_from: str,
                          is_class_restriction: bool) -> GraphElement:
        height = (len(lines) + 3) * 15
        if values_from:
            height -= 15
        width = (max_length(lines) + 2) * 10

        if self.styles.is_graffoo:
            return add_node(self.styles.graffoo_marker_style(is_class_restriction, width, height), name, text)
        line_type = "dashed" if self.styles.is_vowl else "solid"
        return add_note(self.styles.note_style(height, width, line_type), name, text)

    def _values_from(self, task: BlankTask, target: str, kind: str) -> List[Step]:
        """Render what a values-from target needs, then the labeled edge leaving the restriction."""
        steps: List[Step] = []
        edge = self.styles.reset(self.styles.relationship_edge(RelationKind.EQUIVALENT))
        restriction = self.model.find_restriction(target)

        if restriction is not None and not restriction.is_class_restriction:
            first = restriction.details[0] if restriction.details else ""
            if "oneOf" in first:
                members = self.equivalents.get(target)
                if members is None:
                    raise MalformedInputError(f"Enumeration {target} has no members", target)
                return [self._enumeration(False, target, task.node, [m.target for m in members], kind)]
            steps.append(BlankTask(target, target, None, task.depth + 1, RESTRICTION))
        elif is_blank(target):
            if target in self.equivalents or target in self.connectives:
                steps.append(BlankTask(target, "", None, task.depth + 1, BLANK))
            elif restriction is not None:
                steps.append(BlankTask(target, "", None, task.depth + 1, RESTRICTION))
            else:
                raise MalformedInputError(
                    f"{kind} target {target} of {task.node} resolves to nothing", target
                )

        steps.append([add_edge(replace(edge, label=kind), task.node, target, kind)])
        return steps


def _datatype_connective(detail: str):
    for marker, heading, id_prefix, offset in _DATATYPE_CONNECTIVES:
        if marker in detail:
            listed = detail[detail.index(marker) + offset:]
            return heading, id_prefix, [d for d in listed.split(" ") if d]
    return None
