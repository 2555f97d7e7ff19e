"""
Label text helpers shared by the style resolver and the assemblers.
"""

from typing import Iterable, Tuple

from ontograph.ir.models import is_blank

NEW_LINE = "\n"

VOWL_LABEL_LIMIT = 15


def escape_brackets(text: str) -> str:
    """yEd labels carry raw text, only angle brackets need escaping."""
    return text.replace(">", "&gt;").replace("<", "&lt;")


def prefixed_name_from_label(label: str) -> str:
    """'display label (ex:name)' -> 'ex:name'. Labels without a parenthesised group are returned as-is."""
    if "(" in label:
        return label[label.rindex("(") + 1:label.rindex(")")]
    return label


def truncate(label: str, limit: int = VOWL_LABEL_LIMIT) -> str:
    if len(label) > limit:
        return label[:limit - 3] + "..."
    return label


def attribute_details(text: str) -> Tuple[int, int]:
    """
    Returns (number_of_lines, max_length) for a label.
    Only text followed by a newline counts as a line; when no line is terminated
    the whole text length is used.
    """
    max_length = 0
    number_of_lines = 0
    index = 0
    while True:
        next_index = text.find(NEW_LINE, index)
        if next_index < 0:
            break
        max_length = max(max_length, next_index - index)
        index = next_index + len(NEW_LINE)
        number_of_lines += 1

    if max_length == 0:
        max_length = len(text)
    return number_of_lines, max_length


def max_length(values: Iterable[str], opening_line: str = "") -> int:
    longest = max((len(v) for v in values), default=0)
    return max(longest, len(opening_line))


def is_external(ontology_prefix: str, name: str) -> bool:
    # Blank nodes and the owl/rdf vocabularies are never external
    return (
        not is_blank(name)
        and not name.startswith("owl")
        and not name.startswith("rdf")
        and (ontology_prefix == "" or not name.startswith(ontology_prefix))
    )


def display_label(visualization: str, ontology_prefix: str, name: str, label: str, for_node: bool) -> str:
    """
    Convention specific label text.

    graffoo shows the prefixed name taken from 'label (prefix:name)'.
    vowl strips the prefixed name (or the namespace of a bare URI/prefixed name),
    truncates to 15 characters and marks nodes from other namespaces as external.
    Every other convention shows the label unchanged.
    """
    if visualization == "graffoo" and "(" in label:
        return label[label.rindex("(") + 1:len(label) - 1]

    if visualization != "vowl":
        return label

    result = label
    if "(" in label:
        result = label[:label.rindex(" (")] if " (" in label else label[:label.rindex("(")]
    elif label.startswith("http") or label.startswith("urn"):
        if "#" in label:
            result = label[label.index("#") + 1:]
        else:
            result = label[label.rindex("/") + 1:]
    elif ":" in label:
        result = label[label.index(":") + 1:]

    result = truncate(result)

    if for_node and is_external(ontology_prefix, name):
        result += NEW_LINE + "(external)"
    return result
