from typing import Dict, List, Set, Tuple

from ontograph.ir.models import Relation, RelationKind


def normalize_relation_map(relations: Dict[str, List[Relation]]) -> Dict[str, List[Relation]]:
    """
    Collapse symmetric pairs in the equivalents/disjoints/one-of map.

    (kind, A, B) and (kind, B, A) are kept once, as the first one met in map order,
    and repeated records disappear. Keys whose every record was a repeat are dropped.
    Normalizing an already normalized map returns an equal map.
    """
    seen: Set[Tuple[RelationKind, str, str]] = set()
    normalized: Dict[str, List[Relation]] = {}

    for source, related in relations.items():
        for relation in related:
            key = (relation.kind, source, relation.target)
            mirrored = (relation.kind, relation.target, source)
            if key in seen or mirrored in seen:
                continue
            seen.add(key)
            normalized.setdefault(source, []).append(relation)

    return normalized
