# Relationship resolution module
# Normalizes the relationship maps and resolves anonymous class expressions into graph elements

from ontograph.engine.relation_map import normalize_relation_map
from ontograph.engine.resolver import Referenced, RelationshipResolver

__all__ = [
    "normalize_relation_map",
    "Referenced",
    "RelationshipResolver",
]
