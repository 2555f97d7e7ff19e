"""Tests for relationship map normalization"""

from ontograph.engine import normalize_relation_map
from ontograph.ir.models import Relation, RelationKind

EQ = RelationKind.EQUIVALENT
DIS = RelationKind.DISJOINT


def test_symmetric_pair_kept_once():
    relations = {
        "ex:A": [Relation(EQ, "ex:B")],
        "ex:B": [Relation(EQ, "ex:A")],
    }
    normalized = normalize_relation_map(relations)
    assert normalized == {"ex:A": [Relation(EQ, "ex:B")]}


def test_normalizing_twice_is_stable():
    relations = {
        "ex:A": [Relation(EQ, "ex:B"), Relation(DIS, "ex:C"), Relation(EQ, "ex:B")],
        "ex:C": [Relation(DIS, "ex:A"), Relation(EQ, "ex:D")],
        "ex:D": [Relation(EQ, "ex:C")],
        "b1": [Relation(RelationKind.ONE_OF, "ex:i1"), Relation(RelationKind.ONE_OF, "ex:i2")],
    }
    once = normalize_relation_map(relations)
    assert normalize_relation_map(once) == once
    assert once == {
        "ex:A": [Relation(EQ, "ex:B"), Relation(DIS, "ex:C")],
        "ex:C": [Relation(EQ, "ex:D")],
        "b1": [Relation(RelationKind.ONE_OF, "ex:i1"), Relation(RelationKind.ONE_OF, "ex:i2")],
    }


def test_different_kinds_are_not_merged():
    relations = {
        "ex:A": [Relation(EQ, "ex:B")],
        "ex:B": [Relation(DIS, "ex:A")],
    }
    assert normalize_relation_map(relations) == relations


def test_input_map_is_not_modified():
    relations = {
        "ex:A": [Relation(EQ, "ex:B")],
        "ex:B": [Relation(EQ, "ex:A")],
    }
    normalize_relation_map(relations)
    assert relations["ex:B"] == [Relation(EQ, "ex:A")]
