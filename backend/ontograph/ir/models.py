from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from ontograph.ir.errors import UnknownRelationKindError


OWL_THING = "owl:Thing"
OWL_NOTHING = "owl:Nothing"
RDFS_CLASS = "rdfs:Class"
RDFS_RESOURCE = "rdfs:Resource"
RDFS_LITERAL = "rdfs:Literal"
RDFS_DATATYPE = "rdfs:Datatype"


def is_blank(identifier: str) -> bool:
    """Blank nodes carry no prefix separator, or the RDF blank node marker '_:'."""
    return identifier.startswith("_:") or ":" not in identifier


class RelationKind(Enum):
    SUPER = "super"
    EQUIVALENT = "eq"
    DISJOINT = "dis"
    ONE_OF = "one"
    UNION = "un"
    INTERSECTION = "inter"
    COMPLEMENT = "comp"

    @classmethod
    def parse(cls, tag: str) -> "RelationKind":
        try:
            return cls(tag)
        except ValueError:
            raise UnknownRelationKindError(f"Unknown relationship kind: {tag!r}") from None


# Kinds stored in the equivalents/disjoints/one-of map vs. the connectives map
EQUIVALENT_FAMILY = frozenset({
    RelationKind.SUPER, RelationKind.EQUIVALENT, RelationKind.DISJOINT, RelationKind.ONE_OF,
})
CONNECTIVE_FAMILY = frozenset({
    RelationKind.UNION, RelationKind.INTERSECTION, RelationKind.COMPLEMENT,
})


class PropertyType(Enum):
    OBJECT = "o"
    DATATYPE = "d"
    ANNOTATION = "a"
    RDF = "r"


class EdgeFlag(Enum):
    # Declaration order is the display order on edge labels
    FUNCTIONAL = "functional"
    INVERSE_FUNCTIONAL = "inverseFunctional"
    REFLEXIVE = "reflexive"
    IRREFLEXIVE = "irreflexive"
    ASYMMETRIC = "asymmetric"
    SYMMETRIC = "symmetric"
    TRANSITIVE = "transitive"
    MULTIPLE_DOMAINS = "multipleDomains"
    MULTIPLE_RANGES = "multipleRanges"


def flags_text(flags) -> str:
    """Comma separated flag names in display order, or '' when no flag is set."""
    return ", ".join(flag.value for flag in EdgeFlag if flag in flags)


@dataclass(frozen=True)
class Relation:
    kind: RelationKind
    target: str


@dataclass(frozen=True)
class PropertyValue:
    predicate: str
    value: str


@dataclass
class ClassRecord:
    name: str                               # prefixed name or blank-node id
    label: str                              # "label (prefix:name)"
    full_name: str = ""
    super_classes: List[str] = field(default_factory=list)
    class_type: str = "c"                   # c = class, d = datatype

    @property
    def is_datatype(self) -> bool:
        return self.class_type == "d"


@dataclass
class UMLClassRecord(ClassRecord):
    attributes: List[str] = field(default_factory=list)


@dataclass
class PropertyRecord:
    name: str
    label: str
    property_type: PropertyType
    domains: List[str] = field(default_factory=list)
    ranges: List[str] = field(default_factory=list)
    flags: FrozenSet[EdgeFlag] = frozenset()
    full_name: str = ""


@dataclass
class IndividualRecord:
    name: str
    label: str
    full_name: str = ""
    type_labels: List[str] = field(default_factory=list)
    datatype_properties: List[PropertyValue] = field(default_factory=list)
    object_properties: List[PropertyValue] = field(default_factory=list)


@dataclass
class RestrictionRecord:
    name: str
    is_class_restriction: bool
    details: List[str] = field(default_factory=list)


@dataclass
class PrefixRecord:
    prefix: str
    url: str


@dataclass
class OntologyModel:
    """Everything one render call reads. Produced upstream, never mutated by the engine."""
    classes: List[ClassRecord] = field(default_factory=list)
    properties: List[PropertyRecord] = field(default_factory=list)
    individuals: List[IndividualRecord] = field(default_factory=list)
    restrictions: List[RestrictionRecord] = field(default_factory=list)
    equivalents: Dict[str, List[Relation]] = field(default_factory=dict)
    connectives: Dict[str, List[Relation]] = field(default_factory=dict)
    prefixes: List[PrefixRecord] = field(default_factory=list)
    uml_classes: List[UMLClassRecord] = field(default_factory=list)
    ontology_uri: Optional[str] = None
    ontology_prefix: str = ""

    def find_restriction(self, name: str) -> Optional[RestrictionRecord]:
        for restriction in self.restrictions:
            if restriction.name == name:
                return restriction
        return None

    def find_class(self, name: str) -> Optional[ClassRecord]:
        for cl in self.classes:
            if name == cl.name or name == cl.full_name:
                return cl
        return None

    def sorted_prefixes(self) -> List[PrefixRecord]:
        return sorted(self.prefixes, key=lambda p: p.prefix)
