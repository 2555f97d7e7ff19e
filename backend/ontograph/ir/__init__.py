# Ontology records consumed by the renderer

from ontograph.ir.errors import (
    OntoGraphError,
    MalformedInputError,
    RequestValidationError,
    UnknownRelationKindError,
)
from ontograph.ir.models import (
    ClassRecord,
    EdgeFlag,
    IndividualRecord,
    OntologyModel,
    PrefixRecord,
    PropertyRecord,
    PropertyType,
    PropertyValue,
    Relation,
    RelationKind,
    RestrictionRecord,
    UMLClassRecord,
    is_blank,
)

__all__ = [
    "OntoGraphError",
    "MalformedInputError",
    "RequestValidationError",
    "UnknownRelationKindError",
    "ClassRecord",
    "EdgeFlag",
    "IndividualRecord",
    "OntologyModel",
    "PrefixRecord",
    "PropertyRecord",
    "PropertyType",
    "PropertyValue",
    "Relation",
    "RelationKind",
    "RestrictionRecord",
    "UMLClassRecord",
    "is_blank",
]
