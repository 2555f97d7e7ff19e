"""
Builds an OntologyModel from pre-resolved records.

The records are what an upstream OWL reader produced: prefixed names, display labels,
relationship tags and restriction detail lines. Nothing here parses OWL.

Document layout (YAML or a plain dict):

    ontology_uri: http://example.org/onto#
    ontology_prefix: "ex:"
    prefixes:
      "ex:": http://example.org/onto#
    classes:
      - name: "ex:A"
        label: A (ex:A)
        super_classes: ["ex:B", b1]
        class_type: c
    uml_classes:
      - name: ex:A
        label: A (ex:A)
        attributes: ["ex:age"]
    properties:
      - name: ex:knows
        label: knows (ex:knows)
        type: o
        domains: ["ex:A"]
        ranges: ["ex:B"]
        flags: [functional, symmetric]
    individuals:
      - name: ex:bob
        label: bob (ex:bob)
        types: ["ex:A"]
        datatype_properties: [["ex:age", '"42"^^xsd:int']]
        object_properties: [["ex:knows", "ex:alice"]]
    restrictions:
      - name: b1
        class_restriction: true
        details: ["onProperty ex:knows", "someValuesFrom ex:B"]
    equivalents:
      "ex:A": [[eq, "ex:C"], [dis, "ex:D"]]
    connectives:
      b2: [[un, "ex:C"], [un, "ex:D"]]
"""

import logging
import os
from typing import Any, Dict, List, Optional, Union

import yaml

from ontograph.ir.errors import MalformedInputError
from ontograph.ir.models import (
    OWL_THING,
    RDFS_LITERAL,
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
)

logger = logging.getLogger(__name__)


def _pair(entry: Any, first: str, second: str, where: str):
    """Accept either a two item list or a mapping with the two named keys."""
    if isinstance(entry, dict):
        if first not in entry or second not in entry:
            raise MalformedInputError(f"{where}: expected keys '{first}' and '{second}'", where)
        return str(entry[first]), str(entry[second])
    if isinstance(entry, (list, tuple)) and len(entry) == 2:
        return str(entry[0]), str(entry[1])
    raise MalformedInputError(f"{where}: expected a pair, got {entry!r}", where)


def _strings(values: Any) -> List[str]:
    if values is None:
        return []
    if isinstance(values, str):
        return [values]
    return [str(v) for v in values]


class OntologyLoader:
    """
    Loads pre-resolved ontology models from dicts or YAML.

    File loads are cached by absolute path; pass reload=True to read the file again.
    """

    def __init__(self):
        self._cache: Dict[str, OntologyModel] = {}

    def load(self, source: Union[str, Dict[str, Any]], reload: bool = False) -> OntologyModel:
        if isinstance(source, dict):
            return self.from_dict(source)

        if os.path.isfile(source):
            path = os.path.abspath(source)
            if path in self._cache and not reload:
                return self._cache[path]
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
            model = self.from_dict(data or {})
            self._cache[path] = model
            logger.info("[OntologyLoader] Loaded %s", path)
            return model

        data = yaml.safe_load(source)
        if not isinstance(data, dict):
            raise MalformedInputError("Ontology document must be a mapping")
        return self.from_dict(data)

    # ------------------------------------------------------------------ #
    # Records
    # ------------------------------------------------------------------ #

    def from_dict(self, data: Dict[str, Any]) -> OntologyModel:
        model = OntologyModel(
            classes=[self._class(c) for c in data.get("classes", []) or []],
            uml_classes=[self._uml_class(c) for c in data.get("uml_classes", []) or []],
            properties=[self._property(p) for p in data.get("properties", []) or []],
            individuals=[self._individual(i) for i in data.get("individuals", []) or []],
            restrictions=[self._restriction(r) for r in data.get("restrictions", []) or []],
            equivalents=self._relations(data.get("equivalents", {}) or {}, "equivalents"),
            connectives=self._relations(data.get("connectives", {}) or {}, "connectives"),
            prefixes=self._prefixes(data.get("prefixes", []) or []),
            ontology_uri=data.get("ontology_uri"),
            ontology_prefix=data.get("ontology_prefix", "") or "",
        )
        logger.debug(
            "[OntologyLoader] %d classes, %d properties, %d individuals, %d restrictions",
            len(model.classes), len(model.properties), len(model.individuals), len(model.restrictions),
        )
        return model

    def _class(self, data: Dict[str, Any]) -> ClassRecord:
        name = str(data["name"])
        return ClassRecord(
            name=name,
            label=str(data.get("label", name)),
            full_name=str(data.get("full_name", "")),
            super_classes=_strings(data.get("super_classes")),
            class_type=str(data.get("class_type", "c")),
        )

    def _uml_class(self, data: Dict[str, Any]) -> UMLClassRecord:
        base = self._class(data)
        return UMLClassRecord(
            name=base.name,
            label=base.label,
            full_name=base.full_name,
            super_classes=base.super_classes,
            class_type=base.class_type,
            attributes=_strings(data.get("attributes")),
        )

    def _property(self, data: Dict[str, Any]) -> PropertyRecord:
        name = str(data["name"])
        property_type = PropertyType(data.get("type", "o"))

        domains = _strings(data.get("domains"))
        if not domains:
            logger.warning("[OntologyLoader] %s has no domain, using %s", name, OWL_THING)
            domains = [OWL_THING]

        ranges = _strings(data.get("ranges"))
        if not ranges:
            default = OWL_THING if property_type is PropertyType.OBJECT else RDFS_LITERAL
            logger.warning("[OntologyLoader] %s has no range, using %s", name, default)
            ranges = [default]

        return PropertyRecord(
            name=name,
            label=str(data.get("label", name)),
            full_name=str(data.get("full_name", "")),
            property_type=property_type,
            domains=domains,
            ranges=ranges,
            flags=frozenset(EdgeFlag(f) for f in data.get("flags", []) or []),
        )

    def _individual(self, data: Dict[str, Any]) -> IndividualRecord:
        name = str(data["name"])
        return IndividualRecord(
            name=name,
            label=str(data.get("label", name)),
            full_name=str(data.get("full_name", "")),
            type_labels=_strings(data.get("types")),
            datatype_properties=[
                PropertyValue(*_pair(e, "predicate", "value", name))
                for e in data.get("datatype_properties", []) or []
            ],
            object_properties=[
                PropertyValue(*_pair(e, "predicate", "value", name))
                for e in data.get("object_properties", []) or []
            ],
        )

    def _restriction(self, data: Dict[str, Any]) -> RestrictionRecord:
        return RestrictionRecord(
            name=str(data["name"]),
            is_class_restriction=bool(data.get("class_restriction", True)),
            details=_strings(data.get("details")),
        )

    def _relations(self, data: Dict[str, Any], where: str) -> Dict[str, List[Relation]]:
        relations: Dict[str, List[Relation]] = {}
        for key, entries in data.items():
            relations[str(key)] = [
                Relation(RelationKind.parse(kind), target)
                for kind, target in (_pair(e, "kind", "target", f"{where}[{key}]") for e in entries or [])
            ]
        return relations

    def _prefixes(self, data: Any) -> List[PrefixRecord]:
        if isinstance(data, dict):
            return [PrefixRecord(str(k), str(v)) for k, v in data.items()]
        return [PrefixRecord(*_pair(e, "prefix", "url", "prefixes")) for e in data]


def load_ontology_model(source: Union[str, Dict[str, Any]], loader: Optional[OntologyLoader] = None) -> OntologyModel:
    return (loader or OntologyLoader()).load(source)
