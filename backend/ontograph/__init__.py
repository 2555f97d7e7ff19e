# OntoGraph
# Renders pre-resolved OWL ontology records as yEd GraphML diagrams

from ontograph.controller import GraphController, render_graph
from ontograph.ontology_loader import OntologyLoader, load_ontology_model
from ontograph.schemas import GraphRequest, GraphType, Visualization, parse_request

__all__ = [
    "GraphController",
    "render_graph",
    "OntologyLoader",
    "load_ontology_model",
    "GraphRequest",
    "GraphType",
    "Visualization",
    "parse_request",
]
