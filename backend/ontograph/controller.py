import logging
from typing import Any, Dict, Optional, Union

from ontograph import config
from ontograph.assemblers import (
    add_datatype_restrictions,
    assemble_class_view,
    assemble_combined_view,
    assemble_individual_view,
    assemble_property_view,
    assemble_uml_class_view,
    assemble_uml_individual_view,
    collapse_properties,
)
from ontograph.engine import RelationshipResolver, normalize_relation_map
from ontograph.ir.errors import OntoGraphError
from ontograph.ir.models import OntologyModel
from ontograph.renderer.composer import compose_document, finalize_body
from ontograph.renderer.graph_document import GraphDocument
from ontograph.schemas import GraphRequest, GraphType, Visualization, parse_request
from ontograph.visual import StyleResolver, build_convention_style

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None):
    """Root logger setup for command line use, the library itself only creates module loggers."""
    logging.basicConfig(
        level=(level or config.ONTOGRAPH_LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def derive_ontology_prefix(model: OntologyModel) -> str:
    """The ontology's own prefix ('ex:'), used by VOWL to tell external entities apart."""
    if model.ontology_prefix:
        return model.ontology_prefix
    if model.ontology_uri:
        for p in model.prefixes:
            if p.url.startswith(model.ontology_uri):
                return p.prefix
    return ""


class GraphController:
    """
    One render call: request + pre-resolved ontology records -> GraphML string.

    Every accumulator (normalized relation map, referenced classes, rendered blank
    nodes, the document body) is created inside render(), so a controller can be
    shared between threads.
    """

    def __init__(self, image_dir: Optional[str] = None, max_blank_depth: Optional[int] = None):
        self.image_dir = image_dir
        self.max_blank_depth = max_blank_depth

    def render(self, request: Union[GraphRequest, Dict[str, Any]], model: OntologyModel,
               generated: Optional[str] = None) -> str:
        if not isinstance(request, GraphRequest):
            request = parse_request(request)

        visualization = request.visualization.value
        logger.info(
            "[Controller] Rendering '%s' (%s, %s graph)",
            request.graph_title, visualization, request.graph_type.value,
        )

        try:
            body = self._assemble(request, model)
        except OntoGraphError as e:
            logger.error("[Controller] Render of '%s' failed: %s", request.graph_title, e.message)
            raise

        finalize_body(body)
        return compose_document(
            body,
            visualization,
            request.graph_title,
            model.ontology_uri,
            model.sorted_prefixes(),
            generated=generated,
            image_dir=self.image_dir,
        )

    # ------------------------------------------------------------------ #
    # Views
    # ------------------------------------------------------------------ #

    def _resolver(self, request: GraphRequest, model: OntologyModel, view: str,
                  equivalents, ontology_prefix: str) -> RelationshipResolver:
        styles = StyleResolver(build_convention_style(request, view), ontology_prefix)
        return RelationshipResolver(model, styles, equivalents, self.max_blank_depth)

    def _assemble(self, request: GraphRequest, model: OntologyModel) -> GraphDocument:
        visualization = request.visualization
        graph_type = request.graph_type

        # Once per render, before any traversal
        equivalents = normalize_relation_map(model.equivalents)
        ontology_prefix = derive_ontology_prefix(model) if visualization == Visualization.VOWL else ""

        def resolver_for(view: str) -> RelationshipResolver:
            return self._resolver(request, model, view, equivalents, ontology_prefix)

        properties = None
        if request.collapse_edges and visualization != Visualization.VOWL:
            properties = collapse_properties(model.properties)

        if visualization == Visualization.UML:
            resolver = resolver_for("uml")
            if graph_type == GraphType.INDIVIDUAL:
                return assemble_uml_individual_view(model, resolver)
            doc = assemble_uml_class_view(model, resolver, properties)
            add_datatype_restrictions(doc, model, resolver)
            return doc

        if graph_type == GraphType.CLASS:
            resolver = resolver_for("class")
            doc = assemble_class_view(model, resolver)
            add_datatype_restrictions(doc, model, resolver)
            return doc

        if graph_type == GraphType.BOTH:
            return assemble_combined_view(model, resolver_for("class"), resolver_for("property"), properties)

        if graph_type == GraphType.INDIVIDUAL:
            return assemble_individual_view(model, resolver_for("individual"))

        if graph_type == GraphType.PROPERTY:
            return assemble_property_view(model, resolver_for("property"), properties)

        raise AssertionError(f"Unhandled graph type: {graph_type!r}")


def render_graph(request: Union[GraphRequest, Dict[str, Any]], model: OntologyModel,
                 generated: Optional[str] = None) -> str:
    return GraphController().render(request, model, generated)
