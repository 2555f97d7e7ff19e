# View assemblers module
# Build the document body of each diagram type from the ontology records

from ontograph.assemblers.class_view import add_datatype_restrictions, assemble_class_view
from ontograph.assemblers.property_view import assemble_property_view, collapse_properties
from ontograph.assemblers.individual_view import assemble_individual_view
from ontograph.assemblers.uml_view import assemble_uml_class_view, assemble_uml_individual_view
from ontograph.assemblers.combined_view import assemble_combined_view

__all__ = [
    "add_datatype_restrictions",
    "assemble_class_view",
    "assemble_property_view",
    "collapse_properties",
    "assemble_individual_view",
    "assemble_uml_class_view",
    "assemble_uml_individual_view",
    "assemble_combined_view",
]
