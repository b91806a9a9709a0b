"""
Model analysis: assembles the transient ModelDescriptor for one model.
"""

from daogen.analysis.fields import extract_fields, extract_primary_key
from daogen.analysis.relationships import extract_relationships
from daogen.config import DEFAULT_SETTINGS, GeneratorSettings
from daogen.core.declaration import ModelDeclaration
from daogen.core.types import ModelDescriptor
from daogen.logging import get_logger

logger = get_logger(__name__)


def analyze_model(
    declaration: ModelDeclaration,
    settings: GeneratorSettings = DEFAULT_SETTINGS,
) -> ModelDescriptor:
    """
    Run field and relationship extraction for one model.

    Raises:
        DaoGenError: Any generation-time error for this model
    """
    fields = extract_fields(declaration)
    primary_key = extract_primary_key(declaration)
    relationships = extract_relationships(
        declaration, strict=settings.strict_relationships
    )

    logger.debug(
        "Analyzed model",
        model=declaration.name,
        field_count=len(fields),
        relationship_count=len(relationships),
    )

    return ModelDescriptor(
        name=declaration.name,
        table_name=declaration.table.name,
        fields=fields,
        primary_key=primary_key,
        relationships=list(relationships.values()),
        has_from_json=declaration.has_from_json,
        has_to_json=declaration.has_to_json,
        constructor=declaration.constructor,
        generate_dao=declaration.table.generate_dao,
        generate_keypaths=declaration.table.generate_keypaths,
    )
