"""
Model analysis: field metadata and relationship extraction.
"""

from daogen.analysis.fields import describe_field, extract_fields, extract_primary_key
from daogen.analysis.model import analyze_model
from daogen.analysis.relationships import MARKER_PRECEDENCE, extract_relationships

__all__ = [
    "analyze_model",
    "describe_field",
    "extract_fields",
    "extract_primary_key",
    "extract_relationships",
    "MARKER_PRECEDENCE",
]
