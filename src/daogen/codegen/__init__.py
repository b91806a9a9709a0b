"""
daogen code generation module.

Generates Python source for data-access classes and query key paths from
model declarations.
"""

from daogen.codegen.dao import DAOGenerator
from daogen.codegen.generator import (
    CodeGenerator,
    GeneratedFile,
    GenerationFailure,
    GenerationResult,
)
from daogen.codegen.keypaths import KeyPathGenerator
from daogen.codegen.pipeline import generate

__all__ = [
    "CodeGenerator",
    "DAOGenerator",
    "KeyPathGenerator",
    "GeneratedFile",
    "GenerationFailure",
    "GenerationResult",
    "generate",
]
