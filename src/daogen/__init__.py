"""
daogen - static generator for typed data-access objects.

daogen reads model classes annotated with column, primary-key and
relationship markers and emits deterministic Python source for one DAO
class per model plus optional query key-path classes.
"""

__version__ = "0.1.0"

from daogen.codegen import DAOGenerator, GenerationResult, KeyPathGenerator, generate
from daogen.config import DEFAULT_SETTINGS, LENIENT_SETTINGS, GeneratorSettings
from daogen.core.declaration import ModelDeclaration, declare
from daogen.core.errors import (
    DaoGenError,
    MissingConstructorError,
    MissingPrimaryKeyError,
    UnsupportedFieldWriteError,
)
from daogen.core.markers import (
    BelongsTo,
    Column,
    ComputedField,
    HasMany,
    HasOne,
    ManyToMany,
    PrimaryKey,
    table,
)

__all__ = [
    # Version
    "__version__",
    # Generation
    "generate",
    "DAOGenerator",
    "KeyPathGenerator",
    "GenerationResult",
    "GeneratorSettings",
    "DEFAULT_SETTINGS",
    "LENIENT_SETTINGS",
    # Declarations
    "ModelDeclaration",
    "declare",
    # Markers
    "BelongsTo",
    "Column",
    "ComputedField",
    "HasMany",
    "HasOne",
    "ManyToMany",
    "PrimaryKey",
    "table",
    # Errors
    "DaoGenError",
    "MissingPrimaryKeyError",
    "MissingConstructorError",
    "UnsupportedFieldWriteError",
]
