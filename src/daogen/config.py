"""
Generator settings for daogen.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GeneratorSettings:
    """
    Settings shared by the DAO and key-path generators.

    Settings only shape the emitted text; they never change which models
    are analyzed.
    """

    # Module the generated code imports BaseDAO, KeyPath, etc. from
    runtime_module: str = "daogen.runtime"

    # Module the model classes are imported from (None: no import emitted)
    models_module: str | None = None

    # Class name suffixes
    dao_suffix: str = "DAO"
    keypath_suffix: str = "Keys"

    # Output module names
    dao_module_name: str = "daos"
    keypath_module_name: str = "keypaths"

    # Reject fields with several relationship markers
    strict_relationships: bool = True


# Built-in profiles

DEFAULT_SETTINGS = GeneratorSettings()

LENIENT_SETTINGS = GeneratorSettings(strict_relationships=False)
