"""
Runs the DAO and key-path passes over the same set of models.
"""

from collections.abc import Iterable

from daogen.codegen.dao import DAOGenerator
from daogen.codegen.generator import GenerationResult, ModelSource
from daogen.codegen.keypaths import KeyPathGenerator
from daogen.config import DEFAULT_SETTINGS, GeneratorSettings


def generate(
    models: Iterable[ModelSource],
    settings: GeneratorSettings = DEFAULT_SETTINGS,
) -> GenerationResult:
    """
    Generate the DAO module and the key-path module.

    The two passes are independent: a model can fail the DAO pass (for
    example for lack of a primary key) and still get key paths.
    """
    models = list(models)
    daos = DAOGenerator(models, settings).generate()
    keypaths = KeyPathGenerator(models, settings).generate()
    return daos.merge(keypaths)
