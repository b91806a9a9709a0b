"""
Base code generator.
"""

import json
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from daogen.config import DEFAULT_SETTINGS, GeneratorSettings
from daogen.core.declaration import ModelDeclaration, declare
from daogen.core.errors import DaoGenError
from daogen.logging import get_logger, with_log_context

logger = get_logger(__name__)

ModelSource = ModelDeclaration | type


@dataclass
class GeneratedFile:
    """A generated source file."""

    path: str
    content: str
    module_name: str


@dataclass
class GenerationFailure:
    """A model whose emission was aborted by a generation-time error."""

    model: str
    error: DaoGenError


@dataclass
class RenderedModel:
    """Source emitted for one model plus the names it needs imported."""

    model: str
    source: str
    imports: set[str] = field(default_factory=set)


@dataclass
class GenerationResult:
    """Result of code generation."""

    files: list[GeneratedFile] = field(default_factory=list)
    failures: list[GenerationFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when no model failed."""
        return not self.failures

    def failed_models(self) -> list[str]:
        """Names of the models whose emission was aborted."""
        return [failure.model for failure in self.failures]

    def merge(self, other: "GenerationResult") -> "GenerationResult":
        """Combine two results, keeping file order."""
        return GenerationResult(
            files=[*self.files, *other.files],
            failures=[*self.failures, *other.failures],
        )


class CodeGenerator(ABC):
    """
    Abstract base class for code generators.

    Code generators take model declarations (or annotated model classes)
    and produce Python source text. A generation-time error aborts only the
    model that raised it; it is logged and recorded in the result's
    ``failures`` while the other models are still emitted.
    """

    generator_name = "base"

    def __init__(
        self,
        models: Iterable[ModelSource],
        settings: GeneratorSettings = DEFAULT_SETTINGS,
    ) -> None:
        """
        Initialize the generator.

        Args:
            models: Model declarations or annotated model classes
            settings: Generator settings
        """
        self.models = list(models)
        self.settings = settings

    @abstractmethod
    def generate(self) -> GenerationResult:
        """
        Generate source code.

        Returns:
            GenerationResult containing generated files and any failures
        """
        ...

    def _render_models(
        self,
        result: GenerationResult,
        render: Callable[[ModelDeclaration], RenderedModel | None],
    ) -> list[RenderedModel]:
        """Render every model, isolating generation-time failures per model."""
        rendered = []
        for source in self.models:
            name = source.name if isinstance(source, ModelDeclaration) else source.__name__
            with with_log_context(model=name):
                try:
                    declaration = source if isinstance(source, ModelDeclaration) else declare(source)
                    block = render(declaration)
                except DaoGenError as exc:
                    logger.error(
                        "Generation aborted for model",
                        error_code=exc.code,
                        error=exc.message,
                    )
                    result.failures.append(GenerationFailure(model=name, error=exc))
                    continue
            if block is not None:
                rendered.append(block)
        return rendered

    def _module_lines(
        self,
        title: str,
        typing_imports: list[str],
        runtime_imports: list[str],
        rendered: list[RenderedModel],
    ) -> list[str]:
        """Build a complete module: header, imports, then each rendered model."""
        lines = [
            '"""',
            f"Auto-generated {title}.",
            "",
            "Do not edit manually - regenerate from model declarations.",
            '"""',
            "",
            "from __future__ import annotations",
            "",
            f"from typing import {', '.join(sorted(typing_imports))}",
            "",
            f"from {self.settings.runtime_module} import {', '.join(sorted(runtime_imports))}",
        ]

        model_names = sorted(set().union(*(block.imports for block in rendered)))
        if self.settings.models_module and model_names:
            lines.append("")
            lines.append(f"from {self.settings.models_module} import {', '.join(model_names)}")

        for block in rendered:
            lines.extend(["", ""])
            lines.append(block.source)

        return lines


def literal(value: str) -> str:
    """Render a string as a double-quoted Python literal."""
    return json.dumps(value)
