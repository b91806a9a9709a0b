"""
Key-path code generator.

Generates one class per model exposing a typed KeyPath constant for every
plain field, for building type-checked query filters.
"""

from daogen.analysis.fields import extract_fields
from daogen.codegen.generator import (
    CodeGenerator,
    GeneratedFile,
    GenerationResult,
    RenderedModel,
    literal,
)
from daogen.core.declaration import ModelDeclaration
from daogen.core.errors import DeclarationError
from daogen.core.types import FieldDescriptor
from daogen.logging import get_logger, with_log_context

logger = get_logger(__name__)

# Members every generated key-path class defines itself
RESERVED_MEMBERS = frozenset({"table", "instance", "_instance"})


class KeyPathGenerator(CodeGenerator):
    """
    Generates key-path classes.

    Runs independently of the DAO pass and does not require a primary key.
    A generated class cannot be constructed directly; ``instance()`` returns
    its single shared instance.

    Example output:
        class UserKeys:
            '''Query key paths for User.'''

            table: ClassVar[str] = "users"

            id: ClassVar[KeyPath[User, int]] = KeyPath("id")
            email: ClassVar[KeyPath[User, str | None]] = KeyPath("email")
    """

    generator_name = "keypaths"

    def generate(self) -> GenerationResult:
        """Generate the key-path module."""
        result = GenerationResult()
        module_name = self.settings.keypath_module_name

        with with_log_context(generator=self.generator_name, module_name=module_name):
            rendered = self._render_models(result, self._render_declaration)
            lines = self._module_lines(
                "query key paths",
                typing_imports=["ClassVar"],
                runtime_imports=["KeyPath"],
                rendered=rendered,
            )
            logger.info(
                "Generated key-path module",
                keypath_count=len(rendered),
                failure_count=len(result.failures),
            )

        result.files.append(GeneratedFile(
            path=f"{module_name}.py",
            content="\n".join(lines) + "\n",
            module_name=module_name,
        ))
        return result

    def keypath_class_name(self, model_name: str) -> str:
        """Name of the generated key-path class for a model."""
        return f"{model_name}{self.settings.keypath_suffix}"

    def _render_declaration(self, declaration: ModelDeclaration) -> RenderedModel | None:
        if not declaration.table.generate_keypaths:
            logger.debug("Key-path generation disabled for model")
            return None

        fields = extract_fields(declaration)
        clashes = sorted(RESERVED_MEMBERS.intersection(f.name for f in fields))
        if clashes:
            raise DeclarationError(
                declaration.name,
                f"field names clash with key-path members: {', '.join(clashes)}",
            )

        source = self.render_keypaths(declaration.name, declaration.table.name, fields)
        return RenderedModel(model=declaration.name, source=source, imports={declaration.name})

    def render_keypaths(
        self,
        model_name: str,
        table_name: str,
        fields: list[FieldDescriptor],
    ) -> str:
        """Render the key-path class for one model."""
        class_name = self.keypath_class_name(model_name)
        lines = [
            f"class {class_name}:",
            f'    """Query key paths for {model_name}."""',
            "",
            f"    table: ClassVar[str] = {literal(table_name)}",
            "",
        ]

        for f in fields:
            value_type = f"{f.type_name} | None" if f.nullable else f.type_name
            lines.append(
                f"    {f.name}: ClassVar[KeyPath[{model_name}, {value_type}]] = "
                f"KeyPath({literal(f.column_name)})"
            )

        lines.extend([
            "",
            f"    _instance: ClassVar[{class_name} | None] = None",
            "",
            f"    def __new__(cls) -> {class_name}:",
            f'        raise TypeError("{class_name} cannot be instantiated; '
            f'use {class_name}.instance()")',
            "",
            "    @classmethod",
            f"    def instance(cls) -> {class_name}:",
            "        if cls._instance is None:",
            "            cls._instance = super().__new__(cls)",
            "        return cls._instance",
        ])
        return "\n".join(lines)
