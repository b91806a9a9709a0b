"""
DAO code generator.

Generates one data-access class per model from field and relationship
descriptors.
"""

from daogen.analysis.model import analyze_model
from daogen.codegen.generator import (
    CodeGenerator,
    GeneratedFile,
    GenerationResult,
    RenderedModel,
    literal,
)
from daogen.core.declaration import ModelDeclaration
from daogen.core.errors import MissingConstructorError
from daogen.core.types import FieldDescriptor, ModelDescriptor, RelationKind
from daogen.logging import get_logger, with_log_context

logger = get_logger(__name__)


class DAOGenerator(CodeGenerator):
    """
    Generates data-access classes.

    Each generated class subclasses the runtime BaseDAO and provides:
    - A constructor registering the model's relationships in declaration order
    - from_json / to_json, delegating to the model's own routines when present
    - get_primary_key, get_field_value, set_field_value and table_name

    Example output:
        class UserDAO(BaseDAO[User]):
            '''Data access object for User entities.'''

            def __init__(self, client: Any) -> None:
                super().__init__(client, "users")
                self.register_relationship(
                    RelationshipMetadata(
                        type="HasMany",
                        field_name="posts",
                        related_class=Post,
                        foreign_key="user_id",
                    )
                )
    """

    generator_name = "dao"

    def generate(self) -> GenerationResult:
        """Generate the DAO module."""
        result = GenerationResult()
        module_name = self.settings.dao_module_name

        with with_log_context(generator=self.generator_name, module_name=module_name):
            rendered = self._render_models(result, self._render_declaration)
            lines = self._module_lines(
                "data access objects",
                typing_imports=["Any", "ClassVar", "cast"],
                runtime_imports=["BaseDAO", "RelationshipMetadata", "UnsupportedFieldWriteError"],
                rendered=rendered,
            )
            logger.info(
                "Generated DAO module",
                dao_count=len(rendered),
                failure_count=len(result.failures),
            )

        result.files.append(GeneratedFile(
            path=f"{module_name}.py",
            content="\n".join(lines) + "\n",
            module_name=module_name,
        ))
        return result

    def _render_declaration(self, declaration: ModelDeclaration) -> RenderedModel | None:
        if not declaration.table.generate_dao:
            logger.debug("DAO generation disabled for model")
            return None

        model = analyze_model(declaration, self.settings)
        imports = {model.name}
        imports.update(
            rel.related_type for rel in model.relationships if rel.related_type.isidentifier()
        )
        return RenderedModel(model=model.name, source=self.render_dao(model), imports=imports)

    def dao_class_name(self, model_name: str) -> str:
        """Name of the generated DAO class for a model."""
        return f"{model_name}{self.settings.dao_suffix}"

    def render_dao(self, model: ModelDescriptor) -> str:
        """
        Render the DAO class for one analyzed model.

        Raises:
            MissingConstructorError: If the model has no from_json routine
                and no constructor accepting every plain field
        """
        deserializer = self._generate_from_json(model)

        lines = [
            f"class {self.dao_class_name(model.name)}(BaseDAO[{model.name}]):",
            f'    """Data access object for {model.name} entities."""',
            "",
            f"    insert_columns: ClassVar[tuple[str, ...]] = {self._tuple(model.insert_columns())}",
            f"    update_columns: ClassVar[tuple[str, ...]] = {self._tuple(model.update_columns())}",
            "",
        ]
        for method in (
            self._generate_constructor(model),
            self._generate_table_name(model),
            deserializer,
            self._generate_to_json(model),
            self._generate_get_primary_key(model),
            self._generate_get_field_value(model),
            self._generate_set_field_value(model),
        ):
            lines.extend(method)
            lines.append("")

        return "\n".join(lines).rstrip("\n")

    def _generate_constructor(self, model: ModelDescriptor) -> list[str]:
        lines = [
            "    def __init__(self, client: Any) -> None:",
            f"        super().__init__(client, {literal(model.table_name)})",
        ]
        for rel in model.relationships:
            lines.extend([
                "        self.register_relationship(",
                "            RelationshipMetadata(",
                f"                type={literal(rel.kind.registration_tag)},",
                f"                field_name={literal(rel.field_name)},",
                f"                related_class={rel.related_type},",
                f"                foreign_key={literal(rel.foreign_key)},",
            ])
            if rel.kind is RelationKind.MANY_TO_MANY:
                lines.extend([
                    f"                pivot_table={literal(rel.join_table or '')},",
                    f"                related_key={literal(rel.related_key or '')},",
                ])
            lines.extend([
                "            )",
                "        )",
            ])
        return lines

    def _generate_table_name(self, model: ModelDescriptor) -> list[str]:
        return [
            "    @property",
            "    def table_name(self) -> str:",
            f"        return {literal(model.table_name)}",
        ]

    def _generate_from_json(self, model: ModelDescriptor) -> list[str]:
        lines = [f"    def from_json(self, json: dict[str, Any]) -> {model.name}:"]

        if model.has_from_json:
            lines.append(f"        return {model.name}.from_json(json)")
            return lines

        if model.constructor is None:
            raise MissingConstructorError(model.name)
        plain = model.field_names()
        missing = [name for name in plain if not model.constructor.accepts(name)]
        required = model.constructor.unsatisfied(plain)
        if missing or required:
            raise MissingConstructorError(model.name, missing, required)

        lines.append(f"        return {model.name}(")
        for f in model.fields:
            lines.append(f"            {f.name}=cast({literal(self._annotation(f))}, {self._read(f)}),")
        lines.append("        )")
        return lines

    def _generate_to_json(self, model: ModelDescriptor) -> list[str]:
        lines = [f"    def to_json(self, entity: {model.name}) -> dict[str, Any]:"]

        if model.has_to_json:
            lines.append("        return entity.to_json()")
            return lines

        lines.append("        data: dict[str, Any] = {")
        for f in model.fields:
            lines.append(f"            {literal(f.column_name)}: entity.{f.name},")
        lines.extend([
            "        }",
            "        return {key: value for key, value in data.items() if value is not None}",
        ])
        return lines

    def _generate_get_primary_key(self, model: ModelDescriptor) -> list[str]:
        pk = model.primary_key
        return [
            f"    def get_primary_key(self, entity: {model.name}) -> {self._annotation(pk)}:",
            f"        return entity.{pk.name}",
        ]

    def _generate_get_field_value(self, model: ModelDescriptor) -> list[str]:
        lines = [
            f"    def get_field_value(self, entity: {model.name}, field_name: str) -> Any:",
            "        match field_name:",
        ]
        for name in model.field_names() + model.relationship_names():
            lines.extend([
                f"            case {literal(name)}:",
                f"                return entity.{name}",
            ])
        lines.extend([
            "            case _:",
            "                return None",
        ])
        return lines

    def _generate_set_field_value(self, model: ModelDescriptor) -> list[str]:
        lines = [
            f"    def set_field_value(self, entity: {model.name}, field_name: str, value: Any) -> None:",
            "        match field_name:",
        ]
        # Plain fields are immutable once constructed; only relationships are settable.
        for name in model.relationship_names():
            lines.extend([
                f"            case {literal(name)}:",
                f"                entity.{name} = value",
            ])
        lines.extend([
            "            case _:",
            f"                raise UnsupportedFieldWriteError(field_name, {literal(model.name)})",
        ])
        return lines

    def _annotation(self, f: FieldDescriptor) -> str:
        return f"{f.type_name} | None" if f.nullable else f.type_name

    def _read(self, f: FieldDescriptor) -> str:
        if f.nullable:
            return f"json.get({literal(f.column_name)})"
        return f"json[{literal(f.column_name)}]"

    def _tuple(self, values: list[str]) -> str:
        if not values:
            return "()"
        if len(values) == 1:
            return f"({literal(values[0])},)"
        return f"({', '.join(literal(v) for v in values)})"
