"""JSON Schema synthesis for GraphQL operation variables."""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from graphql import (
    GraphQLError,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLInputType,
    GraphQLScalarType,
    Undefined,
    ast_from_value,
    is_enum_type,
    is_input_object_type,
    is_list_type,
    is_non_null_type,
    is_scalar_type,
    value_from_ast_untyped,
)

from .render import render_type_to_string

logger = logging.getLogger(__name__)

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"
DEFINITIONS_REF_PREFIX = "#/definitions/"

# {"type": "string", "format": "date"} would reject valid graphql-scalars DateTime values
SCALAR_TYPES_MAP = {
    "Int": "integer",
    "String": "string",
    "Float": "number",
    "ID": "string",
    "Boolean": "boolean",
    "DateTime": "string",
}

CUSTOM_SCALAR_TYPES = ["string", "number", "boolean", "integer"]

Schema = dict[str, Any]


@dataclass
class JsonSchemaOptions:
    """Options for variables JSON Schema generation."""

    # Adds the monaco-json `markdownDescription` next to every `description`
    use_markdown_description: bool = False
    custom_scalar_schemas: dict[str, Schema] = field(default_factory=dict)


class Marker:
    """Write-once set of type names already defined during one run."""

    def __init__(self):
        self._names: set[str] = set()

    def mark(self, name: str) -> bool:
        """Mark a name, returning False if it was already marked."""
        if name in self._names:
            return False
        self._names.add(name)
        return True


@dataclass
class RunningOptions(JsonSchemaOptions):
    """Options plus the state shared across a single synthesis run."""

    definition_marker: Marker = field(default_factory=Marker)

    @classmethod
    def from_options(cls, options: Optional[JsonSchemaOptions] = None) -> "RunningOptions":
        """Start a fresh run from caller options without touching them."""
        if options is None:
            return cls()
        return cls(
            use_markdown_description=options.use_markdown_description,
            custom_scalar_schemas=options.custom_scalar_schemas,
        )


@dataclass
class DefinitionResult:
    """Schema fragment for one type occurrence."""

    definition: Schema
    required: bool = False
    definitions: dict[str, Schema] = field(default_factory=dict)


def _describe(target: Schema, prefix: Optional[str], type_: GraphQLInputType, options: RunningOptions) -> None:
    """Set description (and markdown mirror) to `prefix` followed by the type signature."""
    rendered = render_type_to_string(type_)
    target["description"] = f"{prefix}\n{rendered}" if prefix else rendered
    if options.use_markdown_description:
        markdown = render_type_to_string(type_, use_markdown=True)
        target["markdownDescription"] = f"{prefix}\n{markdown}" if prefix else markdown


def _default_to_json(value: Any, type_: GraphQLInputType) -> Any:
    """Convert an internal default value into its JSON form."""
    try:
        value_ast = ast_from_value(value, type_)
    except (TypeError, GraphQLError):
        # Opaque custom scalar values have no literal form
        return value
    if value_ast is None:
        return None
    return value_from_ast_untyped(value_ast)


def _field_default(input_field: GraphQLInputField) -> Any:
    """
    JSON form of an input field default, or Undefined when it has none.

    graphql-core 3.2 stores the coerced value in `default_value`; 3.3 leaves
    that Undefined for SDL-built schemas and keeps a `GraphQLDefaultInput`
    (either `.value` or the `.literal` AST) in `default`.
    """
    if input_field.default_value is not Undefined:
        return _default_to_json(input_field.default_value, input_field.type)

    default = getattr(input_field, "default", None)
    if default is None:
        return Undefined
    literal = getattr(default, "literal", None)
    if literal is not None:
        return value_from_ast_untyped(literal)
    value = getattr(default, "value", Undefined)
    if value is Undefined:
        return Undefined
    return _default_to_json(value, input_field.type)


def _field_schema(input_field: GraphQLInputField) -> Schema:
    """Per-occurrence schema of an input field: its default value, if any."""
    default = _field_default(input_field)
    if default is Undefined:
        return {}
    return {"default": default}


def _scalar_schema(type_: GraphQLScalarType, options: RunningOptions, is_non_null: bool) -> Schema:
    primitive = SCALAR_TYPES_MAP.get(type_.name)
    if primitive:
        return {"type": primitive if is_non_null else [primitive, "null"]}

    if type_.name in options.custom_scalar_schemas:
        definition = copy.deepcopy(options.custom_scalar_schemas[type_.name])
    else:
        definition = {"type": list(CUSTOM_SCALAR_TYPES)}

    if is_non_null:
        return definition

    scalar_type = definition.get("type")
    if isinstance(scalar_type, list):
        scalar_type.append("null")
    elif scalar_type:
        definition["type"] = [scalar_type, "null"]
    elif isinstance(definition.get("oneOf"), list):
        definition["oneOf"].append({"type": "null"})
    else:
        definition = {"oneOf": [definition, {"type": "null"}]}
    return definition


def _input_object_definitions(type_: GraphQLInputObjectType, options: RunningOptions) -> dict[str, Schema]:
    """
    Build the object schema of an input type.

    Returns the definitions discovered in its fields followed by the
    definition of the type itself.
    """
    definitions: dict[str, Schema] = {}
    object_schema: Schema = {"type": "object", "properties": {}, "required": []}
    _describe(object_schema, type_.description, type_, options)

    for field_name, input_field in type_.fields.items():
        type_result = get_json_schema_from_type(input_field.type, options)
        prop = {**type_result.definition, **_field_schema(input_field)}
        _describe(prop, input_field.description, input_field.type, options)
        object_schema["properties"][field_name] = prop

        if type_result.required:
            object_schema["required"].append(field_name)
        definitions.update(type_result.definitions)

    definitions[type_.name] = object_schema
    return definitions


def _backfill_description(definition: Schema, type_: GraphQLInputType, options: RunningOptions) -> None:
    of_type = type_.of_type if is_non_null_type(type_) else type_
    type_description = None if is_scalar_type(of_type) else getattr(of_type, "description", None)

    existing = definition.get("description")
    if type_description and not existing:
        _describe(definition, type_description, type_, options)
    elif existing:
        _describe(definition, existing, type_, options)
    else:
        _describe(definition, None, type_, options)


def get_json_schema_from_type(
    type_: GraphQLInputType,
    options: Optional[JsonSchemaOptions] = None,
    is_non_null: bool = False,
) -> DefinitionResult:
    """
    Synthesize the JSON Schema fragment for one occurrence of an input type.

    Input object types are emitted as `$ref`s into `#/definitions/`; the
    full object schema is built only the first time a type name is seen in
    the run, which also stops recursion through self-referencing inputs.

    Args:
        type_: GraphQL input type, possibly wrapped in List/NonNull
        options: Run options; plain JsonSchemaOptions start a new run
        is_non_null: Whether the occurrence sits inside a NonNull wrapper

    Returns:
        DefinitionResult with the fragment, the required flag and the
        object definitions newly registered while walking this type
    """
    if not isinstance(options, RunningOptions):
        options = RunningOptions.from_options(options)

    required = False
    definition: Schema = {}
    definitions: dict[str, Schema] = {}

    if is_enum_type(type_):
        definition["enum"] = list(type_.values)
        if not is_non_null:
            definition["enum"].append(None)

    elif is_scalar_type(type_):
        definition = _scalar_schema(type_, options, is_non_null)

    elif is_list_type(type_):
        definition["type"] = "array" if is_non_null else ["array", "null"]
        inner = get_json_schema_from_type(type_.of_type, options)
        if "$ref" in inner.definition:
            definition["items"] = {"$ref": inner.definition["$ref"]}
        elif "oneOf" in inner.definition:
            definition["items"] = {"oneOf": inner.definition["oneOf"]}
        else:
            definition["items"] = inner.definition
        definitions.update(inner.definitions)

    elif is_non_null_type(type_):
        required = True
        inner = get_json_schema_from_type(type_.of_type, options, is_non_null=True)
        definition = inner.definition
        definitions.update(inner.definitions)

    elif is_input_object_type(type_):
        ref = {"$ref": f"{DEFINITIONS_REF_PREFIX}{type_.name}"}
        if is_non_null:
            definition.update(ref)
        else:
            definition["oneOf"] = [ref, {"type": "null"}]
        if options.definition_marker.mark(type_.name):
            logger.debug("Defining input object %s", type_.name)
            definitions.update(_input_object_definitions(type_, options))

    if not is_non_null:
        _backfill_description(definition, type_, options)

    return DefinitionResult(definition=definition, required=required, definitions=definitions)


def get_variables_json_schema(
    variable_to_type: Optional[dict[str, GraphQLInputType]],
    options: Optional[JsonSchemaOptions] = None,
) -> Schema:
    """
    Generate a JSON Schema document for a map of variable name -> input type.

    Each input object type is defined once under `definitions` and
    referenced everywhere else, so no GraphQL type is repeated.

    Args:
        variable_to_type: Ordered mapping, e.g. from variables.collect_variables()
        options: Markdown and custom scalar options

    Returns:
        JSON Schema document (plain dict, ready for json.dumps)
    """
    running = RunningOptions.from_options(options)
    json_schema: Schema = {
        "$schema": JSON_SCHEMA_DIALECT,
        "type": "object",
        "properties": {},
        "required": [],
    }
    definitions: dict[str, Schema] = {}

    for variable_name, type_ in (variable_to_type or {}).items():
        result = get_json_schema_from_type(type_, running)
        json_schema["properties"][variable_name] = result.definition
        if result.required:
            json_schema["required"].append(variable_name)
        definitions.update(result.definitions)

    if definitions:
        json_schema["definitions"] = definitions

    logger.debug(
        "Built variables schema: %d variables, %d definitions",
        len(json_schema["properties"]),
        len(definitions),
    )
    return json_schema
