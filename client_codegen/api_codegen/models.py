"""Model emission - one TypeScript declaration per named component."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final, Iterable

from ..shared import is_general_type, to_pascal_case
from ..shared.naming import is_identifier
from .extractor import get_res_req_types
from .resolver import (
    COMPOSITION_KEYS,
    ResolvedType,
    is_record_type,
    is_reference,
    resolve_value,
    string_literal,
)

EMPTY_INTERFACE_COMMENT: Final[str] = "// tslint:disable-next-line:no-empty-interface"


@dataclass(frozen=True, slots=True)
class NamedModel:
    """A standalone declaration and the model names it imports."""
    name: str
    model: str
    imports: tuple[str, ...] = ()


def filter_imports(imports: Iterable[str], exclude: str | None = None) -> tuple[str, ...]:
    """Drop built-in TypeScript types and ``exclude``, keeping first occurrences."""
    seen: dict[str, None] = {}
    for name in imports:
        if name and name != exclude and not is_general_type(name):
            seen.setdefault(name, None)
    return tuple(seen)


def _interface(name: str, value: str) -> str:
    if value == "{}":
        return f"{EMPTY_INTERFACE_COMMENT}\nexport interface {name} {value}"
    return f"export interface {name} {value}"


def _enum_const(name: str, values: Iterable[str]) -> str:
    lines = [f"export const {name} = {{"]
    for raw in values:
        literal = string_literal(raw)
        key = raw if is_identifier(raw) else literal
        lines.append(f"  {key}: {literal} as {name},")
    lines.append("};")
    return "\n".join(lines)


def _is_interface_candidate(schema: Any) -> bool:
    if not isinstance(schema, dict) or is_reference(schema):
        return False
    if schema.get("type") not in (None, "object") or schema.get("nullable"):
        return False
    return not any(schema.get(key) for key in COMPOSITION_KEYS)


def generate_schema_model(name: str, schema: Any) -> NamedModel:
    """Emit the declaration for one entry of ``components.schemas``.

    Object-shaped schemas become interfaces, everything else a type alias.
    Enums additionally get a runtime const mapping each literal to itself.
    """
    type_name = to_pascal_case(name)
    resolved = resolve_value(schema, f"#/components/schemas/{name}")
    imports = filter_imports(resolved.imports, exclude=type_name)

    if _is_interface_candidate(schema) and is_record_type(resolved.value):
        return NamedModel(type_name, _interface(type_name, resolved.value), imports)

    model = f"export type {type_name} = {resolved.value};"
    if resolved.is_enum:
        model += "\n\n" + _enum_const(type_name, resolved.enum_values)
    return NamedModel(type_name, model, imports)


def generate_named_type(name: str, value: str, imports: Iterable[str] = ()) -> NamedModel:
    """Emit an interface for a single record type, otherwise a type alias.

    Used for named responses, request bodies, parameters and the response
    types synthesized for operations.
    """
    imports = filter_imports(imports, exclude=name)
    if is_record_type(value):
        return NamedModel(name, _interface(name, value), imports)
    return NamedModel(name, f"export type {name} = {value or 'unknown'};", imports)


def generate_schemas_definition(schemas: dict[str, Any] | None) -> list[NamedModel]:
    """Extract all types from ``#/components/schemas``."""
    if not schemas:
        return []
    return [generate_schema_model(name, schema) for name, schema in schemas.items()]


def generate_responses_definition(responses: dict[str, Any] | None) -> list[NamedModel]:
    """Extract all types from ``#/components/responses``."""
    return _component_bodies(responses, "responses", "Response")


def generate_request_bodies_definition(request_bodies: dict[str, Any] | None) -> list[NamedModel]:
    """Extract all types from ``#/components/requestBodies``."""
    return _component_bodies(request_bodies, "requestBodies", "RequestBody")


def _component_bodies(
    components: dict[str, Any] | None,
    namespace: str,
    suffix: str,
) -> list[NamedModel]:
    if not components:
        return []

    models: list[NamedModel] = []
    for name, item in components.items():
        extracted = get_res_req_types([(f"#/components/{namespace}/{name}", item)])
        models.append(generate_named_type(to_pascal_case(name) + suffix, extracted.value, extracted.imports))
    return models


def generate_parameters_definition(parameters: dict[str, Any] | None) -> list[NamedModel]:
    """Extract all types from ``#/components/parameters``."""
    if not parameters:
        return []

    models: list[NamedModel] = []
    for name, parameter in parameters.items():
        pointer = f"#/components/parameters/{name}"
        if is_reference(parameter):
            resolved = resolve_value(parameter, pointer)
        elif isinstance(parameter, dict):
            resolved = resolve_value(parameter.get("schema") or {}, f"{pointer}/schema")
        else:
            resolved = ResolvedType("any")
        models.append(generate_named_type(f"{to_pascal_case(name)}Parameter", resolved.value, resolved.imports))
    return models
