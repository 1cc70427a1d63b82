"""
Schema resolution - turns OpenAPI schema nodes into TypeScript type expressions.

Every resolution returns the type expression together with the names of the
generated types it refers to, so callers can emit imports. References are
never expanded: ``{"$ref": "#/components/schemas/Pet"}`` always renders as
``Pet``, which keeps self-referencing named schemas finite.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final, Iterable

from ..shared import (
    CyclicSchemaError,
    SchemaValidationError,
    UnsupportedReferenceError,
    to_pascal_case,
)
from ..shared.naming import is_identifier

COMPONENTS_PREFIX: Final[str] = "#/components/"

# Components namespace -> suffix appended to the generated type name
REF_NAMESPACES: Final[dict[str, str]] = {
    "schemas": "",
    "responses": "Response",
    "parameters": "Parameter",
    "requestBodies": "RequestBody",
}

NUMBER_TYPES: Final[frozenset[str]] = frozenset({
    "integer", "number", "int32", "int64", "long", "float", "double"
})

STRING_TYPES: Final[frozenset[str]] = frozenset({
    "string", "byte", "binary", "date", "dateTime", "date-time", "password"
})

COMPOSITION_KEYS: Final[tuple[str, ...]] = ("allOf", "oneOf", "anyOf")

BINARY_TYPE: Final[str] = "BlobPart"

_BRACKETS: Final[dict[str, str]] = {"{": "}", "(": ")", "[": "]", "<": ">"}


@dataclass(frozen=True, slots=True)
class ResolvedType:
    """A TypeScript type expression and the named types it depends on."""
    value: str
    imports: tuple[str, ...] = ()
    enum_values: tuple[str, ...] = ()

    @property
    def is_enum(self) -> bool:
        return bool(self.enum_values)


def is_reference(node: Any) -> bool:
    """Return True for a ``{"$ref": ...}`` node."""
    return isinstance(node, dict) and bool(node.get("$ref"))


def split_ref(ref: str, pointer: str | None = None) -> tuple[str, str]:
    """Split a components ``$ref`` into ``(namespace, name)``.

    Raises:
        UnsupportedReferenceError: If the reference is not inside one of the
            four supported components namespaces.
    """
    if ref.startswith(COMPONENTS_PREFIX):
        namespace, _, name = ref[len(COMPONENTS_PREFIX):].partition("/")
        if namespace in REF_NAMESPACES and name and "/" not in name:
            return namespace, name
    raise UnsupportedReferenceError(ref, pointer)


def get_ref(ref: str, pointer: str | None = None) -> str:
    """Return the generated type name a ``$ref`` points at."""
    namespace, name = split_ref(ref, pointer)
    return to_pascal_case(name) + REF_NAMESPACES[namespace]


def merge_imports(groups: Iterable[Iterable[str]]) -> tuple[str, ...]:
    """Concatenate import groups, keeping the first occurrence of each name."""
    seen: dict[str, None] = {}
    for group in groups:
        for name in group:
            seen.setdefault(name, None)
    return tuple(seen)


def is_compound(value: str) -> bool:
    """Return True if ``value`` is a top-level union or intersection."""
    depth = 0
    quoted = False
    escaped = False
    for index, char in enumerate(value):
        if quoted:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == "'":
                quoted = False
        elif char == "'":
            quoted = True
        elif char in _BRACKETS:
            depth += 1
        elif char in _BRACKETS.values():
            depth -= 1
        elif depth == 0 and index > 0 and char in "|&" and value[index - 1:index + 2] in (" | ", " & "):
            return True
    return False


def is_record_type(value: str) -> bool:
    """Return True if ``value`` is a single structural record such as ``{a: string}``."""
    return value.startswith("{") and value.endswith("}") and not is_compound(value)


def string_literal(value: Any) -> str:
    """Render a single-quoted TypeScript string literal."""
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _property_key(name: str) -> str:
    return name if is_identifier(name) else string_literal(name)


def resolve_value(schema: Any, pointer: str = "#") -> ResolvedType:
    """Resolve a schema node to a TypeScript type.

    Args:
        schema: The schema node (a mapping, or ``True`` for a free-form value).
        pointer: JSON pointer of the node, used in error messages.

    Raises:
        UnsupportedReferenceError: For a ``$ref`` outside ``#/components``.
        SchemaValidationError: For an array without ``items``.
        CyclicSchemaError: If an inline schema contains itself.
    """
    return _resolve(schema, pointer, frozenset())


def _resolve(schema: Any, pointer: str, active: frozenset[int]) -> ResolvedType:
    if is_reference(schema):
        name = get_ref(schema["$ref"], pointer)
        return ResolvedType(name, (name,))
    if not isinstance(schema, dict):
        return ResolvedType("any")

    # YAML anchors can make an inline node contain itself
    if id(schema) in active:
        raise CyclicSchemaError("Schema contains itself through inline composition", pointer)
    return _resolve_scalar(schema, pointer, active | {id(schema)})


def _resolve_scalar(schema: dict[str, Any], pointer: str, active: frozenset[int]) -> ResolvedType:
    nullable = " | null" if schema.get("nullable") else ""
    kind = schema.get("type")

    if kind in NUMBER_TYPES:
        return ResolvedType("number" + nullable)

    if kind == "boolean":
        return ResolvedType("boolean" + nullable)

    if kind == "array":
        resolved = _resolve_array(schema, pointer, active)
        return ResolvedType(resolved.value + nullable, resolved.imports)

    if kind in STRING_TYPES:
        if schema.get("format") == "binary":
            return ResolvedType(BINARY_TYPE + nullable)
        enum_values = tuple(str(item) for item in schema.get("enum") or () if item is not None)
        if enum_values:
            value = " | ".join(string_literal(item) for item in enum_values)
            return ResolvedType(value + nullable, enum_values=enum_values)
        return ResolvedType("string" + nullable)

    resolved = _resolve_object(schema, pointer, active)
    return ResolvedType(resolved.value + nullable, resolved.imports)


def _resolve_array(schema: dict[str, Any], pointer: str, active: frozenset[int]) -> ResolvedType:
    items = schema.get("items")
    if items is None:
        raise SchemaValidationError("All arrays must define an 'items' schema", pointer, field="items")

    resolved = _resolve(items, f"{pointer}/items", active)
    composed = isinstance(items, dict) and any(items.get(key) for key in COMPOSITION_KEYS)
    if not is_reference(items) and (composed or is_compound(resolved.value)):
        return ResolvedType(f"({resolved.value})[]", resolved.imports)
    return ResolvedType(f"{resolved.value}[]", resolved.imports)


def _resolve_object(schema: dict[str, Any], pointer: str, active: frozenset[int]) -> ResolvedType:
    if is_reference(schema):
        name = get_ref(schema["$ref"], pointer)
        return ResolvedType(name, (name,))

    for key, joiner in (("allOf", " & "), ("oneOf", " | "), ("anyOf", " | ")):
        members = schema.get(key)
        if members:
            parts = [
                _resolve(member, f"{pointer}/{key}/{index}", active)
                for index, member in enumerate(members)
            ]
            return ResolvedType(
                joiner.join(part.value for part in parts),
                merge_imports(part.imports for part in parts),
            )

    properties = schema.get("properties")
    if isinstance(properties, dict):
        required = set(schema.get("required") or ())
        fields: list[str] = []
        parts = []
        for name, prop in properties.items():
            resolved = _resolve(prop, f"{pointer}/properties/{name}", active)
            optional = "" if name in required else "?"
            fields.append(f"{_property_key(name)}{optional}: {resolved.value}")
            parts.append(resolved)
        return ResolvedType(
            "{" + "; ".join(fields) + "}",
            merge_imports(part.imports for part in parts),
        )

    additional = schema.get("additionalProperties")
    if additional is not None and additional is not False:
        resolved = _resolve(additional, f"{pointer}/additionalProperties", active)
        return ResolvedType(f"{{[key: string]: {resolved.value}}}", resolved.imports)

    return ResolvedType("{}" if schema.get("type") == "object" else "any")
