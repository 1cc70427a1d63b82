"""
Operation compilation - one client method per (route, verb) pair.

Each operation yields two text artifacts: a signature for the aggregate API
interface and an implementation for the factory object that issues the call
through an axios instance.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Final, Iterable, Sequence

from ..shared import (
    DuplicateOperationIdError,
    MissingOperationIdError,
    MissingPathParameterError,
    UnresolvedReferenceError,
    UnsupportedReferenceError,
    is_identifier,
    quote_literal,
    to_camel_case,
    to_pascal_case,
)
from .extractor import UNKNOWN_TYPE, get_res_req_types
from .models import NamedModel, generate_named_type
from .resolver import ResolvedType, is_reference, merge_imports, resolve_value, split_ref

# HTTP verbs that get a client method, in emission order
HTTP_VERBS: Final[tuple[str, ...]] = ("get", "post", "put", "patch", "delete")

# Verbs whose axios helper takes the request body as second positional argument
BODY_VERBS: Final[frozenset[str]] = frozenset({"post", "put", "patch"})

_PATH_PARAM_RE: Final[re.Pattern[str]] = re.compile(r"\{([^}]+)\}")
_TRAILING_PARAM_RE: Final[re.Pattern[str]] = re.compile(r"/\{([^}]+)\}$")


@dataclass(frozen=True, slots=True)
class ParamSpec:
    """One parameter of a generated client method."""
    name: str
    resolved: ResolvedType
    required: bool
    has_default: bool = False
    default: Any = None

    @property
    def definition(self) -> str:
        """Fragment used in the interface signature."""
        optional = "?" if not self.required or self.has_default else ""
        return f"{self.name}{optional}: {self.resolved.value}"

    @property
    def implementation(self) -> str:
        """Fragment used in the implementation, carrying the default value."""
        if self.has_default:
            return f"{self.name}: {self.resolved.value} = {quote_literal(self.default)}"
        optional = "" if self.required else "?"
        return f"{self.name}{optional}: {self.resolved.value}"


@dataclass(frozen=True, slots=True)
class CompiledOperation:
    """Everything generated for a single operation."""
    operation_id: str
    name: str
    verb: str
    route: str
    params: tuple[ParamSpec, ...]
    response_type: str
    request_type: str
    imports: tuple[str, ...]
    definition: str
    implementation: str
    response_model: NamedModel | None = None


def escape_pointer(segment: str) -> str:
    """Escape one JSON pointer segment."""
    return segment.replace("~", "~0").replace("/", "~1")


def get_component(components: dict[str, Any] | None, namespace: str, name: str) -> dict[str, Any] | None:
    """Look up ``components[namespace][name]``; ``None`` when it does not exist."""
    section = (components or {}).get(namespace) or {}
    found = section.get(name)
    return found if isinstance(found, dict) else None


def dereference_parameter(
    parameter: dict[str, Any],
    components: dict[str, Any] | None,
    pointer: str,
) -> dict[str, Any]:
    """Return the parameter object, following a ``#/components/parameters`` reference."""
    if not is_reference(parameter):
        return parameter

    ref = parameter["$ref"]
    namespace, name = split_ref(ref, pointer)
    if namespace != "parameters":
        raise UnsupportedReferenceError(ref, pointer)

    found = get_component(components, "parameters", name)
    if found is None:
        raise UnresolvedReferenceError(ref, pointer)
    return found


def merge_parameters(
    shared: Iterable[dict[str, Any]],
    own: Iterable[dict[str, Any]],
    components: dict[str, Any] | None,
    pointer: str,
) -> list[dict[str, Any]]:
    """Merge path-level and operation-level parameters.

    Operation-level parameters override path-level ones with the same
    ``name`` and ``in``; declaration order is kept.
    """
    path_pointer = pointer.rsplit("/", 1)[0]
    merged: dict[tuple[str, str], dict[str, Any]] = {}
    for base, params in ((path_pointer, shared), (pointer, own)):
        for index, param in enumerate(params):
            param = dereference_parameter(param, components, f"{base}/parameters/{index}")
            merged[(str(param.get("name")), str(param.get("in")))] = param
    return list(merged.values())


def path_identifier(name: str) -> str:
    """Map a route parameter name to a usable JavaScript identifier."""
    return name if is_identifier(name) else to_camel_case(name)


def param_spec(parameter: dict[str, Any], pointer: str, name: str | None = None) -> ParamSpec:
    """Build a :class:`ParamSpec` from a (dereferenced) parameter object.

    ``name`` overrides the declared parameter name.
    """
    schema = parameter.get("schema") or {}
    default = schema.get("default") if isinstance(schema, dict) else None
    return ParamSpec(
        name=name or str(parameter.get("name", "")),
        resolved=resolve_value(schema, f"{pointer}/schema"),
        required=bool(parameter.get("required")),
        has_default=default is not None,
        default=default,
    )


def _param_rank(param: ParamSpec) -> int:
    if param.has_default:
        return 2
    return 0 if param.required else 1


def sort_params(params: Iterable[ParamSpec]) -> list[ParamSpec]:
    """Order parameters: required, then optional, then those with a default.

    The sort is stable, so ties keep their original order.
    """
    return sorted(params, key=_param_rank)


def _query_params_spec(query_params: Sequence[dict[str, Any]], pointer: str) -> ParamSpec:
    members = [param_spec(param, f"{pointer}/query/{param.get('name')}") for param in query_params]
    value = "{" + "; ".join(member.definition for member in members) + "}"
    return ParamSpec(
        name="params",
        resolved=ResolvedType(value, merge_imports(member.resolved.imports for member in members)),
        required=any(member.required and not member.has_default for member in members),
    )


def compile_operation(
    operation: dict[str, Any],
    verb: str,
    route: str,
    operation_ids: set[str],
    parameters: Sequence[dict[str, Any]] = (),
    components: dict[str, Any] | None = None,
) -> CompiledOperation:
    """Generate the client method for one operation.

    Args:
        operation: The OpenAPI operation object.
        verb: HTTP verb (lowercase).
        route: Route template such as ``/pets/{id}``.
        operation_ids: operationIds seen so far in this run; updated in place.
        parameters: Path-item level parameters shared by every verb.
        components: The document's ``components`` mapping.

    Raises:
        MissingOperationIdError: If the operation has no operationId.
        DuplicateOperationIdError: If the operationId was already used.
        MissingPathParameterError: If a route parameter is not declared.
    """
    operation_id = operation.get("operationId")
    if not operation_id:
        raise MissingOperationIdError(verb, route)
    if operation_id in operation_ids:
        raise DuplicateOperationIdError(operation_id)
    operation_ids.add(operation_id)

    pointer = f"#/paths/{escape_pointer(route)}/{verb}"
    component_name = to_pascal_case(operation_id)
    method_name = to_camel_case(component_name)

    # DELETE drops the trailing identifier from the URL; it stays a parameter
    trimmed = route
    trailing_param: str | None = None
    if verb == "delete":
        match = _TRAILING_PARAM_RE.search(route)
        if match:
            trailing_param = match.group(1)
            trimmed = route[:match.start()]

    # `/pet/{pet-id}` => `/pet/${petId}`
    template = _PATH_PARAM_RE.sub(lambda m: "${" + path_identifier(m.group(1)) + "}", trimmed)

    declared = merge_parameters(parameters, operation.get("parameters") or (), components, pointer)
    path_params = {str(p.get("name")): p for p in declared if p.get("in") == "path"}
    query_params = [p for p in declared if p.get("in") == "query"]

    names_in_path = _PATH_PARAM_RE.findall(trimmed)
    if trailing_param:
        names_in_path.append(trailing_param)

    params: list[ParamSpec] = []
    for name in names_in_path:
        if name not in path_params:
            raise MissingPathParameterError(name, operation_id)
        params.append(
            param_spec(path_params[name], f"{pointer}/parameters/{name}", name=path_identifier(name))
        )

    request = get_res_req_types([(f"{pointer}/requestBody", operation.get("requestBody"))])
    body: ParamSpec | None = None
    if request.value:
        body = ParamSpec(
            name=to_camel_case(request.value) or "body",
            resolved=ResolvedType(request.value, request.imports),
            required=True,
        )
        params.append(body)

    if query_params:
        params.append(_query_params_spec(query_params, pointer))

    params = sort_params(params)

    responses = operation.get("responses") or {}
    success = get_res_req_types(
        (f"{pointer}/responses/{code}", response)
        for code, response in responses.items()
        if str(code).startswith("2")
    )
    response_type = success.value or UNKNOWN_TYPE

    # Inline records are lifted into a named `<OperationId>Response` type
    response_model: NamedModel | None = None
    return_type = response_type
    if "{" in response_type:
        response_model = generate_named_type(f"{component_name}Response", response_type, success.imports)
        return_type = response_model.name

    imports = merge_imports(
        [param.resolved.imports for param in params]
        + [(return_type,) if response_model else success.imports]
    )

    definition_lines = []
    summary = operation.get("summary")
    if summary:
        definition_lines.append(f"  // {summary}")
    signature = ", ".join(param.definition for param in params)
    definition_lines.append(f"  {method_name}({signature}): AxiosPromise<{return_type}>;")

    call_args = [f"`{template}`"]
    options: list[str] = []
    if body and verb in BODY_VERBS:
        call_args.append(body.name)
    elif body:
        options.append(f"data: {body.name}")
    if query_params:
        options.append("params")
    accept = success.binary_content_type
    if accept:
        options.append("responseType: 'arraybuffer'")
        options.append(f"headers: {{ Accept: '{accept}' }}")
    if options:
        if verb in BODY_VERBS and not body:
            call_args.append("undefined")
        call_args.append("{ " + ", ".join(options) + " }")

    arguments = ", ".join(param.implementation for param in params)
    implementation = (
        f"  {method_name}({arguments}): AxiosPromise<{return_type}> {{\n"
        f"    return axios.{verb}({', '.join(call_args)});\n"
        f"  }},"
    )

    return CompiledOperation(
        operation_id=operation_id,
        name=method_name,
        verb=verb,
        route=template,
        params=tuple(params),
        response_type=return_type,
        request_type=request.value,
        imports=imports,
        definition="\n".join(definition_lines),
        implementation=implementation,
        response_model=response_model,
    )
