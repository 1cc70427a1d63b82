"""
Document assembly - runs the whole generation for one OpenAPI document.

The run is all-or-nothing: any error raised while resolving schemas or
compiling operations aborts before a result is returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Final

from ..shared import check_openapi_version, parse_spec, to_pascal_case
from .discriminator import resolve_discriminator
from .models import (
    NamedModel,
    filter_imports,
    generate_parameters_definition,
    generate_request_bodies_definition,
    generate_responses_definition,
    generate_schemas_definition,
)
from .operations import HTTP_VERBS, compile_operation
from .resolver import merge_imports
from .validation import ValidationReport, validate_document

logger = logging.getLogger(__name__)

Transformer = Callable[[dict[str, Any]], dict[str, Any]]

BASE_PREAMBLE: Final[str] = """/* Generated by restful-client */

import { AxiosPromise, AxiosInstance } from 'axios'
"""


@dataclass(frozen=True, slots=True)
class ApiArtifact:
    """The aggregate API interface, its factory and the models it imports."""
    name: str
    definition: str
    implementation: str
    imports: tuple[str, ...] = ()

    @property
    def output(self) -> str:
        return f"{self.definition}\n\n{self.implementation}"


@dataclass(frozen=True, slots=True)
class GeneratedClient:
    base: str
    api: ApiArtifact
    models: tuple[NamedModel, ...]
    report: ValidationReport | None = None


def get_api(document: dict[str, Any], operation_ids: set[str]) -> tuple[ApiArtifact, list[NamedModel]]:
    """Compile every operation of the document into the API artifact.

    Returns:
        The API artifact and the response models synthesized for operations
        whose success type is an inline record.
    """
    title = to_pascal_case(str((document.get("info") or {}).get("title") or "")) or "Api"
    components = document.get("components") or {}

    definitions: list[str] = []
    implementations: list[str] = []
    import_groups: list[tuple[str, ...]] = []
    response_models: list[NamedModel] = []

    for route, path_item in (document.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        shared_parameters = path_item.get("parameters") or ()
        for verb, operation in path_item.items():
            if verb not in HTTP_VERBS or not isinstance(operation, dict):
                continue
            compiled = compile_operation(operation, verb, route, operation_ids, shared_parameters, components)
            logger.debug("Compiled %s %s as %s", verb.upper(), route, compiled.name)
            definitions.append(compiled.definition)
            implementations.append(compiled.implementation)
            import_groups.append(compiled.imports)
            if compiled.response_model is not None:
                response_models.append(compiled.response_model)

    definition = f"export interface {title} {{\n" + "\n".join(definitions) + "\n}"
    implementation = (
        f"export const get{title} = (axios: AxiosInstance): {title} => ({{\n"
        + "\n".join(implementations)
        + "\n})"
    )
    api = ApiArtifact(
        name=title,
        definition=definition,
        implementation=implementation,
        imports=filter_imports(merge_imports(import_groups)),
    )
    return api, response_models


def generate_client(
    document: dict[str, Any],
    transformer: Transformer | None = None,
    validation: bool = False,
) -> GeneratedClient:
    """Generate the client for an already parsed OpenAPI 3.0 document."""
    if transformer is not None:
        document = transformer(document)
    check_openapi_version(document)

    report = validate_document(document) if validation else None

    document = resolve_discriminator(document)
    components = document.get("components") or {}

    models = [
        *generate_schemas_definition(components.get("schemas")),
        *generate_responses_definition(components.get("responses")),
        *generate_request_bodies_definition(components.get("requestBodies")),
        *generate_parameters_definition(components.get("parameters")),
    ]

    api, response_models = get_api(document, set())
    models.extend(response_models)
    logger.debug("Generated %d model(s) for %s", len(models), api.name)

    return GeneratedClient(base=BASE_PREAMBLE, api=api, models=tuple(models), report=report)


def import_open_api(
    data: str,
    fmt: str,
    transformer: Transformer | None = None,
    validation: bool = False,
    source: str | None = None,
) -> GeneratedClient:
    """Main entry of the generator: raw document text to client artifacts.

    Args:
        data: Raw document text.
        fmt: ``"yaml"`` or ``"json"``.
        transformer: Optional function applied to the parsed document first.
        validation: Run the advisory validator and attach its report.
        source: Where ``data`` came from, used in error messages.
    """
    document = parse_spec(data, fmt, source)
    return generate_client(document, transformer=transformer, validation=validation)
