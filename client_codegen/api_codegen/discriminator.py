"""Discriminator propagation pre-pass."""

from __future__ import annotations

import copy
import logging
from typing import Any, Final

from ..shared import DiscriminatorMappingError
from .resolver import is_reference

logger = logging.getLogger(__name__)

SCHEMAS_PREFIX: Final[str] = "#/components/schemas/"


def resolve_discriminator(document: dict[str, Any]) -> dict[str, Any]:
    """Propagate every ``discriminator.mapping`` onto the mapped schemas.

    For each ``(literal, ref)`` pair of a discriminator mapping, the property
    named by ``discriminator.propertyName`` on the target schema gets
    ``enum: [literal]`` so it later renders as a one-value literal union.
    Properties that are themselves references are left untouched.

    The input is not modified; a propagated deep copy is returned.

    Raises:
        DiscriminatorMappingError: If a mapping points outside
            ``#/components/schemas``.
    """
    propagated = copy.deepcopy(document)
    schemas = (propagated.get("components") or {}).get("schemas") or {}

    for schema_name, schema in schemas.items():
        if not isinstance(schema, dict):
            continue
        discriminator = schema.get("discriminator")
        if not isinstance(discriminator, dict) or not discriminator.get("mapping"):
            continue

        property_name = discriminator.get("propertyName")
        pointer = f"{SCHEMAS_PREFIX}{schema_name}/discriminator"

        for literal, ref in discriminator["mapping"].items():
            if not isinstance(ref, str) or not ref.startswith(SCHEMAS_PREFIX):
                raise DiscriminatorMappingError(str(ref), pointer)

            target_name = ref[len(SCHEMAS_PREFIX):]
            target = schemas.get(target_name)
            if not isinstance(target, dict):
                logger.warning("Discriminator mapping %r points to unknown schema %r", literal, target_name)
                continue

            prop = (target.get("properties") or {}).get(property_name)
            if isinstance(prop, dict) and not is_reference(prop):
                prop["enum"] = [literal]

    return propagated
