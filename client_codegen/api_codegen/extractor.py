"""Response / request body type extraction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final, Iterable

from .resolver import get_ref, is_reference, merge_imports, resolve_value

# Content types that are inspected, in priority order
CONTENT_TYPE_PRIORITY: Final[tuple[str, ...]] = (
    "application/json",
    "application/octet-stream",
    "application/pdf",
)

UNKNOWN_TYPE: Final[str] = "unknown"

# Content types downloaded as raw bytes
BINARY_CONTENT_TYPES: Final[frozenset[str]] = frozenset({
    "application/octet-stream",
    "application/pdf",
})


@dataclass(frozen=True, slots=True)
class ExtractedTypes:
    """De-duplicated union of the types of several responses / request bodies.

    ``content_types`` is aligned with ``values`` and records the content type
    each value was resolved from (``None`` for references and ``unknown``).
    """
    values: tuple[str, ...] = ()
    imports: tuple[str, ...] = ()
    content_types: tuple[str | None, ...] = ()

    @property
    def value(self) -> str:
        return " | ".join(self.values)

    @property
    def binary_content_type(self) -> str | None:
        """The content type to accept when the whole result is a binary stream."""
        if len(self.content_types) != 1 or self.content_types[0] not in BINARY_CONTENT_TYPES:
            return None
        return self.content_types[0]


def get_res_req_types(items: Iterable[tuple[str, Any]]) -> ExtractedTypes:
    """Extract the union of types of responses or request bodies.

    Args:
        items: ``(pointer, response_or_request_body)`` pairs. The pointer is
            only used in error messages. Missing entries are skipped.

    Returns:
        The de-duplicated union. A response without a known content type
        contributes ``unknown``.
    """
    found: dict[str, str | None] = {}
    import_groups: list[tuple[str, ...]] = []

    for pointer, item in items:
        if not item:
            continue

        if is_reference(item):
            name = get_ref(item["$ref"], pointer)
            found.setdefault(name, None)
            import_groups.append((name,))
            continue

        content = item.get("content") or {}
        for content_type in CONTENT_TYPE_PRIORITY:
            media = content.get(content_type)
            if media is None:
                continue
            schema = media.get("schema") if isinstance(media, dict) else None
            if schema is None:
                found.setdefault(UNKNOWN_TYPE, None)
                break
            resolved = resolve_value(schema, f"{pointer}/content/{content_type.replace('/', '~1')}/schema")
            found.setdefault(resolved.value, content_type)
            import_groups.append(resolved.imports)
            break
        else:
            found.setdefault(UNKNOWN_TYPE, None)

    return ExtractedTypes(
        values=tuple(found),
        imports=merge_imports(import_groups),
        content_types=tuple(found.values()),
    )
