"""Document loading utilities: parse, read from disk, fetch over HTTP."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Final, Literal
from urllib.parse import urlparse

import requests
import yaml
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import SpecFormatError

SpecFormat = Literal["yaml", "json"]

SUPPORTED_FORMATS: Final[frozenset[str]] = frozenset({"yaml", "json"})

_YAML_SUFFIXES: Final[frozenset[str]] = frozenset({".yml", ".yaml"})


def parse_spec(data: str, fmt: str, source: str | None = None) -> dict[str, Any]:
    """Parse raw document text in the declared format.

    Args:
        data: Raw document text.
        fmt: Either ``"yaml"`` or ``"json"``.
        source: Where the text came from, used in error messages.

    Returns:
        The parsed document mapping.

    Raises:
        SpecFormatError: If the format is unknown or the text does not parse
            to a mapping.
    """
    if fmt not in SUPPORTED_FORMATS:
        raise SpecFormatError(f"Unsupported format '{fmt}', expected one of: yaml, json", source)

    try:
        document = yaml.safe_load(data) if fmt == "yaml" else json.loads(data)
    except yaml.YAMLError as e:
        raise SpecFormatError(f"Invalid YAML: {e}", source) from e
    except json.JSONDecodeError as e:
        raise SpecFormatError(f"Invalid JSON: {e}", source) from e

    if not isinstance(document, dict):
        raise SpecFormatError("Document root must be a mapping", source)

    return document


def check_openapi_version(document: dict[str, Any], source: str | None = None) -> str:
    """Ensure the document is OpenAPI 3.0 and return its version string.

    Older documents (Swagger 2.0) have to be converted before generation.
    """
    version = document.get("openapi")
    if not isinstance(version, str) or not version.startswith("3.0"):
        found = version or document.get("swagger") or "unknown"
        raise SpecFormatError(
            f"Only OpenAPI 3.0 documents are supported (found version '{found}'); "
            "convert older documents to OpenAPI 3.0 first",
            source,
        )
    return version


def infer_format(location: str, data: str | None = None) -> SpecFormat:
    """Infer the serialization format from a path/URL suffix, then from the text."""
    suffix = Path(urlparse(location).path).suffix.lower()
    if suffix in _YAML_SUFFIXES:
        return "yaml"
    if suffix == ".json":
        return "json"
    if data is not None and data.lstrip().startswith(("{", "[")):
        return "json"
    return "yaml"


def is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def fetch_spec_text(url: str, timeout: float = 10.0) -> str:
    """Fetch a remote document.

    Uses urllib3 Retry via requests.adapters.HTTPAdapter.
    """
    session = requests.Session()
    retries = Retry(total=3, backoff_factor=0.5, status_forcelist=(500, 502, 503, 504))
    adapter = HTTPAdapter(max_retries=retries)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    try:
        resp = session.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise SpecFormatError(f"Failed to fetch document: {e}", url) from e
    finally:
        session.close()

    return resp.text


def read_spec_text(location: str | Path) -> tuple[str, SpecFormat]:
    """Read document text from a file path or an http(s) URL.

    Returns:
        The raw text and its inferred format.

    Raises:
        SpecFormatError: If a URL cannot be fetched.
        OSError: If a local file cannot be read.
    """
    location = str(location)
    if is_url(location):
        data = fetch_spec_text(location)
    else:
        data = Path(location).read_text(encoding="utf-8")
    return data, infer_format(location, data)


def load_spec(location: str | Path) -> dict[str, Any]:
    """Load and parse a document from a file path or URL.

    Supports both YAML and JSON formats.
    """
    data, fmt = read_spec_text(location)
    return parse_spec(data, fmt, str(location))
