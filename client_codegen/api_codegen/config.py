"""Generator configuration: YAML config files and transformer hooks."""

from __future__ import annotations

import importlib.util
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from ..shared import ConfigError
from ..shared.schema_loader import is_url
from .assembler import Transformer

TRANSFORMER_ATTRIBUTE = "transform"


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Settings for generating one client."""

    name: str
    spec: str
    output: Path
    validate: bool = False
    transformer: Path | None = None


def _resolve_location(value: str, base: Path) -> str:
    if is_url(value):
        return value
    return str((base / value).resolve())


def _client_from_mapping(name: str, raw: Any, base: Path, config_path: str) -> ClientConfig:
    if not isinstance(raw, dict):
        raise ConfigError(f"Entry '{name}' must be a mapping", config_path)

    spec = raw.get("spec") or raw.get("file") or raw.get("url")
    output = raw.get("output")
    if not spec:
        raise ConfigError(f"Entry '{name}' is missing 'spec'", config_path)
    if not output:
        raise ConfigError(f"Entry '{name}' is missing 'output'", config_path)

    transformer = raw.get("transformer")
    return ClientConfig(
        name=name,
        spec=_resolve_location(str(spec), base),
        output=(base / str(output)).resolve(),
        validate=bool(raw.get("validate", raw.get("validation", False))),
        transformer=(base / str(transformer)).resolve() if transformer else None,
    )


def load_config(path: Path) -> list[ClientConfig]:
    """Load a config file mapping client names to their settings.

    Example::

        petstore:
          spec: specs/petstore.yaml
          output: src/api/petstore
          validate: true
          transformer: transformers/petstore.py

    Relative paths are resolved against the config file's directory.

    Raises:
        ConfigError: If the file is not valid YAML or an entry is incomplete.
    """
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {e}", str(path)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", str(path)) from e

    if not isinstance(raw, dict) or not raw:
        raise ConfigError("Config root must be a non-empty mapping of client names", str(path))

    base = path.resolve().parent
    return [_client_from_mapping(str(name), entry, base, str(path)) for name, entry in raw.items()]


def load_transformer(path: Path) -> Transformer:
    """Load the ``transform(document) -> document`` function from a Python file.

    Raises:
        ConfigError: If the file cannot be imported or has no callable ``transform``.
    """
    if not path.is_file():
        raise ConfigError("Transformer file does not exist", str(path))

    module_spec = importlib.util.spec_from_file_location(f"_transformer_{path.stem}", path)
    if module_spec is None or module_spec.loader is None:
        raise ConfigError("Transformer file cannot be imported", str(path))

    module = importlib.util.module_from_spec(module_spec)
    try:
        module_spec.loader.exec_module(module)
    except Exception as e:
        raise ConfigError(f"Transformer file failed to load: {e}", str(path)) from e

    transform = getattr(module, TRANSFORMER_ATTRIBUTE, None)
    if not callable(transform):
        raise ConfigError(f"Transformer must define a callable '{TRANSFORMER_ATTRIBUTE}(document)'", str(path))
    return transform
