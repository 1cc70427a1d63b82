"""
API Client Generator - Generates a typed TypeScript client from OpenAPI specs.

This module provides:
- Template pre-compilation
- Output layout: api.ts, models/<Name>.ts, models/index.ts
- A CLI driven by flags or by a YAML config file
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..shared import CodegenError, read_spec_text
from .assembler import GeneratedClient, Transformer, import_open_api
from .config import ClientConfig, load_config, load_transformer
from .validation import format_report

TEMPLATE_DIR: Final[Path] = Path(__file__).parent / "templates"

MODEL_HEADER: Final[str] = "/* Generated by restful-client */"


@dataclass
class GeneratorContext:
    """Context for code generation with cached resources."""

    template_env: Environment = field(init=False)

    def __post_init__(self) -> None:
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            auto_reload=False,  # Disable auto-reload for performance
        )
        # Pre-compile templates
        self._api_template = self.template_env.get_template("api.ts.j2")
        self._model_template = self.template_env.get_template("model.ts.j2")
        self._index_template = self.template_env.get_template("index.ts.j2")

    @property
    def api_template(self):
        return self._api_template

    @property
    def model_template(self):
        return self._model_template

    @property
    def index_template(self):
        return self._index_template


def render_api(ctx: GeneratorContext, result: GeneratedClient) -> str:
    """Render the api.ts file."""
    return ctx.api_template.render(base=result.base, api=result.api)


def write_client(
    result: GeneratedClient,
    output_dir: Path,
    ctx: GeneratorContext | None = None,
) -> list[Path]:
    """Write the generated client to ``output_dir``.

    Returns:
        The paths of all written files.
    """
    ctx = ctx or GeneratorContext()
    models_dir = output_dir / "models"
    models_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []

    api_path = output_dir / "api.ts"
    api_path.write_text(render_api(ctx, result), encoding="utf-8")
    written.append(api_path)

    for model in result.models:
        model_path = models_dir / f"{model.name}.ts"
        model_path.write_text(ctx.model_template.render(header=MODEL_HEADER, model=model), encoding="utf-8")
        written.append(model_path)

    index_path = models_dir / "index.ts"
    index_path.write_text(
        ctx.index_template.render(header=MODEL_HEADER, models=result.models),
        encoding="utf-8",
    )
    written.append(index_path)

    return written


def generate(
    spec: str | Path,
    output_dir: Path,
    validation: bool = False,
    transformer: Transformer | None = None,
    ctx: GeneratorContext | None = None,
) -> GeneratedClient:
    """Read a spec from a path or URL, generate the client and write it out."""
    data, fmt = read_spec_text(spec)
    result = import_open_api(data, fmt, transformer=transformer, validation=validation, source=str(spec))
    write_client(result, output_dir, ctx)
    return result


def _print_report(result: GeneratedClient) -> None:
    if result.report is None:
        return
    if result.report.errors or result.report.warnings:
        print(format_report(result.report))
    else:
        print("Validation passed with no findings")


def _run_client(config: ClientConfig, ctx: GeneratorContext) -> None:
    transformer = load_transformer(config.transformer) if config.transformer else None
    result = generate(config.spec, config.output, config.validate, transformer, ctx)
    _print_report(result)
    print(
        f"Generated {config.name} client ({len(result.models)} model(s)) -> {config.output}"
    )


def _configs_from_args(args: argparse.Namespace) -> list[ClientConfig]:
    if args.config is not None:
        configs = load_config(args.config)
        if args.names:
            unknown = sorted(set(args.names) - {config.name for config in configs})
            if unknown:
                raise SystemExit(f"Error: unknown client(s) in config: {', '.join(unknown)}")
            configs = [config for config in configs if config.name in args.names]
        return configs

    if args.spec is None:
        raise SystemExit("Error: either --spec or --config is required")
    return [
        ClientConfig(
            name=Path(str(args.spec)).stem or "api",
            spec=str(args.spec),
            output=args.output,
            validate=args.validate,
            transformer=args.transformer,
        )
    ]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a typed TypeScript client from an OpenAPI 3.0 document")
    parser.add_argument("names", nargs="*", help="Clients to generate from --config (default: all)")
    parser.add_argument("--spec", help="Path or http(s) URL of the OpenAPI document (JSON or YAML)")
    parser.add_argument("--output", default=Path("src/generated"), type=Path, help="Output directory for the generated client")
    parser.add_argument("--config", type=Path, default=None, help="YAML file describing one or more clients")
    parser.add_argument("--validate", action="store_true", help="Run the advisory OpenAPI validator")
    parser.add_argument("--transformer", type=Path, default=None, help="Python file exposing transform(document) -> document")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        configs = _configs_from_args(args)
        ctx = GeneratorContext()
        for config in configs:
            _run_client(config, ctx)
    except (CodegenError, OSError) as e:
        raise SystemExit(f"Error: {e}") from e


if __name__ == "__main__":
    main()
