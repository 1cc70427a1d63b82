#!/usr/bin/env python3
"""
Client generator CLI.

Usage:
    python -m client_codegen <command> [options]

Commands:
    generate    Generate a TypeScript client from an OpenAPI document
    validate    Run the advisory OpenAPI validator on a document

Examples:
    python -m client_codegen generate --spec openapi.yaml --output src/api
    python -m client_codegen generate --config codegen.yaml petstore
    python -m client_codegen validate --spec https://example.com/openapi.json
"""

from __future__ import annotations

import argparse
import sys


def cmd_generate(args: list[str]) -> int:
    """Generate a client."""
    from client_codegen.api_codegen import main as generator
    try:
        generator.main(args)
        return 0
    except SystemExit as e:
        if isinstance(e.code, str):
            print(e.code, file=sys.stderr)
            return 1
        return e.code if isinstance(e.code, int) else 1


def cmd_validate(args: list[str]) -> int:
    """Validate a document and print the findings."""
    from client_codegen.api_codegen.validation import format_report, validate_document
    from client_codegen.shared import CodegenError, load_spec

    parser = argparse.ArgumentParser(description="Validate an OpenAPI 3.0 document")
    parser.add_argument("--spec", required=True, help="Path or http(s) URL of the OpenAPI document")
    parsed = parser.parse_args(args)

    try:
        document = load_spec(parsed.spec)
    except (CodegenError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    report = validate_document(document)
    if report.errors or report.warnings:
        print(format_report(report))
    else:
        print("No findings")
    return 0 if report.ok else 1


COMMANDS = {
    "generate": (cmd_generate, "Generate a TypeScript client from an OpenAPI document"),
    "validate": (cmd_validate, "Run the advisory OpenAPI validator on a document"),
}


def main() -> int:
    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        print(__doc__)
        print("Available commands:")
        for name, (_, desc) in COMMANDS.items():
            print(f"  {name:12} {desc}")
        print("\nUse '<command> --help' for command-specific options.")
        return 0

    command = sys.argv[1]
    args = sys.argv[2:]

    if command not in COMMANDS:
        print(f"Unknown command: {command}")
        print(f"Available commands: {', '.join(COMMANDS.keys())}")
        return 1

    handler, _ = COMMANDS[command]
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
