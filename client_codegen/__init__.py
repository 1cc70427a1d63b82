"""Typed TypeScript client generation from OpenAPI 3.0 documents."""

__version__ = "0.1.0"
