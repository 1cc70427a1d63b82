"""Custom exceptions for the client generator."""

from __future__ import annotations


class CodegenError(Exception):
    """Base exception for generation errors.

    ``pointer`` is the JSON pointer (``#/components/schemas/Pet``) of the
    document node the error is about, when one is known.
    """

    def __init__(self, message: str, pointer: str | None = None) -> None:
        self.pointer = pointer
        full_message = f"{message}" if not pointer else f"[{pointer}] {message}"
        super().__init__(full_message)


class SpecFormatError(CodegenError):
    """Raised when the document text cannot be turned into an OpenAPI 3.0 mapping."""


class ConfigError(CodegenError):
    """Raised for an invalid generator configuration file."""


class SchemaValidationError(CodegenError):
    """Raised when a schema node is structurally invalid."""

    def __init__(
        self,
        message: str,
        pointer: str | None = None,
        field: str | None = None,
    ) -> None:
        self.field = field
        if field:
            message = f"Field '{field}': {message}"
        super().__init__(message, pointer)


class UnsupportedReferenceError(CodegenError):
    """Raised for a ``$ref`` outside the recognised components namespaces."""

    def __init__(self, ref: str, pointer: str | None = None) -> None:
        self.ref = ref
        super().__init__(
            f"Unsupported $ref '{ref}': only references into "
            "#/components/{schemas,responses,parameters,requestBodies} are resolved",
            pointer,
        )


class UnresolvedReferenceError(CodegenError):
    """Raised when a ``$ref`` points at a component that does not exist."""

    def __init__(self, ref: str, pointer: str | None = None) -> None:
        self.ref = ref
        super().__init__(f"$ref '{ref}' does not point to an existing component", pointer)


class CyclicSchemaError(CodegenError):
    """Raised when an inline schema contains itself."""


class DiscriminatorMappingError(CodegenError):
    """Raised for a discriminator mapping outside ``#/components/schemas``."""

    def __init__(self, ref: str, pointer: str | None = None) -> None:
        self.ref = ref
        super().__init__(
            f"Discriminator mapping '{ref}' is outside of #/components/schemas",
            pointer,
        )


class OperationError(CodegenError):
    """Base exception for errors tied to a single operation."""

    def __init__(
        self,
        message: str,
        operation_id: str | None = None,
        pointer: str | None = None,
    ) -> None:
        self.operation_id = operation_id
        super().__init__(message, pointer)


class MissingOperationIdError(OperationError):
    """Raised when an operation has no ``operationId``."""

    def __init__(self, verb: str, route: str) -> None:
        self.verb = verb
        self.route = route
        super().__init__(
            f"Every operation must have an operationId - none set for {verb} {route}"
        )


class DuplicateOperationIdError(OperationError):
    """Raised when the same ``operationId`` is used twice."""

    def __init__(self, operation_id: str) -> None:
        super().__init__(
            f'"{operation_id}" is a duplicated operationId in the document',
            operation_id,
        )


class MissingPathParameterError(OperationError):
    """Raised when a route template names a parameter that is not declared."""

    def __init__(self, parameter: str, operation_id: str) -> None:
        self.parameter = parameter
        super().__init__(
            f"The path parameter '{parameter}' can't be found in parameters ({operation_id})",
            operation_id,
        )
