"""Custom exceptions for actiongen.

This module defines a hierarchy of exceptions used throughout actiongen
to provide clear, actionable error messages for different failure scenarios.
"""


class ActionGenError(Exception):
    """Base exception for all actiongen errors.

    All exceptions raised by actiongen inherit from this class, making it easy
    to catch all generator errors with a single except clause.

    Example:
        try:
            codegen.generate()
        except ActionGenError as e:
            print(f"actiongen error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class SchemaError(ActionGenError):
    """Base exception for description-document errors."""

    pass


class SchemaLoadError(SchemaError):
    """Failed to load an OpenAPI description from a source.

    Attributes:
        source: The source path or URL that failed to load.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        message = f"Failed to load schema from '{source}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class SchemaValidationError(SchemaError):
    """The description has a shape the document model cannot represent.

    Attributes:
        source: The source path or URL of the rejected description.
        errors: List of validation error messages.
    """

    def __init__(self, source: str, errors: list[str] | None = None):
        self.source = source
        self.errors = errors or []
        message = f"Schema validation failed for '{source}'"
        if errors:
            message += f': {"; ".join(errors)}'
        super().__init__(message)


class SchemaReferenceError(SchemaError):
    """Failed to resolve a $ref reference in the document.

    Raised when a reference points outside the document, walks through a
    segment that does not exist, or lands on something that is not the
    expected kind of object.

    Attributes:
        reference: The $ref string that could not be resolved.
        reason: Explanation of why the reference couldn't be resolved.
    """

    def __init__(self, reference: str, reason: str | None = None):
        self.reference = reference
        self.reason = reason
        message = f"Failed to resolve reference '{reference}'"
        if reason:
            message += f': {reason}'
        super().__init__(message)


class CodeGenerationError(ActionGenError):
    """Error during code generation.

    Attributes:
        context: Additional context about what was being generated.
        cause: The underlying exception that caused the failure.
    """

    def __init__(
        self, message: str, context: str | None = None, cause: Exception | None = None
    ):
        self.context = context
        self.cause = cause
        full_message = message
        if context:
            full_message = f'{message} (while generating {context})'
        if cause:
            full_message += f': {cause}'
        super().__init__(full_message)


class IdentifierCollisionError(CodeGenerationError):
    """Two operations derive the same identifier.

    Both would be written under the same storage key, so the later one
    would replace the earlier one.

    Attributes:
        identifier: The colliding identifier.
        operations: The ``METHOD /path`` labels of the colliding operations.
    """

    def __init__(self, identifier: str, operations: list[str]):
        self.identifier = identifier
        self.operations = operations
        message = (
            f"Identifier '{identifier}' is derived by more than one operation: "
            f'{", ".join(operations)}'
        )
        super().__init__(message)


class ConfigurationError(ActionGenError):
    """Error in configuration.

    Attributes:
        config_path: The path to the configuration file, if applicable.
        field: The specific configuration field that is invalid.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)


class OutputError(ActionGenError):
    """Error writing generated output.

    Attributes:
        output_path: The path where output was being written.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, output_path: str, cause: Exception | None = None):
        self.output_path = output_path
        self.cause = cause
        message = f"Failed to write output to '{output_path}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)
