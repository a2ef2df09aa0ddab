"""actiongen - Generate TypeScript server actions from OpenAPI descriptions.

actiongen reads an OpenAPI 3.x description and writes one asynchronous
TypeScript function per operation. Each function builds the request URL,
serializes query parameters and the JSON body, calls ``fetch`` and returns
the typed JSON payload, or ``null`` when the call fails.

Quick Start:
    >>> from actiongen import Codegen, DocumentConfig
    >>>
    >>> config = DocumentConfig(
    ...     source="https://api.example.com/openapi.json",
    ...     output="./app/actions"
    ... )
    >>> codegen = Codegen(config)
    >>> codegen.generate()

CLI Usage:
    $ actiongen generate --source ./api.yaml --output ./app/actions
    $ actiongen generate --config actiongen.yaml
"""

from actiongen.codegen.codegen import Codegen
from actiongen.codegen.schema import SchemaLoader, SchemaResolver
from actiongen.codegen.types import GeneratedUnit, TypeGenerator
from actiongen.config import CodegenConfig, DocumentConfig, get_config
from actiongen.exceptions import (
    ActionGenError,
    CodeGenerationError,
    ConfigurationError,
    IdentifierCollisionError,
    OutputError,
    SchemaError,
    SchemaLoadError,
    SchemaReferenceError,
    SchemaValidationError,
)

__all__ = [
    # Main classes
    'Codegen',
    'GeneratedUnit',
    'SchemaLoader',
    'SchemaResolver',
    'TypeGenerator',
    # Configuration
    'CodegenConfig',
    'DocumentConfig',
    'get_config',
    # Exceptions
    'ActionGenError',
    'SchemaError',
    'SchemaLoadError',
    'SchemaValidationError',
    'SchemaReferenceError',
    'CodeGenerationError',
    'IdentifierCollisionError',
    'ConfigurationError',
    'OutputError',
]
