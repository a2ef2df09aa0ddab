"""Code generation module for actiongen.

This module provides the core code generation functionality for creating
TypeScript server actions from OpenAPI descriptions.

Main Components:
    - Codegen: The main orchestrator for code generation
    - TypeGenerator: Synthesizes TypeScript types from OpenAPI schemas
    - SchemaLoader: Loads OpenAPI descriptions from URLs or files
    - SchemaResolver: Resolves $ref references in descriptions
    - CodeEmitter: Handles output of generated code

Example:
    >>> from actiongen.codegen import Codegen
    >>> from actiongen.config import DocumentConfig
    >>>
    >>> config = DocumentConfig(
    ...     source="./openapi.json",
    ...     output="./app/actions"
    ... )
    >>> codegen = Codegen(config)
    >>> codegen.generate()
"""

from actiongen.codegen.codegen import Codegen
from actiongen.codegen.emitter import CodeEmitter, FileEmitter, StringEmitter
from actiongen.codegen.endpoints import server_action_fn
from actiongen.codegen.schema import SchemaLoader, SchemaResolver
from actiongen.codegen.types import (
    GeneratedUnit,
    Parameter,
    RequestBodyInfo,
    TypeExpression,
    TypeGenerator,
)
from actiongen.codegen.utils import derive_identifier

__all__ = [
    # Main codegen class
    'Codegen',
    # Type generation
    'TypeGenerator',
    'TypeExpression',
    # Schema handling
    'SchemaLoader',
    'SchemaResolver',
    # Operation compilation
    'GeneratedUnit',
    'Parameter',
    'RequestBodyInfo',
    'derive_identifier',
    'server_action_fn',
    # Code emission
    'CodeEmitter',
    'FileEmitter',
    'StringEmitter',
]
