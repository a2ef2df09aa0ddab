"""OpenAPI 3.x description document models."""

from actiongen.openapi.v3.v3 import (
    HTTP_METHODS,
    Components,
    MediaType,
    OpenAPI,
    Operation,
    Parameter,
    ParameterOrReference,
    PathItem,
    Reference,
    RequestBody,
    RequestBodyOrReference,
    Response,
    ResponseOrReference,
    Schema,
    SchemaOrReference,
)

__all__ = [
    'HTTP_METHODS',
    'Components',
    'MediaType',
    'OpenAPI',
    'Operation',
    'Parameter',
    'ParameterOrReference',
    'PathItem',
    'Reference',
    'RequestBody',
    'RequestBodyOrReference',
    'Response',
    'ResponseOrReference',
    'Schema',
    'SchemaOrReference',
]
