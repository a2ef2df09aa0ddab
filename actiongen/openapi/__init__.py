from actiongen.openapi.v3 import OpenAPI, Reference, Schema

__all__ = [
    'OpenAPI',
    'Reference',
    'Schema',
]
