from __future__ import annotations

import http
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    PrivateAttr,
    Tag,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)

HTTP_METHODS = [method.value.lower() for method in http.HTTPMethod]


def _reference_tag(data: Any) -> str:
    """Discriminator function telling a $ref object apart from an inline one."""
    if isinstance(data, dict):
        return 'reference' if '$ref' in data else 'object'
    return 'reference' if isinstance(data, Reference) else 'object'


class Reference(BaseModel):
    model_config = ConfigDict(extra='allow', populate_by_name=True)

    ref: str = Field(..., alias='$ref')


_SCHEMA_KEYWORDS = (
    'title',
    'description',
    'type',
    'format',
    'enum',
    'nullable',
    'items',
    'required',
    'additionalProperties',
    'allOf',
    'oneOf',
    'anyOf',
)


class Schema(BaseModel):
    model_config = ConfigDict(extra='allow', populate_by_name=True)

    title: str | None = None
    description: str | None = None
    type: str | list[str] | None = None
    format: str | None = None
    enum: list[Any] | None = None
    nullable: bool | None = None
    items: SchemaOrReference | None = None
    properties: dict[str, SchemaOrReference] | None = None
    required: list[str] | None = None
    additionalProperties: bool | dict[str, Any] | None = None
    allOf: list[SchemaOrReference] | None = None
    oneOf: list[SchemaOrReference] | None = None
    anyOf: list[SchemaOrReference] | None = None

    @field_validator(*_SCHEMA_KEYWORDS, mode='wrap')
    @classmethod
    def _drop_malformed_keyword(
        cls, value: Any, handler: ValidatorFunctionWrapHandler
    ) -> Any:
        # A keyword of the wrong shape is ignored, so the node degrades to any
        try:
            return handler(value)
        except ValidationError:
            return None

    @field_validator('properties', mode='wrap')
    @classmethod
    def _drop_malformed_properties(
        cls, value: Any, handler: ValidatorFunctionWrapHandler
    ) -> Any:
        if not isinstance(value, dict):
            return None
        try:
            return handler(
                {
                    name: prop
                    for name, prop in value.items()
                    if isinstance(name, str) and isinstance(prop, (dict, BaseModel))
                }
            )
        except ValidationError:
            return None


SchemaOrReference = Annotated[
    Union[Annotated[Schema, Tag('object')], Annotated[Reference, Tag('reference')]],
    Discriminator(_reference_tag),
]


class Parameter(BaseModel):
    model_config = ConfigDict(extra='allow', populate_by_name=True)

    name: str
    in_: Literal['query', 'path', 'header', 'cookie'] = Field(..., alias='in')
    description: str | None = None
    required: bool = False
    deprecated: bool = False
    schema_: SchemaOrReference | None = Field(None, alias='schema')


ParameterOrReference = Annotated[
    Union[
        Annotated[Parameter, Tag('object')], Annotated[Reference, Tag('reference')]
    ],
    Discriminator(_reference_tag),
]


class MediaType(BaseModel):
    model_config = ConfigDict(extra='allow', populate_by_name=True)

    schema_: SchemaOrReference | None = Field(None, alias='schema')


class RequestBody(BaseModel):
    model_config = ConfigDict(extra='allow')

    description: str | None = None
    content: dict[str, MediaType] = Field(default_factory=dict)
    required: bool = False


RequestBodyOrReference = Annotated[
    Union[
        Annotated[RequestBody, Tag('object')], Annotated[Reference, Tag('reference')]
    ],
    Discriminator(_reference_tag),
]


class Response(BaseModel):
    model_config = ConfigDict(extra='allow')

    description: str | None = None
    content: dict[str, MediaType] | None = None


ResponseOrReference = Annotated[
    Union[Annotated[Response, Tag('object')], Annotated[Reference, Tag('reference')]],
    Discriminator(_reference_tag),
]


def _stringify_keys(value: Any) -> Any:
    # YAML loads unquoted status codes such as 200 as integers
    if isinstance(value, dict):
        return {str(key): item for key, item in value.items()}
    return value


class Operation(BaseModel):
    model_config = ConfigDict(extra='allow')

    tags: list[str] | None = None
    summary: str | None = None
    description: str | None = None
    operationId: str | None = None
    parameters: list[ParameterOrReference] | None = None
    requestBody: RequestBodyOrReference | None = None
    responses: dict[str, ResponseOrReference] = Field(default_factory=dict)
    deprecated: bool = False

    @field_validator('responses', mode='before')
    @classmethod
    def _status_codes_as_strings(cls, value: Any) -> Any:
        if value is None:
            return {}
        return _stringify_keys(value)


class PathItem(BaseModel):
    """A path entry whose operations keep the order they were declared in."""

    model_config = ConfigDict(extra='allow')

    summary: str | None = None
    description: str | None = None
    parameters: list[ParameterOrReference] | None = None
    operations: dict[str, Operation] = Field(default_factory=dict)

    @model_validator(mode='before')
    @classmethod
    def _collect_operations(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        remaining = dict(data)
        operations = {}
        for key in data:
            if isinstance(key, str) and key.lower() in HTTP_METHODS:
                operations[key.lower()] = remaining.pop(key)
        remaining['operations'] = operations
        return remaining


class Components(BaseModel):
    model_config = ConfigDict(extra='allow')

    schemas: dict[str, SchemaOrReference] | None = None
    parameters: dict[str, ParameterOrReference] | None = None
    requestBodies: dict[str, RequestBodyOrReference] | None = None
    responses: dict[str, ResponseOrReference] | None = None


class OpenAPI(BaseModel):
    """The parsed description document.

    Besides the typed tree, the original mapping is kept so that local
    references can be followed by JSON pointer into any part of it.
    """

    model_config = ConfigDict(extra='allow')

    openapi: str | None = None
    info: dict[str, Any] | None = None
    servers: list[dict[str, Any]] | None = None
    paths: dict[str, PathItem] = Field(default_factory=dict)
    components: Components | None = None

    _raw: dict[str, Any] | None = PrivateAttr(default=None)

    @field_validator('paths', mode='before')
    @classmethod
    def _drop_extensions(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {
                path: item
                for path, item in value.items()
                if isinstance(path, str) and path.startswith('/')
            }
        return value

    @classmethod
    def parse(cls, content: dict[str, Any]) -> OpenAPI:
        """Validate a raw mapping and keep it for reference lookups."""
        document = cls.model_validate(content)
        document._raw = content
        return document

    @property
    def raw(self) -> dict[str, Any]:
        if self._raw is None:
            return self.model_dump(by_alias=True, exclude_none=True)
        return self._raw


Schema.model_rebuild()
Parameter.model_rebuild()
MediaType.model_rebuild()
Components.model_rebuild()
OpenAPI.model_rebuild()
