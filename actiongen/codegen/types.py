"""Type definitions and generation for actiongen code generation.

This module provides:
- TypeExpression dataclasses representing synthesized TypeScript types
- Parameter and RequestBodyInfo dataclasses describing compiled operations
- TypeGenerator for turning OpenAPI schema nodes into type expressions
"""

import dataclasses
import logging

from actiongen.codegen.schema import SchemaResolver
from actiongen.codegen.utils import ts_property_name
from actiongen.openapi.v3 import OpenAPI, Reference, Schema

logger = logging.getLogger(__name__)

__all__ = [
    'ANY',
    'ArrayType',
    'BOOLEAN',
    'CIRCULAR',
    'GeneratedUnit',
    'IntersectionType',
    'MapType',
    'NULL',
    'NUMBER',
    'Parameter',
    'PrimitiveType',
    'RecordMember',
    'RecordType',
    'RequestBodyInfo',
    'STRING',
    'TypeExpression',
    'TypeGenerator',
    'UnionType',
]


class TypeExpression:
    """Base class for synthesized TypeScript type expressions."""

    def render(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()


@dataclasses.dataclass(frozen=True)
class PrimitiveType(TypeExpression):
    name: str

    def render(self) -> str:
        return self.name


@dataclasses.dataclass(frozen=True)
class ArrayType(TypeExpression):
    element: TypeExpression

    def render(self) -> str:
        return f'Array<{self.element.render()}>'


@dataclasses.dataclass(frozen=True)
class MapType(TypeExpression):
    """An open mapping keyed by strings, used for objects without properties."""

    value: TypeExpression

    def render(self) -> str:
        return f'Record<string, {self.value.render()}>'


@dataclasses.dataclass(frozen=True)
class RecordMember:
    name: str
    type: TypeExpression
    optional: bool = False

    def render(self) -> str:
        marker = '?' if self.optional else ''
        return f'{ts_property_name(self.name)}{marker}: {self.type.render()}'


@dataclasses.dataclass(frozen=True)
class RecordType(TypeExpression):
    """A structural object type, members kept in declaration order."""

    members: tuple[RecordMember, ...] = ()

    def render(self) -> str:
        return '{' + '; '.join(member.render() for member in self.members) + '}'


@dataclasses.dataclass(frozen=True)
class UnionType(TypeExpression):
    members: tuple[TypeExpression, ...]

    def render(self) -> str:
        return ' | '.join(_grouped(member) for member in self.members)


@dataclasses.dataclass(frozen=True)
class IntersectionType(TypeExpression):
    members: tuple[TypeExpression, ...]

    def render(self) -> str:
        return ' & '.join(_grouped(member) for member in self.members)


def _grouped(member: TypeExpression) -> str:
    if isinstance(member, (UnionType, IntersectionType)):
        return f'({member.render()})'
    return member.render()


STRING = PrimitiveType('string')
NUMBER = PrimitiveType('number')
BOOLEAN = PrimitiveType('boolean')
NULL = PrimitiveType('null')
ANY = PrimitiveType('any')
# Stands in for a schema that refers back to one already being synthesized
CIRCULAR = PrimitiveType('unknown')

_PRIMITIVE_TYPE_MAP = {
    'string': STRING,
    'integer': NUMBER,
    'number': NUMBER,
    'boolean': BOOLEAN,
}


@dataclasses.dataclass
class Parameter:
    name: str
    location: str
    required: bool
    type: TypeExpression = ANY
    description: str | None = None


@dataclasses.dataclass
class RequestBodyInfo:
    """Information about a request body.

    Attributes:
        content_type: The media type the schema was taken from, if any.
        type: The synthesized body type (``any`` without a JSON schema).
        required: Whether the request body is required.
        description: Optional description of the request body.
    """

    content_type: str | None
    type: TypeExpression = ANY
    required: bool = False
    description: str | None = None


@dataclasses.dataclass
class TypeGenerator:
    """Synthesizes TypeScript type expressions from OpenAPI schema nodes.

    References are followed transparently. The set of references currently
    being expanded is carried down the recursion, so a schema that refers
    back to itself ends in :data:`CIRCULAR` instead of recursing forever.

    Composition keywords (``oneOf``/``anyOf``/``allOf``) fall through to
    ``any`` unless ``synthesize_compositions`` is set, in which case they
    become unions and intersections.
    """

    openapi: OpenAPI
    synthesize_compositions: bool = False
    resolver: SchemaResolver | None = None

    def __post_init__(self):
        if self.resolver is None:
            self.resolver = SchemaResolver(self.openapi)

    def schema_to_type(self, schema: Schema | Reference | None) -> TypeExpression:
        """Synthesize the type expression for a schema node.

        Args:
            schema: The schema node, a reference to one, or None.

        Returns:
            The synthesized type expression.

        Raises:
            SchemaReferenceError: If a reference reached from ``schema`` is broken.
        """
        return self._to_type(schema, frozenset())

    def _to_type(
        self, schema: Schema | Reference | None, resolving: frozenset[str]
    ) -> TypeExpression:
        if schema is None:
            return ANY

        if isinstance(schema, Reference):
            if schema.ref in resolving:
                logger.debug(
                    f'Circular reference {schema.ref}, substituting {CIRCULAR}'
                )
                return CIRCULAR
            resolved = self.resolver.resolve_reference(schema)
            return self._to_type(resolved, resolving | {schema.ref})

        if self.synthesize_compositions:
            composed = self._composition_type(schema, resolving)
            if composed is not None:
                return composed

        if not isinstance(schema.type, str):
            return ANY

        if schema.type in _PRIMITIVE_TYPE_MAP:
            return _PRIMITIVE_TYPE_MAP[schema.type]

        if schema.type == 'array':
            return ArrayType(self._to_type(schema.items, resolving))

        if schema.type == 'object':
            return self._object_type(schema, resolving)

        return ANY

    def _object_type(self, schema: Schema, resolving: frozenset[str]) -> TypeExpression:
        if schema.properties is None:
            return MapType(ANY)

        required = set(schema.required or [])
        return RecordType(
            tuple(
                RecordMember(
                    name=name,
                    type=self._to_type(prop, resolving),
                    optional=name not in required,
                )
                for name, prop in schema.properties.items()
            )
        )

    def _composition_type(
        self, schema: Schema, resolving: frozenset[str]
    ) -> TypeExpression | None:
        for members, combine in (
            (schema.oneOf, UnionType),
            (schema.anyOf, UnionType),
            (schema.allOf, IntersectionType),
        ):
            if not members:
                continue
            types = tuple(self._to_type(member, resolving) for member in members)
            if len(types) == 1:
                return types[0]
            return combine(types)
        return None


@dataclasses.dataclass
class GeneratedUnit:
    """One compiled operation, ready to be written out.

    Attributes:
        name: Function name, also the storage key of the artifact.
        method: Lower-case HTTP method.
        path: Path template as declared.
        signature: The parameter list of the generated function.
        url: Contents of the template literal the URL is built from.
        query_handling: Statements appending the query string, if any.
        options: The statement declaring the fetch options.
        response_type: Type of the successful JSON payload.
        docs: Lines of the leading doc comment.
        source: The complete TypeScript module.
    """

    name: str
    method: str
    path: str
    signature: str
    url: str
    query_handling: str | None
    options: str
    response_type: TypeExpression
    docs: list[str] = dataclasses.field(default_factory=list)
    source: str = ''

    @property
    def return_type(self) -> TypeExpression:
        """The payload type or ``null`` for a failed call."""
        if isinstance(self.response_type, UnionType):
            return UnionType((*self.response_type.members, NULL))
        return UnionType((self.response_type, NULL))
