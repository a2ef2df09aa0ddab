"""Schema loading and resolution utilities for OpenAPI documents.

This module provides utilities for:
- Loading OpenAPI descriptions from URLs or local files (YAML/JSON)
- Resolving local $ref references by JSON pointer within a loaded document
"""

import json
import logging
from pathlib import Path
from typing import Any, TypeVar
from urllib.parse import urlparse

import httpx
import yaml
from pydantic import BaseModel, TypeAdapter, ValidationError

from actiongen.exceptions import (
    SchemaLoadError,
    SchemaReferenceError,
    SchemaValidationError,
)
from actiongen.openapi.v3 import OpenAPI, Reference, Schema, SchemaOrReference

logger = logging.getLogger(__name__)

__all__ = [
    'SchemaLoader',
    'SchemaResolver',
]

T = TypeVar('T', bound=BaseModel)

_SCHEMA_ADAPTER: TypeAdapter[Schema | Reference] = TypeAdapter(SchemaOrReference)


# =============================================================================
# Schema Loader
# =============================================================================


class SchemaLoader:
    """Loads OpenAPI descriptions from URLs or file paths.

    Supports JSON and YAML encodings. The parsed mapping is validated into
    an :class:`~actiongen.openapi.v3.OpenAPI` document; shapes the model
    cannot represent are rejected here rather than during generation.

    Example:
        >>> loader = SchemaLoader()
        >>> document = loader.load('https://api.example.com/openapi.json')
        >>> # or
        >>> document = loader.load('./openapi.yaml')
    """

    def __init__(
        self,
        http_client: httpx.Client | None = None,
        base_path: str | Path | None = None,
    ):
        """Initialize the schema loader.

        Args:
            http_client: Optional HTTP client to use for URL requests.
                        If not provided, a default client will be created.
            base_path: Base path for resolving relative file paths.
                      Defaults to current working directory.
        """
        self._http_client = http_client
        self._base_path = Path(base_path) if base_path else Path.cwd()

    def load(self, source: str) -> OpenAPI:
        """Load and validate an OpenAPI description from a URL or file path.

        Args:
            source: URL or file path to the description.

        Returns:
            The parsed OpenAPI document.

        Raises:
            SchemaLoadError: If the description cannot be read or decoded.
            SchemaValidationError: If the content is not an OpenAPI 3.x
                description the document model can represent.
        """
        try:
            if self._is_url(source):
                content = self._load_from_url(source)
            else:
                content = self._load_from_file(source)

            return self._validate(content, source)

        except SchemaLoadError:
            raise
        except SchemaValidationError:
            raise
        except Exception as e:
            raise SchemaLoadError(source, cause=e)

    def _is_url(self, text: str) -> bool:
        """Check if a string is a URL."""
        try:
            result = urlparse(text)
            return result.scheme in ('http', 'https')
        except ValueError:
            return False

    def _load_from_url(self, url: str) -> Any:
        """Load description content from a URL."""
        try:
            if self._http_client:
                response = self._http_client.get(url)
            else:
                response = httpx.get(url, follow_redirects=True, timeout=30.0)

            response.raise_for_status()
            content_type = response.headers.get('content-type', '')
            content = response.text

            if 'yaml' in content_type or url.endswith(('.yaml', '.yml')):
                return yaml.safe_load(content)
            else:
                return json.loads(content)

        except httpx.HTTPError as e:
            raise SchemaLoadError(url, cause=e)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(url, cause=e)

    def _load_from_file(self, file_path: str) -> Any:
        """Load description content from a file."""
        path = Path(file_path)
        if not path.is_absolute():
            path = self._base_path / path

        if not path.exists():
            raise SchemaLoadError(
                str(file_path), cause=FileNotFoundError(f'File not found: {path}')
            )

        try:
            content = path.read_text(encoding='utf-8')
            if path.suffix.lower() in ('.yaml', '.yml'):
                return yaml.safe_load(content)
            else:
                return json.loads(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(str(file_path), cause=e)
        except OSError as e:
            raise SchemaLoadError(str(file_path), cause=e)

    def _validate(self, content: Any, source: str) -> OpenAPI:
        """Validate decoded content into an OpenAPI document."""
        if not isinstance(content, dict):
            raise SchemaValidationError(
                source, errors=['Top level of the description must be a mapping']
            )

        if 'swagger' in content:
            raise SchemaValidationError(
                source,
                errors=[
                    f'Swagger {content["swagger"]} documents are not supported, '
                    'convert the description to OpenAPI 3.x'
                ],
            )

        try:
            return OpenAPI.parse(content)
        except ValidationError as e:
            raise SchemaValidationError(
                source,
                errors=[
                    f'{".".join(str(loc) for loc in error["loc"])}: {error["msg"]}'
                    for error in e.errors()
                ],
            )


# =============================================================================
# Schema Resolver
# =============================================================================


class SchemaResolver:
    """Resolves local $ref references in an OpenAPI document.

    A reference such as ``#/components/schemas/Pet`` is followed by walking
    the document from its root through each pointer segment. The resolver
    follows exactly one hop: if the node found is itself a reference, it is
    returned as-is and following it is the caller's business.

    Example:
        >>> resolver = SchemaResolver(openapi_doc)
        >>> schema = resolver.resolve_reference('#/components/schemas/Pet')
    """

    def __init__(self, openapi: OpenAPI):
        """Initialize the schema resolver.

        Args:
            openapi: The OpenAPI document to resolve references from.
        """
        self.openapi = openapi
        self._cache: dict[str, Schema | Reference] = {}

    def resolve_reference(self, reference: Reference | str) -> Schema | Reference:
        """Resolve a $ref reference to the schema node it points to.

        Args:
            reference: A Reference object or the raw $ref string.

        Returns:
            The schema node found at the reference target.

        Raises:
            SchemaReferenceError: If the reference cannot be resolved or does
                                  not point to a schema object.
        """
        ref = reference.ref if isinstance(reference, Reference) else reference

        if ref in self._cache:
            return self._cache[ref]

        node = self.resolve_pointer(ref)
        if not isinstance(node, dict):
            raise SchemaReferenceError(ref, 'Target is not a schema object')

        try:
            schema = _SCHEMA_ADAPTER.validate_python(node)
        except ValidationError as e:
            raise SchemaReferenceError(ref, f'Target is not a valid schema: {e}')

        self._cache[ref] = schema
        return schema

    def resolve_object(self, obj: T | Reference, model: type[T]) -> T:
        """Resolve a parameter, request body or response that may be a $ref.

        Chained references are followed until a concrete object is found.

        Args:
            obj: The inline object or a Reference to one.
            model: The model the target must validate as.

        Returns:
            The resolved object.

        Raises:
            SchemaReferenceError: If a reference is broken, loops back on
                                  itself, or its target is not a ``model``.
        """
        seen: list[str] = []
        while isinstance(obj, Reference):
            ref = obj.ref
            if ref in seen:
                raise SchemaReferenceError(
                    ref, f'Circular reference chain: {" -> ".join([*seen, ref])}'
                )
            seen.append(ref)

            node = self.resolve_pointer(ref)
            if not isinstance(node, dict):
                raise SchemaReferenceError(
                    ref, f'Target is not a {model.__name__} object'
                )
            if '$ref' in node:
                obj = Reference.model_validate(node)
                continue
            try:
                obj = model.model_validate(node)
            except ValidationError as e:
                raise SchemaReferenceError(
                    ref, f'Target is not a valid {model.__name__}: {e}'
                )
        return obj

    def resolve_pointer(self, ref: str) -> Any:
        """Walk the raw document along a local JSON pointer reference.

        Args:
            ref: The local reference (e.g., '#/components/schemas/Pet').

        Returns:
            Whatever raw value is found at the end of the pointer.

        Raises:
            SchemaReferenceError: If the reference is not local or a segment
                                  along the way does not exist.
        """
        if ref.startswith('http://') or ref.startswith('https://'):
            raise SchemaReferenceError(
                ref,
                'External URL references are not supported. '
                'Consider inlining the referenced schema.',
            )

        if not ref.startswith('#/'):
            raise SchemaReferenceError(
                ref,
                'Only local references starting with #/ are supported. '
                'Consider using a tool to bundle your OpenAPI description.',
            )

        current: Any = self.openapi.raw
        walked = '#'
        for part in ref[2:].split('/'):
            part = part.replace('~1', '/').replace('~0', '~')
            walked = f'{walked}/{part}'
            if isinstance(current, dict) and part in current:
                current = current[part]
            elif isinstance(current, dict) and part.isdigit() and int(part) in current:
                # YAML keeps unquoted status codes as integer keys
                current = current[int(part)]
            elif isinstance(current, list) and part.isdigit() and int(part) < len(
                current
            ):
                current = current[int(part)]
            else:
                raise SchemaReferenceError(ref, f"'{walked}' does not exist")

        return current

    def clear_cache(self) -> None:
        """Clear the reference resolution cache."""
        self._cache.clear()
