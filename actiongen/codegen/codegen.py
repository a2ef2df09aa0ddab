"""Code generation module for actiongen.

This module provides the main Codegen class that orchestrates the generation
of TypeScript server actions from OpenAPI descriptions.
"""

import fnmatch
import logging

from actiongen.codegen.emitter import CodeEmitter, FileEmitter
from actiongen.codegen.endpoints import (
    base_url_placeholder,
    build_doc_comment,
    escape_template_literal,
    server_action_fn,
)
from actiongen.codegen.schema import SchemaLoader, SchemaResolver
from actiongen.codegen.types import (
    ANY,
    GeneratedUnit,
    Parameter,
    RequestBodyInfo,
    TypeExpression,
    TypeGenerator,
)
from actiongen.codegen.utils import derive_identifier
from actiongen.config import DocumentConfig
from actiongen.exceptions import IdentifierCollisionError
from actiongen.openapi.v3 import (
    MediaType,
    OpenAPI,
    Operation,
    Parameter as OpenAPIParameter,
    RequestBody as OpenAPIRequestBody,
    Response as OpenAPIResponse,
)

logger = logging.getLogger(__name__)

# Content types that should be treated as JSON
JSON_CONTENT_TYPES = ('application/json', 'text/json')

SUCCESS_STATUS = '200'


class Codegen:
    """Generates one TypeScript server action per OpenAPI operation.

    The generator walks every path and method in the order the description
    declares them, compiles each operation into a
    :class:`~actiongen.codegen.types.GeneratedUnit` and hands its source to
    an emitter under the derived identifier.

    Attributes:
        config: The DocumentConfig containing source and output settings.
        openapi: The loaded document (populated by _load_schema).
        typegen: The TypeGenerator used for every schema in the document.

    Example:
        >>> from actiongen.config import DocumentConfig
        >>> from actiongen.codegen.codegen import Codegen
        >>>
        >>> config = DocumentConfig(source="./openapi.yaml", output="./actions")
        >>> codegen = Codegen(config)
        >>> codegen.generate()
        # Creates one .ts file per operation in ./actions/
    """

    def __init__(
        self,
        config: DocumentConfig,
        schema_loader: SchemaLoader | None = None,
        emitter: CodeEmitter | None = None,
    ):
        """Initialize the code generator.

        Args:
            config: Configuration specifying source document and output location.
            schema_loader: Optional custom schema loader.
            emitter: Optional custom emitter. Defaults to writing files into
                     the configured output directory.
        """
        self.config = config
        self.openapi: OpenAPI | None = None
        self.resolver: SchemaResolver | None = None
        self.typegen: TypeGenerator | None = None
        self._schema_loader = schema_loader or SchemaLoader()
        self._emitter = emitter or FileEmitter(
            config.output, file_extension=config.file_extension
        )

    @property
    def base_url(self) -> str:
        """The API root the generated URLs start with."""
        if self.config.base_url:
            return escape_template_literal(self.config.base_url.rstrip('/'))
        return base_url_placeholder(self.config.base_url_env)

    def _load_schema(self) -> None:
        """Load and parse the OpenAPI description from the configured source.

        Raises:
            SchemaLoadError: If the description cannot be loaded from the source.
            SchemaValidationError: If the description has an unsupported shape.
        """
        self.use_document(self._schema_loader.load(self.config.source))

    def use_document(self, openapi: OpenAPI) -> None:
        """Generate from an already parsed document."""
        self.openapi = openapi
        self.resolver = SchemaResolver(openapi)
        self.typegen = TypeGenerator(
            openapi,
            synthesize_compositions=self.config.synthesize_compositions,
            resolver=self.resolver,
        )

    def _select_json_media_type(
        self, content: dict[str, MediaType] | None
    ) -> tuple[str | None, MediaType | None]:
        """Pick the JSON media type of a content map, if there is one."""
        if not content:
            return None, None

        for content_type in JSON_CONTENT_TYPES:
            if content_type in content:
                return content_type, content[content_type]

        for content_type, media_type in content.items():
            if content_type.endswith('+json'):
                return content_type, media_type

        return None, None

    def _extract_operation_parameters(
        self, operation: Operation, path_item_parameters: list | None = None
    ) -> list[Parameter]:
        """Extract the parameters of an operation.

        Path-level parameters are inherited unless the operation declares a
        parameter with the same name and location. References to
        #/components/parameters/ are resolved.

        Args:
            operation: The OpenAPI operation to extract parameters from.
            path_item_parameters: Optional path-level parameters to inherit.

        Returns:
            List of Parameter objects in declaration order.
        """
        params: list[Parameter] = []
        param_keys_seen = set()

        for param_or_ref in [
            *(operation.parameters or []),
            *(path_item_parameters or []),
        ]:
            param = self.resolver.resolve_object(param_or_ref, OpenAPIParameter)
            if (param.name, param.in_) in param_keys_seen:
                continue
            param_keys_seen.add((param.name, param.in_))

            if param.in_ in ('header', 'cookie'):
                logger.debug(
                    f"Not wiring {param.in_} parameter '{param.name}' into the signature"
                )

            params.append(
                Parameter(
                    name=param.name,
                    location=param.in_,
                    required=param.required,
                    type=self.typegen.schema_to_type(param.schema_),
                    description=param.description,
                )
            )

        return params

    def _extract_request_body(self, operation: Operation) -> RequestBodyInfo | None:
        """Extract request body information from an operation.

        Returns:
            RequestBodyInfo, or None if the operation declares no body.
        """
        if operation.requestBody is None:
            return None

        body = self.resolver.resolve_object(operation.requestBody, OpenAPIRequestBody)
        content_type, media_type = self._select_json_media_type(body.content)

        return RequestBodyInfo(
            content_type=content_type,
            type=self.typegen.schema_to_type(media_type.schema_)
            if media_type
            else ANY,
            required=body.required,
            description=body.description,
        )

    def _extract_response_type(self, operation: Operation) -> TypeExpression:
        """Synthesize the type of the successful JSON response.

        Returns:
            The type of the "200" response's JSON schema, or ``any``.
        """
        response_or_ref = operation.responses.get(SUCCESS_STATUS)
        if response_or_ref is None:
            return ANY

        response = self.resolver.resolve_object(response_or_ref, OpenAPIResponse)
        _, media_type = self._select_json_media_type(response.content)
        if media_type is None or media_type.schema_ is None:
            return ANY

        return self.typegen.schema_to_type(media_type.schema_)

    def compile_operation(
        self,
        path: str,
        method: str,
        operation: Operation,
        path_item_parameters: list | None = None,
    ) -> GeneratedUnit:
        """Compile one operation into a server action.

        Args:
            path: The API path for the operation.
            method: The HTTP method (get, post, etc.).
            operation: The OpenAPI operation definition.
            path_item_parameters: Optional list of path-level parameters to inherit.

        Returns:
            The compiled unit, including its rendered source.

        Raises:
            SchemaReferenceError: If any reference reached from the operation
                                  is broken.
        """
        if self.openapi is None:
            self._load_schema()

        parameters = self._extract_operation_parameters(
            operation, path_item_parameters
        )
        request_body_info = self._extract_request_body(operation)
        response_type = self._extract_response_type(operation)

        return server_action_fn(
            name=derive_identifier(method, path, operation.operationId),
            method=method,
            path=path,
            response_type=response_type,
            base_url=self.base_url,
            parameters=parameters,
            request_body_info=request_body_info,
            docs=build_doc_comment(
                operation.summary, operation.description, operation.deprecated
            ),
        )

    def generate_units(self, openapi: OpenAPI | None = None) -> list[GeneratedUnit]:
        """Compile every operation of a document.

        Operations are visited in document order: paths as declared, and the
        methods of each path as declared.

        Args:
            openapi: Document to compile. Defaults to the one loaded from the
                     configured source.

        Returns:
            List of compiled units, one per operation.

        Raises:
            IdentifierCollisionError: If two operations derive the same
                                      identifier and fail_on_collision is set.
        """
        if openapi is not None:
            self.use_document(openapi)
        elif self.openapi is None:
            self._load_schema()

        units: list[GeneratedUnit] = []
        for path, path_item in self.openapi.paths.items():
            if not self._should_include_path(path):
                continue

            for method, operation in path_item.operations.items():
                units.append(
                    self.compile_operation(
                        path, method, operation, path_item.parameters
                    )
                )

        self._check_collisions(units)
        return units

    def _check_collisions(self, units: list[GeneratedUnit]) -> None:
        """Report operations that would be written under the same identifier."""
        by_name: dict[str, list[str]] = {}
        for unit in units:
            by_name.setdefault(unit.name, []).append(
                f'{unit.method.upper()} {unit.path}'
            )

        for name, operations in by_name.items():
            if len(operations) < 2:
                continue
            if self.config.fail_on_collision:
                raise IdentifierCollisionError(name, operations)
            logger.warning(
                f"Identifier '{name}' is derived by {', '.join(operations)}; "
                f'only the last one is kept'
            )

    def _should_include_path(self, path: str) -> bool:
        """Check if a path should be included based on include_paths and exclude_paths.

        Args:
            path: The API path to check.

        Returns:
            True if the path should be included, False otherwise.
        """
        if self.config.include_paths:
            included = any(
                fnmatch.fnmatch(path, pattern) for pattern in self.config.include_paths
            )
            if not included:
                return False

        if self.config.exclude_paths:
            excluded = any(
                fnmatch.fnmatch(path, pattern) for pattern in self.config.exclude_paths
            )
            if excluded:
                return False

        return True

    def generate(self) -> list[str]:
        """Load the description and write one server action per operation.

        Returns:
            The locations of the emitted modules, one per operation, in
            document order. A location repeats when identifiers collide.

        Raises:
            ActionGenError: On load, reference, collision or output failures.
        """
        units = self.generate_units()
        if not units:
            logger.warning(f'{self.config.source} declares no operations')

        return [self._emitter.emit(unit.name, unit.source) for unit in units]
