"""Builders for the TypeScript server action emitted per operation.

Each builder produces one fragment of the generated function: the
parameter signature, the URL template, the query-string handling and the
fetch options. :func:`server_action_fn` assembles them into a
:class:`~actiongen.codegen.types.GeneratedUnit`.
"""

import re
import textwrap

from actiongen.codegen.types import (
    GeneratedUnit,
    Parameter,
    RecordMember,
    RecordType,
    RequestBodyInfo,
    TypeExpression,
)
from actiongen.codegen.utils import to_binding_name, ts_property_name

INDENT = '  '

NO_ARGUMENTS = '_?: void'

_PATH_PLACEHOLDER_RE = re.compile(r'\{([^{}]+)\}')

_QUERY_HANDLING = textwrap.dedent(
    """\
    const queryStr = new URLSearchParams(
      Object.entries(query)
        .filter(([_, v]) => v !== undefined)
        .map(([k, v]) => [k, String(v)]),
    ).toString();
    url += queryStr ? `?${queryStr}` : '';"""
)


def base_url_placeholder(env_name: str) -> str:
    """Interpolation reading the API root from the environment at runtime."""
    return f'${{process.env.{env_name}}}'


def clean_comment(text: str | None) -> list[str]:
    if not text:
        return []
    text = textwrap.dedent(text).strip().replace('*/', '*\\/')
    return [line.rstrip() for line in text.splitlines()]


def build_doc_comment(
    summary: str | None, description: str | None, deprecated: bool = False
) -> list[str]:
    lines = clean_comment(summary) + clean_comment(description)
    if deprecated:
        lines.append('@deprecated')
    return lines


def render_doc_comment(lines: list[str]) -> str | None:
    if not lines:
        return None
    body = '\n'.join(f' * {line}'.rstrip() for line in lines)
    return f'/**\n{body}\n */'


def escape_template_literal(text: str) -> str:
    """Escape text so it is taken literally inside a template literal."""
    return text.replace('\\', '\\\\').replace('`', '\\`').replace('${', '\\${')


def path_bindings(path_params: list[Parameter]) -> list[str]:
    """Assign each path parameter a distinct local binding name.

    A name already taken by an earlier parameter gets an underscore prefix
    until it is unique.
    """
    bindings: list[str] = []
    for param in path_params:
        binding = to_binding_name(param.name)
        while binding in bindings:
            binding = f'_{binding}'
        bindings.append(binding)
    return bindings


def build_signature(
    path_params: list[Parameter],
    query_params: list[Parameter],
    body: RequestBodyInfo | None,
) -> str:
    """Build the parameter list of the generated function.

    Parts appear in a fixed order: a destructured group of path parameters,
    a ``query`` record, then ``body``. With none of them the function takes
    a single optional ``void`` placeholder.
    """
    parts = []

    if path_params:
        bindings = ', '.join(
            _path_binding(param, binding)
            for param, binding in zip(path_params, path_bindings(path_params))
        )
        group = RecordType(
            tuple(RecordMember(param.name, param.type) for param in path_params)
        )
        parts.append(f'{{ {bindings} }}: {group}')

    if query_params:
        query = RecordType(
            tuple(
                RecordMember(param.name, param.type, optional=not param.required)
                for param in query_params
            )
        )
        parts.append(f'query: {query}')

    if body is not None:
        parts.append(f'body: {body.type}')

    return ', '.join(parts) or NO_ARGUMENTS


def _path_binding(param: Parameter, binding: str) -> str:
    if binding == param.name:
        return binding
    return f'{ts_property_name(param.name)}: {binding}'


def build_path_params(path_params: list[Parameter], path: str, base_url: str) -> str:
    """Build the template-literal contents of the request URL.

    ``base_url`` is used as given; the path template is escaped before its
    placeholders are replaced by interpolations.
    """
    bindings = {
        param.name: binding
        for param, binding in zip(path_params, path_bindings(path_params))
    }

    def interpolate(match: re.Match) -> str:
        name = match.group(1)
        if name not in bindings:
            return match.group(0)
        return f'${{{bindings[name]}}}'

    path = _PATH_PLACEHOLDER_RE.sub(interpolate, escape_template_literal(path))
    return f'{base_url}{path}'


def build_query_params(query_params: list[Parameter]) -> str | None:
    if not query_params:
        return None
    return _QUERY_HANDLING


def build_body_params(body: RequestBodyInfo | None, method: str) -> str:
    """Build the fetch options declaration."""
    http_method = method.upper()
    if body is None:
        return f"const options: RequestInit = {{ method: '{http_method}' }};"

    return '\n'.join(
        [
            'const options: RequestInit = {',
            f"{INDENT}method: '{http_method}',",
            f"{INDENT}headers: {{ 'Content-Type': 'application/json' }},",
            f'{INDENT}body: JSON.stringify(body),',
            '};',
        ]
    )


def prepare_call_from_parameters(
    parameters: list[Parameter] | None,
    path: str,
    method: str,
    base_url: str,
    body: RequestBodyInfo | None = None,
) -> tuple[str, str, str | None, str]:
    """Partition parameters and build the call fragments.

    Header and cookie parameters are not part of the generated call.

    Returns:
        A tuple of (signature, url, query_handling, options).
    """
    parameters = parameters or []

    path_params = [p for p in parameters if p.location == 'path']
    query_params = [p for p in parameters if p.location == 'query']

    return (
        build_signature(path_params, query_params, body),
        build_path_params(path_params, path, base_url),
        build_query_params(query_params),
        build_body_params(body, method),
    )


def server_action_fn(
    name: str,
    method: str,
    path: str,
    response_type: TypeExpression,
    base_url: str,
    parameters: list[Parameter] | None = None,
    request_body_info: RequestBodyInfo | None = None,
    docs: list[str] | None = None,
) -> GeneratedUnit:
    signature, url, query_handling, options = prepare_call_from_parameters(
        parameters, path, method, base_url, request_body_info
    )

    unit = GeneratedUnit(
        name=name,
        method=method,
        path=path,
        signature=signature,
        url=url,
        query_handling=query_handling,
        options=options,
        response_type=response_type,
        docs=docs or [],
    )
    unit.source = render_server_action(unit)
    return unit


def render_server_action(unit: GeneratedUnit) -> str:
    """Render the complete module for a compiled operation.

    The generated function never throws: a transport error or a non-ok
    status is logged with ``console.error`` and turned into ``null``.
    """
    request = [f'let url = `{unit.url}`;']
    if unit.query_handling:
        request.append(unit.query_handling)
    request.append(unit.options)
    request.append('const res = await fetch(url, options);')

    error_message = f'API error: {unit.method.upper()} ${{url}} ${{res.status}}'
    body = '\n'.join(
        [
            'try {',
            textwrap.indent('\n'.join(request), INDENT),
            '',
            f'{INDENT}if (!res.ok) {{',
            f'{INDENT * 2}console.error(`{error_message}`);',
            f'{INDENT * 2}return null;',
            f'{INDENT}}}',
            '',
            f'{INDENT}return await res.json();',
            '} catch (error) {',
            f'{INDENT}console.error(error);',
            f'{INDENT}return null;',
            '}',
        ]
    )

    blocks = ["'use server';", '']
    doc_comment = render_doc_comment(unit.docs)
    if doc_comment:
        blocks.append(doc_comment)
    blocks.extend(
        [
            f'export async function {unit.name}({unit.signature}): '
            f'Promise<{unit.return_type}> {{',
            textwrap.indent(body, INDENT),
            '}',
            '',
        ]
    )
    return '\n'.join(blocks)
