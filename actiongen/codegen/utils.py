import json
import re

__all__ = (
    'camel_fold',
    'derive_identifier',
    'is_ts_binding',
    'is_ts_identifier',
    'to_binding_name',
    'ts_property_name',
)

_NON_WORD_RE = re.compile(r'\W+', re.ASCII)
_UNDERSCORE_LETTER_RE = re.compile(r'_([a-z])')
_TS_IDENTIFIER_RE = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')

# Words that cannot name a binding in a strict-mode module
RESERVED_WORDS = frozenset(
    {
        'arguments', 'await', 'break', 'case', 'catch', 'class', 'const',
        'continue', 'debugger', 'default', 'delete', 'do', 'else', 'enum',
        'eval', 'export', 'extends', 'false', 'finally', 'for', 'function',
        'if', 'implements', 'import', 'in', 'instanceof', 'interface', 'let',
        'new', 'null', 'package', 'private', 'protected', 'public',
        'return', 'static', 'super', 'switch', 'this', 'throw', 'true',
        'try', 'typeof', 'var', 'void', 'while', 'with', 'yield',
    }
)


def camel_fold(name: str) -> str:
    """Fold ``_x`` pairs into ``X``.

    Only an underscore directly followed by a lowercase ASCII letter is
    folded; any other underscore is left alone.

    >>> camel_fold('get_items_id')
    'getItemsId'
    >>> camel_fold('list__Pets_')
    'list__Pets_'
    """
    return _UNDERSCORE_LETTER_RE.sub(lambda m: m.group(1).upper(), name)


def derive_identifier(method: str, path: str, operation_id: str | None = None) -> str:
    """Derive the function name and storage key for an operation.

    The declared operationId wins; otherwise the method is joined with the
    path, each run of non-word characters in the path becoming a single
    underscore. The result is then camel-folded.

    >>> derive_identifier('get', '/items/{id}')
    'getItemsId_'
    >>> derive_identifier('post', '/pets', 'create_pet')
    'createPet'
    """
    raw_name = operation_id or f'{method}{_NON_WORD_RE.sub("_", path)}'
    return camel_fold(raw_name)


def is_ts_identifier(name: str) -> bool:
    """Check whether a name can be used bare as a TypeScript binding."""
    return bool(_TS_IDENTIFIER_RE.match(name))


def is_ts_binding(name: str) -> bool:
    """Check whether a name can be declared as a local binding."""
    return is_ts_identifier(name) and name not in RESERVED_WORDS


def to_binding_name(name: str) -> str:
    """Turn a parameter name into a TypeScript binding name.

    Names that can already be bound are returned unchanged. Reserved words
    get an underscore prefix.

    >>> to_binding_name('pet-id')
    'petId'
    >>> to_binding_name('package')
    '_package'
    """
    if is_ts_binding(name):
        return name
    binding = name
    if not is_ts_identifier(binding):
        binding = camel_fold(_NON_WORD_RE.sub('_', name))
    if not binding or binding[0].isdigit() or binding in RESERVED_WORDS:
        binding = f'_{binding}'
    return binding


def ts_property_name(name: str) -> str:
    """Quote a property name unless it is a plain identifier."""
    return name if is_ts_identifier(name) else json.dumps(name)
