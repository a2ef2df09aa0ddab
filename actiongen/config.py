import json
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from actiongen.exceptions import ConfigurationError

DEFAULT_FILENAMES = ['actiongen.yaml', 'actiongen.yml']


class DocumentConfig(BaseModel):
    """Represents a single document to be processed."""

    source: str = Field(..., description='Path or URL to the OpenAPI document.')

    output: str = Field(
        ..., description='Output directory for the generated server actions.'
    )

    base_url: str | None = Field(
        None,
        description='Literal API root prepended to every path. '
        'When unset, the generated code reads it from base_url_env at runtime.',
    )

    base_url_env: str = Field(
        'API_URL',
        description='Environment variable the generated code reads the API root from.',
    )

    file_extension: str = Field(
        '.ts', description='Suffix of every generated file.'
    )

    synthesize_compositions: bool = Field(
        False,
        description='Turn oneOf/anyOf into unions and allOf into intersections '
        'instead of falling back to any.',
    )

    fail_on_collision: bool = Field(
        False,
        description='Fail when two operations derive the same identifier '
        'instead of letting the later one overwrite the earlier one.',
    )

    include_paths: list[str] | None = Field(
        None, description='Only generate paths matching one of these patterns.'
    )

    exclude_paths: list[str] | None = Field(
        None, description='Skip paths matching any of these patterns.'
    )


class CodegenConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='ACTIONGEN_')

    documents: list[DocumentConfig] = Field(
        ..., description='List of OpenAPI documents to process.'
    )


def load_yaml(path: str | Path) -> dict:
    import yaml

    return yaml.safe_load(Path(path).read_text())


def load_json(path: str | Path) -> dict:
    return json.loads(Path(path).read_text())


def _validate(data: dict, config_path: str) -> CodegenConfig:
    try:
        return CodegenConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f'Invalid configuration: {e}', config_path=config_path)


def load_config_file(path: str | Path) -> CodegenConfig:
    """Load configuration from a YAML or JSON file."""
    path = Path(path)
    if not path.exists():
        raise ConfigurationError('Configuration file not found', config_path=str(path))

    if path.suffix.lower() == '.json':
        data = load_json(path)
    else:
        data = load_yaml(path)

    if not isinstance(data, dict):
        raise ConfigurationError(
            'Configuration must be a mapping', config_path=str(path)
        )
    return _validate(data, str(path))


def get_config(path: str | None = None) -> CodegenConfig:
    """Load configuration from a file or from the working directory.

    Lookup order: the explicit path, then actiongen.yaml/actiongen.yml in the
    working directory, then [tool.actiongen] in pyproject.toml.
    """
    if path:
        return load_config_file(path)

    cwd = os.getcwd()

    for filename in DEFAULT_FILENAMES:
        path = Path(cwd) / filename
        if path.exists():
            return load_config_file(path)

    path = Path(os.getcwd()) / 'pyproject.toml'

    if path.exists():
        import tomllib

        pyproject = tomllib.loads(path.read_text())
        tools = pyproject.get('tool', {})

        if 'actiongen' in tools:
            return _validate(tools['actiongen'], str(path))

    raise ConfigurationError(
        'No configuration found. Create actiongen.yaml, add [tool.actiongen] '
        'to pyproject.toml, or pass --source and --output'
    )
