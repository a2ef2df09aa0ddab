"""Test configuration for actiongen package."""

import json
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from actiongen.config import (
    CodegenConfig,
    DocumentConfig,
    get_config,
    load_config_file,
)
from actiongen.exceptions import ConfigurationError


class TestDocumentConfig:
    """Test DocumentConfig model."""

    def test_valid_document_config(self):
        """Test creating a valid DocumentConfig with defaults."""
        config = DocumentConfig(
            source='https://api.example.com/openapi.json', output='./actions'
        )
        assert config.source == 'https://api.example.com/openapi.json'
        assert config.output == './actions'
        assert config.base_url is None
        assert config.base_url_env == 'API_URL'
        assert config.file_extension == '.ts'
        assert config.synthesize_compositions is False
        assert config.fail_on_collision is False
        assert config.include_paths is None
        assert config.exclude_paths is None

    def test_document_config_with_optional_fields(self):
        config = DocumentConfig(
            source='./openapi.yaml',
            output='./output',
            base_url_env='BACKEND_URL',
            synthesize_compositions=True,
            exclude_paths=['/internal/*'],
        )
        assert config.base_url_env == 'BACKEND_URL'
        assert config.synthesize_compositions is True
        assert config.exclude_paths == ['/internal/*']

    def test_document_config_validation(self):
        """Test DocumentConfig validation."""
        with pytest.raises(ValidationError):
            DocumentConfig()  # missing required fields


class TestCodegenConfig:
    """Test CodegenConfig model."""

    def test_multiple_documents(self):
        config = CodegenConfig(
            documents=[
                DocumentConfig(source='api1.json', output='./gen1'),
                DocumentConfig(source='api2.json', output='./gen2'),
            ]
        )

        assert [doc.output for doc in config.documents] == ['./gen1', './gen2']

    def test_codegen_config_validation(self):
        with pytest.raises(ValidationError):
            CodegenConfig()  # missing required documents field


class TestLoadConfigFile:
    """Test load_config_file function."""

    def test_yaml_file(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text(
            'documents:\n'
            '  - source: "./openapi.yaml"\n'
            '    output: "./app/actions"\n'
            '    fail_on_collision: true\n'
        )

        config = load_config_file(path)

        assert config.documents[0].output == './app/actions'
        assert config.documents[0].fail_on_collision is True

    def test_json_file(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text(
            json.dumps({'documents': [{'source': 'api.json', 'output': './out'}]})
        )

        config = load_config_file(path)

        assert config.documents[0].source == 'api.json'

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_file(tmp_path / 'missing.yaml')

        assert exc_info.value.config_path == str(tmp_path / 'missing.yaml')

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text('')

        with pytest.raises(ConfigurationError, match='must be a mapping'):
            load_config_file(path)

    def test_invalid_content(self, tmp_path):
        path = tmp_path / 'invalid.yaml'
        path.write_text('documents:\n  - source: api.json\n')

        with pytest.raises(ConfigurationError, match='Invalid configuration'):
            load_config_file(path)


class TestGetConfig:
    """Test get_config function."""

    def test_explicit_path(self, tmp_path):
        path = tmp_path / 'custom.yml'
        path.write_text('documents:\n  - {source: a.json, output: ./a}\n')

        config = get_config(str(path))

        assert config.documents[0].source == 'a.json'

    def test_default_yaml(self, tmp_path):
        """Test loading config from default actiongen.yaml file."""
        (tmp_path / 'actiongen.yaml').write_text(
            'documents:\n  - {source: api.json, output: ./out}\n'
        )

        with patch('os.getcwd', return_value=str(tmp_path)):
            config = get_config()

        assert config.documents[0].output == './out'

    def test_pyproject_toml(self, tmp_path):
        """Test loading config from the [tool.actiongen] table."""
        (tmp_path / 'pyproject.toml').write_text(
            '[project]\n'
            'name = "web"\n'
            '\n'
            '[[tool.actiongen.documents]]\n'
            'source = "openapi.json"\n'
            'output = "./app/actions"\n'
        )

        with patch('os.getcwd', return_value=str(tmp_path)):
            config = get_config()

        assert config.documents[0].source == 'openapi.json'

    def test_pyproject_without_table(self, tmp_path):
        (tmp_path / 'pyproject.toml').write_text('[project]\nname = "web"\n')

        with patch('os.getcwd', return_value=str(tmp_path)):
            with pytest.raises(ConfigurationError, match='No configuration found'):
                get_config()

    def test_no_config(self, tmp_path):
        with patch('os.getcwd', return_value=str(tmp_path)):
            with pytest.raises(ConfigurationError, match='No configuration found'):
                get_config()
