"""Test suite for actiongen exceptions."""

import pytest

from actiongen.exceptions import (
    ActionGenError,
    CodeGenerationError,
    ConfigurationError,
    IdentifierCollisionError,
    OutputError,
    SchemaError,
    SchemaLoadError,
    SchemaReferenceError,
    SchemaValidationError,
)


class TestActionGenError:
    """Tests for the base ActionGenError exception."""

    def test_basic_message(self):
        error = ActionGenError('Something went wrong')
        assert error.message == 'Something went wrong'
        assert str(error) == 'Something went wrong'

    @pytest.mark.parametrize(
        'error',
        [
            SchemaLoadError('api.json'),
            SchemaValidationError('api.json'),
            SchemaReferenceError('#/x'),
            CodeGenerationError('failed'),
            IdentifierCollisionError('f', ['GET /a', 'GET /b']),
            ConfigurationError('bad'),
            OutputError('./out'),
        ],
    )
    def test_inheritance(self, error):
        """Test that every error can be caught as ActionGenError."""
        assert isinstance(error, ActionGenError)

    def test_schema_errors(self):
        assert isinstance(SchemaLoadError('a'), SchemaError)
        assert isinstance(SchemaValidationError('a'), SchemaError)
        assert isinstance(SchemaReferenceError('a'), SchemaError)


class TestSchemaErrors:
    def test_load_error_with_cause(self):
        cause = FileNotFoundError('no such file')
        error = SchemaLoadError('api.json', cause=cause)

        assert error.source == 'api.json'
        assert error.cause is cause
        assert str(error) == "Failed to load schema from 'api.json': no such file"

    def test_validation_error_lists_errors(self):
        error = SchemaValidationError('api.json', errors=['paths: bad', 'info: bad'])

        assert error.errors == ['paths: bad', 'info: bad']
        assert str(error) == (
            "Schema validation failed for 'api.json': paths: bad; info: bad"
        )

    def test_reference_error(self):
        error = SchemaReferenceError('#/components/schemas/Pet', 'not found')

        assert error.reference == '#/components/schemas/Pet'
        assert error.reason == 'not found'
        assert str(error) == (
            "Failed to resolve reference '#/components/schemas/Pet': not found"
        )


class TestCodeGenerationErrors:
    def test_context_and_cause(self):
        error = CodeGenerationError(
            'Cannot compile', context='GET /pets', cause=ValueError('x')
        )

        assert str(error) == 'Cannot compile (while generating GET /pets): x'

    def test_identifier_collision(self):
        error = IdentifierCollisionError('fetchThing', ['GET /a', 'GET /b'])

        assert isinstance(error, CodeGenerationError)
        assert error.identifier == 'fetchThing'
        assert str(error) == (
            "Identifier 'fetchThing' is derived by more than one operation: "
            'GET /a, GET /b'
        )


class TestConfigurationError:
    def test_with_path_and_field(self):
        error = ConfigurationError(
            'Invalid value', config_path='actiongen.yaml', field='output'
        )

        assert str(error) == "Invalid value in 'actiongen.yaml' (field: output)"


class TestOutputError:
    def test_with_cause(self):
        error = OutputError('./out/a.ts', cause=PermissionError('denied'))

        assert error.output_path == './out/a.ts'
        assert 'denied' in str(error)
