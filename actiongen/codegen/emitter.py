"""Code emitter interfaces and implementations for code generation output.

This module provides the CodeEmitter interface and concrete implementations
for emitting generated server actions (to files on disk, or to memory).
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from upath import UPath

from actiongen.exceptions import OutputError

logger = logging.getLogger(__name__)


class CodeEmitter(ABC):
    """Abstract base class for code emitters.

    A CodeEmitter takes finished source text together with the identifier
    it is stored under and puts it somewhere.
    """

    def __init__(self, file_extension: str = '.ts'):
        self.file_extension = file_extension

    def file_name(self, name: str) -> str:
        return f'{name}{self.file_extension}'

    @abstractmethod
    def emit(self, name: str, source: str) -> str:
        """Emit one generated module.

        Args:
            name: The identifier the module is stored under.
            source: The complete module source.

        Returns:
            The location of the emitted module.
        """
        pass


class FileEmitter(CodeEmitter):
    """Writes generated modules to files in an output directory.

    The directory is created on first use. Writing an existing file
    replaces it. Each write stands alone: a failure leaves earlier files in
    place and nothing is rolled back.
    """

    def __init__(self, output_dir: str | Path | UPath, file_extension: str = '.ts'):
        """Initialize the file emitter.

        Args:
            output_dir: Directory where files will be written.
            file_extension: Suffix appended to every identifier.
        """
        super().__init__(file_extension)
        self.output_dir = UPath(output_dir)
        self._written_files: list[str] = []

    def emit(self, name: str, source: str) -> str:
        path = self.output_dir / self.file_name(name)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(source, encoding='utf-8')
        except OSError as e:
            raise OutputError(str(path), cause=e)

        logger.info(f'Wrote {path}')
        self._written_files.append(str(path))
        return str(path)

    def get_written_files(self) -> list[str]:
        """Get the list of files written by this emitter."""
        return self._written_files.copy()


class StringEmitter(CodeEmitter):
    """Keeps generated modules in memory instead of writing them.

    Useful for testing and for callers that post-process the output.
    """

    def __init__(self, file_extension: str = '.ts'):
        super().__init__(file_extension)
        self._modules: dict[str, str] = {}

    def emit(self, name: str, source: str) -> str:
        file_name = self.file_name(name)
        self._modules[file_name] = source
        return file_name

    def get_module(self, file_name: str) -> str | None:
        """Get the source of a previously emitted module by file name."""
        return self._modules.get(file_name)

    def get_all_modules(self) -> dict[str, str]:
        """Get all emitted modules keyed by file name."""
        return self._modules.copy()

    def clear(self) -> None:
        """Clear all stored modules."""
        self._modules.clear()
