"""Destinations for generated artifacts."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TextIO

from ..shared.errors import OutputError


def create_module_path(module_path: Path) -> bool:
    """Create the output directory.

    Returns:
        True if the directory already existed, False if it was created.

    Raises:
        OutputError: For any filesystem failure other than the directory
            already existing.
    """
    try:
        module_path.mkdir(parents=True)
    except FileExistsError as e:
        if module_path.is_dir():
            return True
        raise OutputError(f"Cannot create output directory: {e}", str(module_path)) from e
    except OSError as e:
        raise OutputError(f"Cannot create output directory: {e}", str(module_path)) from e
    return False


class OutputSink(ABC):
    """Receives each generated artifact by file name."""

    def prepare(self) -> None:
        """Called once before the first artifact is written."""

    @abstractmethod
    def write(self, artifact_name: str, content: str) -> None:
        ...

    @property
    def description(self) -> str:
        return self.__class__.__name__


class FileSystemSink(OutputSink):
    """Writes artifacts as files in an output directory, overwriting them."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir

    def prepare(self) -> None:
        create_module_path(self.output_dir)

    def write(self, artifact_name: str, content: str) -> None:
        with (self.output_dir / artifact_name).open("w", encoding="utf-8") as fh:
            fh.write(content)

    @property
    def description(self) -> str:
        return str(self.output_dir)


class ConsoleSink(OutputSink):
    """Prints artifacts to a text stream, each under a file-name header."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def write(self, artifact_name: str, content: str) -> None:
        self.stream.write(f"# ==> {artifact_name} <==\n")
        self.stream.write(content)
        if not content.endswith("\n"):
            self.stream.write("\n")
        self.stream.flush()

    @property
    def description(self) -> str:
        return "standard output"
