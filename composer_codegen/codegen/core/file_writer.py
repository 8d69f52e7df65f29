"""
File sink for generated sources.

Maps a logical, '/'-separated path to a file under an output directory and
flushes a Writer's buffer to it when the file is closed. Only one file can be
open at a time.
"""

from pathlib import Path
from typing import List, Optional, Union

from ...logging_config import get_logger
from .writer import DEFAULT_INDENT, Writer

logger = get_logger(__name__)


class FileWriterError(Exception):
    """Raised when the open/write/close discipline is violated."""

    pass


class FileWriter:
    """Writes one generated file at a time below an output directory."""

    def __init__(self, output_dir: Union[str, Path], indent: str = DEFAULT_INDENT):
        self.output_dir = Path(output_dir)
        self.indent = indent
        self.relative_path: Optional[str] = None
        self.writer: Optional[Writer] = None
        self.files_written: List[Path] = []

    @property
    def is_open(self) -> bool:
        return self.writer is not None

    def open_file(self, relative_path: str) -> Path:
        """
        Start a new file.

        Args:
            relative_path: Path below the output directory, segments separated by '/'

        Returns:
            The physical path the file will be written to on close

        Raises:
            FileWriterError: If another file is still open
        """
        if self.is_open:
            raise FileWriterError(
                f"Cannot open {relative_path}: {self.relative_path} is still open"
            )

        target = self.resolve(relative_path)
        target.parent.mkdir(parents=True, exist_ok=True)

        self.relative_path = relative_path
        self.writer = Writer(self.indent)
        logger.debug("Opened %s", target)
        return target

    def resolve(self, relative_path: str) -> Path:
        """Physical location of a logical path."""
        segments = [segment for segment in relative_path.split("/") if segment]
        return self.output_dir.joinpath(*segments)

    def _current(self) -> Writer:
        if self.writer is None:
            raise FileWriterError("No file is open")
        return self.writer

    def write_line(self, level: int, text: str) -> None:
        self._current().write_line(level, text)

    def write_before_line(self, level: int, text: str) -> None:
        self._current().write_before_line(level, text)

    def write_indented(self, level: int, text: str) -> None:
        self._current().write_indented(level, text)

    def write(self, text: str) -> None:
        self._current().write(text)

    def discard(self) -> None:
        """Drop the open file's buffer without writing anything."""
        if self.is_open:
            logger.debug("Discarded unfinished file %s", self.relative_path)
        self.writer = None
        self.relative_path = None

    def close_file(self) -> Path:
        """
        Flush the open file to disk and release its buffer.

        Returns:
            The path that was written
        """
        writer = self._current()
        target = self.resolve(self.relative_path)

        target.write_text(writer.get_buffer(), encoding="utf-8")
        logger.debug("Wrote %d line(s) to %s", writer.get_line_count(), target)

        self.files_written.append(target)
        self.writer = None
        self.relative_path = None
        return target
