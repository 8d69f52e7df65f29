"""
Text buffer used to accumulate the contents of one generated file.

The buffer has two regions. Ordinary writes go to the main region; content
that must precede everything already written (such as a file header decided
late) goes to the "before" region, which always comes first in the output.
"""

import re

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

DEFAULT_INDENT = "\t"


class BufferContractError(TypeError):
    """Raised when something other than text is appended to a buffer."""

    pass


def _count_line_breaks(text: str) -> int:
    return len(_LINE_BREAK.findall(text))


class Writer:
    """Buffers generated text and counts the lines written to it."""

    def __init__(self, indent: str = DEFAULT_INDENT):
        """
        Create an empty writer.

        Args:
            indent: The string repeated once per indentation level
        """
        self.indent = indent
        self._before = []
        self._main = []
        self._lines_written = 0

    def _indentation(self, level: int) -> str:
        return self.indent * level

    def write_before_line(self, level: int, text: str) -> None:
        """Append an indented line to the region preceding the main buffer."""
        text = self._require_text(text)
        self._before.append(self._indentation(level) + text + "\n")
        self._lines_written += _count_line_breaks(text) + 1

    def write_line(self, level: int, text: str) -> None:
        """Append one indented, newline-terminated line to the main buffer."""
        self.write_indented(level, text)
        self.write("\n")

    def write_indented(self, level: int, text: str) -> None:
        """Append indentation followed by text, without a trailing newline."""
        text = self._require_text(text)
        self.write(self._indentation(level))
        self.write(text)

    def write(self, text: str) -> None:
        """
        Append raw text to the main buffer.

        Embedded line breaks each count as a written line.

        Raises:
            BufferContractError: If text is not a string
        """
        text = self._require_text(text)
        self._main.append(text)
        self._lines_written += _count_line_breaks(text)

    def get_line_count(self) -> int:
        """Number of lines written to both regions."""
        return self._lines_written

    def get_buffer(self) -> str:
        """The "before" region followed by the main region."""
        return "".join(self._before) + "".join(self._main)

    def clear_buffer(self) -> None:
        """Empty both regions and reset the line count."""
        self._before = []
        self._main = []
        self._lines_written = 0

    @staticmethod
    def _require_text(text) -> str:
        if not isinstance(text, str):
            raise BufferContractError(
                f"Can only append strings. Argument {text!r} has type {type(text).__name__}"
            )
        return text
