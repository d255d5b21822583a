"""Status line sink for readers.

Readers report progress ("Importing COPYBOOK1") and initialization failures
as plain status lines. The lines are written to an optional text sink
supplied by the caller, mirrored to the logger and kept in memory so that a
pipeline can attach them to its result.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TextIO

from cobol_dataimport.exceptions import ReadError
from cobol_dataimport.logging_config import get_logger

SEPARATOR = "-" * 43


class StatusLog:
    """Collect status lines and forward them to a writer.

    Attributes:
        lines: List of status lines written so far
    """

    def __init__(self, writer: TextIO | None = None) -> None:
        """Initialize the status log.

        Args:
            writer: Optional text stream receiving one line per status entry
        """
        self._lines: list[str] = []
        self._writer = writer
        self._logger = get_logger("status")
        self.suppressed = False

    def set_writer(self, writer: TextIO | None) -> None:
        """Replace the sink status lines are written to."""
        self._writer = writer

    def append(self, line: str) -> None:
        """Record a status line.

        Args:
            line: The status text, without line terminator

        Raises:
            ReadError: If the sink fails to accept the line
        """
        if self.suppressed:
            return
        self._lines.append(line)
        self._logger.info(line)
        if self._writer is not None:
            try:
                self._writer.write(f"{line}\n")
                self._writer.flush()
            except (OSError, ValueError) as exc:
                raise ReadError(f"Unable to write status line: {exc}") from exc

    def banner(self, line: str) -> None:
        """Record a line framed by separators."""
        self.append(SEPARATOR)
        self.append(line)
        self.append(SEPARATOR)

    @property
    def lines(self) -> list[str]:
        """Get a copy of all status lines."""
        return list(self._lines)

    def clear(self) -> None:
        self._lines.clear()

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __repr__(self) -> str:
        return f"StatusLog({len(self._lines)} lines)"
