"""
Declaration reconstruction - turns copybook lines into logical sentences.

A data description entry may span several physical lines; it ends at the
first line whose code area, trimmed, ends with a period. Comment lines,
short lines and lines with a blank code area are skipped.

A period that happens to end a line inside a quoted literal also ends the
sentence. Copybooks that wrap such literals exactly at a period are rare and
are not handled.

Trailing blanks of every line are dropped before joining, including the
blanks a continued literal carries up to column 72. Only the token text
matters to the clause extractor, so the literal loses nothing it needs.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List

from cobol_dataimport.cobol.column_handler import parse_line
from cobol_dataimport.cobol.syntax import QUOTES, is_continued
from cobol_dataimport.logging_config import get_logger

logger = get_logger("declarations")


@dataclass
class Declaration:
    """
    One logical data description entry.

    Attributes:
        line_number: Line on which the entry starts
        text: Entry text, trimmed, without the terminating period
    """

    line_number: int
    text: str


def _has_open_literal(text: str) -> bool:
    """True if ``text`` ends inside a quoted literal."""
    quote = None
    for char in text:
        if quote is None and char in QUOTES:
            quote = char
        elif char == quote:
            quote = None
    return quote is not None


def _finish(parts: List[str]) -> str:
    sentence = " ".join(parts).strip()
    if sentence.endswith("."):
        sentence = sentence[:-1].rstrip()
    return sentence


def iter_declarations(lines: Iterable[str]) -> Iterator[Declaration]:
    """
    Yield the logical declarations found in ``lines``.

    Args:
        lines: Physical lines of a fixed-format copybook; line endings are
            stripped here

    Yields:
        Declaration objects in source order
    """
    parts: List[str] = []
    start_line = 0

    for line_number, raw in enumerate(lines, start=1):
        cobol_line = parse_line(raw.rstrip("\r\n"), line_number)
        if cobol_line.is_skippable:
            continue

        code = cobol_line.code.rstrip()
        if cobol_line.is_continuation and parts:
            fragment = code.lstrip()
            if _has_open_literal(parts[-1]) and fragment[:1] in QUOTES:
                fragment = fragment[1:]
            parts[-1] += fragment
        else:
            if not parts:
                start_line = line_number
            parts.append(code.strip())

        if not is_continued(code):
            yield Declaration(start_line, _finish(parts))
            parts = []

    if parts:
        logger.warning(
            "Line %d: declaration not terminated by a period: %s",
            start_line,
            _finish(parts),
        )
        yield Declaration(start_line, _finish(parts))
