"""
Clause extraction for COBOL data description entries.

Every function here works on the token list of one declaration (see
core.tokenizer) and returns the clause in its source spelling. Keyword
matching is case-insensitive. Absent clauses yield an empty string.

    >>> tokens = "05 WS-AMOUNT PIC IS S9(5)V99 USAGE COMP-3".split()
    >>> get_data_name(tokens), get_picture_string(tokens), get_usage_phrase(tokens)
    ('WS-AMOUNT', 'S9(5)V99', 'COMP-3')
"""

from typing import Optional, Sequence

from cobol_dataimport.cobol.column_handler import parse_line
from cobol_dataimport.cobol.reserved_words import (
    PICTURE_KEYWORDS,
    VALUE_KEYWORDS,
    is_data_name_keyword,
    is_usage_word,
)
from cobol_dataimport.exceptions import CopybookSyntaxError

QUOTES = ("'", '"')


def _find(tokens: Sequence[str], keywords) -> Optional[int]:
    """Index of the first token that is one of ``keywords``."""
    for i, token in enumerate(tokens):
        if token.upper() in keywords:
            return i
    return None


def _skip_optional(tokens: Sequence[str], index: int, word: str) -> int:
    """Step over an optional noise word (IS, ARE) at ``index``."""
    if index < len(tokens) and tokens[index].upper() == word:
        return index + 1
    return index


def get_level_number(tokens: Sequence[str]) -> int:
    """
    Return the level number of an entry.

    Raises:
        CopybookSyntaxError: If the first token is missing or not an integer
    """
    if not tokens:
        raise CopybookSyntaxError("empty declaration has no level number")
    try:
        return int(tokens[0])
    except ValueError:
        raise CopybookSyntaxError(f"invalid level number '{tokens[0]}'") from None


def get_data_name(tokens: Sequence[str]) -> str:
    """Return the data name, or "" for FILLER and anonymous entries."""
    if len(tokens) < 2 or is_data_name_keyword(tokens[1]):
        return ""
    return tokens[1]


def get_picture_string(tokens: Sequence[str]) -> str:
    """Return the PICTURE character string."""
    index = _find(tokens, PICTURE_KEYWORDS)
    if index is None:
        return ""
    index = _skip_optional(tokens, index + 1, "IS")
    return tokens[index] if index < len(tokens) else ""


def get_usage_phrase(tokens: Sequence[str]) -> str:
    """
    Return the USAGE phrase.

    ``USAGE [IS] x`` wins; otherwise the first bare usage word (COMP,
    BINARY, ...) anywhere in the entry is taken.
    """
    index = _find(tokens, {"USAGE"})
    if index is not None:
        index = _skip_optional(tokens, index + 1, "IS")
        return tokens[index] if index < len(tokens) else ""
    for token in tokens:
        if is_usage_word(token):
            return token
    return ""


def get_value(tokens: Sequence[str]) -> str:
    """
    Return the VALUE clause content.

    Everything after ``VALUE [IS]`` or ``VALUES [ARE]`` is joined with single
    spaces. A lone quoted literal loses its quotes; lists keep them.
    """
    index = _find(tokens, VALUE_KEYWORDS)
    if index is None:
        return ""
    noise = "IS" if tokens[index].upper() == "VALUE" else "ARE"
    rest = list(tokens[_skip_optional(tokens, index + 1, noise):])
    if len(rest) == 1:
        return strip_quotes(rest[0])
    return " ".join(rest)


def strip_quotes(literal: str) -> str:
    """Remove one pair of matching surrounding quotes."""
    if len(literal) >= 2 and literal[0] in QUOTES and literal[-1] == literal[0]:
        return literal[1:-1]
    return literal


def is_comment(line: str) -> bool:
    """True for lines shorter than 7 characters or with * or / in column 7."""
    return parse_line(line).is_comment


def is_continued(code: str) -> bool:
    """True if the sentence does not end on this line."""
    return not code.strip().endswith(".")


def is_continuation(line: str) -> bool:
    """True if column 7 holds the continuation indicator."""
    return parse_line(line).is_continuation

