"""
COBOL PIC Clause Parser - expansion, compaction and classification of
PICTURE character strings.

The classifiers work on *expanded* pictures, where every repetition factor
has been written out:

- 9(3)V99   -> 999V99
- X(2)A(2)9 -> XXAA9

Compaction is the inverse for the repeatable symbols X, A, 9 and Z and is
only used to print pictures in a canonical short form.

Recognized families:
- numeric and numeric-edited: optional sign, then 0 Z 9 . V, optional sign
- alphabetic: A only
- alphanumeric: A X 9 with at least one X
- alphanumeric-edited: A X 9 with insertion characters B 0 /
"""

import re
from enum import Enum
from typing import Optional

from cobol_dataimport.exceptions import CopybookSyntaxError

REPEATABLE_SYMBOLS = frozenset("XA9Z")
SIGN_SYMBOLS = frozenset("S+-")
INSERTION_SYMBOLS = "B0/"

NUMERIC_PLUS_PATTERN = re.compile(r"[S+-]?[0Z9.V]+[+-]?")
ALPHABETIC_PATTERN = re.compile(r"A+")
ALPHANUMERIC_PATTERN = re.compile(r"[AX9]*X[AX9]*")
ALPHANUMERIC_EDITED_PATTERN = re.compile(
    r"[AX90B/]*(([AX]9*[B0/])|([B0/]9*[AX]))[AX90B/]*"
)


class UsageType(Enum):
    """Normalized COBOL USAGE values."""

    DISPLAY = "DISPLAY"
    COMP = "COMP"          # Binary (BINARY, COMP-4, COMPUTATIONAL...)
    COMP_1 = "COMP-1"      # Single-precision floating point
    COMP_2 = "COMP-2"      # Double-precision floating point
    COMP_3 = "COMP-3"      # Packed decimal
    COMP_5 = "COMP-5"      # Native binary


USAGE_ALIASES = {
    "COMP": UsageType.COMP,
    "COMPUTATIONAL": UsageType.COMP,
    "COMP-4": UsageType.COMP,
    "COMPUTATIONAL-4": UsageType.COMP,
    "BINARY": UsageType.COMP,
    "COMP-1": UsageType.COMP_1,
    "COMPUTATIONAL-1": UsageType.COMP_1,
    "COMP-2": UsageType.COMP_2,
    "COMPUTATIONAL-2": UsageType.COMP_2,
    "COMP-3": UsageType.COMP_3,
    "COMPUTATIONAL-3": UsageType.COMP_3,
    "PACKED-DECIMAL": UsageType.COMP_3,
    "COMP-5": UsageType.COMP_5,
    "COMPUTATIONAL-5": UsageType.COMP_5,
    "DISPLAY": UsageType.DISPLAY,
}

FLOAT4_USAGES = frozenset({"COMP-1", "COMPUTATIONAL-1"})
FLOAT8_USAGES = frozenset({"COMP-2", "COMPUTATIONAL-2"})


def expand_picture(picture: str) -> str:
    """
    Write out every repetition factor of a picture string.

    Args:
        picture: PICTURE character string, e.g. "S9(3)V9(2)"

    Returns:
        The expanded string, e.g. "S999V99"

    Raises:
        CopybookSyntaxError: On "(" without a preceding symbol, a missing
            ")" or a count that is not a non-negative integer
    """
    expanded = []
    i = 0
    while i < len(picture):
        char = picture[i]
        if char != "(":
            expanded.append(char)
            i += 1
            continue
        if not expanded:
            raise CopybookSyntaxError(f"invalid picture '{picture}': no symbol before '('")
        close = picture.find(")", i + 1)
        if close == -1:
            raise CopybookSyntaxError(f"invalid picture '{picture}': missing ')'")
        count_text = picture[i + 1:close].strip()
        if not count_text.isdigit():
            raise CopybookSyntaxError(
                f"invalid picture '{picture}': bad repetition count '{count_text}'"
            )
        # The symbol before "(" was already copied once
        symbol = expanded.pop()
        expanded.append(symbol * int(count_text))
        i = close + 1
    return "".join(expanded)


def compact_picture(expanded: str) -> str:
    """
    Run-length encode an expanded picture.

    Runs of two or more X, A, 9 or Z become ``c(count)``; every other
    character is copied as is.

        >>> compact_picture("AAXXZZ99XX")
        'A(2)X(2)Z(2)9(2)X(2)'
    """
    parts = []
    i = 0
    while i < len(expanded):
        char = expanded[i]
        run = 1
        if char.upper() in REPEATABLE_SYMBOLS:
            while i + run < len(expanded) and expanded[i + run] == char:
                run += 1
        parts.append(f"{char}({run})" if run > 1 else char)
        i += run
    return "".join(parts)


def is_numeric_plus(expanded: str) -> bool:
    """Numeric or numeric-edited with optional leading or trailing sign."""
    return NUMERIC_PLUS_PATTERN.fullmatch(expanded.upper()) is not None


def is_alphabetic(expanded: str) -> bool:
    return ALPHABETIC_PATTERN.fullmatch(expanded.upper()) is not None


def is_alphanumeric(expanded: str) -> bool:
    return ALPHANUMERIC_PATTERN.fullmatch(expanded.upper()) is not None


def is_alphanumeric_edited(expanded: str) -> bool:
    return ALPHANUMERIC_EDITED_PATTERN.fullmatch(expanded.upper()) is not None


def is_alphanumeric_plus(expanded: str) -> bool:
    """Alphanumeric or alphanumeric-edited."""
    return is_alphanumeric(expanded) or is_alphanumeric_edited(expanded)


def is_float4(usage: str) -> bool:
    return usage.upper() in FLOAT4_USAGES


def is_float8(usage: str) -> bool:
    return usage.upper() in FLOAT8_USAGES


def _require_numeric(expanded: str) -> None:
    if not is_numeric_plus(expanded):
        raise ValueError(f"'{expanded}' is not a numeric picture")


def is_signed(expanded: str) -> bool:
    """True if a numeric picture carries S, + or -."""
    _require_numeric(expanded)
    return any(char in SIGN_SYMBOLS for char in expanded.upper())


def remove_sign(expanded: str) -> str:
    """Drop the sign symbol, leading if there is one, else trailing."""
    if expanded and expanded[0].upper() in SIGN_SYMBOLS:
        return expanded[1:]
    if expanded and expanded[-1] in SIGN_SYMBOLS:
        return expanded[:-1]
    return expanded


def _decimal_marker(unsigned: str) -> int:
    """Position of "." (preferred) or "V"; full length when neither occurs."""
    position = unsigned.find(".")
    if position == -1:
        position = unsigned.upper().find("V")
    return len(unsigned) if position == -1 else position


def get_characteristic_digits(expanded: str) -> int:
    """Number of digit positions before the decimal marker."""
    _require_numeric(expanded)
    return _decimal_marker(remove_sign(expanded))


def get_mantissa_digits(expanded: str) -> int:
    """Number of digit positions after the decimal marker."""
    _require_numeric(expanded)
    unsigned = remove_sign(expanded)
    position = _decimal_marker(unsigned)
    if position == len(unsigned):
        return 0
    return len(unsigned) - position - 1


def get_alphanumeric_size(expanded: str) -> int:
    """Character count of an alphanumeric picture without insertion symbols."""
    return len([char for char in expanded if char.upper() not in INSERTION_SYMBOLS])


def normalize_usage(usage: str) -> str:
    """
    Collapse USAGE synonyms to their short form.

    COMPUTATIONAL-n becomes COMP-n, and BINARY, COMP-4, COMPUTATIONAL-4 and
    COMPUTATIONAL become COMP. Unknown usages are returned upper-cased.
    """
    upper = usage.strip().upper()
    usage_type: Optional[UsageType] = USAGE_ALIASES.get(upper)
    return usage_type.value if usage_type else upper
