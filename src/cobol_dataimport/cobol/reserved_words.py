"""
COBOL words recognized while scanning data description entries.

Only two vocabularies matter to the copybook scanner:
- words that may follow the level number in place of a data name
- the bare USAGE words that may appear without the USAGE keyword

All lookups are case-insensitive.
"""

from typing import FrozenSet

# Words that can occupy the data-name position of an entry. When the
# second token is one of these, the entry is anonymous (FILLER-like).
DATA_NAME_KEYWORDS: FrozenSet[str] = frozenset({
    "FILLER",
    "RENAMES",
    "REDEFINES",
    "BLANK",
    "EXTERNAL",
    "GLOBAL",
    "GROUP-USAGE",
    "JUSTIFIED",
    "JUST",
    "OCCURS",
    "PICTURE",
    "PIC",
    "SIGN",
    "SYNCHRONIZED",
    "SYNC",
    "USAGE",
    "VALUE",
    "VALUES",
})

# USAGE words recognized without a preceding USAGE keyword
USAGE_WORDS: FrozenSet[str] = frozenset({
    "BINARY",
    "COMP",
    "COMP-1",
    "COMP-2",
    "COMP-3",
    "COMP-4",
    "COMP-5",
    "COMPUTATIONAL",
    "COMPUTATIONAL-1",
    "COMPUTATIONAL-2",
    "COMPUTATIONAL-3",
    "COMPUTATIONAL-4",
    "COMPUTATIONAL-5",
})

PICTURE_KEYWORDS: FrozenSet[str] = frozenset({"PIC", "PICTURE"})
VALUE_KEYWORDS: FrozenSet[str] = frozenset({"VALUE", "VALUES"})


def is_data_name_keyword(word: str) -> bool:
    """
    Check if a word may stand in the data-name position of an entry.

    Args:
        word: The word to check

    Returns:
        True if the word is a clause keyword or a bare usage word
    """
    upper = word.upper()
    return upper in DATA_NAME_KEYWORDS or upper in USAGE_WORDS


def is_usage_word(word: str) -> bool:
    """Check if a word is a bare USAGE word."""
    return word.upper() in USAGE_WORDS
