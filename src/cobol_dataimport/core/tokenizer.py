"""
Declaration tokenizer.

A data description entry is split on runs of whitespace. Quoted literals
are not kept together: ``VALUE 'A B'`` gives the tokens ``VALUE``, ``'A``
and ``B'``. The clause extractor rejoins VALUE content with single spaces,
which is all the scanner needs.
"""

from typing import List


def tokenize_declaration(declaration: str) -> List[str]:
    """
    Split one logical declaration into tokens.

    Args:
        declaration: Declaration text with the terminating period removed

    Returns:
        Whitespace-delimited tokens in source order (empty for blank input)
    """
    return declaration.split()
