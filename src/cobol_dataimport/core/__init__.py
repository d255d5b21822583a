"""
Core modules for the data import.

This package contains the copybook scanning logic:
- tokenizer: Declaration tokenization
- declarations: Multi-line declaration reconstruction
- classifier: COBOL type classification
"""

from cobol_dataimport.core.classifier import DataCategory, DeclarationMetadata
from cobol_dataimport.core.declarations import Declaration, iter_declarations
from cobol_dataimport.core.tokenizer import tokenize_declaration

__all__ = [
    "DataCategory",
    "DeclarationMetadata",
    "Declaration",
    "iter_declarations",
    "tokenize_declaration",
]
