"""
COBOL-specific modules for the data import.

This package contains COBOL language handling:
- column_handler: Fixed-format column parsing
- reserved_words: Data-name keywords and usage words
- syntax: Clause extraction from data description entries
- pic_parser: PICTURE expansion, compaction and classification
"""
