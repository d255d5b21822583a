"""
Data object readers.

- base: Reader lifecycle (init/read/close), status lines and type mode
- cobol: Copybook reader for single copybooks and PDS directories
"""
