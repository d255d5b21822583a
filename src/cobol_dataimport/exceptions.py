"""
Exception classes for the COBOL data import.

Every error raised by a reader, the rule engine or the copybook scanner
derives from DataImportError and carries an ErrorKind, so callers can tell
configuration problems apart from bad sources, bad rules, malformed copybooks
and I/O failures without parsing message text.

All errors are terminal for the reader instance that raised them.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Closed set of error categories."""

    CONFIGURATION = "configuration"
    SOURCE = "source"
    GRAMMAR = "grammar"
    SYNTAX = "syntax"
    IO = "io"


class DataImportError(Exception):
    """Base exception for all data import errors."""

    kind: ErrorKind = ErrorKind.CONFIGURATION


class ConfigError(DataImportError):
    """Configuration error.

    Raised when reader parameters are missing or invalid, when a reader is
    used before it has been configured, or when type mode is misused.
    """

    kind = ErrorKind.CONFIGURATION


class MissingParameterError(ConfigError):
    """A required reader parameter is absent.

    Attributes:
        parameter: Name of the missing parameter
    """

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(f"Initialization error: parameter [{parameter}] missing")


class InvalidParameterError(ConfigError):
    """A reader parameter has a value outside its allowed set.

    Attributes:
        parameter: Name of the offending parameter
    """

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(
            f"Initialization error: invalid value for parameter [{parameter}]"
        )


class EmptyParameterError(ConfigError):
    """A reader parameter is present but blank.

    Attributes:
        parameter: Name of the empty parameter
    """

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(f"Initialization error: parameter [{parameter}] empty")


class NotConfiguredError(ConfigError):
    """A reader was asked to read before init() succeeded."""

    def __init__(self, reader: str):
        self.reader = reader
        super().__init__(f"Reader {reader} is not configured")


class TypeModeError(ConfigError):
    """Type mode was requested where it is not supported."""

    pass


class SourceError(DataImportError):
    """A source file or directory is missing, of the wrong kind or unopenable."""

    kind = ErrorKind.SOURCE


class CopybookNotFoundError(SourceError):
    """Copybook file does not exist.

    Attributes:
        path: The path given for the copybook
    """

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Initialization error: copybook {path} does not exist")


class NotAFileError(SourceError):
    """Copybook path exists but is not a regular file."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Initialization error: copybook {path} does not denote a file"
        )


class DirectoryNotFoundError(SourceError):
    """PDS directory does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Initialization error: directory {path} does not exist")


class NotADirectoryError_(SourceError):
    """PDS path exists but is not a directory."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Initialization error: directory {path} does not denote a directory"
        )


class RuleError(DataImportError):
    """Malformed rule template or arithmetic sub-expression.

    Attributes:
        rule: The rule text, when the error was found while processing a rule
        expression: The offending expression, when known
    """

    kind = ErrorKind.GRAMMAR

    def __init__(
        self,
        message: str,
        rule: Optional[str] = None,
        expression: Optional[str] = None,
    ):
        self.rule = rule
        self.expression = expression
        super().__init__(message)


class CopybookSyntaxError(DataImportError):
    """Error parsing a copybook declaration.

    Attributes:
        file: The copybook where the error occurred, if known
        line: The line number where the declaration starts, if known
        message: Description of the error
    """

    kind = ErrorKind.SYNTAX

    def __init__(self, message: str, file: Optional[str] = None, line: int = 0):
        self.file = file
        self.line = line
        self.message = message
        if file:
            super().__init__(f"{file}:{line}: {message}")
        else:
            super().__init__(message)


class ReadError(DataImportError):
    """I/O failure while reading a copybook or writing status lines."""

    kind = ErrorKind.IO
