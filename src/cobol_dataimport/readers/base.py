"""
Reader lifecycle shared by all data object readers.

A reader is driven by its caller:

    reader = CopybookReader()
    reader.set_log_writer(sys.stdout)
    reader.init(params)
    while (data_object := reader.read()) is not None:
        ...
    reader.close()

States::

    UNCONFIGURED --init()--> CONFIGURED --read()--> READING --exhausted--> DONE
                                                        `--error--> FAILED

Any error is terminal: the reader releases its resources, reports the error
as a status line and raises it. Later read() calls raise the same error.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Mapping, NoReturn, Optional, TextIO

from cobol_dataimport.exceptions import (
    DataImportError,
    NotConfiguredError,
    ReadError,
    TypeModeError,
)
from cobol_dataimport.logging_config import get_logger
from cobol_dataimport.models import ScannedDataObject, TypeMetaData
from cobol_dataimport.status_log import StatusLog

logger = get_logger("readers")


class ReaderState(Enum):
    UNCONFIGURED = "unconfigured"
    CONFIGURED = "configured"
    READING = "reading"
    DONE = "done"
    FAILED = "failed"


class DataObjectReader(ABC):
    """
    Base class implementing init/read/close, status lines and type mode.

    Subclasses implement _configure(), _read_next() and _release().
    """

    def __init__(self) -> None:
        self.status = StatusLog()
        self.state = ReaderState.UNCONFIGURED
        self.config: Optional[Any] = None
        self._type_mode = False
        self._type_metadata: Optional[TypeMetaData] = None
        self._error: Optional[DataImportError] = None

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def type_mode(self) -> bool:
        return self._type_mode

    def set_log_writer(self, writer: Optional[TextIO]) -> None:
        """Send status lines to ``writer``."""
        self.status.set_writer(writer)

    def enable_type_mode(self) -> None:
        """
        Collect type metadata instead of mapping types through rules.

        Raises:
            TypeModeError: If reading has started or the configured source
                does not support type mode
        """
        if self.state not in (ReaderState.UNCONFIGURED, ReaderState.CONFIGURED):
            raise TypeModeError("Type mode must be enabled before the first read")
        if self.config is not None:
            self._check_type_mode(self.config)
        self._type_mode = True
        self._type_metadata = TypeMetaData()
        self.status.suppressed = True

    def get_type_metadata(self) -> TypeMetaData:
        """Return the type metadata collected so far."""
        if not self._type_mode or self._type_metadata is None:
            raise TypeModeError("Type metadata is only available in type mode")
        return self._type_metadata

    def init(self, params: Mapping[str, Any]) -> None:
        """
        Validate parameters and prepare the source.

        Raises:
            ConfigError: On invalid parameters
            SourceError: On a missing or unusable source
        """
        try:
            self.config = self._configure(params)
            if self._type_mode:
                self._check_type_mode(self.config)
        except DataImportError as exc:
            self.config = None
            self._fail(exc)
        self.state = ReaderState.CONFIGURED
        logger.debug("%s configured", self.name)

    def read(self) -> Optional[ScannedDataObject]:
        """
        Return the next data object, or None once the source is exhausted.

        Raises:
            DataImportError: On any failure; the reader is unusable afterwards
        """
        if self.state is ReaderState.FAILED and self._error is not None:
            raise self._error
        if self.state is ReaderState.UNCONFIGURED:
            self._fail(NotConfiguredError(self.name))
        if self.state is ReaderState.DONE:
            return None

        self.state = ReaderState.READING
        try:
            data_object = self._read_next()
        except DataImportError as exc:
            self._fail(exc)
        if data_object is None:
            self.state = ReaderState.DONE
        return data_object

    def close(self) -> None:
        """Release any open resource. Safe to call more than once."""
        self._release()

    def _fail(self, error: DataImportError) -> NoReturn:
        """Release resources, report ``error`` as a status line and raise it."""
        self._release()
        self.state = ReaderState.FAILED
        self._error = error
        try:
            self.status.append(str(error))
        except ReadError as status_error:
            logger.error("Unable to report %s: %s", error, status_error)
        raise error

    def _check_type_mode(self, config: Any) -> None:
        """Raise TypeModeError if ``config`` does not allow type mode."""
        raise TypeModeError(f"Type mode is not supported by {self.name}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @abstractmethod
    def _configure(self, params: Mapping[str, Any]) -> Any:
        """Validate ``params`` and return the reader configuration."""

    @abstractmethod
    def _read_next(self) -> Optional[ScannedDataObject]:
        """Produce the next data object or None."""

    @abstractmethod
    def _release(self) -> None:
        """Close open handles; must log, never raise."""
