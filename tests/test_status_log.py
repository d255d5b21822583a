"""
Tests for the status line sink, logging setup and error kinds.
"""

import io
import logging

import pytest

from cobol_dataimport.exceptions import (
    ConfigError,
    CopybookSyntaxError,
    DataImportError,
    ErrorKind,
    ReadError,
    RuleError,
    SourceError,
    TypeModeError,
)
from cobol_dataimport.logging_config import ROOT_LOGGER, get_logger, level_for, setup_logging
from cobol_dataimport.status_log import SEPARATOR, StatusLog


class BrokenWriter(io.StringIO):
    def write(self, text):
        raise OSError("disk full")


class TestStatusLog:
    """Tests for StatusLog."""

    def test_append(self):
        """Lines are kept and written with a line terminator."""
        writer = io.StringIO()
        status = StatusLog(writer)
        status.append("first")
        status.append("second")
        assert status.lines == ["first", "second"]
        assert writer.getvalue() == "first\nsecond\n"
        assert len(status) == 2
        assert list(status) == ["first", "second"]

    def test_without_writer(self):
        """Lines are kept in memory when no writer is set."""
        status = StatusLog()
        status.append("line")
        assert status.lines == ["line"]

    def test_banner(self):
        """A banner is framed by separators."""
        status = StatusLog()
        status.banner("Importing A")
        assert status.lines == [SEPARATOR, "Importing A", SEPARATOR]
        assert SEPARATOR == "-" * 43

    def test_suppressed(self):
        """Suppressed logs drop every line."""
        writer = io.StringIO()
        status = StatusLog(writer)
        status.suppressed = True
        status.append("line")
        assert status.lines == []
        assert writer.getvalue() == ""

    def test_set_writer_and_clear(self):
        """The writer can be replaced and the lines cleared."""
        status = StatusLog()
        writer = io.StringIO()
        status.set_writer(writer)
        status.append("line")
        status.clear()
        assert writer.getvalue() == "line\n"
        assert status.lines == []
        assert repr(status) == "StatusLog(0 lines)"

    def test_writer_failure(self):
        """A failing writer raises ReadError."""
        status = StatusLog(BrokenWriter())
        with pytest.raises(ReadError, match="disk full"):
            status.append("line")

    def test_lines_are_logged(self, caplog):
        """Status lines are mirrored to the logger."""
        with caplog.at_level(logging.INFO, logger=ROOT_LOGGER):
            StatusLog().append("Importing A")
        assert "Importing A" in caplog.text


class TestLogging:
    """Tests for logging setup."""

    @pytest.mark.parametrize(
        "verbose,quiet,level", [(True, False, "DEBUG"), (False, True, "ERROR"), (False, False, "INFO")]
    )
    def test_level_for(self, verbose, quiet, level):
        """Verbosity switches pick the level."""
        assert level_for(verbose, quiet) == level

    def test_setup_logging(self, tmp_path):
        """Console and file handlers are installed on the importer logger."""
        stream = io.StringIO()
        log_file = tmp_path / "import.log"
        logger = setup_logging("WARNING", log_file=log_file, stream=stream)
        get_logger("test").warning("watch out")
        get_logger("test").info("hidden")
        for handler in logger.handlers:
            handler.flush()
        assert stream.getvalue() == "WARNING: watch out\n"
        assert "watch out" in log_file.read_text()
        assert not logger.propagate
        for handler in logger.handlers:
            handler.close()

    def test_get_logger(self):
        """Loggers live under the importer hierarchy."""
        assert get_logger("rules").name == "cobol_dataimport.rules"
        assert get_logger().name == ROOT_LOGGER


class TestErrorKinds:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize(
        "error,kind",
        [
            (ConfigError("x"), ErrorKind.CONFIGURATION),
            (TypeModeError("x"), ErrorKind.CONFIGURATION),
            (SourceError("x"), ErrorKind.SOURCE),
            (RuleError("x"), ErrorKind.GRAMMAR),
            (CopybookSyntaxError("x"), ErrorKind.SYNTAX),
            (ReadError("x"), ErrorKind.IO),
        ],
    )
    def test_kind(self, error, kind):
        """Every error carries its kind and derives from DataImportError."""
        assert error.kind is kind
        assert isinstance(error, DataImportError)

    def test_syntax_error_location(self):
        """A located syntax error prefixes file and line."""
        error = CopybookSyntaxError("bad", "CUST", 12)
        assert str(error) == "CUST:12: bad"
        assert error.message == "bad"
        assert str(CopybookSyntaxError("bad")) == "bad"
