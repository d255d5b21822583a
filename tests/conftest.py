"""
Pytest configuration and fixtures for COBOL data import tests.
"""

import json
import logging

import pytest

from cobol_dataimport.logging_config import ROOT_LOGGER
from cobol_dataimport.rules.store import RuleStoreBuilder


def fixed_format(*lines: str) -> str:
    """Lay out lines in fixed format with sequence numbers in columns 1-6.

    A line starting with *, / or - has that character placed in the
    indicator column; any other line gets a blank indicator, so its text
    starts in column 8.
    """
    out = []
    for i, line in enumerate(lines, 1):
        sequence = f"{i * 100:06d}"
        if line[:1] in ("*", "/", "-"):
            out.append(f"{sequence}{line}")
        else:
            out.append(f"{sequence} {line}")
    return "\n".join(out) + "\n"


# Copybook exercising every classification path. Skipped entries: the 01
# group, N-19 (group), a FILLER, N-49 (REDEFINES group) and N-53 (RENAMES).
REFERENCE_COPYBOOK = fixed_format(
    "*----------------------------------------------------------------",
    "*  REFERENCE LAYOUT",
    "*----------------------------------------------------------------",
    "01  REFERENCE-RECORD.",
    "    05 N-01 PIC 99999 USAGE DISPLAY VALUE ZEROES.",
    "    05 N-02 PIC 99(4).",
    "    05 N-03 PIC 9(4)9.",
    "    05 N-04 PIC 9(2)9(3).",
    "    05 N-05",
    "           PIC 9(5).",
    "    05 N-06 PIC 9(5)V.",
    "    05 N-07 PIC S9(5).",
    "    05 N-08 PIC S9(5)V.",
    "    05 N-09 PIC +9(5).",
    "    05 N-10 PIC +9(5)V.",
    "    05 N-11 PIC -9(5).",
    "    05 N-12 PIC -9(5)V.",
    "    05 N-13 PIC 9(5)+.",
    "    05 N-14 PIC 9(5)V+.",
    "    05 N-15 PIC 9(5)-.",
    "    05 N-16 PIC 99(4)V-.",
    "    05 N-17 PIC ZZ09(2)V-.",
    "    05 N-18 PIC ---99.",
    "    05 N-19.",
    "    05 N-20 PIC 999V99.",
    "    05 N-21 PIC 99(2)V99.",
    "    05 N-22 PIC 9(3)V9(2).",
    "    05 N-23 PIC 9(3).9(2).",
    "    05 N-24 PIC S9(3)V9(2).",
    "    05 N-25 PIC S9(3).9(2).",
    "    05 N-26 PIC +9(3)V9(2).",
    "    05 N-27 PIC +9(3).9(2).",
    "    05 N-28 PIC -9(3)V9(2).",
    "    05 N-29 PIC -9(3).9(2).",
    "    05 N-30 PIC 9(3)V9(2)+.",
    "    05 N-31 PIC 9(3).9(2)+.",
    "    05 N-32 PIC 9(3)V9(2)-.",
    "    05 N-33 PIC 9(3).9(2)-.",
    "    05 N-34 PIC Z09.9(2)-.",
    "    05 FILLER PIC X(5).",
    "*  ALPHABETIC AND ALPHANUMERIC",
    "    05 N-36 PIC AAAAA.",
    "    05 N-37 PIC AA(4).",
    "    05 N-38 PIC A(4)A.",
    "    05 N-39 PIC A(2)A(3).",
    "    05 N-40 PIC XXXXX.",
    "    05 N-41 PIC XX(4).",
    "    05 N-42 PIC X(4)X.",
    "    05 N-43 PIC X(2)X(3).",
    "    05 N-44 PIC XAAXX.",
    "    05 N-45 PIC X(2)A(2)9.",
    "    05 N-46 PIC BAAXX9.",
    "    05 N-47 PIC AX99BA.",
    "    05 N-48 PIC AX/X99.",
    "    05 N-49 REDEFINES N-48.",
    "*  BINARY AND FLOATING POINT",
    "    05 N-50 PIC S9(4) USAGE COMP.",
    "    05 N-51 PIC S9(4) USAGE IS COMP.",
    "    05 N-52 PIC S9(4) COMP.",
    "    66 N-53 RENAMES N-50 THRU N-52.",
    "    05 N-54 COMP-1.",
    "    05 N-55 USAGE COMPUTATIONAL-1.",
    "    05 N-56 USAGE IS COMP-2.",
    "    05 N-57 COMPUTATIONAL-2.",
    "    05 N-58 PIC S9(4) COMP-3.",
    "    05 N-59 PIC S9(4) COMPUTATIONAL-3.",
    "    05 N-60 PIC S9(4) COMP-4.",
    "    05 N-61 PIC S9(4) COMPUTATIONAL-4.",
    "    05 N-62 PIC S9(4) COMP-5.",
    "    05 N-63 PIC S9(4) COMPUTATIONAL-5.",
    "    05 N-64 PIC S9(4) BINARY.",
    "    05 N-65 PIC X(1) VALUE 'N'.",
    "       88 NO VALUE 'N'.",
    "       88 YES VALUE 'Y'.",
    "       88 INITIAL VALUES ARE 'A', 'B', 'C'.",
    "       88 END VALUE 'X', 'Y', 'Z'.",
    "       88 MID VALUE IS 'M'.",
)

REFERENCE_FIELD_COUNT = 61

# name, data type, common type, default value
REFERENCE_ATTRIBUTES = [
    ("N-01", "UINT(5)", "INT(5)", "ZEROES"),
    ("N-02", "UINT(5)", "INT(5)", ""),
    ("N-03", "UINT(5)", "INT(5)", ""),
    ("N-04", "UINT(5)", "INT(5)", ""),
    ("N-05", "UINT(5)", "INT(5)", ""),
    ("N-06", "UINT(5)", "INT(5)", ""),
    ("N-07", "SINT(5)", "INT(5)", ""),
    ("N-08", "SINT(5)", "INT(5)", ""),
    ("N-09", "SINT(5)", "INT(5)", ""),
    ("N-10", "SINT(5)", "INT(5)", ""),
    ("N-11", "SINT(5)", "INT(5)", ""),
    ("N-12", "SINT(5)", "INT(5)", ""),
    ("N-13", "SINT(5)", "INT(5)", ""),
    ("N-14", "SINT(5)", "INT(5)", ""),
    ("N-15", "SINT(5)", "INT(5)", ""),
    ("N-16", "SINT(5)", "INT(5)", ""),
    ("N-17", "SINT(5)", "INT(5)", ""),
    ("N-18", "---99", "", ""),
    ("N-20", "UNUM(3,2)", "DECIMAL(3,2)", ""),
    ("N-21", "UNUM(3,2)", "DECIMAL(3,2)", ""),
    ("N-22", "UNUM(3,2)", "DECIMAL(3,2)", ""),
    ("N-23", "UNUM(3,2)", "DECIMAL(3,2)", ""),
    ("N-24", "SNUM(3,2)", "DECIMAL(3,2)", ""),
    ("N-25", "SNUM(3,2)", "DECIMAL(3,2)", ""),
    ("N-26", "SNUM(3,2)", "DECIMAL(3,2)", ""),
    ("N-27", "SNUM(3,2)", "DECIMAL(3,2)", ""),
    ("N-28", "SNUM(3,2)", "DECIMAL(3,2)", ""),
    ("N-29", "SNUM(3,2)", "DECIMAL(3,2)", ""),
    ("N-30", "SNUM(3,2)", "DECIMAL(3,2)", ""),
    ("N-31", "SNUM(3,2)", "DECIMAL(3,2)", ""),
    ("N-32", "SNUM(3,2)", "DECIMAL(3,2)", ""),
    ("N-33", "SNUM(3,2)", "DECIMAL(3,2)", ""),
    ("N-34", "SNUM(3,2)", "DECIMAL(3,2)", ""),
    ("N-36", "ALPHA(5)", "CHAR(5)", ""),
    ("N-37", "ALPHA(5)", "CHAR(5)", ""),
    ("N-38", "ALPHA(5)", "CHAR(5)", ""),
    ("N-39", "ALPHA(5)", "CHAR(5)", ""),
    ("N-40", "ALPHANUM(5)", "CHAR(5)", ""),
    ("N-41", "ALPHANUM(5)", "CHAR(5)", ""),
    ("N-42", "ALPHANUM(5)", "CHAR(5)", ""),
    ("N-43", "ALPHANUM(5)", "CHAR(5)", ""),
    ("N-44", "ALPHANUM(5)", "CHAR(5)", ""),
    ("N-45", "ALPHANUM(5)", "CHAR(5)", ""),
    ("N-46", "ALPHANUM(5)", "CHAR(5)", ""),
    ("N-47", "ALPHANUM(5)", "CHAR(5)", ""),
    ("N-48", "ALPHANUM(5)", "CHAR(5)", ""),
    ("N-50", "SINT(4)", "INT(4)", ""),
    ("N-51", "SINT(4)", "INT(4)", ""),
    ("N-52", "SINT(4)", "INT(4)", ""),
    ("N-54", "COMP-1", "FLOAT4", ""),
    ("N-55", "COMPUTATIONAL-1", "FLOAT4", ""),
    ("N-56", "COMP-2", "FLOAT8", ""),
    ("N-57", "COMPUTATIONAL-2", "FLOAT8", ""),
    ("N-58", "SINT(4)", "INT(4)", ""),
    ("N-59", "SINT(4)", "INT(4)", ""),
    ("N-60", "SINT(4)", "INT(4)", ""),
    ("N-61", "SINT(4)", "INT(4)", ""),
    ("N-62", "SINT(4)", "INT(4)", ""),
    ("N-63", "SINT(4)", "INT(4)", ""),
    ("N-64", "SINT(4)", "INT(4)", ""),
    ("N-65", "ALPHANUM(1)", "CHAR(1)", "N"),
]

# value, description of the codes attached to N-65
REFERENCE_CODES = [
    ("N", "NO"),
    ("Y", "YES"),
    ("'A', 'B', 'C'", "INITIAL"),
    ("'X', 'Y', 'Z'", "END"),
    ("M", "MID"),
]

# attribute, declaration, type, size, scale, usage
REFERENCE_TYPE_METADATA = [
    ("N-01", "99999 DISPLAY", "UINT", "5", "0", "DISPLAY"),
    ("N-02", "99(4)", "UINT", "5", "0", ""),
    ("N-03", "9(4)9", "UINT", "5", "0", ""),
    ("N-04", "9(2)9(3)", "UINT", "5", "0", ""),
    ("N-05", "9(5)", "UINT", "5", "0", ""),
    ("N-06", "9(5)V", "UINT", "5", "0", ""),
    ("N-07", "S9(5)", "SINT", "5", "0", ""),
    ("N-08", "S9(5)V", "SINT", "5", "0", ""),
    ("N-09", "+9(5)", "SINT", "5", "0", ""),
    ("N-10", "+9(5)V", "SINT", "5", "0", ""),
    ("N-11", "-9(5)", "SINT", "5", "0", ""),
    ("N-12", "-9(5)V", "SINT", "5", "0", ""),
    ("N-13", "9(5)+", "SINT", "5", "0", ""),
    ("N-14", "9(5)V+", "SINT", "5", "0", ""),
    ("N-15", "9(5)-", "SINT", "5", "0", ""),
    ("N-16", "99(4)V-", "SINT", "5", "0", ""),
    ("N-17", "ZZ09(2)V-", "SINT", "5", "0", ""),
    ("N-18", "---99", "[CK] ---99", "0", "0", ""),
    ("N-20", "999V99", "UNUM", "5", "2", ""),
    ("N-21", "99(2)V99", "UNUM", "5", "2", ""),
    ("N-22", "9(3)V9(2)", "UNUM", "5", "2", ""),
    ("N-23", "9(3).9(2)", "UNUM", "5", "2", ""),
    ("N-24", "S9(3)V9(2)", "SNUM", "5", "2", ""),
    ("N-25", "S9(3).9(2)", "SNUM", "5", "2", ""),
    ("N-26", "+9(3)V9(2)", "SNUM", "5", "2", ""),
    ("N-27", "+9(3).9(2)", "SNUM", "5", "2", ""),
    ("N-28", "-9(3)V9(2)", "SNUM", "5", "2", ""),
    ("N-29", "-9(3).9(2)", "SNUM", "5", "2", ""),
    ("N-30", "9(3)V9(2)+", "SNUM", "5", "2", ""),
    ("N-31", "9(3).9(2)+", "SNUM", "5", "2", ""),
    ("N-32", "9(3)V9(2)-", "SNUM", "5", "2", ""),
    ("N-33", "9(3).9(2)-", "SNUM", "5", "2", ""),
    ("N-34", "Z09.9(2)-", "SNUM", "5", "2", ""),
    ("N-36", "AAAAA", "ALPHA", "5", "0", ""),
    ("N-37", "AA(4)", "ALPHA", "5", "0", ""),
    ("N-38", "A(4)A", "ALPHA", "5", "0", ""),
    ("N-39", "A(2)A(3)", "ALPHA", "5", "0", ""),
    ("N-40", "XXXXX", "ALPHANUM", "5", "0", ""),
    ("N-41", "XX(4)", "ALPHANUM", "5", "0", ""),
    ("N-42", "X(4)X", "ALPHANUM", "5", "0", ""),
    ("N-43", "X(2)X(3)", "ALPHANUM", "5", "0", ""),
    ("N-44", "XAAXX", "ALPHANUM", "5", "0", ""),
    ("N-45", "X(2)A(2)9", "ALPHANUM", "5", "0", ""),
    ("N-46", "BAAXX9", "ALPHANUM", "5", "0", ""),
    ("N-47", "AX99BA", "ALPHANUM", "5", "0", ""),
    ("N-48", "AX/X99", "ALPHANUM", "5", "0", ""),
    ("N-50", "S9(4) COMP", "SINT", "4", "0", "COMP"),
    ("N-51", "S9(4) COMP", "SINT", "4", "0", "COMP"),
    ("N-52", "S9(4) COMP", "SINT", "4", "0", "COMP"),
    ("N-54", "COMP-1", "FLOAT4", "0", "0", "COMP-1"),
    ("N-55", "COMPUTATIONAL-1", "FLOAT4", "0", "0", "COMP-1"),
    ("N-56", "COMP-2", "FLOAT8", "0", "0", "COMP-2"),
    ("N-57", "COMPUTATIONAL-2", "FLOAT8", "0", "0", "COMP-2"),
    ("N-58", "S9(4) COMP-3", "SINT", "4", "0", "COMP-3"),
    ("N-59", "S9(4) COMPUTATIONAL-3", "SINT", "4", "0", "COMP-3"),
    ("N-60", "S9(4) COMP-4", "SINT", "4", "0", "COMP"),
    ("N-61", "S9(4) COMPUTATIONAL-4", "SINT", "4", "0", "COMP"),
    ("N-62", "S9(4) COMP-5", "SINT", "4", "0", "COMP-5"),
    ("N-63", "S9(4) COMPUTATIONAL-5", "SINT", "4", "0", "COMP-5"),
    ("N-64", "S9(4) BINARY", "SINT", "4", "0", "COMP"),
    ("N-65", "X(1)", "ALPHANUM", "1", "0", ""),
]

STANDARD_RULES = {
    "data-type": {
        "UINT": "%type%(%size%)",
        "SINT": "%type%(%size%)",
        "ALPHA": "%type%(%size%)",
        "ALPHANUM": "%type%(%size%)",
        "UNUM": "%type%([!%size%-%scale%!],[!%scale%!])",
        "SNUM": "%type%([!%size%-%scale%!],[!%scale%!])",
    },
    "common-type": {
        "UINT": "INT(%size%)",
        "SINT": "INT(%size%)",
        "ALPHA": "CHAR(%size%)",
        "ALPHANUM": "CHAR(%size%)",
        "UNUM": "DECIMAL([!%size%-%scale%!],[!%scale%!])",
        "SNUM": "DECIMAL([!%size%-%scale%!],[!%scale%!])",
        "FLOAT4": "%type%",
        "FLOAT8": "%type%",
    },
    "namespace": {
        "nspace": "%prefix%",
    },
}


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo setup_logging() so caplog sees records in every test."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def reference_copybook_text():
    """Fixed-format text of the reference copybook."""
    return REFERENCE_COPYBOOK


@pytest.fixture
def reference_attributes():
    return REFERENCE_ATTRIBUTES


@pytest.fixture
def reference_codes():
    return REFERENCE_CODES


@pytest.fixture
def reference_type_metadata():
    return REFERENCE_TYPE_METADATA


@pytest.fixture
def fixed_lines():
    """Factory returning fixed-format physical lines for code lines."""

    def _lines(*lines):
        return fixed_format(*lines).splitlines(keepends=True)

    return _lines


@pytest.fixture
def copybook_dir(tmp_path):
    """Directory holding single copybooks."""
    directory = tmp_path / "copylib"
    directory.mkdir()
    return directory


@pytest.fixture
def reference_copybook(copybook_dir):
    """The reference copybook written to a file named 'copybook'."""
    path = copybook_dir / "copybook"
    path.write_text(REFERENCE_COPYBOOK, encoding="latin-1")
    return path


@pytest.fixture
def pds_dir(tmp_path):
    """A PDS directory with three copies of the reference copybook."""
    directory = tmp_path / "pds"
    directory.mkdir()
    for i in range(1, 4):
        (directory / f"copybook{i}").write_text(REFERENCE_COPYBOOK, encoding="latin-1")
    return directory


@pytest.fixture
def make_copybook(copybook_dir):
    """Factory writing a fixed-format copybook from code lines."""

    def _make(name, *lines):
        path = copybook_dir / name
        path.write_text(fixed_format(*lines), encoding="latin-1")
        return path

    return _make


@pytest.fixture
def rule_store():
    """Rule store mapping every COBOL type to a sized target type."""
    builder = RuleStoreBuilder(group="COBOL")
    for category, rules in STANDARD_RULES.items():
        for name, rule in rules.items():
            builder.add_rule(category, name, rule)
    return builder.build()


@pytest.fixture
def common_params(rule_store):
    """Reader parameters shared by every scope."""
    return {
        "namespacePrefix": "TEMP_SPACE",
        "ruleGroup": "COBOL",
        "ruleStore": rule_store,
    }


@pytest.fixture
def rules_json(tmp_path):
    """The standard rules as a JSON rule file."""
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"group": "COBOL", "rules": STANDARD_RULES}, indent=2))
    return path


@pytest.fixture
def rules_csv(tmp_path):
    """The standard rules as a CSV rule file, plus one row of another group."""
    lines = ["group,category,name,rule"]
    for category, rules in STANDARD_RULES.items():
        for name, rule in rules.items():
            # Rules with commas must be quoted
            lines.append(f'COBOL,{category},{name},"{rule}"')
    lines.append("JDBC,data-type,UINT,NUMBER(%size%)")
    path = tmp_path / "rules.csv"
    path.write_text("\n".join(lines) + "\n")
    return path
