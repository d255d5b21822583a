"""
COBOL Column Handler - fixed-format line parsing for copybooks.

COBOL fixed-column format:
- Columns 1-6:  Sequence number area (ignored)
- Column 7:     Indicator area (* or / comment, - continuation, else code)
- Columns 8-72: Code area
- Columns 73-80: Identification area (ignored)
"""

from dataclasses import dataclass
from enum import Enum

# Column position constants (0-indexed)
SEQUENCE_END = 6
INDICATOR_COL = 6
CODE_START = 7
CODE_END = 72

# Shortest line that can carry code: sequence area, indicator, one code column
MIN_CODE_LINE = CODE_START + 1


class IndicatorType(Enum):
    """COBOL column 7 indicator types."""

    CODE = " "
    COMMENT = "*"
    PAGE = "/"
    CONTINUATION = "-"


@dataclass
class COBOLLine:
    """
    A physical copybook line split into its column areas.

    Attributes:
        raw: The original line content (without line ending)
        line_number: 1-based line number in the copybook
        sequence: Columns 1-6
        indicator: Column 7 (empty for lines shorter than 7 characters)
        code: Columns 8-72, unpadded
    """

    raw: str
    line_number: int
    sequence: str
    indicator: str
    code: str

    @property
    def is_comment(self) -> bool:
        """Lines shorter than the indicator column count as comments."""
        return len(self.raw) <= INDICATOR_COL or self.indicator in ("*", "/")

    @property
    def is_continuation(self) -> bool:
        return self.indicator == "-"

    @property
    def is_blank(self) -> bool:
        """True when the code area carries nothing but spaces."""
        return self.code.strip() == ""

    @property
    def is_skippable(self) -> bool:
        """Comments, short lines and lines with an empty code area."""
        return self.is_comment or len(self.raw) < MIN_CODE_LINE or self.is_blank

    def get_indicator_type(self) -> IndicatorType:
        if self.indicator == "*":
            return IndicatorType.COMMENT
        if self.indicator == "/":
            return IndicatorType.PAGE
        if self.indicator == "-":
            return IndicatorType.CONTINUATION
        return IndicatorType.CODE


def parse_line(line: str, line_number: int = 0) -> COBOLLine:
    """
    Parse a physical line into column areas.

    Args:
        line: The source line content (line ending already removed)
        line_number: 1-based line number in the copybook

    Returns:
        COBOLLine with the sequence, indicator and code areas
    """
    return COBOLLine(
        raw=line,
        line_number=line_number,
        sequence=line[:SEQUENCE_END],
        indicator=line[INDICATOR_COL:INDICATOR_COL + 1],
        code=line[CODE_START:CODE_END],
    )
