"""
Type Classifier - derives the COBOL type of a data description entry.

The classifier tokenizes one declaration, extracts its clauses and maps the
PICTURE/USAGE combination to a DataCategory together with a size (digits or
characters) and a scale (digits after the decimal marker). The category's
value is the rule name used to look up data-type and common-type rules.

Classification order:
1. Numeric and numeric-edited pictures -> UINT, SINT, UNUM, SNUM
2. Alphabetic pictures -> ALPHA
3. Alphanumeric and alphanumeric-edited pictures -> ALPHANUM
4. COMP-1 / COMP-2 usage without a matching picture -> FLOAT4 / FLOAT8
5. Anything else with a picture or usage -> [CK] (unclassified)
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Optional

from cobol_dataimport.cobol import pic_parser
from cobol_dataimport.cobol.syntax import (
    get_data_name,
    get_level_number,
    get_picture_string,
    get_usage_phrase,
    get_value,
)
from cobol_dataimport.core.tokenizer import tokenize_declaration
from cobol_dataimport.logging_config import get_logger

logger = get_logger("classifier")

UNCLASSIFIED_PREFIX = "[CK]"


class DataCategory(Enum):
    """COBOL type categories; values double as rule names."""

    UNSIGNED_INT = "UINT"
    SIGNED_INT = "SINT"
    UNSIGNED_DECIMAL = "UNUM"
    SIGNED_DECIMAL = "SNUM"
    ALPHA = "ALPHA"
    ALPHANUM = "ALPHANUM"
    FLOAT4 = "FLOAT4"
    FLOAT8 = "FLOAT8"
    UNCLASSIFIED = UNCLASSIFIED_PREFIX

    @property
    def is_decimal(self) -> bool:
        return self in (DataCategory.UNSIGNED_DECIMAL, DataCategory.SIGNED_DECIMAL)


@dataclass
class DeclarationMetadata:
    """
    Everything the reader needs to know about one data description entry.

    Attributes:
        level: Level number (1-49, 66, 77 or 88)
        data_name: Data name; empty for FILLER and anonymous entries
        picture: PICTURE string as written
        usage_phrase: USAGE phrase as written
        usage: Normalized usage (COMP, COMP-3, ...)
        category: Type category; None when the entry has neither picture
            nor usage (group items, condition names, RENAMES)
        size: Digit or character count
        decimal_digits: Digits after the decimal marker
        declared_type: Picture and usage phrase as declared
        value: VALUE clause content
    """

    level: int
    data_name: str = ""
    picture: str = ""
    usage_phrase: str = ""
    usage: str = ""
    category: Optional[DataCategory] = None
    size: int = 0
    decimal_digits: int = 0
    declared_type: str = ""
    value: str = ""

    @property
    def type_name(self) -> str:
        """Rule name for this entry; carries the declaration when unclassified."""
        if self.category is None:
            return ""
        if self.category is DataCategory.UNCLASSIFIED:
            name = f"{UNCLASSIFIED_PREFIX} {self.picture}"
            if self.usage_phrase:
                name += f" USAGE {self.usage_phrase}"
            return name
        return self.category.value

    @property
    def is_condition_name(self) -> bool:
        return self.level == 88

    def to_dict(self) -> dict:
        data = asdict(self)
        data["category"] = self.category.value if self.category else None
        data["type_name"] = self.type_name
        return data

    @classmethod
    def from_declaration(cls, declaration: str) -> "DeclarationMetadata":
        """
        Classify one declaration.

        Args:
            declaration: Entry text without the terminating period

        Returns:
            The populated metadata record

        Raises:
            CopybookSyntaxError: On a bad level number or a malformed picture
        """
        tokens = tokenize_declaration(declaration)
        metadata = cls(
            level=get_level_number(tokens),
            data_name=get_data_name(tokens),
            picture=get_picture_string(tokens),
            usage_phrase=get_usage_phrase(tokens),
            value=get_value(tokens),
        )
        metadata.usage = pic_parser.normalize_usage(metadata.usage_phrase) if metadata.usage_phrase else ""
        metadata.declared_type = " ".join(
            part for part in (metadata.picture, metadata.usage_phrase) if part
        )
        metadata._classify()
        return metadata

    def _classify(self) -> None:
        expanded = pic_parser.expand_picture(self.picture).upper()

        if pic_parser.is_numeric_plus(expanded):
            signed = pic_parser.is_signed(expanded)
            characteristic = pic_parser.get_characteristic_digits(expanded)
            mantissa = pic_parser.get_mantissa_digits(expanded)
            if mantissa > 0:
                self.category = (
                    DataCategory.SIGNED_DECIMAL if signed else DataCategory.UNSIGNED_DECIMAL
                )
                self.size = characteristic + mantissa
                self.decimal_digits = mantissa
            else:
                self.category = (
                    DataCategory.SIGNED_INT if signed else DataCategory.UNSIGNED_INT
                )
                self.size = characteristic
        elif pic_parser.is_alphabetic(expanded):
            self.category = DataCategory.ALPHA
            self.size = len(expanded)
        elif pic_parser.is_alphanumeric_plus(expanded):
            self.category = DataCategory.ALPHANUM
            self.size = pic_parser.get_alphanumeric_size(expanded)
        elif pic_parser.is_float4(self.usage_phrase):
            self.category = DataCategory.FLOAT4
        elif pic_parser.is_float8(self.usage_phrase):
            self.category = DataCategory.FLOAT8
        elif self.picture or self.usage_phrase:
            self.category = DataCategory.UNCLASSIFIED

        if expanded:
            logger.debug(
                "%s: %s -> %s", self.data_name or "FILLER",
                pic_parser.compact_picture(expanded), self.type_name,
            )
