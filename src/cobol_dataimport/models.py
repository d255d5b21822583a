"""Data models for scanned metadata.

This module defines the dataclasses a reader produces: data objects, their
attributes and attribute codes, plus the per-attribute type information
collected in type mode.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

TYPE_PROPERTIES = ("attribute", "declaration", "type", "size", "scale", "usage")


@dataclass
class ScannedAttributeCode:
    """One permitted value of an attribute (a COBOL level-88 condition name).

    Attributes:
        value: The code value, e.g. "N" or "'A', 'B', 'C'"
        description: The condition name, e.g. "NO"
    """

    value: str
    description: str = ""


@dataclass
class ScannedAttribute:
    """One field of a data object.

    Attributes:
        name: Attribute name
        seq_no: 1-based position among the data object's attributes
        data_type: Destination data type
        common_type: Portable type; empty when no rule applies
        default_value: Declared default value
        codes: Permitted values, in declaration order
        logical_name: Business name
        key: Key designation
        parent_attribute: Name of the enclosing attribute
        required: Whether a value is mandatory
        source: Where the attribute was read from
        summary: Short description
        description: Long description
        tags: Free-form tags
        extended_properties: Additional name -> value properties
    """

    name: str
    seq_no: int = 0
    data_type: str = ""
    common_type: str = ""
    default_value: str = ""
    codes: list[ScannedAttributeCode] = field(default_factory=list)
    logical_name: str = ""
    key: str = ""
    parent_attribute: str = ""
    required: bool = False
    source: str = ""
    summary: str = ""
    description: str = ""
    tags: list[str] = field(default_factory=list)
    extended_properties: dict[str, str] = field(default_factory=dict)

    def add_code(self, code: ScannedAttributeCode) -> None:
        self.codes.append(code)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ScannedDataObject:
    """A record layout harvested from one source (one copybook).

    Attributes:
        name: Data object name (the copybook file name)
        namespace: Namespace the data object belongs to
        attributes: Attributes in declaration order
        logical_name: Business name
        source: Where the data object was read from
        summary: Short description
        description: Long description
        tags: Free-form tags
        extended_properties: Additional name -> value properties
    """

    name: str
    namespace: str = ""
    attributes: list[ScannedAttribute] = field(default_factory=list)
    logical_name: str = ""
    source: str = ""
    summary: str = ""
    description: str = ""
    tags: list[str] = field(default_factory=list)
    extended_properties: dict[str, str] = field(default_factory=dict)

    def get_attribute(self, name: str) -> ScannedAttribute | None:
        """Find an attribute by name."""
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def __len__(self) -> int:
        return len(self.attributes)


@dataclass
class TypeMetaData:
    """Type information gathered per attribute in type mode.

    Each row maps every name in ``properties`` to a string value.
    """

    properties: tuple[str, ...] = TYPE_PROPERTIES
    rows: list[dict[str, str]] = field(default_factory=list)

    def add(self, **values: Any) -> None:
        """Append a row; missing properties become empty strings."""
        self.rows.append({name: str(values.get(name, "")) for name in self.properties})

    def get(self, attribute: str) -> dict[str, str] | None:
        """Return the first row for ``attribute``."""
        for row in self.rows:
            if row.get("attribute") == attribute:
                return row
        return None

    def to_dict(self) -> dict[str, Any]:
        return {"properties": list(self.properties), "rows": [dict(row) for row in self.rows]}

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)
