"""
Output Writer - exports scanned metadata.

This module handles:
- JSON export of data objects (with attributes and codes)
- CSV export of type metadata
- A fixed-width text rendering of type metadata for rule authors
"""

import csv
import io
import json
from pathlib import Path
from typing import Iterable, List

from cobol_dataimport.models import ScannedDataObject, TypeMetaData


def data_objects_to_json(data_objects: Iterable[ScannedDataObject], indent: int = 2) -> str:
    """Serialize data objects to a JSON array."""
    return json.dumps([obj.to_dict() for obj in data_objects], indent=indent)


def write_data_objects_json(
    data_objects: Iterable[ScannedDataObject],
    path: Path,
    encoding: str = "utf-8",
) -> Path:
    """
    Write data objects to a JSON file.

    Args:
        data_objects: Data objects to export
        path: Output file; parent directories are created
        encoding: Output encoding

    Returns:
        The path written
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(data_objects_to_json(data_objects), encoding=encoding)
    return path


def write_type_metadata_csv(metadata: TypeMetaData, path: Path) -> Path:
    """
    Write type metadata to a CSV file.

    Columns follow ``metadata.properties``.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(metadata.properties))
        writer.writeheader()
        writer.writerows(metadata.rows)
    return path


def type_metadata_to_csv(metadata: TypeMetaData) -> str:
    """Render type metadata as CSV text."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(metadata.properties), lineterminator="\n")
    writer.writeheader()
    writer.writerows(metadata.rows)
    return buffer.getvalue()


def format_type_metadata(metadata: TypeMetaData) -> str:
    """
    Render type metadata as an aligned text table.

    Example:
        attribute  declaration  type  size  scale  usage
        ---------  -----------  ----  ----  -----  -----
        N-07       S9(5)        SINT  5     0
    """
    headers = list(metadata.properties)
    widths = [len(header) for header in headers]
    for row in metadata.rows:
        for i, name in enumerate(headers):
            widths[i] = max(widths[i], len(row.get(name, "")))

    def render(cells: List[str]) -> str:
        return "  ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

    lines = [render(headers), render(["-" * width for width in widths])]
    for row in metadata.rows:
        lines.append(render([row.get(name, "") for name in headers]))
    return "\n".join(lines)
