"""
Sheet CSV parsing — header row first, plain comma splitting.

The splitter does not honour commas inside quoted fields: quotes are
stripped from every cell and each comma is a separator.
"""
from __future__ import annotations

from clientorbit.data.errors import EmptySourceError


def split_line(line: str) -> list[str]:
    """Split one line on commas, trim each cell, drop double quotes."""
    return [cell.strip().replace('"', "") for cell in line.split(",")]


def parse_csv_text(text: str) -> list[dict[str, str]]:
    """Parse raw sheet text into header-keyed rows, preserving row order.

    Blank lines are skipped, short rows are padded with "", extra cells are
    ignored, and rows that are empty in every column are dropped.
    """
    lines = [line for line in (text or "").split("\n") if line.strip()]
    if not lines:
        raise EmptySourceError("Empty spreadsheet")

    headers = split_line(lines[0])
    rows: list[dict[str, str]] = []
    for line in lines[1:]:
        values = split_line(line)
        row = {
            header: values[i] if i < len(values) else ""
            for i, header in enumerate(headers)
        }
        if any(v != "" for v in row.values()):
            rows.append(row)
    return rows
