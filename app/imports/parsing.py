from __future__ import annotations

import csv
import io
from typing import Optional
from urllib.parse import urlsplit

from app.imports.models import CsvRow, ImportParseError

_TRUE_VALUES = {"1", "true", "yes", "y"}


def read_csv(data: bytes, filename: str = "upload.csv") -> list[CsvRow]:
    """Parse an uploaded CSV into trimmed rows keyed by lower-cased header.

    Blank lines are skipped. Any structural problem raises
    ``ImportParseError`` before a single row is returned.
    """
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ImportParseError("CSV is not valid UTF-8.", location=filename) from exc

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    try:
        header = _next_non_blank(reader)
        if header is None:
            raise ImportParseError("CSV file has no header row.", location=filename)
        columns = [column.strip().lower() for column in header]
        _check_header(columns, filename)

        rows: list[CsvRow] = []
        while True:
            values = _next_non_blank(reader)
            if values is None:
                break
            if len(values) != len(columns):
                raise ImportParseError(
                    f"Line {reader.line_num}: expected {len(columns)} fields, "
                    f"found {len(values)}.",
                    location=filename,
                )
            rows.append(
                CsvRow(
                    line=reader.line_num,
                    values={
                        column: value.strip() for column, value in zip(columns, values)
                    },
                )
            )
    except csv.Error as exc:
        raise ImportParseError(
            f"Malformed CSV near line {reader.line_num}: {exc}", location=filename
        ) from exc
    return rows


def _next_non_blank(reader) -> Optional[list[str]]:
    for values in reader:
        if any(value.strip() for value in values):
            return values
    return None


def _check_header(columns: list[str], filename: str) -> None:
    if any(not column for column in columns):
        raise ImportParseError("CSV header contains an empty column name.", location=filename)
    seen: set[str] = set()
    duplicates: set[str] = set()
    for column in columns:
        if column in seen:
            duplicates.add(column)
        seen.add(column)
    if duplicates:
        raise ImportParseError(
            f"Duplicate CSV columns: {', '.join(sorted(duplicates))}.",
            location=filename,
        )


def normalize_image_url(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    try:
        parts = urlsplit(value)
    except ValueError:
        return None
    if parts.scheme.lower() not in {"http", "https"} or not parts.netloc:
        return None
    return value


def parse_flag(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUE_VALUES
