from __future__ import annotations

import pytest

from app.imports import ImportParseError, read_csv
from app.imports.parsing import normalize_image_url, parse_flag


def test_read_csv_trims_and_lowercases_headers() -> None:
    rows = read_csv(b"\xef\xbb\xbf Name , REGION\n North Zone , North \n")

    assert len(rows) == 1
    assert rows[0].line == 2
    assert rows[0].values == {"name": "North Zone", "region": "North"}


def test_read_csv_skips_blank_lines_and_keeps_line_numbers() -> None:
    rows = read_csv(b"name,region\n\nA,North\n , \nB,South\n")

    assert [(row.line, row.values["name"]) for row in rows] == [(3, "A"), (5, "B")]


def test_read_csv_quoted_values_may_contain_commas() -> None:
    rows = read_csv(b'name,region\n"North, Upper","North"\n')

    assert rows[0].values["name"] == "North, Upper"


def test_csv_row_get_treats_empty_as_missing() -> None:
    rows = read_csv(b"name,region\nA,\n")

    assert rows[0].get("region") is None
    assert rows[0].get("unknown") is None


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"\n\n",
        b"name,name\nA,B\n",
        b"name,\nA,B\n",
        b"name,region\nA,North,extra\n",
        b'name,region\n"unterminated,North\n',
        b"name\n\xff\xfe\n",
    ],
)
def test_read_csv_rejects_malformed_input(data: bytes) -> None:
    with pytest.raises(ImportParseError):
        read_csv(data, filename="districts.csv")


def test_parse_error_carries_location() -> None:
    with pytest.raises(ImportParseError) as excinfo:
        read_csv(b"name,name\n", filename="positions.csv")

    assert excinfo.value.location == "positions.csv"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("https://example.com/a.jpg", "https://example.com/a.jpg"),
        ("http://cdn.example.org/x.png", "http://cdn.example.org/x.png"),
        ("ftp://example.com/a.jpg", None),
        ("example.com/a.jpg", None),
        ("/uploads/a.jpg", None),
        ("", None),
        (None, None),
    ],
)
def test_normalize_image_url(value, expected) -> None:
    assert normalize_image_url(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [("true", True), ("1", True), ("YES", True), ("false", False), ("", False), (None, False)],
)
def test_parse_flag(value, expected) -> None:
    assert parse_flag(value) is expected
