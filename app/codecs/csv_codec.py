"""
app/codecs/csv_codec.py

RFC 4180 style CSV tokenizing and serialization for inventory files.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from app.domain.inventory import RawRow

_BOM = "\ufeff"


class ParseError(ValueError):
    """
    Raised when CSV text is malformed. Aborts the whole import run.
    """

    def __init__(self, message: str, *, row_number: int | None = None) -> None:
        super().__init__(message)
        self.row_number = row_number


def parse(text: str) -> tuple[list[str], list[RawRow]]:
    """
    Parse CSV text into its header and header-keyed data rows.

    Data rows are numbered from 1 (header excluded). Blank lines, including
    lines made only of delimiters, are skipped and not numbered. Empty
    trailing header cells are dropped; extra trailing fields on data rows
    are tolerated only when empty.
    """

    if text.startswith(_BOM):
        text = text[len(_BOM):]

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    header: list[str] | None = None
    rows: list[RawRow] = []
    row_number = 0

    try:
        for record in reader:
            if _is_blank_record(record):
                continue

            if header is None:
                header = _trim_trailing_empty([column.strip() for column in record])
                _check_unique_header(header)
                continue

            row_number += 1
            if len(record) > len(header):
                if any(value.strip() for value in record[len(header):]):
                    raise ParseError(
                        f"Row {row_number} has {len(record)} fields; header has {len(header)}.",
                        row_number=row_number,
                    )
                record = record[: len(header)]
            elif len(record) < len(header):
                raise ParseError(
                    f"Row {row_number} has {len(record)} fields; header has {len(header)}.",
                    row_number=row_number,
                )

            rows.append(RawRow(row_number=row_number, values=dict(zip(header, record))))
    except csv.Error as exc:
        raise ParseError(f"Invalid CSV format near line {reader.line_num}: {exc}") from exc

    if header is None:
        raise ParseError("CSV header row is missing.")

    return header, rows


def serialize(header: Sequence[str], rows: Iterable[Mapping[str, Any]]) -> str:
    """
    Render rows as CSV text with columns in exactly the order of *header*.

    Keys not present in *header* are ignored; missing keys and ``None``
    values are written as empty fields.
    """

    buf = io.StringIO()
    writer = csv.DictWriter(
        buf,
        fieldnames=list(header),
        extrasaction="ignore",
        restval="",
        lineterminator="\r\n",
        quoting=csv.QUOTE_MINIMAL,
    )
    writer.writeheader()
    for row in rows:
        writer.writerow({key: ("" if value is None else value) for key, value in row.items()})
    return buf.getvalue()


def _check_unique_header(header: list[str]) -> None:
    seen: set[str] = set()
    for column in header:
        if column in seen:
            raise ParseError(f"Duplicate header column {column!r}.")
        seen.add(column)


def _is_blank_record(record: list[str]) -> bool:
    return all(value.strip() == "" for value in record)


def _trim_trailing_empty(header: list[str]) -> list[str]:
    while header and header[-1] == "":
        header.pop()
    return header
