"""
app/validators/header_validator.py

Validation of inventory CSV header rows against the canonical columns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from app.codecs.csv_codec import ParseError
from app.domain.inventory import CSV_COLUMNS, REQUIRED_CSV_COLUMNS


@dataclass(frozen=True)
class HeaderErrorDetail:
    """
    Structured header error detail.
    """

    code: str
    message: str
    column: str | None = None


class CSVHeaderError(ParseError):
    """
    Raised when the header row does not describe an inventory file.
    """

    def __init__(self, *, message: str, errors: Sequence[HeaderErrorDetail]) -> None:
        super().__init__(message)
        self.message = message
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "errors": [
                {
                    "code": error.code,
                    "message": error.message,
                    "column": error.column,
                }
                for error in self.errors
            ],
        }


class HeaderValidator:
    """
    Maps source header names onto canonical column names.
    """

    def __init__(
        self,
        *,
        canonical_columns: Sequence[str] = CSV_COLUMNS,
        required_columns: Sequence[str] = REQUIRED_CSV_COLUMNS,
    ) -> None:
        self._canonical_columns = tuple(canonical_columns)
        self._required_columns = tuple(required_columns)
        self._canonical_set = set(self._canonical_columns)

    def resolve(self, header: Sequence[str]) -> dict[str, str]:
        """
        Return a canonical column -> source header mapping.

        Matching is case-insensitive on trimmed names. Optional columns may be
        absent; unknown, duplicate or missing required columns raise
        :class:`CSVHeaderError`.
        """

        errors: list[HeaderErrorDetail] = []
        mapping: dict[str, str] = {}

        for source_column in header:
            canonical = source_column.strip().lower()
            if canonical not in self._canonical_set:
                errors.append(
                    HeaderErrorDetail(
                        code="unknown_column",
                        message="Column is not part of the inventory CSV format.",
                        column=source_column,
                    )
                )
                continue
            if canonical in mapping:
                errors.append(
                    HeaderErrorDetail(
                        code="duplicate_column",
                        message="Column appears more than once.",
                        column=source_column,
                    )
                )
                continue
            mapping[canonical] = source_column

        for required in self._required_columns:
            if required not in mapping:
                errors.append(
                    HeaderErrorDetail(
                        code="required_column_missing",
                        message="Required column is missing from the header.",
                        column=required,
                    )
                )

        if errors:
            missing = [e.column for e in errors if e.code == "required_column_missing"]
            invalid = [repr(e.column) for e in errors if e.code != "required_column_missing"]
            parts = []
            if missing:
                parts.append(f"missing required columns: {', '.join(map(str, missing))}")
            if invalid:
                parts.append(f"invalid columns: {', '.join(invalid)}")
            raise CSVHeaderError(
                message=f"CSV header validation failed; {'; '.join(parts)}.",
                errors=errors,
            )

        return mapping
