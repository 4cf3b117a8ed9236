"""
app/validators/item_row_validator.py

Row-level validation and type parsing for inventory CSV imports.
"""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Sequence

from app.domain.inventory import (
    ItemCondition,
    RawRow,
    RowValidationBatch,
    RowValidationError,
    ValidatedItemRow,
)

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

ALLOWED_CONDITIONS = {condition.value for condition in ItemCondition}
BOOLEAN_VALUES = {"true": True, "false": False}

# Mirrors the inventory_items column types: Integer and Numeric(12, 2).
MAX_QUANTITY = 2**31 - 1
PRICE_PRECISION = 12
PRICE_SCALE = 2
_PRICE_QUANTUM = Decimal(1).scaleb(-PRICE_SCALE)


class ItemRowValidator:
    """
    Validates and parses raw inventory rows into typed rows.

    Validation never raises: every problem becomes a RowValidationError and
    rows with errors are left out of the typed output.
    """

    def validate_rows(
        self,
        *,
        rows: Sequence[RawRow],
        mapping: Mapping[str, str],
    ) -> RowValidationBatch:
        """
        Validate every raw row in file order.
        """

        batch = RowValidationBatch()
        for raw_row in rows:
            parsed_row, row_errors = self.validate_row(raw_row=raw_row, mapping=mapping)
            if row_errors:
                batch.errors.extend(row_errors)
                continue
            if parsed_row is not None:
                batch.rows.append(parsed_row)
        return batch

    def validate_row(
        self,
        *,
        raw_row: RawRow,
        mapping: Mapping[str, str],
    ) -> tuple[ValidatedItemRow | None, list[RowValidationError]]:
        """
        Validate and parse one raw row.

        ``mapping`` is the canonical column -> source header mapping produced
        by the header validator.
        """

        errors: list[RowValidationError] = []
        row_number = raw_row.row_number

        def value_of(column: str) -> str | None:
            source = mapping.get(column)
            if source is None:
                return None
            return raw_row.values.get(source)

        name = self._parse_required_string(
            value=value_of("name"),
            row_number=row_number,
            column="name",
            errors=errors,
        )
        category_name = self._parse_required_string(
            value=value_of("category_name"),
            row_number=row_number,
            column="category_name",
            errors=errors,
        )
        location_name = self._parse_required_string(
            value=value_of("location_name"),
            row_number=row_number,
            column="location_name",
            errors=errors,
        )
        condition = self._parse_condition(
            value=value_of("condition"),
            row_number=row_number,
            errors=errors,
        )
        is_consumable = self._parse_boolean(
            value=value_of("is_consumable"),
            row_number=row_number,
            column="is_consumable",
            errors=errors,
        )

        error_count = len(errors)
        quantity = self._parse_non_negative_int(
            value=value_of("quantity"),
            row_number=row_number,
            column="quantity",
            errors=errors,
        )
        if is_consumable and quantity is None and len(errors) == error_count:
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    column="quantity",
                    message="Quantity is required for consumable items.",
                )
            )

        minimum_quantity = self._parse_non_negative_int(
            value=value_of("minimum_quantity"),
            row_number=row_number,
            column="minimum_quantity",
            errors=errors,
        )
        purchase_price = self._parse_price(
            value=value_of("purchase_price"),
            row_number=row_number,
            errors=errors,
        )
        purchase_date = self._parse_date(
            value=value_of("purchase_date"),
            row_number=row_number,
            column="purchase_date",
            errors=errors,
        )
        warranty_expiration = self._parse_date(
            value=value_of("warranty_expiration"),
            row_number=row_number,
            column="warranty_expiration",
            errors=errors,
        )

        if errors or condition is None:
            return None, errors

        return (
            ValidatedItemRow(
                name=name,
                condition=condition,
                category_name=category_name,
                location_name=location_name,
                is_consumable=is_consumable,
                description=self._parse_optional_string(value_of("description")),
                serial_number=self._parse_optional_string(value_of("serial_number")),
                barcode=self._parse_optional_string(value_of("barcode")),
                quantity=quantity,
                minimum_quantity=minimum_quantity,
                purchase_date=purchase_date,
                purchase_price=purchase_price,
                warranty_expiration=warranty_expiration,
                notes=self._parse_optional_string(value_of("notes")),
                row_number=row_number,
            ),
            [],
        )

    def _parse_condition(
        self,
        *,
        value: str | None,
        row_number: int,
        errors: list[RowValidationError],
    ) -> ItemCondition | None:
        if self._is_blank(value):
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    column="condition",
                    message="Required value is missing.",
                    value=self._stringify_value(value),
                )
            )
            return None

        raw = str(value).strip()
        normalized = raw.lower()
        if normalized not in ALLOWED_CONDITIONS:
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    column="condition",
                    message=f"unknown condition '{raw}' at row {row_number}",
                    value=raw,
                )
            )
            return None
        return ItemCondition(normalized)

    def _parse_required_string(
        self,
        *,
        value: Any,
        row_number: int,
        column: str,
        errors: list[RowValidationError],
    ) -> str:
        if self._is_blank(value):
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    column=column,
                    message="Required value is missing.",
                    value=self._stringify_value(value),
                )
            )
            return ""
        return str(value).strip()

    def _parse_optional_string(self, value: str | None) -> str | None:
        if self._is_blank(value):
            return None
        return str(value).strip()

    def _parse_boolean(
        self,
        *,
        value: str | None,
        row_number: int,
        column: str,
        errors: list[RowValidationError],
    ) -> bool:
        if self._is_blank(value):
            return False

        raw = str(value).strip()
        parsed = BOOLEAN_VALUES.get(raw.lower())
        if parsed is None:
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    column=column,
                    message="Value must be 'true' or 'false'.",
                    value=raw,
                )
            )
            return False
        return parsed

    def _parse_non_negative_int(
        self,
        *,
        value: str | None,
        row_number: int,
        column: str,
        errors: list[RowValidationError],
    ) -> int | None:
        if self._is_blank(value):
            return None

        raw = str(value).strip()
        if not _INTEGER_PATTERN.match(raw):
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    column=column,
                    message="Value must be a whole number.",
                    value=raw,
                )
            )
            return None

        parsed = int(raw)
        if parsed < 0:
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    column=column,
                    message="Value must not be negative.",
                    value=raw,
                )
            )
            return None
        if parsed > MAX_QUANTITY:
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    column=column,
                    message=f"Value must not exceed {MAX_QUANTITY}.",
                    value=raw,
                )
            )
            return None
        return parsed

    def _parse_price(
        self,
        *,
        value: str | None,
        row_number: int,
        errors: list[RowValidationError],
    ) -> Decimal | None:
        if self._is_blank(value):
            return None

        raw = str(value).strip()
        try:
            parsed = Decimal(raw)
        except (InvalidOperation, ValueError):
            parsed = None

        if parsed is None or not parsed.is_finite():
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    column="purchase_price",
                    message="Value must be a decimal number.",
                    value=raw,
                )
            )
            return None
        if parsed < 0:
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    column="purchase_price",
                    message="Value must not be negative.",
                    value=raw,
                )
            )
            return None
        too_large = parsed.adjusted() >= PRICE_PRECISION - PRICE_SCALE
        if too_large or parsed != parsed.quantize(_PRICE_QUANTUM):
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    column="purchase_price",
                    message=(
                        f"Value must have at most {PRICE_PRECISION - PRICE_SCALE} integer "
                        f"and {PRICE_SCALE} decimal digits."
                    ),
                    value=raw,
                )
            )
            return None
        return parsed

    def _parse_date(
        self,
        *,
        value: str | None,
        row_number: int,
        column: str,
        errors: list[RowValidationError],
    ) -> date | None:
        if self._is_blank(value):
            return None

        raw = str(value).strip()
        if _DATE_PATTERN.match(raw):
            try:
                return date.fromisoformat(raw)
            except ValueError:
                pass

        errors.append(
            RowValidationError(
                row_number=row_number,
                column=column,
                message="Invalid date format. Expected YYYY-MM-DD.",
                value=raw,
            )
        )
        return None

    @staticmethod
    def _is_blank(value: Any) -> bool:
        if value is None:
            return True
        return str(value).strip() == ""

    @staticmethod
    def _stringify_value(value: Any) -> str | None:
        if value is None:
            return None
        return str(value)
