"""Spreadsheet statement parser (first worksheet only)."""

import io
import logging
import zipfile
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from bankrec.domain.entities import NO_DESCRIPTION, ParsedTransaction
from bankrec.domain.errors import ValidationError
from bankrec.parsers.base import Parser
from bankrec.parsers.columns import ColumnLayout
from bankrec.utils.amount_parser import CENTS, parse_brazilian_number
from bankrec.utils.date_parser import parse_brazilian_date

logger = logging.getLogger(__name__)


def cell_to_date(value: Any) -> date:
    """Date from a typed date cell or a day-first string cell."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_brazilian_date(value)
    raise ValueError(f"Could not parse date cell {value!r}")


def cell_to_amount(value: Any) -> Decimal:
    """Amount from a numeric cell or a Brazilian-formatted string cell."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        amount = Decimal(str(value))
        if not amount.is_finite():
            raise ValueError(f"Could not parse amount cell {value!r}")
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    return parse_brazilian_number("" if value is None else str(value))


class XLSXParser(Parser):
    """Parser for Excel workbooks using the same column rules as CSV."""

    def __init__(self, file_type: str = "XLSX"):
        self.file_type = file_type

    def parse(self, data: bytes) -> list[ParsedTransaction]:
        try:
            workbook = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
            raise ValidationError(f"Could not read spreadsheet: {e}")

        try:
            if not workbook.worksheets:
                raise ValidationError("Spreadsheet is empty")
            rows = workbook.worksheets[0].iter_rows(values_only=True)
            header = next(rows, None)
            if header is None:
                raise ValidationError("Spreadsheet is empty")
            layout = ColumnLayout.detect(header, "spreadsheet")
            return self._parse_rows(rows, layout)
        finally:
            workbook.close()

    def _parse_rows(self, rows, layout: ColumnLayout) -> list[ParsedTransaction]:
        transactions = []
        for row_num, row in enumerate(rows, start=2):
            if row is None or len(row) < layout.min_width:
                continue

            try:
                txn_date = cell_to_date(row[layout.date])
                amount = cell_to_amount(row[layout.amount])
            except ValueError as e:
                logger.debug("Skipping row %d: %s", row_num, e)
                continue

            description = NO_DESCRIPTION
            if layout.description is not None and layout.description < len(row):
                cell = row[layout.description]
                if cell is not None and str(cell).strip():
                    description = str(cell).strip()

            transactions.append(
                ParsedTransaction(date=txn_date, amount=amount, description=description)
            )

        return transactions
