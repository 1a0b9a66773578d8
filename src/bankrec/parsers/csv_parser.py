"""Delimited text statement parser."""

import logging
import re

from bankrec.domain.entities import NO_DESCRIPTION, ParsedTransaction
from bankrec.parsers.base import TextParser
from bankrec.parsers.columns import ColumnLayout
from bankrec.utils.amount_parser import parse_brazilian_number
from bankrec.utils.date_parser import parse_brazilian_date

logger = logging.getLogger(__name__)


def detect_delimiter(header_line: str) -> str:
    """Semicolon, then tab, defaulting to comma."""
    if ";" in header_line:
        return ";"
    if "\t" in header_line:
        return "\t"
    return ","


def split_line(line: str, delimiter: str) -> list[str]:
    """Split a delimited line, treating delimiters inside double quotes as text."""
    fields = []
    current = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    fields.append("".join(current))
    return fields


def _clean(value: str) -> str:
    return value.replace('"', "").strip()


class CSVParser(TextParser):
    """Parser for CSV exports with a header row and auto-detected columns."""

    file_type = "CSV"

    def parse_text(self, text: str) -> list[ParsedTransaction]:
        lines = [line for line in re.split(r"\r?\n", text) if line.strip()]
        if len(lines) < 2:
            return []

        delimiter = detect_delimiter(lines[0])
        layout = ColumnLayout.detect(split_line(lines[0], delimiter), "CSV")

        transactions = []
        for line_num, line in enumerate(lines[1:], start=2):
            cols = split_line(line, delimiter)
            if len(cols) < layout.min_width:
                logger.debug("Skipping line %d: expected %d columns", line_num, layout.min_width)
                continue

            try:
                txn_date = parse_brazilian_date(_clean(cols[layout.date]))
                amount = parse_brazilian_number(_clean(cols[layout.amount]))
            except ValueError as e:
                logger.debug("Skipping line %d: %s", line_num, e)
                continue

            description = NO_DESCRIPTION
            if layout.description is not None and layout.description < len(cols):
                description = _clean(cols[layout.description]) or NO_DESCRIPTION

            transactions.append(
                ParsedTransaction(date=txn_date, amount=amount, description=description)
            )

        return transactions
