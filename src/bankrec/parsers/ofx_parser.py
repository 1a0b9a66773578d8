"""OFX 1.x statement parser.

Brazilian banks export SGML-flavoured OFX that is not guaranteed to be
well-formed XML: closing tags are frequently omitted, both for the
transaction aggregate and for its fields.
"""

import logging
import re
from typing import Optional

from bankrec.domain.entities import NO_DESCRIPTION, ParsedTransaction
from bankrec.parsers.base import TextParser
from bankrec.utils.amount_parser import parse_ofx_amount
from bankrec.utils.date_parser import parse_ofx_date

logger = logging.getLogger(__name__)

_BLOCK_PATTERN = re.compile(r"<STMTTRN>(.*?)</STMTTRN>", re.IGNORECASE | re.DOTALL)
_OPEN_TAG = re.compile(r"<STMTTRN>", re.IGNORECASE)
_BLOCK_END = re.compile(r"</STMTTRN>|<STMTTRN>", re.IGNORECASE)


def split_blocks(text: str) -> list[str]:
    """Return the contents of every ``STMTTRN`` aggregate."""
    return _BLOCK_PATTERN.findall(text)


def split_unclosed_blocks(text: str) -> list[str]:
    """Split on each ``<STMTTRN>`` and cut every fragment at the next block tag."""
    blocks = []
    for fragment in _OPEN_TAG.split(text)[1:]:
        end = _BLOCK_END.search(fragment)
        blocks.append(fragment[: end.start()] if end else fragment)
    return blocks


def get_value(block: str, tag: str) -> str:
    """Value of ``tag`` in either ``<TAG>value`` or ``<TAG>value</TAG>`` form."""
    match = re.search(rf"<{tag}>\s*([^<\n\r]+)", block, re.IGNORECASE)
    return match.group(1).strip() if match else ""


def parse_block(block: str) -> Optional[ParsedTransaction]:
    """Parse one transaction aggregate; None when date or amount is unusable."""
    date_str = get_value(block, "DTPOSTED")
    amount_str = get_value(block, "TRNAMT")
    if not date_str or not amount_str:
        return None

    try:
        txn_date = parse_ofx_date(date_str)
        amount = parse_ofx_amount(amount_str)
    except ValueError as e:
        logger.debug("Skipping OFX block: %s", e)
        return None

    description = (
        get_value(block, "MEMO")
        or get_value(block, "NAME")
        or get_value(block, "TRNTYPE")
        or NO_DESCRIPTION
    )
    return ParsedTransaction(
        date=txn_date,
        amount=amount,
        description=description,
        external_id=get_value(block, "FITID") or None,
    )


class OFXParser(TextParser):
    """Parser for OFX 1.x (SGML) and OFX 2.x (XML) bank statements."""

    file_type = "OFX"

    def parse_text(self, text: str) -> list[ParsedTransaction]:
        transactions = self._parse_blocks(split_blocks(text))
        if not transactions:
            transactions = self._parse_blocks(split_unclosed_blocks(text))
        return transactions

    def _parse_blocks(self, blocks: list[str]) -> list[ParsedTransaction]:
        transactions = []
        for block in blocks:
            txn = parse_block(block)
            if txn is not None:
                transactions.append(txn)
        return transactions
