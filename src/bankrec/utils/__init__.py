"""Utility functions for bankrec."""

from bankrec.utils.date_parser import parse_brazilian_date, parse_ofx_date
from bankrec.utils.amount_parser import parse_brazilian_number, parse_ofx_amount
from bankrec.utils.decoding import decode_buffer

__all__ = [
    "parse_brazilian_date",
    "parse_ofx_date",
    "parse_brazilian_number",
    "parse_ofx_amount",
    "decode_buffer",
]
