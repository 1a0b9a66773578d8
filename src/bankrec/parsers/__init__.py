"""Statement file parsers."""

from bankrec.parsers.base import Parser, TextParser
from bankrec.parsers.csv_parser import CSVParser
from bankrec.parsers.ofx_parser import OFXParser
from bankrec.parsers.xlsx_parser import XLSXParser
from bankrec.parsers.registry import ParserRegistry, default_registry, file_extension

__all__ = [
    "Parser",
    "TextParser",
    "CSVParser",
    "OFXParser",
    "XLSXParser",
    "ParserRegistry",
    "default_registry",
    "file_extension",
]
