"""Registry of statement parsers keyed by file extension."""

from pathlib import PurePath
from typing import Optional

from bankrec.parsers.base import Parser
from bankrec.parsers.csv_parser import CSVParser
from bankrec.parsers.ofx_parser import OFXParser
from bankrec.parsers.xlsx_parser import XLSXParser


def file_extension(file_name: str) -> str:
    """Lowercased extension without the dot ("Extrato.OFX" -> "ofx")."""
    return PurePath(file_name).suffix.lower().lstrip(".")


class ParserRegistry:
    """Maps file extensions to parser implementations."""

    def __init__(self):
        self._parsers: dict[str, Parser] = {}

    def register(self, extension: str, parser: Parser) -> None:
        self._parsers[extension.lower().lstrip(".")] = parser

    def get(self, extension: str) -> Optional[Parser]:
        return self._parsers.get(extension.lower().lstrip("."))

    def for_file(self, file_name: str) -> Optional[Parser]:
        return self.get(file_extension(file_name))

    @property
    def extensions(self) -> list[str]:
        return sorted(self._parsers)


def default_registry() -> ParserRegistry:
    """Registry with the OFX, CSV and Excel parsers."""
    registry = ParserRegistry()
    registry.register("ofx", OFXParser())
    registry.register("csv", CSVParser())
    registry.register("xls", XLSXParser(file_type="XLS"))
    registry.register("xlsx", XLSXParser(file_type="XLSX"))
    return registry
