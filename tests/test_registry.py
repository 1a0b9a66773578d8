"""Tests for the parser registry."""

from bankrec.parsers import CSVParser, OFXParser, XLSXParser
from bankrec.parsers.registry import ParserRegistry, default_registry, file_extension


def test_file_extension():
    assert file_extension("Extrato.OFX") == "ofx"
    assert file_extension("/tmp/jan.2026.csv") == "csv"
    assert file_extension("statement") == ""


def test_default_registry():
    registry = default_registry()
    assert isinstance(registry.get("ofx"), OFXParser)
    assert isinstance(registry.get("CSV"), CSVParser)
    assert isinstance(registry.get(".xlsx"), XLSXParser)
    assert registry.get("xls").file_type == "XLS"
    assert registry.get("pdf") is None
    assert registry.extensions == ["csv", "ofx", "xls", "xlsx"]


def test_for_file():
    registry = default_registry()
    assert isinstance(registry.for_file("extrato.ofx"), OFXParser)
    assert registry.for_file("extrato.txt") is None


def test_register_custom_parser():
    registry = ParserRegistry()
    parser = CSVParser()
    registry.register(".TXT", parser)
    assert registry.get("txt") is parser
    assert registry.extensions == ["txt"]
