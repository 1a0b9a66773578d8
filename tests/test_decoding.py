"""Tests for statement text decoding."""

from bankrec.utils.decoding import decode_buffer


def test_utf8_is_kept():
    assert decode_buffer("Descrição;Histórico".encode("utf-8")) == "Descrição;Histórico"


def test_utf8_bom_is_stripped():
    assert decode_buffer("\ufeffData;Valor".encode("utf-8")) == "Data;Valor"


def test_windows_1252_fallback():
    data = "PAGAMENTO CONCESSÃO".encode("cp1252")
    assert decode_buffer(data) == "PAGAMENTO CONCESSÃO"


def test_never_fails_on_undecodable_bytes():
    # 0x81 is undefined in cp1252 and invalid as a UTF-8 start byte
    text = decode_buffer(b"abc\x81def")
    assert text.startswith("abc")
    assert text.endswith("def")
