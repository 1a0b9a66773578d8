"""Tests for CNPJ helpers."""

from bankrec.utils.documents import document_matches, find_cnpjs, normalize_document


def test_normalize_document():
    assert normalize_document("12.345.678/0001-90") == "12345678000190"


def test_find_cnpjs_punctuated_and_plain():
    text = "PIX 12.345.678/0001-90 E 98765432000110 REF 123"
    assert find_cnpjs(text) == ["12.345.678/0001-90", "98765432000110"]


def test_find_cnpjs_none():
    assert find_cnpjs("PAGAMENTO BOLETO 1234") == []


def test_document_matches_plain_against_punctuated():
    assert document_matches("12345678000190", "12.345.678/0001-90")


def test_document_matches_punctuated_against_punctuated():
    assert document_matches("12.345.678/0001-90", "12.345.678/0001-90")


def test_document_does_not_match():
    assert not document_matches("11.222.333/0001-44", "12.345.678/0001-90")
    assert not document_matches(None, "12.345.678/0001-90")
