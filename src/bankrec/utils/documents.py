"""CNPJ/CPF helpers used by reconciliation."""

import re
from typing import Optional

CNPJ_PATTERN = re.compile(r"\d{2}\.?\d{3}\.?\d{3}/?\d{4}-?\d{2}")


def normalize_document(document: str) -> str:
    """Strip CNPJ/CPF punctuation ("12.345.678/0001-90" -> "12345678000190")."""
    return re.sub(r"[./-]", "", document)


def find_cnpjs(text: str) -> list[str]:
    """Return every CNPJ-shaped substring of ``text`` in order of appearance."""
    return CNPJ_PATTERN.findall(text)


def document_matches(document: Optional[str], raw_cnpj: str) -> bool:
    """True when a stored document contains the CNPJ, punctuated or not."""
    if not document:
        return False
    return normalize_document(raw_cnpj) in document or raw_cnpj in document
