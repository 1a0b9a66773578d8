"""Header column detection for tabular statements (CSV and XLSX)."""

from dataclasses import dataclass
from typing import Optional, Sequence

from bankrec.domain.errors import ValidationError, columns_not_detected

DATE_CANDIDATES = (
    "data",
    "date",
    "dt",
    "data lancamento",
    "data lançamento",
    "data_lancamento",
)
AMOUNT_CANDIDATES = ("valor", "amount", "value", "vlr", "quantia")
DESCRIPTION_CANDIDATES = (
    "descricao",
    "descrição",
    "description",
    "historico",
    "histórico",
    "memo",
    "lancamento",
    "lançamento",
)


def find_column(headers: Sequence[str], candidates: Sequence[str]) -> Optional[int]:
    """Index of the first header containing a candidate.

    Candidates are tried in order; for each one the headers are scanned left
    to right and the first header containing it as a substring wins.
    Headers must already be lowercased.
    """
    for candidate in candidates:
        for index, header in enumerate(headers):
            if candidate in header:
                return index
    return None


def normalize_header(value: object) -> str:
    if value is None:
        return ""
    return str(value).replace('"', "").strip().lower()


@dataclass(frozen=True)
class ColumnLayout:
    """Positions of the logical columns within a row."""

    date: int
    amount: int
    description: Optional[int]

    @property
    def min_width(self) -> int:
        """Number of cells a row needs to carry both date and amount."""
        return max(self.date, self.amount) + 1

    @classmethod
    def detect(cls, headers: Sequence[object], source: str) -> "ColumnLayout":
        """Detect the layout from a header row.

        Raises:
            ValidationError: If the date or amount column cannot be found
        """
        normalized = [normalize_header(h) for h in headers]
        date_col = find_column(normalized, DATE_CANDIDATES)
        amount_col = find_column(normalized, AMOUNT_CANDIDATES)
        if date_col is None or amount_col is None:
            raise ValidationError(columns_not_detected(source))
        return cls(
            date=date_col,
            amount=amount_col,
            description=find_column(normalized, DESCRIPTION_CANDIDATES),
        )
