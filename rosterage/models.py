"""Data models for the roster age pipeline."""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence, Tuple


def freeze_row(columns: Sequence[str], cells: Iterable[str]) -> Mapping[str, str]:
    """Pair *cells* with *columns*, padding short rows with empty strings."""

    values = list(cells)[: len(columns)]
    values.extend("" for _ in range(len(columns) - len(values)))
    return MappingProxyType(dict(zip(columns, values)))


@dataclass(frozen=True)
class RawDataset:
    """Rows of one HTML table, every cell kept as text."""

    columns: Tuple[str, ...]
    rows: Tuple[Mapping[str, str], ...] = ()

    def __len__(self) -> int:
        return len(self.rows)

    def with_rows(self, rows: Iterable[Mapping[str, str]]) -> "RawDataset":
        return RawDataset(columns=self.columns, rows=tuple(rows))


@dataclass(frozen=True)
class CleanRow:
    """A raw row whose numeric columns were coerced to floats."""

    cells: Mapping[str, str]
    numbers: Mapping[str, float]

    def text(self, column: str) -> str:
        return self.cells.get(column, "").strip()

    def number(self, column: str) -> float:
        return self.numbers[column]


@dataclass(frozen=True)
class ExcludedRow:
    """A row dropped during numeric coercion."""

    index: int
    column: str
    text: str
    reason: str


@dataclass(frozen=True)
class CleaningResult:
    rows: Tuple[CleanRow, ...]
    excluded: Tuple[ExcludedRow, ...] = ()


@dataclass(frozen=True)
class GroupSummary:
    """Per-team age statistics.

    ``weighted_mean_age`` is ``None`` when the group has no minutes to weight
    by. Ranks start at 1 for the youngest team and stay ``None`` until
    :func:`rosterage.aggregator.rank_summaries` runs.
    """

    group: str
    weighted_mean_age: Optional[float]
    mean_age: float
    rows: int
    total_weight: float
    rank_by_weighted: Optional[int] = None
    rank_by_unweighted: Optional[int] = None
