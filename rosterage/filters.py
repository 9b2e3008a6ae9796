"""Row filtering and numeric coercion for raw season tables."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence

from .config import TableLayout
from .models import CleaningResult, CleanRow, ExcludedRow, RawDataset
from .parser import ExtractionError

logger = logging.getLogger(__name__)

_BLANKS = {"", "-", "—", "–"}


@dataclass(frozen=True)
class ExclusionRule:
    """Drop rows whose *column* cell equals *value*."""

    column: str
    value: str

    def matches(self, row: Mapping[str, str]) -> bool:
        cell = row.get(self.column)
        return cell is not None and cell.strip() == self.value


def default_exclusion_rules(layout: TableLayout) -> List[ExclusionRule]:
    """Rules for repeated header rows and multi-team season totals."""

    rules = [ExclusionRule(layout.rank_column, layout.rank_column)]
    rules.extend(
        ExclusionRule(layout.team_column, marker) for marker in sorted(layout.total_markers)
    )
    return rules


def filter_rows(dataset: RawDataset, rules: Sequence[ExclusionRule]) -> RawDataset:
    """Return *dataset* without the rows matched by any of *rules*."""

    kept = [row for row in dataset.rows if not any(rule.matches(row) for rule in rules)]
    dropped = len(dataset.rows) - len(kept)
    if dropped:
        logger.debug("Filtered out %d of %d rows", dropped, len(dataset.rows))
    return dataset.with_rows(kept)


def find_unbacked_totals(
    dataset: RawDataset,
    *,
    player_column: str,
    team_column: str,
    markers: Iterable[str],
) -> List[str]:
    """List players that only appear through a combined multi-team row.

    Dropping the combined row is only safe while the per-team rows are also
    present; otherwise the player vanishes from every team.
    """

    markers = set(markers)
    with_total: List[str] = []
    with_stints: set[str] = set()
    for row in dataset.rows:
        player = row.get(player_column, "").strip()
        if not player:
            continue
        if row.get(team_column, "").strip() in markers:
            if player not in with_total:
                with_total.append(player)
        else:
            with_stints.add(player)
    return [player for player in with_total if player not in with_stints]


def parse_number(raw: Optional[str]) -> Optional[float]:
    """Parse a table cell as a float, returning ``None`` when it is not numeric."""

    if raw is None:
        return None
    text = (
        raw.strip()
        .replace("−", "-")
        .replace("\xa0", "")
        .replace(" ", "")
        .replace(",", "")
    )
    if text in _BLANKS:
        return None
    if not re.match(r"^[+-]?(\d+(\.\d*)?|\.\d+)$", text):
        return None
    return float(text)


def clean_rows(
    dataset: RawDataset,
    *,
    key_column: str,
    value_column: str,
    weight_column: str,
) -> CleaningResult:
    """Coerce the value and weight columns of *dataset* to numbers.

    Rows lacking a group key or holding non-numeric value/weight cells are
    excluded and reported in :attr:`CleaningResult.excluded`.
    """

    missing = [
        column
        for column in (key_column, value_column, weight_column)
        if column not in dataset.columns
    ]
    if missing:
        raise ExtractionError(f"Table is missing required columns: {', '.join(missing)}")

    kept: List[CleanRow] = []
    excluded: List[ExcludedRow] = []
    for index, row in enumerate(dataset.rows):
        if not row[key_column].strip():
            excluded.append(ExcludedRow(index, key_column, row[key_column], "missing group key"))
            continue

        numbers = {}
        for column in (value_column, weight_column):
            number = parse_number(row[column])
            if number is None:
                excluded.append(ExcludedRow(index, column, row[column], "not a number"))
                break
            numbers[column] = number
        else:
            if numbers[weight_column] < 0:
                excluded.append(
                    ExcludedRow(index, weight_column, row[weight_column], "negative weight")
                )
                continue
            kept.append(CleanRow(cells=row, numbers=MappingProxyType(numbers)))

    for item in excluded:
        logger.debug("Excluded row %d: %s %r (%s)", item.index, item.column, item.text, item.reason)
    return CleaningResult(rows=tuple(kept), excluded=tuple(excluded))
