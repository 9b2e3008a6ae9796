"""Defaults describing where the season totals live and how the table is laid out."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import FrozenSet, Sequence

DEFAULT_SEASON = 2024
DEFAULT_SELECTOR = "table#totals_stats"

# Season totals list one row per player stint; multi-team players also get a
# combined row. The marker was "TOT" until 2024 and "2TM"/"3TM"/... since.
DEFAULT_TOTAL_MARKERS = frozenset({"TOT", "2TM", "3TM", "4TM", "5TM"})

TEAM_COLUMN_ALIASES = ("Team", "Tm")


def season_url(season: int) -> str:
    """Return the Basketball-Reference season totals page for *season*."""

    return f"https://www.basketball-reference.com/leagues/NBA_{season}_totals.html"


@dataclass(frozen=True)
class TableLayout:
    """Column names of the player totals table."""

    rank_column: str = "Rk"
    player_column: str = "Player"
    team_column: str = "Team"
    age_column: str = "Age"
    minutes_column: str = "MP"
    total_markers: FrozenSet[str] = DEFAULT_TOTAL_MARKERS

    def detect(self, columns: Sequence[str]) -> "TableLayout":
        """Adapt the team column to whichever alias the page uses."""

        if self.team_column in columns:
            return self
        for alias in TEAM_COLUMN_ALIASES:
            if alias in columns:
                return replace(self, team_column=alias)
        return self
