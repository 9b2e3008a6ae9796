"""Presentation of team age summaries: chart, markdown table and workbook."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Sequence

import matplotlib
import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.cm import ScalarMappable
from matplotlib.colors import Normalize

from .aggregator import report_order
from .models import CleanRow, GroupSummary

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Team age weighted by minutes played"
COLORMAP = "viridis"
MISSING = "–"

SUMMARY_COLUMNS = [
    "team",
    "weighted_mean_age",
    "mean_age",
    "rank_by_weighted",
    "rank_by_unweighted",
    "players",
    "minutes",
]


def summaries_to_frame(summaries: Iterable[GroupSummary]) -> pd.DataFrame:
    """Tabulate *summaries* in report order (youngest weighted age first)."""

    ordered = report_order(summaries)
    return pd.DataFrame(
        {
            "team": pd.Series([item.group for item in ordered], dtype="object"),
            "weighted_mean_age": pd.Series(
                [item.weighted_mean_age for item in ordered], dtype="float64"
            ),
            "mean_age": pd.Series([item.mean_age for item in ordered], dtype="float64"),
            "rank_by_weighted": pd.array(
                [item.rank_by_weighted for item in ordered], dtype="Int64"
            ),
            "rank_by_unweighted": pd.array(
                [item.rank_by_unweighted for item in ordered], dtype="Int64"
            ),
            "players": pd.Series([item.rows for item in ordered], dtype="int64"),
            "minutes": pd.Series([item.total_weight for item in ordered], dtype="float64"),
        },
        columns=SUMMARY_COLUMNS,
    )


def clean_rows_to_frame(rows: Sequence[CleanRow], columns: Sequence[str]) -> pd.DataFrame:
    records = [{**row.cells, **row.numbers} for row in rows]
    return pd.DataFrame.from_records(records, columns=list(columns))


def render_table(summaries: Iterable[GroupSummary]) -> str:
    """Return a markdown table with ages rounded to two decimals."""

    frame = summaries_to_frame(summaries)
    display = pd.DataFrame(
        {
            "Team": frame["team"],
            "Weighted age": frame["weighted_mean_age"].apply(_format_age),
            "Mean age": frame["mean_age"].apply(_format_age),
            "Rank (weighted)": frame["rank_by_weighted"].apply(_format_rank),
            "Rank (mean)": frame["rank_by_unweighted"].apply(_format_rank),
            "Players": frame["players"],
            "Minutes": frame["minutes"].apply(lambda value: f"{value:,.0f}"),
        }
    )
    return display.to_markdown(index=False, disable_numparse=True)


def _format_age(value) -> str:
    return MISSING if pd.isna(value) else f"{value:.2f}"


def _format_rank(value) -> str:
    return MISSING if pd.isna(value) else str(int(value))


def render_bar_chart(
    summaries: Iterable[GroupSummary],
    output_path: Path,
    *,
    title: str = DEFAULT_TITLE,
) -> Path:
    """Draw weighted age per team as bars coloured by the unweighted mean."""

    ordered = report_order(summaries)
    if not ordered:
        raise ValueError("No team summaries to plot")

    teams: List[str] = [item.group for item in ordered]
    heights = [item.weighted_mean_age or 0.0 for item in ordered]
    means = [item.mean_age for item in ordered]

    norm = Normalize(vmin=min(means), vmax=max(means))
    cmap = matplotlib.colormaps[COLORMAP]

    fig, ax = plt.subplots(figsize=(12, 6))
    ax.bar(teams, heights, color=cmap(norm(means)), edgecolor="white")
    present = [item.weighted_mean_age for item in ordered if item.weighted_mean_age is not None]
    if present:
        ax.set_ylim(bottom=max(0.0, min(present) - 1.0), top=max(present) + 1.0)
    ax.set_xlabel("Team")
    ax.set_ylabel("Age weighted by minutes played")
    ax.set_title(title)
    ax.tick_params(axis="x", labelrotation=60)
    ax.grid(True, axis="y", linestyle="--", alpha=0.3)

    mappable = ScalarMappable(norm=norm, cmap=cmap)
    mappable.set_array([])
    fig.colorbar(mappable, ax=ax, label="Mean age (unweighted)")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    logger.debug("Saved bar chart with %d teams to %s", len(teams), output_path)
    return output_path


def render_interactive_chart(
    summaries: Iterable[GroupSummary],
    output_path: Path,
    *,
    title: str = DEFAULT_TITLE,
) -> Path:
    import plotly.express as px

    frame = summaries_to_frame(summaries).astype(
        {"rank_by_weighted": "float64", "rank_by_unweighted": "float64"}
    )
    fig = px.bar(
        frame,
        x="team",
        y="weighted_mean_age",
        color="mean_age",
        color_continuous_scale=COLORMAP,
        hover_data={
            "mean_age": ":.2f",
            "weighted_mean_age": ":.2f",
            "rank_by_weighted": True,
            "rank_by_unweighted": True,
            "players": True,
        },
        labels={
            "team": "Team",
            "weighted_mean_age": "Weighted age",
            "mean_age": "Mean age",
        },
    )
    fig.update_layout(title=title, yaxis=dict(rangemode="normal"))

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(str(output_path), include_plotlyjs="cdn")
    return output_path


def write_excel(
    rows: Sequence[CleanRow],
    columns: Sequence[str],
    summaries: Iterable[GroupSummary],
    path: Path,
) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        clean_rows_to_frame(rows, columns).to_excel(writer, sheet_name="players", index=False)
        summaries_to_frame(summaries).to_excel(writer, sheet_name="teams", index=False)
    return path
