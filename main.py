"""Team age report for an NBA season.

This script downloads the season totals page from basketball-reference.com,
extracts the player totals table, and compares every team's average age with
its age weighted by minutes played. Teams that lean on young players show a
weighted age well below the plain roster average.

The result is written as a bar chart (PNG) and printed as a markdown table.
Optionally the cleaned player rows and the team summary are stored in an Excel
workbook and an interactive Plotly chart.

Usage
-----
python main.py --season 2024 --output-dir output

A saved page can be analysed offline with ``--url file:///path/to/page.html``.
"""
from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import requests

from rosterage.aggregator import rank_summaries, summarize_groups
from rosterage.config import DEFAULT_SEASON, DEFAULT_SELECTOR, TableLayout, season_url
from rosterage.filters import (
    clean_rows,
    default_exclusion_rules,
    filter_rows,
    find_unbacked_totals,
)
from rosterage.models import CleaningResult, GroupSummary, RawDataset
from rosterage.parser import ExtractionError, extract_table
from rosterage.report import (
    render_bar_chart,
    render_interactive_chart,
    render_table,
    write_excel,
)
from rosterage.scraper import fetch_page

logger = logging.getLogger(__name__)

# -------------------------
# Configuration defaults
# -------------------------

DEFAULT_OUTPUT_DIR = Path("output")


@dataclass
class Report:
    """Team summaries of one run and the paths of the files it wrote."""

    summaries: List[GroupSummary]
    cleaning: CleaningResult
    table: str
    chart_path: Optional[Path] = None
    excel_path: Optional[Path] = None
    html_path: Optional[Path] = None
    unbacked_players: List[str] = field(default_factory=list)


# -------------------------
# Pipeline
# -------------------------

def summarise_page(
    html: str,
    *,
    selector: str = DEFAULT_SELECTOR,
    layout: TableLayout = TableLayout(),
) -> Tuple[List[GroupSummary], CleaningResult, RawDataset, List[str]]:
    """Run extraction, filtering, coercion and aggregation on one page."""

    raw = extract_table(html, selector)
    layout = layout.detect(raw.columns)
    logger.info("Extracted %d rows with columns: %s", len(raw), ", ".join(raw.columns))

    unbacked = find_unbacked_totals(
        raw,
        player_column=layout.player_column,
        team_column=layout.team_column,
        markers=layout.total_markers,
    )
    if unbacked:
        logger.warning(
            "%d player(s) only have a combined multi-team row and will be missing: %s",
            len(unbacked),
            ", ".join(unbacked),
        )

    filtered = filter_rows(raw, default_exclusion_rules(layout))
    logger.info("Kept %d of %d rows after filtering", len(filtered), len(raw))
    if not filtered.rows:
        logger.warning("No player rows left after filtering")

    cleaning = clean_rows(
        filtered,
        key_column=layout.team_column,
        value_column=layout.age_column,
        weight_column=layout.minutes_column,
    )
    if cleaning.excluded:
        logger.warning(
            "Excluded %d row(s) with missing team or non-numeric %s/%s",
            len(cleaning.excluded),
            layout.age_column,
            layout.minutes_column,
        )

    summaries = rank_summaries(
        summarize_groups(
            cleaning.rows,
            key_column=layout.team_column,
            value_column=layout.age_column,
            weight_column=layout.minutes_column,
        )
    )
    logger.info("Summarised %d teams", len(summaries))
    return summaries, cleaning, filtered, unbacked


def run(
    url: str,
    output_dir: Path,
    *,
    label: str = "report",
    selector: str = DEFAULT_SELECTOR,
    layout: TableLayout = TableLayout(),
    excel: bool = False,
    html: bool = False,
    fetcher: Optional[Callable[[str], str]] = None,
) -> Report:
    """Fetch *url*, summarise team ages and write the report artifacts.

    Extraction, filtering and aggregation finish before the first file is
    written, so a fetch or extraction failure leaves *output_dir* untouched.
    The chart is written first; a failure in the optional Excel or HTML
    export leaves the chart in place.
    """

    logger.info("Fetching %s", url)
    page = (fetcher or fetch_page)(url)
    summaries, cleaning, filtered, unbacked = summarise_page(
        page, selector=selector, layout=layout
    )
    report = Report(
        summaries=summaries,
        cleaning=cleaning,
        table=render_table(summaries),
        unbacked_players=unbacked,
    )

    if not summaries:
        logger.warning("No team summaries; skipping chart generation")
        return report

    title = f"Team age weighted by minutes played ({label})"
    report.chart_path = render_bar_chart(
        summaries, output_dir / f"team_age_{label}.png", title=title
    )
    logger.info("Created %s", report.chart_path.resolve())

    if excel:
        report.excel_path = write_excel(
            cleaning.rows, filtered.columns, summaries, output_dir / f"team_age_{label}.xlsx"
        )
        logger.info("Wrote %s", report.excel_path.resolve())
    if html:
        report.html_path = render_interactive_chart(
            summaries, output_dir / f"team_age_{label}.html", title=title
        )
        logger.info("Wrote %s", report.html_path.resolve())
    return report


# -------------------------
# CLI entry-point
# -------------------------

def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--season",
        type=int,
        default=DEFAULT_SEASON,
        help=f"Season to analyse, named by its ending year (default: {DEFAULT_SEASON}).",
    )
    parser.add_argument(
        "--url",
        help="Page to analyse instead of the season URL (http(s):// or file://).",
    )
    parser.add_argument(
        "--selector",
        default=DEFAULT_SELECTOR,
        help=f"CSS selector of the totals table (default: {DEFAULT_SELECTOR}).",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help="Directory for the chart and optional exports (default: output).",
    )
    parser.add_argument(
        "--excel",
        action="store_true",
        help="Also write the cleaned rows and team summary to an Excel workbook.",
    )
    parser.add_argument(
        "--html",
        action="store_true",
        help="Also write an interactive Plotly chart.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging for detailed progress information.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress informational output, showing only warnings and errors.",
    )

    args = parser.parse_args(argv)

    if args.verbose and args.quiet:
        parser.error("--verbose and --quiet are mutually exclusive")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    url = args.url or season_url(args.season)
    label = str(args.season) if not args.url else Path(args.url).stem or "report"
    try:
        report = run(
            url,
            args.output_dir,
            label=label,
            selector=args.selector,
            excel=args.excel,
            html=args.html,
        )
    except ExtractionError as exc:
        raise SystemExit(f"Failed to extract the totals table: {exc}") from exc
    except requests.RequestException as exc:
        raise SystemExit(f"Failed to fetch {url}: {exc}") from exc

    print(report.table)


if __name__ == "__main__":
    main()
