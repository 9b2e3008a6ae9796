"""HTML table extraction for season statistics pages."""
from __future__ import annotations

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, Comment, Tag
from soupsieve import SelectorSyntaxError

from .models import RawDataset, freeze_row

logger = logging.getLogger(__name__)


class ExtractionError(ValueError):
    """Raised when an HTML document does not contain the requested table."""


def _select_single(doc: BeautifulSoup, selector: str) -> Optional[Tag]:
    try:
        matches = doc.select(selector)
    except SelectorSyntaxError as exc:
        raise ExtractionError(f"Invalid selector {selector!r}: {exc}") from exc
    if len(matches) > 1:
        raise ExtractionError(
            f"Selector {selector!r} matched {len(matches)} elements; expected exactly one"
        )
    return matches[0] if matches else None


def _find_element(html: str, selector: str) -> Tag:
    doc = BeautifulSoup(html, "lxml")
    element = _select_single(doc, selector)
    if element is not None:
        return element

    # Basketball-Reference ships most secondary tables commented out and
    # reveals them client-side.
    for comment in doc.find_all(string=lambda text: isinstance(text, Comment)):
        if "<table" not in comment:
            continue
        element = _select_single(BeautifulSoup(str(comment), "lxml"), selector)
        if element is not None:
            logger.debug("Found %s inside an HTML comment", selector)
            return element

    raise ExtractionError(f"No element matches selector {selector!r}")


def _as_table(element: Tag, selector: str) -> Tag:
    if element.name == "table":
        return element
    table = element.find("table")
    if table is None:
        raise ExtractionError(f"Element matched by {selector!r} contains no table")
    return table


def _header_row(table: Tag) -> Optional[Tag]:
    """Return the row holding the column labels.

    A ``<thead>`` may carry an over-header row grouping columns together; the
    real labels are always on its last row.
    """

    thead = table.find("thead")
    if thead is not None:
        rows = thead.find_all("tr")
        return rows[-1] if rows else None
    return table.find("tr")


def _body_rows(table: Tag, header: Tag) -> List[Tag]:
    bodies = table.find_all("tbody")
    if bodies:
        return [row for body in bodies for row in body.find_all("tr") if row is not header]
    return [
        row
        for row in table.find_all("tr")
        if row is not header
        and row.find_parent("thead") is None
        and row.find_parent("tfoot") is None
    ]


def _unique_columns(labels: List[str]) -> List[str]:
    seen: dict[str, int] = {}
    columns: List[str] = []
    for label in labels:
        count = seen.get(label, 0)
        columns.append(label if count == 0 else f"{label}.{count}")
        seen[label] = count + 1
    return columns


def extract_table(html: str, selector: str) -> RawDataset:
    """Extract the single table identified by *selector* from *html*.

    Column names come from the header row. Every following row becomes one
    raw row with its cell text kept verbatim.
    """

    table = _as_table(_find_element(html, selector), selector)
    header = _header_row(table)
    if header is None:
        raise ExtractionError(f"Table matched by {selector!r} has no rows")

    labels = [cell.get_text(" ", strip=True) for cell in header.find_all(["th", "td"])]
    if not any(labels):
        raise ExtractionError(f"Table matched by {selector!r} has no header labels")
    columns = tuple(_unique_columns(labels))

    rows = []
    for row in _body_rows(table, header):
        cells = [cell.get_text() for cell in row.find_all(["th", "td"], recursive=False)]
        if not cells:
            continue
        rows.append(freeze_row(columns, cells))

    logger.debug("Extracted %d rows x %d columns from %s", len(rows), len(columns), selector)
    return RawDataset(columns=columns, rows=tuple(rows))
