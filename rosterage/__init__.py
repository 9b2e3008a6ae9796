"""Toolkit for extracting season totals and summarising team ages."""

from .aggregator import DegenerateGroupError, rank_summaries, report_order, summarize_groups
from .filters import ExclusionRule, clean_rows, default_exclusion_rules, filter_rows
from .models import CleaningResult, CleanRow, GroupSummary, RawDataset
from .parser import ExtractionError, extract_table

__all__ = [
    "CleanRow",
    "CleaningResult",
    "DegenerateGroupError",
    "ExclusionRule",
    "ExtractionError",
    "GroupSummary",
    "RawDataset",
    "clean_rows",
    "default_exclusion_rules",
    "extract_table",
    "filter_rows",
    "rank_summaries",
    "report_order",
    "summarize_groups",
]
