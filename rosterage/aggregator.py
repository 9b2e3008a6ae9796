"""Aggregation helpers for per-team age statistics."""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence

from .models import CleanRow, GroupSummary

logger = logging.getLogger(__name__)


class DegenerateGroupError(ArithmeticError):
    """Raised when a group's weights sum to zero."""


def weighted_mean(values: Sequence[float], weights: Sequence[float]) -> float:
    if len(values) != len(weights):
        raise ValueError("values and weights must have the same length")
    total_weight = sum(weights)
    if total_weight == 0:
        raise DegenerateGroupError("Total weight is zero")
    return sum(value * weight for value, weight in zip(values, weights)) / total_weight


def summarize_groups(
    rows: Iterable[CleanRow],
    *,
    key_column: str,
    value_column: str,
    weight_column: str,
) -> List[GroupSummary]:
    """Compute weighted and unweighted means of *value_column* per group.

    Groups are returned in order of first appearance with ranks unset. A group
    without any weight keeps its unweighted mean and reports the weighted mean
    as ``None``.
    """

    bucket: Dict[str, List[CleanRow]] = defaultdict(list)
    for row in rows:
        bucket[row.text(key_column)].append(row)

    summaries: List[GroupSummary] = []
    for group, items in bucket.items():
        values = [item.number(value_column) for item in items]
        weights = [item.number(weight_column) for item in items]
        try:
            weighted: Optional[float] = weighted_mean(values, weights)
        except DegenerateGroupError:
            logger.warning("Group %s has no %s; weighted mean left empty", group, weight_column)
            weighted = None
        summaries.append(
            GroupSummary(
                group=group,
                weighted_mean_age=weighted,
                mean_age=sum(values) / len(values),
                rows=len(items),
                total_weight=sum(weights),
            )
        )
    return summaries


def competition_rank(values: Sequence[Optional[float]]) -> List[Optional[int]]:
    """Rank *values* ascending; ties share the lowest rank, ``None`` is unranked."""

    present = [value for value in values if value is not None]
    return [
        None if value is None else 1 + sum(1 for other in present if other < value)
        for value in values
    ]


def rank_summaries(summaries: Sequence[GroupSummary]) -> List[GroupSummary]:
    weighted_ranks = competition_rank([item.weighted_mean_age for item in summaries])
    plain_ranks = competition_rank([item.mean_age for item in summaries])
    return [
        replace(item, rank_by_weighted=weighted, rank_by_unweighted=plain)
        for item, weighted, plain in zip(summaries, weighted_ranks, plain_ranks)
    ]


def report_order(summaries: Iterable[GroupSummary]) -> List[GroupSummary]:
    """Sort youngest (by weighted mean) first; groups without one go last."""

    return sorted(
        summaries,
        key=lambda item: (
            item.weighted_mean_age is None,
            item.weighted_mean_age or 0.0,
            item.group,
        ),
    )
