import pytest

from rosterage.aggregator import (
    DegenerateGroupError,
    competition_rank,
    rank_summaries,
    report_order,
    summarize_groups,
    weighted_mean,
)
from rosterage.models import CleanRow, GroupSummary


def make_row(team, age, minutes):
    return CleanRow(
        cells={"Team": team, "Age": str(age), "MP": str(minutes)},
        numbers={"Age": float(age), "MP": float(minutes)},
    )


def summarize(rows):
    return rank_summaries(
        summarize_groups(rows, key_column="Team", value_column="Age", weight_column="MP")
    )


def by_group(summaries):
    return {summary.group: summary for summary in summaries}


def test_zero_minute_row_does_not_move_weighted_age():
    rows = [make_row("A", 20, 100), make_row("A", 30, 0), make_row("B", 25, 50)]

    summaries = by_group(summarize(rows))

    a, b = summaries["A"], summaries["B"]
    assert a.mean_age == pytest.approx(25.0)
    assert a.weighted_mean_age == pytest.approx(20.0)
    assert b.mean_age == pytest.approx(25.0)
    assert b.weighted_mean_age == pytest.approx(25.0)
    assert (a.rank_by_weighted, b.rank_by_weighted) == (1, 2)
    assert (a.rank_by_unweighted, b.rank_by_unweighted) == (1, 1)


def test_summary_collapses_rows_per_team():
    rows = [make_row("A", 20, 2000), make_row("A", 34, 500), make_row("B", 30, 2500)]

    a = by_group(summarize(rows))["A"]

    assert a.rows == 2
    assert a.total_weight == 2500
    assert a.weighted_mean_age == pytest.approx((20 * 2000 + 34 * 500) / 2500)


def test_weighted_mean_is_bounded_by_group_ages():
    ages = [19, 22, 27, 31, 38]
    minutes = [120, 2400, 1800, 35, 900]

    result = weighted_mean(ages, minutes)

    assert min(ages) <= result <= max(ages)


def test_mean_equals_weighted_mean_with_unit_weights():
    rows = [make_row("A", age, 1) for age in (21, 24, 29, 33)]

    [summary] = summarize(rows)

    assert summary.mean_age == pytest.approx(summary.weighted_mean_age)


def test_zero_weight_group_reports_missing_weighted_mean(caplog):
    rows = [make_row("A", 20, 0), make_row("A", 24, 0), make_row("B", 25, 50)]

    summaries = by_group(summarize(rows))

    assert summaries["A"].weighted_mean_age is None
    assert summaries["A"].mean_age == pytest.approx(22.0)
    assert summaries["A"].rank_by_weighted is None
    assert summaries["A"].rank_by_unweighted == 1
    assert summaries["B"].rank_by_weighted == 1
    assert "no MP" in caplog.text


def test_weighted_mean_raises_on_zero_total_weight():
    with pytest.raises(DegenerateGroupError):
        weighted_mean([20, 30], [0, 0])
    with pytest.raises(DegenerateGroupError):
        weighted_mean([], [])


def test_empty_input_yields_no_groups():
    assert summarize([]) == []


def test_competition_rank_distinct_values():
    assert competition_rank([3.0, 1.0, 2.0, 5.0]) == [3, 1, 2, 4]


def test_competition_rank_ties_skip_following_rank():
    assert competition_rank([25.0, 20.0, 25.0, 30.0]) == [2, 1, 2, 4]


def test_competition_rank_leaves_missing_unranked():
    assert competition_rank([None, 27.0, 24.0]) == [None, 2, 1]


def test_groups_keep_first_appearance_order():
    rows = [make_row("C", 30, 1), make_row("A", 20, 1), make_row("C", 31, 1)]

    assert [summary.group for summary in summarize(rows)] == ["C", "A"]


def test_summary_is_deterministic():
    rows = [make_row(team, 20 + i, 100 * i) for i, team in enumerate("ABCABCAB", start=1)]

    assert summarize(rows) == summarize(list(rows))


def test_report_order_puts_missing_last_and_breaks_ties_by_group():
    summaries = [
        GroupSummary("ZZZ", 25.0, 26.0, 3, 100.0),
        GroupSummary("NAN", None, 24.0, 2, 0.0),
        GroupSummary("AAA", 25.0, 27.0, 3, 100.0),
        GroupSummary("MID", 23.0, 25.0, 4, 400.0),
    ]

    assert [item.group for item in report_order(summaries)] == ["MID", "AAA", "ZZZ", "NAN"]
