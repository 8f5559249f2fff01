import logging

import pytest

from engine import comparison_frame, project, rows_to_dataframe
from engine.projection import find_breakeven_year, find_ira_depletion_year, resolve_projection_years
from tests.helpers import make_inputs, make_row


def test_lifetime_savings_identity():
    summary = project(make_inputs()).summary
    assert summary.optimized_total_cost + summary.lifetime_savings == pytest.approx(summary.baseline_total_cost)
    assert summary.lifetime_savings == summary.baseline_total_cost - summary.optimized_total_cost


def test_projection_is_deterministic():
    inputs = make_inputs(qcd_pct=25.0, irmaa_target_tier=1)
    assert project(inputs) == project(inputs)


def test_both_scenarios_share_horizon_and_years():
    result = project(make_inputs(projection_years=12))
    assert len(result.baseline_rows) == 12
    assert len(result.optimized_rows) == 12
    assert [r.year for r in result.baseline_rows] == list(range(2026, 2038))
    assert [r.year for r in result.optimized_rows] == [r.year for r in result.baseline_rows]


def test_auto_horizon_from_life_expectancy():
    inputs = make_inputs(projection_years=0)
    # Spouse female age 69 -> 17.5 -> 18 years
    assert resolve_projection_years(inputs) == 18
    assert project(inputs).summary.projection_years == 18


def test_summary_aggregates_rows():
    result = project(make_inputs(qcd_pct=30.0))
    summary = result.summary

    assert summary.total_roth_converted == pytest.approx(sum(r.roth_conversion for r in result.optimized_rows))
    assert summary.total_qcds == pytest.approx(sum(r.qcds_actual for r in result.baseline_rows))
    assert summary.total_qcds > 0
    assert summary.first_spouse_death_year == 2039
    assert summary.baseline_final_ira_balance == result.baseline_rows[-1].ira_balance_end
    assert summary.heir_annual_ira_rmd_baseline == pytest.approx(summary.baseline_final_ira_balance / 10)
    assert summary.heir_annual_ira_rmd_optimized == pytest.approx(summary.optimized_final_ira_balance / 10)


def test_conversions_shift_balance_to_roth():
    summary = project(make_inputs()).summary
    assert summary.total_roth_converted > 0
    assert summary.optimized_final_ira_balance < summary.baseline_final_ira_balance
    assert summary.optimized_final_roth_balance > summary.baseline_final_roth_balance


def test_conversion_window_before_rmd():
    result = project(make_inputs(conversion_window="before-rmd"))
    assert result.conversion_stop_year == 2028
    assert all(r.roth_conversion == 0.0 for r in result.optimized_rows if r.year >= 2028)


def test_breakeven_year():
    baseline = [make_row(2026, 10), make_row(2027, 10), make_row(2028, 10)]
    optimized = [make_row(2026, 30), make_row(2027, 0), make_row(2028, 0)]
    assert find_breakeven_year(baseline, optimized) == 2028
    assert find_breakeven_year(baseline, [make_row(y, 50) for y in (2026, 2027, 2028)]) is None


def test_ira_depletion_year():
    rows = [make_row(2026, ira_balance_end=10.0), make_row(2027, ira_balance_end=0.0)]
    assert find_ira_depletion_year(rows) == 2027
    assert find_ira_depletion_year(rows[:1]) is None


def test_dataframes():
    result = project(make_inputs(projection_years=10))

    frame = rows_to_dataframe(result.baseline_rows)
    assert frame.index.name == "year"
    assert len(frame) == 10
    assert frame.loc[2026, "ira_balance_end"] == result.baseline_rows[0].ira_balance_end

    comparison = comparison_frame(result)
    assert comparison["cumulative_savings"].iloc[-1] == pytest.approx(result.summary.lifetime_savings)
    assert list(comparison.index) == list(range(2026, 2036))


def test_project_logs_summary(caplog):
    with caplog.at_level(logging.INFO, logger="engine.projection"):
        project(make_inputs(projection_years=10))
    assert "lifetime savings" in caplog.text
