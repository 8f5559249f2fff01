import pytest

from engine.tax_engine import (
    YearIncome,
    calc_ltcg_tax,
    calc_ordinary_tax,
    calc_taxable_ss,
    compute_year_metrics,
    lookup_irmaa,
)


def _income(**overrides) -> YearIncome:
    values = dict(
        w2=0.0, ss=0.0, ira_withdrawal=0.0, interest_income=0.0, dividend_income=0.0,
        cap_gains_dist=0.0, stcg=0.0, ltcg=0.0, other_income=0.0, qcds=0.0,
        age=60, filing="single",
    )
    values.update(overrides)
    return YearIncome(**values)


def test_ordinary_tax_single_50k_base_year():
    assert calc_ordinary_tax(50_000, "single", 1.0) == pytest.approx(5_914.00)


def test_ordinary_tax_zero_income():
    assert calc_ordinary_tax(0, "joint", 1.3) == 0.0


def test_ordinary_tax_brackets_scale_with_inflation():
    # Doubling every ceiling and the income doubles the tax
    assert calc_ordinary_tax(100_000, "single", 2.0) == pytest.approx(2 * 5_914.00)


def test_ltcg_tax_all_preferential_single():
    assert calc_ltcg_tax(60_000, 60_000, "single", 1.0) == pytest.approx(1_747.50)


def test_ltcg_tax_stacks_on_ordinary_income():
    # $40k ordinary leaves $8,350 of 0% room; the other $11,650 is taxed at 15%
    assert calc_ltcg_tax(20_000, 60_000, "single", 1.0) == pytest.approx(11_650 * 0.15)


def test_ltcg_tax_clamped_to_taxable_income():
    # Deduction left only $10k taxable; all of it fits in the 0% band
    assert calc_ltcg_tax(25_000, 10_000, "joint", 1.0) == 0.0


def test_ltcg_tax_top_band():
    tax = calc_ltcg_tax(700_000, 700_000, "single", 1.0)
    expected = (533_400 - 48_350) * 0.15 + (700_000 - 533_400) * 0.20
    assert tax == pytest.approx(expected)


def test_taxable_ss_between_thresholds():
    assert calc_taxable_ss(20_000, 30_000, "single") == pytest.approx(2_500.00)


def test_taxable_ss_below_first_threshold():
    assert calc_taxable_ss(30_000, 31_000, "joint") == 0.0


def test_taxable_ss_capped_at_85_percent():
    assert calc_taxable_ss(40_000, 200_000, "joint") == pytest.approx(34_000)


def test_taxable_ss_above_second_threshold_uses_carryover():
    # 0.85 * (50k - 44k) + 6k = 11,100
    assert calc_taxable_ss(40_000, 50_000, "joint") == pytest.approx(11_100)


def test_irmaa_zero_in_base_bracket():
    assert lookup_irmaa(100_000, "single", 2026, 2.5, 1) == 0.0


def test_irmaa_first_tier_joint_two_enrollees():
    surcharge = lookup_irmaa(250_000, "joint", 2026, 2.5, 2)
    assert surcharge == pytest.approx((284.10 - 202.90 + 14.50) * 12 * 2)


def test_irmaa_top_tier_single():
    surcharge = lookup_irmaa(600_000, "single", 2026, 2.5, 1)
    assert surcharge == pytest.approx((689.90 - 202.90 + 91.00) * 12)


def test_irmaa_floors_inflate_after_reference_year():
    # 109,000 * 1.025 = 111,725 in 2027
    assert lookup_irmaa(110_000, "single", 2027, 2.5, 1) == 0.0
    assert lookup_irmaa(112_000, "single", 2027, 2.5, 1) > 0.0


def test_year_metrics_single_with_state_tax():
    metrics = compute_year_metrics(
        _income(other_income=65_000),
        roth_conversion=0.0,
        year=2025,
        inflation_pct=2.5,
        medicare_enrollees=1,
        state_tax_rate=0.05,
        medicare_start_year=2030,
    )
    assert metrics.magi == pytest.approx(65_000)
    assert metrics.federal_tax == pytest.approx(5_914.00)
    assert metrics.state_tax == pytest.approx(3_250)
    assert metrics.irmaa_annual == 0.0
    assert metrics.total_cost == pytest.approx(metrics.total_tax)
    assert metrics.effective_rate_pct == pytest.approx((5_914.00 + 3_250) / 65_000 * 100)


def test_year_metrics_conversion_adds_ordinary_income():
    base = compute_year_metrics(_income(other_income=65_000), 0.0, 2025, 2.5, 1, 0.0, 2030)
    converted = compute_year_metrics(_income(other_income=65_000), 10_000, 2025, 2.5, 1, 0.0, 2030)
    assert converted.magi == pytest.approx(base.magi + 10_000)
    assert converted.federal_tax - base.federal_tax == pytest.approx(10_000 * 0.22)


def test_year_metrics_retirement_exempt_state():
    metrics = compute_year_metrics(
        _income(ira_withdrawal=40_000, interest_income=25_000),
        roth_conversion=0.0,
        year=2025,
        inflation_pct=2.5,
        medicare_enrollees=1,
        state_tax_rate=0.05,
        medicare_start_year=2030,
        state_retirement_exempt=True,
    )
    assert metrics.state_tax == pytest.approx(25_000 * 0.05)


def test_irmaa_requires_age_65_and_medicare_start():
    income = _income(other_income=500_000, age=64)
    assert compute_year_metrics(income, 0.0, 2026, 2.5, 1, 0.0, 2026).irmaa_annual == 0.0

    income = _income(other_income=500_000, age=66)
    assert compute_year_metrics(income, 0.0, 2026, 2.5, 1, 0.0, 2027).irmaa_annual == 0.0
    assert compute_year_metrics(income, 0.0, 2026, 2.5, 1, 0.0, 2026).irmaa_annual > 0.0
