import pytest

from engine.rmd_tables import (
    FALLBACK_RMD_FACTOR,
    calculate_rmd,
    get_qcd_limit,
    get_rmd_age,
    get_rmd_factor,
)


def test_rmd_age_75_on_500k():
    result = calculate_rmd(500_000, 75, 0.0, 108_000)
    assert result.rmd == pytest.approx(20_325.20, abs=0.01)
    assert result.qcd == 0.0
    assert result.taxable == pytest.approx(result.rmd)
    assert result.ira_balance == pytest.approx(500_000 - result.rmd)


def test_rmd_start_age_by_birth_year():
    assert get_rmd_age(1951) == 73
    assert get_rmd_age(1959) == 73
    assert get_rmd_age(1960) == 75
    assert get_rmd_age(1975) == 75


def test_rmd_factor_falls_back_outside_table():
    assert get_rmd_factor(73) == 26.5
    assert get_rmd_factor(100) == 6.4
    assert get_rmd_factor(104) == FALLBACK_RMD_FACTOR


def test_full_qcd_makes_rmd_tax_free():
    result = calculate_rmd(500_000, 75, 100.0, 108_000)
    assert result.qcd == pytest.approx(result.rmd)
    assert result.taxable == 0.0
    assert result.total_ira_out == pytest.approx(result.rmd)


def test_qcd_capped_by_annual_limit():
    result = calculate_rmd(5_000_000, 75, 100.0, 108_000)
    assert result.qcd == 108_000
    assert result.taxable == pytest.approx(result.rmd - 108_000)
    assert result.total_ira_out == pytest.approx(result.rmd)


def test_qcd_never_exceeds_rmd_limit_or_balance():
    for balance in (0.0, 1_000.0, 250_000.0, 3_000_000.0):
        for pct in (0.0, 40.0, 100.0):
            result = calculate_rmd(balance, 80, pct, 108_000)
            assert result.qcd <= result.rmd + 1e-9
            assert result.qcd <= 108_000
            assert result.qcd <= balance
            assert result.ira_balance >= 0.0


def test_negative_balance_is_clamped():
    result = calculate_rmd(-100.0, 75, 50.0, 108_000)
    assert result.rmd == 0.0
    assert result.ira_balance == 0.0


def test_qcd_limit_indexed_from_base_year():
    assert get_qcd_limit(2025, 2.5) == pytest.approx(108_000)
    assert get_qcd_limit(2027, 2.0) == pytest.approx(108_000 * 1.02 ** 2)
