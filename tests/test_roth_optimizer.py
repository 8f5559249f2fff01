import pytest

from engine.roth_optimizer import optimal_roth_conversion
from engine.tax_planning import (
    get_conversion_stop_year,
    get_irmaa_conversion_ceiling,
    resolve_conversion_stop_year,
)
from tests.helpers import make_inputs


def test_conversion_fills_to_one_dollar_under_ceiling():
    conversion = optimal_roth_conversion(2026, 2.5, "joint", 100_000, 1_000_000, 0)
    assert conversion == pytest.approx(218_000 - 100_000 - 1)


def test_conversion_bounded_by_ira_balance():
    assert optimal_roth_conversion(2026, 2.5, "joint", 100_000, 50_000, 0) == 50_000


def test_no_conversion_above_ceiling_or_without_balance():
    assert optimal_roth_conversion(2026, 2.5, "single", 150_000, 1_000_000, 0) == 0.0
    assert optimal_roth_conversion(2026, 2.5, "single", 50_000, 0.0, 0) == 0.0


def test_higher_tier_raises_ceiling():
    conversion = optimal_roth_conversion(2026, 2.5, "single", 50_000, 1_000_000, 2)
    assert conversion == pytest.approx(171_000 - 50_000 - 1)


def test_ceiling_inflates_from_its_base_year():
    assert get_irmaa_conversion_ceiling(2026, 3.0, "joint", 1) == pytest.approx(274_000)
    assert get_irmaa_conversion_ceiling(2028, 3.0, "joint", 1) == pytest.approx(274_000 * 1.03 ** 2)


def test_conversion_stop_year_by_window():
    assert get_conversion_stop_year("always", 1960, 2027) == 9999
    assert get_conversion_stop_year("before-ss", 1960, 2027) == 2027
    assert get_conversion_stop_year("before-ss", 1960, 0) == 9999
    assert get_conversion_stop_year("before-rmd", 1960, 2027) == 2035
    assert get_conversion_stop_year("before-rmd", 1955, 2027) == 2028
    assert get_conversion_stop_year("before-rmd", 0, 2027) == 9999


def test_explicit_stop_year_wins_over_window():
    inputs = make_inputs(conversion_window="before-rmd", conversion_stop_year=2030)
    assert resolve_conversion_stop_year(inputs) == 2030
    assert resolve_conversion_stop_year(make_inputs(conversion_window="before-rmd")) == 2028
