from engine import compute_projection_years, expected_age
from engine.life_expectancy import first_spouse_death_year, remaining_life_expectancy, round_half_up
from tests.helpers import make_inputs


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(16.8) == 17
    assert round_half_up(22.1) == 22


def test_horizon_uses_longer_lived_spouse():
    # Male 65 -> 16.8, female 63 -> 22.1
    assert compute_projection_years(1961, 1963, 2026, "male", "female") == 22


def test_horizon_floor_is_ten_years():
    assert compute_projection_years(1930, None, 2026, "male") == 10
    assert compute_projection_years(1961, 1963, 2026, primary_plan_to_age=66, spouse_plan_to_age=64) == 10


def test_horizon_plan_to_age_overrides_table():
    assert compute_projection_years(1961, 0, 2026, primary_plan_to_age=95) == 30


def test_horizon_defaults_without_birth_year():
    assert compute_projection_years(0, None, 2026) == 20


def test_table_clamps_ages_and_defaults_to_male():
    assert remaining_life_expectancy(1990, 2026) == remaining_life_expectancy(1976, 2026, "male")
    assert remaining_life_expectancy(1920, 2026, "female") == 5.3


def test_expected_age():
    assert expected_age(1961, 2026, "male") == 82
    assert expected_age(1961, 2026, "female") == 65 + 21


def test_first_spouse_death_year():
    inputs = make_inputs()
    # Male 71 -> 12.7 -> 2039; female 69 -> 17.5 -> 2044
    assert first_spouse_death_year(inputs) == 2039


def test_first_spouse_death_year_uses_plan_to_age():
    inputs = make_inputs(plan_to_age=100, spouse_plan_to_age=80)
    assert first_spouse_death_year(inputs) == 1957 + 80


def test_no_first_death_for_single_or_unknown_spouse():
    assert first_spouse_death_year(make_inputs(filing="single")) is None
    assert first_spouse_death_year(make_inputs(spouse_birth_year=0)) is None
