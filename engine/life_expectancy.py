# engine/life_expectancy.py

"""
Remaining life expectancy (SSA 2021 Period Life Table, sex-specific),
projection horizon sizing, and first-spouse-death timing.
"""

import math
from typing import Dict, Optional

from config.planning_assumptions import min_projection_years, default_remaining_years
from models import Sex, TaxInputs

# =============================================================================
# SSA 2021 PERIOD LIFE TABLE: REMAINING YEARS AT AGE (50–90)
# =============================================================================
LE_MALE: Dict[int, float] = {
    50: 28.3, 51: 27.5, 52: 26.7, 53: 25.9, 54: 25.1,
    55: 24.3, 56: 23.5, 57: 22.8, 58: 22.0, 59: 21.2,
    60: 20.5, 61: 19.7, 62: 19.0, 63: 18.2, 64: 17.5,
    65: 16.8, 66: 16.1, 67: 15.4, 68: 14.7, 69: 14.0,
    70: 13.4, 71: 12.7, 72: 12.1, 73: 11.5, 74: 10.9,
    75: 10.3, 76:  9.7, 77:  9.2, 78:  8.7, 79:  8.1,
    80:  7.7, 81:  7.2, 82:  6.7, 83:  6.3, 84:  5.9,
    85:  5.5, 86:  5.1, 87:  4.7, 88:  4.4, 89:  4.1,
    90:  3.8,
}

LE_FEMALE: Dict[int, float] = {
    50: 32.7, 51: 31.9, 52: 31.0, 53: 30.2, 54: 29.4,
    55: 28.5, 56: 27.7, 57: 26.9, 58: 26.1, 59: 25.3,
    60: 24.5, 61: 23.7, 62: 22.9, 63: 22.1, 64: 21.3,
    65: 20.6, 66: 19.8, 67: 19.0, 68: 18.3, 69: 17.5,
    70: 16.8, 71: 16.1, 72: 15.4, 73: 14.7, 74: 14.0,
    75: 13.3, 76: 12.7, 77: 12.0, 78: 11.4, 79: 10.8,
    80: 10.2, 81:  9.6, 82:  9.1, 83:  8.5, 84:  8.0,
    85:  7.5, 86:  7.0, 87:  6.6, 88:  6.1, 89:  5.7,
    90:  5.3,
}

MIN_TABLE_AGE = 50
MAX_TABLE_AGE = 90


def round_half_up(value: float) -> int:
    """Rounds .5 away from zero for positive values (round() would bank to even)."""
    return int(math.floor(value + 0.5))


def remaining_life_expectancy(birth_year: int, start_year: int, sex: Optional[Sex] = None) -> float:
    """
    Remaining years at the person's age in start_year. Ages outside the
    table are clamped to its 50–90 range; unknown sex uses the male table.
    """
    age = start_year - birth_year
    clamped = min(MAX_TABLE_AGE, max(MIN_TABLE_AGE, age))
    table = LE_FEMALE if sex == "female" else LE_MALE
    return table[clamped]


def expected_death_year(birth_year: int, start_year: int, sex: Optional[Sex] = None) -> int:
    return start_year + round_half_up(remaining_life_expectancy(birth_year, start_year, sex))


def expected_age(birth_year: int, start_year: int, sex: Optional[Sex] = None) -> int:
    """Returns the SSA-table expected age at death (current age + remaining years)."""
    current_age = start_year - birth_year
    return current_age + round_half_up(remaining_life_expectancy(birth_year, start_year, sex))


def compute_projection_years(
    primary_birth_year: int,
    spouse_birth_year: Optional[int],
    start_year: int,
    primary_sex: Optional[Sex] = None,
    spouse_sex: Optional[Sex] = None,
    primary_plan_to_age: int = 0,
    spouse_plan_to_age: int = 0,
) -> int:
    """
    Number of years to project: through the later-surviving spouse's
    expected end year. A positive plan-to-age overrides the SSA table for
    that person. Never fewer than min_projection_years.
    """
    if primary_birth_year > 0:
        if primary_plan_to_age > 0:
            primary_remaining = primary_plan_to_age - (start_year - primary_birth_year)
        else:
            primary_remaining = remaining_life_expectancy(primary_birth_year, start_year, primary_sex)
    else:
        primary_remaining = default_remaining_years

    spouse_remaining = 0.0
    if spouse_birth_year and spouse_birth_year > 0:
        if spouse_plan_to_age > 0:
            spouse_remaining = spouse_plan_to_age - (start_year - spouse_birth_year)
        else:
            spouse_remaining = remaining_life_expectancy(spouse_birth_year, start_year, spouse_sex)

    return max(min_projection_years, round_half_up(max(primary_remaining, spouse_remaining)))


def first_spouse_death_year(inputs: TaxInputs) -> Optional[int]:
    """
    Year the first spouse is expected to die, or None when the household
    is not filing jointly or either birth year is unknown.

    After this year the household files single with the survivor's benefit.
    """
    if inputs.filing != "joint" or inputs.birth_year <= 0 or inputs.spouse_birth_year <= 0:
        return None

    if inputs.plan_to_age > 0:
        primary_death = inputs.birth_year + inputs.plan_to_age
    else:
        primary_death = expected_death_year(inputs.birth_year, inputs.start_year, inputs.sex)

    if inputs.spouse_plan_to_age > 0:
        spouse_death = inputs.spouse_birth_year + inputs.spouse_plan_to_age
    else:
        spouse_death = expected_death_year(inputs.spouse_birth_year, inputs.start_year, inputs.spouse_sex)

    return min(primary_death, spouse_death)
