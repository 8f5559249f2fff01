# utils/ss_utils.py
from typing import Tuple


def get_full_retirement_age(birth_year: int) -> Tuple[int, int]:
    """
    Full Retirement Age as (years, months) by birth year, per SSA rules.
    """
    if birth_year <= 1937:
        return 65, 0
    elif 1938 <= birth_year <= 1942:
        # 65 plus 2 months for each year after 1937
        return 65, (birth_year - 1937) * 2
    elif 1943 <= birth_year <= 1954:
        return 66, 0
    elif 1955 <= birth_year <= 1959:
        # 66 plus 2 months for each year after 1954
        return 66, (birth_year - 1954) * 2
    else:  # 1960 and later
        return 67, 0


def fra_to_string(fra: Tuple[int, int]) -> str:
    years, months = fra
    return f"{years} yrs {months} mo" if months > 0 else f"{years}"
