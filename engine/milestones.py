# engine/milestones.py

from dataclasses import dataclass
from typing import List, Optional

from config.planning_assumptions import medicare_start_age
from engine.rmd_tables import get_rmd_age
from utils.ss_utils import fra_to_string, get_full_retirement_age


@dataclass(frozen=True)
class Milestone:
    id: str
    label: str
    sublabel: str
    age: int
    year: Optional[int]


def calculate_milestones(birth_year: Optional[int]) -> List[Milestone]:
    """
    Age milestones for Social Security, Medicare, and RMDs. Years are None
    when the birth year is unknown.
    """
    known = birth_year is not None and birth_year > 0

    def year_at(age: int) -> Optional[int]:
        return birth_year + age if known else None

    fra = get_full_retirement_age(birth_year) if known else (67, 0)
    rmd_age = get_rmd_age(birth_year) if known else 73

    return [
        Milestone("ss-early", "SS Early", "Reduced benefits", 62, year_at(62)),
        Milestone("medicare", "Medicare", "Part A & B", medicare_start_age, year_at(medicare_start_age)),
        Milestone("ss-fra", "SS Full", f"Age {fra_to_string(fra)}", fra[0], year_at(fra[0])),
        Milestone("ss-max", "SS Maximum", "Delayed to 70", 70, year_at(70)),
        Milestone("rmd", "RMD Begins", "401k / IRA / QCD", rmd_age, year_at(rmd_age)),
    ]
