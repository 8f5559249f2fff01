# tax_planning.py
#
# Conversion planning targets: the IRMAA ceiling for the chosen tier and the
# year conversions stop.
#

from models import ConversionWindow, FilingStatus, IrmaaTargetTier, TaxInputs
from config.planning_assumptions import conversion_stop_never
from engine.rmd_tables import get_rmd_age
from utils.tax_utils import IRMAA_BASE_YEAR, IRMAA_CONVERSION_CEILINGS_2026, get_inflation_factor


def get_irmaa_conversion_ceiling(
    year: int,
    inflation_pct: float,
    filing_status: FilingStatus,
    target_tier: IrmaaTargetTier,
) -> float:
    """
    Max MAGI that stays inside the target IRMAA tier for the year, scaled
    forward from the ceilings' base year.
    """
    base_ceiling = IRMAA_CONVERSION_CEILINGS_2026[filing_status][target_tier]
    return base_ceiling * get_inflation_factor(year, inflation_pct, IRMAA_BASE_YEAR)

# --------------------------------------------------

def get_conversion_stop_year(
    conversion_window: ConversionWindow,
    birth_year: int,
    ss_start_year: int,
) -> int:
    """
    First year in which conversions are NOT applied for a window policy.

    - "always": never stops
    - "before-ss": the primary's Social Security start year
    - "before-rmd": the year the primary reaches RMD age
    """
    if conversion_window == "before-ss":
        return ss_start_year if ss_start_year > 0 else conversion_stop_never
    if conversion_window == "before-rmd":
        return birth_year + get_rmd_age(birth_year) if birth_year > 0 else conversion_stop_never
    return conversion_stop_never


def resolve_conversion_stop_year(inputs: TaxInputs) -> int:
    """An explicit stop year on the inputs wins over the window policy."""
    if inputs.conversion_stop_year > 0:
        return inputs.conversion_stop_year
    return get_conversion_stop_year(inputs.conversion_window, inputs.birth_year, inputs.ss_start_year)
