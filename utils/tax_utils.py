# utils/tax_utils.py
import numpy as np
from typing import List, Tuple, Dict

from models import FilingStatus

BASE_YEAR = 2025          # Base year for brackets, standard deduction, LTCG thresholds, QCD limit
IRMAA_BASE_YEAR = 2026    # Base year for the IRMAA reference table and conversion ceilings

# =============================================================================
# 1. Federal Ordinary Income Tax Brackets (2025)
# =============================================================================
# (ceiling, marginal rate). The last ceiling is np.inf.

ORDINARY_BRACKETS_2025: Dict[FilingStatus, List[Tuple[float, float]]] = {
    "single": [
        (11_925, 0.10), (48_475, 0.12), (103_350, 0.22),
        (197_300, 0.24), (250_525, 0.32), (626_350, 0.35), (np.inf, 0.37),
    ],
    "joint": [
        (23_850, 0.10), (96_950, 0.12), (206_700, 0.22),
        (394_600, 0.24), (501_050, 0.32), (751_600, 0.35), (np.inf, 0.37),
    ],
}

# =============================================================================
# 2. Federal Preferential Income Thresholds (Capital Gains / QDivs)
# =============================================================================
LTCG_0_PERCENT_CEILING_2025: Dict[FilingStatus, float] = {"single": 48_350, "joint": 96_700}
LTCG_15_PERCENT_CEILING_2025: Dict[FilingStatus, float] = {"single": 533_400, "joint": 600_050}

# =============================================================================
# 3. Federal Deduction (Indexed)
# =============================================================================
STANDARD_DEDUCTION_2025: Dict[FilingStatus, float] = {"single": 15_000, "joint": 30_000}

# =============================================================================
# 4. Fixed / Non-Indexed Federal Tax Parameters
# =============================================================================

# Social Security provisional income thresholds (statutory, frozen since 1984)
# (first threshold, second threshold, carryover from the 50% band)
SS_TAX_THRESHOLDS: Dict[FilingStatus, Tuple[float, float, float]] = {
    "single": (25_000, 34_000, 4_500),
    "joint": (32_000, 44_000, 6_000),
}

# =============================================================================
# 5. Charitable / Conversion Planning Constants
# =============================================================================

# IRS QCD annual limit, indexed forward from BASE_YEAR
QCD_ANNUAL_LIMIT_2025 = 108_000

# Max MAGI before the *next* IRMAA tier kicks in, by target tier (0, 1, 2).
# Scaled forward from IRMAA_BASE_YEAR.
IRMAA_CONVERSION_CEILINGS_2026: Dict[FilingStatus, Tuple[float, float, float]] = {
    "single": (109_000, 137_000, 171_000),
    "joint": (218_000, 274_000, 342_000),
}


# =============================================================================
# 6. Core Utility Functions
# =============================================================================

def get_inflation_factor(year: int, inflation_pct: float, base_year: int = BASE_YEAR) -> float:
    """
    Cumulative inflation multiplier from base_year to year.

    Years before base_year deflate (factor < 1); nothing is floored.
    """
    return (1 + inflation_pct / 100) ** (year - base_year)


def get_indexed_ordinary_brackets(filing_status: FilingStatus, inflation_factor: float) -> List[Tuple[float, float]]:
    """Returns the ordinary brackets for filing_status with each ceiling scaled by inflation_factor."""
    return [
        (ceiling * inflation_factor if np.isfinite(ceiling) else np.inf, rate)
        for ceiling, rate in ORDINARY_BRACKETS_2025[filing_status]
    ]


def get_indexed_federal_constants(year: int, inflation_pct: float, filing_status: FilingStatus) -> Dict[str, object]:
    """
    Returns a dictionary of the indexed federal values used by the tax engine
    for the given simulation year.
    """
    inflation_factor = get_inflation_factor(year, inflation_pct)

    return {
        "inflation_factor": inflation_factor,
        "std_deduction": STANDARD_DEDUCTION_2025[filing_status] * inflation_factor,
    }
