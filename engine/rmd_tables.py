# engine/rmd_tables.py

"""
RMD factor lookup and the RMD / QCD split:
- 2022+ Uniform Lifetime Table (ages 73–100)
- SECURE 2.0 start ages (73 → 75)
"""

from dataclasses import dataclass
from typing import Dict

from utils.tax_utils import QCD_ANNUAL_LIMIT_2025, get_inflation_factor

# =============================================================================
# IRS UNIFORM LIFETIME TABLE (AGES 73–100)
# =============================================================================
UNIFORM_LIFETIME_TABLE: Dict[int, float] = {
    73: 26.5, 74: 25.5, 75: 24.6, 76: 23.7, 77: 22.9,
    78: 22.0, 79: 21.1, 80: 20.2, 81: 19.4, 82: 18.5,
    83: 17.7, 84: 16.8, 85: 16.0, 86: 15.2, 87: 14.4,
    88: 13.7, 89: 12.9, 90: 12.2, 91: 11.5, 92: 10.8,
    93: 10.1, 94: 9.5, 95: 8.9, 96: 8.4, 97: 7.8,
    98: 7.3, 99: 6.8, 100: 6.4,
}

# Divisor for any age missing from the table
FALLBACK_RMD_FACTOR = 8.9


@dataclass(frozen=True)
class RmdResult:
    rmd: float                # required distribution
    qcd: float                # charitable portion, sent directly from the IRA
    total_ira_out: float      # amount removed from the IRA
    taxable: float            # portion of the RMD not covered by the QCD
    ira_balance: float        # IRA balance after the distribution


# =============================================================================
# MAIN FUNCTIONS
# =============================================================================

def get_rmd_age(birth_year: int) -> int:
    """
    SECURE 2.0 RMD start age by birth year.
    Born 1951–1959 → 73  |  Born 1960+ → 75
    """
    if birth_year >= 1960:
        return 75
    return 73


def get_rmd_factor(age: int) -> float:
    """Returns the Uniform Lifetime divisor for the given age."""
    return UNIFORM_LIFETIME_TABLE.get(age, FALLBACK_RMD_FACTOR)


def get_qcd_limit(year: int, inflation_pct: float) -> float:
    """IRS annual QCD limit, indexed forward from its base year."""
    return QCD_ANNUAL_LIMIT_2025 * get_inflation_factor(year, inflation_pct)


def calculate_rmd(ira_balance: float, age: int, qcd_pct: float, qcd_limit: float) -> RmdResult:
    """
    Computes the RMD on the (post-growth) IRA balance and nets out QCDs.

    Args:
        ira_balance: IRA balance before this year's distribution.
        age: Owner's age in the distribution year.
        qcd_pct: Percentage (0–100) of the RMD to give as a QCD.
        qcd_limit: Inflation-indexed annual QCD limit for the year.

    Returns:
        RmdResult. The QCD may exceed the RMD up to the limit; the excess
        still leaves the IRA tax-free. Only RMD − QCD is taxable.
    """
    balance = max(0.0, ira_balance)
    rmd = balance / get_rmd_factor(age)

    qcd = min(rmd * qcd_pct / 100, qcd_limit, balance)
    total_ira_out = min(balance, max(rmd, qcd))

    return RmdResult(
        rmd=rmd,
        qcd=qcd,
        total_ira_out=total_ira_out,
        taxable=max(0.0, rmd - qcd),
        ira_balance=max(0.0, balance - total_ira_out),
    )


__all__ = ["RmdResult", "get_rmd_age", "get_rmd_factor", "get_qcd_limit", "calculate_rmd"]
