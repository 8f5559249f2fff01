# engine/tax_engine.py
"""
U.S. federal/state income tax, Social Security taxability, and Medicare
IRMAA surcharge calculator for one household-year.

Brackets, standard deduction, and LTCG thresholds are indexed from
utils.tax_utils.BASE_YEAR. SS provisional thresholds are not indexed.
"""
from dataclasses import dataclass

from models import FilingStatus
from engine.retirement_data import get_year_data
from utils.tax_utils import (
    IRMAA_BASE_YEAR,
    SS_TAX_THRESHOLDS,
    get_indexed_federal_constants,
    get_indexed_ordinary_brackets,
    get_inflation_factor,
    LTCG_0_PERCENT_CEILING_2025,
    LTCG_15_PERCENT_CEILING_2025,
)


@dataclass(frozen=True)
class YearIncome:
    """Income for one year before any Roth conversion."""
    w2: float
    ss: float
    ira_withdrawal: float      # taxable IRA distribution (RMD net of QCD, or voluntary)
    interest_income: float
    dividend_income: float
    cap_gains_dist: float
    stcg: float
    ltcg: float
    other_income: float
    qcds: float                # offset against income; 0 when already netted out of ira_withdrawal
    age: int
    filing: FilingStatus


@dataclass(frozen=True)
class YearMetrics:
    taxable_ss: float
    magi: float
    federal_tax: float
    ltcg_tax: float
    state_tax: float
    total_tax: float
    effective_rate_pct: float
    irmaa_annual: float
    total_cost: float


# --- 1. Calculators ---

def calc_ordinary_tax(taxable_income: float, filing: FilingStatus, inflation_factor: float) -> float:
    """Progressive tax on ordinary income using brackets scaled by inflation_factor."""
    tax = 0.0
    prev = 0.0
    for ceiling, rate in get_indexed_ordinary_brackets(filing, inflation_factor):
        if taxable_income <= prev:
            break
        tax += (min(taxable_income, ceiling) - prev) * rate
        prev = ceiling
    return tax


def calc_ltcg_tax(ltcg_amount: float, taxable_income: float, filing: FilingStatus, inflation_factor: float) -> float:
    """
    Tax on preferential income (qualified dividends, LTCG, CG distributions).

    Ordinary income fills the brackets first and preferential income stacks
    on top of it across the 0% / 15% / 20% bands.
    """
    if ltcg_amount <= 0:
        return 0.0

    ceiling_0 = LTCG_0_PERCENT_CEILING_2025[filing] * inflation_factor
    ceiling_15 = LTCG_15_PERCENT_CEILING_2025[filing] * inflation_factor

    # The standard deduction may leave less taxable income than gross preferential income
    effective_ltcg = min(ltcg_amount, taxable_income)
    ordinary_income = max(0.0, taxable_income - effective_ltcg)

    in_0 = max(0.0, min(effective_ltcg, ceiling_0 - ordinary_income))
    in_15 = max(0.0, min(effective_ltcg - in_0, ceiling_15 - max(ordinary_income, ceiling_0)))
    in_20 = max(0.0, effective_ltcg - in_0 - in_15)

    return in_15 * 0.15 + in_20 * 0.20


def calc_taxable_ss(ss: float, provisional: float, filing: FilingStatus) -> float:
    """IRS Worksheet 1 taxable Social Security with statutory (non-indexed) thresholds."""
    first, second, carryover = SS_TAX_THRESHOLDS[filing]

    if provisional <= first:
        return 0.0
    if provisional <= second:
        return min(0.5 * ss, 0.5 * (provisional - first))
    return min(0.85 * ss, 0.85 * (provisional - second) + carryover)


def lookup_irmaa(magi: float, filing: FilingStatus, year: int, inflation_pct: float, medicare_enrollees: int) -> float:
    """
    Annual IRMAA surcharge above the base Part B premium for the household.

    Always reads the IRMAA_BASE_YEAR reference brackets and inflates their
    floors from that year. Returns 0 below Tier 1.
    """
    brackets = get_year_data(IRMAA_BASE_YEAR).irmaa_brackets(filing)
    base_premium = brackets[0].part_b_premium
    inflation_factor = get_inflation_factor(year, inflation_pct, IRMAA_BASE_YEAR)

    bracket = brackets[0]
    for candidate in brackets:
        if magi >= candidate.income_floor * inflation_factor:
            bracket = candidate
        else:
            break

    if bracket is brackets[0]:
        return 0.0

    monthly = bracket.part_b_premium - base_premium + bracket.part_d_surcharge
    return monthly * 12 * inflation_factor * medicare_enrollees


# --- 2. Main Orchestrator Function ---

def compute_year_metrics(
    income: YearIncome,
    roth_conversion: float,
    year: int,
    inflation_pct: float,
    medicare_enrollees: int,
    state_tax_rate: float,
    medicare_start_year: int,
    state_retirement_exempt: bool = False,
) -> YearMetrics:
    """
    Calculates all annual taxes (federal ordinary, LTCG, state) and the
    Medicare IRMAA surcharge for one year with the given Roth conversion.
    """
    constants = get_indexed_federal_constants(year, inflation_pct, income.filing)
    inflation_factor = constants["inflation_factor"]

    other_income = (
        income.w2 + income.interest_income + income.dividend_income + income.cap_gains_dist
        + income.stcg + income.ltcg + income.other_income + income.ira_withdrawal
        + roth_conversion - income.qcds
    )

    # 1. Social Security taxability (provisional income includes the conversion)
    provisional = other_income + 0.5 * income.ss
    taxable_ss = calc_taxable_ss(income.ss, provisional, income.filing)

    magi = other_income + taxable_ss

    # 2. Federal Taxable Income
    taxable_income = max(0.0, magi - constants["std_deduction"])

    # Preferential: qualified dividends, LTCG, CG distributions.
    # Ordinary: W2, interest, STCG, other, IRA withdrawals, taxable SS, conversion.
    ltcg_amount = income.dividend_income + income.ltcg + income.cap_gains_dist
    ordinary_taxable = max(0.0, taxable_income - ltcg_amount)

    federal_tax = calc_ordinary_tax(ordinary_taxable, income.filing, inflation_factor)
    ltcg_tax = calc_ltcg_tax(ltcg_amount, taxable_income, income.filing, inflation_factor)

    # 3. State Income Tax (MAGI as the proxy base)
    state_base = magi
    if state_retirement_exempt:
        state_base = max(0.0, magi - taxable_ss - income.ira_withdrawal - roth_conversion)
    state_tax = state_base * state_tax_rate

    total_tax = federal_tax + ltcg_tax + state_tax
    effective_rate_pct = total_tax / max(1.0, magi) * 100

    # 4. Medicare IRMAA Surcharge
    irmaa_annual = 0.0
    if income.age >= 65 and year >= medicare_start_year:
        irmaa_annual = lookup_irmaa(magi, income.filing, year, inflation_pct, medicare_enrollees)

    return YearMetrics(
        taxable_ss=taxable_ss,
        magi=magi,
        federal_tax=federal_tax,
        ltcg_tax=ltcg_tax,
        state_tax=state_tax,
        total_tax=total_tax,
        effective_rate_pct=effective_rate_pct,
        irmaa_annual=irmaa_annual,
        total_cost=total_tax + irmaa_annual,
    )
