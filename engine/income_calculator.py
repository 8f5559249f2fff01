# income_calculator.py
#
# Manages yearly income and contribution amounts (Salary, Contributions, Social Security)
#

from typing import Tuple

from models import TaxInputs


def calculate_contributions(inputs: TaxInputs, year: int) -> Tuple[float, float]:
    """
    Pre-retirement contributions for both spouses.

    Returns:
        tuple[float, float]: (ira_contributions, roth_contributions). Deferrals
        and employer match go to the IRA; Roth contributions to the Roth.
        Both are zero from retirement_year onward.
    """
    if year >= inputs.retirement_year:
        return 0.0, 0.0

    ira_contributions = (
        inputs.annual_deferred_contrib + inputs.annual_employer_match
        + inputs.spouse_annual_deferred_contrib + inputs.spouse_annual_employer_match
    )
    roth_contributions = inputs.annual_roth_contrib + inputs.spouse_annual_roth_contrib
    return ira_contributions, roth_contributions


def calculate_salary_income(inputs: TaxInputs, year: int) -> float:
    """
    Taxable W2 income for the year: wages less pre-tax deferrals while
    working, zero after retirement. Roth contributions and employer match
    do not reduce taxable wages.
    """
    if year >= inputs.retirement_year:
        return 0.0

    deferred = inputs.annual_deferred_contrib + inputs.spouse_annual_deferred_contrib
    return max(0.0, inputs.w2_income - deferred)


def _cola_benefit(payments_per_year: float, start_year: int, year: int, inflation_pct: float) -> float:
    """One benefit stream grown by COLA from its own start year; 0 before it starts."""
    if payments_per_year <= 0 or start_year <= 0 or year < start_year:
        return 0.0
    return payments_per_year * (1 + inflation_pct / 100) ** (year - start_year)


def calculate_ss_benefit(inputs: TaxInputs, year: int, after_first_death: bool) -> float:
    """
    Household Social Security for the year.

    Before the first spouse's death both streams are paid. Afterwards the
    survivor keeps the larger of the two COLA-adjusted amounts.
    """
    primary_ss = _cola_benefit(inputs.ss_payments_per_year, inputs.ss_start_year, year, inputs.inflation_pct)
    spouse_ss = _cola_benefit(
        inputs.spouse_ss_payments_per_year, inputs.spouse_ss_start_year, year, inputs.inflation_pct
    )

    if after_first_death:
        return max(primary_ss, spouse_ss)
    return primary_ss + spouse_ss
