from dataclasses import fields, replace

from models import ScenarioRow, TaxInputs

# Married couple, both past Medicare age, primary reaches RMD age in 2028.
BASE_INPUTS = TaxInputs(
    start_year=2026,
    filing="joint",
    retirement_year=2026,
    interest_income=5_000,
    dividend_income=8_000,
    ira_balance=1_500_000,
    roth_balance=100_000,
    portfolio_growth_pct=5.0,
    inflation_pct=2.5,
    birth_year=1955,
    sex="male",
    ss_start_year=2022,
    ss_payments_per_year=36_000,
    spouse_birth_year=1957,
    spouse_sex="female",
    spouse_ss_start_year=2024,
    spouse_ss_payments_per_year=24_000,
    projection_years=20,
    medicare_enrollees=2,
)


def make_inputs(**overrides) -> TaxInputs:
    return replace(BASE_INPUTS, **overrides)


def make_row(year: int, total_cost: float = 0.0, **overrides) -> ScenarioRow:
    values = {f.name: 0.0 for f in fields(ScenarioRow)}
    values.update(year=year, age=70, filing="joint", medicare_enrollees=2, total_cost=total_cost)
    values.update(overrides)
    return ScenarioRow(**values)
