# engine/simulator.py

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from models import FilingStatus, ScenarioRow, TaxInputs
from config.planning_assumptions import medicare_start_age

from engine.income_calculator import calculate_contributions, calculate_salary_income, calculate_ss_benefit
from engine.life_expectancy import first_spouse_death_year
from engine.rmd_tables import calculate_rmd, get_qcd_limit, get_rmd_age
from engine.roth_optimizer import optimal_roth_conversion
from engine.tax_engine import YearIncome, compute_year_metrics

logger = logging.getLogger(__name__)


@dataclass
class ScenarioState:
    """Running account balances for one scenario run. Never shared between runs."""
    ira_balance: float
    roth_balance: float


@dataclass(frozen=True)
class ScenarioPlan:
    """Per-run constants, fixed before the first simulated year."""
    apply_conversions: bool
    conversion_stop_year: int
    first_death_year: Optional[int]
    medicare_start_year: int


def effective_medicare_start_year(inputs: TaxInputs) -> int:
    """Explicit start year, else the later of retirement and the primary turning 65."""
    if inputs.medicare_start_year > 0:
        return inputs.medicare_start_year
    age_65_year = inputs.birth_year + medicare_start_age if inputs.birth_year > 0 else 0
    return max(inputs.retirement_year, age_65_year)


def household_status(inputs: TaxInputs, year: int, first_death_year: Optional[int]) -> Tuple[bool, FilingStatus, int]:
    """
    Returns (after_first_death, filing status, Medicare enrollees) for the year.
    Once past the first death year the household files single for good.
    """
    after_first_death = first_death_year is not None and year > first_death_year
    if not after_first_death:
        return False, inputs.filing, inputs.medicare_enrollees
    return True, "single", 1 if inputs.medicare_enrollees == 2 else inputs.medicare_enrollees


# =========================================================================
# 1. YEAR SIMULATOR
# =========================================================================
def simulate_year(inputs: TaxInputs, state: ScenarioState, year: int, plan: ScenarioPlan) -> ScenarioRow:
    """
    Advances the balances in `state` by one year and returns that year's row.
    """
    age = year - inputs.birth_year if inputs.birth_year > 0 else 0
    growth = 1 + inputs.portfolio_growth_pct / 100

    # --- STEP 1: Household status ---
    after_first_death, filing, medicare_enrollees = household_status(inputs, year, plan.first_death_year)

    # --- STEP 2: Pre-retirement contributions ---
    ira_contrib, roth_contrib = calculate_contributions(inputs, year)
    state.ira_balance += ira_contrib
    state.roth_balance += roth_contrib

    # --- STEP 3: Grow IRA ---
    state.ira_balance *= growth

    # --- STEP 4: RMD (net of QCDs) or voluntary withdrawal ---
    rmd = 0.0
    qcds = 0.0
    if inputs.birth_year > 0 and age >= get_rmd_age(inputs.birth_year):
        result = calculate_rmd(state.ira_balance, age, inputs.qcd_pct, get_qcd_limit(year, inputs.inflation_pct))
        rmd = result.rmd
        qcds = result.qcd
        ira_withdrawal = result.taxable
        state.ira_balance = result.ira_balance
    else:
        ira_withdrawal = min(max(0.0, inputs.ira_withdrawals), state.ira_balance)
        state.ira_balance = max(0.0, state.ira_balance - ira_withdrawal)

    ira_after_distributions = state.ira_balance

    # --- STEP 5 & 6: Wages and Social Security ---
    w2 = calculate_salary_income(inputs, year)
    ss = calculate_ss_benefit(inputs, year, after_first_death)

    income = YearIncome(
        w2=w2,
        ss=ss,
        ira_withdrawal=ira_withdrawal,
        interest_income=inputs.interest_income,
        dividend_income=inputs.dividend_income,
        cap_gains_dist=inputs.cap_gains_dist,
        stcg=inputs.stcg,
        ltcg=inputs.ltcg,
        other_income=inputs.other_income,
        qcds=0.0,   # already netted out of ira_withdrawal
        age=age,
        filing=filing,
    )

    def metrics_for(conversion: float):
        return compute_year_metrics(
            income,
            conversion,
            year,
            inputs.inflation_pct,
            medicare_enrollees,
            inputs.state_tax_rate,
            plan.medicare_start_year,
            inputs.state_retirement_exempt,
        )

    # --- STEP 7: Base metrics (no conversion) ---
    metrics = metrics_for(0.0)

    # --- STEP 8: Size and apply the Roth conversion ---
    roth_conversion = 0.0
    conversion_tax = 0.0
    if plan.apply_conversions and year < plan.conversion_stop_year:
        roth_conversion = optimal_roth_conversion(
            year=year,
            inflation_pct=inputs.inflation_pct,
            filing_status=filing,
            magi_base=metrics.magi,
            traditional_balance=state.ira_balance,
            target_tier=inputs.irmaa_target_tier,
        )
        converted = metrics_for(roth_conversion)
        conversion_tax = converted.total_tax - metrics.total_tax
        metrics = converted
        state.ira_balance = max(0.0, state.ira_balance - roth_conversion)

    # --- STEP 9: Roth grows tax-free; conversions land after growth ---
    state.roth_balance *= growth
    if plan.apply_conversions:
        state.roth_balance += roth_conversion
    state.roth_balance = max(0.0, state.roth_balance)

    # --- STEP 10: Emit row ---
    return ScenarioRow(
        year=year,
        age=age,
        filing=filing,
        medicare_enrollees=medicare_enrollees,
        w2=w2,
        ss=ss,
        rmd=rmd,
        ira_withdrawal=ira_withdrawal,
        qcds_actual=qcds,
        taxable_ss=metrics.taxable_ss,
        magi=metrics.magi,
        federal_tax=metrics.federal_tax,
        ltcg_tax=metrics.ltcg_tax,
        state_tax=metrics.state_tax,
        total_tax=metrics.total_tax,
        effective_rate_pct=metrics.effective_rate_pct,
        irmaa_annual=metrics.irmaa_annual,
        total_cost=metrics.total_cost,
        ira_balance_after_distributions=ira_after_distributions,
        roth_conversion=roth_conversion,
        conversion_tax=conversion_tax,
        ira_balance_end=state.ira_balance,
        roth_balance_end=state.roth_balance,
    )


# =========================================================================
# 2. SCENARIO RUNNER
# =========================================================================
class ScenarioRunner:
    """
    Runs one scenario (baseline or optimized) across the full horizon.

    The first-death year, Medicare start year, and horizon are fixed at
    construction; each run() starts from the inputs' opening balances.
    """
    def __init__(self, inputs: TaxInputs, projection_years: int, apply_conversions: bool, conversion_stop_year: int):
        self.inputs = inputs
        self.projection_years = projection_years
        self.plan = ScenarioPlan(
            apply_conversions=apply_conversions,
            conversion_stop_year=conversion_stop_year,
            first_death_year=first_spouse_death_year(inputs),
            medicare_start_year=effective_medicare_start_year(inputs),
        )

    @property
    def name(self) -> str:
        return "optimized" if self.plan.apply_conversions else "baseline"

    def run(self) -> Tuple[ScenarioRow, ...]:
        logger.debug(
            "Running %s scenario: %d years from %d, first death year %s",
            self.name, self.projection_years, self.inputs.start_year, self.plan.first_death_year,
        )

        state = ScenarioState(
            ira_balance=max(0.0, self.inputs.ira_balance),
            roth_balance=max(0.0, self.inputs.roth_balance),
        )

        rows: List[ScenarioRow] = []
        for i in range(self.projection_years):
            rows.append(simulate_year(self.inputs, state, self.inputs.start_year + i, self.plan))

        return tuple(rows)
