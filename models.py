# models.py
from dataclasses import dataclass
from typing import Literal, Optional, Tuple

from config.planning_assumptions import conversion_stop_never, default_inflation_pct, default_portfolio_growth_pct

FilingStatus = Literal["single", "joint"]
Sex = Literal["male", "female"]
IrmaaTargetTier = Literal[0, 1, 2]
ConversionWindow = Literal["always", "before-ss", "before-rmd"]

FILING_STATUSES: Tuple[FilingStatus, ...] = ("single", "joint")
SEXES: Tuple[Sex, ...] = ("male", "female")
IRMAA_TARGET_TIERS: Tuple[IrmaaTargetTier, ...] = (0, 1, 2)
CONVERSION_WINDOWS: Tuple[ConversionWindow, ...] = ("always", "before-ss", "before-rmd")


@dataclass(frozen=True)
class TaxInputs:
    # Core
    start_year: int
    filing: FilingStatus
    retirement_year: int

    # Income (annual, today's dollars)
    w2_income: float = 0.0
    interest_income: float = 0.0
    dividend_income: float = 0.0      # qualified dividends -> LTCG rates
    cap_gains_dist: float = 0.0
    stcg: float = 0.0
    ltcg: float = 0.0
    other_income: float = 0.0         # pension, rental, etc. -> ordinary rates

    # Accounts
    ira_balance: float = 0.0
    ira_withdrawals: float = 0.0      # voluntary, fully taxable, before RMD age
    qcd_pct: float = 0.0              # % of RMD given as QCD (0-100)
    roth_balance: float = 0.0

    # Market
    portfolio_growth_pct: float = default_portfolio_growth_pct
    inflation_pct: float = default_inflation_pct

    # Person 1 (primary); birth_year 0 means unknown
    birth_year: int = 0
    sex: Optional[Sex] = None
    ss_start_year: int = 0
    ss_payments_per_year: float = 0.0
    plan_to_age: int = 0              # 0 = use SSA life table

    # Person 2 (spouse); spouse_birth_year 0 means no spouse
    spouse_birth_year: int = 0
    spouse_sex: Optional[Sex] = None
    spouse_ss_start_year: int = 0
    spouse_ss_payments_per_year: float = 0.0
    spouse_plan_to_age: int = 0

    # Strategy
    projection_years: int = 0         # 0 = size from life expectancy
    irmaa_target_tier: IrmaaTargetTier = 0
    conversion_window: ConversionWindow = "always"
    conversion_stop_year: int = 0     # first year with NO conversion; 0 = derive from window

    # Medicare
    medicare_enrollees: int = 1       # 1 or 2
    medicare_start_year: int = 0      # 0 = max(retirement_year, birth_year + 65)

    # State
    state_tax_rate: float = 0.0       # effective rate (0-1)
    state_retirement_exempt: bool = False

    # Pre-retirement contributions, applied each year before retirement_year
    annual_deferred_contrib: float = 0.0
    annual_roth_contrib: float = 0.0
    annual_employer_match: float = 0.0
    spouse_annual_deferred_contrib: float = 0.0
    spouse_annual_roth_contrib: float = 0.0
    spouse_annual_employer_match: float = 0.0


@dataclass(frozen=True)
class ScenarioRow:
    year: int
    age: int
    filing: FilingStatus              # effective filing status for this year
    medicare_enrollees: int

    # Income actually used
    w2: float
    ss: float
    rmd: float
    ira_withdrawal: float             # taxable IRA distribution
    qcds_actual: float
    taxable_ss: float
    magi: float

    # Taxes and surcharges
    federal_tax: float
    ltcg_tax: float
    state_tax: float
    total_tax: float
    effective_rate_pct: float
    irmaa_annual: float
    total_cost: float

    # Conversion
    ira_balance_after_distributions: float
    roth_conversion: float
    conversion_tax: float

    # Ending balances
    ira_balance_end: float
    roth_balance_end: float


@dataclass(frozen=True)
class ProjectionSummary:
    projection_years: int
    baseline_total_cost: float
    optimized_total_cost: float
    lifetime_savings: float
    total_roth_converted: float
    baseline_total_tax: float
    optimized_total_tax: float
    baseline_total_irmaa: float
    optimized_total_irmaa: float
    first_spouse_death_year: Optional[int]
    total_qcds: float
    baseline_final_ira_balance: float
    optimized_final_ira_balance: float
    baseline_final_roth_balance: float
    optimized_final_roth_balance: float
    heir_annual_ira_rmd_baseline: float
    heir_annual_ira_rmd_optimized: float
    breakeven_year: Optional[int]
    baseline_ira_depletion_year: Optional[int]
    optimized_ira_depletion_year: Optional[int]


@dataclass(frozen=True)
class ProjectionResult:
    baseline_rows: Tuple[ScenarioRow, ...]
    optimized_rows: Tuple[ScenarioRow, ...]
    summary: ProjectionSummary
    conversion_stop_year: int = conversion_stop_never
