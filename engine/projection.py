# engine/projection.py
"""
Runs the baseline and Roth-conversion scenarios side by side and
aggregates the lifetime comparison.
"""
import logging
from dataclasses import asdict
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from models import ProjectionResult, ProjectionSummary, ScenarioRow, TaxInputs
from config.planning_assumptions import heir_drawdown_years
from engine.life_expectancy import compute_projection_years, first_spouse_death_year
from engine.simulator import ScenarioRunner
from engine.tax_planning import resolve_conversion_stop_year

logger = logging.getLogger(__name__)


def resolve_projection_years(inputs: TaxInputs) -> int:
    """Explicit horizon on the inputs, else sized from joint life expectancy."""
    if inputs.projection_years > 0:
        return inputs.projection_years
    return compute_projection_years(
        inputs.birth_year,
        inputs.spouse_birth_year,
        inputs.start_year,
        inputs.sex,
        inputs.spouse_sex,
        inputs.plan_to_age,
        inputs.spouse_plan_to_age,
    )


def find_breakeven_year(baseline_rows: Sequence[ScenarioRow], optimized_rows: Sequence[ScenarioRow]) -> Optional[int]:
    """First year cumulative savings (baseline cost − optimized cost) is non-negative."""
    running = 0.0
    for baseline, optimized in zip(baseline_rows, optimized_rows):
        running += baseline.total_cost - optimized.total_cost
        if running >= 0:
            return optimized.year
    return None


def find_ira_depletion_year(rows: Sequence[ScenarioRow]) -> Optional[int]:
    """First year the IRA ends at zero."""
    for row in rows:
        if row.ira_balance_end <= 0:
            return row.year
    return None


def project(inputs: TaxInputs) -> ProjectionResult:
    """
    Projects baseline (no conversions) and optimized (tier-filling Roth
    conversions) scenarios from identical starting inputs.
    """
    projection_years = resolve_projection_years(inputs)
    conversion_stop_year = resolve_conversion_stop_year(inputs)

    baseline_rows = ScenarioRunner(inputs, projection_years, False, conversion_stop_year).run()
    optimized_rows = ScenarioRunner(inputs, projection_years, True, conversion_stop_year).run()

    baseline_total_cost = sum(r.total_cost for r in baseline_rows)
    optimized_total_cost = sum(r.total_cost for r in optimized_rows)
    lifetime_savings = baseline_total_cost - optimized_total_cost
    total_roth_converted = sum(r.roth_conversion for r in optimized_rows)

    baseline_final_ira = baseline_rows[-1].ira_balance_end if baseline_rows else 0.0
    optimized_final_ira = optimized_rows[-1].ira_balance_end if optimized_rows else 0.0

    summary = ProjectionSummary(
        projection_years=projection_years,
        baseline_total_cost=baseline_total_cost,
        optimized_total_cost=optimized_total_cost,
        lifetime_savings=lifetime_savings,
        total_roth_converted=total_roth_converted,
        baseline_total_tax=sum(r.total_tax for r in baseline_rows),
        optimized_total_tax=sum(r.total_tax for r in optimized_rows),
        baseline_total_irmaa=sum(r.irmaa_annual for r in baseline_rows),
        optimized_total_irmaa=sum(r.irmaa_annual for r in optimized_rows),
        first_spouse_death_year=first_spouse_death_year(inputs),
        total_qcds=sum(r.qcds_actual for r in baseline_rows),
        baseline_final_ira_balance=baseline_final_ira,
        optimized_final_ira_balance=optimized_final_ira,
        baseline_final_roth_balance=baseline_rows[-1].roth_balance_end if baseline_rows else 0.0,
        optimized_final_roth_balance=optimized_rows[-1].roth_balance_end if optimized_rows else 0.0,
        heir_annual_ira_rmd_baseline=baseline_final_ira / heir_drawdown_years,
        heir_annual_ira_rmd_optimized=optimized_final_ira / heir_drawdown_years,
        breakeven_year=find_breakeven_year(baseline_rows, optimized_rows),
        baseline_ira_depletion_year=find_ira_depletion_year(baseline_rows),
        optimized_ira_depletion_year=find_ira_depletion_year(optimized_rows),
    )

    logger.info(
        "Projected %d years: lifetime savings $%.0f, converted $%.0f",
        projection_years, lifetime_savings, total_roth_converted,
    )

    return ProjectionResult(
        baseline_rows=baseline_rows,
        optimized_rows=optimized_rows,
        summary=summary,
        conversion_stop_year=conversion_stop_year,
    )


# =========================================================================
# Tabular views
# =========================================================================

def rows_to_dataframe(rows: Sequence[ScenarioRow]) -> pd.DataFrame:
    """One scenario's rows as a DataFrame indexed by year."""
    columns = list(ScenarioRow.__dataclass_fields__)
    frame = pd.DataFrame([asdict(r) for r in rows], columns=columns)
    return frame.set_index("year")


def comparison_frame(result: ProjectionResult) -> pd.DataFrame:
    """
    Year-by-year baseline vs. optimized costs, balances, and cumulative
    savings (negative while conversion tax has not yet been recovered).
    """
    baseline = rows_to_dataframe(result.baseline_rows)
    optimized = rows_to_dataframe(result.optimized_rows)

    frame = pd.DataFrame(index=baseline.index)
    frame["age"] = baseline["age"]
    frame["baseline_cost"] = baseline["total_cost"]
    frame["optimized_cost"] = optimized["total_cost"]
    frame["tax_on_income"] = baseline["total_tax"]
    frame["conversion_tax"] = optimized["conversion_tax"]
    frame["irmaa"] = optimized["irmaa_annual"]
    frame["roth_conversion"] = optimized["roth_conversion"]
    frame["cumulative_savings"] = np.cumsum(frame["baseline_cost"] - frame["optimized_cost"])
    frame["baseline_ira"] = baseline["ira_balance_end"]
    frame["optimized_ira"] = optimized["ira_balance_end"]
    frame["baseline_roth"] = baseline["roth_balance_end"]
    frame["optimized_roth"] = optimized["roth_balance_end"]
    return frame
