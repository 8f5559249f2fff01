# engine/retirement_data.py
"""
Medicare premium, IRMAA bracket, and QCD limit reference data by tax year.

Years beyond the last published row are extrapolated by scaling every
dollar amount forward with the scenario's inflation rate.
"""
from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple

from models import FilingStatus


@dataclass(frozen=True)
class IrmaaBracket:
    income_floor: float
    income_ceiling: Optional[float]   # None = no ceiling (top bracket)
    part_b_premium: float             # total monthly Part B premium in this bracket
    part_d_surcharge: float           # monthly Part D surcharge


@dataclass(frozen=True)
class YearReferenceRow:
    year: int
    part_b_premium: float             # base monthly premium
    part_b_deductible: float          # annual
    medicare_advantage_oop_max: float # in-network annual
    medigap_k_oop_max: float          # annual
    qcd_limit: float                  # annual
    irmaa_lookback_year: int          # MAGI year CMS uses for this year's premiums
    irmaa_single: Tuple[IrmaaBracket, ...]
    irmaa_joint: Tuple[IrmaaBracket, ...]

    def irmaa_brackets(self, filing: FilingStatus) -> Tuple[IrmaaBracket, ...]:
        return self.irmaa_single if filing == "single" else self.irmaa_joint


# =============================================================================
# Published years
# =============================================================================

YEAR_DATA: Dict[int, YearReferenceRow] = {
    2025: YearReferenceRow(
        year=2025,
        part_b_premium=185.00,
        part_b_deductible=257,
        medicare_advantage_oop_max=8_850,
        medigap_k_oop_max=7_220,
        qcd_limit=108_000,
        irmaa_lookback_year=2023,
        irmaa_single=(
            IrmaaBracket(0,       106_000, 185.00, 0.00),
            IrmaaBracket(106_000, 133_000, 259.00, 13.70),
            IrmaaBracket(133_000, 167_000, 370.00, 35.30),
            IrmaaBracket(167_000, 200_000, 480.90, 57.00),
            IrmaaBracket(200_000, 500_000, 591.90, 78.60),
            IrmaaBracket(500_000, None,    628.90, 85.80),
        ),
        irmaa_joint=(
            IrmaaBracket(0,       212_000, 185.00, 0.00),
            IrmaaBracket(212_000, 266_000, 259.00, 13.70),
            IrmaaBracket(266_000, 334_000, 370.00, 35.30),
            IrmaaBracket(334_000, 400_000, 480.90, 57.00),
            IrmaaBracket(400_000, 750_000, 591.90, 78.60),
            IrmaaBracket(750_000, None,    628.90, 85.80),
        ),
    ),
    2026: YearReferenceRow(
        year=2026,
        part_b_premium=202.90,
        part_b_deductible=283,
        medicare_advantage_oop_max=9_250,
        medigap_k_oop_max=8_000,
        qcd_limit=111_000,
        irmaa_lookback_year=2024,
        irmaa_single=(
            IrmaaBracket(0,       109_000, 202.90, 0.00),
            IrmaaBracket(109_000, 137_000, 284.10, 14.50),
            IrmaaBracket(137_000, 171_000, 405.80, 37.50),
            IrmaaBracket(171_000, 205_000, 527.50, 60.40),
            IrmaaBracket(205_000, 500_000, 649.20, 83.30),
            IrmaaBracket(500_000, None,    689.90, 91.00),
        ),
        irmaa_joint=(
            IrmaaBracket(0,       218_000, 202.90, 0.00),
            IrmaaBracket(218_000, 274_000, 284.10, 14.50),
            IrmaaBracket(274_000, 342_000, 405.80, 37.50),
            IrmaaBracket(342_000, 410_000, 527.50, 60.40),
            IrmaaBracket(410_000, 750_000, 649.20, 83.30),
            IrmaaBracket(750_000, None,    689.90, 91.00),
        ),
    ),
}

SUPPORTED_YEARS = tuple(sorted(YEAR_DATA))


# =============================================================================
# Lookup
# =============================================================================

def _scale_bracket(bracket: IrmaaBracket, factor: float) -> IrmaaBracket:
    return IrmaaBracket(
        income_floor=bracket.income_floor * factor,
        income_ceiling=None if bracket.income_ceiling is None else bracket.income_ceiling * factor,
        part_b_premium=bracket.part_b_premium * factor,
        part_d_surcharge=bracket.part_d_surcharge * factor,
    )


def get_year_data(year: int, inflation_pct: float = 0.0) -> YearReferenceRow:
    """
    Returns the reference row for a tax year.

    Published years are returned as-is. Years after the last published row
    are that row scaled forward by inflation_pct per year; years before the
    first published row fall back to the first row.
    """
    if year in YEAR_DATA:
        return YEAR_DATA[year]

    first, last = SUPPORTED_YEARS[0], SUPPORTED_YEARS[-1]
    if year < first:
        return YEAR_DATA[first]

    latest = YEAR_DATA[last]
    years_out = year - last
    factor = (1 + inflation_pct / 100) ** years_out

    return replace(
        latest,
        year=year,
        part_b_premium=latest.part_b_premium * factor,
        part_b_deductible=latest.part_b_deductible * factor,
        medicare_advantage_oop_max=latest.medicare_advantage_oop_max * factor,
        medigap_k_oop_max=latest.medigap_k_oop_max * factor,
        qcd_limit=latest.qcd_limit * factor,
        irmaa_lookback_year=latest.irmaa_lookback_year + years_out,
        irmaa_single=tuple(_scale_bracket(b, factor) for b in latest.irmaa_single),
        irmaa_joint=tuple(_scale_bracket(b, factor) for b in latest.irmaa_joint),
    )


def resolve_year(raw: Optional[str], calendar_year: int) -> int:
    """
    Validates a requested year (e.g. from a query string) against the
    published years. Falls back to calendar_year when published, else the
    latest published year.
    """
    try:
        candidate = int(raw) if raw is not None else None
    except ValueError:
        candidate = None

    if candidate in YEAR_DATA:
        return candidate
    if calendar_year in YEAR_DATA:
        return calendar_year
    return SUPPORTED_YEARS[-1]
