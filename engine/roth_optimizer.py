# engine/roth_optimizer.py

import logging

from models import FilingStatus, IrmaaTargetTier
from engine.tax_planning import get_irmaa_conversion_ceiling

logger = logging.getLogger(__name__)


def optimal_roth_conversion(
    year: int,
    inflation_pct: float,
    filing_status: FilingStatus,
    magi_base: float,
    traditional_balance: float,
    target_tier: IrmaaTargetTier,
) -> float:
    """
    Calculates the Roth conversion that fills income up to, but not over,
    the target IRMAA tier's MAGI ceiling.

    Args:
        magi_base: MAGI for the year BEFORE any conversion.
        traditional_balance: IRA balance left after this year's RMD/withdrawal.

    Returns:
        Conversion amount, bounded by the IRA balance and the ceiling headroom.
    """
    if traditional_balance <= 0:
        return 0.0

    ceiling = get_irmaa_conversion_ceiling(year, inflation_pct, filing_status, target_tier)

    # Stay a dollar under the ceiling so MAGI never lands on the next tier's floor
    headroom = max(0.0, ceiling - magi_base - 1)
    conversion = min(headroom, traditional_balance)

    logger.debug(
        "Year %d: tier %d ceiling $%.0f, base MAGI $%.0f, converting $%.0f",
        year, target_tier, ceiling, magi_base, conversion,
    )
    return conversion
