# engine/state_tax.py
"""
State income tax estimates for retirement income.

Each state has an approximate effective rate for a retiree and a flag for
whether Social Security and qualified IRA/401k/pension distributions are
exempt (wages, investment income, and other income remain taxable).
"""
import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateInfo:
    code: str
    name: str
    rate: float
    retirement_exempt: bool


# =============================================================================
# ZIP prefix → state. Sorted (start3, end3, code) on the first three digits.
# =============================================================================
ZIP3_RANGES: List[Tuple[int, int, str]] = [
    (10, 27, "MA"), (28, 29, "RI"), (30, 38, "NH"),
    (39, 49, "ME"), (50, 59, "VT"), (60, 69, "CT"),
    (70, 89, "NJ"),
    (100, 149, "NY"), (150, 196, "PA"), (197, 199, "DE"),
    (200, 205, "DC"), (206, 212, "MD"), (214, 219, "MD"),
    (220, 246, "VA"), (247, 268, "WV"), (270, 289, "NC"),
    (290, 299, "SC"), (300, 319, "GA"), (320, 349, "FL"),
    (350, 369, "AL"), (370, 385, "TN"), (386, 397, "MS"),
    (398, 399, "GA"), (400, 427, "KY"), (430, 459, "OH"),
    (460, 479, "IN"), (480, 499, "MI"), (500, 528, "IA"),
    (530, 549, "WI"), (550, 567, "MN"), (570, 577, "SD"),
    (580, 588, "ND"), (590, 599, "MT"), (600, 631, "IL"),
    (632, 658, "MO"), (660, 679, "KS"), (680, 693, "NE"),
    (700, 714, "LA"), (716, 729, "AR"), (730, 749, "OK"),
    (750, 799, "TX"), (800, 816, "CO"), (820, 831, "WY"),
    (832, 838, "ID"), (840, 847, "UT"), (850, 865, "AZ"),
    (870, 884, "NM"), (889, 898, "NV"), (900, 961, "CA"),
    (967, 968, "HI"), (970, 979, "OR"), (980, 994, "WA"),
    (995, 999, "AK"),
]

STATE_NAMES: Dict[str, str] = {
    "AK": "Alaska", "AL": "Alabama", "AR": "Arkansas", "AZ": "Arizona",
    "CA": "California", "CO": "Colorado", "CT": "Connecticut", "DC": "D.C.",
    "DE": "Delaware", "FL": "Florida", "GA": "Georgia", "HI": "Hawaii",
    "IA": "Iowa", "ID": "Idaho", "IL": "Illinois", "IN": "Indiana",
    "KS": "Kansas", "KY": "Kentucky", "LA": "Louisiana", "MA": "Massachusetts",
    "MD": "Maryland", "ME": "Maine", "MI": "Michigan", "MN": "Minnesota",
    "MO": "Missouri", "MS": "Mississippi", "MT": "Montana", "NC": "North Carolina",
    "ND": "North Dakota", "NE": "Nebraska", "NH": "New Hampshire", "NJ": "New Jersey",
    "NM": "New Mexico", "NV": "Nevada", "NY": "New York", "OH": "Ohio",
    "OK": "Oklahoma", "OR": "Oregon", "PA": "Pennsylvania", "RI": "Rhode Island",
    "SC": "South Carolina", "SD": "South Dakota", "TN": "Tennessee", "TX": "Texas",
    "UT": "Utah", "VA": "Virginia", "VT": "Vermont", "WA": "Washington",
    "WI": "Wisconsin", "WV": "West Virginia", "WY": "Wyoming",
}

# (effective rate, retirement income exempt)
STATE_TAX_DATA: Dict[str, Tuple[float, bool]] = {
    # No state income tax
    "AK": (0.000, False), "FL": (0.000, False), "NV": (0.000, False),
    "SD": (0.000, False), "TN": (0.000, False), "TX": (0.000, False),
    "WA": (0.000, False), "WY": (0.000, False), "NH": (0.000, False),

    # Broad retirement income exemptions
    "IL": (0.0495, True), "MS": (0.050, True), "PA": (0.0307, True), "IA": (0.038, True),

    # Approximate effective rate for a retiree after typical senior deductions
    "AZ": (0.025, False), "IN": (0.030, False), "AL": (0.030, False), "LA": (0.030, False),
    "ND": (0.020, False), "OH": (0.030, False), "CO": (0.035, False), "KY": (0.040, False),
    "GA": (0.040, False), "AR": (0.039, False), "MO": (0.040, False), "SC": (0.040, False),
    "DE": (0.046, False), "NJ": (0.020, False), "MI": (0.042, False), "NC": (0.045, False),
    "OK": (0.040, False), "MA": (0.050, False), "MD": (0.048, False), "UT": (0.047, False),
    "ME": (0.055, False), "NM": (0.049, False), "KS": (0.049, False), "NE": (0.053, False),
    "VA": (0.050, False), "WV": (0.050, False), "ID": (0.058, False), "MT": (0.059, False),
    "RI": (0.049, False), "NY": (0.060, False), "CT": (0.055, False), "WI": (0.065, False),
    "VT": (0.070, False), "MN": (0.070, False), "HI": (0.070, False), "OR": (0.090, False),
    "CA": (0.093, False), "DC": (0.085, False),
}


def zip_to_state(zip_code: str) -> Optional[str]:
    digits = re.sub(r"\D", "", zip_code).zfill(5)
    prefix = int(digits[:3])
    for low, high, state in ZIP3_RANGES:
        if low <= prefix <= high:
            return state
    return None


def get_state_name(state_code: str) -> str:
    return STATE_NAMES.get(state_code, state_code)


def get_state_info(state_code: str) -> Optional[StateInfo]:
    """Rate and exemption data for a two-letter state code, or None if unknown."""
    code = state_code.strip().upper()
    if code not in STATE_TAX_DATA:
        logger.warning(
            f"State Tax Calculations Not Available for '{code}'. "
            "Defaulting to $0 state income taxes for this projection."
        )
        return None

    rate, retirement_exempt = STATE_TAX_DATA[code]
    return StateInfo(code=code, name=get_state_name(code), rate=rate, retirement_exempt=retirement_exempt)


def get_state_tax_rate(state_code: str) -> float:
    info = get_state_info(state_code)
    return info.rate if info is not None else 0.0


def get_state_info_for_zip(zip_code: str) -> Optional[StateInfo]:
    code = zip_to_state(zip_code)
    if code is None:
        return None
    return get_state_info(code)
