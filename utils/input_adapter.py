# utils/input_adapter.py
from dataclasses import fields
from datetime import date
from typing import Any, Dict

from models import CONVERSION_WINDOWS, FILING_STATUSES, IRMAA_TARGET_TIERS, SEXES, TaxInputs
from engine.state_tax import get_state_info, zip_to_state
from utils.xml_loader import DEFAULT_SETUP


class InputError(ValueError):
    """Raised when a scenario input cannot be turned into a valid TaxInputs."""


# Flattened XML names -> TaxInputs field names
FIELD_ALIASES: Dict[str, str] = {
    "primary_birth_year": "birth_year",
    "primary_sex": "sex",
    "primary_ss_start_year": "ss_start_year",
    "primary_ss_payments_per_year": "ss_payments_per_year",
    "primary_plan_to_age": "plan_to_age",
    "primary_deferred_contrib": "annual_deferred_contrib",
    "primary_roth_contrib": "annual_roth_contrib",
    "primary_employer_match_pct": "employer_match_pct",
    "spouse_deferred_contrib": "spouse_annual_deferred_contrib",
    "spouse_roth_contrib": "spouse_annual_roth_contrib",
}

REQUIRED_INT_FIELDS = ("start_year", "retirement_year")


def _rename(values: Dict[str, Any]) -> Dict[str, Any]:
    return {FIELD_ALIASES.get(key, key): value for key, value in values.items()}


def _to_number(name: str, value: Any, kind: type) -> Any:
    if value is None or value == "":
        return kind(0)
    if isinstance(value, bool):
        raise InputError(f"{name}: expected a number, got {value!r}")
    try:
        return kind(float(value)) if kind is int else kind(value)
    except (TypeError, ValueError):
        raise InputError(f"{name}: expected a number, got {value!r}") from None


def _to_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    if value in (0, 1, None):
        return bool(value)
    raise InputError(f"{name}: expected true/false, got {value!r}")


def _validate_choices(inputs_dict: Dict[str, Any]) -> None:
    filing = str(inputs_dict.get("filing", "")).strip().lower()
    if filing not in FILING_STATUSES:
        raise InputError(f"filing: must be one of {FILING_STATUSES}, got {inputs_dict.get('filing')!r}")
    inputs_dict["filing"] = filing

    for name in ("sex", "spouse_sex"):
        sex = inputs_dict.get(name)
        if sex in (None, ""):
            inputs_dict[name] = None
            continue
        sex = str(sex).strip().lower()
        if sex not in SEXES:
            raise InputError(f"{name}: must be one of {SEXES} or empty, got {inputs_dict[name]!r}")
        inputs_dict[name] = sex

    tier = _to_number("irmaa_target_tier", inputs_dict.get("irmaa_target_tier", 0), int)
    if tier not in IRMAA_TARGET_TIERS:
        raise InputError(f"irmaa_target_tier: must be one of {IRMAA_TARGET_TIERS}, got {tier!r}")
    inputs_dict["irmaa_target_tier"] = tier

    window = str(inputs_dict.get("conversion_window", "always")).strip().lower()
    if window not in CONVERSION_WINDOWS:
        raise InputError(
            f"conversion_window: must be one of {CONVERSION_WINDOWS}, got {inputs_dict.get('conversion_window')!r}"
        )
    inputs_dict["conversion_window"] = window


def get_tax_inputs(**overrides: Any) -> TaxInputs:
    """
    Builds TaxInputs by merging the XML default scenario with caller
    overrides, using reflection (dataclasses.fields) so that only valid
    fields are passed to the dataclass.

    Besides TaxInputs fields, overrides may carry:
        state: two-letter code used to derive state_tax_rate and
            state_retirement_exempt when no explicit rate is given.
        zip_code: used to find the state when no state code is given.
        employer_match_pct / spouse_employer_match_pct: employer match as
            a percent of wages (spouse wages via spouse_w2_income).
    """
    # 1. Start with defaults loaded from the XML setup file, then apply overrides
    explicit = _rename(overrides)
    inputs_dict = _rename(DEFAULT_SETUP)
    inputs_dict.update(explicit)

    inputs_dict.setdefault("start_year", date.today().year)

    # 2. Closed choices
    _validate_choices(inputs_dict)

    # 3. Numeric and boolean casting, driven by each field's default type
    for f in fields(TaxInputs):
        if f.name not in inputs_dict or f.name in ("filing", "sex", "spouse_sex", "conversion_window"):
            continue
        if f.name in REQUIRED_INT_FIELDS:
            inputs_dict[f.name] = _to_number(f.name, inputs_dict[f.name], int)
        elif isinstance(f.default, bool):
            inputs_dict[f.name] = _to_bool(f.name, inputs_dict[f.name])
        elif isinstance(f.default, int):
            inputs_dict[f.name] = _to_number(f.name, inputs_dict[f.name], int)
        elif isinstance(f.default, float):
            inputs_dict[f.name] = _to_number(f.name, inputs_dict[f.name], float)

    for name in REQUIRED_INT_FIELDS:
        if name not in inputs_dict:
            raise InputError(f"{name}: required")

    # 4. Employer match from percent of wages
    if "annual_employer_match" not in explicit:
        pct = _to_number("employer_match_pct", inputs_dict.get("employer_match_pct"), float)
        inputs_dict["annual_employer_match"] = inputs_dict.get("w2_income", 0.0) * pct / 100
    if "spouse_annual_employer_match" not in explicit:
        pct = _to_number("spouse_employer_match_pct", inputs_dict.get("spouse_employer_match_pct"), float)
        wages = _to_number("spouse_w2_income", inputs_dict.get("spouse_w2_income"), float)
        inputs_dict["spouse_annual_employer_match"] = wages * pct / 100

    # 5. State rate from state code (or ZIP) unless a rate was given
    if "state_tax_rate" not in explicit:
        state = explicit.get("state")
        if not state and explicit.get("zip_code"):
            state = zip_to_state(str(explicit["zip_code"]))
        if not state:
            state = inputs_dict.get("state")
        info = get_state_info(str(state)) if state else None
        inputs_dict["state_tax_rate"] = info.rate if info is not None else 0.0
        if "state_retirement_exempt" not in explicit:
            inputs_dict["state_retirement_exempt"] = info.retirement_exempt if info is not None else False

    # 6. Keep only TaxInputs fields
    valid_names = {f.name for f in fields(TaxInputs)}
    final_inputs = {key: value for key, value in inputs_dict.items() if key in valid_names}

    return TaxInputs(**final_inputs)
