from typing import Any, Iterable

from investcalc.land_tax import compute_land_tax
from investcalc.models import (
    InvestmentInputs,
    OverrideField,
    PropertyType,
    override_for_attr,
    round_currency,
)

# =========================
# ESTIMATION TABLES
# =========================

ESTIMATED_LAND_VALUE_RATIO = {
    PropertyType.HOUSE: 0.45,
    PropertyType.TOWNHOUSE: 0.43,
    PropertyType.APARTMENT: 0.30,
    PropertyType.HOME_AND_LAND: 0.65,
    PropertyType.OLD_HOME: 0.95,
}

ESTIMATED_GROWTH_RATE = {
    PropertyType.HOUSE: 4.0,
    PropertyType.TOWNHOUSE: 3.0,
    PropertyType.APARTMENT: 1.0,
    PropertyType.HOME_AND_LAND: 3.5,
    PropertyType.OLD_HOME: 4.0,
}

COUNCIL_RATES_PCT_OF_PRICE = 0.0042
INSURANCE_PCT_OF_PRICE = 0.003
BODY_CORP_PCT_OF_PRICE = 0.01

STRATA_TYPES = frozenset({PropertyType.APARTMENT, PropertyType.TOWNHOUSE})


def resolve_derived_fields(inputs: InvestmentInputs, overrides: Iterable[OverrideField] = ()) -> InvestmentInputs:
    """
    Recompute every auto-estimated field that the user hasn't pinned.

    Land value is settled first because land tax is read off it. Overridden
    fields are left exactly as the caller supplied them. Running this twice on
    the same snapshot gives the same snapshot.
    """
    pinned = frozenset(overrides)
    price = inputs.price
    updates: dict[str, Any] = {}

    land_value = inputs.land_value
    if OverrideField.LAND_VALUE not in pinned:
        land_value = round_currency(price * ESTIMATED_LAND_VALUE_RATIO[inputs.property_type])
        updates["land_value"] = land_value

    if OverrideField.CAPITAL_GROWTH not in pinned:
        updates["capital_growth_rate"] = ESTIMATED_GROWTH_RATE[inputs.property_type]

    if OverrideField.COUNCIL_RATES not in pinned:
        updates["council_rates"] = round_currency(price * COUNCIL_RATES_PCT_OF_PRICE)

    if OverrideField.INSURANCE not in pinned:
        updates["insurance"] = round_currency(price * INSURANCE_PCT_OF_PRICE)

    if OverrideField.BODY_CORP not in pinned:
        is_strata = inputs.property_type in STRATA_TYPES
        updates["body_corp"] = round_currency(price * BODY_CORP_PCT_OF_PRICE) if is_strata else 0

    if OverrideField.LAND_TAX not in pinned:
        updates["land_tax"] = round_currency(compute_land_tax(land_value, inputs.jurisdiction))

    return InvestmentInputs.model_validate({**inputs.model_dump(), **updates})


# =========================
# SESSION OPERATIONS
# =========================

def apply_edit(
    inputs: InvestmentInputs,
    overrides: Iterable[OverrideField],
    field: str,
    value: Any,
) -> tuple[InvestmentInputs, frozenset]:
    """
    Apply one manual edit, the way the form does.

    Editing an auto-estimated field pins it. The new snapshot goes back
    through validation (so negative amounts clamp to zero) and then through
    resolve_derived_fields so dependent fields catch up.
    """
    if field not in InvestmentInputs.model_fields:
        raise ValueError(f"Unknown input field '{field}'")

    pinned = set(overrides)
    target = override_for_attr(field)
    if target is not None:
        pinned.add(target)

    data = inputs.model_dump()
    data[field] = value
    edited = InvestmentInputs.model_validate(data)

    pinned = frozenset(pinned)
    return resolve_derived_fields(edited, pinned), pinned


def clear_override(
    inputs: InvestmentInputs,
    overrides: Iterable[OverrideField],
    field: OverrideField,
) -> tuple[InvestmentInputs, frozenset]:
    """Un-pin a field and let the estimate take over again."""
    pinned = frozenset(overrides) - {OverrideField(field)}
    return resolve_derived_fields(inputs, pinned), pinned


def reset() -> tuple[InvestmentInputs, frozenset]:
    """Fresh session: default deal (Richmond VIC house) with estimates filled in."""
    inputs = InvestmentInputs(suburb="Richmond", postcode="3121")
    return resolve_derived_fields(inputs), frozenset()
