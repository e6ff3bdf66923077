"""
Glue for the two external collaborators: the rent estimator and the
commentary writer.

Both are plain callables injected by the caller (the app wires them to
whatever generative service it uses). They fail soft: a failure leaves the
inputs alone and comes back as a status, never as an exception.
"""

import math
from enum import Enum
from typing import Any, Callable, Iterable, NamedTuple, Optional

from investcalc.derived import apply_edit
from investcalc.models import InvestmentInputs, Jurisdiction, OverrideField, ProjectionRow, PropertyType
from investcalc.projection import year_stats

RentEstimator = Callable[[str, Jurisdiction, PropertyType, float], Optional[float]]
CommentaryWriter = Callable[[dict], str]

COMMENTARY_FALLBACK = "Unable to generate analysis."


class EstimateStatus(str, Enum):
    UPDATED = "updated"
    UNAVAILABLE = "unavailable"
    FAILED = "failed"
    SKIPPED = "skipped"


class CommentaryResult(NamedTuple):
    status: EstimateStatus
    text: str


def rent_search_type(property_type: PropertyType) -> PropertyType:
    # Estimators do better asking about a plain house for these two
    if property_type in (PropertyType.OLD_HOME, PropertyType.HOME_AND_LAND):
        return PropertyType.HOUSE
    return property_type


def _is_usable_rent(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def apply_rent_estimate(
    inputs: InvestmentInputs,
    overrides: Iterable[OverrideField],
    estimator: RentEstimator,
) -> tuple[InvestmentInputs, frozenset, EstimateStatus]:
    """Ask the estimator for weekly rent and write it back like a manual edit."""
    pinned = frozenset(overrides)
    if not inputs.suburb:
        return inputs, pinned, EstimateStatus.SKIPPED

    search_type = rent_search_type(inputs.property_type)
    try:
        weekly_rent = estimator(inputs.suburb, inputs.jurisdiction, search_type, inputs.price)
    except Exception as e:
        print(f"[estimate] rent estimate failed for {inputs.suburb} {inputs.jurisdiction.value}: {e}", flush=True)
        return inputs, pinned, EstimateStatus.FAILED

    if not _is_usable_rent(weekly_rent):
        return inputs, pinned, EstimateStatus.UNAVAILABLE

    updated, pinned = apply_edit(inputs, pinned, "weekly_rent", float(weekly_rent))
    return updated, pinned, EstimateStatus.UPDATED


def commentary_summary(inputs: InvestmentInputs, rows: tuple[ProjectionRow, ...]) -> dict[str, Any]:
    """Year-0 figures handed to the commentary writer."""
    year0 = rows[0]
    stats = year_stats(rows, 0)
    return {
        "location": f"{inputs.suburb}, {inputs.jurisdiction.value} {inputs.postcode}".strip(),
        "property_type": inputs.property_type.value,
        "price": inputs.price,
        "weekly_rent": inputs.weekly_rent,
        "total_annual_expenses": year0.total_expenses,
        "net_cash_flow": year0.net_cash_flow,
        "gross_yield": round(stats.gross_yield, 2),
    }


def request_commentary(summary: dict, writer: CommentaryWriter) -> CommentaryResult:
    try:
        text = writer(summary)
    except Exception as e:
        print(f"[estimate] commentary failed: {e}", flush=True)
        return CommentaryResult(EstimateStatus.FAILED, COMMENTARY_FALLBACK)

    if not text:
        return CommentaryResult(EstimateStatus.UNAVAILABLE, COMMENTARY_FALLBACK)
    return CommentaryResult(EstimateStatus.UPDATED, text)
