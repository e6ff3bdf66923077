import math
from typing import NamedTuple

from investcalc.models import Jurisdiction


class Bracket(NamedTuple):
    upper_bound: float   # exclusive; math.inf for the top bracket
    base_amount: float   # tax owed at the bracket's lower edge
    marginal_rate: float  # per dollar above the lower edge


# =========================
# LAND TAX SCALES (annual, individual investor)
# =========================
# Simplified single-year scales. No premium/trust surcharges, no aggregation
# across multiple holdings. ACT and NT are not modeled.

LAND_TAX_SCALES: dict[Jurisdiction, tuple[Bracket, ...]] = {
    # VIC 2024 general scale
    Jurisdiction.VIC: (
        Bracket(50_000, 0, 0.0),
        Bracket(250_000, 0, 0.002),
        Bracket(600_000, 400, 0.005),
        Bracket(1_000_000, 2_150, 0.008),
        Bracket(1_800_000, 5_350, 0.013),
        Bracket(3_000_000, 15_750, 0.018),
        Bracket(math.inf, 37_350, 0.02),
    ),
    # NSW 2024: general threshold then premium threshold
    Jurisdiction.NSW: (
        Bracket(1_075_000, 0, 0.0),
        Bracket(6_571_000, 100, 0.016),
        Bracket(math.inf, 88_036, 0.02),
    ),
    # QLD 2024-25 individuals
    Jurisdiction.QLD: (
        Bracket(600_000, 0, 0.0),
        Bracket(1_000_000, 500, 0.01),
        Bracket(3_000_000, 4_500, 0.0165),
        Bracket(5_000_000, 37_500, 0.0125),
        Bracket(math.inf, 62_500, 0.0175),
    ),
    # SA 2024-25 general
    Jurisdiction.SA: (
        Bracket(534_000, 0, 0.0),
        Bracket(801_000, 0, 0.005),
        Bracket(1_133_000, 1_335, 0.01),
        Bracket(1_466_000, 4_655, 0.02),
        Bracket(math.inf, 11_315, 0.024),
    ),
    # TAS 2024-25 general
    Jurisdiction.TAS: (
        Bracket(50_000, 0, 0.0),
        Bracket(100_000, 0, 0.0055),
        Bracket(250_000, 275, 0.0055),
        Bracket(500_000, 1_100, 0.0125),
        Bracket(math.inf, 4_225, 0.015),
    ),
    # WA 2024-25 (flat $300 band between 300k and 420k)
    Jurisdiction.WA: (
        Bracket(300_000, 0, 0.0),
        Bracket(420_000, 300, 0.0),
        Bracket(1_000_000, 300, 0.0025),
        Bracket(1_800_000, 1_750, 0.009),
        Bracket(5_000_000, 8_950, 0.018),
        Bracket(11_000_000, 66_550, 0.02),
        Bracket(math.inf, 186_550, 0.0265),
    ),
}


def land_tax_brackets(jurisdiction: Jurisdiction) -> tuple[Bracket, ...]:
    return LAND_TAX_SCALES.get(Jurisdiction(jurisdiction), ())


def compute_land_tax(land_value: float, jurisdiction: Jurisdiction) -> float:
    """
    Annual land tax for a single holding.

    Brackets are half-open [lower, upper): a value sitting exactly on a
    boundary is taxed by the bracket above it. Unmodeled jurisdictions and
    non-positive land values owe nothing.
    """
    if land_value <= 0:
        return 0.0

    lower = 0.0
    for bracket in land_tax_brackets(jurisdiction):
        if land_value < bracket.upper_bound:
            return bracket.base_amount + (land_value - lower) * bracket.marginal_rate
        lower = bracket.upper_bound

    return 0.0
