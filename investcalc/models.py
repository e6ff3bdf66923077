import math
from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PropertyType(str, Enum):
    HOUSE = "House"
    TOWNHOUSE = "Townhouse"
    APARTMENT = "Apartment"
    HOME_AND_LAND = "Home & Land"
    OLD_HOME = "Old Home"


class Jurisdiction(str, Enum):
    NSW = "NSW"
    VIC = "VIC"
    QLD = "QLD"
    WA = "WA"
    SA = "SA"
    TAS = "TAS"
    ACT = "ACT"
    NT = "NT"


class OverrideField(str, Enum):
    """Fields the user may pin by hand. Values are the names the frontend sends."""

    LAND_VALUE = "landValue"
    COUNCIL_RATES = "councilRates"
    INSURANCE = "insurance"
    BODY_CORP = "bodyCorp"
    LAND_TAX = "landTax"
    CAPITAL_GROWTH = "capitalGrowth"

    @property
    def attr(self) -> str:
        return _OVERRIDE_ATTRS[self]


_OVERRIDE_ATTRS = {
    OverrideField.LAND_VALUE: "land_value",
    OverrideField.COUNCIL_RATES: "council_rates",
    OverrideField.INSURANCE: "insurance",
    OverrideField.BODY_CORP: "body_corp",
    OverrideField.LAND_TAX: "land_tax",
    OverrideField.CAPITAL_GROWTH: "capital_growth_rate",
}


def parse_overrides(names: Iterable[str] | None) -> frozenset:
    """Turn raw field names into an override set, rejecting anything unknown."""
    if names is None:
        return frozenset()

    out = set()
    for name in names:
        try:
            out.add(OverrideField(name))
        except ValueError:
            allowed = sorted(f.value for f in OverrideField)
            raise ValueError(f"'{name}' cannot be overridden (allowed: {allowed})") from None
    return frozenset(out)


def override_for_attr(attr: str) -> OverrideField | None:
    for field in OverrideField:
        if field.attr == attr:
            return field
    return None


def round_currency(amount: float) -> int:
    """Round half-up to whole dollars (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(amount + 0.5))


# -------- Inputs --------

_NON_NEGATIVE = (
    "price",
    "weekly_rent",
    "land_value",
    "council_rates",
    "insurance",
    "body_corp",
    "land_tax",
    "water_rates",
    "maintenance",
)

_PERCENT_0_100 = ("lvr", "property_manager_rate")


class InvestmentInputs(BaseModel):
    """
    Snapshot of everything the engine reads.

    Amounts are whole-dollar AUD, rates are percent (6.1 means 6.1% p.a.).
    Snapshots are never mutated by the engine; every operation hands back a copy.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False, allow_inf_nan=False)

    # Property & location
    property_type: PropertyType = PropertyType.HOUSE
    jurisdiction: Jurisdiction = Jurisdiction.VIC
    suburb: str = ""
    postcode: str = ""

    # Deal & loan
    price: float = 850000
    interest_rate: float = Field(6.10, description="Annual nominal rate, percent")
    loan_term_years: int = Field(30, description="Fixed loan term in whole years")
    lvr: float = Field(80, description="Loan-to-value ratio, percent")

    # Income & growth
    weekly_rent: float = 650
    capital_growth_rate: float = 4.0
    inflation_rate: float = 2.8
    rental_growth_rate: float = 5.5

    # Expenses (annual)
    land_value: float = 0
    council_rates: float = 0
    insurance: float = 0
    body_corp: float = 0
    land_tax: float = 0
    water_rates: float = 840
    maintenance: float = 1000
    property_manager_rate: float = Field(10, description="Percent of rental income")

    @field_validator(*_NON_NEGATIVE)
    @classmethod
    def _clamp_non_negative(cls, v: float) -> float:
        return max(0.0, v)

    @field_validator(*_PERCENT_0_100)
    @classmethod
    def _clamp_percent(cls, v: float) -> float:
        return min(max(0.0, v), 100.0)

    @field_validator("interest_rate")
    @classmethod
    def _clamp_rate(cls, v: float) -> float:
        return max(0.0, v)

    @field_validator("loan_term_years")
    @classmethod
    def _positive_term(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("loan_term_years must be positive")
        return v


# -------- Outputs --------

class ExpenseBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    council: int
    insurance: int
    body_corp: int
    land_tax: int
    water: int
    maintenance: int
    pm_fee: int
    repayment: int


class ProjectionRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    property_value: int
    loan_balance: int
    equity: int

    rental_income: int
    operating_expenses: int
    total_expenses: int  # operating + loan repayment
    net_cash_flow: int

    breakdown: ExpenseBreakdown


class YearStats(BaseModel):
    """KPIs for one view year, as shown on the dashboard."""

    model_config = ConfigDict(frozen=True)

    year: int
    property_value: int
    loan_balance: int
    equity: int
    annual_cash_flow: int
    weekly_cash_flow: float
    monthly_cash_flow: float
    gross_yield: float
    net_yield: float
    loan_to_value: float
