import numpy as np
import pandas as pd

from investcalc.loan import annual_repayment, balance_at_year, loan_amount
from investcalc.models import (
    ExpenseBreakdown,
    InvestmentInputs,
    ProjectionRow,
    YearStats,
    round_currency,
)

PROJECTION_YEARS = 30


def project(inputs: InvestmentInputs) -> tuple[ProjectionRow, ...]:
    """
    Year-by-year trajectory for years 0..PROJECTION_YEARS inclusive.

    Rent grows at the rental growth rate, every fixed expense line at general
    inflation, the PM fee tracks that year's rent, and repayments stay flat
    (fixed rate). Property value compounds once per year transition. Money is
    kept at full precision and rounded once per field when the row is built.
    """
    principal = loan_amount(inputs.price, inputs.lvr)
    annual_repay = annual_repayment(principal, inputs.interest_rate, inputs.loan_term_years)
    initial_annual_rent = inputs.weekly_rent * 52

    rent_growth = 1 + inputs.rental_growth_rate / 100
    expense_growth = 1 + inputs.inflation_rate / 100
    capital_growth = 1 + inputs.capital_growth_rate / 100
    pm_share = inputs.property_manager_rate / 100

    rows = []
    current_value = float(inputs.price)

    for year in range(PROJECTION_YEARS + 1):
        # ---- Loan
        balance = 0.0
        if year < inputs.loan_term_years:
            balance = balance_at_year(principal, inputs.interest_rate, inputs.loan_term_years, year)

        # ---- Income
        rent_mult = rent_growth ** year
        expense_mult = expense_growth ** year
        rent = initial_annual_rent * rent_mult

        # ---- Expenses (PM fee follows rent, everything else follows inflation)
        pm_fee = rent * pm_share
        council = inputs.council_rates * expense_mult
        insurance = inputs.insurance * expense_mult
        body_corp = inputs.body_corp * expense_mult
        land_tax = inputs.land_tax * expense_mult
        water = inputs.water_rates * expense_mult
        maintenance = inputs.maintenance * expense_mult

        operating = council + insurance + body_corp + land_tax + water + maintenance + pm_fee
        net_cash_flow = rent - annual_repay - operating

        rows.append(ProjectionRow(
            year=year,
            property_value=round_currency(current_value),
            loan_balance=round_currency(balance),
            equity=round_currency(current_value - balance),
            rental_income=round_currency(rent),
            operating_expenses=round_currency(operating),
            total_expenses=round_currency(operating + annual_repay),
            net_cash_flow=round_currency(net_cash_flow),
            breakdown=ExpenseBreakdown(
                council=round_currency(council),
                insurance=round_currency(insurance),
                body_corp=round_currency(body_corp),
                land_tax=round_currency(land_tax),
                water=round_currency(water),
                maintenance=round_currency(maintenance),
                pm_fee=round_currency(pm_fee),
                repayment=round_currency(annual_repay),
            ),
        ))

        # Growth applies going into next year
        current_value *= capital_growth

    return tuple(rows)


def year_stats(rows: tuple[ProjectionRow, ...], year: int) -> YearStats:
    """KPIs for the selected view year. Years outside the horizon raise IndexError."""
    if year < 0 or year >= len(rows):
        raise IndexError(f"year must be between 0 and {len(rows) - 1}, got {year}")

    row = rows[year]
    value = row.property_value

    gross_yield = 0.0
    net_yield = 0.0
    lvr_now = 0.0
    if value > 0:
        gross_yield = row.rental_income / value * 100
        net_yield = (row.rental_income - row.operating_expenses) / value * 100
        lvr_now = row.loan_balance / value * 100

    return YearStats(
        year=row.year,
        property_value=row.property_value,
        loan_balance=row.loan_balance,
        equity=row.equity,
        annual_cash_flow=row.net_cash_flow,
        weekly_cash_flow=row.net_cash_flow / 52,
        monthly_cash_flow=row.net_cash_flow / 12,
        gross_yield=gross_yield,
        net_yield=net_yield,
        loan_to_value=lvr_now,
    )


def projection_frame(rows: tuple[ProjectionRow, ...]) -> pd.DataFrame:
    """Flatten rows into a yearly table (breakdown_* columns + running cash position)."""
    records = []
    for row in rows:
        rec = row.model_dump(exclude={"breakdown"})
        for key, amount in row.breakdown.model_dump().items():
            rec[f"breakdown_{key}"] = amount
        records.append(rec)

    df = pd.DataFrame.from_records(records)
    df["cumulative_cash_flow"] = np.cumsum(df["net_cash_flow"].to_numpy())
    return df
