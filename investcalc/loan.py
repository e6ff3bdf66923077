# =========================
# LOAN HELPERS (fixed rate, monthly compounding)
# =========================


def monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100.0 / 12.0


def loan_amount(price: float, lvr: float) -> float:
    return price * (lvr / 100.0)


def monthly_payment(principal: float, annual_rate_percent: float, term_years: int) -> float:
    """Standard annuity repayment. Zero rate falls back to straight-line."""
    r = monthly_rate(annual_rate_percent)
    n = term_years * 12
    if r == 0:
        return principal / n
    growth = (1 + r) ** n
    return principal * r * growth / (growth - 1)


def balance_at_year(principal: float, annual_rate_percent: float, term_years: int, elapsed_years: float) -> float:
    """
    Outstanding balance after `elapsed_years` of scheduled repayments.

    Closed form: P * ((1+r)^n - (1+r)^k) / ((1+r)^n - 1), k = months elapsed.
    Zero once the term has run out; never negative.
    """
    if elapsed_years >= term_years:
        return 0.0

    r = monthly_rate(annual_rate_percent)
    n = term_years * 12
    k = elapsed_years * 12

    if r == 0:
        balance = principal - (principal / n) * k
    else:
        growth_n = (1 + r) ** n
        balance = principal * (growth_n - (1 + r) ** k) / (growth_n - 1)

    return max(0.0, balance)


def annual_repayment(principal: float, annual_rate_percent: float, term_years: int) -> float:
    return monthly_payment(principal, annual_rate_percent, term_years) * 12
