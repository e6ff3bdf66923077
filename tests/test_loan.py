"""Fixed-rate amortization helpers."""

import pytest

from investcalc.loan import annual_repayment, balance_at_year, loan_amount, monthly_payment


class TestMonthlyPayment:
    def test_default_deal(self):
        # $680,000 at 6.10% over 30 years
        principal = loan_amount(850_000, 80)
        assert principal == pytest.approx(680_000)
        assert monthly_payment(principal, 6.10, 30) == pytest.approx(4_120.8, abs=2)

    def test_zero_rate_is_straight_line(self):
        assert monthly_payment(360_000, 0.0, 30) == pytest.approx(1_000)

    def test_higher_rate_means_higher_payment(self):
        assert monthly_payment(500_000, 8.0, 30) > monthly_payment(500_000, 4.0, 30)

    def test_shorter_term_means_higher_payment(self):
        assert monthly_payment(500_000, 6.0, 15) > monthly_payment(500_000, 6.0, 30)

    def test_annual_repayment_is_twelve_payments(self):
        assert annual_repayment(400_000, 5.5, 25) == pytest.approx(monthly_payment(400_000, 5.5, 25) * 12)


class TestBalanceAtYear:
    @pytest.mark.parametrize("rate", [0.0, 3.5, 6.1, 12.0])
    @pytest.mark.parametrize("term", [5, 15, 30])
    def test_starts_at_principal_and_ends_at_zero(self, rate, term):
        assert balance_at_year(500_000, rate, term, 0) == pytest.approx(500_000)
        assert balance_at_year(500_000, rate, term, term) == 0

    def test_zero_after_term(self):
        assert balance_at_year(500_000, 6.0, 10, 25) == 0

    def test_balance_decreases_each_year(self):
        balances = [balance_at_year(680_000, 6.1, 30, y) for y in range(31)]
        assert all(a > b for a, b in zip(balances, balances[1:]))

    def test_zero_rate_straight_line(self):
        assert balance_at_year(300_000, 0.0, 30, 10) == pytest.approx(200_000)

    def test_matches_month_by_month_schedule(self):
        principal, rate, term = 400_000, 5.0, 20
        pmt = monthly_payment(principal, rate, term)
        r = rate / 100 / 12
        balance = principal
        for _ in range(5 * 12):
            balance = balance * (1 + r) - pmt
        assert balance_at_year(principal, rate, term, 5) == pytest.approx(balance, rel=1e-9)
