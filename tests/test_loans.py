"""
Tests for amortization, mortgage and VA loan calculations.
"""

import pytest
from datetime import date
from fincalc.calculations.amortization import (
    ExtraPayments,
    OneTimePayment,
    calculate_monthly_payment,
    calculate_payoff_date,
    calculate_total_interest,
    calculate_total_principal,
    generate_amortization_schedule,
    validate_amortization_inputs,
)
from fincalc.calculations.mortgage import (
    MortgageInputs,
    calculate_mortgage,
    calculate_pmi_removal_month,
    is_pmi_required,
    validate_mortgage_inputs,
)
from fincalc.calculations.va_loan import (
    VALoanInputs,
    calculate_conventional_loan,
    calculate_fha_loan,
    calculate_va_loan,
    get_va_funding_fee_rate,
    validate_va_loan_inputs,
)


class TestMonthlyPayment:
    """Test monthly payment calculation."""

    def test_calculate_payment(self):
        """$200k at 6% for 30 years."""
        payment = calculate_monthly_payment(200000, 6, 30)
        assert payment == pytest.approx(1199.10, abs=0.01)

    def test_zero_rate(self):
        """Zero interest divides principal evenly."""
        assert calculate_monthly_payment(360000, 0, 30) == 1000

    def test_degenerate_inputs(self):
        """Degenerate inputs give a zero payment instead of raising."""
        assert calculate_monthly_payment(0, 6, 30) == 0
        assert calculate_monthly_payment(-1000, 6, 30) == 0
        assert calculate_monthly_payment(100000, 6, 0) == 0
        assert calculate_monthly_payment(100000, 6, -5) == 0

    def test_rate_too_small_to_compound(self):
        """A rate that leaves (1 + r)^n at exactly 1.0 pays like zero interest."""
        assert calculate_monthly_payment(360000, 1e-15, 30) == pytest.approx(1000)


class TestAmortizationSchedule:
    """Test amortization schedule generation."""

    def test_amortization_schedule_length(self):
        """Schedule has one row per month of the term."""
        schedule = generate_amortization_schedule(100000, 6, 5)
        assert len(schedule) == 60
        assert [row.month for row in schedule] == list(range(1, 61))

    def test_amortization_final_balance(self):
        """Test loan is fully paid off at end of term."""
        schedule = generate_amortization_schedule(250000, 6.5, 30)
        assert schedule[-1].balance == 0
        assert calculate_total_principal(schedule) == pytest.approx(250000, abs=0.01)

    def test_balance_never_increases(self):
        schedule = generate_amortization_schedule(150000, 7, 15)
        balances = [row.balance for row in schedule]
        assert all(later <= earlier for earlier, later in zip(balances, balances[1:]))
        assert all(balance >= 0 for balance in balances)

    def test_principal_plus_interest_equals_payment(self):
        """Every row but the last pays exactly the scheduled payment."""
        schedule = generate_amortization_schedule(100000, 6, 10)
        payment = calculate_monthly_payment(100000, 6, 10)
        for row in schedule[:-1]:
            assert row.principal + row.interest == pytest.approx(payment)
        assert schedule[-1].principal + schedule[-1].interest == pytest.approx(payment, abs=0.01)

    def test_first_month_interest(self):
        """First month's interest is the balance times the monthly rate."""
        schedule = generate_amortization_schedule(120000, 6, 30)
        assert schedule[0].interest == pytest.approx(600)

    def test_cumulative_totals(self):
        schedule = generate_amortization_schedule(100000, 5, 5)
        assert schedule[-1].cumulative_interest == pytest.approx(calculate_total_interest(schedule))
        assert schedule[-1].cumulative_principal == pytest.approx(100000, abs=0.01)

    def test_zero_rate_schedule(self):
        schedule = generate_amortization_schedule(12000, 0, 1)
        assert len(schedule) == 12
        assert all(row.interest == 0 for row in schedule)
        assert all(row.principal == pytest.approx(1000) for row in schedule)
        assert schedule[-1].balance == 0

    def test_degenerate_loan_gives_empty_schedule(self):
        assert generate_amortization_schedule(0, 6, 30) == []
        assert generate_amortization_schedule(-5000, 6, 30) == []
        assert generate_amortization_schedule(100000, 6, 0) == []

    def test_payment_dates(self):
        """Row m falls m - 1 months after the start date."""
        schedule = generate_amortization_schedule(100000, 6, 2, start_date=date(2025, 1, 31))
        assert schedule[0].date == date(2025, 1, 31)
        assert schedule[1].date == date(2025, 2, 28)
        assert schedule[12].date == date(2026, 1, 31)

    def test_default_start_date(self):
        schedule = generate_amortization_schedule(100000, 6, 1)
        assert schedule[0].date == date(2026, 1, 1)

    def test_payoff_date(self):
        assert calculate_payoff_date(date(2025, 3, 1), 360) == date(2055, 3, 1)

    def test_validation(self):
        assert validate_amortization_inputs(200000, 6, 30) == []
        assert validate_amortization_inputs(200000, 0, 1) == []

        errors = validate_amortization_inputs(-1, 31, 1e6)
        assert "Principal must be greater than 0" in errors
        assert "Loan term must be between 1 and 50 years" in errors
        assert "Interest rate must be between 0% and 30%" in errors

    def test_validation_extra_payments(self):
        extra = ExtraPayments(one_time_payments=[OneTimePayment(amount=-5, month=13)])
        errors = validate_amortization_inputs(100000, 6, 1, extra)
        assert "One-time payments cannot be negative" in errors
        assert "One-time payment month must fall within the loan term" in errors


class TestExtraPayments:
    """Test extra principal payments."""

    def test_monthly_extra_shortens_loan(self):
        extra = ExtraPayments(monthly_extra=500)
        schedule = generate_amortization_schedule(200000, 6, 30, extra_payments=extra)

        assert len(schedule) < 360
        assert schedule[-1].balance == 0
        assert calculate_total_principal(schedule) == pytest.approx(200000, abs=0.01)

    def test_extra_does_not_change_scheduled_payment(self):
        """Extra principal shortens the tail; it does not re-amortize."""
        payment = calculate_monthly_payment(200000, 6, 30)
        extra = ExtraPayments(monthly_extra=500)
        schedule = generate_amortization_schedule(200000, 6, 30, extra_payments=extra)
        assert all(row.payment == payment for row in schedule)

    def test_extra_reduces_interest(self):
        baseline = generate_amortization_schedule(200000, 6, 30)
        with_extra = generate_amortization_schedule(
            200000, 6, 30, extra_payments=ExtraPayments(monthly_extra=200)
        )
        assert calculate_total_interest(with_extra) < calculate_total_interest(baseline)

    def test_monthly_extra_start_month(self):
        extra = ExtraPayments(monthly_extra=100, monthly_extra_start_month=13)
        schedule = generate_amortization_schedule(100000, 6, 30, extra_payments=extra)
        assert schedule[11].extra_payment == 0
        assert schedule[12].extra_payment == 100

    def test_yearly_extra_recurs_annually(self):
        extra = ExtraPayments(yearly_extra=1000, yearly_extra_start_month=3)
        schedule = generate_amortization_schedule(100000, 6, 30, extra_payments=extra)

        assert schedule[1].extra_payment == 0
        assert schedule[2].extra_payment == 1000
        assert schedule[3].extra_payment == 0
        assert schedule[14].extra_payment == 1000
        assert schedule[26].extra_payment == 1000

    def test_one_time_payment(self):
        extra = ExtraPayments(one_time_payments=[OneTimePayment(amount=50000, month=12)])
        schedule = generate_amortization_schedule(100000, 6, 30, extra_payments=extra)

        assert schedule[11].extra_payment == 50000
        assert schedule[10].balance - schedule[11].balance == pytest.approx(
            schedule[11].principal + 50000
        )
        assert len(schedule) < 360

    def test_lump_sum_larger_than_balance(self):
        """An oversized lump sum is capped and ends the loan that month."""
        extra = ExtraPayments(one_time_payments=[OneTimePayment(amount=1000000, month=6)])
        schedule = generate_amortization_schedule(100000, 6, 30, extra_payments=extra)

        assert len(schedule) == 6
        assert schedule[-1].balance == 0
        assert calculate_total_principal(schedule) == pytest.approx(100000, abs=0.01)


class TestMortgage:
    """Test mortgage calculations."""

    def _inputs(self, **overrides):
        values = dict(
            home_price=400000,
            down_payment=80000,
            loan_term=30,
            interest_rate=6.5,
            property_tax=4800,
            home_insurance=1200,
            pmi=2400,
            hoa_fee=100,
            start_date=date(2025, 1, 1),
        )
        values.update(overrides)
        return MortgageInputs(**values)

    def test_loan_amount_and_payment(self):
        results = calculate_mortgage(self._inputs())

        assert results.loan_amount == 320000
        assert results.monthly_payment.principal_and_interest == pytest.approx(
            calculate_monthly_payment(320000, 6.5, 30)
        )
        assert results.monthly_payment.property_tax == 400
        assert results.monthly_payment.home_insurance == 100
        assert results.monthly_payment.pmi == 0  # 20% down
        assert results.pmi_removal_month is None

    def test_total_monthly(self):
        monthly = calculate_mortgage(self._inputs()).monthly_payment
        assert monthly.total_monthly == pytest.approx(
            monthly.principal_and_interest + 400 + 100 + 100
        )

    def test_pmi_required_below_20_percent(self):
        assert is_pmi_required(400000, 40000)
        assert not is_pmi_required(400000, 80000)
        assert not is_pmi_required(0, 0)

    def test_pmi_paid_until_removal(self):
        results = calculate_mortgage(self._inputs(down_payment=40000))

        assert results.monthly_payment.pmi == 200
        assert results.pmi_removal_month is not None
        assert results.total_payments.total_pmi == pytest.approx(200 * results.pmi_removal_month)

        row = results.amortization_schedule[results.pmi_removal_month - 1]
        assert row.balance <= 400000 * 0.78

    def test_pmi_removal_month_none_when_never_reached(self):
        """Six months into a one-year loan the balance is still far above 78%."""
        schedule = generate_amortization_schedule(100000, 6, 1)[:6]
        assert schedule[-1].balance > 10000 * 0.78
        assert calculate_pmi_removal_month(10000, schedule) is None

    def test_pmi_removal_month_found_within_schedule(self):
        schedule = generate_amortization_schedule(100000, 6, 1)
        assert calculate_pmi_removal_month(10000, schedule) == 12

    def test_rate_too_small_to_compound(self):
        """A near-zero rate passes validation and still produces a schedule."""
        inputs = self._inputs(down_payment=40000, interest_rate=1e-15)
        assert validate_mortgage_inputs(inputs) == []

        results = calculate_mortgage(inputs)
        assert results.monthly_payment.principal_and_interest == pytest.approx(1000)
        assert len(results.amortization_schedule) == 360
        assert results.amortization_schedule[-1].balance == 0

    def test_totals(self):
        results = calculate_mortgage(self._inputs())
        totals = results.total_payments

        assert totals.total_mortgage_payment == pytest.approx(320000 + totals.total_interest)
        assert totals.total_property_tax == pytest.approx(400 * 360)
        assert totals.total_of_all_payments == pytest.approx(
            totals.total_mortgage_payment
            + totals.total_property_tax
            + totals.total_home_insurance
            + totals.total_pmi
            + totals.total_hoa
            + totals.total_other_costs
        )
        assert results.payoff_date == date(2055, 1, 1)

    def test_extra_payments_shorten_totals(self):
        baseline = calculate_mortgage(self._inputs())
        with_extra = calculate_mortgage(self._inputs(), ExtraPayments(monthly_extra=1000))

        assert len(with_extra.amortization_schedule) < len(baseline.amortization_schedule)
        assert with_extra.total_payments.total_hoa < baseline.total_payments.total_hoa
        assert with_extra.payoff_date < baseline.payoff_date

    def test_validation(self):
        assert validate_mortgage_inputs(self._inputs()) == []

        errors = validate_mortgage_inputs(
            self._inputs(down_payment=500000, loan_term=60, interest_rate=-1)
        )
        assert "Down payment cannot exceed home price" in errors
        assert "Loan term must be between 1 and 50 years" in errors
        assert "Interest rate must be between 0% and 30%" in errors

    def test_validation_extra_payments(self):
        extra = ExtraPayments(
            monthly_extra=-10,
            one_time_payments=[OneTimePayment(amount=1000, month=400)],
        )
        errors = validate_mortgage_inputs(self._inputs(), extra)
        assert "Extra payments cannot be negative" in errors
        assert "One-time payment month must fall within the loan term" in errors


class TestVAFundingFee:
    """Test VA funding fee lookup."""

    def test_first_use_zero_down(self):
        assert get_va_funding_fee_rate(0, "regular", "first", False) == 2.15

    def test_subsequent_use_zero_down(self):
        assert get_va_funding_fee_rate(0, "regular", "subsequent", False) == 3.3

    @pytest.mark.parametrize(
        "down_payment_percent,expected",
        [(4.99, 2.15), (5, 1.5), (9.99, 1.5), (10, 1.25), (25, 1.25)],
    )
    def test_down_payment_buckets(self, down_payment_percent, expected):
        assert get_va_funding_fee_rate(down_payment_percent, "reserves", "first", False) == expected

    @pytest.mark.parametrize("service_type", ["regular", "reserves"])
    @pytest.mark.parametrize("loan_usage", ["first", "subsequent"])
    @pytest.mark.parametrize("down_payment_percent", [0, 5, 10])
    def test_disabled_veterans_exempt(self, service_type, loan_usage, down_payment_percent):
        assert get_va_funding_fee_rate(down_payment_percent, service_type, loan_usage, True) == 0


class TestVALoan:
    """Test VA loan calculations."""

    def _inputs(self, **overrides):
        values = dict(
            home_price=300000,
            down_payment=0,
            loan_term=30,
            interest_rate=6,
            property_tax=3600,
            home_insurance=1200,
            start_date=date(2025, 1, 1),
        )
        values.update(overrides)
        return VALoanInputs(**values)

    def test_financed_funding_fee(self):
        results = calculate_va_loan(self._inputs())
        details = results.loan_details

        assert details.base_loan_amount == 300000
        assert details.funding_fee_rate == 2.15
        assert details.funding_fee_amount == pytest.approx(6450)
        assert details.total_loan_amount == pytest.approx(306450)
        assert details.ltv == 100
        assert results.monthly_payment.principal_and_interest == pytest.approx(
            calculate_monthly_payment(306450, 6, 30)
        )
        assert results.amortization_schedule[-1].balance == 0

    def test_unfinanced_funding_fee_in_totals(self):
        results = calculate_va_loan(self._inputs(finance_funding_fee=False))
        totals = results.total_payments

        assert results.loan_details.total_loan_amount == 300000
        assert totals.total_of_all_payments == pytest.approx(
            totals.total_principal_and_interest
            + totals.total_property_tax
            + totals.total_home_insurance
            + totals.total_hoa
            + totals.total_other_costs
            + 6450
        )

    def test_disabled_veteran_pays_no_fee(self):
        results = calculate_va_loan(self._inputs(is_disabled=True))
        assert results.loan_details.funding_fee_amount == 0
        assert results.loan_details.total_loan_amount == 300000

    def test_monthly_payment_has_no_pmi(self):
        monthly = calculate_va_loan(self._inputs()).monthly_payment
        assert monthly.total_monthly == pytest.approx(monthly.principal_and_interest + 300 + 100)

    def test_conventional_comparison(self):
        quote = calculate_conventional_loan(300000, 5, 30, 6)
        assert quote.loan_amount == pytest.approx(285000)
        assert quote.pmi_required
        assert quote.monthly_pmi == pytest.approx(285000 * 0.005 / 12)
        assert quote.total_interest == pytest.approx(quote.total_payment - 285000)

    def test_fha_comparison(self):
        quote = calculate_fha_loan(300000, 3.5, 30, 6)
        base = 300000 * 0.965
        assert quote.ufmip == pytest.approx(base * 0.0175)
        assert quote.loan_amount == pytest.approx(base * 1.0175)
        assert quote.monthly_mip == pytest.approx(base * 0.55 / 100 / 12)

    def test_validation(self):
        assert validate_va_loan_inputs(self._inputs()) == []

        errors = validate_va_loan_inputs(
            self._inputs(home_price=0, service_type="navy", loan_usage="third")
        )
        assert "Home price must be greater than 0" in errors
        assert "Service type must be either regular or reserves" in errors
        assert "Loan usage must be either first or subsequent" in errors
