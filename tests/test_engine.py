"""Unit tests for PayrollEngine."""

import logging
from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from morocco_payroll.calculators.engine import PayrollEngine
from morocco_payroll.calculators.line_builder import PayslipLineBuilder
from morocco_payroll.calculators.rates import MOROCCO_2025, StatutoryRates
from morocco_payroll.calculators.types import PayrollInput

cents = PayslipLineBuilder.round_to_cents


class TestFullMonthScenario:
    """8000 MAD over a full 22-day month."""

    def test_gross_and_contributions(self, engine, full_month_input):
        result = engine.calculate(full_month_input).rounded()

        assert result.gross_salary == Decimal("8000.00")
        assert result.cnss_employee == Decimal("539.20")
        assert result.cnss_employer == Decimal("1687.20")
        assert result.amo_employee == Decimal("180.80")
        assert result.amo_employer == Decimal("328.80")

    def test_professional_expenses_below_cap(self, engine, full_month_input):
        """96,000 x 30% = 28,800 < 30,000, so the monthly deduction is 2,400."""
        result = engine.calculate(full_month_input)

        assert result.professional_expenses == Decimal("2400")

    def test_igr_and_net(self, engine, full_month_input):
        # Taxable 4880/month -> 58560/year -> 1855.90 IGR/year
        result = engine.calculate(full_month_input)

        assert result.igr_tax == Decimal("1855.90") / 12
        assert cents(result.igr_tax) == Decimal("154.66")
        assert cents(result.net_salary) == Decimal("7125.34")

    def test_unrounded_internally(self, engine, full_month_input):
        result = engine.calculate(full_month_input)

        assert result.igr_tax != cents(result.igr_tax)


class TestMinimumWageFloor:
    """Test the SMIG floor policy."""

    def test_gross_below_smig_raised(self, engine):
        result = engine.calculate(PayrollInput.from_values(base_salary=2000, working_days=22))

        assert result.gross_salary == Decimal("3266.55")

    def test_contributions_use_floored_gross(self, engine):
        result = engine.calculate(PayrollInput.from_values(base_salary=2000, working_days=22))

        assert result.cnss_employee == Decimal("3266.55") * Decimal("0.0674")
        assert result.igr_tax == Decimal("0")
        assert cents(result.net_salary) == Decimal("2972.56")

    def test_partial_month_floored(self, engine):
        result = engine.calculate(PayrollInput.from_values(base_salary=5000, working_days=5))

        assert result.gross_salary == MOROCCO_2025.minimum_monthly_wage

    def test_floor_step_is_independent(self, engine):
        assert engine.apply_minimum_wage_floor(Decimal("100")) == Decimal("3266.55")
        assert engine.apply_minimum_wage_floor(Decimal("3266.55")) == Decimal("3266.55")
        assert engine.apply_minimum_wage_floor(Decimal("9000")) == Decimal("9000")

    def test_floor_override_logged(self, engine, caplog):
        with caplog.at_level(logging.DEBUG, logger="morocco_payroll.calculators.engine"):
            engine.apply_minimum_wage_floor(Decimal("100"))

        assert "below SMIG" in caplog.text


class TestEarnings:
    """Test pro-ration, overtime and bonuses."""

    def test_prorated_salary(self, engine):
        earnings = engine.compute_earnings(
            PayrollInput.from_values(base_salary=11000, working_days=11)
        )

        assert earnings.daily_rate == Decimal("500")
        assert earnings.adjusted_salary == Decimal("5500")

    def test_overtime_premium(self, engine):
        # 8800 / 22 = 400/day, 50/hour, 62.50 with premium
        earnings = engine.compute_earnings(
            PayrollInput.from_values(base_salary=8800, working_days=22, overtime_hours=10)
        )

        assert earnings.overtime_pay == Decimal("625.00")

    def test_no_overtime_keeps_gross_exponent(self, engine, full_month_input):
        """Zero overtime must not widen the exponent of gross or its shares."""
        earnings = engine.compute_earnings(full_month_input)
        result = engine.calculate(full_month_input)

        assert str(earnings.overtime_pay) == "0"
        assert str(result.gross_salary) == "8000"
        assert str(result.cnss_employee) == "539.2000"

    def test_bonuses_added_to_gross(self, engine):
        result = engine.calculate(
            PayrollInput.from_values(base_salary=8800, working_days=22, bonuses=1200)
        )

        assert result.gross_salary == Decimal("10000")

    def test_working_days_above_standard_accepted(self, engine):
        result = engine.calculate(PayrollInput.from_values(base_salary=8800, working_days=24))

        assert result.gross_salary == Decimal("9600")

    def test_custom_standard_working_days(self, engine):
        result = engine.calculate(
            PayrollInput.from_values(base_salary=9000, working_days=26, standard_working_days=26)
        )

        assert result.gross_salary == Decimal("9000")

    def test_overtime_rate(self, engine):
        assert engine.calculate_overtime_rate(Decimal("40")) == Decimal("50.00")


class TestDeductions:
    """Test professional expenses, dependents and post-tax deductions."""

    def test_professional_expenses_capped(self, engine, high_earner_input):
        result = engine.calculate(high_earner_input)

        assert result.professional_expenses == Decimal("2500")

    def test_dependent_deduction_capped(self, engine):
        assert engine.dependent_deduction_annual(2) == Decimal("1000")
        assert engine.dependent_deduction_annual(6) == Decimal("3000")
        assert engine.dependent_deduction_annual(10) == Decimal("3000")

    def test_dependents_reduce_igr(self, engine):
        without = engine.calculate(PayrollInput.from_values(base_salary=20000, working_days=22))
        with_two = engine.calculate(
            PayrollInput.from_values(base_salary=20000, working_days=22, dependents=2)
        )

        assert with_two.igr_tax < without.igr_tax
        assert with_two.gross_salary == without.gross_salary

    def test_dependents_saturate(self, engine):
        six = engine.calculate(
            PayrollInput.from_values(base_salary=20000, working_days=22, dependents=6)
        )
        sixty = engine.calculate(
            PayrollInput.from_values(base_salary=20000, working_days=22, dependents=60)
        )

        assert six == sixty
        # Taxable 15450/month -> 185400/year -> 41197.63 IGR/year
        assert cents(six.igr_tax) == Decimal("3433.14")

    def test_top_bracket_scenario(self, engine, high_earner_input):
        result = engine.calculate(high_earner_input)

        assert result.igr_tax == Decimal("42307.63") / 12
        assert cents(result.net_salary) == Decimal("14674.36")

    def test_flat_deductions_reduce_net_only(self, engine):
        plain = engine.calculate(PayrollInput.from_values(base_salary=8000, working_days=22))
        loan = engine.calculate(
            PayrollInput.from_values(base_salary=8000, working_days=22, deductions=500)
        )

        assert loan.igr_tax == plain.igr_tax
        assert cents(loan.net_salary) == cents(plain.net_salary) - Decimal("500")

    def test_net_identity(self, engine):
        payroll_input = PayrollInput.from_values(
            base_salary=12345.67,
            working_days=20,
            overtime_hours=7.5,
            bonuses=300,
            deductions=250,
            dependents=3,
        )
        r = engine.calculate(payroll_input)

        assert r.net_salary == r.gross_salary - (
            r.cnss_employee + r.amo_employee + r.igr_tax + payroll_input.deductions
        )


class TestSecondaryOperations:
    """Test compliance and contribution summary views."""

    def test_minimum_wage_compliance(self, engine):
        assert engine.validate_minimum_wage_compliance(Decimal("3266.55")) is True
        assert engine.validate_minimum_wage_compliance(Decimal("3266.54")) is False

    def test_contribution_summary(self, engine):
        summary = engine.contribution_summary(Decimal("8000"))

        assert summary.cnss.employee == Decimal("539.2")
        assert summary.cnss.employer == Decimal("1687.2")
        assert summary.cnss.total == Decimal("2226.4")
        assert summary.amo.total == Decimal("509.6")

    def test_contribution_summary_to_dict(self, engine):
        data = engine.contribution_summary(Decimal("8000")).to_dict()

        assert set(data) == {"cnss", "amo"}
        assert set(data["amo"]) == {"employee", "employer", "total"}


class TestPurity:
    """The engine is a pure function over immutable inputs."""

    def test_same_input_same_output(self, engine, full_month_input):
        assert engine.calculate(full_month_input) == engine.calculate(full_month_input)

    def test_independent_engines_agree(self, full_month_input):
        assert PayrollEngine().calculate(full_month_input) == PayrollEngine().calculate(
            full_month_input
        )

    def test_result_is_immutable(self, engine, full_month_input):
        result = engine.calculate(full_month_input)

        with pytest.raises(FrozenInstanceError):
            result.net_salary = Decimal("0")

    def test_custom_rates(self, full_month_input):
        engine = PayrollEngine(StatutoryRates(minimum_monthly_wage=Decimal("9000")))

        assert engine.calculate(full_month_input).gross_salary == Decimal("9000")
