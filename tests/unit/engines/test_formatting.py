"""
Formatting Unit Tests

French / MAD presentation of engine output.
"""

from decimal import Decimal

import pytest

from engines.services.formatting import (
    describe_bracket,
    describe_statutory_tables,
    format_currency,
    format_percentage,
    format_seniority,
    seniority_bonus_label,
    summarize_payslip,
)
from engines.services.payroll_calculator import compute_payslip
from tests.factories import make_employee


class TestFormatters:
    """Test primitive formatters."""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (Decimal("15750"), "15 750,00 DH"),
            (Decimal("268.8"), "268,80 DH"),
            (Decimal("1234567.891"), "1 234 567,89 DH"),
            (0, "0,00 DH"),
        ],
    )
    def test_format_currency(self, amount, expected):
        assert format_currency(amount) == expected

    def test_format_percentage(self):
        assert format_percentage(Decimal("0.0448")) == "4,48%"
        assert format_percentage(Decimal("0.38")) == "38,00%"

    @pytest.mark.parametrize(
        "months,expected",
        [
            (6, "6 mois"),
            (24, "2 années"),
            (30, "2 années et 6 mois"),
        ],
    )
    def test_format_seniority(self, months, expected):
        assert format_seniority(months) == expected

    def test_seniority_bonus_label(self):
        assert seniority_bonus_label(Decimal("0.05")) == "Prime d'Ancienneté (5,00%)"

    def test_describe_bracket(self, constants):
        assert describe_bracket(constants.income_tax_brackets[1]) == (
            "De 2 500,00 DH à 4 166,67 DH"
        )
        assert describe_bracket(constants.income_tax_brackets[-1]) == (
            "Plus de 15 000,00 DH"
        )


class TestSummaries:
    """Test payslip recap and statutory table listing."""

    def test_summarize_payslip(self, constants):
        employee = make_employee(
            base_salary=Decimal("15000"),
            seniority_months=30,
            family_status="married",
            number_of_children=2,
        )
        summary = summarize_payslip(compute_payslip(employee, constants))

        assert summary["salaire_brut"] == "15 750,00 DH"
        assert summary["net_a_payer"] == "12 355,99 DH"
        # Contributions total (with professional expenses) + net tax
        assert summary["total_retenues"] == "5 894,01 DH"
        assert summary["cout_total"] == "16 806,30 DH"
        assert summary["seniority"] == "2 années et 6 mois"

    def test_describe_statutory_tables(self, constants):
        tables = describe_statutory_tables(constants)

        assert tables["cnss"]["cotisation_maximale"] == "268,80 DH"
        assert tables["amo"]["plafond"] == "Aucun"
        assert len(tables["bareme_ir"]) == 6
        assert tables["bareme_ir"][0]["taux"] == "0,00%"
        assert tables["bareme_anciennete"][-1]["periode"] == "Plus de 25 ans"
