"""
Payslip Presentation

French / MAD renderings of engine output for display and documents.
The engine itself never formats; only callers use this module.
"""

from decimal import Decimal

from engines.schemas.payroll import Payslip
from engines.schemas.statutory import IncomeTaxBracket, StatutoryConstants

CURRENCY_SYMBOL = "DH"


def format_currency(amount: Decimal | float | int) -> str:
    """15750 -> '15 750,00 DH'"""
    formatted = f"{Decimal(str(amount)):,.2f}"
    formatted = formatted.replace(",", " ").replace(".", ",")
    return f"{formatted} {CURRENCY_SYMBOL}"


def format_percentage(rate: Decimal | float) -> str:
    """0.0448 -> '4,48%'"""
    return f"{Decimal(str(rate)) * 100:.2f}%".replace(".", ",")


def format_seniority(months: int) -> str:
    years, remaining = divmod(months, 12)
    if years == 0:
        return f"{remaining} mois"
    if remaining == 0:
        return f"{years} années"
    return f"{years} années et {remaining} mois"


def seniority_bonus_label(rate: Decimal) -> str:
    return f"Prime d'Ancienneté ({format_percentage(rate)})"


def describe_bracket(bracket: IncomeTaxBracket) -> str:
    if bracket.max is None:
        return f"Plus de {format_currency(bracket.min)}"
    return f"De {format_currency(bracket.min)} à {format_currency(bracket.max)}"


def summarize_payslip(payslip: Payslip) -> dict:
    """
    Formatted recap block of a payslip (récapitulatif).

    Total deductions include the professional expense allowance, matching
    the printed payslip layout.
    """
    total_deductions = payslip.contributions.total + payslip.income_tax.net_tax

    return {
        "employee_id": payslip.employee_id,
        "period": payslip.period,
        "seniority": format_seniority(payslip.seniority_bonus.months),
        "seniority_bonus": {
            "label": seniority_bonus_label(payslip.seniority_bonus.rate),
            "amount": format_currency(payslip.seniority_bonus.amount),
        },
        "salaire_brut": format_currency(payslip.gross_pay.total),
        "salaire_net_imposable": format_currency(payslip.taxable_net),
        "ir_net": format_currency(payslip.income_tax.net_tax),
        "total_retenues": format_currency(total_deductions),
        "net_a_payer": format_currency(payslip.net_pay),
        "cout_total": format_currency(payslip.total_employer_cost),
    }


def describe_statutory_tables(constants: StatutoryConstants) -> dict:
    """Human-readable listing of rates and brackets (barèmes)."""
    return {
        "version": constants.version,
        "devise": {"code": constants.currency, "symbole": CURRENCY_SYMBOL},
        "cnss": {
            "taux_salarie": format_percentage(constants.cnss.employee_rate),
            "taux_employeur": format_percentage(constants.cnss.employer_rate),
            "plafond_mensuel": format_currency(constants.cnss.monthly_ceiling),
            "cotisation_maximale": format_currency(
                constants.cnss.max_employee_contribution
            ),
        },
        "amo": {
            "taux_salarie": format_percentage(constants.amo.employee_rate),
            "taux_employeur": format_percentage(constants.amo.employer_rate),
            "plafond": "Aucun",
        },
        "frais_professionnels": {
            "taux": format_percentage(constants.professional_expenses.rate),
            "plafond_mensuel": format_currency(constants.professional_expenses.monthly_cap),
            "plafond_annuel": format_currency(constants.professional_expenses.annual_cap),
        },
        "charges_familiales": {
            "deduction_par_personne": format_currency(
                constants.family_deduction.amount_per_dependent
            ),
            "maximum_enfants": constants.family_deduction.max_children,
            "deduction_maximale": format_currency(constants.family_deduction.ceiling),
        },
        "bareme_ir": [
            {
                "tranche": describe_bracket(bracket),
                "taux": format_percentage(bracket.rate),
                "somme_a_deduire": format_currency(bracket.deduction),
            }
            for bracket in constants.income_tax_brackets
        ],
        "bareme_anciennete": [
            {"periode": tier.label, "taux": format_percentage(tier.rate)}
            for tier in constants.seniority_tiers
        ],
    }
