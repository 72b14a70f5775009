"""
Moroccan Statutory Payroll Constants (2024)

Monthly figures in MAD. Rates are decimal fractions (0.0448 = 4.48%).
"""

from decimal import Decimal
from functools import lru_cache

from engines.schemas.statutory import (
    AMORates,
    CNSSRates,
    FamilyDeduction,
    IncomeTaxBracket,
    ProfessionalExpenses,
    SeniorityTier,
    StatutoryConstants,
)

CONSTANTS_VERSION = "MA-2024"

# Barème IR mensuel 2024
INCOME_TAX_BRACKETS = (
    IncomeTaxBracket(min=Decimal("0"), max=Decimal("2500"), rate=Decimal("0"), deduction=Decimal("0")),
    IncomeTaxBracket(min=Decimal("2500"), max=Decimal("4166.67"), rate=Decimal("0.10"), deduction=Decimal("250")),
    IncomeTaxBracket(min=Decimal("4166.67"), max=Decimal("5000"), rate=Decimal("0.20"), deduction=Decimal("666.67")),
    IncomeTaxBracket(min=Decimal("5000"), max=Decimal("6666.67"), rate=Decimal("0.30"), deduction=Decimal("1166.67")),
    IncomeTaxBracket(min=Decimal("6666.67"), max=Decimal("15000"), rate=Decimal("0.34"), deduction=Decimal("1433.33")),
    IncomeTaxBracket(min=Decimal("15000"), max=None, rate=Decimal("0.38"), deduction=Decimal("2033")),
)

# Barème prime d'ancienneté, in months of continuous service
SENIORITY_TIERS = (
    SeniorityTier(min_months=0, max_months=24, rate=Decimal("0"), label="Moins de 2 ans"),
    SeniorityTier(min_months=25, max_months=60, rate=Decimal("0.05"), label="2 à 5 ans"),
    SeniorityTier(min_months=61, max_months=144, rate=Decimal("0.10"), label="5 à 12 ans"),
    SeniorityTier(min_months=145, max_months=240, rate=Decimal("0.15"), label="12 à 20 ans"),
    SeniorityTier(min_months=241, max_months=300, rate=Decimal("0.20"), label="20 à 25 ans"),
    SeniorityTier(min_months=301, max_months=None, rate=Decimal("0.25"), label="Plus de 25 ans"),
)


@lru_cache
def get_statutory_constants() -> StatutoryConstants:
    """Get the cached statutory constants table."""
    return StatutoryConstants(
        version=CONSTANTS_VERSION,
        cnss=CNSSRates(
            employee_rate=Decimal("0.0448"),
            employer_rate=Decimal("0.0898"),
            monthly_ceiling=Decimal("6000"),
        ),
        amo=AMORates(
            employee_rate=Decimal("0.0226"),
            employer_rate=Decimal("0.0185"),
        ),
        professional_expenses=ProfessionalExpenses(
            rate=Decimal("0.20"),
            monthly_cap=Decimal("2500"),
            annual_cap=Decimal("30000"),
        ),
        family_deduction=FamilyDeduction(
            amount_per_dependent=Decimal("30"),
            max_children=6,
            ceiling=Decimal("180"),
        ),
        training_tax_rate=Decimal("0.016"),
        employer_contribution_base="base_salary",
        income_tax_brackets=INCOME_TAX_BRACKETS,
        seniority_tiers=SENIORITY_TIERS,
    )
