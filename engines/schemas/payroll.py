"""
Payroll Engine Schemas

Input/output models for the Moroccan payslip calculation.

The employee record is deliberately permissive on values (a zero salary or
a negative child count is accepted here) so that the engine can report
every domain violation at once instead of stopping at the first one.
"""

from decimal import Decimal
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field, field_validator

from engines.schemas.statutory import Money, Rate


class FamilyStatus(str, Enum):
    """Situation familiale."""

    SINGLE = "single"
    MARRIED = "married"
    DIVORCED = "divorced"
    WIDOWED = "widowed"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = value.strip().upper()
            for member in cls:
                if member.value.upper() == key:
                    return member
            return _FRENCH_FAMILY_STATUS.get(key)
        return None


_FRENCH_FAMILY_STATUS = {
    "CELIBATAIRE": FamilyStatus.SINGLE,
    "MARIE": FamilyStatus.MARRIED,
    "DIVORCE": FamilyStatus.DIVORCED,
    "VEUF": FamilyStatus.WIDOWED,
}


class EmployeePayrollInput(BaseModel):
    """
    Per-period facts needed to compute one payslip.

    Accepts the original French field names (matricule, salaire_base, ...)
    as aliases.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    employee_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("employee_id", "matricule"),
        description="Unique employee identifier (matricule)",
    )
    period: str | None = Field(
        default=None,
        validation_alias=AliasChoices("period", "periode"),
        description="Pay period (YYYY-MM), metadata only",
    )
    base_salary: Decimal | None = Field(
        default=None,
        validation_alias=AliasChoices("base_salary", "salaire_base"),
        description="Monthly base salary in MAD",
    )
    seniority_months: int = Field(
        default=0,
        validation_alias=AliasChoices("seniority_months", "anciennete_mois"),
        description="Months since original hire date",
    )
    family_status: FamilyStatus = Field(
        default=FamilyStatus.SINGLE,
        validation_alias=AliasChoices("family_status", "situation_familiale"),
    )
    number_of_children: int = Field(
        default=0,
        validation_alias=AliasChoices("number_of_children", "nombre_enfants"),
    )

    # Additions to gross
    taxable_premiums: Decimal = Field(
        default=Decimal("0"),
        validation_alias=AliasChoices("taxable_premiums", "primes_imposables"),
    )
    overtime_amount: Decimal = Field(
        default=Decimal("0"),
        validation_alias=AliasChoices("overtime_amount", "heures_supplementaires"),
    )

    # Outside the taxable base
    non_taxable_premiums: Decimal = Field(
        default=Decimal("0"),
        validation_alias=AliasChoices("non_taxable_premiums", "primes_non_imposables"),
    )
    other_deductions: Decimal = Field(
        default=Decimal("0"),
        validation_alias=AliasChoices("other_deductions", "autres_retenues"),
    )

    # Optional employee-side rates
    pension_contribution_rate: Decimal = Field(
        default=Decimal("0"),
        validation_alias=AliasChoices("pension_contribution_rate", "taux_cimr"),
        description="CIMR rate as a decimal fraction",
    )
    group_insurance_rate: Decimal = Field(
        default=Decimal("0"),
        validation_alias=AliasChoices("group_insurance_rate", "taux_assurance"),
        description="Group insurance rate as a decimal fraction",
    )

    @field_validator("family_status", mode="before")
    @classmethod
    def normalize_family_status(cls, value):
        """Accept French codes (MARIE, CELIBATAIRE, ...) in any case."""
        if isinstance(value, str):
            return FamilyStatus(value)
        return value


class SeniorityBonus(BaseModel):
    """Prime d'ancienneté."""

    model_config = ConfigDict(frozen=True)

    months: int
    rate: Rate
    amount: Money
    tier_label: str


class GrossPay(BaseModel):
    """Salaire Brut Global and its components."""

    model_config = ConfigDict(frozen=True)

    base_salary: Money
    seniority_bonus: Money
    taxable_premiums: Money
    overtime_amount: Money
    total: Money


class ContributionLine(BaseModel):
    """One itemized contribution: label, base, rate, amount."""

    model_config = ConfigDict(frozen=True)

    label: str
    base: Money
    rate: Rate
    amount: Money


class SocialContributions(BaseModel):
    """Employee-side contributions and the professional expense allowance."""

    model_config = ConfigDict(frozen=True)

    cnss: ContributionLine
    amo: ContributionLine
    pension: ContributionLine
    group_insurance: ContributionLine
    professional_expenses: ContributionLine
    total: Money

    @property
    def withheld(self) -> Decimal:
        """Amounts actually withheld from pay (excludes professional expenses)."""
        return (
            self.cnss.amount
            + self.amo.amount
            + self.pension.amount
            + self.group_insurance.amount
        )


class IncomeTaxDetail(BaseModel):
    """Impôt sur le Revenu computation detail."""

    model_config = ConfigDict(frozen=True)

    taxable_net: Money
    bracket: str
    bracket_min: Money
    bracket_max: Money | None
    rate: Rate
    bracket_deduction: Money
    gross_tax: Money
    family_deduction: Money
    net_tax: Money


class EmployerContributions(BaseModel):
    """Charges patronales."""

    model_config = ConfigDict(frozen=True)

    base: Money
    cnss: ContributionLine
    amo: ContributionLine
    training_tax: ContributionLine
    total: Money


class Payslip(BaseModel):
    """
    Fully itemized payslip.

    Built once per calculation and never mutated. The fingerprint covers
    (employee_id, period, net_pay) for downstream tamper checks.
    """

    model_config = ConfigDict(frozen=True)

    employee_id: str
    period: str | None
    company: str | None
    constants_version: str

    family_status: FamilyStatus
    number_of_children: int

    seniority_bonus: SeniorityBonus
    gross_pay: GrossPay
    taxable_gross: Money
    contributions: SocialContributions
    taxable_net: Money
    income_tax: IncomeTaxDetail

    non_taxable_premiums: Money
    other_deductions: Money
    total_withholdings: Money
    net_pay: Money

    employer_contributions: EmployerContributions
    total_employer_cost: Money

    fingerprint: str


class BatchSuccess(BaseModel):
    """One computed payslip in a batch."""

    employee_id: str
    payslip: Payslip


class BatchFailure(BaseModel):
    """One rejected employee in a batch, with every violated field."""

    employee_id: str | None
    errors: list[dict[str, str]]


class BatchResult(BaseModel):
    """Per-employee outcomes of a batch calculation."""

    period: str | None = None
    succeeded: list[BatchSuccess] = Field(default_factory=list)
    failed: list[BatchFailure] = Field(default_factory=list)

    @computed_field
    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @computed_field
    @property
    def total_net_pay(self) -> Money:
        return sum((s.payslip.net_pay for s in self.succeeded), Decimal("0.00"))

    @computed_field
    @property
    def total_employer_cost(self) -> Money:
        return sum(
            (s.payslip.total_employer_cost for s in self.succeeded), Decimal("0.00")
        )
