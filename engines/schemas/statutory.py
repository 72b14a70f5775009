"""
Statutory Constants Schemas

Frozen models for the Moroccan payroll constants table: CNSS, AMO,
professional expenses, income-tax brackets, seniority tiers and the
family deduction schedule.

Table shape is checked when the model is built. A malformed table raises
ConfigurationError, never a pydantic ValidationError, so callers can tell a
deployment bug apart from bad employee input.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, computed_field, model_validator

from engines.exceptions import ConfigurationError

# JSON output carries numbers, not strings
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
Rate = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CNSSRates(BaseModel):
    """Caisse Nationale de Sécurité Sociale rates (capped base)."""

    model_config = ConfigDict(frozen=True)

    employee_rate: Rate
    employer_rate: Rate
    monthly_ceiling: Money

    @computed_field
    @property
    def max_employee_contribution(self) -> Money:
        """Largest monthly employee contribution: ceiling × rate."""
        return (self.monthly_ceiling * self.employee_rate).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )


class AMORates(BaseModel):
    """Assurance Maladie Obligatoire rates (no ceiling)."""

    model_config = ConfigDict(frozen=True)

    employee_rate: Rate
    employer_rate: Rate


class ProfessionalExpenses(BaseModel):
    """
    Flat-rate professional expense allowance.

    annual_cap is declared for reference only; the monthly calculation
    applies monthly_cap and nothing else.
    """

    model_config = ConfigDict(frozen=True)

    rate: Rate
    monthly_cap: Money
    annual_cap: Money


class FamilyDeduction(BaseModel):
    """Flat income-tax reduction per dependent, capped."""

    model_config = ConfigDict(frozen=True)

    amount_per_dependent: Money
    max_children: int = Field(..., ge=0)
    ceiling: Money


class IncomeTaxBracket(BaseModel):
    """One monthly IR bracket: tax = base × rate − deduction."""

    model_config = ConfigDict(frozen=True)

    min: Money
    max: Money | None = None
    rate: Rate
    deduction: Money

    def contains(self, amount: Decimal) -> bool:
        return self.min <= amount and (self.max is None or amount <= self.max)

    @property
    def label(self) -> str:
        upper = "+" if self.max is None else f"{self.max.normalize():f}"
        return f"{self.min.normalize():f} - {upper} DH"


class SeniorityTier(BaseModel):
    """Seniority bonus tier over whole months of continuous service."""

    model_config = ConfigDict(frozen=True)

    min_months: int = Field(..., ge=0)
    max_months: int | None = None
    rate: Rate
    label: str

    def contains(self, months: int) -> bool:
        return self.min_months <= months and (
            self.max_months is None or months <= self.max_months
        )


class StatutoryConstants(BaseModel):
    """
    Complete, read-only statutory table for one legal regime.

    Lookups are linear scans with first-match semantics; at an exact
    boundary value the lower bracket wins.
    """

    model_config = ConfigDict(frozen=True)

    version: str
    currency: str = "MAD"
    cnss: CNSSRates
    amo: AMORates
    professional_expenses: ProfessionalExpenses
    family_deduction: FamilyDeduction
    training_tax_rate: Rate
    employer_contribution_base: Literal["base_salary", "taxable_gross"] = "base_salary"
    income_tax_brackets: tuple[IncomeTaxBracket, ...]
    seniority_tiers: tuple[SeniorityTier, ...]

    @model_validator(mode="after")
    def check_tables(self) -> "StatutoryConstants":
        _check_brackets(self.income_tax_brackets)
        _check_tiers(self.seniority_tiers)
        return self

    def find_income_tax_bracket(self, taxable_amount: Decimal) -> IncomeTaxBracket:
        for bracket in self.income_tax_brackets:
            if bracket.contains(taxable_amount):
                return bracket
        raise ConfigurationError(
            f"No income tax bracket covers {taxable_amount} "
            f"in constants table {self.version}"
        )

    def find_seniority_tier(self, months: int) -> SeniorityTier:
        for tier in self.seniority_tiers:
            if tier.contains(months):
                return tier
        raise ConfigurationError(
            f"No seniority tier covers {months} months "
            f"in constants table {self.version}"
        )


def _check_brackets(brackets: tuple[IncomeTaxBracket, ...]) -> None:
    if not brackets:
        raise ConfigurationError("Income tax bracket table is empty")
    if brackets[0].min != 0:
        raise ConfigurationError(
            f"First income tax bracket must start at 0, starts at {brackets[0].min}"
        )
    if brackets[-1].max is not None:
        raise ConfigurationError("Last income tax bracket must be unbounded (max=None)")

    for previous, current in zip(brackets, brackets[1:]):
        if previous.max is None:
            raise ConfigurationError(
                f"Unbounded income tax bracket starting at {previous.min} is not last"
            )
        if previous.max <= previous.min:
            raise ConfigurationError(
                f"Income tax bracket {previous.label} has max <= min"
            )
        if current.min != previous.max:
            raise ConfigurationError(
                f"Income tax brackets not contiguous: {previous.label} "
                f"followed by {current.label}"
            )
        if current.rate < previous.rate:
            raise ConfigurationError(
                f"Income tax rates decrease at bracket {current.label}"
            )


def _check_tiers(tiers: tuple[SeniorityTier, ...]) -> None:
    if not tiers:
        raise ConfigurationError("Seniority tier table is empty")
    if tiers[0].min_months != 0:
        raise ConfigurationError(
            f"First seniority tier must start at 0 months, starts at {tiers[0].min_months}"
        )
    if tiers[-1].max_months is not None:
        raise ConfigurationError("Last seniority tier must be unbounded (max_months=None)")

    for previous, current in zip(tiers, tiers[1:]):
        if previous.max_months is None:
            raise ConfigurationError(
                f"Unbounded seniority tier '{previous.label}' is not last"
            )
        if previous.max_months < previous.min_months:
            raise ConfigurationError(
                f"Seniority tier '{previous.label}' has max_months < min_months"
            )
        # Whole months: the next tier starts the month after the previous ends
        if current.min_months != previous.max_months + 1:
            raise ConfigurationError(
                f"Seniority tiers not contiguous: '{previous.label}' ends at "
                f"{previous.max_months}, '{current.label}' starts at {current.min_months}"
            )
        if current.rate < previous.rate:
            raise ConfigurationError(
                f"Seniority rates decrease at tier '{current.label}'"
            )
