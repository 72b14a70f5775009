"""
Moroccan Payroll Calculator

Pure calculation logic turning an employee record into an itemized payslip.

Algorithm (each monetary result rounded to 2 decimals, half-up, as soon as
its stage completes):
1. Seniority bonus from the tier table
2. Salaire Brut Global (SBG)
3. Salaire Brut Imposable (SBI) = SBG
4. Employee contributions: CNSS (capped), AMO, CIMR, group insurance,
   professional expense allowance (capped)
5. Salaire Net Imposable (SNI)
6. Income tax (IR) from the bracket table, less family deduction
7. Net pay
8. Employer contributions

No I/O, no logging, no clock. Same input, same output.
"""

import re
from decimal import ROUND_HALF_UP, Decimal

from engines.exceptions import ValidationError
from engines.schemas.payroll import (
    ContributionLine,
    EmployeePayrollInput,
    EmployerContributions,
    FamilyStatus,
    GrossPay,
    IncomeTaxDetail,
    Payslip,
    SeniorityBonus,
    SocialContributions,
)
from engines.schemas.statutory import StatutoryConstants
from engines.services.payslip_builder import assemble_payslip

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

PERIOD_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def round_amount(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def validate_employee(employee: EmployeePayrollInput) -> None:
    """
    Check the employee record and report every violated field at once.

    Raises:
        ValidationError: listing each field and why it was rejected
    """
    errors: list[dict[str, str]] = []

    if employee.employee_id is None or not employee.employee_id.strip():
        errors.append({"field": "employee_id", "message": "Employee identifier is required"})

    if employee.base_salary is None:
        errors.append({"field": "base_salary", "message": "Base salary is required"})
    elif employee.base_salary <= 0:
        errors.append({"field": "base_salary", "message": "Base salary must be greater than 0"})

    if employee.seniority_months < 0:
        errors.append({"field": "seniority_months", "message": "Seniority cannot be negative"})

    if employee.number_of_children < 0:
        errors.append({"field": "number_of_children", "message": "Number of children cannot be negative"})

    for field in ("taxable_premiums", "overtime_amount", "non_taxable_premiums", "other_deductions"):
        if getattr(employee, field) < 0:
            errors.append({"field": field, "message": "Amount cannot be negative"})

    for field in ("pension_contribution_rate", "group_insurance_rate"):
        rate = getattr(employee, field)
        if rate < 0 or rate >= 1:
            errors.append({"field": field, "message": "Rate must be a fraction between 0 and 1"})

    if employee.period is not None and not PERIOD_PATTERN.match(employee.period):
        errors.append({"field": "period", "message": "Period must use the YYYY-MM format"})

    if errors:
        raise ValidationError(errors, employee_id=employee.employee_id)


def calculate_seniority_bonus(
    base_salary: Decimal, seniority_months: int, constants: StatutoryConstants
) -> SeniorityBonus:
    """Stage 1: prime d'ancienneté as a tiered percentage of base salary."""
    tier = constants.find_seniority_tier(seniority_months)
    return SeniorityBonus(
        months=seniority_months,
        rate=tier.rate,
        amount=round_amount(base_salary * tier.rate),
        tier_label=tier.label,
    )


def calculate_gross_pay(
    base_salary: Decimal,
    seniority_bonus: SeniorityBonus,
    taxable_premiums: Decimal,
    overtime_amount: Decimal,
) -> GrossPay:
    """Stage 2: Salaire Brut Global."""
    total = base_salary + seniority_bonus.amount + taxable_premiums + overtime_amount
    return GrossPay(
        base_salary=base_salary,
        seniority_bonus=seniority_bonus.amount,
        taxable_premiums=taxable_premiums,
        overtime_amount=overtime_amount,
        total=round_amount(total),
    )


def calculate_social_contributions(
    taxable_gross: Decimal,
    employee: EmployeePayrollInput,
    constants: StatutoryConstants,
) -> SocialContributions:
    """Stage 4: employee contributions, each rounded independently."""
    cnss_base = min(taxable_gross, constants.cnss.monthly_ceiling)
    cnss = ContributionLine(
        label="CNSS Part Salariale",
        base=cnss_base,
        rate=constants.cnss.employee_rate,
        amount=round_amount(cnss_base * constants.cnss.employee_rate),
    )

    # AMO has no ceiling
    amo = ContributionLine(
        label="AMO Part Salariale",
        base=taxable_gross,
        rate=constants.amo.employee_rate,
        amount=round_amount(taxable_gross * constants.amo.employee_rate),
    )

    pension = ContributionLine(
        label="CIMR",
        base=taxable_gross,
        rate=employee.pension_contribution_rate,
        amount=round_amount(taxable_gross * employee.pension_contribution_rate),
    )

    group_insurance = ContributionLine(
        label="Assurance Groupe",
        base=taxable_gross,
        rate=employee.group_insurance_rate,
        amount=round_amount(taxable_gross * employee.group_insurance_rate),
    )

    expenses = constants.professional_expenses
    professional_expenses = ContributionLine(
        label="Frais Professionnels",
        base=taxable_gross,
        rate=expenses.rate,
        amount=round_amount(min(taxable_gross * expenses.rate, expenses.monthly_cap)),
    )

    total = (
        cnss.amount
        + amo.amount
        + pension.amount
        + group_insurance.amount
        + professional_expenses.amount
    )

    return SocialContributions(
        cnss=cnss,
        amo=amo,
        pension=pension,
        group_insurance=group_insurance,
        professional_expenses=professional_expenses,
        total=round_amount(total),
    )


def calculate_taxable_net(
    taxable_gross: Decimal, contributions: SocialContributions
) -> Decimal:
    """Stage 5: Salaire Net Imposable."""
    return round_amount(taxable_gross - contributions.total)


def check_contribution_load(
    taxable_net: Decimal, employee: EmployeePayrollInput
) -> None:
    """
    Reject optional contribution rates that push SNI below zero.

    Statutory deductions alone never exceed SBI, so a negative SNI always
    comes from the employee's CIMR and group insurance rates.

    Raises:
        ValidationError: naming both optional rate fields
    """
    if taxable_net >= 0:
        return

    message = (
        "Combined pension and group insurance rates exceed taxable gross "
        f"(SNI would be {taxable_net})"
    )
    raise ValidationError(
        [
            {"field": "pension_contribution_rate", "message": message},
            {"field": "group_insurance_rate", "message": message},
        ],
        employee_id=employee.employee_id,
    )


def calculate_family_deduction(
    family_status: FamilyStatus,
    number_of_children: int,
    constants: StatutoryConstants,
) -> Decimal:
    """
    Charges familiales applied against gross income tax.

    Single: nothing. Married without children: one unit. Otherwise one unit
    for the employee plus one per child (children capped), capped overall.
    """
    schedule = constants.family_deduction
    children = min(number_of_children, schedule.max_children)

    if family_status == FamilyStatus.SINGLE:
        return ZERO
    if family_status == FamilyStatus.MARRIED and children == 0:
        return round_amount(schedule.amount_per_dependent)

    deduction = schedule.amount_per_dependent * (1 + children)
    return round_amount(min(deduction, schedule.ceiling))


def calculate_income_tax(
    taxable_net: Decimal,
    family_status: FamilyStatus,
    number_of_children: int,
    constants: StatutoryConstants,
) -> IncomeTaxDetail:
    """Stage 6: Impôt sur le Revenu."""
    bracket = constants.find_income_tax_bracket(taxable_net)

    if bracket.rate > 0:
        gross_tax = round_amount(taxable_net * bracket.rate - bracket.deduction)
    else:
        gross_tax = ZERO

    family_deduction = calculate_family_deduction(
        family_status, number_of_children, constants
    )
    net_tax = round_amount(max(ZERO, gross_tax - family_deduction))

    return IncomeTaxDetail(
        taxable_net=taxable_net,
        bracket=bracket.label,
        bracket_min=bracket.min,
        bracket_max=bracket.max,
        rate=bracket.rate,
        bracket_deduction=bracket.deduction,
        gross_tax=gross_tax,
        family_deduction=family_deduction,
        net_tax=net_tax,
    )


def calculate_net_pay(
    gross_pay: GrossPay,
    contributions: SocialContributions,
    income_tax: IncomeTaxDetail,
    other_deductions: Decimal,
    non_taxable_premiums: Decimal,
) -> tuple[Decimal, Decimal]:
    """
    Stage 7: net à payer.

    The professional expense allowance only reduces the tax base; it is
    not withheld from pay.

    Returns:
        Tuple of (total_withholdings, net_pay)
    """
    withholdings = round_amount(
        contributions.withheld + income_tax.net_tax + other_deductions
    )
    net_pay = round_amount(gross_pay.total - withholdings + non_taxable_premiums)
    return withholdings, net_pay


def calculate_employer_contributions(
    base_salary: Decimal,
    taxable_gross: Decimal,
    constants: StatutoryConstants,
) -> EmployerContributions:
    """
    Stage 8: charges patronales, independent of employee-side figures.

    The base is chosen by constants.employer_contribution_base; the
    default table uses base salary, not SBI.
    """
    if constants.employer_contribution_base == "base_salary":
        base = base_salary
    else:
        base = taxable_gross

    cnss_base = min(base, constants.cnss.monthly_ceiling)
    cnss = ContributionLine(
        label="CNSS Part Patronale",
        base=cnss_base,
        rate=constants.cnss.employer_rate,
        amount=round_amount(cnss_base * constants.cnss.employer_rate),
    )
    amo = ContributionLine(
        label="AMO Part Patronale",
        base=base,
        rate=constants.amo.employer_rate,
        amount=round_amount(base * constants.amo.employer_rate),
    )
    training_tax = ContributionLine(
        label="Taxe de Formation Professionnelle",
        base=base,
        rate=constants.training_tax_rate,
        amount=round_amount(base * constants.training_tax_rate),
    )

    return EmployerContributions(
        base=base,
        cnss=cnss,
        amo=amo,
        training_tax=training_tax,
        total=round_amount(cnss.amount + amo.amount + training_tax.amount),
    )


def compute_payslip(
    employee: EmployeePayrollInput,
    constants: StatutoryConstants,
    company: str | None = None,
) -> Payslip:
    """
    Compute a complete payslip for one employee and one period.

    Args:
        employee: Employee record (never mutated)
        constants: Statutory constants table
        company: Pass-through label, not used in any calculation

    Raises:
        ValidationError: employee record incomplete or out of domain, or
            optional contribution rates larger than taxable gross
        ConfigurationError: constants table has a gap
    """
    validate_employee(employee)

    base_salary = employee.base_salary

    seniority_bonus = calculate_seniority_bonus(
        base_salary, employee.seniority_months, constants
    )
    gross_pay = calculate_gross_pay(
        base_salary,
        seniority_bonus,
        employee.taxable_premiums,
        employee.overtime_amount,
    )

    # SBI equals SBG under the current model
    taxable_gross = gross_pay.total

    contributions = calculate_social_contributions(taxable_gross, employee, constants)
    taxable_net = calculate_taxable_net(taxable_gross, contributions)
    check_contribution_load(taxable_net, employee)
    income_tax = calculate_income_tax(
        taxable_net,
        employee.family_status,
        employee.number_of_children,
        constants,
    )
    total_withholdings, net_pay = calculate_net_pay(
        gross_pay,
        contributions,
        income_tax,
        employee.other_deductions,
        employee.non_taxable_premiums,
    )
    employer_contributions = calculate_employer_contributions(
        base_salary, taxable_gross, constants
    )

    return assemble_payslip(
        employee=employee,
        constants=constants,
        company=company,
        seniority_bonus=seniority_bonus,
        gross_pay=gross_pay,
        taxable_gross=taxable_gross,
        contributions=contributions,
        taxable_net=taxable_net,
        income_tax=income_tax,
        total_withholdings=total_withholdings,
        net_pay=net_pay,
        employer_contributions=employer_contributions,
    )
