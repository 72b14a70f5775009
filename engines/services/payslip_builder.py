"""
Payslip Assembly

Collects the calculator's stage outputs into the immutable Payslip and
stamps it with its integrity fingerprint.
"""

from decimal import Decimal

from compliance_vault.integrity import payslip_fingerprint
from engines.schemas.payroll import (
    EmployeePayrollInput,
    EmployerContributions,
    GrossPay,
    IncomeTaxDetail,
    Payslip,
    SeniorityBonus,
    SocialContributions,
)
from engines.schemas.statutory import StatutoryConstants


def assemble_payslip(
    *,
    employee: EmployeePayrollInput,
    constants: StatutoryConstants,
    company: str | None,
    seniority_bonus: SeniorityBonus,
    gross_pay: GrossPay,
    taxable_gross: Decimal,
    contributions: SocialContributions,
    taxable_net: Decimal,
    income_tax: IncomeTaxDetail,
    total_withholdings: Decimal,
    net_pay: Decimal,
    employer_contributions: EmployerContributions,
) -> Payslip:
    """Build the payslip; total employer cost is gross pay plus employer charges."""
    return Payslip(
        employee_id=employee.employee_id,
        period=employee.period,
        company=company,
        constants_version=constants.version,
        family_status=employee.family_status,
        number_of_children=employee.number_of_children,
        seniority_bonus=seniority_bonus,
        gross_pay=gross_pay,
        taxable_gross=taxable_gross,
        contributions=contributions,
        taxable_net=taxable_net,
        income_tax=income_tax,
        non_taxable_premiums=employee.non_taxable_premiums,
        other_deductions=employee.other_deductions,
        total_withholdings=total_withholdings,
        net_pay=net_pay,
        employer_contributions=employer_contributions,
        total_employer_cost=gross_pay.total + employer_contributions.total,
        fingerprint=payslip_fingerprint(employee.employee_id, employee.period, net_pay),
    )
