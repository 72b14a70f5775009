"""
Payroll Engine MCP Tool

Moroccan payslip calculation exposed as MCP tools.
"""

from decimal import Decimal

from fastmcp import FastMCP

from engines.schemas.payroll import EmployeePayrollInput
from engines.services.batch_processor import compute_batch
from engines.services.formatting import describe_statutory_tables
from engines.services.payroll_calculator import compute_payslip
from engines.services.statutory_constants import get_statutory_constants

# Initialize MCP server (will be started from server.py)
mcp = FastMCP("Paie Maroc Payroll Engine")


@mcp.tool()
async def calculate_moroccan_payslip(
    employee_id: str,
    base_salary: float,
    seniority_months: int = 0,
    family_status: str = "single",
    number_of_children: int = 0,
    taxable_premiums: float = 0.0,
    overtime_amount: float = 0.0,
    non_taxable_premiums: float = 0.0,
    other_deductions: float = 0.0,
    pension_contribution_rate: float = 0.0,
    group_insurance_rate: float = 0.0,
    period: str | None = None,
    company: str | None = None,
) -> dict:
    """
    Calculate a Moroccan payslip for one employee and one month.

    Applies the seniority bonus, CNSS (capped at 6 000 DH), AMO, optional
    CIMR and group insurance, the professional expense allowance, the
    monthly IR bracket table and family deductions, then employer charges.

    Args:
        employee_id: Matricule
        base_salary: Monthly base salary in MAD
        seniority_months: Months of continuous service
        family_status: single, married, divorced, widowed (or CELIBATAIRE, MARIE, ...)
        number_of_children: Dependent children
        taxable_premiums: Taxable bonuses added to gross
        overtime_amount: Overtime pay added to gross
        non_taxable_premiums: Paid on top of net, outside the tax base
        other_deductions: Loan repayments, advances, etc.
        pension_contribution_rate: CIMR rate (e.g. 0.06)
        group_insurance_rate: Group insurance rate
        period: Pay period (YYYY-MM)
        company: Employer label copied onto the payslip

    Returns:
        Itemized payslip with monetary fields as numbers

    Example:
        15 000 DH, 30 months, married with 2 children:
        - Seniority bonus 5% = 750.00, gross 15 750.00
        - CNSS 268.80, AMO 355.95, IR net 2 769.26
        - Net pay 12 355.99
    """
    # Convert floats to Decimal for precision
    employee = EmployeePayrollInput(
        employee_id=employee_id,
        period=period,
        base_salary=Decimal(str(base_salary)),
        seniority_months=seniority_months,
        family_status=family_status,
        number_of_children=number_of_children,
        taxable_premiums=Decimal(str(taxable_premiums)),
        overtime_amount=Decimal(str(overtime_amount)),
        non_taxable_premiums=Decimal(str(non_taxable_premiums)),
        other_deductions=Decimal(str(other_deductions)),
        pension_contribution_rate=Decimal(str(pension_contribution_rate)),
        group_insurance_rate=Decimal(str(group_insurance_rate)),
    )

    payslip = compute_payslip(employee, get_statutory_constants(), company=company)

    return payslip.model_dump(mode="json")


@mcp.tool()
async def calculate_payslip_batch(
    employees: list[dict],
    period: str | None = None,
    company: str | None = None,
) -> dict:
    """
    Calculate payslips for several employees.

    Rejected employees are listed under "failed" with every invalid field;
    the others are still computed.

    Args:
        employees: Employee records (English or French field names)
        period: Pay period (YYYY-MM) applied to every employee
        company: Employer label copied onto every payslip

    Returns:
        Dictionary with succeeded, failed, total and aggregate amounts
    """
    result = compute_batch(
        employees, get_statutory_constants(), period=period, company=company
    )
    return result.model_dump(mode="json")


@mcp.tool()
async def get_statutory_tables() -> dict:
    """
    Return the statutory rates, ceilings and bracket tables in use.

    Returns:
        Dictionary with raw values ("constants") and French labels ("baremes")
    """
    constants = get_statutory_constants()
    return {
        "constants": constants.model_dump(mode="json"),
        "baremes": describe_statutory_tables(constants),
    }
