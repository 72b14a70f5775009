"""
Test Factories

Helper functions for creating engine inputs and constants tables in tests.
"""

from decimal import Decimal

from engines.schemas.payroll import EmployeePayrollInput
from engines.schemas.statutory import IncomeTaxBracket, StatutoryConstants
from engines.services.statutory_constants import get_statutory_constants


def make_employee(**overrides) -> EmployeePayrollInput:
    """Create an EmployeePayrollInput with sensible defaults."""
    defaults = {
        "employee_id": "EMP-001",
        "period": "2024-06",
        "base_salary": Decimal("8000.00"),
        "seniority_months": 0,
        "family_status": "single",
        "number_of_children": 0,
    }
    defaults.update(overrides)
    return EmployeePayrollInput(**defaults)


def make_employee_payload(**overrides) -> dict:
    """Create a JSON-ready employee dict for API requests."""
    payload = {
        "employee_id": "EMP-001",
        "period": "2024-06",
        "base_salary": 8000.0,
        "seniority_months": 0,
        "family_status": "single",
        "number_of_children": 0,
    }
    payload.update(overrides)
    return payload


def make_broken_constants() -> StatutoryConstants:
    """
    Constants table whose brackets stop at 5000.

    Built with model_construct so the table checks are skipped; any
    taxable net above 5000 then misses every bracket.
    """
    constants = get_statutory_constants()
    truncated = (
        IncomeTaxBracket(min=Decimal("0"), max=Decimal("2500"), rate=Decimal("0"), deduction=Decimal("0")),
        IncomeTaxBracket(min=Decimal("2500"), max=Decimal("5000"), rate=Decimal("0.10"), deduction=Decimal("250")),
    )
    return StatutoryConstants.model_construct(
        **{
            **{name: getattr(constants, name) for name in StatutoryConstants.model_fields},
            "version": "BROKEN",
            "income_tax_brackets": truncated,
        }
    )
