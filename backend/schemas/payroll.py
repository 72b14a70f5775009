"""
Payroll Pydantic Schemas

API request/response models for the payroll endpoints.
"""

from typing import Any

from pydantic import BaseModel, Field

from engines.schemas.payroll import EmployeePayrollInput


class PayslipCalculateRequest(BaseModel):
    """Schema for a single payslip calculation."""

    employee: EmployeePayrollInput = Field(
        ...,
        description="Employee record (English or French field names)",
    )
    company: str | None = Field(default=None, description="Company label for the payslip header")


class PayslipBatchRequest(BaseModel):
    """Schema for a batch payslip calculation."""

    employees: list[dict[str, Any]] = Field(
        ...,
        description="Employee records (English or French field names), each validated on its own",
    )
    period: str | None = Field(
        default=None,
        description="Pay period (YYYY-MM); overrides each employee's own period",
    )
    company: str | None = None


class PayslipVerifyResponse(BaseModel):
    """Schema for a payslip integrity check."""

    is_valid: bool
    employee_id: str
    message: str


class PayrollErrorResponse(BaseModel):
    """Schema for engine errors."""

    detail: str
    code: str
    errors: list[dict[str, str]] = Field(default_factory=list)


class StatutoryTablesResponse(BaseModel):
    """Schema for the statutory tables listing."""

    instance: str
    constants: dict
    baremes: dict

