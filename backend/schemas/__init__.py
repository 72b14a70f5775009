"""Pydantic API Schemas for Paie Maroc."""

from backend.schemas.payroll import (
    PayrollErrorResponse,
    PayslipBatchRequest,
    PayslipCalculateRequest,
    PayslipVerifyResponse,
    StatutoryTablesResponse,
)

__all__ = [
    "PayrollErrorResponse",
    "PayslipBatchRequest",
    "PayslipCalculateRequest",
    "PayslipVerifyResponse",
    "StatutoryTablesResponse",
]
