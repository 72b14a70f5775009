"""
Payroll API Routes

Endpoints for payslip calculation, batch runs and the statutory tables.
Engine errors are mapped to HTTP responses by the handlers in backend.main.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from backend.config import Settings, get_settings
from backend.schemas.payroll import (
    PayrollErrorResponse,
    PayslipBatchRequest,
    PayslipCalculateRequest,
    PayslipVerifyResponse,
    StatutoryTablesResponse,
)
from compliance_vault.integrity import verify_payslip
from engines.schemas.payroll import BatchResult, Payslip
from engines.schemas.statutory import StatutoryConstants
from engines.services.batch_processor import compute_batch
from engines.services.formatting import describe_statutory_tables, summarize_payslip
from engines.services.payroll_calculator import compute_payslip
from engines.services.statutory_constants import get_statutory_constants

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    422: {"model": PayrollErrorResponse, "description": "Invalid employee data"},
    500: {"model": PayrollErrorResponse, "description": "Malformed statutory table"},
}


@router.post(
    "/calculate",
    response_model=Payslip,
    responses=ERROR_RESPONSES,
    summary="Calculate payslip",
    description="Compute a fully itemized payslip for one employee.",
)
async def calculate_payslip(
    request: PayslipCalculateRequest,
    constants: StatutoryConstants = Depends(get_statutory_constants),
    settings: Settings = Depends(get_settings),
) -> Payslip:
    """Calculate a single payslip."""
    payslip = compute_payslip(
        request.employee,
        constants,
        company=request.company or settings.company_name,
    )
    logger.info(
        f"Payslip computed for {payslip.employee_id} "
        f"(period {payslip.period}, net {payslip.net_pay})"
    )
    return payslip


@router.post(
    "/calculate-batch",
    response_model=BatchResult,
    responses=ERROR_RESPONSES,
    summary="Calculate payslip batch",
    description=(
        "Compute payslips for several employees. Invalid employees are "
        "reported under 'failed' without stopping the batch."
    ),
)
async def calculate_payslip_batch(
    request: PayslipBatchRequest,
    constants: StatutoryConstants = Depends(get_statutory_constants),
    settings: Settings = Depends(get_settings),
) -> BatchResult:
    """Calculate payslips for a list of employees."""
    if not request.employees:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Employee list is required",
        )
    if len(request.employees) > settings.batch_max_employees:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"Batch of {len(request.employees)} employees exceeds the "
                f"limit of {settings.batch_max_employees}"
            ),
        )

    return compute_batch(
        request.employees,
        constants,
        period=request.period,
        company=request.company or settings.company_name,
    )


@router.get(
    "/brackets",
    response_model=StatutoryTablesResponse,
    summary="Statutory tables",
    description="Rates, ceilings, income tax brackets and seniority tiers in use.",
)
async def get_brackets(
    constants: StatutoryConstants = Depends(get_statutory_constants),
    settings: Settings = Depends(get_settings),
) -> StatutoryTablesResponse:
    """Return the statutory constants, raw and formatted."""
    return StatutoryTablesResponse(
        instance=settings.instance,
        constants=constants.model_dump(mode="json"),
        baremes=describe_statutory_tables(constants),
    )


@router.post(
    "/summary",
    responses=ERROR_RESPONSES,
    summary="Formatted payslip recap",
    description="Calculate a payslip and return its recap as French MAD strings.",
)
async def summarize(
    request: PayslipCalculateRequest,
    constants: StatutoryConstants = Depends(get_statutory_constants),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Calculate a payslip and return the formatted recap block."""
    payslip = compute_payslip(
        request.employee,
        constants,
        company=request.company or settings.company_name,
    )
    return summarize_payslip(payslip)


@router.post(
    "/verify",
    response_model=PayslipVerifyResponse,
    summary="Verify payslip integrity",
    description="Check that a payslip's fingerprint matches its content.",
)
async def verify(payslip: Payslip) -> PayslipVerifyResponse:
    """Detect tampering of a previously computed payslip."""
    result = verify_payslip(payslip)
    if not result["is_valid"]:
        logger.warning(result["message"])
    return PayslipVerifyResponse(**result)
