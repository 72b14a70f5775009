"""
Payroll Batch Processor

Computes payslips for many employees in one call. A rejected employee is
recorded and skipped; a broken constants table aborts the whole batch,
since every later calculation would be wrong too.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

import pydantic

from engines.exceptions import ConfigurationError, ValidationError
from engines.schemas.payroll import (
    BatchFailure,
    BatchResult,
    BatchSuccess,
    EmployeePayrollInput,
)
from engines.schemas.statutory import StatutoryConstants
from engines.services.payroll_calculator import compute_payslip

logger = logging.getLogger(__name__)

ID_KEYS = ("employee_id", "matricule")


def parse_employee(record: EmployeePayrollInput | Mapping[str, Any]) -> EmployeePayrollInput:
    """
    Turn a raw batch record into an employee input.

    Raises:
        ValidationError: field errors reported by pydantic for this record
    """
    if isinstance(record, EmployeePayrollInput):
        return record

    try:
        return EmployeePayrollInput.model_validate(record)
    except pydantic.ValidationError as exc:
        errors = [
            {
                "field": ".".join(str(part) for part in error["loc"]) or "employee",
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        employee_id = None
        if isinstance(record, Mapping):
            employee_id = next(
                (str(record[key]) for key in ID_KEYS if record.get(key) is not None),
                None,
            )
        raise ValidationError(errors, employee_id=employee_id) from exc


def compute_batch(
    employees: Iterable[EmployeePayrollInput | Mapping[str, Any]],
    constants: StatutoryConstants,
    period: str | None = None,
    company: str | None = None,
) -> BatchResult:
    """
    Compute payslips for every employee, collecting successes and failures.

    Args:
        employees: Employee records for the period, parsed or raw
        constants: Statutory constants table
        period: When given, overrides each employee's own period
        company: Pass-through label copied onto every payslip

    Raises:
        ConfigurationError: constants table is malformed (batch aborted)
    """
    result = BatchResult(period=period)

    for record in employees:
        employee_id = None
        try:
            employee = parse_employee(record)
            employee_id = employee.employee_id
            if period is not None:
                employee = employee.model_copy(update={"period": period})
            payslip = compute_payslip(employee, constants, company=company)
        except ValidationError as exc:
            employee_id = employee_id or exc.employee_id
            logger.warning(
                f"Payslip rejected for employee {employee_id}: {exc.message}"
            )
            result.failed.append(
                BatchFailure(employee_id=employee_id, errors=exc.errors)
            )
            continue
        except ConfigurationError as exc:
            logger.critical(
                f"Constants table {constants.version} is malformed, "
                f"aborting batch at employee {employee_id}: {exc.message}"
            )
            raise

        result.succeeded.append(
            BatchSuccess(employee_id=payslip.employee_id, payslip=payslip)
        )

    logger.info(
        f"Batch complete: {len(result.succeeded)} succeeded, "
        f"{len(result.failed)} failed"
    )
    return result
