"""
Payroll Engine Exceptions

Two failure kinds only:

- ValidationError: the employee record is incomplete or out of domain.
  Recoverable by the caller; lists every violated field.
- ConfigurationError: the statutory constants table is malformed.
  Not recoverable by retrying; abort and surface as a server fault.
"""


class PayrollError(Exception):
    """Base class for payroll engine errors."""

    code: str = "PAYROLL_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(PayrollError):
    """Caller-supplied employee data failed domain validation."""

    code = "VALIDATION_ERROR"

    def __init__(self, errors: list[dict[str, str]], employee_id: str | None = None):
        self.errors = errors
        self.employee_id = employee_id
        message = "; ".join(f"{e['field']}: {e['message']}" for e in errors)
        super().__init__(message or "Invalid employee data")

    @property
    def fields(self) -> list[str]:
        return [e["field"] for e in self.errors]


class ConfigurationError(PayrollError):
    """The statutory constants table is malformed (gap, overlap, ordering)."""

    code = "CONFIGURATION_ERROR"
