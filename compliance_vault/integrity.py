"""
Payslip Integrity Verification

Fingerprints a payslip over (employee_id, period, net_pay) and detects
silent tampering before a payslip is exported or archived.
"""

import hashlib
import json
from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from engines.schemas.payroll import Payslip


def payslip_fingerprint(
    employee_id: str,
    period: str | None,
    net_pay: Decimal,
) -> str:
    """
    SHA-256 over the canonical JSON of the identifying payslip fields.

    net_pay is serialized as a fixed two-decimal string so that 12356 and
    12356.00 hash the same.
    """
    content = {
        "employee_id": employee_id,
        "period": period,
        "net_pay": f"{Decimal(net_pay):.2f}",
    }
    content_json = json.dumps(content, sort_keys=True)
    return hashlib.sha256(content_json.encode()).hexdigest()


def verify_payslip(payslip: "Payslip") -> dict:
    """
    Verify a payslip's fingerprint against its own content.

    Returns:
        Dict with is_valid, employee_id, message
    """
    computed = payslip_fingerprint(
        payslip.employee_id, payslip.period, payslip.net_pay
    )

    if computed != payslip.fingerprint:
        return {
            "is_valid": False,
            "employee_id": payslip.employee_id,
            "message": (
                f"Fingerprint mismatch for {payslip.employee_id}: "
                f"expected {computed[:16]}..., got {payslip.fingerprint[:16]}..."
            ),
        }

    return {
        "is_valid": True,
        "employee_id": payslip.employee_id,
        "message": "Payslip integrity verified",
    }
