"""
Tests for payslip fingerprinting and tamper detection.
"""

import hashlib
import json
from decimal import Decimal

from compliance_vault.integrity import payslip_fingerprint, verify_payslip
from engines.services.payroll_calculator import compute_payslip
from tests.factories import make_employee


def _expected_fingerprint(employee_id: str, period: str | None, net_pay: str) -> str:
    """Compute the SHA-256 fingerprint independently."""
    content_json = json.dumps(
        {"employee_id": employee_id, "net_pay": net_pay, "period": period},
        sort_keys=True,
    )
    return hashlib.sha256(content_json.encode()).hexdigest()


class TestFingerprint:
    """Test payslip_fingerprint."""

    def test_matches_canonical_json(self):
        result = payslip_fingerprint("EMP-001", "2024-06", Decimal("12355.99"))
        assert result == _expected_fingerprint("EMP-001", "2024-06", "12355.99")

    def test_trailing_zeros_ignored(self):
        assert payslip_fingerprint("EMP-001", "2024-06", Decimal("12356")) == (
            payslip_fingerprint("EMP-001", "2024-06", Decimal("12356.00"))
        )

    def test_each_field_changes_hash(self):
        base = payslip_fingerprint("EMP-001", "2024-06", Decimal("100.00"))
        assert payslip_fingerprint("EMP-002", "2024-06", Decimal("100.00")) != base
        assert payslip_fingerprint("EMP-001", "2024-07", Decimal("100.00")) != base
        assert payslip_fingerprint("EMP-001", "2024-06", Decimal("100.01")) != base

    def test_missing_period(self):
        assert payslip_fingerprint("EMP-001", None, Decimal("1")) == (
            _expected_fingerprint("EMP-001", None, "1.00")
        )


class TestVerifyPayslip:
    """Test verify_payslip."""

    def test_fresh_payslip_is_valid(self, constants):
        payslip = compute_payslip(make_employee(), constants)
        result = verify_payslip(payslip)

        assert result["is_valid"] is True
        assert result["employee_id"] == "EMP-001"

    def test_tampered_net_pay_detected(self, constants):
        payslip = compute_payslip(make_employee(), constants)
        tampered = payslip.model_copy(update={"net_pay": payslip.net_pay + Decimal("500")})

        result = verify_payslip(tampered)

        assert result["is_valid"] is False
        assert "mismatch" in result["message"]

    def test_tampered_period_detected(self, constants):
        payslip = compute_payslip(make_employee(), constants)
        tampered = payslip.model_copy(update={"period": "2023-01"})

        assert verify_payslip(tampered)["is_valid"] is False

    def test_survives_json_round_trip(self, constants):
        payslip = compute_payslip(make_employee(base_salary=Decimal("9876.54")), constants)
        restored = type(payslip).model_validate_json(payslip.model_dump_json())

        assert verify_payslip(restored)["is_valid"] is True
