"""
Batch Processor Unit Tests

Per-employee failures are collected; a broken constants table aborts.
"""

from decimal import Decimal

import pytest

from engines.exceptions import ConfigurationError, ValidationError
from engines.services.batch_processor import compute_batch, parse_employee
from tests.factories import make_broken_constants, make_employee, make_employee_payload


class TestBatchProcessing:
    """Test compute_batch aggregation."""

    def test_one_invalid_employee_does_not_stop_batch(self, constants):
        employees = [
            make_employee(employee_id="EMP-001", base_salary=Decimal("8000")),
            make_employee(employee_id="EMP-002", base_salary=Decimal("0")),
            make_employee(employee_id="EMP-003", base_salary=Decimal("12000")),
        ]

        result = compute_batch(employees, constants)

        assert result.total == 3
        assert [s.employee_id for s in result.succeeded] == ["EMP-001", "EMP-003"]
        assert len(result.failed) == 1
        failure = result.failed[0]
        assert failure.employee_id == "EMP-002"
        assert failure.errors[0]["field"] == "base_salary"

    def test_failure_lists_every_field(self, constants):
        employees = [
            make_employee(employee_id=None, base_salary=None, number_of_children=-2),
        ]

        result = compute_batch(employees, constants)

        fields = {e["field"] for e in result.failed[0].errors}
        assert fields == {"employee_id", "base_salary", "number_of_children"}
        assert result.failed[0].employee_id is None

    def test_period_override(self, constants):
        employees = [
            make_employee(employee_id="EMP-001", period="2024-01"),
            make_employee(employee_id="EMP-002", period=None),
        ]

        result = compute_batch(employees, constants, period="2024-07", company="ACME")

        assert result.period == "2024-07"
        assert {s.payslip.period for s in result.succeeded} == {"2024-07"}
        assert {s.payslip.company for s in result.succeeded} == {"ACME"}
        # Caller's records keep their own period
        assert employees[0].period == "2024-01"

    def test_employee_period_kept_without_override(self, constants):
        result = compute_batch([make_employee(period="2024-02")], constants)
        assert result.succeeded[0].payslip.period == "2024-02"

    def test_totals(self, constants):
        employees = [
            make_employee(employee_id="EMP-001", base_salary=Decimal("3000")),
            make_employee(employee_id="EMP-002", base_salary=Decimal("3000")),
        ]

        result = compute_batch(employees, constants)

        # Net pay at 3 000 DH single is 2 797.80
        assert result.total_net_pay == Decimal("5595.60")
        assert result.total_employer_cost == sum(
            s.payslip.total_employer_cost for s in result.succeeded
        )

    def test_empty_batch(self, constants):
        result = compute_batch([], constants)
        assert result.total == 0
        assert result.total_net_pay == Decimal("0")

    def test_configuration_error_aborts_batch(self):
        employees = [
            make_employee(employee_id="EMP-001", base_salary=Decimal("3000")),
            make_employee(employee_id="EMP-002", base_salary=Decimal("20000")),
            make_employee(employee_id="EMP-003", base_salary=Decimal("3000")),
        ]

        with pytest.raises(ConfigurationError):
            compute_batch(employees, make_broken_constants())

    def test_excessive_rates_do_not_abort_batch(self, constants):
        employees = [
            make_employee(employee_id="EMP-A"),
            make_employee(
                employee_id="EMP-B",
                pension_contribution_rate=Decimal("0.5"),
                group_insurance_rate=Decimal("0.5"),
            ),
            make_employee(employee_id="EMP-C"),
        ]

        result = compute_batch(employees, constants)

        assert [s.employee_id for s in result.succeeded] == ["EMP-A", "EMP-C"]
        assert result.failed[0].employee_id == "EMP-B"
        assert {e["field"] for e in result.failed[0].errors} == {
            "pension_contribution_rate",
            "group_insurance_rate",
        }

    def test_malformed_raw_record_fails_alone(self, constants):
        employees = [
            make_employee_payload(employee_id="EMP-A"),
            make_employee_payload(employee_id="EMP-B", family_status="FOO"),
            make_employee_payload(employee_id="EMP-C"),
        ]

        result = compute_batch(employees, constants, period="2024-09")

        assert [s.employee_id for s in result.succeeded] == ["EMP-A", "EMP-C"]
        failure = result.failed[0]
        assert failure.employee_id == "EMP-B"
        assert failure.errors[0]["field"] == "family_status"

    def test_non_numeric_salary_in_raw_record(self, constants):
        employees = [
            {"matricule": "M-7", "salaire_base": "beaucoup"},
            make_employee_payload(),
        ]

        result = compute_batch(employees, constants)

        assert len(result.succeeded) == 1
        assert result.failed[0].employee_id == "M-7"
        assert result.failed[0].errors[0]["field"] in {"salaire_base", "base_salary"}

    def test_parse_employee_passes_models_through(self):
        employee = make_employee()
        assert parse_employee(employee) is employee

    def test_parse_employee_reports_pydantic_errors(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_employee({"employee_id": "EMP-Z", "number_of_children": "two"})

        assert exc_info.value.employee_id == "EMP-Z"
        assert exc_info.value.fields == ["number_of_children"]

    def test_json_shape(self, constants):
        result = compute_batch(
            [make_employee(), make_employee(employee_id="EMP-X", base_salary=Decimal("-1"))],
            constants,
        )
        data = result.model_dump(mode="json")

        assert set(data) >= {"succeeded", "failed", "total", "total_net_pay"}
        assert data["total"] == 2
        assert isinstance(data["total_net_pay"], float)
