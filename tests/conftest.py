from datetime import date
from typing import Any

import pytest

from hr_docgen.store import DraftPersistence, MemoryStore


@pytest.fixture
def today() -> date:
    return date(2026, 3, 5)


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def persistence(memory_store: MemoryStore) -> DraftPersistence:
    return DraftPersistence(memory_store)


@pytest.fixture
def complete_employee() -> dict[str, str]:
    """Every EmployeeProfile field filled in, keyed by attribute name."""
    return {
        "month": "March",
        "year": "2026",
        "name": "Asha Rao",
        "emp_id": "AG-001",
        "date_of_joining": "2024-08-06",
        "paid_days": "31",
        "department": "Engineering",
        "designation": "App Developer",
        "bank_name": "HDFC Bank",
        "account_number": "1234567890",
        "pan": "ABCDE1234F",
    }


@pytest.fixture
def saved_payslip_payload() -> dict[str, Any]:
    """A payslip draft as persisted under the payslipData key."""
    return {
        "employee": {
            "month": "January",
            "year": "2026",
            "empName": "Ravi Kumar",
            "empId": "AG-007",
            "doj": "2023-01-02",
            "paidDays": "30",
            "department": "Finance",
            "designation": "Analyst",
            "bankName": "SBI",
            "accNumber": "998877",
            "pan": "PQRSX9876Z",
        },
        "earnings": {"basic": "30000", "hra": "12000", "medical": "1250", "other": ""},
        "deductions": {"pf": "1800", "tds": "", "pt": "200", "esi": ""},
    }
