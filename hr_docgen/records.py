#!/usr/bin/env python3

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from datetime import date
from typing import Any, TypeVar

from hr_docgen.errors import UnknownFieldError

MONTHS = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]
DEFAULT_OFFER_DESIGNATION = "Trainee App Developer"
DEFAULT_OFFER_DEPARTMENT = "Technology & Application Development"

RecordT = TypeVar("RecordT")


def slot(label: str, wire: str | None = None, required: bool = False) -> Any:
    return field(default="", metadata={"label": label, "wire": wire, "required": required})


@dataclass(frozen=True)
class EmployeeProfile:
    month: str = slot("Month", required=True)
    year: str = slot("Year", required=True)
    name: str = slot("Employee Name", wire="empName", required=True)
    emp_id: str = slot("Employee ID", wire="empId", required=True)
    date_of_joining: str = slot("Date of Joining", wire="doj", required=True)
    paid_days: str = slot("Paid Days", wire="paidDays", required=True)
    department: str = slot("Department", required=True)
    designation: str = slot("Designation", required=True)
    bank_name: str = slot("Bank Name", wire="bankName", required=True)
    account_number: str = slot("Account Number", wire="accNumber", required=True)
    pan: str = slot("PAN Number", required=True)


@dataclass(frozen=True)
class Earnings:
    basic: str = slot("Basic Salary", required=True)
    hra: str = slot("HRA")
    medical: str = slot("Medical Allowance")
    other: str = slot("Other Allowance")


@dataclass(frozen=True)
class Deductions:
    pf: str = slot("Provident Fund (PF)")
    tds: str = slot("TDS")
    pt: str = slot("Professional Tax")
    esi: str = slot("ESI")


@dataclass(frozen=True)
class OfferData:
    candidate_name: str = slot("Full Name", wire="candidateName", required=True)
    address: str = slot("Address")
    designation: str = slot("Position / Designation", required=True)
    department: str = slot("Department", required=True)
    ctc: str = slot("Annual CTC (₹)", required=True)
    performance_bonus: str = slot("Performance Bonus (₹)", wire="performanceBonus")
    offer_date: str = slot("Offer Date", wire="offerDate", required=True)
    joining_date: str = slot("Date of Joining", wire="joiningDate")
    expiry_date: str = slot("Offer Expiry Date", wire="expiryDate")


def field_names(record: Any) -> tuple[str, ...]:
    return tuple(f.name for f in fields(record))


def field_label(record: Any, name: str) -> str:
    for f in fields(record):
        if f.name == name:
            return str(f.metadata["label"])
    raise UnknownFieldError(f"{type(record).__name__} has no field '{name}'")


def wire_keys(record: Any) -> dict[str, str]:
    """Map each attribute name to its key in the persisted JSON payload."""
    return {f.name: f.metadata.get("wire") or f.name for f in fields(record)}


def record_to_wire(record: Any) -> dict[str, str]:
    keys = wire_keys(record)
    return {keys[name]: getattr(record, name) for name in field_names(record)}


def record_from_wire(record_cls: type[RecordT], payload: dict[str, Any]) -> RecordT:
    """
    Build a record from a wire payload that has already been merged over defaults.

    Missing keys keep the dataclass default; values are stored as strings.
    """
    values: dict[str, str] = {}
    for attr, key in wire_keys(record_cls).items():
        if key in payload and payload[key] is not None:
            values[attr] = str(payload[key])
    return record_cls(**values)


def with_field(record: RecordT, name: str, value: str) -> RecordT:
    if name not in field_names(record):
        raise UnknownFieldError(f"{type(record).__name__} has no field '{name}'")
    return replace(record, **{name: value})


def payslip_defaults(today: date | None = None) -> tuple[EmployeeProfile, Earnings, Deductions]:
    today = today or date.today()
    employee = EmployeeProfile(month=MONTHS[today.month - 1], year=str(today.year))
    return employee, Earnings(), Deductions()


def offer_defaults(
    today: date | None = None,
    designation: str = DEFAULT_OFFER_DESIGNATION,
    department: str = DEFAULT_OFFER_DEPARTMENT,
) -> OfferData:
    today = today or date.today()
    return OfferData(designation=designation, department=department, offer_date=today.isoformat())
