"""
Section Validation Gate

Decides which single form section is expanded and refuses to leave a section
whose required fields are still empty. There is no enforced order between
sections, only the local rule "don't leave until valid".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from hr_docgen.errors import UnknownSectionError
from hr_docgen.records import Deductions, Earnings, EmployeeProfile, field_names

VALIDATION_MESSAGE = "Please fill required fields (*) before moving on."

Validator = Callable[[Any], bool]
FieldRef = tuple[str, str]


@dataclass(frozen=True)
class GateState:
    open_section: str | None
    error: str = ""


@dataclass(frozen=True)
class Section:
    id: str
    title: str
    inputs: tuple[FieldRef, ...] = ()


@dataclass(frozen=True)
class FormLayout:
    sections: tuple[Section, ...]
    validators: dict[str, Validator] = field(default_factory=dict)

    @property
    def section_ids(self) -> tuple[str, ...]:
        return tuple(section.id for section in self.sections)

    def section(self, section_id: str) -> Section:
        for section in self.sections:
            if section.id == section_id:
                return section
        raise UnknownSectionError(f"Unknown section '{section_id}'. Expected one of: {', '.join(self.section_ids)}")

    def initial(self) -> GateState:
        return GateState(open_section=self.sections[0].id)

    def is_valid(self, section_id: str, draft: Any) -> bool:
        validator = self.validators.get(section_id)
        return validator is None or validator(draft)


def filled(value: str | None) -> bool:
    return (value or "").strip() != ""


def open_section(gate: GateState, target: str, layout: FormLayout, draft: Any) -> GateState:
    """
    Attempt to move the accordion to ``target``.

    Returns the new gate state. When the currently open section fails its
    validator the gate stays put and carries the standing error message;
    any successful transition clears it. Targeting the open section collapses it.
    """
    layout.section(target)
    current = gate.open_section
    if current is not None and not layout.is_valid(current, draft):
        return GateState(open_section=current, error=VALIDATION_MESSAGE)
    if current == target:
        return GateState(open_section=None)
    return GateState(open_section=target)


def refs(record: str, record_cls: type) -> tuple[FieldRef, ...]:
    return tuple((record, name) for name in field_names(record_cls))


PAYSLIP_LAYOUT = FormLayout(
    sections=(
        Section("employee", "Employee Details", refs("employee", EmployeeProfile)),
        Section("salary", "Salary Structure", refs("earnings", Earnings) + refs("deductions", Deductions)),
    ),
    validators={
        "employee": lambda draft: all(filled(getattr(draft.employee, name)) for name in field_names(draft.employee)),
        "salary": lambda draft: filled(draft.earnings.basic),
    },
)

OFFER_LAYOUT = FormLayout(
    sections=(
        Section("candidate", "Candidate Details", (("offer", "candidate_name"), ("offer", "address"))),
        Section(
            "job",
            "Job Details",
            (
                ("offer", "designation"),
                ("offer", "department"),
                ("offer", "offer_date"),
                ("offer", "joining_date"),
                ("offer", "expiry_date"),
            ),
        ),
        Section("salary", "Salary Details", (("offer", "ctc"), ("offer", "performance_bonus"))),
        Section("review", "Review Details"),
    ),
    validators={
        "candidate": lambda draft: filled(draft.offer.candidate_name),
        "job": lambda draft: (
            filled(draft.offer.designation) and filled(draft.offer.department) and filled(draft.offer.offer_date)
        ),
        "salary": lambda draft: filled(draft.offer.ctc),
    },
)
