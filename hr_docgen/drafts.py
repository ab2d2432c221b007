#!/usr/bin/env python3

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Callable, ClassVar, Union

from hr_docgen.errors import UnknownFieldError
from hr_docgen.gate import OFFER_LAYOUT, PAYSLIP_LAYOUT, FormLayout, GateState, open_section
from hr_docgen.records import (
    DEFAULT_OFFER_DEPARTMENT,
    DEFAULT_OFFER_DESIGNATION,
    Deductions,
    Earnings,
    EmployeeProfile,
    OfferData,
    offer_defaults,
    payslip_defaults,
    record_from_wire,
    record_to_wire,
    with_field,
)
from hr_docgen.store import OFFER_KEY, PAYSLIP_KEY, DraftPersistence
from hr_docgen.totals import compute_totals
from hr_docgen.utils.contracts import validate_output
from hr_docgen.words import amount_in_words

logger = logging.getLogger(__name__)

RESET_PROMPT = "Are you sure you want to clear all data? This cannot be undone."


@dataclass(frozen=True)
class FieldEdit:
    record: str
    field: str
    value: str


@dataclass(frozen=True)
class OpenSection:
    target: str


DraftEdit = Union[FieldEdit, OpenSection]


@dataclass(frozen=True)
class PayslipDraft:
    employee: EmployeeProfile
    earnings: Earnings
    deductions: Deductions
    gate: GateState

    RECORDS: ClassVar[tuple[str, ...]] = ("employee", "earnings", "deductions")
    LAYOUT: ClassVar[FormLayout] = PAYSLIP_LAYOUT


@dataclass(frozen=True)
class OfferDraft:
    offer: OfferData
    gate: GateState

    RECORDS: ClassVar[tuple[str, ...]] = ("offer",)
    LAYOUT: ClassVar[FormLayout] = OFFER_LAYOUT


DraftState = Union[PayslipDraft, OfferDraft]


def reduce(state: DraftState, edit: DraftEdit) -> DraftState:
    """Apply a single edit and return the next draft state; ``state`` is not modified."""
    if isinstance(edit, FieldEdit):
        if edit.record not in state.RECORDS:
            raise UnknownFieldError(
                f"{type(state).__name__} has no record '{edit.record}'. Expected one of: {', '.join(state.RECORDS)}"
            )
        record = getattr(state, edit.record)
        return replace(state, **{edit.record: with_field(record, edit.field, str(edit.value))})
    if isinstance(edit, OpenSection):
        return replace(state, gate=open_section(state.gate, edit.target, state.LAYOUT, state))
    raise TypeError(f"Unsupported edit: {edit!r}")


def payslip_to_wire(draft: PayslipDraft) -> dict[str, Any]:
    return {
        "employee": record_to_wire(draft.employee),
        "earnings": record_to_wire(draft.earnings),
        "deductions": record_to_wire(draft.deductions),
    }


def payslip_from_wire(payload: dict[str, Any], gate: GateState) -> PayslipDraft:
    return PayslipDraft(
        employee=record_from_wire(EmployeeProfile, payload["employee"]),
        earnings=record_from_wire(Earnings, payload["earnings"]),
        deductions=record_from_wire(Deductions, payload["deductions"]),
        gate=gate,
    )


def offer_to_wire(draft: OfferDraft) -> dict[str, Any]:
    return record_to_wire(draft.offer)


def offer_from_wire(payload: dict[str, Any], gate: GateState) -> OfferDraft:
    return OfferDraft(offer=record_from_wire(OfferData, payload), gate=gate)


def payslip_title(employee: EmployeeProfile) -> str:
    return f"Payslip_{employee.name or 'Employee'}_{employee.month}"


def offer_title(offer: OfferData) -> str:
    name = re.sub(r"\s+", "_", offer.candidate_name)
    return f"Offer_Letter_{name or 'Candidate'}"


class DraftController(ABC):
    """
    Owns the single mutable reference to a draft.

    Every edit runs ``reduce``, then refreshes derived values, then persists
    the draft, in that order. Navigation edits only move the gate and are not
    persisted (the stored payload holds field values only).
    """

    key: ClassVar[str]
    schema_name: ClassVar[str]

    def __init__(self, persistence: DraftPersistence) -> None:
        self.persistence = persistence
        self.defaults = self.default_draft()
        payload = self.persistence.load(self.key, self.to_wire(self.defaults))
        self.state = self.from_wire(payload, self.defaults.gate)
        self.refresh()

    @abstractmethod
    def default_draft(self) -> Any: ...

    @abstractmethod
    def to_wire(self, draft: Any) -> dict[str, Any]: ...

    @abstractmethod
    def from_wire(self, payload: dict[str, Any], gate: GateState) -> Any: ...

    def refresh(self) -> None:
        """Recompute derived values after a change."""

    @abstractmethod
    def document_title(self) -> str: ...

    @property
    def layout(self) -> FormLayout:
        return self.state.LAYOUT

    @property
    def open_section_id(self) -> str | None:
        return self.state.gate.open_section

    @property
    def error(self) -> str:
        return self.state.gate.error

    def apply(self, edit: DraftEdit) -> Any:
        self.state = reduce(self.state, edit)
        if isinstance(edit, FieldEdit):
            logger.debug(f"{self.key}: {edit.record}.{edit.field} updated")
            try:
                self.refresh()
            finally:
                self.save()
        return self.state

    def edit(self, record: str, field: str, value: str) -> Any:
        return self.apply(FieldEdit(record, field, value))

    def open_section(self, target: str) -> bool:
        """Try to navigate; returns False when the open section blocked the move."""
        self.apply(OpenSection(target))
        return not self.state.gate.error

    def save(self) -> bool:
        payload = self.to_wire(self.state)
        validate_output(payload, self.schema_name, mode="REVIEW")
        return self.persistence.save(self.key, payload)

    def reset(self, confirm: Callable[[str], bool]) -> bool:
        """Restore defaults and erase the stored copy, only if ``confirm`` agrees."""
        if not confirm(RESET_PROMPT):
            return False
        self.state = self.default_draft()
        self.persistence.clear(self.key)
        self.refresh()
        logger.debug(f"{self.key}: draft reset to defaults")
        return True


class PayslipController(DraftController):
    key = PAYSLIP_KEY
    schema_name = "payslip_draft"

    def __init__(self, persistence: DraftPersistence, today: date | None = None) -> None:
        self.today = today
        super().__init__(persistence)

    def default_draft(self) -> PayslipDraft:
        employee, earnings, deductions = payslip_defaults(self.today)
        return PayslipDraft(employee, earnings, deductions, PAYSLIP_LAYOUT.initial())

    def to_wire(self, draft: PayslipDraft) -> dict[str, Any]:
        return payslip_to_wire(draft)

    def from_wire(self, payload: dict[str, Any], gate: GateState) -> PayslipDraft:
        return payslip_from_wire(payload, gate)

    def refresh(self) -> None:
        self.totals = compute_totals(self.state.earnings, self.state.deductions)
        try:
            self.words = amount_in_words(self.totals.net)
        except ValueError as e:
            logger.warning(f"{self.key}: amount in words unavailable: {e}")
            self.words = ""

    def document_title(self) -> str:
        return payslip_title(self.state.employee)


class OfferController(DraftController):
    key = OFFER_KEY
    schema_name = "offer_draft"

    def __init__(
        self,
        persistence: DraftPersistence,
        today: date | None = None,
        designation: str = DEFAULT_OFFER_DESIGNATION,
        department: str = DEFAULT_OFFER_DEPARTMENT,
    ) -> None:
        self.today = today
        self.designation = designation
        self.department = department
        super().__init__(persistence)

    def default_draft(self) -> OfferDraft:
        offer = offer_defaults(self.today, designation=self.designation, department=self.department)
        return OfferDraft(offer, OFFER_LAYOUT.initial())

    def to_wire(self, draft: OfferDraft) -> dict[str, Any]:
        return offer_to_wire(draft)

    def from_wire(self, payload: dict[str, Any], gate: GateState) -> OfferDraft:
        return offer_from_wire(payload, gate)

    def document_title(self) -> str:
        return offer_title(self.state.offer)
