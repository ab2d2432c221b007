from hr_docgen.drafts import (
    DraftController,
    FieldEdit,
    OfferController,
    OfferDraft,
    OpenSection,
    PayslipController,
    PayslipDraft,
    offer_title,
    payslip_title,
    reduce,
)
from hr_docgen.gate import OFFER_LAYOUT, PAYSLIP_LAYOUT, GateState, open_section
from hr_docgen.records import Deductions, Earnings, EmployeeProfile, OfferData
from hr_docgen.store import (
    OFFER_KEY,
    PAYSLIP_KEY,
    DraftPersistence,
    JsonFileStore,
    MemoryStore,
    merge_over_defaults,
)
from hr_docgen.totals import Totals, compute_totals, parse_amount
from hr_docgen.words import amount_in_words, number_to_words

__all__ = [
    "Deductions",
    "DraftController",
    "DraftPersistence",
    "Earnings",
    "EmployeeProfile",
    "FieldEdit",
    "GateState",
    "JsonFileStore",
    "MemoryStore",
    "OFFER_KEY",
    "OFFER_LAYOUT",
    "OfferController",
    "OfferData",
    "OfferDraft",
    "OpenSection",
    "PAYSLIP_KEY",
    "PAYSLIP_LAYOUT",
    "PayslipController",
    "PayslipDraft",
    "Totals",
    "amount_in_words",
    "compute_totals",
    "merge_over_defaults",
    "number_to_words",
    "offer_title",
    "open_section",
    "parse_amount",
    "payslip_title",
    "reduce",
]
