"""
CLI Entry Points: hr-payslip, hr-offer

Fill, inspect, reset and export the locally persisted payslip and offer letter drafts.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from hr_docgen.config import Settings, load_settings
from hr_docgen.drafts import DraftController, FieldEdit, OfferController, PayslipController
from hr_docgen.errors import UnknownFieldError, UnknownSectionError
from hr_docgen.export import export_pdf
from hr_docgen.records import MONTHS, field_label
from hr_docgen.store import DraftPersistence, JsonFileStore
from hr_docgen.totals import as_float, format_money
from hr_docgen.utils import console
from hr_docgen.utils.contracts import ContractError

KINDS = ("payslip", "offer")
DESCRIPTIONS = {
    "payslip": "Fill in and export a monthly payslip draft.",
    "offer": "Fill in and export an offer letter draft.",
}


def build_parser(kind: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=f"hr-{kind}", description=DESCRIPTIONS[kind])
    parser.add_argument("--store-dir", type=Path, default=None, help="Directory holding saved drafts.")
    parser.add_argument("--settings", type=Path, default=None, help="Optional JSON settings file.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    commands = parser.add_subparsers(dest="command", required=True)

    show = commands.add_parser("show", help="Show the current draft.")
    show.add_argument("--json", action="store_true", help="Output machine-readable JSON.")

    set_cmd = commands.add_parser("set", help="Set one or more fields (RECORD.FIELD=VALUE).")
    set_cmd.add_argument("assignments", nargs="+", help="e.g. employee.name='Asha Rao' earnings.basic=30000")

    commands.add_parser("fill", help="Walk through the form sections interactively.")

    reset = commands.add_parser("reset", help="Clear the draft and its saved copy.")
    reset.add_argument("--yes", action="store_true", help="Do not ask for confirmation.")

    export = commands.add_parser("export", help="Write the document as a PDF.")
    export.add_argument("--out", type=Path, default=None, help="Output path (default: <document title>.pdf).")
    return parser


def make_controller(kind: str, settings: Settings) -> DraftController:
    persistence = DraftPersistence(JsonFileStore(settings.store_dir))
    if kind == "payslip":
        return PayslipController(persistence)
    return OfferController(
        persistence,
        designation=settings.offer_designation,
        department=settings.offer_department,
    )


def parse_assignment(text: str, controller: DraftController) -> FieldEdit:
    target, sep, value = text.partition("=")
    if not sep:
        raise UnknownFieldError(f"Expected RECORD.FIELD=VALUE, got '{text}'")
    record, dot, name = target.strip().rpartition(".")
    if not dot:
        records = controller.state.RECORDS
        if len(records) != 1:
            raise UnknownFieldError(f"Field '{target}' needs a record prefix: one of {', '.join(records)}")
        record = records[0]
    return FieldEdit(record=record, field=name, value=value)


def draft_rows(controller: DraftController) -> list[list[str]]:
    rows: list[list[str]] = []
    for section in controller.layout.sections:
        for record_name, name in section.inputs:
            record = getattr(controller.state, record_name)
            rows.append([section.title, field_label(record, name), getattr(record, name) or "-"])
    return rows


def draft_to_json(controller: DraftController) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "key": controller.key,
        "title": controller.document_title(),
        "draft": controller.to_wire(controller.state),
    }
    if isinstance(controller, PayslipController):
        payload["totals"] = {
            "gross": as_float(controller.totals.gross),
            "total_deductions": as_float(controller.totals.total_deductions),
            "net": as_float(controller.totals.net),
        }
        payload["amount_in_words"] = controller.words
    return payload


def cmd_show(controller: DraftController, args: argparse.Namespace) -> int:
    if args.json:
        print(json.dumps(draft_to_json(controller), indent=2, ensure_ascii=False))
        return 0

    console.print_table(controller.document_title(), ["Section", "Field", "Value"], draft_rows(controller))
    if isinstance(controller, PayslipController):
        totals = controller.totals
        console.print_table(
            "Totals",
            ["Gross Earnings", "Total Deductions", "Net Payable"],
            [[format_money(totals.gross), format_money(totals.total_deductions), format_money(totals.net)]],
        )
        if controller.words:
            print(f"Amount in words: {controller.words}")
    return 0


def cmd_set(controller: DraftController, args: argparse.Namespace) -> int:
    edits = [parse_assignment(text, controller) for text in args.assignments]
    for edit in edits:
        controller.apply(edit)
    console.print_success(f"Updated {len(edits)} field(s) in {controller.document_title()}.")
    return 0


def prompt_field(controller: DraftController, record_name: str, name: str) -> None:
    record = getattr(controller.state, record_name)
    current = getattr(record, name)
    label = field_label(record, name)
    if record_name == "employee" and name == "month":
        value = console.ask_choice(label, MONTHS, default=current or None)
    else:
        value = console.ask_input(label, default=current or None, required=False)
    if value != current:
        controller.edit(record_name, name, value)


def run_wizard(controller: DraftController) -> None:
    """
    Walk the sections in order through the validation gate.

    Each section is prompted field by field; moving on goes through the gate,
    so a section with blank required fields is shown again with the gate's
    error. Leaving the last section collapses the form.
    """
    section_ids = controller.layout.section_ids
    if controller.open_section_id is None:
        controller.open_section(section_ids[0])

    while controller.open_section_id is not None:
        current = controller.open_section_id
        section = controller.layout.section(current)
        console.print_step(section.title)
        if section.inputs:
            for record_name, name in section.inputs:
                prompt_field(controller, record_name, name)
        else:
            console.print_table("Final Summary", ["Section", "Field", "Value"], draft_rows(controller))

        index = section_ids.index(current)
        target = section_ids[index + 1] if index + 1 < len(section_ids) else current
        if not controller.open_section(target):
            console.print_error(controller.error)


def cmd_fill(controller: DraftController, args: argparse.Namespace) -> int:
    if not console.is_interactive():
        console.print_error("The fill wizard needs an interactive terminal; use 'set' instead.")
        return 2
    run_wizard(controller)
    console.print_success(f"Draft saved: {controller.document_title()}")
    return 0


def cmd_reset(controller: DraftController, args: argparse.Namespace) -> int:
    if args.yes:
        controller.reset(lambda prompt: True)
    elif not controller.reset(lambda prompt: console.ask_confirm(prompt, default=False)):
        console.print_warning("Reset cancelled.")
        return 1
    console.print_success("Draft cleared.")
    return 0


def cmd_export(controller: DraftController, args: argparse.Namespace, settings: Settings) -> int:
    if controller.layout.validators and not all(
        controller.layout.is_valid(section_id, controller.state) for section_id in controller.layout.section_ids
    ):
        console.print_warning("Some required fields are empty; the document will have blanks.")
    path = export_pdf(
        controller,
        out_path=args.out,
        company_name=settings.company_name,
        company_address=settings.company_address,
    )
    console.print_success(f"PDF written: {path}")
    return 0


def run(kind: str, argv: list[str] | None = None) -> int:
    args = build_parser(kind).parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.settings, store_dir=args.store_dir)
    except (FileNotFoundError, ContractError, json.JSONDecodeError) as e:
        console.print_error(f"Invalid settings: {e}")
        return 2

    controller = make_controller(kind, settings)
    try:
        if args.command == "show":
            return cmd_show(controller, args)
        if args.command == "set":
            return cmd_set(controller, args)
        if args.command == "fill":
            return cmd_fill(controller, args)
        if args.command == "reset":
            return cmd_reset(controller, args)
        return cmd_export(controller, args, settings)
    except (UnknownFieldError, UnknownSectionError) as e:
        console.print_error(str(e))
        return 2


def payslip_main() -> None:
    sys.exit(run("payslip"))


def offer_main() -> None:
    sys.exit(run("offer"))


if __name__ == "__main__":
    if len(sys.argv) < 2 or sys.argv[1] not in KINDS:
        print(f"Usage: python -m hr_docgen.cli.draft {{{','.join(KINDS)}}} <command> ...")
        sys.exit(2)
    sys.exit(run(sys.argv[1], sys.argv[2:]))
