#!/usr/bin/env python3

from __future__ import annotations

import streamlit as st

from hr_docgen.config import Settings, load_settings
from hr_docgen.drafts import DraftController, OfferController, PayslipController
from hr_docgen.export import render_offer_pdf, render_payslip_pdf
from hr_docgen.gate import Section
from hr_docgen.records import MONTHS, field_label
from hr_docgen.store import DraftPersistence, JsonFileStore
from hr_docgen.totals import format_money

APP_SESSION_SCHEMA_VERSION = "2026-10-draft-engine-v1"
MULTILINE_FIELDS = {("offer", "address")}


def reset_session_if_schema_changed() -> None:
    existing = st.session_state.get("_app_schema_version")
    if existing == APP_SESSION_SCHEMA_VERSION:
        return
    for key in list(st.session_state.keys()):
        st.session_state.pop(key, None)
    st.session_state["_app_schema_version"] = APP_SESSION_SCHEMA_VERSION


def get_controllers(settings: Settings) -> dict[str, DraftController]:
    """One controller per document kind, created once per browser session."""
    if "controllers" not in st.session_state:
        persistence = DraftPersistence(JsonFileStore(settings.store_dir))
        st.session_state["controllers"] = {
            "offer": OfferController(
                persistence,
                designation=settings.offer_designation,
                department=settings.offer_department,
            ),
            "payslip": PayslipController(persistence),
        }
    controllers: dict[str, DraftController] = st.session_state["controllers"]
    return controllers


def widget_key(controller: DraftController, record_name: str, name: str) -> str:
    return f"{controller.key}.{record_name}.{name}"


def sync_widgets(controller: DraftController) -> None:
    """Push draft values into widget state (after load or reset)."""
    for section in controller.layout.sections:
        for record_name, name in section.inputs:
            value = getattr(getattr(controller.state, record_name), name)
            if (record_name, name) == ("employee", "month") and value not in MONTHS:
                # selectbox state must be one of its options
                continue
            st.session_state[widget_key(controller, record_name, name)] = value


def on_field_change(controller: DraftController, record_name: str, name: str) -> None:
    controller.edit(record_name, name, st.session_state[widget_key(controller, record_name, name)])


def on_section_click(controller: DraftController, section_id: str) -> None:
    controller.open_section(section_id)


def on_reset(controller: DraftController) -> None:
    confirmed = bool(st.session_state.get(f"{controller.key}.confirm_reset"))
    if controller.reset(lambda prompt: confirmed):
        sync_widgets(controller)
        st.session_state[f"{controller.key}.confirm_reset"] = False


def render_input(controller: DraftController, record_name: str, name: str) -> None:
    record = getattr(controller.state, record_name)
    label = field_label(record, name)
    key = widget_key(controller, record_name, name)
    kwargs = {"key": key, "on_change": on_field_change, "args": (controller, record_name, name)}
    if (record_name, name) == ("employee", "month"):
        st.selectbox(label, options=MONTHS, **kwargs)
    elif (record_name, name) in MULTILINE_FIELDS:
        st.text_area(label, **kwargs)
    else:
        st.text_input(label, **kwargs)


def render_review(controller: DraftController) -> None:
    st.markdown("#### Final Summary")
    for section in controller.layout.sections:
        for record_name, name in section.inputs:
            record = getattr(controller.state, record_name)
            st.markdown(f"**{field_label(record, name)}:** {getattr(record, name) or '-'}")


def render_section(controller: DraftController, section: Section) -> None:
    is_open = controller.open_section_id == section.id
    marker = "▾" if is_open else "▸"
    st.button(
        f"{marker} {section.title}",
        key=f"{controller.key}.toggle.{section.id}",
        on_click=on_section_click,
        args=(controller, section.id),
        use_container_width=True,
    )
    if not is_open:
        return
    with st.container(border=True):
        if section.inputs:
            for record_name, name in section.inputs:
                render_input(controller, record_name, name)
        else:
            render_review(controller)


def render_form(controller: DraftController, settings: Settings) -> None:
    if f"{controller.key}.synced" not in st.session_state:
        sync_widgets(controller)
        st.session_state[f"{controller.key}.synced"] = True

    form_col, preview_col = st.columns([1, 1])
    with form_col:
        if controller.error:
            st.error(controller.error)
        for section in controller.layout.sections:
            render_section(controller, section)

        st.checkbox("I want to clear all data (this cannot be undone)", key=f"{controller.key}.confirm_reset")
        reset_col, download_col = st.columns(2)
        with reset_col:
            st.button("Reset", key=f"{controller.key}.reset", on_click=on_reset, args=(controller,))
        with download_col:
            if isinstance(controller, PayslipController):
                content = render_payslip_pdf(controller, settings.company_name, settings.company_address)
            else:
                content = render_offer_pdf(controller, settings.company_name, settings.company_address)
            st.download_button(
                "Download PDF",
                data=content,
                file_name=f"{controller.document_title()}.pdf",
                mime="application/pdf",
                key=f"{controller.key}.download",
            )

    with preview_col:
        st.markdown(f"### {controller.document_title()}")
        if isinstance(controller, PayslipController):
            totals = controller.totals
            st.metric("Gross Earnings", format_money(totals.gross))
            st.metric("Total Deductions", format_money(totals.total_deductions))
            st.metric("Net Payable", format_money(totals.net))
            if controller.words:
                st.caption(f"Amount in words: Rupees {controller.words} Only")
        else:
            render_review(controller)


def main() -> None:
    st.set_page_config(page_title="Document Generator", page_icon="📄", layout="wide")
    reset_session_if_schema_changed()
    settings = load_settings()

    st.markdown(f"# {settings.company_name} Document Generator")
    st.markdown("Generate offer letters for new hires and monthly salary slips. Drafts are saved as you type.")

    controllers = get_controllers(settings)
    offer_tab, payslip_tab = st.tabs(["Offer Letter", "Payslip"])
    with offer_tab:
        render_form(controllers["offer"], settings)
    with payslip_tab:
        render_form(controllers["payslip"], settings)


if __name__ == "__main__":
    main()
