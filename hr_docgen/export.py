"""
PDF export for payslips and offer letters.

Pages are A4 with 15 mm margins. The PDF title metadata is the document title
(e.g. ``Payslip_John Doe_March``), which is also the default file name.
"""

from __future__ import annotations

import io
import logging
from decimal import Decimal
from pathlib import Path

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from hr_docgen.drafts import DraftController, OfferController, PayslipController
from hr_docgen.records import field_label, field_names
from hr_docgen.totals import parse_amount

logger = logging.getLogger(__name__)

PAGE_SIZE = A4
MARGIN = 15 * mm
BODY_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"


def pdf_money(value: Decimal) -> str:
    # The base-14 fonts have no rupee glyph.
    return f"Rs. {value:,.2f}"


class PageWriter:
    """Top-down text cursor over a reportlab canvas that starts a new page when full."""

    def __init__(self, pdf: canvas.Canvas) -> None:
        self.pdf = pdf
        self.width, self.height = PAGE_SIZE
        self.left = MARGIN
        self.right = self.width - MARGIN
        self.y = self.height - MARGIN

    @property
    def text_width(self) -> float:
        return self.right - self.left

    def ensure_room(self, needed: float) -> None:
        if self.y - needed < MARGIN:
            self.pdf.showPage()
            self.y = self.height - MARGIN

    def line(self, text: str, size: int = 10, bold: bool = False, gap: float = 4) -> None:
        self.ensure_room(size + gap)
        self.y -= size
        self.pdf.setFont(BOLD_FONT if bold else BODY_FONT, size)
        self.pdf.drawString(self.left, self.y, text)
        self.y -= gap

    def centered(self, text: str, size: int = 14, bold: bool = True, gap: float = 6) -> None:
        self.ensure_room(size + gap)
        self.y -= size
        self.pdf.setFont(BOLD_FONT if bold else BODY_FONT, size)
        self.pdf.drawCentredString(self.width / 2, self.y, text)
        self.y -= gap

    def paragraph(self, text: str, size: int = 10, gap: float = 8) -> None:
        for chunk in simpleSplit(text, BODY_FONT, size, self.text_width):
            self.line(chunk, size=size, gap=3)
        self.y -= gap

    def columns(self, cells: list[str], size: int = 10, bold: bool = False, gap: float = 5) -> None:
        self.ensure_room(size + gap)
        self.y -= size
        self.pdf.setFont(BOLD_FONT if bold else BODY_FONT, size)
        step = self.text_width / len(cells)
        for index, cell in enumerate(cells):
            self.pdf.drawString(self.left + index * step, self.y, cell)
        self.y -= gap

    def rule(self, gap: float = 6) -> None:
        self.ensure_room(gap * 2)
        self.y -= gap
        self.pdf.line(self.left, self.y, self.right, self.y)
        self.y -= gap


def new_canvas(target: io.BytesIO, title: str, author: str) -> canvas.Canvas:
    pdf = canvas.Canvas(target, pagesize=PAGE_SIZE)
    pdf.setTitle(title)
    pdf.setAuthor(author)
    return pdf


def render_payslip_pdf(controller: PayslipController, company_name: str, company_address: str = "") -> bytes:
    draft = controller.state
    employee, earnings, deductions = draft.employee, draft.earnings, draft.deductions
    totals = controller.totals

    buffer = io.BytesIO()
    pdf = new_canvas(buffer, controller.document_title(), company_name)
    page = PageWriter(pdf)

    page.centered(company_name, size=16)
    if company_address:
        page.centered(company_address, size=9, bold=False)
    page.centered(f"Payslip for the month of {employee.month} {employee.year}", size=12)
    page.rule()

    details = [
        (("name", employee.name), ("emp_id", employee.emp_id)),
        (("designation", employee.designation), ("department", employee.department)),
        (("date_of_joining", employee.date_of_joining), ("paid_days", employee.paid_days)),
        (("bank_name", employee.bank_name), ("account_number", employee.account_number)),
        (("pan", employee.pan), None),
    ]
    for left, right in details:
        cells = [field_label(employee, left[0]) + ":", left[1]]
        if right is not None:
            cells += [field_label(employee, right[0]) + ":", right[1]]
        else:
            cells += ["", ""]
        page.columns(cells)
    page.rule()

    page.columns(["Earnings", "Amount", "Deductions", "Amount"], bold=True)
    earning_rows = [(field_label(earnings, name), getattr(earnings, name)) for name in field_names(earnings)]
    deduction_rows = [(field_label(deductions, name), getattr(deductions, name)) for name in field_names(deductions)]
    for (earning, earned), (deduction, deducted) in zip(earning_rows, deduction_rows):
        page.columns([earning, pdf_money(parse_amount(earned)), deduction, pdf_money(parse_amount(deducted))])
    page.rule()
    page.columns(
        ["Gross Earnings", pdf_money(totals.gross), "Total Deductions", pdf_money(totals.total_deductions)],
        bold=True,
    )
    page.rule()

    page.line(f"Net Payable: {pdf_money(totals.net)}", size=12, bold=True)
    if controller.words:
        page.paragraph(f"Amount in words: Rupees {controller.words} Only")
    page.line("This is a computer-generated payslip and does not require a signature.", size=8)

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def render_offer_pdf(controller: OfferController, company_name: str, company_address: str = "") -> bytes:
    offer = controller.state.offer

    buffer = io.BytesIO()
    pdf = new_canvas(buffer, controller.document_title(), company_name)
    page = PageWriter(pdf)

    page.centered(company_name, size=16)
    if company_address:
        page.centered(company_address, size=9, bold=False)
    page.rule()

    page.line(f"Date: {offer.offer_date}")
    page.line(offer.candidate_name or "Candidate", bold=True)
    for address_line in offer.address.splitlines():
        page.line(address_line)
    page.line("")
    page.line("Subject: Offer of Employment", bold=True, gap=10)

    page.paragraph(f"Dear {offer.candidate_name or 'Candidate'},")
    page.paragraph(
        f"We are pleased to offer you the position of {offer.designation} in the {offer.department} "
        f"department at {company_name}."
        + (f" Your expected date of joining is {offer.joining_date}." if offer.joining_date else "")
    )
    compensation = f"Your annual Cost to Company (CTC) will be {pdf_money(parse_amount(offer.ctc))}"
    if parse_amount(offer.performance_bonus):
        compensation += f", with a performance bonus of up to {pdf_money(parse_amount(offer.performance_bonus))}"
    page.paragraph(compensation + ".")
    if offer.expiry_date:
        page.paragraph(
            f"This offer is valid until {offer.expiry_date}. "
            "Please sign and return a copy to confirm your acceptance."
        )
    page.paragraph("We look forward to welcoming you to the team.")
    page.line("Sincerely,")
    page.line(f"For {company_name}", bold=True)

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def export_pdf(
    controller: DraftController,
    out_path: Path | None = None,
    company_name: str = "Agenthum",
    company_address: str = "",
) -> Path:
    """Render the current draft and write it to ``out_path`` (default: ``<title>.pdf``)."""
    if isinstance(controller, PayslipController):
        content = render_payslip_pdf(controller, company_name, company_address)
    else:
        content = render_offer_pdf(controller, company_name, company_address)

    path = out_path or Path(f"{controller.document_title()}.pdf")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    logger.debug(f"Wrote {len(content)} bytes to {path}")
    return path
