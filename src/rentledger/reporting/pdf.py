# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
PDF exports: arrears report and tenant payment reports.

Each document carries the company letterhead, a table of the computed
items, a totals footer row taken from the computed summary and a page
number on every page.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, Union
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..core.primitives import ReportKindEnum, StatementSettings
from ..core.records import (
    BillInvoiceRecord,
    PropertyRecord,
    RentPeriodRecord,
    TenantRecord,
)
from ..statement.arrears import ArrearsReport
from ..statement.payments import (
    payment_status,
    period_arrears,
    summarize_bill_invoices,
    summarize_payment_reports,
)
from .base import BaseReport
from .naming import statement_filename

logger = logging.getLogger(__name__)

HEADER_COLOR = colors.HexColor("#1F4E78")
TOTAL_COLOR = colors.HexColor("#FFF2CC")
STRIPE_COLOR = colors.HexColor("#F2F2F2")


class PdfReport(BaseReport):
    """Shared letterhead, table styling and page furniture for PDF exports."""

    kind: ReportKindEnum
    title: str = ""

    def __init__(self, settings: Optional[StatementSettings] = None, as_of: Optional[date] = None):
        super().__init__(settings)
        self._as_of = as_of or self._settings.as_of
        styles = getSampleStyleSheet()
        self._s_company = ParagraphStyle(
            "Company", parent=styles["Title"], fontSize=16, spaceAfter=1 * mm
        )
        self._s_contact = ParagraphStyle(
            "Contact", parent=styles["Normal"], fontSize=8, alignment=TA_CENTER
        )
        self._s_title = ParagraphStyle(
            "ReportTitle", parent=styles["Heading2"], alignment=TA_CENTER, spaceBefore=4 * mm
        )
        self._s_info = ParagraphStyle("Info", parent=styles["Normal"], fontSize=9)

    def _letterhead(self, subtitle_lines: Sequence[str]) -> List[Any]:
        export = self._settings.export
        elements: List[Any] = [
            Paragraph(escape(export.company_name), self._s_company),
            Paragraph(
                escape(
                    f"Tel: {export.company_phone} | {export.company_email} | {export.company_website}"
                ),
                self._s_contact,
            ),
            Paragraph(escape(self.title), self._s_title),
        ]
        elements.extend(Paragraph(escape(line), self._s_info) for line in subtitle_lines)
        elements.append(Spacer(1, 4 * mm))
        return elements

    def _table(self, header: List[str], body: List[List[Any]], footer: Optional[List[Any]]) -> Table:
        data = [header] + body + ([footer] if footer else [])
        table = Table(data, repeatRows=1)
        style = [
            ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 8),
            ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("TOPPADDING", (0, 0), (-1, -1), 2),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
        ]
        for idx in range(1, len(body) + 1, 2):
            style.append(("BACKGROUND", (0, idx), (-1, idx), STRIPE_COLOR))
        if footer:
            style.extend(
                [
                    ("BACKGROUND", (0, -1), (-1, -1), TOTAL_COLOR),
                    ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ]
            )
        table.setStyle(TableStyle(style))
        return table

    def _summary_box(self, lines: Sequence[Tuple[str, str]]) -> Table:
        table = Table([list(line) for line in lines], hAlign="LEFT")
        table.setStyle(
            TableStyle(
                [
                    ("BOX", (0, 0), (-1, -1), 0.75, HEADER_COLOR),
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 9),
                    ("ALIGN", (1, 0), (1, -1), "RIGHT"),
                ]
            )
        )
        return table

    def _draw_page_footer(self, canvas, doc) -> None:
        canvas.saveState()
        canvas.setFont("Helvetica", 7)
        width = doc.pagesize[0]
        canvas.drawString(doc.leftMargin, 8 * mm, self._settings.export.company_name)
        canvas.drawRightString(width - doc.rightMargin, 8 * mm, f"Page {doc.page}")
        canvas.restoreState()

    def _amount(self, value: float) -> str:
        return f"{value:,.{self._settings.decimal_precision}f}"

    def _render(self, name: str, directory: Union[str, Path], elements: List[Any], pagesize) -> Path:
        path = Path(directory) / statement_filename(name, self.kind, self._as_of, "pdf")
        path.parent.mkdir(parents=True, exist_ok=True)
        doc = SimpleDocTemplate(
            str(path),
            pagesize=pagesize,
            topMargin=12 * mm,
            bottomMargin=15 * mm,
            leftMargin=10 * mm,
            rightMargin=10 * mm,
            title=self.title,
        )
        doc.build(
            elements,
            onFirstPage=self._draw_page_footer,
            onLaterPages=self._draw_page_footer,
        )
        logger.info(f"Wrote {self.kind.value} {path}")
        return path


class ArrearsPdfReport(PdfReport):
    """Landscape arrears report listing every unpaid or partially paid item."""

    kind = ReportKindEnum.ARREARS_REPORT
    title = "ARREARS REPORT"

    HEADER = [
        "#", "Tenant Name", "Unit Type", "Unit No", "Floor", "Invoice No",
        "Type", "Expected", "Paid", "Balance", "Status",
    ]

    def __init__(
        self,
        report: ArrearsReport,
        property: PropertyRecord,
        settings: Optional[StatementSettings] = None,
        as_of: Optional[date] = None,
    ):
        super().__init__(settings, as_of)
        self._report = report
        self._property = property

    def generate(self, directory: Union[str, Path] = ".") -> Path:
        summary = self._report.summary
        body = [
            [
                str(idx),
                item.tenant_name,
                item.unit_type,
                item.unit_no,
                item.floor,
                item.invoice_number,
                item.bill_type.value if item.bill_type else item.kind.value,
                self._amount(item.expected_amount),
                self._amount(item.paid_amount),
                self._amount(item.balance),
                item.status.value.replace("_", " "),
            ]
            for idx, item in enumerate(self._report.items, start=1)
        ]
        footer = [
            "", "TOTAL", "", "", "", "", "",
            self._amount(summary.total_expected),
            self._amount(summary.total_paid),
            self._amount(summary.total_arrears),
            "",
        ]

        elements = self._letterhead(
            [
                f"Property: {self._property.name}",
                f"Address: {self._property.address or '-'}",
                f"Date Generated: {self._format_date(self._as_of)}",
                f"Items in arrears: {summary.item_count}",
            ]
        )
        table = self._table(self.HEADER, body, footer)
        table.setStyle(TableStyle([("ALIGN", (7, 1), (9, -1), "RIGHT")]))
        elements.append(table)
        return self._render(self._property.name, directory, elements, landscape(A4))


class TenantPaymentPdfReport(PdfReport):
    """Rent payment history of one tenant with a summary box."""

    kind = ReportKindEnum.PAYMENT_REPORT
    title = "TENANT PAYMENT REPORT"

    HEADER = [
        "Period", "Invoice No", "Rent", "Service Charge", "VAT", "Total Due",
        "Paid", "Arrears", "Date Paid", "Status",
    ]

    def __init__(
        self,
        tenant: TenantRecord,
        records: Sequence[RentPeriodRecord],
        settings: Optional[StatementSettings] = None,
        as_of: Optional[date] = None,
    ):
        super().__init__(settings, as_of)
        self._tenant = tenant
        self._records = list(records)

    def generate(self, directory: Union[str, Path] = ".") -> Path:
        summary = summarize_payment_reports(self._records)
        body = [
            [
                record.payment_period.strftime("%b %Y"),
                record.invoice_number or "-",
                self._amount(record.rent),
                self._amount(record.service_charge),
                self._amount(record.vat),
                self._amount(record.total_due),
                self._amount(record.amount_paid),
                self._amount(period_arrears(record)),
                self._format_date(record.date_paid),
                payment_status(record.total_due, record.amount_paid).value,
            ]
            for record in self._records
        ]
        footer = [
            "TOTAL", "",
            self._amount(summary.total_rent),
            self._amount(summary.total_service_charge),
            self._amount(summary.total_vat),
            self._amount(summary.total_due),
            self._amount(summary.total_paid),
            self._amount(summary.total_arrears),
            "", "",
        ]

        elements = self._letterhead(_tenant_lines(self._tenant, self._as_of, self._format_date))
        elements.append(
            self._summary_box(
                [
                    ("Periods", str(summary.period_count)),
                    ("Total Due", self._format_currency(summary.total_due)),
                    ("Total Paid", self._format_currency(summary.total_paid)),
                    ("Total Arrears", self._format_currency(summary.total_arrears)),
                ]
            )
        )
        elements.append(Spacer(1, 4 * mm))
        elements.append(self._table(self.HEADER, body, footer))
        return self._render(self._tenant.full_name, directory, elements, landscape(A4))


class BillPaymentPdfReport(PdfReport):
    """Utility bill invoices of one tenant with a summary box."""

    kind = ReportKindEnum.BILL_PAYMENT_REPORT
    title = "BILL PAYMENT REPORT"

    HEADER = [
        "Invoice No", "Type", "Issue Date", "Units", "Rate", "Amount", "VAT",
        "Grand Total", "Paid", "Balance", "Status",
    ]

    def __init__(
        self,
        tenant: TenantRecord,
        invoices: Sequence[BillInvoiceRecord],
        settings: Optional[StatementSettings] = None,
        as_of: Optional[date] = None,
    ):
        super().__init__(settings, as_of)
        self._tenant = tenant
        self._invoices = list(invoices)

    def generate(self, directory: Union[str, Path] = ".") -> Path:
        summary = summarize_bill_invoices(self._invoices)
        body = [
            [
                invoice.invoice_number,
                invoice.bill_type.value,
                self._format_date(invoice.issue_date),
                f"{invoice.units:g}",
                self._amount(invoice.charge_per_unit),
                self._amount(invoice.total_amount),
                self._amount(invoice.vat_amount),
                self._amount(invoice.grand_total),
                self._amount(invoice.amount_paid),
                self._amount(invoice.balance),
                invoice.status or payment_status(invoice.grand_total, invoice.amount_paid).value,
            ]
            for invoice in self._invoices
        ]
        footer = [
            "TOTAL", "", "",
            f"{summary.total_units:g}",
            "",
            self._amount(summary.total_amount),
            self._amount(summary.total_vat),
            self._amount(summary.grand_total),
            self._amount(summary.total_paid),
            self._amount(summary.total_balance),
            "",
        ]

        elements = self._letterhead(_tenant_lines(self._tenant, self._as_of, self._format_date))
        elements.append(
            self._summary_box(
                [
                    ("Invoices", str(summary.invoice_count)),
                    ("Grand Total", self._format_currency(summary.grand_total)),
                    ("Total Paid", self._format_currency(summary.total_paid)),
                    ("Outstanding", self._format_currency(summary.total_balance)),
                ]
            )
        )
        elements.append(Spacer(1, 4 * mm))
        elements.append(self._table(self.HEADER, body, footer))
        return self._render(self._tenant.full_name, directory, elements, landscape(A4))


def _tenant_lines(tenant: TenantRecord, as_of: date, format_date) -> List[str]:
    lines = [f"Tenant: {tenant.full_name}", f"Contact: {tenant.contact or '-'}"]
    if tenant.email:
        lines.append(f"Email: {tenant.email}")
    if tenant.kra_pin:
        lines.append(f"KRA PIN: {tenant.kra_pin}")
    lines.append(f"Date Generated: {format_date(as_of)}")
    return lines


def write_arrears_pdf(
    report: ArrearsReport,
    property: PropertyRecord,
    directory: Union[str, Path] = ".",
    settings: Optional[StatementSettings] = None,
    as_of: Optional[date] = None,
) -> Path:
    """Write the arrears report PDF and return its path."""
    return ArrearsPdfReport(report, property, settings, as_of).generate(directory)


def write_payment_report_pdf(
    tenant: TenantRecord,
    records: Sequence[RentPeriodRecord],
    directory: Union[str, Path] = ".",
    settings: Optional[StatementSettings] = None,
    as_of: Optional[date] = None,
) -> Path:
    return TenantPaymentPdfReport(tenant, records, settings, as_of).generate(directory)


def write_bill_payment_report_pdf(
    tenant: TenantRecord,
    invoices: Sequence[BillInvoiceRecord],
    directory: Union[str, Path] = ".",
    settings: Optional[StatementSettings] = None,
    as_of: Optional[date] = None,
) -> Path:
    return BillPaymentPdfReport(tenant, invoices, settings, as_of).generate(directory)
