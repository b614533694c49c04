# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Collection statement workbook export.

Writes a computed CollectionStatement to an .xlsx workbook: a letterhead,
one table per structural group with a subtotal row, a grand total summary
and a financial overview. Row amounts are written as the values the
statement computed; payable, balance and total cells are SUM-style formulas
whose operands are those same values, so the workbook recalculates to the
computed figures.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from ..core.primitives import ReportKindEnum, StatementSettings, VatTreatmentEnum
from ..statement.aggregation import StatementGroup, verify_totals
from ..statement.api import CollectionStatement
from ..statement.ledger import LedgerRow
from .base import BaseReport
from .naming import statement_filename

logger = logging.getLogger(__name__)

CURRENCY_FORMAT = "#,##0.00"
DATE_FORMAT = "dd/mm/yyyy"

HEADER_FILL = PatternFill(start_color="1F4E78", end_color="1F4E78", fill_type="solid")
GROUP_FILL = PatternFill(start_color="D9E1F2", end_color="D9E1F2", fill_type="solid")
TOTAL_FILL = PatternFill(start_color="FFF2CC", end_color="FFF2CC", fill_type="solid")
THIN = Side(style="thin", color="999999")
BORDER = Border(left=THIN, right=THIN, top=THIN, bottom=THIN)

# (header, width); letters A..R
COLUMNS: List[Tuple[str, int]] = [
    ("ENTRANCE", 10),
    ("TENANT NAME", 28),
    ("TELEPHONE", 15),
    ("SQUARE FEET", 12),
    ("LOCATION", 18),
    ("SERVICE CHARGE RATE", 20),
    ("NATURE OF BUSINESS", 20),
    ("DEPOSIT", 14),
    ("ELECTRICITY/BCF", 14),
    ("GROUND RENT PER MONTH", 16),
    ("WATER BILL", 12),
    ("VAT", 13),
    ("SERVICE CHARGE", 14),
    ("RENT", 15),
    ("AMOUNT PAYABLE", 16),
    ("AMT PAID", 15),
    ("DATE", 12),
    ("BALANCE", 15),
]
LAST_COLUMN = get_column_letter(len(COLUMNS))

# Columns summed in subtotal rows
SUMMED_COLUMNS = ("H", "J", "L", "M", "N", "O", "P", "R")


class CollectionStatementWorkbook(BaseReport):
    """
    Excel export of a collection statement.

    Example:
        ```python
        statement = build_collection_statement(snapshot, settings)
        path = CollectionStatementWorkbook(statement).generate("exports/")
        ```
    """

    def __init__(
        self,
        statement: CollectionStatement,
        settings: Optional[StatementSettings] = None,
    ):
        super().__init__(settings or statement.settings)
        self._statement = statement

    def build(self) -> Workbook:
        """
        Lay out the workbook in memory.

        Raises:
            ValueError: If the statement's totals do not tie out.
        """
        verify_totals(self._statement.aggregated)

        wb = Workbook()
        ws = wb.active
        ws.title = self._settings.export.sheet_title[:31]

        for idx, (_, width) in enumerate(COLUMNS, start=1):
            ws.column_dimensions[get_column_letter(idx)].width = width

        row = self._write_letterhead(ws)
        subtotal_rows = []
        for group in self._statement.groups:
            row, subtotal_row = self._write_group(ws, group, row)
            subtotal_rows.append(subtotal_row)
        row = self._write_grand_total_row(ws, subtotal_rows, row)
        row = self._write_summary(ws, row + 1)
        row = self._write_overview(ws, row + 1)
        self._write_footer(ws, row + 1)
        return wb

    def generate(self, directory: Union[str, Path] = ".") -> Path:
        """
        Write the workbook into ``directory``.

        Returns:
            Path of the saved ``{Property}_Collection_Statement_{date}.xlsx``.
        """
        wb = self.build()
        path = Path(directory) / statement_filename(
            self._statement.property.name,
            ReportKindEnum.COLLECTION_STATEMENT,
            self._statement.as_of,
            "xlsx",
        )
        path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(path)
        logger.info(f"Wrote collection statement workbook {path}")
        return path

    def _merged_line(
        self, ws: Worksheet, row: int, text: str, font: Font, fill: Optional[PatternFill] = None
    ) -> None:
        ws.merge_cells(f"A{row}:{LAST_COLUMN}{row}")
        cell = ws.cell(row=row, column=1, value=text)
        cell.font = font
        cell.alignment = Alignment(horizontal="center", vertical="center")
        if fill is not None:
            cell.fill = fill

    def _write_letterhead(self, ws: Worksheet) -> int:
        export = self._settings.export
        prop = self._statement.property
        self._merged_line(ws, 1, export.company_name, Font(bold=True, size=16))
        self._merged_line(ws, 2, prop.name.upper(), Font(bold=True, size=13))
        self._merged_line(ws, 3, prop.address or "", Font(italic=True, size=10))
        self._merged_line(
            ws,
            4,
            f"COLLECTION STATEMENT AS AT {self._statement.as_of:%d %B %Y}".upper(),
            Font(bold=True, size=12),
        )
        return 6

    def _write_column_headers(self, ws: Worksheet, row: int) -> None:
        rent_header = f"{self._statement.as_of:%B %Y} RENT".upper()
        for idx, (header, _) in enumerate(COLUMNS, start=1):
            cell = ws.cell(row=row, column=idx, value=rent_header if header == "RENT" else header)
            cell.font = Font(bold=True, color="FFFFFF")
            cell.fill = HEADER_FILL
            cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
            cell.border = BORDER

    def _write_group(self, ws: Worksheet, group: StatementGroup, row: int) -> Tuple[int, int]:
        self._merged_line(ws, row, group.label, Font(bold=True, size=11), GROUP_FILL)
        self._write_column_headers(ws, row + 1)

        first = row + 2
        for offset, ledger_row in enumerate(group.rows):
            self._write_unit_row(ws, ledger_row, first + offset)
        last = first + len(group.rows) - 1

        subtotal_row = last + 1
        ws.cell(row=subtotal_row, column=2, value=f"{group.label} TOTAL")
        for letter in SUMMED_COLUMNS:
            formula = f"=SUM({letter}{first}:{letter}{last})" if group.rows else 0
            ws[f"{letter}{subtotal_row}"] = formula
        self._style_total_row(ws, subtotal_row)
        return subtotal_row + 2, subtotal_row

    def _write_unit_row(self, ws: Worksheet, row: LedgerRow, r: int) -> None:
        values = {
            "A": row.unit_no or row.unit_id,
            "B": row.tenant_name,
            "C": row.tenant_contact,
            "D": row.size_sq_ft,
            "E": row.location,
            "F": row.service_charge_label,
            "G": self._settings.vacant_label if row.is_vacant else (row.usage or row.location),
            "H": row.deposit,
            "J": row.ground_rent,
            "L": row.vat_amount,
            "M": row.service_charge,
            "N": row.rent_display_amount,
            "P": row.amount_paid,
            "Q": row.last_payment_date,
        }
        for letter, value in values.items():
            ws[f"{letter}{r}"] = value

        # Same operand order as the ledger so the recalculated value is identical
        if row.is_vacant:
            ws[f"O{r}"] = row.amount_payable
        elif row.vat_treatment == VatTreatmentEnum.INCLUSIVE:
            ws[f"O{r}"] = f"=J{r}+M{r}"
        else:
            ws[f"O{r}"] = f"=(J{r}+M{r})+L{r}"
        ws[f"R{r}"] = f"=O{r}-P{r}"

        for idx in range(1, len(COLUMNS) + 1):
            cell = ws.cell(row=r, column=idx)
            cell.border = BORDER
            letter = get_column_letter(idx)
            if letter in SUMMED_COLUMNS:
                cell.number_format = CURRENCY_FORMAT
            elif letter == "Q":
                cell.number_format = DATE_FORMAT

    def _style_total_row(self, ws: Worksheet, r: int) -> None:
        for idx in range(1, len(COLUMNS) + 1):
            cell = ws.cell(row=r, column=idx)
            cell.font = Font(bold=True)
            cell.fill = TOTAL_FILL
            cell.border = BORDER
            if get_column_letter(idx) in SUMMED_COLUMNS:
                cell.number_format = CURRENCY_FORMAT

    def _write_grand_total_row(self, ws: Worksheet, subtotal_rows: List[int], row: int) -> int:
        ws.cell(row=row, column=2, value="GRAND TOTAL")
        for letter in SUMMED_COLUMNS:
            if subtotal_rows:
                ws[f"{letter}{row}"] = "=" + "+".join(f"{letter}{r}" for r in subtotal_rows)
            else:
                ws[f"{letter}{row}"] = 0
        self._style_total_row(ws, row)
        return row + 2

    def _write_label_values(self, ws: Worksheet, title: str, lines: List[Tuple[str, object]], row: int) -> int:
        ws.merge_cells(f"A{row}:D{row}")
        heading = ws.cell(row=row, column=1, value=title)
        heading.font = Font(bold=True, color="FFFFFF")
        heading.fill = HEADER_FILL
        for offset, (label, value) in enumerate(lines, start=1):
            ws.merge_cells(f"A{row + offset}:C{row + offset}")
            ws.cell(row=row + offset, column=1, value=label).font = Font(bold=True)
            cell = ws.cell(row=row + offset, column=4, value=value)
            if isinstance(value, float):
                cell.number_format = CURRENCY_FORMAT
        return row + len(lines) + 1

    def _write_summary(self, ws: Worksheet, row: int) -> int:
        grand = self._statement.grand_total
        lines = [
            ("Units", grand.row_count),
            ("Groups", grand.group_count),
            ("Total Deposit", grand.deposit),
            ("Total Ground Rent", grand.ground_rent),
            ("Total Rent", grand.rent_display_amount),
            ("Total VAT", grand.vat_amount),
            ("Total Service Charge", grand.service_charge),
            ("Total Amount Payable", grand.amount_payable),
            ("Total Amount Paid", grand.amount_paid),
            ("Total Balance", grand.balance),
        ]
        return self._write_label_values(ws, "GRAND TOTAL SUMMARY", lines, row)

    def _write_overview(self, ws: Worksheet, row: int) -> int:
        grand = self._statement.grand_total
        occupied = sum(1 for r in self._statement.rows if not r.is_vacant)
        lines = [
            ("Occupied Units", occupied),
            ("Vacant Units", grand.row_count - occupied),
            ("Expected Collection", grand.amount_payable),
            ("Collected", grand.amount_paid),
            ("Outstanding", grand.balance),
        ]
        return self._write_label_values(ws, "FINANCIAL OVERVIEW", lines, row)

    def _write_footer(self, ws: Worksheet, row: int) -> None:
        export = self._settings.export
        self._merged_line(ws, row, export.company_name, Font(bold=True, size=10))
        self._merged_line(
            ws,
            row + 1,
            f"Tel: {export.company_phone} | {export.company_email} | {export.company_website}",
            Font(size=9),
        )


def write_collection_statement_xlsx(
    statement: CollectionStatement,
    directory: Union[str, Path] = ".",
    settings: Optional[StatementSettings] = None,
) -> Path:
    """
    Write ``statement`` as an .xlsx workbook and return its path.

    ``settings`` default to those the statement was computed with.
    """
    return CollectionStatementWorkbook(statement, settings).generate(directory)
