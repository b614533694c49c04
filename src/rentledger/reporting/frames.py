# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tabular views of computed statements.

Lays statement rows out as pandas DataFrames with group subtotal rows and a
grand total row, the same shape the workbook export uses. Totals are copied
from the computed statement, never re-summed here.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd

from ..core.primitives import StatementSettings
from ..statement.aggregation import StatementTotal
from ..statement.api import CollectionStatement
from ..statement.arrears import ArrearsReport
from ..statement.ledger import LedgerRow
from .base import BaseReport

COLLECTION_COLUMNS = [
    "Group",
    "Unit",
    "Tenant",
    "Telephone",
    "Square Feet",
    "Location",
    "Service Charge Basis",
    "Deposit",
    "Ground Rent",
    "VAT",
    "Service Charge",
    "Rent",
    "Amount Payable",
    "Amount Paid",
    "Last Payment",
    "Balance",
]

_AMOUNT_COLUMNS = {
    "Deposit": "deposit",
    "Ground Rent": "ground_rent",
    "VAT": "vat_amount",
    "Service Charge": "service_charge",
    "Rent": "rent_display_amount",
    "Amount Payable": "amount_payable",
    "Amount Paid": "amount_paid",
    "Balance": "balance",
}

ARREARS_COLUMNS = [
    "Tenant",
    "Unit Type",
    "Unit No",
    "Floor",
    "Invoice No",
    "Type",
    "Expected",
    "Paid",
    "Balance",
    "Due Date",
    "Status",
]


class CollectionStatementReport(BaseReport):
    """
    Collection statement as a DataFrame.

    One row per unit in group order, a subtotal row after each group and a
    grand total row at the end.
    """

    def __init__(
        self,
        statement: CollectionStatement,
        settings: Optional[StatementSettings] = None,
    ):
        super().__init__(settings or statement.settings)
        self._statement = statement

    def generate(
        self,
        include_subtotals: bool = True,
        currency_format: bool = False,
    ) -> pd.DataFrame:
        """
        Generate the statement table.

        Args:
            include_subtotals: Add a subtotal row after each group
            currency_format: Render amounts as labelled currency strings

        Returns:
            DataFrame with COLLECTION_COLUMNS
        """
        records: List[Dict[str, Any]] = []
        for group in self._statement.groups:
            records.extend(self._row_record(row) for row in group.rows)
            if include_subtotals:
                records.append(self._total_record(f"{group.label} TOTAL", group.total))
        records.append(self._total_record("GRAND TOTAL", self._statement.grand_total))

        df = pd.DataFrame.from_records(records, columns=COLLECTION_COLUMNS)
        if currency_format:
            df = self._format_for_display(df)
        return df

    def _row_record(self, row: LedgerRow) -> Dict[str, Any]:
        record = {
            "Group": row.group,
            "Unit": row.unit_no or row.unit_id,
            "Tenant": row.tenant_name,
            "Telephone": row.tenant_contact,
            "Square Feet": row.size_sq_ft,
            "Location": row.location,
            "Service Charge Basis": row.service_charge_label,
            "Last Payment": row.last_payment_date,
        }
        record.update({col: getattr(row, name) for col, name in _AMOUNT_COLUMNS.items()})
        return record

    def _total_record(self, label: str, total: StatementTotal) -> Dict[str, Any]:
        record: Dict[str, Any] = {"Group": label}
        record.update({col: getattr(total, name) for col, name in _AMOUNT_COLUMNS.items()})
        return record

    def _format_for_display(self, df: pd.DataFrame) -> pd.DataFrame:
        display_df = df.copy()
        for col in _AMOUNT_COLUMNS:
            display_df[col] = display_df[col].map(self._format_currency)
        return display_df


class ArrearsFrameReport(BaseReport):
    """Arrears items as a DataFrame with a closing total row."""

    def __init__(self, report: ArrearsReport, settings: Optional[StatementSettings] = None):
        super().__init__(settings)
        self._report = report

    def generate(self, include_total: bool = True) -> pd.DataFrame:
        records = [
            {
                "Tenant": item.tenant_name,
                "Unit Type": item.unit_type,
                "Unit No": item.unit_no,
                "Floor": item.floor,
                "Invoice No": item.invoice_number,
                "Type": item.bill_type.value if item.bill_type else item.kind.value,
                "Expected": item.expected_amount,
                "Paid": item.paid_amount,
                "Balance": item.balance,
                "Due Date": item.due_date,
                "Status": item.status.value,
            }
            for item in self._report.items
        ]
        if include_total:
            summary = self._report.summary
            records.append(
                {
                    "Tenant": "TOTAL",
                    "Expected": summary.total_expected,
                    "Paid": summary.total_paid,
                    "Balance": summary.total_arrears,
                }
            )
        return pd.DataFrame.from_records(records, columns=ARREARS_COLUMNS)


def collection_statement_frame(
    statement: CollectionStatement,
    settings: Optional[StatementSettings] = None,
    include_subtotals: bool = True,
    currency_format: bool = False,
) -> pd.DataFrame:
    """Collection statement as a DataFrame; see CollectionStatementReport."""
    return CollectionStatementReport(statement, settings).generate(
        include_subtotals=include_subtotals, currency_format=currency_format
    )


def arrears_frame(
    report: ArrearsReport,
    settings: Optional[StatementSettings] = None,
    include_total: bool = True,
) -> pd.DataFrame:
    return ArrearsFrameReport(report, settings).generate(include_total=include_total)
