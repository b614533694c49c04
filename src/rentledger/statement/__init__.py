# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Statement computation engine.

Service charge resolution, VAT calculation, unit ledger rows, hierarchical
totals, arrears extraction and tenant payment summaries.
"""

from .aggregation import (
    AggregatedStatement,
    GrandTotal,
    GroupTotal,
    StatementGroup,
    aggregate,
    verify_totals,
)
from .api import CollectionStatement, build_arrears_report, build_collection_statement
from .arrears import (
    ArrearsItem,
    ArrearsReport,
    ArrearsSummary,
    Obligation,
    arrears_status,
    extract_arrears,
    extract_obligation_arrears,
    rent_obligations_from_ledger,
)
from .grouping import FALLBACK_GROUP, classify_group
from .ledger import LedgerRow, build_ledger_row, build_ledger_rows
from .payments import (
    BillInvoiceSummary,
    PaymentPreview,
    PaymentReportSummary,
    payment_status,
    preview_payment,
    summarize_bill_invoices,
    summarize_payment_reports,
)
from .rates import ServiceChargeResolution, resolve_service_charge
from .vat import DEFAULT_VAT_RATE, VatBreakdown, calculate_vat, effective_vat_rate

__all__ = [
    # Entry points
    "CollectionStatement",
    "build_arrears_report",
    "build_collection_statement",
    # Rates and VAT
    "DEFAULT_VAT_RATE",
    "ServiceChargeResolution",
    "VatBreakdown",
    "calculate_vat",
    "effective_vat_rate",
    "resolve_service_charge",
    # Ledger
    "LedgerRow",
    "build_ledger_row",
    "build_ledger_rows",
    # Aggregation
    "AggregatedStatement",
    "FALLBACK_GROUP",
    "GrandTotal",
    "GroupTotal",
    "StatementGroup",
    "aggregate",
    "classify_group",
    "verify_totals",
    # Arrears
    "ArrearsItem",
    "ArrearsReport",
    "ArrearsSummary",
    "Obligation",
    "arrears_status",
    "extract_arrears",
    "extract_obligation_arrears",
    "rent_obligations_from_ledger",
    # Payments
    "BillInvoiceSummary",
    "PaymentPreview",
    "PaymentReportSummary",
    "payment_status",
    "preview_payment",
    "summarize_bill_invoices",
    "summarize_payment_reports",
]
