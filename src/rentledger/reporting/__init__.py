# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Statement exports.

Formats computed statements as DataFrames, Excel workbooks and PDFs. No
financial calculation happens here.
"""

from .base import BaseReport
from .excel import CollectionStatementWorkbook, write_collection_statement_xlsx
from .frames import (
    ArrearsFrameReport,
    CollectionStatementReport,
    arrears_frame,
    collection_statement_frame,
)
from .naming import statement_filename
from .pdf import (
    ArrearsPdfReport,
    BillPaymentPdfReport,
    PdfReport,
    TenantPaymentPdfReport,
    write_arrears_pdf,
    write_bill_payment_report_pdf,
    write_payment_report_pdf,
)

__all__ = [
    # Base
    "BaseReport",
    "PdfReport",
    # Tables
    "ArrearsFrameReport",
    "CollectionStatementReport",
    "arrears_frame",
    "collection_statement_frame",
    # Files
    "ArrearsPdfReport",
    "BillPaymentPdfReport",
    "CollectionStatementWorkbook",
    "TenantPaymentPdfReport",
    "statement_filename",
    "write_arrears_pdf",
    "write_bill_payment_report_pdf",
    "write_collection_statement_xlsx",
    "write_payment_report_pdf",
]
