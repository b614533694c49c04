# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum


class VatTreatmentEnum(str, Enum):
    """
    How value added tax relates to a tenant's quoted rent.

    Attributes:
        INCLUSIVE: VAT is already folded into the quoted rent and service
            charge; it is extracted, never added on top.
        EXCLUSIVE: VAT is charged on top of rent plus service charge.
        NOT_APPLICABLE: No VAT is charged.
    """

    INCLUSIVE = "INCLUSIVE"
    EXCLUSIVE = "EXCLUSIVE"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class ObligationKindEnum(str, Enum):
    """Kinds of obligation that can fall into arrears."""

    RENT = "RENT"
    BILL = "BILL"


class BillTypeEnum(str, Enum):
    """Metered utility bills invoiced to tenants."""

    WATER = "WATER"
    ELECTRICITY = "ELECTRICITY"


class ArrearsStatusEnum(str, Enum):
    """
    Status of an obligation that is still owed.

    Fully paid obligations have no arrears status; they are excluded from
    arrears output entirely.
    """

    UNPAID = "UNPAID"
    PARTIALLY_PAID = "PARTIALLY_PAID"


class PaymentStatusEnum(str, Enum):
    """Settlement status of a single rent period."""

    PAID = "PAID"
    PARTIAL = "PARTIAL"
    UNPAID = "UNPAID"


class ReportKindEnum(str, Enum):
    """
    Exportable report kinds.

    The value is the fragment used in exported artifact names, e.g.
    ``Westlands_Plaza_Collection_Statement_2025-01-31.xlsx``.
    """

    COLLECTION_STATEMENT = "Collection_Statement"
    ARREARS_REPORT = "Arrears_Report"
    PAYMENT_REPORT = "Payment_Report"
    BILL_PAYMENT_REPORT = "Bill_Payment_Report"
