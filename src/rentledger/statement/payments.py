# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tenant payment reports.

Previews what a tenant owes for a new rent period and summarises a
tenant's rent and bill payment history.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..core.primitives import (
    Model,
    PaymentStatusEnum,
    StatementSettings,
    VatTreatmentEnum,
)
from ..core.records import (
    BillInvoiceRecord,
    RentPeriodRecord,
    TenantRecord,
    UnitRecord,
)
from .rates import resolve_service_charge
from .vat import calculate_vat


class PaymentPreview(Model):
    """Amounts due for one rent period."""

    rent: float
    service_charge: float = 0.0
    vat: float = 0.0
    total_due: float


class PaymentReportSummary(Model):
    period_count: int = 0
    total_rent: float = 0.0
    total_service_charge: float = 0.0
    total_vat: float = 0.0
    total_due: float = 0.0
    total_paid: float = 0.0
    total_arrears: float = 0.0


class BillInvoiceSummary(Model):
    invoice_count: int = 0
    total_units: float = 0.0
    total_amount: float = 0.0
    total_vat: float = 0.0
    grand_total: float = 0.0
    total_paid: float = 0.0
    total_balance: float = 0.0


def preview_payment(
    unit: UnitRecord,
    tenant: TenantRecord,
    settings: Optional[StatementSettings] = None,
) -> PaymentPreview:
    """
    Compute the amounts due for the tenant's next rent period.

    The tenant's contracted rent is used when set, otherwise the unit's
    rent. For INCLUSIVE VAT the total due is rent plus service charge; VAT
    is reported but already contained in it.
    """
    settings = settings or StatementSettings()
    rent = tenant.rent if tenant.rent is not None else unit.rent_amount
    priced_unit = unit.model_copy(update={"rent_amount": rent})

    charge = resolve_service_charge(priced_unit, tenant, settings.currency_label)
    vat = calculate_vat(
        rent,
        charge.value,
        tenant.vat_treatment,
        tenant.vat_rate,
        default_rate=settings.default_vat_rate,
    )

    if tenant.vat_treatment == VatTreatmentEnum.INCLUSIVE:
        total_due = vat.gross
    else:
        total_due = vat.gross + vat.vat_amount

    return PaymentPreview(
        rent=rent, service_charge=charge.value, vat=vat.vat_amount, total_due=total_due
    )


def payment_status(total_due: float, amount_paid: float) -> PaymentStatusEnum:
    """Settlement status of a rent period."""
    if amount_paid >= total_due:
        return PaymentStatusEnum.PAID
    if amount_paid > 0:
        return PaymentStatusEnum.PARTIAL
    return PaymentStatusEnum.UNPAID


def period_arrears(record: RentPeriodRecord) -> float:
    """Amount still owed for a rent period; overpayment is not carried."""
    return max(0.0, record.total_due - record.amount_paid)


def summarize_payment_reports(
    records: Sequence[RentPeriodRecord],
) -> PaymentReportSummary:
    return PaymentReportSummary(
        period_count=len(records),
        total_rent=sum(r.rent for r in records),
        total_service_charge=sum(r.service_charge for r in records),
        total_vat=sum(r.vat for r in records),
        total_due=sum(r.total_due for r in records),
        total_paid=sum(r.amount_paid for r in records),
        total_arrears=sum(period_arrears(r) for r in records),
    )


def summarize_bill_invoices(
    records: Sequence[BillInvoiceRecord],
) -> BillInvoiceSummary:
    return BillInvoiceSummary(
        invoice_count=len(records),
        total_units=sum(r.units for r in records),
        total_amount=sum(r.total_amount for r in records),
        total_vat=sum(r.vat_amount for r in records),
        grand_total=sum(r.grand_total for r in records),
        total_paid=sum(r.amount_paid for r in records),
        total_balance=sum(r.balance for r in records),
    )
