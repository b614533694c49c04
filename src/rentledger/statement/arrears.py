# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Arrears extraction.

Scans rent-period and bill-invoice obligations and keeps only those still
owed. Arrears are a filtered view: fully paid obligations never appear.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from ..core.primitives import (
    ArrearsStatusEnum,
    BillTypeEnum,
    Model,
    ObligationKindEnum,
)
from ..core.records import (
    BillInvoiceRecord,
    RentPeriodRecord,
    TenantRecord,
    UnitRecord,
)
from .ledger import LedgerRow

logger = logging.getLogger(__name__)


class Obligation(Model):
    """
    Anything a tenant is expected to pay, normalised for arrears scanning.

    Both rent periods and bill invoices reduce to an expected amount, a paid
    amount and a due date.
    """

    kind: ObligationKindEnum
    tenant_id: Optional[str] = None
    reference: str = ""
    bill_type: Optional[BillTypeEnum] = None
    expected_amount: float
    paid_amount: float = 0.0
    due_date: Optional[date] = None
    description: str = ""

    @property
    def balance(self) -> float:
        return self.expected_amount - self.paid_amount


class TenantContext(Model):
    """Display context joined onto arrears items."""

    tenant_name: str = ""
    tenant_contact: str = ""
    unit_no: str = ""
    unit_type: str = ""
    floor: str = ""


class ArrearsItem(Model):
    """One unpaid or partially paid obligation."""

    kind: ObligationKindEnum
    tenant_id: Optional[str] = None
    tenant_name: str = ""
    tenant_contact: str = ""
    unit_no: str = ""
    unit_type: str = ""
    floor: str = ""
    invoice_number: str = ""
    bill_type: Optional[BillTypeEnum] = None
    expected_amount: float
    paid_amount: float
    balance: float
    due_date: Optional[date] = None
    status: ArrearsStatusEnum
    description: str = ""


class ArrearsSummary(Model):
    total_expected: float = 0.0
    total_paid: float = 0.0
    total_arrears: float = 0.0
    item_count: int = 0


class ArrearsReport(Model):
    items: List[ArrearsItem]
    summary: ArrearsSummary


def arrears_status(expected_amount: float, paid_amount: float) -> Optional[ArrearsStatusEnum]:
    """
    Classify an obligation for arrears.

    Returns:
        None when nothing is owed (``paid >= expected``), UNPAID when
        nothing has been paid, PARTIALLY_PAID otherwise.
    """
    if expected_amount - paid_amount <= 0:
        return None
    if paid_amount <= 0:
        return ArrearsStatusEnum.UNPAID
    return ArrearsStatusEnum.PARTIALLY_PAID


def rent_obligation(record: RentPeriodRecord) -> Obligation:
    period = record.payment_period.strftime("%B %Y")
    return Obligation(
        kind=ObligationKindEnum.RENT,
        tenant_id=record.tenant_id,
        reference=record.invoice_number or "",
        expected_amount=record.total_due,
        paid_amount=record.amount_paid,
        due_date=record.due_date or record.payment_period,
        description=f"Rent for {period}",
    )


def bill_obligation(record: BillInvoiceRecord) -> Obligation:
    return Obligation(
        kind=ObligationKindEnum.BILL,
        tenant_id=record.tenant_id,
        reference=record.invoice_number,
        bill_type=record.bill_type,
        expected_amount=record.grand_total,
        paid_amount=record.amount_paid,
        due_date=record.due_date,
        description=f"{record.bill_type.value.title()} bill ({record.units:g} units)",
    )


def rent_obligations_from_ledger(
    rows: Iterable[LedgerRow], as_of: Optional[date] = None
) -> List[Obligation]:
    """
    Turn collection statement rows into rent obligations.

    Vacant rows are skipped; they owe nothing.
    """
    return [
        Obligation(
            kind=ObligationKindEnum.RENT,
            tenant_id=row.tenant_id,
            expected_amount=row.amount_payable,
            paid_amount=row.amount_paid,
            due_date=as_of,
            description=f"Rent for unit {row.unit_no or row.unit_id}",
        )
        for row in rows
        if not row.is_vacant
    ]


def build_tenant_context(
    tenants: Sequence[TenantRecord], units: Sequence[UnitRecord]
) -> Dict[str, TenantContext]:
    """Index tenant name, contact and unit details by tenant id."""
    units_by_id = {unit.id: unit for unit in units}
    units_by_tenant = {unit.tenant_id: unit for unit in units if unit.tenant_id}
    listed = {tenant.id for tenant in tenants}
    embedded = [
        unit.tenant
        for unit in units
        if unit.tenant is not None and unit.tenant.id not in listed
    ]

    context = {}
    for tenant in [*tenants, *embedded]:
        unit = units_by_tenant.get(tenant.id) or units_by_id.get(tenant.unit_id or "")
        context[tenant.id] = TenantContext(
            tenant_name=tenant.full_name,
            tenant_contact=tenant.contact,
            unit_no=(unit.unit_no or "") if unit else "",
            unit_type=unit.location if unit else "",
            floor=(unit.floor or "") if unit else "",
        )
    return context


def extract_obligation_arrears(
    obligations: Iterable[Obligation],
    context: Optional[Dict[str, TenantContext]] = None,
) -> ArrearsReport:
    """
    Keep obligations with a positive balance and summarise them.

    Args:
        obligations: Obligations in the order they should be reported.
        context: Optional tenant display context keyed by tenant id.

    Returns:
        ArrearsReport whose items preserve input order.
    """
    context = context or {}
    items = []
    for obligation in obligations:
        status = arrears_status(obligation.expected_amount, obligation.paid_amount)
        if status is None:
            continue
        tenant = context.get(obligation.tenant_id or "", TenantContext())
        items.append(
            ArrearsItem(
                kind=obligation.kind,
                tenant_id=obligation.tenant_id,
                tenant_name=tenant.tenant_name,
                tenant_contact=tenant.tenant_contact,
                unit_no=tenant.unit_no,
                unit_type=tenant.unit_type,
                floor=tenant.floor,
                invoice_number=obligation.reference,
                bill_type=obligation.bill_type,
                expected_amount=obligation.expected_amount,
                paid_amount=obligation.paid_amount,
                balance=obligation.balance,
                due_date=obligation.due_date,
                status=status,
                description=obligation.description,
            )
        )

    total_expected = sum(item.expected_amount for item in items)
    total_paid = sum(item.paid_amount for item in items)
    summary = ArrearsSummary(
        total_expected=total_expected,
        total_paid=total_paid,
        total_arrears=total_expected - total_paid,
        item_count=len(items),
    )

    logger.debug(
        f"Extracted {summary.item_count} arrears items totalling {summary.total_arrears:,.2f}"
    )
    return ArrearsReport(items=items, summary=summary)


def extract_arrears(
    rent_periods: Sequence[RentPeriodRecord],
    bill_invoices: Sequence[BillInvoiceRecord],
    context: Optional[Dict[str, TenantContext]] = None,
) -> ArrearsReport:
    """
    Extract arrears from rent periods and bill invoices.

    Rent items come first, then bill items, each in input order. Cancelled
    bill invoices are not obligations and are skipped.

    Args:
        rent_periods: Per-period rent records.
        bill_invoices: Utility bill invoices.
        context: Optional tenant display context keyed by tenant id.

    Returns:
        ArrearsReport with only UNPAID and PARTIALLY_PAID items.
    """
    obligations = [rent_obligation(record) for record in rent_periods]
    obligations.extend(
        bill_obligation(record) for record in bill_invoices if not record.is_cancelled
    )
    return extract_obligation_arrears(obligations, context)
