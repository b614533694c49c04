# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tests for arrears extraction.

Only obligations with a positive balance are reported; rent items precede
bill items and input order is preserved within each kind.
"""

from __future__ import annotations

from datetime import date

import pytest

from rentledger.core import (
    ArrearsStatusEnum,
    BillInvoiceRecord,
    BillTypeEnum,
    ObligationKindEnum,
    PercentageOfRentCharge,
    RentPeriodRecord,
    VatTreatmentEnum,
)
from rentledger.statement.arrears import (
    Obligation,
    arrears_status,
    build_tenant_context,
    extract_arrears,
    extract_obligation_arrears,
    rent_obligations_from_ledger,
)
from rentledger.statement.ledger import build_ledger_rows
from tests.conftest import make_income, make_tenant, make_unit


def _period(tenant_id="t1", total_due=63_800.0, paid=0.0, month=1, invoice=None):
    return RentPeriodRecord(
        tenant_id=tenant_id,
        payment_period=date(2025, month, 1),
        rent=50_000,
        service_charge=5_000,
        vat=8_800,
        total_due=total_due,
        amount_paid=paid,
        invoice_number=invoice,
    )


def _bill(tenant_id="t1", grand_total=2_088.0, paid=0.0, status=None, number="WB-001"):
    return BillInvoiceRecord(
        tenant_id=tenant_id,
        invoice_number=number,
        bill_type=BillTypeEnum.WATER,
        units=12,
        grand_total=grand_total,
        amount_paid=paid,
        due_date=date(2025, 2, 10),
        status=status,
    )


@pytest.mark.parametrize(
    "expected, paid, status",
    [
        (100.0, 0.0, ArrearsStatusEnum.UNPAID),
        (100.0, 40.0, ArrearsStatusEnum.PARTIALLY_PAID),
        (100.0, 100.0, None),
        (100.0, 150.0, None),
        (0.0, 0.0, None),
    ],
)
def test_arrears_status(expected, paid, status):
    assert arrears_status(expected, paid) == status


class TestExtractArrears:
    def test_only_outstanding_items_are_reported(self):
        report = extract_arrears(
            [_period(paid=63_800), _period(paid=40_000, month=2), _period(month=3)],
            [_bill(paid=2_088)],
        )
        assert [item.status for item in report.items] == [
            ArrearsStatusEnum.PARTIALLY_PAID,
            ArrearsStatusEnum.UNPAID,
        ]
        assert report.items[0].balance == 23_800
        assert report.items[0].description == "Rent for February 2025"

    def test_rent_items_precede_bill_items(self):
        report = extract_arrears(
            [_period(month=1), _period(month=2)],
            [_bill(number="WB-001"), _bill(number="WB-002")],
        )
        assert [item.kind for item in report.items] == [
            ObligationKindEnum.RENT,
            ObligationKindEnum.RENT,
            ObligationKindEnum.BILL,
            ObligationKindEnum.BILL,
        ]
        assert [item.invoice_number for item in report.items[2:]] == ["WB-001", "WB-002"]
        assert report.items[2].bill_type == BillTypeEnum.WATER
        assert report.items[2].due_date == date(2025, 2, 10)

    def test_cancelled_bills_are_skipped(self):
        report = extract_arrears([], [_bill(status="CANCELLED"), _bill(number="WB-002")])
        assert [item.invoice_number for item in report.items] == ["WB-002"]

    def test_summary(self):
        report = extract_arrears(
            [_period(paid=40_000), _period(month=2, paid=63_800)],
            [_bill(paid=88)],
        )
        summary = report.summary
        assert summary.item_count == 2
        assert summary.total_expected == 63_800 + 2_088
        assert summary.total_paid == 40_000 + 88
        assert summary.total_arrears == 23_800 + 2_000
        assert summary.total_arrears == sum(item.balance for item in report.items)

    def test_no_arrears(self):
        report = extract_arrears([_period(paid=63_800)], [])
        assert report.items == []
        assert report.summary.item_count == 0
        assert report.summary.total_arrears == 0

    def test_rent_due_date_falls_back_to_period(self):
        report = extract_arrears([_period()], [])
        assert report.items[0].due_date == date(2025, 1, 1)

    def test_tenant_context_is_joined(self):
        units = [make_unit("u1", "Ground floor shop", unit_no="G-01", floor="Ground", tenant_id="t1")]
        tenants = [make_tenant("t1", "Amani Traders", contact="0711 111 111")]
        report = extract_arrears([_period()], [], build_tenant_context(tenants, units))
        item = report.items[0]
        assert item.tenant_name == "Amani Traders"
        assert item.tenant_contact == "0711 111 111"
        assert item.unit_no == "G-01"
        assert item.unit_type == "Ground floor shop"
        assert item.floor == "Ground"

    def test_context_includes_tenants_embedded_in_units(self):
        tenant = make_tenant("t1", "Amani Traders", unit_id=None)
        units = [make_unit("u1", unit_no="G-01", tenant=tenant)]
        context = build_tenant_context([], units)
        assert context["t1"].tenant_name == "Amani Traders"
        assert context["t1"].unit_no == "G-01"

    def test_unknown_tenant_has_blank_context(self):
        report = extract_arrears([_period(tenant_id="nobody")], [], {})
        assert report.items[0].tenant_name == ""


class TestLedgerArrears:
    def test_partially_paid_ledger_row_appears_in_arrears(self):
        """Rent 50,000 + 10% + 16% VAT, 40,000 paid: 23,800 partially paid."""
        units = [make_unit("u1", rent_amount=50_000, tenant_id="t1")]
        tenants = [
            make_tenant(
                vat_treatment=VatTreatmentEnum.EXCLUSIVE,
                vat_rate=16,
                service_charge=PercentageOfRentCharge(percent=10),
            )
        ]
        rows = build_ledger_rows(units, tenants, [make_income(amount=40_000)])
        report = extract_obligation_arrears(rent_obligations_from_ledger(rows))

        assert len(report.items) == 1
        assert report.items[0].status == ArrearsStatusEnum.PARTIALLY_PAID
        assert report.items[0].balance == 23_800

    def test_vacant_units_never_appear(self):
        rows = build_ledger_rows([make_unit("u1"), make_unit("u2")], [])
        assert rent_obligations_from_ledger(rows) == []
        assert extract_obligation_arrears(rent_obligations_from_ledger(rows)).items == []


def test_obligation_balance():
    obligation = Obligation(kind=ObligationKindEnum.RENT, expected_amount=100, paid_amount=30)
    assert obligation.balance == 70
