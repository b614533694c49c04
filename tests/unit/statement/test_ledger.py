# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tests for unit ledger rows.

Covers the three VAT treatments, vacant units, payment attribution and the
balance arithmetic every downstream total depends on.
"""

from __future__ import annotations

import logging
from datetime import date

import pytest

from rentledger.core import FixedCharge, PercentageOfRentCharge, VatTreatmentEnum
from rentledger.core.primitives import StatementSettings
from rentledger.statement.ledger import build_ledger_row, build_ledger_rows
from tests.conftest import make_income, make_tenant, make_unit


class TestBuildLedgerRow:
    def test_exclusive_vat_with_percentage_charge(self):
        """Rent 50,000 + 10% service charge + 16% VAT on top."""
        tenant = make_tenant(
            vat_treatment=VatTreatmentEnum.EXCLUSIVE,
            vat_rate=16,
            service_charge=PercentageOfRentCharge(percent=10),
            incomes=[make_income(amount=40_000)],
        )
        row = build_ledger_row(make_unit(rent_amount=50_000, tenant_id="t1"), tenant)

        assert row.service_charge == 5_000
        assert row.taxable_amount == 55_000
        assert row.vat_amount == 8_800
        assert row.amount_payable == 63_800
        assert row.rent_display_amount == 50_000
        assert row.ground_rent == 50_000
        assert row.amount_paid == 40_000
        assert row.balance == 23_800

    def test_inclusive_vat_is_not_added_on_top(self):
        tenant = make_tenant(
            vat_treatment=VatTreatmentEnum.INCLUSIVE,
            vat_rate=16,
            service_charge=PercentageOfRentCharge(percent=10),
        )
        row = build_ledger_row(make_unit(rent_amount=50_000, tenant_id="t1"), tenant)

        assert row.vat_amount == pytest.approx(7_586.21, abs=0.005)
        assert row.taxable_amount == pytest.approx(47_413.79, abs=0.005)
        assert row.rent_display_amount == row.taxable_amount
        assert row.amount_payable == 55_000
        assert row.balance == 55_000

    def test_not_applicable_vat(self):
        tenant = make_tenant(service_charge=FixedCharge(amount=2_000))
        row = build_ledger_row(make_unit(rent_amount=20_000, tenant_id="t1"), tenant)

        assert row.vat_amount == 0
        assert row.amount_payable == 22_000
        assert row.service_charge_label == "Fixed Ksh 2,000.00"

    def test_missing_vat_rate_uses_default(self):
        tenant = make_tenant(vat_treatment=VatTreatmentEnum.EXCLUSIVE, vat_rate=None)
        row = build_ledger_row(make_unit(rent_amount=10_000, tenant_id="t1"), tenant)
        assert row.vat_rate == 16
        assert row.amount_payable == 11_600

    def test_vacant_unit(self):
        row = build_ledger_row(make_unit(rent_amount=30_000), None)

        assert row.is_vacant
        assert row.tenant_name == "VACANT"
        assert row.rent_display_amount == 30_000
        for field in (
            "ground_rent", "service_charge", "vat_amount", "deposit",
            "amount_payable", "amount_paid", "balance",
        ):
            assert getattr(row, field) == 0, field

    def test_vacant_label_is_configurable(self):
        row = build_ledger_row(make_unit(), None, settings=StatementSettings(vacant_label="TO LET"))
        assert row.tenant_name == "TO LET"

    def test_overpayment_gives_negative_balance(self):
        tenant = make_tenant(incomes=[make_income(amount=60_000)])
        row = build_ledger_row(make_unit(rent_amount=50_000, tenant_id="t1"), tenant)
        assert row.balance == -10_000

    def test_last_payment_date_is_latest_income(self):
        tenant = make_tenant(
            incomes=[
                make_income(amount=1, created_at=date(2025, 1, 20)),
                make_income(amount=1, created_at=date(2025, 1, 5)),
            ]
        )
        row = build_ledger_row(make_unit(tenant_id="t1"), tenant)
        assert row.last_payment_date == date(2025, 1, 20)
        assert row.amount_paid == 2

    def test_explicit_incomes_override_tenant_incomes(self):
        tenant = make_tenant(incomes=[make_income(amount=99)])
        row = build_ledger_row(make_unit(tenant_id="t1"), tenant, incomes=[])
        assert row.amount_paid == 0
        assert row.last_payment_date is None

    def test_group_follows_location(self):
        row = build_ledger_row(make_unit(location="Second floor office"), None)
        assert row.group == "SECOND FLOOR"


class TestBuildLedgerRows:
    def test_rows_follow_unit_order(self, sample_snapshot, settings):
        rows = build_ledger_rows(
            sample_snapshot.units, sample_snapshot.tenants, sample_snapshot.incomes, settings
        )
        assert [row.unit_id for row in rows] == ["u1", "u2", "u3", "u4"]

    def test_incomes_attributed_by_tenant(self, sample_snapshot, settings):
        rows = build_ledger_rows(
            sample_snapshot.units, sample_snapshot.tenants, sample_snapshot.incomes, settings
        )
        by_unit = {row.unit_id: row for row in rows}
        assert by_unit["u1"].amount_paid == 50_000
        assert by_unit["u1"].balance == 13_800
        assert by_unit["u3"].amount_paid == 55_000
        assert by_unit["u3"].balance == 0
        assert by_unit["u4"].amount_paid == 0

    def test_tenant_found_through_tenant_unit_link(self):
        """A unit without tenant_id is still let when a tenant points at it."""
        rows = build_ledger_rows([make_unit("u1")], [make_tenant("t1", unit_id="u1")])
        assert not rows[0].is_vacant
        assert rows[0].tenant_id == "t1"

    def test_tenant_embedded_in_unit_is_used(self):
        """An embedded tenant lets the unit even when the tenant list omits it."""
        tenant = make_tenant("t1", vat_treatment=VatTreatmentEnum.EXCLUSIVE, vat_rate=16)
        unit = make_unit("u1", rent_amount=50_000, tenant=tenant)
        rows = build_ledger_rows([unit], [], [make_income("t1", 20_000)])
        assert not rows[0].is_vacant
        assert rows[0].tenant_name == "Amani Traders"
        assert rows[0].amount_payable == 58_000
        assert rows[0].amount_paid == 20_000

    def test_former_tenant_claim_does_not_override_unit_link(self):
        current = make_tenant("t1", full_name="Current", unit_id="u1")
        former = make_tenant("t0", full_name="Former", unit_id="u1")
        rows = build_ledger_rows(
            [make_unit("u1", tenant_id="t1")], [current, former], [make_income("t1", 50_000)]
        )
        assert rows[0].tenant_name == "Current"
        assert rows[0].amount_paid == 50_000

    def test_duplicate_claims_resolved_by_latest_lease(self, caplog):
        current = make_tenant(
            "t1", full_name="Current", unit_id="u1", term_start=date(2024, 7, 1)
        )
        former = make_tenant(
            "t0", full_name="Former", unit_id="u1", term_start=date(2021, 3, 1)
        )
        with caplog.at_level(logging.WARNING, logger="rentledger.statement.ledger"):
            rows = build_ledger_rows(
                [make_unit("u1")], [current, former], [make_income("t1", 50_000)]
            )
        assert rows[0].tenant_name == "Current"
        assert rows[0].amount_paid == 50_000
        assert "claimed by tenants t1, t0" in caplog.text

    def test_duplicate_claims_without_lease_dates_raise(self):
        current = make_tenant("t1", full_name="Current", unit_id="u1")
        former = make_tenant("t0", full_name="Former", unit_id="u1")
        with pytest.raises(ValueError, match="claimed by tenants t1, t0"):
            build_ledger_rows([make_unit("u1")], [current, former], [make_income("t1", 50_000)])

    def test_unknown_tenant_reference_raises(self):
        with pytest.raises(ValueError, match="t404"):
            build_ledger_rows([make_unit("u1", tenant_id="t404")], [])

    def test_income_for_unknown_tenant_is_skipped(self, caplog):
        units = [make_unit("u1", tenant_id="t1")]
        tenants = [make_tenant("t1")]
        with caplog.at_level(logging.WARNING, logger="rentledger.statement.ledger"):
            rows = build_ledger_rows(units, tenants, [make_income("ghost", 500)])
        assert rows[0].amount_paid == 0
        assert "ghost" in caplog.text
