# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Test utilities and fixtures for rentledger testing.

Factory helpers build records with sensible defaults so tests only spell
out the fields they care about.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

import pytest

from rentledger.core import (
    FixedCharge,
    IncomeEntry,
    PercentageOfRentCharge,
    PropertyRecord,
    PropertySnapshot,
    TenantRecord,
    UnitRecord,
)
from rentledger.core.primitives import StatementSettings, VatTreatmentEnum

AS_OF = date(2025, 1, 31)


# Record Factories
def make_unit(
    unit_id: str = "u1",
    location: str = "Ground floor shop",
    rent_amount: float = 50_000.0,
    size_sq_ft: float = 500.0,
    tenant_id: Optional[str] = None,
    **kwargs,
) -> UnitRecord:
    """Create a unit; let it by passing ``tenant_id``."""
    return UnitRecord(
        id=unit_id,
        unit_no=kwargs.pop("unit_no", unit_id.upper()),
        location=location,
        rent_amount=rent_amount,
        size_sq_ft=size_sq_ft,
        tenant_id=tenant_id,
        **kwargs,
    )


def make_tenant(
    tenant_id: str = "t1",
    full_name: str = "Amani Traders",
    unit_id: Optional[str] = "u1",
    vat_treatment: VatTreatmentEnum = VatTreatmentEnum.NOT_APPLICABLE,
    vat_rate: Optional[float] = None,
    service_charge=None,
    **kwargs,
) -> TenantRecord:
    return TenantRecord(
        id=tenant_id,
        full_name=full_name,
        contact=kwargs.pop("contact", "0700 000 000"),
        unit_id=unit_id,
        vat_treatment=vat_treatment,
        vat_rate=vat_rate,
        service_charge=service_charge,
        **kwargs,
    )


def make_income(
    tenant_id: str = "t1", amount: float = 10_000.0, created_at: date = AS_OF
) -> IncomeEntry:
    return IncomeEntry(tenant_id=tenant_id, amount=amount, created_at=created_at)


def make_snapshot(
    units=(), tenants=(), incomes=(), rent_periods=(), bill_invoices=(), name="Westlands Plaza"
) -> PropertySnapshot:
    return PropertySnapshot(
        property=PropertyRecord(id="p1", name=name, address="Waiyaki Way, Nairobi"),
        units=list(units),
        tenants=list(tenants),
        incomes=list(incomes),
        rent_periods=list(rent_periods),
        bill_invoices=list(bill_invoices),
    )


# Fixtures
@pytest.fixture
def settings() -> StatementSettings:
    return StatementSettings(as_of=AS_OF)


@pytest.fixture
def sample_snapshot() -> PropertySnapshot:
    """
    A small mixed-use property.

    - Ground floor: an EXCLUSIVE tenant with a 10% service charge, partly
      paid, and a vacant unit
    - First floor: an INCLUSIVE tenant with a fixed service charge, fully
      paid
    - A kiosk that no group rule matches
    """
    units = [
        make_unit("u1", "Ground floor shop", 50_000, tenant_id="t1"),
        make_unit("u2", "Ground floor shop", 30_000),
        make_unit("u3", "First floor office", 50_000, tenant_id="t2"),
        make_unit("u4", "Kiosk", 8_000, size_sq_ft=40, tenant_id="t3"),
    ]
    tenants = [
        make_tenant(
            "t1",
            "Amani Traders",
            unit_id="u1",
            vat_treatment=VatTreatmentEnum.EXCLUSIVE,
            vat_rate=16,
            service_charge=PercentageOfRentCharge(percent=10),
            deposit=100_000,
        ),
        make_tenant(
            "t2",
            "Baraka Consultants",
            unit_id="u3",
            vat_treatment=VatTreatmentEnum.INCLUSIVE,
            vat_rate=16,
            service_charge=FixedCharge(amount=5_000),
            deposit=50_000,
        ),
        make_tenant("t3", "Chai Corner", unit_id="u4"),
    ]
    incomes = [
        make_income("t1", 40_000, date(2025, 1, 5)),
        make_income("t2", 55_000, date(2025, 1, 3)),
        make_income("t1", 10_000, date(2025, 1, 20)),
    ]
    return make_snapshot(units, tenants, incomes)
