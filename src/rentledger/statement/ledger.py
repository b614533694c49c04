# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit ledger construction.

Combines service charge resolution, VAT calculation and a tenant's payment
history into one LedgerRow per unit. Rows are rebuilt from the source
records for every export and never mutated afterwards.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from ..core.primitives import Model, StatementSettings, VatTreatmentEnum
from ..core.records import IncomeEntry, TenantRecord, UnitRecord
from .grouping import classify_group
from .rates import NO_CHARGE_LABEL, resolve_service_charge
from .vat import calculate_vat

logger = logging.getLogger(__name__)


class LedgerRow(Model):
    """
    Fully computed financial state of one unit and its tenant.

    Attributes:
        group: Structural group (floor/wing) the unit is subtotalled under.
        ground_rent: The unit's base rent as recorded; 0 for a vacant unit.
        rent_display_amount: Rent shown on statements; for INCLUSIVE VAT
            this is the VAT-stripped taxable amount.
        amount_payable: What the tenant owes for the period.
        amount_paid: Sum of the tenant's recorded payments.
        balance: ``amount_payable - amount_paid``; negative means overpaid.
    """

    unit_id: str
    unit_no: Optional[str] = None
    location: str = ""
    usage: Optional[str] = None
    group: str
    size_sq_ft: float = 0.0
    tenant_id: Optional[str] = None
    tenant_name: str
    tenant_contact: str = ""
    is_vacant: bool = False
    vat_treatment: VatTreatmentEnum = VatTreatmentEnum.NOT_APPLICABLE
    vat_rate: float = 0.0
    service_charge: float = 0.0
    service_charge_label: str = NO_CHARGE_LABEL
    vat_amount: float = 0.0
    taxable_amount: float = 0.0
    ground_rent: float = 0.0
    rent_display_amount: float = 0.0
    deposit: float = 0.0
    amount_payable: float = 0.0
    amount_paid: float = 0.0
    last_payment_date: Optional[date] = None
    balance: float = 0.0


def build_ledger_row(
    unit: UnitRecord,
    tenant: Optional[TenantRecord],
    incomes: Optional[Iterable[IncomeEntry]] = None,
    settings: Optional[StatementSettings] = None,
) -> LedgerRow:
    """
    Build the ledger row for one unit.

    Args:
        unit: The unit being reported.
        tenant: Its current tenant, or None when the unit is vacant.
        incomes: Payments attributed to the tenant. When omitted the
            tenant's own ``incomes`` are used.
        settings: Statement settings (default VAT rate, vacant label,
            grouping rules).

    Returns:
        LedgerRow. A vacant unit has every monetary field at zero except
        ``rent_display_amount``, which still shows the unit's rent.
    """
    settings = settings or StatementSettings()
    group = classify_group(
        unit.location, settings.group_rules, settings.fallback_group
    )

    if tenant is None:
        return LedgerRow(
            unit_id=unit.id,
            unit_no=unit.unit_no,
            location=unit.location,
            usage=unit.usage,
            group=group,
            size_sq_ft=unit.size_sq_ft,
            tenant_name=settings.vacant_label,
            is_vacant=True,
            rent_display_amount=unit.rent_amount,
        )

    charge = resolve_service_charge(unit, tenant, settings.currency_label)
    vat = calculate_vat(
        unit.rent_amount,
        charge.value,
        tenant.vat_treatment,
        tenant.vat_rate,
        default_rate=settings.default_vat_rate,
    )

    if tenant.vat_treatment == VatTreatmentEnum.INCLUSIVE:
        # VAT is embedded in the quoted rent; never add it on top
        rent_display_amount = vat.taxable_amount
        amount_payable = unit.rent_amount + charge.value
    else:
        rent_display_amount = unit.rent_amount
        amount_payable = vat.taxable_amount + vat.vat_amount

    payments = list(tenant.incomes if incomes is None else incomes)
    amount_paid = sum(payment.amount for payment in payments)
    payment_dates = [p.created_at for p in payments if p.created_at is not None]

    row = LedgerRow(
        unit_id=unit.id,
        unit_no=unit.unit_no,
        location=unit.location,
        usage=unit.usage,
        group=group,
        size_sq_ft=unit.size_sq_ft,
        tenant_id=tenant.id,
        tenant_name=tenant.full_name,
        tenant_contact=tenant.contact,
        vat_treatment=tenant.vat_treatment,
        vat_rate=vat.rate,
        service_charge=charge.value,
        service_charge_label=charge.label,
        vat_amount=vat.vat_amount,
        taxable_amount=vat.taxable_amount,
        ground_rent=unit.rent_amount,
        rent_display_amount=rent_display_amount,
        deposit=tenant.deposit,
        amount_payable=amount_payable,
        amount_paid=amount_paid,
        last_payment_date=max(payment_dates) if payment_dates else None,
        balance=amount_payable - amount_paid,
    )

    logger.debug(
        f"Unit {unit.id} ({tenant.full_name}): payable={amount_payable:,.2f} "
        f"paid={amount_paid:,.2f} balance={row.balance:,.2f}"
    )
    return row


def current_claimant(
    unit_id: str, claimants: Sequence[TenantRecord]
) -> Optional[TenantRecord]:
    """
    Pick the current tenant among those naming the same unit.

    Former occupants may still name the unit they left. The tenant whose
    lease started last is taken as current; a claimant without a lease
    start date counts as the oldest.

    Raises:
        ValueError: If lease start dates cannot single out one tenant.
    """
    if not claimants:
        return None
    if len(claimants) == 1:
        return claimants[0]

    names = ", ".join(tenant.id for tenant in claimants)
    latest_start = max(tenant.term_start or date.min for tenant in claimants)
    latest = [
        tenant for tenant in claimants if (tenant.term_start or date.min) == latest_start
    ]
    if latest_start == date.min or len(latest) > 1:
        raise ValueError(
            f"Unit {unit_id} is claimed by tenants {names} and their lease start dates do not identify the current one"
        )

    logger.warning(
        f"Unit {unit_id} is claimed by tenants {names}; using {latest[0].id}, whose lease started last"
    )
    return latest[0]


def find_tenant(
    unit: UnitRecord,
    tenants_by_id: Dict[str, TenantRecord],
    tenants_by_unit: Dict[str, List[TenantRecord]],
) -> Optional[TenantRecord]:
    """
    Locate a unit's current tenant.

    A unit either names its tenant directly or a tenant names its unit. A
    unit that names its tenant is never ambiguous, whatever other tenants
    claim it.

    Raises:
        ValueError: If the unit names a tenant that is not in the snapshot,
            or several tenants claim an unlinked unit.
    """
    if unit.tenant_id is not None:
        tenant = tenants_by_id.get(unit.tenant_id)
        if tenant is None:
            raise ValueError(
                f"Unit {unit.id} references unknown tenant {unit.tenant_id}"
            )
        return tenant
    return current_claimant(unit.id, tenants_by_unit.get(unit.id, []))


def build_ledger_rows(
    units: Sequence[UnitRecord],
    tenants: Sequence[TenantRecord],
    incomes: Optional[Sequence[IncomeEntry]] = None,
    settings: Optional[StatementSettings] = None,
) -> List[LedgerRow]:
    """
    Build ledger rows for every unit, in unit order.

    Args:
        units: Units of one property. A tenant embedded in a unit is used
            when the tenant list does not carry it.
        tenants: Tenants of that property.
        incomes: Property-level payment list attributed by ``tenant_id``.
            When omitted each tenant's own ``incomes`` are used instead.
        settings: Statement settings.

    Returns:
        One LedgerRow per unit.
    """
    settings = settings or StatementSettings()
    tenants_by_id = {tenant.id: tenant for tenant in tenants}
    for unit in units:
        if unit.tenant is not None:
            tenants_by_id.setdefault(unit.tenant.id, unit.tenant)

    tenants_by_unit: Dict[str, List[TenantRecord]] = {}
    for tenant in tenants:
        if tenant.unit_id is not None:
            tenants_by_unit.setdefault(tenant.unit_id, []).append(tenant)

    incomes_by_tenant: Optional[Dict[str, List[IncomeEntry]]] = None
    if incomes is not None:
        incomes_by_tenant = {}
        for income in incomes:
            if income.tenant_id is None:
                continue
            if income.tenant_id not in tenants_by_id:
                logger.warning(
                    f"Income {income.id or '<unnamed>'} attributed to unknown tenant {income.tenant_id}"
                )
                continue
            incomes_by_tenant.setdefault(income.tenant_id, []).append(income)

    rows = []
    for unit in units:
        tenant = find_tenant(unit, tenants_by_id, tenants_by_unit)
        tenant_incomes = None
        if tenant is not None and incomes_by_tenant is not None:
            tenant_incomes = incomes_by_tenant.get(tenant.id, [])
        rows.append(build_ledger_row(unit, tenant, tenant_incomes, settings))

    overpaid = [row.unit_id for row in rows if row.balance < 0]
    if overpaid:
        logger.warning(f"Units with overpaid balances: {', '.join(overpaid)}")

    return rows
