# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Service charge resolution.

Derives the service charge owed for a unit/tenant pair from whichever
charge definition shape the tenant carries.
"""

from __future__ import annotations

from typing import Optional

from ..core.charges import FixedCharge, PerAreaCharge, PercentageOfRentCharge
from ..core.primitives import Model
from ..core.records import TenantRecord, UnitRecord

NO_CHARGE_LABEL = "-"


class ServiceChargeResolution(Model):
    """Resolved service charge amount and its human-readable description."""

    value: float = 0.0
    label: str = NO_CHARGE_LABEL


def resolve_service_charge(
    unit: UnitRecord,
    tenant: Optional[TenantRecord],
    currency_label: str = "Ksh",
) -> ServiceChargeResolution:
    """
    Resolve the service charge for a unit and its current tenant.

    Args:
        unit: Unit supplying base rent (percentage charges) and floor
            area (per-area charges).
        tenant: Current tenant, or None for a vacant unit.
        currency_label: Currency prefix used in the label.

    Returns:
        ServiceChargeResolution; a vacant unit or a tenant without a
        charge definition resolves to zero with label "-".

    Raises:
        TypeError: If the tenant carries an unknown charge variant.
    """
    if tenant is None or tenant.service_charge is None:
        return ServiceChargeResolution()

    charge = tenant.service_charge
    if isinstance(charge, FixedCharge):
        return ServiceChargeResolution(
            value=charge.amount,
            label=f"Fixed {currency_label} {charge.amount:,.2f}",
        )
    if isinstance(charge, PercentageOfRentCharge):
        return ServiceChargeResolution(
            value=unit.rent_amount * charge.percent / 100,
            label=f"{charge.percent:g}%",
        )
    if isinstance(charge, PerAreaCharge):
        return ServiceChargeResolution(
            value=unit.size_sq_ft * charge.rate_per_unit_area,
            label=f"{currency_label} {charge.rate_per_unit_area:g}/sq ft",
        )

    raise TypeError(f"Unsupported service charge definition: {type(charge).__name__}")
