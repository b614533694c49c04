# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
VAT calculation for the three VAT treatments.

For INCLUSIVE treatment the quoted figure already contains VAT, so VAT is
extracted by dividing by (1 + r); multiplying by r would double-count.
"""

from __future__ import annotations

from typing import Optional

from ..core.primitives import Model, VatTreatmentEnum

DEFAULT_VAT_RATE = 16.0


class VatBreakdown(Model):
    """
    VAT split of rent plus service charge.

    Attributes:
        vat_amount: VAT charged (EXCLUSIVE) or contained (INCLUSIVE).
        taxable_amount: Net amount VAT is levied on.
        gross: Rent plus service charge as quoted, before any VAT is added.
        rate: Effective VAT rate in percent (0 when NOT_APPLICABLE).
    """

    vat_amount: float
    taxable_amount: float
    gross: float
    rate: float


def effective_vat_rate(
    treatment: VatTreatmentEnum,
    vat_rate: Optional[float] = None,
    default_rate: float = DEFAULT_VAT_RATE,
) -> float:
    """Rate in percent for a treatment, falling back to the default when unset."""
    if treatment == VatTreatmentEnum.NOT_APPLICABLE:
        return 0.0
    rate = default_rate if vat_rate is None else vat_rate
    if rate < 0:
        raise ValueError(f"VAT rate must be non-negative, got {rate}")
    return rate


def calculate_vat(
    rent_amount: float,
    service_charge: float,
    treatment: VatTreatmentEnum,
    vat_rate: Optional[float] = None,
    default_rate: float = DEFAULT_VAT_RATE,
) -> VatBreakdown:
    """
    Compute VAT and taxable amount for rent plus service charge.

    Args:
        rent_amount: Base rent for the period.
        service_charge: Resolved service charge for the period.
        treatment: The tenant's VAT treatment.
        vat_rate: The tenant's VAT rate in percent, if set.
        default_rate: Rate used when a rate is required but unset.

    Returns:
        VatBreakdown where, for INCLUSIVE, ``taxable_amount + vat_amount``
        equals the gross and, for EXCLUSIVE, ``vat_amount`` equals
        ``taxable_amount * rate / 100``.

    Example:
        >>> calculate_vat(50_000, 5_000, VatTreatmentEnum.EXCLUSIVE, 16).vat_amount
        8800.0
    """
    rate = effective_vat_rate(treatment, vat_rate, default_rate)
    gross = rent_amount + service_charge
    r = rate / 100

    if treatment == VatTreatmentEnum.NOT_APPLICABLE:
        return VatBreakdown(vat_amount=0.0, taxable_amount=gross, gross=gross, rate=0.0)

    if treatment == VatTreatmentEnum.EXCLUSIVE:
        return VatBreakdown(
            vat_amount=gross * rate / 100,
            taxable_amount=gross,
            gross=gross,
            rate=rate,
        )

    if treatment == VatTreatmentEnum.INCLUSIVE:
        vat_amount = gross - gross / (1 + r)
        return VatBreakdown(
            vat_amount=vat_amount,
            taxable_amount=gross - vat_amount,
            gross=gross,
            rate=rate,
        )

    raise ValueError(f"Unsupported VAT treatment: {treatment!r}")
