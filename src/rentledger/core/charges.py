# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Service charge definitions attached to tenants"""

from __future__ import annotations

from typing import Literal, Union

from pydantic import Field
from typing_extensions import Annotated

from .primitives import Model, PositiveFloat


class FixedCharge(Model):
    """
    A flat service charge per period.

    Example:
        >>> charge = FixedCharge(amount=5_000)
        >>> assert charge.kind == "fixed"
    """

    kind: Literal["fixed"] = "fixed"
    amount: PositiveFloat = Field(..., description="Service charge amount per period")


class PercentageOfRentCharge(Model):
    """
    A service charge expressed as a percentage of the unit's base rent.

    Example:
        >>> charge = PercentageOfRentCharge(percent=10)  # 10% of rent
        >>> assert charge.kind == "percentage"
    """

    kind: Literal["percentage"] = "percentage"
    percent: PositiveFloat = Field(
        ..., description="Percentage of rent (e.g., 10 for 10%)"
    )


class PerAreaCharge(Model):
    """A service charge billed per square foot of the unit's floor area."""

    kind: Literal["per_area"] = "per_area"
    rate_per_unit_area: PositiveFloat = Field(
        ..., description="Charge per square foot of floor area"
    )


# The discriminated union for any service charge shape
ChargeDefinition = Annotated[
    Union[FixedCharge, PercentageOfRentCharge, PerAreaCharge],
    Field(discriminator="kind"),
]
