# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from datetime import date
from typing import Tuple

from pydantic import Field, field_validator

from .model import Model
from .types import Percentage, PositiveInt

DEFAULT_GROUP_RULES: Tuple[Tuple[str, str], ...] = (
    ("ground", "GROUND FLOOR"),
    ("first", "FIRST FLOOR"),
    ("second", "SECOND FLOOR"),
    ("third", "THIRD FLOOR"),
    ("commercial", "COMMERCIAL WING"),
    ("residential", "RESIDENTIAL WING"),
)


class ExportSettings(Model):
    """Settings related to exported documents (letterhead, titles)."""

    company_name: str = "INTERPARK ENTERPRISES LIMITED"
    company_phone: str = "0110 060 088"
    company_email: str = "info@interparkenterprises.co.ke"
    company_website: str = "www.interparkenterprises.co.ke"
    sheet_title: str = Field(
        default="Collection Statement",
        description="Worksheet name of the collection statement workbook.",
    )


class StatementSettings(Model):
    """Statement computation settings

    Configures the defaults the engine falls back to when tenant records
    are silent, and the structural grouping policy used for subtotals.
    """

    as_of: date = Field(default_factory=date.today)
    default_vat_rate: Percentage = Field(
        default=16.0,
        description="VAT rate (percent) used when a tenant's treatment needs a rate but none is set.",
    )
    currency_label: str = "Ksh"
    vacant_label: str = Field(
        default="VACANT", description="Tenant name rendered for vacant units."
    )
    group_rules: Tuple[Tuple[str, str], ...] = Field(
        default=DEFAULT_GROUP_RULES,
        description="Ordered (keyword, group label) pairs; the first keyword found wins.",
    )
    fallback_group: str = "OTHER"
    decimal_precision: PositiveInt = Field(
        default=2, description="Number of decimal places for currency values."
    )
    export: ExportSettings = Field(default_factory=ExportSettings)

    @field_validator("group_rules")
    @classmethod
    def validate_group_rules(
        cls, v: Tuple[Tuple[str, str], ...]
    ) -> Tuple[Tuple[str, str], ...]:
        """Keywords are matched case-insensitively, so store them lowercased."""
        normalized = []
        for keyword, label in v:
            if not keyword.strip():
                raise ValueError("Group rule keywords must be non-empty")
            normalized.append((keyword.strip().lower(), label))
        return tuple(normalized)
