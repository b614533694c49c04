# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
rentledger Core Primitives

Essential building blocks for statement computation: the immutable model
base, enums, constrained types and settings.
"""

from .enums import (
    ArrearsStatusEnum,
    BillTypeEnum,
    ObligationKindEnum,
    PaymentStatusEnum,
    ReportKindEnum,
    VatTreatmentEnum,
)
from .model import Model
from .settings import DEFAULT_GROUP_RULES, ExportSettings, StatementSettings
from .types import Percentage, PositiveFloat, PositiveInt

__all__ = [
    # Core models
    "Model",
    # Settings
    "DEFAULT_GROUP_RULES",
    "ExportSettings",
    "StatementSettings",
    # Enums
    "ArrearsStatusEnum",
    "BillTypeEnum",
    "ObligationKindEnum",
    "PaymentStatusEnum",
    "ReportKindEnum",
    "VatTreatmentEnum",
    # Types
    "Percentage",
    "PositiveFloat",
    "PositiveInt",
]
