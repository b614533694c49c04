# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
rentledger Core Framework

Foundational building blocks: primitives, service charge definitions and
the source records every statement is computed from.
"""

from . import primitives
from .charges import (
    ChargeDefinition,
    FixedCharge,
    PerAreaCharge,
    PercentageOfRentCharge,
)
from .primitives import (
    ArrearsStatusEnum,
    BillTypeEnum,
    Model,
    ObligationKindEnum,
    PaymentStatusEnum,
    ReportKindEnum,
    StatementSettings,
    VatTreatmentEnum,
)
from .records import (
    BillInvoiceRecord,
    IncomeEntry,
    PropertyRecord,
    PropertySnapshot,
    RentPeriodRecord,
    TenantRecord,
    UnitRecord,
)

__all__ = [
    "primitives",
    # Charges
    "ChargeDefinition",
    "FixedCharge",
    "PerAreaCharge",
    "PercentageOfRentCharge",
    # Primitives
    "ArrearsStatusEnum",
    "BillTypeEnum",
    "Model",
    "ObligationKindEnum",
    "PaymentStatusEnum",
    "ReportKindEnum",
    "StatementSettings",
    "VatTreatmentEnum",
    # Records
    "BillInvoiceRecord",
    "IncomeEntry",
    "PropertyRecord",
    "PropertySnapshot",
    "RentPeriodRecord",
    "TenantRecord",
    "UnitRecord",
]
