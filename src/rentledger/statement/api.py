# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Statement API

Public entry points that run the full pipeline over a property snapshot:
service charges and VAT, unit ledger rows, hierarchical totals and arrears.
Every call is a fresh, deterministic computation over its inputs.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from pydantic import Field

from ..core.primitives import Model, StatementSettings
from ..core.records import PropertyRecord, PropertySnapshot
from .aggregation import (
    AggregatedStatement,
    GrandTotal,
    StatementGroup,
    aggregate,
)
from .arrears import (
    ArrearsReport,
    bill_obligation,
    build_tenant_context,
    extract_arrears,
    extract_obligation_arrears,
    rent_obligations_from_ledger,
)
from .ledger import LedgerRow, build_ledger_rows

logger = logging.getLogger(__name__)


class CollectionStatement(Model):
    """
    Computed collection statement for one property.

    Exporters only format this object; every total in it already ties out
    to the rows. Exporters default to the settings the statement was
    computed with, so labels and currency match the figures.
    """

    property: PropertyRecord
    as_of: date
    currency_label: str = "Ksh"
    aggregated: AggregatedStatement
    settings: StatementSettings = Field(default_factory=StatementSettings)

    @property
    def groups(self) -> List[StatementGroup]:
        return self.aggregated.groups

    @property
    def grand_total(self) -> GrandTotal:
        return self.aggregated.grand_total

    @property
    def rows(self) -> List[LedgerRow]:
        return self.aggregated.rows


def build_collection_statement(
    snapshot: PropertySnapshot,
    settings: Optional[StatementSettings] = None,
) -> CollectionStatement:
    """
    Compute the collection statement for a property.

    Args:
        snapshot: Records fetched for this export.
        settings: Statement settings; defaults apply when omitted.

    Returns:
        CollectionStatement with per-group rows and totals and a grand total.

    Example:
        ```python
        snapshot = fetch_snapshot(source, property_id)
        statement = build_collection_statement(snapshot)
        print(f"Outstanding: {statement.grand_total.balance:,.2f}")
        ```
    """
    settings = settings or StatementSettings()
    incomes = snapshot.incomes if snapshot.incomes else None
    rows = build_ledger_rows(snapshot.units, snapshot.tenants, incomes, settings)
    aggregated = aggregate(rows)

    logger.info(
        f"Collection statement for {snapshot.property.name}: "
        f"{len(rows)} units, {len(aggregated.groups)} groups, "
        f"balance {aggregated.grand_total.balance:,.2f}"
    )
    return CollectionStatement(
        property=snapshot.property,
        as_of=settings.as_of,
        currency_label=settings.currency_label,
        aggregated=aggregated,
        settings=settings,
    )


def build_arrears_report(
    snapshot: PropertySnapshot,
    settings: Optional[StatementSettings] = None,
    from_ledger: bool = False,
) -> ArrearsReport:
    """
    Compute the arrears report for a property.

    Args:
        snapshot: Records fetched for this export.
        settings: Statement settings; defaults apply when omitted.
        from_ledger: When True, rent arrears are taken from the collection
            statement balances instead of per-period rent records.

    Returns:
        ArrearsReport with rent items first, then bill items.
    """
    settings = settings or StatementSettings()
    context = build_tenant_context(snapshot.tenants, snapshot.units)

    if from_ledger:
        incomes = snapshot.incomes if snapshot.incomes else None
        rows = build_ledger_rows(snapshot.units, snapshot.tenants, incomes, settings)
        obligations = rent_obligations_from_ledger(rows, as_of=settings.as_of)
        obligations.extend(
            bill_obligation(record)
            for record in snapshot.bill_invoices
            if not record.is_cancelled
        )
        report = extract_obligation_arrears(obligations, context)
    else:
        report = extract_arrears(snapshot.rent_periods, snapshot.bill_invoices, context)

    logger.info(
        f"Arrears report for {snapshot.property.name}: "
        f"{report.summary.item_count} items, {report.summary.total_arrears:,.2f} owed"
    )
    return report
