# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Hierarchical aggregation of ledger rows.

Rows are grouped by structural group (floor/wing) and reduced into group
totals, which are reduced again into a grand total. Both reductions are
plain folds over immutable totals with no rounding between levels, so the
grand total ties out to the rows regardless of how they are grouped.
"""

from __future__ import annotations

import logging
from functools import reduce
from typing import Dict, List, Sequence

from ..core.primitives import Model
from .ledger import LedgerRow

logger = logging.getLogger(__name__)

# Summed fields shared by group and grand totals, in statement column order
TOTAL_FIELDS = (
    "deposit",
    "ground_rent",
    "rent_display_amount",
    "vat_amount",
    "service_charge",
    "amount_payable",
    "amount_paid",
    "balance",
)


class StatementTotal(Model):
    """Component-wise sum of ledger row amounts."""

    row_count: int = 0
    deposit: float = 0.0
    ground_rent: float = 0.0
    rent_display_amount: float = 0.0
    vat_amount: float = 0.0
    service_charge: float = 0.0
    amount_payable: float = 0.0
    amount_paid: float = 0.0
    balance: float = 0.0

    def amounts(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in TOTAL_FIELDS}


class GroupTotal(StatementTotal):
    """Subtotal of one structural group."""

    label: str


class GrandTotal(StatementTotal):
    """Total across every structural group of a property."""

    group_count: int = 0


class StatementGroup(Model):
    """One structural group: its label, member rows and subtotal."""

    label: str
    rows: List[LedgerRow]
    total: GroupTotal


class AggregatedStatement(Model):
    groups: List[StatementGroup]
    grand_total: GrandTotal

    @property
    def rows(self) -> List[LedgerRow]:
        """All rows in group order."""
        return [row for group in self.groups for row in group.rows]


def _add_row(total: GroupTotal, row: LedgerRow) -> GroupTotal:
    return total.model_copy(
        update={
            "row_count": total.row_count + 1,
            **{name: getattr(total, name) + getattr(row, name) for name in TOTAL_FIELDS},
        }
    )


def _add_group(total: GrandTotal, group_total: GroupTotal) -> GrandTotal:
    return total.model_copy(
        update={
            "group_count": total.group_count + 1,
            "row_count": total.row_count + group_total.row_count,
            **{
                name: getattr(total, name) + getattr(group_total, name)
                for name in TOTAL_FIELDS
            },
        }
    )


def total_rows(label: str, rows: Sequence[LedgerRow]) -> GroupTotal:
    """Fold rows into a group total."""
    return reduce(_add_row, rows, GroupTotal(label=label))


def total_groups(group_totals: Sequence[GroupTotal]) -> GrandTotal:
    """Fold group totals into the grand total."""
    return reduce(_add_group, group_totals, GrandTotal())


def group_rows(rows: Sequence[LedgerRow]) -> Dict[str, List[LedgerRow]]:
    """
    Partition rows by their ``group`` label.

    Groups appear in the order their first row appears in the input, and
    rows keep their input order within a group.
    """
    grouped: Dict[str, List[LedgerRow]] = {}
    for row in rows:
        grouped.setdefault(row.group, []).append(row)
    return grouped


def aggregate(rows: Sequence[LedgerRow]) -> AggregatedStatement:
    """
    Group ledger rows and compute group and grand totals.

    Args:
        rows: Ledger rows of one property, already tagged with their group.

    Returns:
        AggregatedStatement with groups in first-encountered order.

    Example:
        ```python
        statement = aggregate(build_ledger_rows(units, tenants, incomes))
        for group in statement.groups:
            print(group.label, group.total.balance)
        print(statement.grand_total.balance)
        ```
    """
    groups = [
        StatementGroup(label=label, rows=members, total=total_rows(label, members))
        for label, members in group_rows(rows).items()
    ]
    grand_total = total_groups([group.total for group in groups])

    logger.debug(
        f"Aggregated {grand_total.row_count} rows into {grand_total.group_count} groups"
    )
    return AggregatedStatement(groups=groups, grand_total=grand_total)


def verify_totals(statement: AggregatedStatement, tolerance: float = 0.01) -> None:
    """
    Check that every total ties out before it is handed to an exporter.

    Raises:
        ValueError: If a group total differs from the sum of its rows, the
            grand total differs from the sum of group totals, or a balance
            differs from payable minus paid, by more than ``tolerance``.
    """
    totals: List[StatementTotal] = [group.total for group in statement.groups]
    totals.append(statement.grand_total)

    for total in totals:
        if abs(total.balance - (total.amount_payable - total.amount_paid)) > tolerance:
            raise ValueError(
                f"Balance {total.balance:,.2f} does not equal payable minus paid "
                f"({total.amount_payable:,.2f} - {total.amount_paid:,.2f})"
            )

    for group in statement.groups:
        for name in TOTAL_FIELDS:
            expected = sum(getattr(row, name) for row in group.rows)
            if abs(getattr(group.total, name) - expected) > tolerance:
                raise ValueError(
                    f"Group {group.label} {name} total does not match its rows"
                )

    for name in TOTAL_FIELDS:
        expected = sum(getattr(group.total, name) for group in statement.groups)
        if abs(getattr(statement.grand_total, name) - expected) > tolerance:
            raise ValueError(f"Grand total {name} does not match group totals")
