# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Snapshot fetching.

Fetches every record collection an export needs, concurrently, and freezes
them into a PropertySnapshot. Statements are only ever computed from a
complete snapshot: if any fetch fails the whole snapshot fails.
"""

from __future__ import annotations

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Sequence

from ..core.records import (
    BillInvoiceRecord,
    IncomeEntry,
    PropertyRecord,
    PropertySnapshot,
    RentPeriodRecord,
    TenantRecord,
    UnitRecord,
)

logger = logging.getLogger(__name__)


class SnapshotFetchError(RuntimeError):
    """A record collection could not be fetched; no statement may be built."""

    def __init__(self, property_id: str, collection: str, cause: BaseException):
        super().__init__(
            f"Failed to fetch {collection} for property {property_id}: {cause}"
        )
        self.property_id = property_id
        self.collection = collection


class RecordSource(Protocol):
    """
    Upstream provider of already-deserialized property records.

    Implementations own transport, authentication and pagination; each
    method returns the full collection for the property.
    """

    def get_property(self, property_id: str) -> Mapping[str, Any]: ...

    def list_units(self, property_id: str) -> Sequence[Mapping[str, Any]]: ...

    def list_tenants(self, property_id: str) -> Sequence[Mapping[str, Any]]: ...

    def list_incomes(self, property_id: str) -> Sequence[Mapping[str, Any]]: ...

    def list_rent_periods(self, property_id: str) -> Sequence[Mapping[str, Any]]: ...

    def list_bill_invoices(self, property_id: str) -> Sequence[Mapping[str, Any]]: ...


class StaticRecordSource:
    """
    RecordSource over payloads already held in memory.

    Useful for exports built from a saved API response.
    """

    def __init__(
        self,
        property: Mapping[str, Any],
        units: Sequence[Mapping[str, Any]] = (),
        tenants: Sequence[Mapping[str, Any]] = (),
        incomes: Sequence[Mapping[str, Any]] = (),
        rent_periods: Sequence[Mapping[str, Any]] = (),
        bill_invoices: Sequence[Mapping[str, Any]] = (),
    ):
        self._property = property
        self._collections = {
            "units": list(units),
            "tenants": list(tenants),
            "incomes": list(incomes),
            "rent_periods": list(rent_periods),
            "bill_invoices": list(bill_invoices),
        }

    def get_property(self, property_id: str) -> Mapping[str, Any]:
        if self._property.get("id") != property_id:
            raise KeyError(f"Unknown property {property_id}")
        return self._property

    def list_units(self, property_id: str) -> Sequence[Mapping[str, Any]]:
        return self._collections["units"]

    def list_tenants(self, property_id: str) -> Sequence[Mapping[str, Any]]:
        return self._collections["tenants"]

    def list_incomes(self, property_id: str) -> Sequence[Mapping[str, Any]]:
        return self._collections["incomes"]

    def list_rent_periods(self, property_id: str) -> Sequence[Mapping[str, Any]]:
        return self._collections["rent_periods"]

    def list_bill_invoices(self, property_id: str) -> Sequence[Mapping[str, Any]]:
        return self._collections["bill_invoices"]


def _fetchers(source: RecordSource) -> Dict[str, Callable[[str], Any]]:
    return {
        "property": source.get_property,
        "units": source.list_units,
        "tenants": source.list_tenants,
        "incomes": source.list_incomes,
        "rent_periods": source.list_rent_periods,
        "bill_invoices": source.list_bill_invoices,
    }


def fetch_snapshot(
    source: RecordSource,
    property_id: str,
    max_workers: Optional[int] = 4,
) -> PropertySnapshot:
    """
    Fetch all records for a property and assemble an immutable snapshot.

    The six collections are independent and are fetched in parallel. The
    first failure cancels fetches that have not started and aborts the
    snapshot.

    Args:
        source: Upstream record provider.
        property_id: Property to fetch.
        max_workers: Thread pool size for the parallel fetches.

    Returns:
        PropertySnapshot validated from the fetched payloads.

    Raises:
        SnapshotFetchError: If any collection fails to fetch or validate.
    """
    fetchers = _fetchers(source)
    payloads: Dict[str, Any] = {}

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(fetch, property_id): name
            for name, fetch in fetchers.items()
        }
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)

        for future in pending:
            future.cancel()

        for future in done:
            name = futures[future]
            error = future.exception()
            if error is not None:
                logger.error(f"Fetching {name} for property {property_id} failed: {error}")
                raise SnapshotFetchError(property_id, name, error) from error
            payloads[name] = future.result()

    try:
        snapshot = PropertySnapshot(
            property=PropertyRecord.model_validate(payloads["property"]),
            units=_validate_all(UnitRecord, payloads["units"]),
            tenants=_validate_all(TenantRecord, payloads["tenants"]),
            incomes=_validate_all(IncomeEntry, payloads["incomes"]),
            rent_periods=_validate_all(RentPeriodRecord, payloads["rent_periods"]),
            bill_invoices=_validate_all(BillInvoiceRecord, payloads["bill_invoices"]),
        )
    except ValueError as e:
        # pydantic.ValidationError is a ValueError
        raise SnapshotFetchError(property_id, "records", e) from e

    logger.info(
        f"Fetched snapshot for property {property_id}: {len(snapshot.units)} units, "
        f"{len(snapshot.tenants)} tenants, {len(snapshot.incomes)} incomes"
    )
    return snapshot


def _validate_all(model: Any, payloads: Optional[Sequence[Any]]) -> List[Any]:
    return [model.model_validate(payload) for payload in payloads or ()]
