# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
End-to-end pipeline tests: API payloads to exported files.

Runs fetch, statement, arrears and every export over one property the way
a scheduled export job would.
"""

from __future__ import annotations

from datetime import date

import pytest
from openpyxl import load_workbook

from rentledger.core.primitives import StatementSettings
from rentledger.reporting import (
    collection_statement_frame,
    write_arrears_pdf,
    write_collection_statement_xlsx,
)
from rentledger.sources import StaticRecordSource, fetch_snapshot
from rentledger.statement import build_arrears_report, build_collection_statement

PROPERTY = {"id": "p1", "name": "Kilimani Heights", "address": "Argwings Kodhek Rd"}
UNITS = [
    {"id": "u1", "unitNo": "G1", "type": "Ground floor shop", "sizeSqFt": 400, "rentAmount": 50000, "tenantId": "t1"},
    {"id": "u2", "unitNo": "G2", "type": "Ground floor shop", "sizeSqFt": 350, "rentAmount": 42000, "tenantId": "t2"},
    {"id": "u3", "unitNo": "F1", "type": "First floor office", "sizeSqFt": 800, "rentAmount": 65000},
    {"id": "u4", "unitNo": "R1", "type": "Residential 2BR", "sizeSqFt": 900, "rentAmount": 35000, "tenantId": "t3"},
]
TENANTS = [
    {
        "id": "t1", "fullName": "Amani Traders", "contact": "0711 000 001", "unitId": "u1",
        "deposit": 100000, "vatType": "EXCLUSIVE", "vatRate": 16,
        "serviceCharge": {"type": "PERCENTAGE", "percentage": 10},
    },
    {
        "id": "t2", "fullName": "Baraka Pharmacy", "contact": "0711 000 002", "unitId": "u2",
        "deposit": 84000, "vatType": "INCLUSIVE", "vatRate": 16,
        "serviceCharge": {"type": "PER_SQ_FT", "perSqFtRate": 20},
    },
    {
        "id": "t3", "fullName": "Wanjiku Njeri", "contact": "0711 000 003", "unitId": "u4",
        "deposit": 35000, "vatType": None, "serviceCharge": None,
    },
]
INCOMES = [
    {"id": "i1", "tenantId": "t1", "amount": 40000, "createdAt": "2025-01-04T09:00:00.000Z"},
    {"id": "i2", "tenantId": "t2", "amount": 49000, "createdAt": "2025-01-02T09:00:00.000Z"},
    {"id": "i3", "tenantId": "t3", "amount": 35000, "createdAt": "2025-01-01T09:00:00.000Z"},
]
BILLS = [
    {
        "tenantId": "t3", "invoiceNumber": "WB-100", "billType": "WATER", "units": 10,
        "chargePerUnit": 150, "totalAmount": 1500, "vatAmount": 240, "grandTotal": 1740,
        "amountPaid": 0, "dueDate": "2025-02-05T00:00:00.000Z", "status": "PENDING",
    },
]


@pytest.fixture
def source():
    return StaticRecordSource(PROPERTY, UNITS, TENANTS, INCOMES, bill_invoices=BILLS)


@pytest.fixture
def pipeline_settings():
    return StatementSettings(as_of=date(2025, 1, 31))


def test_collection_statement_end_to_end(source, pipeline_settings, tmp_path):
    snapshot = fetch_snapshot(source, "p1")
    statement = build_collection_statement(snapshot, pipeline_settings)

    rows = {row.unit_no: row for row in statement.rows}
    assert rows["G1"].amount_payable == 63_800
    assert rows["G1"].balance == 23_800
    # 42,000 rent + 350 sq ft at 20 = 49,000 gross, VAT inside
    assert rows["G2"].amount_payable == 49_000
    assert rows["G2"].balance == 0
    assert rows["F1"].is_vacant
    assert rows["R1"].vat_amount == 0
    assert [g.label for g in statement.groups] == [
        "GROUND FLOOR", "FIRST FLOOR", "RESIDENTIAL WING",
    ]
    assert statement.grand_total.balance == pytest.approx(
        sum(row.balance for row in statement.rows), abs=0.01
    )

    path = write_collection_statement_xlsx(statement, tmp_path, pipeline_settings)
    assert path.name == "Kilimani_Heights_Collection_Statement_2025-01-31.xlsx"
    assert load_workbook(path).active["A2"].value == "KILIMANI HEIGHTS"


def test_arrears_end_to_end(source, pipeline_settings, tmp_path):
    snapshot = fetch_snapshot(source, "p1")
    report = build_arrears_report(snapshot, pipeline_settings, from_ledger=True)

    assert [(item.tenant_name, item.balance) for item in report.items] == [
        ("Amani Traders", 23_800),
        ("Wanjiku Njeri", 1_740),
    ]
    assert report.items[1].unit_no == "R1"
    assert report.summary.total_arrears == 25_540

    path = write_arrears_pdf(report, snapshot.property, tmp_path, pipeline_settings)
    assert path.read_bytes().startswith(b"%PDF")


def test_pipeline_is_idempotent(source, pipeline_settings):
    """Two runs over the same records give identical results."""
    first = fetch_snapshot(source, "p1")
    second = fetch_snapshot(source, "p1")
    assert first == second

    statement_a = build_collection_statement(first, pipeline_settings)
    statement_b = build_collection_statement(second, pipeline_settings)
    assert statement_a == statement_b
    assert statement_a.model_dump() == statement_b.model_dump()

    arrears_a = build_arrears_report(first, pipeline_settings, from_ledger=True)
    arrears_b = build_arrears_report(second, pipeline_settings, from_ledger=True)
    assert arrears_a == arrears_b

    frame_a = collection_statement_frame(statement_a)
    frame_b = collection_statement_frame(statement_b)
    assert frame_a.equals(frame_b)
