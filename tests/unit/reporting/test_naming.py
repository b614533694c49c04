# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from datetime import date

from rentledger.core import ReportKindEnum
from rentledger.reporting import statement_filename


def test_collection_statement_name():
    name = statement_filename(
        "Westlands Plaza", ReportKindEnum.COLLECTION_STATEMENT, date(2025, 1, 31), "xlsx"
    )
    assert name == "Westlands_Plaza_Collection_Statement_2025-01-31.xlsx"


def test_whitespace_runs_collapse_to_one_underscore():
    name = statement_filename("Mall \t of   Kenya", ReportKindEnum.ARREARS_REPORT, date(2025, 2, 1), ".pdf")
    assert name == "Mall_of_Kenya_Arrears_Report_2025-02-01.pdf"


def test_plain_string_kind_and_no_extension():
    assert statement_filename("A B", "Custom", date(2025, 1, 1), "") == "A_B_Custom_2025-01-01"
