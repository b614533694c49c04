# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
rentledger - Property collection statements and arrears reporting

Computes per-unit rent, service charge and VAT ledgers for a property,
rolls them up by floor or wing into a grand total, extracts arrears and
exports the results as workbooks and PDFs.

Key Entry Points:
- rentledger.sources.fetch_snapshot() - Fetch all records for a property
- rentledger.statement.build_collection_statement() - Ledger rows and totals
- rentledger.statement.build_arrears_report() - Unpaid and partially paid items
- rentledger.reporting.* - DataFrame, Excel and PDF exports

Example Usage:
    ```python
    from rentledger.sources import fetch_snapshot
    from rentledger.statement import build_collection_statement
    from rentledger.reporting import write_collection_statement_xlsx

    snapshot = fetch_snapshot(source, "prop-1")
    statement = build_collection_statement(snapshot)
    print(f"Outstanding: {statement.grand_total.balance:,.2f}")
    write_collection_statement_xlsx(statement, "exports/")
    ```
"""

import importlib
import logging

# Applications configure their own handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())


# Public API surface (lazy-loaded on first attribute access)
__all__ = [  # noqa: F822 - lazy loading
    "core",
    "reporting",
    "sources",
    "statement",
]


_LAZY_MODULES = {
    "core": "rentledger.core",
    "reporting": "rentledger.reporting",
    "sources": "rentledger.sources",
    "statement": "rentledger.statement",
}


def __getattr__(name: str):
    module_path = _LAZY_MODULES.get(name)
    if module_path is None:
        raise AttributeError(f"module 'rentledger' has no attribute '{name}'")
    module = importlib.import_module(module_path)
    globals()[name] = module
    return module
