# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Base reporting classes for statement exports.

Reports only format and present already-computed statements; they never
perform financial calculations of their own.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Optional

from ..core.primitives import StatementSettings


class BaseReport(ABC):
    """
    Abstract base class for all report formatters.

    Subclasses receive computed statement objects and turn them into
    presentation formats (DataFrame, workbook, PDF).
    """

    def __init__(self, settings: Optional[StatementSettings] = None):
        self._settings = settings or StatementSettings()

    @property
    def settings(self) -> StatementSettings:
        return self._settings

    @abstractmethod
    def generate(self, **kwargs) -> Any:
        """Produce the formatted report output."""
        pass

    def _format_currency(self, value: Optional[float]) -> str:
        """Format currency values for display, e.g. ``Ksh 63,800.00``."""
        if value is None:
            return "-"
        precision = self._settings.decimal_precision
        return f"{self._settings.currency_label} {value:,.{precision}f}"

    @staticmethod
    def _format_date(value: Optional[date], fmt: str = "%d/%m/%Y") -> str:
        return value.strftime(fmt) if value is not None else ""
