# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Artifact naming for exported statements."""

from __future__ import annotations

import re
from datetime import date
from typing import Union

from ..core.primitives import ReportKindEnum

_WHITESPACE = re.compile(r"\s+")


def statement_filename(
    name: str,
    kind: Union[ReportKindEnum, str],
    as_of: date,
    extension: str,
) -> str:
    """
    Build the file name of an exported statement.

    Files are named ``{Name}_{ReportKind}_{ISODate}.{ext}`` where every run
    of whitespace in the name becomes a single underscore.

    Example:
        >>> statement_filename("Westlands  Plaza", ReportKindEnum.ARREARS_REPORT, date(2025, 1, 31), "pdf")
        'Westlands_Plaza_Arrears_Report_2025-01-31.pdf'
    """
    kind_value = kind.value if isinstance(kind, ReportKindEnum) else kind
    stem = f"{_WHITESPACE.sub('_', name)}_{kind_value}_{as_of.isoformat()}"
    return f"{stem}.{extension.lstrip('.')}" if extension else stem
