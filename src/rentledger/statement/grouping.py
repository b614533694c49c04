# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Structural group classification.

Units carry only a free-text type/location label. The floor or wing a unit
belongs to is inferred by keyword match; the policy lives here so it can be
swapped without touching aggregation.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ..core.primitives import DEFAULT_GROUP_RULES

FALLBACK_GROUP = "OTHER"


def classify_group(
    location: Optional[str],
    rules: Sequence[Tuple[str, str]] = DEFAULT_GROUP_RULES,
    fallback: str = FALLBACK_GROUP,
) -> str:
    """
    Map a unit's location text to its structural group label.

    Rules are tried in order and the first keyword contained in the
    lowercased text wins, so "First floor, commercial" classifies as
    FIRST FLOOR under the default rules.

    Args:
        location: Free-text unit type/location; None or empty is allowed.
        rules: Ordered (keyword, label) pairs. Keywords are lowercase.
        fallback: Label for text no keyword matches.

    Returns:
        The group label.

    Example:
        >>> classify_group("Ground Floor Shop")
        'GROUND FLOOR'
        >>> classify_group("Kiosk")
        'OTHER'
    """
    text = (location or "").lower()
    for keyword, label in rules:
        if keyword in text:
            return label
    return fallback
