# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base Pydantic model with common configuration.

    Immutable, slot-based models so that records fetched for an export and
    every figure derived from them can be shared freely between computations.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,  # Derived statements are never mutated in place
        slots=True,
        extra="forbid",  # Catches typos in record payloads immediately
    )
