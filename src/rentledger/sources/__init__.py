# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Record sources and snapshot fetching."""

from .snapshot import (
    RecordSource,
    SnapshotFetchError,
    StaticRecordSource,
    fetch_snapshot,
)

__all__ = [
    "RecordSource",
    "SnapshotFetchError",
    "StaticRecordSource",
    "fetch_snapshot",
]
