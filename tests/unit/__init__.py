# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for rentledger components.

This package contains isolated unit tests that verify individual component
functionality without external dependencies.
"""
