# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Stocktracker API: financial statements, Y/Y derivation and comparison."""

__version__ = "0.1.0"
