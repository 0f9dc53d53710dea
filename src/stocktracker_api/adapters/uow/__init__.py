# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
