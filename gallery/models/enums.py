# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Enumeration types."""

from enum import Enum


class DeliveryMode(str, Enum):
    """Traversal mode requested by a token holder."""

    SEQUENTIAL = "next"  # Ascending id order, forever
    RANDOM = "random"  # Shuffled cycles, no repeat within a cycle
