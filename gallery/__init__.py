# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Simple gallery: token-driven picture delivery with an admin API."""

__version__ = "0.3.0"
