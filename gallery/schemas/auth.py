# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Admin authentication schemas."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Admin login request."""

    password: str = Field(..., min_length=1)


class AuthCheckResponse(BaseModel):
    """Whether the caller holds a valid admin session."""

    authenticated: bool
