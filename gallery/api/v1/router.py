# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Main API router for v1 endpoints.

Everything is mounted below ``/galleries/{gallery}``.
"""

from fastapi import APIRouter

from gallery.api.v1 import auth, photo, pictures, settings, tags, tokens

api_router = APIRouter()

# Auth routes
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

# Admin routes
api_router.include_router(pictures.router, prefix="/pictures", tags=["pictures"])
api_router.include_router(tags.router, prefix="/tags", tags=["tags"])
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])
api_router.include_router(tokens.router, prefix="/tokens", tags=["tokens"])

# Token holder routes
api_router.include_router(photo.router, tags=["photo"])
