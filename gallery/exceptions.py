# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Error kinds raised by the gallery services.

Services raise these and never assume a transport; the API layer maps
``status_code`` onto the HTTP response.
"""


class GalleryError(Exception):
    """Base exception for gallery errors."""

    code = "error"
    status_code = 500

    def __init__(self, message: str = "") -> None:
        self.message = message or self.__class__.__doc__ or self.code
        super().__init__(self.message)


class NotFoundError(GalleryError):
    """Not found"""

    code = "not_found"
    status_code = 404


class EmptyCollectionError(NotFoundError):
    """No pictures in gallery"""

    code = "empty_collection"


class ForbiddenError(GalleryError):
    """Invalid or revoked token"""

    code = "forbidden"
    status_code = 403


class ConflictError(GalleryError):
    """Conflicting update"""

    code = "conflict"
    status_code = 409


class InvalidError(GalleryError):
    """Invalid input"""

    code = "invalid"
    status_code = 400
