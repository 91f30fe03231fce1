"""Services package."""
from gallery.services import (
    auth_service,
    delivery_service,
    ingest_service,
    picture_service,
    settings_service,
    storage_service,
    tag_service,
    token_service,
)

__all__ = [
    "auth_service",
    "delivery_service",
    "ingest_service",
    "picture_service",
    "settings_service",
    "storage_service",
    "tag_service",
    "token_service",
]
