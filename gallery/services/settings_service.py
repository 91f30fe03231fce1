# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Settings store for per-gallery key/value settings."""

import logging

from sqlalchemy.orm import Session

from gallery.config import settings
from gallery.models import Setting

logger = logging.getLogger(__name__)

MAX_RESOLUTION_KEY = "max_resolution"
ADMIN_PASSWORD_HASH_KEY = "admin_password_hash"


def get_setting(db: Session, key: str) -> str | None:
    """Get a setting value by key."""
    setting = db.query(Setting).filter(Setting.key == key).first()
    return setting.value if setting else None


def set_setting(db: Session, key: str, value: object) -> None:
    """Create or overwrite a setting. The value is stored as a string."""
    setting = db.query(Setting).filter(Setting.key == key).first()
    if setting is None:
        db.add(Setting(key=key, value=str(value)))
    else:
        setting.value = str(value)
    db.commit()


def get_max_resolution(db: Session) -> int:
    """Longest edge, in pixels, that stored pictures may have."""
    value = get_setting(db, MAX_RESOLUTION_KEY)
    if not value:
        return settings.default_max_resolution
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring unparsable {MAX_RESOLUTION_KEY} setting: {value!r}")
        return settings.default_max_resolution


def set_max_resolution(db: Session, value: int) -> int:
    """Store the max resolution. Range checks are up to the caller."""
    set_setting(db, MAX_RESOLUTION_KEY, int(value))
    return int(value)


def get_admin_password_hash(db: Session) -> str | None:
    """Get the stored admin password hash, if any."""
    return get_setting(db, ADMIN_PASSWORD_HASH_KEY)


def set_admin_password_hash(db: Session, password_hash: str) -> None:
    """Store the admin password hash."""
    set_setting(db, ADMIN_PASSWORD_HASH_KEY, password_hash)
