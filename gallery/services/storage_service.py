# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Picture file storage inside a gallery's images directory."""

import logging
from pathlib import Path

from gallery.config import settings
from gallery.security import generate_token

logger = logging.getLogger(__name__)


def generate_filename(extension: str) -> str:
    """Random, unguessable filename with the given extension."""
    return f"{generate_token(settings.filename_random_bytes)}{extension}"


def path_for(images_dir: Path, filename: str) -> Path:
    """Absolute path of a stored picture file.

    Raises:
        ValueError: If ``filename`` would resolve outside ``images_dir``.
    """
    base = images_dir.resolve()
    path = (base / filename).resolve()
    if path.parent != base:
        raise ValueError(f"Invalid picture filename: {filename}")
    return path


def save_bytes(images_dir: Path, filename: str, data: bytes) -> Path:
    """Write picture bytes to disk."""
    path = path_for(images_dir, filename)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


def delete_file(images_dir: Path, filename: str) -> bool:
    """Remove a stored picture file.

    Failures are logged and reported, never raised; the picture record is
    the source of truth for whether a picture exists.
    """
    try:
        path_for(images_dir, filename).unlink()
    except (OSError, ValueError) as e:
        logger.warning(f"Could not delete file {filename}: {e}")
        return False
    return True
