# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Per-gallery database engines, sessions and the gallery registry."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from gallery.config import settings
from gallery.exceptions import NotFoundError
from gallery.migrations import run_migrations

logger = logging.getLogger(__name__)

DATABASE_FILENAME = "gallery.db"
IMAGES_DIRNAME = "images"


def _enable_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    """Turn on SQLite foreign key enforcement for every new connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_sqlite_engine(url: str, **kwargs: Any) -> Engine:
    """Create an engine for a SQLite URL with foreign keys enabled."""
    engine = create_engine(
        url, connect_args={"check_same_thread": False}, **kwargs
    )
    event.listen(engine, "connect", _enable_foreign_keys)
    return engine


@dataclass
class Gallery:
    """One tenant: its own database and images directory."""

    key: str
    root: Path
    engine: Engine
    session_factory: sessionmaker[Session]

    @property
    def images_dir(self) -> Path:
        """Directory holding the picture files of this gallery."""
        return self.root / IMAGES_DIRNAME

    def session(self) -> Session:
        """Open a new database session for this gallery."""
        return self.session_factory()


class GalleryRegistry:
    """Maps gallery keys to lazily opened galleries.

    Galleries are opened on first use, migrated to the latest schema and
    cached for the lifetime of the process. Only callers that pass
    ``create=True`` may bring a new gallery into existence. Gallery keys are validated by
    the API layer before they reach the registry.
    """

    _instance: ClassVar[GalleryRegistry | None] = None

    def __init__(self, data_dir: Path | None = None) -> None:
        """Initialize the registry.

        Args:
            data_dir: Root directory containing one sub-directory per gallery.
                Defaults to the configured data directory.
        """
        self.data_dir = Path(data_dir) if data_dir is not None else settings.data_dir
        self._galleries: dict[str, Gallery] = {}
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> GalleryRegistry:
        """Get the process-wide registry."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the process-wide registry (for testing)."""
        if cls._instance is not None:
            cls._instance.close_all()
        cls._instance = None

    def get(self, key: str, create: bool = True) -> Gallery:
        """Return the gallery for ``key``, opening it if needed.

        Args:
            key: Gallery key
            create: Create the gallery on disk if it does not exist yet

        Raises:
            NotFoundError: If ``create`` is False and the gallery does not exist.
        """
        with self._lock:
            gallery = self._galleries.get(key)
            if gallery is None:
                if not create and not self._database_path(key).is_file():
                    raise NotFoundError(f"Gallery '{key}' not found")
                gallery = self._open(key)
                self._galleries[key] = gallery
            return gallery

    def exists(self, key: str) -> bool:
        """Check whether a gallery has been created, without opening it."""
        return key in self._galleries or self._database_path(key).is_file()

    def is_open(self, key: str) -> bool:
        """Check whether a gallery has been opened in this process."""
        return key in self._galleries

    def close_all(self) -> None:
        """Dispose every open engine."""
        with self._lock:
            for gallery in self._galleries.values():
                gallery.engine.dispose()
            self._galleries.clear()

    def _database_path(self, key: str) -> Path:
        return self.data_dir / key / DATABASE_FILENAME

    def _open(self, key: str) -> Gallery:
        root = self.data_dir / key
        (root / IMAGES_DIRNAME).mkdir(parents=True, exist_ok=True)

        engine = create_sqlite_engine(f"sqlite:///{self._database_path(key)}")
        run_migrations(engine)

        logger.info(f"Opened gallery '{key}' at {root}")
        return Gallery(
            key=key,
            root=root,
            engine=engine,
            session_factory=sessionmaker(
                autocommit=False, autoflush=False, bind=engine
            ),
        )
