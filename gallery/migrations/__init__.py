# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Gallery schema migrations using Alembic.

Every gallery has its own SQLite database, so migrations are applied
programmatically whenever a gallery is opened instead of once per
deployment.
"""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import Connection, Engine

logger = logging.getLogger(__name__)

MIGRATIONS_PATH = Path(__file__).resolve().parent


def get_alembic_config(connection: Connection | None = None) -> Config:
    """Create an Alembic config pointing at the bundled migration scripts.

    Args:
        connection: Open connection the migrations should run on

    Returns:
        Configured Alembic Config object
    """
    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(MIGRATIONS_PATH))
    if connection is not None:
        alembic_cfg.attributes["connection"] = connection
    return alembic_cfg


def get_head_revision() -> str | None:
    """Get the newest revision shipped with the package."""
    script = ScriptDirectory.from_config(get_alembic_config())
    return script.get_current_head()


def get_current_revision(engine: Engine) -> str | None:
    """Get the revision a database is currently at."""
    with engine.connect() as connection:
        context = MigrationContext.configure(connection)
        return context.get_current_revision()


def run_migrations(engine: Engine) -> None:
    """Upgrade the database behind ``engine`` to the latest revision."""
    current = get_current_revision(engine)
    head = get_head_revision()
    if current == head:
        logger.debug(f"Database already at revision {head}")
        return

    with engine.begin() as connection:
        command.upgrade(get_alembic_config(connection), "head")
    logger.info(f"Migrated database from {current} to {head}")
