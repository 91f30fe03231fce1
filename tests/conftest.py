# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment before importing app
os.environ["RD_SIMPLE_GALLERY_PASSWORD"] = "test-password"  # nosec - test-only secret  # noqa: S105

from gallery.api.deps import get_gallery_registry
from gallery.database import GalleryRegistry, create_sqlite_engine
from gallery.main import app
from gallery.models import Base

TEST_PASSWORD = "test-password"  # noqa: S105
API_PREFIX = "/api/v1/galleries/default"


@pytest.fixture(scope="function")
def engine():
    """In-memory database shared by every session of one test."""
    engine = create_sqlite_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine):
    """Create a fresh database for each test."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def registry(tmp_path):
    """Gallery registry storing its galleries below a temporary directory."""
    registry = GalleryRegistry(data_dir=tmp_path)
    try:
        yield registry
    finally:
        registry.close_all()


@pytest.fixture(scope="function")
def client(registry):
    """Create a test client with the registry override."""
    app.dependency_overrides[get_gallery_registry] = lambda: registry
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    """Create a test client logged in as admin."""
    response = client.post(f"{API_PREFIX}/auth/login", json={"password": TEST_PASSWORD})
    assert response.status_code == 200
    return client
