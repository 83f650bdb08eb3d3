"""Shared fixtures for product catalog tests."""

import json
import os
import tempfile
import uuid

import pytest

from product_catalog.services import ProductRepository
from product_catalog.stores import FixtureProductSource, SqliteProductStore


def build_product_fields(**overrides) -> dict:
    """Return a valid product field mapping, with optional top-level overrides."""
    photo = uuid.uuid4().hex[:8]
    fields = {
        "description": f"Photo {photo}",
        "alt_description": "a sample photo",
        "likes": 10,
        "urls": {
            "regular": f"https://images.example.com/{photo}?w=1080",
            "small": f"https://images.example.com/{photo}?w=400",
            "thumb": f"https://images.example.com/{photo}?w=200",
        },
        "links": {
            "self": f"https://api.example.com/photos/{photo}",
            "html": f"https://example.com/photos/{photo}",
        },
        "user": {
            "id": "u-1",
            "first_name": "Ana",
            "last_name": "Lopes",
            "username": "analopes",
        },
        "tags": [{"title": "nature"}],
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def product_fields():
    """Factory for valid product field mappings."""
    return build_product_fields


@pytest.fixture
def temp_db_path():
    """Create a temporary database file for testing."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    yield path
    # Cleanup
    if os.path.exists(path):
        os.remove(path)


@pytest.fixture
def write_fixture_file(tmp_path):
    """Write a list of product documents to a JSON fixture file."""

    def _write(documents, name="products.json") -> str:
        path = tmp_path / name
        path.write_text(json.dumps(documents), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
async def sqlite_store(temp_db_path):
    """A connected SQLite product store."""
    store = SqliteProductStore(temp_db_path)
    await store.connect()
    yield store
    await store.close()


@pytest.fixture
async def repository(temp_db_path):
    """A connected repository on SQLite with no fixture fallback."""
    async with ProductRepository(SqliteProductStore(temp_db_path)) as repo:
        yield repo


@pytest.fixture
def fixture_source_factory(write_fixture_file):
    """Build a FixtureProductSource over the given documents."""

    def _build(documents) -> FixtureProductSource:
        return FixtureProductSource(write_fixture_file(documents))

    return _build
