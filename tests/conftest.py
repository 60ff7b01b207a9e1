"""Shared pytest fixtures for all tests."""

from unittest.mock import patch

import pytest


@pytest.fixture
def temp_db(tmp_path):
    """Create a temporary database for testing.

    Patches DB_PATH and DATA_DIR at the connection module level.
    """
    db_path = tmp_path / "test.db"
    data_dir = tmp_path

    # Patch at db.connection where they're used at runtime
    with (
        patch("talentmatch.db.connection.DB_PATH", db_path),
        patch("talentmatch.db.connection.DATA_DIR", data_dir),
        patch("talentmatch.db.connection.DATABASE_URL", None),  # Force SQLite
    ):
        from talentmatch.db.connection import init_tables

        init_tables()
        yield db_path


@pytest.fixture
def catalog(temp_db):
    from talentmatch.db.catalog import SqlCatalogStore

    return SqlCatalogStore()


@pytest.fixture
def store(temp_db):
    from talentmatch.db.recommendations import SqlRecommendationStore

    return SqlRecommendationStore()


@pytest.fixture
def generator(catalog, store):
    from talentmatch.services.recommendation_service import (
        CandidateLocks,
        RecommendationGenerator,
    )

    return RecommendationGenerator(catalog=catalog, store=store, locks=CandidateLocks())
