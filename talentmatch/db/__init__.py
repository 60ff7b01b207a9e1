"""Database access for candidates, jobs, applications and recommendations."""

from talentmatch.db.catalog import SqlCatalogStore
from talentmatch.db.connection import get_connection, init_tables
from talentmatch.db.recommendations import SqlRecommendationStore

__all__ = [
    "get_connection",
    "init_tables",
    "SqlCatalogStore",
    "SqlRecommendationStore",
]
