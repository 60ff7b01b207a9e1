"""Service layer for TalentMatch operations."""

from talentmatch.services.recommendation_service import (
    CandidateLocks,
    RecommendationGenerator,
)
from talentmatch.services.stores import CatalogStore, RecommendationStore

__all__ = [
    "CandidateLocks",
    "CatalogStore",
    "RecommendationGenerator",
    "RecommendationStore",
]
