"""Common repositories - cache and generic entity access."""

from app.repositories.common.cache import CacheRepository
from app.repositories.common.entity import EntityRepository

__all__ = [
    "CacheRepository",
    "EntityRepository",
]
