"""Registry services - CRUD over regions, voters, candidates and elections."""

from app.services.registry.service import RegistryService

__all__ = [
    "RegistryService",
]
