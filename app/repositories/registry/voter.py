"""Voter repository."""

from app.models.registry import Voter
from app.repositories.common.entity import EntityRepository


class VoterRepository(EntityRepository):
    """Repository for voter data access."""

    table = "voter"
    entity = Voter

    def find_by_identification_number(self, identification_number: str) -> Voter | None:
        rows = self._rows("WHERE identification_number = ?", [identification_number])
        return rows[0] if rows else None

    def find_by_region(self, region_id: int) -> list[Voter]:
        return self._rows("WHERE region_id = ?", [region_id])

    def find_by_district(self, district_id: int) -> list[Voter]:
        return self._rows("WHERE district_id = ?", [district_id])

    def count_active(self) -> int:
        """Active voters across the whole registry."""
        return self.scalar("SELECT COUNT(*) FROM voter WHERE is_active")
