"""Region repository."""

from app.models.geo import Region
from app.repositories.common.entity import EntityRepository


class RegionRepository(EntityRepository):
    """Repository for region data access."""

    table = "region"
    entity = Region

    def find_by_name(self, name: str) -> Region | None:
        """Get region by its unique name."""
        rows = self._rows("WHERE name = ?", [name])
        return rows[0] if rows else None

    def find_by_population_greater_than(self, population: int) -> list[Region]:
        return self._rows("WHERE population > ?", [population])

    def voter_count(self, region_id: int) -> int:
        """Voters registered in the region."""
        return self.scalar("SELECT COUNT(*) FROM voter WHERE region_id = ?", [region_id])

    def district_ids(self, region_id: int) -> list[int]:
        rows = self.fetchall("SELECT id FROM district WHERE region_id = ? ORDER BY id", [region_id])
        return [r[0] for r in rows]
