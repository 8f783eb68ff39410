"""District repository."""

from app.models.geo import District
from app.repositories.common.entity import EntityRepository


class DistrictRepository(EntityRepository):
    """Repository for district data access."""

    table = "district"
    entity = District

    def find_by_region(self, region_id: int) -> list[District]:
        return self._rows("WHERE region_id = ?", [region_id])

    def voter_count(self, district_id: int) -> int:
        """Voters registered in the district."""
        return self.scalar("SELECT COUNT(*) FROM voter WHERE district_id = ?", [district_id])

    def polling_station_ids(self, district_id: int) -> list[int]:
        rows = self.fetchall(
            "SELECT polling_station_id FROM district_polling_station WHERE district_id = ? ORDER BY 1",
            [district_id],
        )
        return [r[0] for r in rows]
