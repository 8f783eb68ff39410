"""Polling station repository."""

from app.models.geo import PollingStation
from app.repositories.common.entity import EntityRepository


class PollingStationRepository(EntityRepository):
    """Repository for polling stations and their district links."""

    table = "polling_station"
    entity = PollingStation

    def find_active(self) -> list[PollingStation]:
        return self._rows("WHERE is_active")

    def find_by_district(self, district_id: int) -> list[PollingStation]:
        return self._rows(
            "WHERE id IN (SELECT polling_station_id FROM district_polling_station WHERE district_id = ?)",
            [district_id],
        )

    def find_by_capacity_greater_than(self, capacity: int) -> list[PollingStation]:
        return self._rows("WHERE capacity > ?", [capacity])

    def district_ids(self, station_id: int) -> list[int]:
        rows = self.fetchall(
            "SELECT district_id FROM district_polling_station WHERE polling_station_id = ? ORDER BY 1",
            [station_id],
        )
        return [r[0] for r in rows]

    def set_districts(self, station_id: int, district_ids: list[int]) -> None:
        """Replace the station's district links."""
        self._replace_links("district_polling_station", "polling_station_id", station_id, "district_id", district_ids)

    def delete(self, entity_id: int) -> bool:
        self._require_writable()
        self.execute("DELETE FROM district_polling_station WHERE polling_station_id = ?", [entity_id])
        return super().delete(entity_id)
