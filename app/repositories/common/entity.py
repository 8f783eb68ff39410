"""Generic CRUD repository over one entity table."""

from typing import Any, ClassVar

import duckdb
from loguru import logger

from app.errors import ValidationError
from app.models.common import BaseEntity
from app.repositories.base import BaseRepository


class EntityRepository(BaseRepository):
    """Create/read/update/delete by id for a dataclass-backed table."""

    table: ClassVar[str]
    entity: ClassVar[type[BaseEntity]]

    def __init__(self, read_only: bool = False, **kwargs):
        super().__init__(read_only=read_only, **kwargs)
        self._columns = self.entity.columns()
        self._select = ", ".join(self._columns)

    @property
    def kind(self) -> str:
        return self.table

    def _check_fields(self, fields: dict[str, Any]) -> None:
        unknown = set(fields) - set(self._columns) | ({"id"} & set(fields))
        if unknown:
            raise ValidationError(f"Unknown {self.kind} fields: {', '.join(sorted(unknown))}")

    def _rows(self, where: str = "", params: list | None = None, order: str = "id") -> list:
        rows = self.fetchall(f"SELECT {self._select} FROM {self.table} {where} ORDER BY {order}", params)
        return [self.entity.from_row(r) for r in rows]

    def get(self, entity_id: int) -> Any | None:
        """Get entity by id."""
        rows = self._rows("WHERE id = ?", [entity_id])
        return rows[0] if rows else None

    def exists(self, entity_id: int) -> bool:
        """Check entity existence."""
        return self.fetchone(f"SELECT 1 FROM {self.table} WHERE id = ?", [entity_id]) is not None

    def existing_ids(self, ids: list[int]) -> list[int]:
        """Subset of ids that resolve, in the order given."""
        if not ids:
            return []
        rows = self.fetchall(f"SELECT id FROM {self.table} WHERE list_contains(?, id)", [list(ids)])
        found = {r[0] for r in rows}
        return [i for i in dict.fromkeys(ids) if i in found]

    def list_all(self) -> list:
        """All entities ordered by id."""
        return self._rows()

    def find_by(self, **conditions: Any) -> list:
        """Entities matching every equality condition."""
        self._check_fields(conditions)
        if not conditions:
            return self.list_all()
        where = " AND ".join(f"{name} = ?" for name in conditions)
        return self._rows(f"WHERE {where}", list(conditions.values()))

    def create(self, **fields: Any) -> Any:
        """Insert entity and return it with its assigned id."""
        self._require_writable()
        self._check_fields(fields)
        names = list(fields)
        placeholders = ", ".join("?" for _ in names)
        try:
            row = self.fetchone(
                f"INSERT INTO {self.table} ({', '.join(names)}) VALUES ({placeholders}) RETURNING {self._select}",
                list(fields.values()),
            )
        except duckdb.ConstraintException as e:
            raise ValidationError(f"Cannot create {self.kind}: {e}") from e
        created = self.entity.from_row(row)
        logger.debug("Created {} {}", self.kind, created.id)
        return created

    def update(self, entity_id: int, **fields: Any) -> Any | None:
        """Set only the given fields; None values leave a field untouched."""
        self._require_writable()
        changes = {k: v for k, v in fields.items() if v is not None}
        self._check_fields(changes)
        if not changes:
            return self.get(entity_id)
        assignments = ", ".join(f"{name} = ?" for name in changes)
        try:
            row = self.fetchone(
                f"UPDATE {self.table} SET {assignments} WHERE id = ? RETURNING {self._select}",
                [*changes.values(), entity_id],
            )
        except duckdb.ConstraintException as e:
            raise ValidationError(f"Cannot update {self.kind} {entity_id}: {e}") from e
        if row is None:
            return None
        logger.debug("Updated {} {}: {}", self.kind, entity_id, sorted(changes))
        return self.entity.from_row(row)

    def delete(self, entity_id: int) -> bool:
        """Delete entity by id."""
        self._require_writable()
        row = self.fetchone(f"DELETE FROM {self.table} WHERE id = ? RETURNING id", [entity_id])
        if row:
            logger.debug("Deleted {} {}", self.kind, entity_id)
        return row is not None

    def _replace_links(self, link_table: str, owner_col: str, owner_id: int, other_col: str, ids: list[int]) -> None:
        """Make the owner's join rows equal ids, touching only the difference."""
        self._require_writable()
        current = {
            r[0] for r in self.fetchall(f"SELECT {other_col} FROM {link_table} WHERE {owner_col} = ?", [owner_id])
        }
        wanted = list(dict.fromkeys(ids))
        for other_id in current - set(wanted):
            self.execute(
                f"DELETE FROM {link_table} WHERE {owner_col} = ? AND {other_col} = ?",
                [owner_id, other_id],
            )
        for other_id in wanted:
            if other_id not in current:
                self.execute(
                    f"INSERT INTO {link_table} ({owner_col}, {other_col}) VALUES (?, ?)",
                    [owner_id, other_id],
                )
