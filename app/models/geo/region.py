"""Region model."""

from dataclasses import dataclass

from app.models.common import BaseEntity

REGION_SEQUENCE = "CREATE SEQUENCE IF NOT EXISTS region_id_seq"

REGION_DDL = """
CREATE TABLE IF NOT EXISTS region (
    id BIGINT PRIMARY KEY DEFAULT nextval('region_id_seq'),
    name VARCHAR NOT NULL UNIQUE,
    description VARCHAR,
    population INTEGER
)
"""


@dataclass
class Region(BaseEntity):
    """Administrative region."""

    id: int
    name: str
    description: str | None = None
    population: int | None = None
