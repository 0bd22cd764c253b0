"""Seed sample stations.

Revision ID: 002_seed_stations
Revises: 001_initial
Create Date: 2025-06-28

Seeds three sample charging stations, each with four Type 2 / 22 kW ports
(P1-P4).
"""

from typing import Sequence

from alembic import op
from sqlalchemy import Boolean, Integer, String, column, select, table

# revision identifiers
revision: str = "002_seed_stations"
down_revision: str = "001_initial"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

STATIONS = [
    {
        "name": "Downtown Charging Station",
        "address": "123 Main Street, Downtown",
        "location": "Downtown",
    },
    {
        "name": "Mall Parking Charging Station",
        "address": "456 Shopping Center, Mall District",
        "location": "Mall District",
    },
    {
        "name": "Airport Charging Station",
        "address": "789 Airport Road, Airport Area",
        "location": "Airport Area",
    },
]

PORTS_PER_STATION = 4

stations_table = table(
    "stations",
    column("id", Integer),
    column("name", String),
    column("address", String),
    column("location", String),
    column("is_active", Boolean),
)

ports_table = table(
    "ports",
    column("station_id", Integer),
    column("port_number", String),
    column("charging_type", String),
    column("power_kw", Integer),
    column("is_active", Boolean),
)


def upgrade() -> None:
    """Insert sample stations and their ports."""
    conn = op.get_bind()

    for station in STATIONS:
        station_id = conn.execute(
            stations_table.insert()
            .values(**station, is_active=True)
            .returning(stations_table.c.id)
        ).scalar_one()

        op.bulk_insert(
            ports_table,
            [
                {
                    "station_id": station_id,
                    "port_number": f"P{i}",
                    "charging_type": "Type 2",
                    "power_kw": 22,
                    "is_active": True,
                }
                for i in range(1, PORTS_PER_STATION + 1)
            ],
        )


def downgrade() -> None:
    """Remove seed stations (ports cascade)."""
    station_names = [s["name"] for s in STATIONS]
    seeded_ids = select(stations_table.c.id).where(stations_table.c.name.in_(station_names))

    op.execute(ports_table.delete().where(ports_table.c.station_id.in_(seeded_ids)))
    op.execute(stations_table.delete().where(stations_table.c.name.in_(station_names)))
