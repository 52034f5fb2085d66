"""
client_overview view: one row per client with its live project count and budget total.

The view is created in the database right after the tables and dropped before them,
so the aggregates are recomputed by the store on every read.
"""

from sqlalchemy import Table, Column, String, Text, DateTime, Integer, Numeric, DDL, event, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base, view_metadata
from app.models.client import ClientStatus


CLIENT_OVERVIEW_VIEW = "client_overview"

CLIENT_OVERVIEW_SELECT = """
    SELECT
        c.id,
        c.name,
        c.email,
        c.phone,
        c.website,
        c.status,
        c.notes,
        c.created_at,
        c.updated_at,
        COUNT(p.id) AS project_count,
        COALESCE(SUM(p.budget), 0) AS total_budget
    FROM clients c
    LEFT JOIN projects p ON p.client_id = c.id
    GROUP BY c.id, c.name, c.email, c.phone, c.website, c.status, c.notes, c.created_at, c.updated_at
"""

# create_all runs again on every startup; both forms leave an existing view usable
CREATE_CLIENT_OVERVIEW = DDL(
    f"CREATE OR REPLACE VIEW {CLIENT_OVERVIEW_VIEW} AS {CLIENT_OVERVIEW_SELECT}"
).execute_if(dialect="postgresql")
CREATE_CLIENT_OVERVIEW_SQLITE = DDL(
    f"CREATE VIEW IF NOT EXISTS {CLIENT_OVERVIEW_VIEW} AS {CLIENT_OVERVIEW_SELECT}"
).execute_if(dialect="sqlite")

DROP_CLIENT_OVERVIEW = DDL(f"DROP VIEW IF EXISTS {CLIENT_OVERVIEW_VIEW}")

event.listen(Base.metadata, "after_create", CREATE_CLIENT_OVERVIEW)
event.listen(Base.metadata, "after_create", CREATE_CLIENT_OVERVIEW_SQLITE)
event.listen(Base.metadata, "before_drop", DROP_CLIENT_OVERVIEW)


client_overview = Table(
    CLIENT_OVERVIEW_VIEW,
    view_metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("name", String(255)),
    Column("email", String(255)),
    Column("phone", String(50)),
    Column("website", String(255)),
    Column(
        "status",
        SQLEnum(ClientStatus, name="client_status", values_callable=lambda x: [e.value for e in x],
                create_constraint=False, native_enum=False),
    ),
    Column("notes", Text),
    Column("created_at", DateTime(timezone=True)),
    Column("updated_at", DateTime(timezone=True)),
    Column("project_count", Integer),
    Column("total_budget", Numeric(14, 2)),
)
