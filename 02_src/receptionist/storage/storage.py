"""SQLite agent store implementation."""

import dataclasses
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import aiosqlite

from ..config import resolve_db_path
from ..errors import PersistenceError
from ..logging_config import get_logger
from ..models import AgentFilter, StoredAgent

logger = get_logger(__name__)

_COLUMNS = "id, name, version, description, url, registered_at, last_heartbeat, active, skill"

# Rows whose skill document advertises a given skill id (case-insensitive).
# The CASE guards keep malformed documents out of json_each.
_SKILL_ID_CONDITION = """
    CASE WHEN json_valid(skill) THEN EXISTS (
        SELECT 1 FROM json_each(skill, '$.skills') AS s
        WHERE CASE WHEN s.type = 'object'
                   THEN lower(json_extract(s.value, '$.id'))
              END = lower(?)
    ) ELSE 0 END
"""


class IAgentStore(Protocol):
    """Persistent storage for registered agents."""

    async def find(self, name: str) -> StoredAgent | None:
        """Get an agent by its unique name."""
        ...

    async def save(self, record: StoredAgent) -> StoredAgent:
        """Insert or update an agent keyed by name."""
        ...

    async def search(self, query_filter: AgentFilter) -> list[StoredAgent]:
        """Active agents matching the filter, in registration order."""
        ...

    async def delete_by_name(self, name: str) -> None:
        """Delete an agent. No-op if absent."""
        ...


class AgentStore:
    """SQLite agent store implementation."""

    def __init__(self, db_path: str | Path | None = None):
        if db_path is None:
            self._db_path = resolve_db_path()
        else:
            self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        """Initialize database and create tables."""
        try:
            self._conn = await aiosqlite.connect(self._db_path)

            schema_path = Path(__file__).parent / "schema.sql"
            with open(schema_path, "r", encoding="utf-8") as f:
                schema_sql = f.read()
            await self._conn.executescript(schema_sql)
            await self._conn.commit()
        except aiosqlite.Error as e:
            raise PersistenceError(f"Failed to initialize agent store: {e}") from e
        logger.info("Agent store initialized at %s", self._db_path)

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    def _require_conn(self) -> aiosqlite.Connection:
        if not self._conn:
            raise RuntimeError("Storage not initialized")
        return self._conn

    async def find(self, name: str) -> StoredAgent | None:
        """Get an agent by its unique name."""
        conn = self._require_conn()
        try:
            cursor = await conn.execute(
                f"SELECT {_COLUMNS} FROM agents WHERE name = ?",
                (name,),
            )
            row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise PersistenceError(f"Failed to read agent {name}: {e}") from e

        return _row_to_agent(row) if row else None

    async def save(self, record: StoredAgent) -> StoredAgent:
        """Insert or update an agent keyed by name. Keeps the row id on update."""
        conn = self._require_conn()
        try:
            await conn.execute(
                """
                INSERT INTO agents
                (name, version, description, url, registered_at, last_heartbeat, active, skill)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(name) DO UPDATE SET
                    version = excluded.version,
                    description = excluded.description,
                    url = excluded.url,
                    registered_at = excluded.registered_at,
                    last_heartbeat = excluded.last_heartbeat,
                    active = excluded.active,
                    skill = excluded.skill
                """,
                (
                    record.name,
                    record.version,
                    record.description,
                    record.url,
                    record.registered_at.isoformat(),
                    record.last_heartbeat.isoformat(),
                    1 if record.active else 0,
                    record.skill,
                ),
            )
            await conn.commit()

            cursor = await conn.execute(
                "SELECT id FROM agents WHERE name = ?", (record.name,)
            )
            row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise PersistenceError(f"Failed to save agent {record.name}: {e}") from e

        return dataclasses.replace(record, id=row[0] if row else None)

    async def search(self, query_filter: AgentFilter) -> list[StoredAgent]:
        """Active agents matching the filter, in registration order."""
        conn = self._require_conn()

        conditions = ["active = 1"]
        params: list = []

        if query_filter.skill_id and query_filter.skill_id.strip():
            conditions.append(_SKILL_ID_CONDITION)
            params.append(query_filter.skill_id.strip())

        query = f"""
            SELECT {_COLUMNS}
            FROM agents
            WHERE {' AND '.join(conditions)}
            ORDER BY id ASC
        """

        try:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise PersistenceError(f"Failed to search agents: {e}") from e

        return [_row_to_agent(row) for row in rows]

    async def delete_by_name(self, name: str) -> None:
        """Delete an agent. No-op if absent."""
        conn = self._require_conn()
        try:
            await conn.execute("DELETE FROM agents WHERE name = ?", (name,))
            await conn.commit()
        except aiosqlite.Error as e:
            raise PersistenceError(f"Failed to delete agent {name}: {e}") from e

    async def clear(self) -> None:
        """Clear all data."""
        conn = self._require_conn()
        await conn.execute("DELETE FROM agents")
        await conn.commit()


def _parse_timestamp(value: str | None) -> datetime:
    if not value:
        return datetime.now(timezone.utc)
    ts = datetime.fromisoformat(value)
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def _row_to_agent(row) -> StoredAgent:
    return StoredAgent(
        id=row[0],
        name=row[1],
        version=row[2],
        description=row[3] or "",
        url=row[4],
        registered_at=_parse_timestamp(row[5]),
        last_heartbeat=_parse_timestamp(row[6]),
        active=bool(row[7]),
        skill=row[8] or "",
    )
