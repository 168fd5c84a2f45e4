"""Data access layer for saved scenarios."""

import logging
import sqlite3

from pydantic import ValidationError

from hometax.exceptions import ScenarioNotFoundError
from hometax.models.scenario import ScenarioBlob

logger = logging.getLogger(__name__)


class ScenarioRepository:
    """CRUD operations for named scenario blobs."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def save(self, name: str, blob: ScenarioBlob) -> None:
        """Insert or replace the scenario stored under *name*."""
        self.conn.execute(
            """INSERT INTO scenarios (name, payload)
               VALUES (?, ?)
               ON CONFLICT(name) DO UPDATE SET
                   payload = excluded.payload,
                   updated_at = datetime('now')""",
            (name, blob.model_dump_json()),
        )
        self.conn.commit()

    def update(self, name: str, blob: ScenarioBlob) -> None:
        """Overwrite an existing scenario. Raises ScenarioNotFoundError if absent."""
        cursor = self.conn.execute(
            """UPDATE scenarios
               SET payload = ?, updated_at = datetime('now')
               WHERE name = ?""",
            (blob.model_dump_json(), name),
        )
        if cursor.rowcount == 0:
            raise ScenarioNotFoundError(name)
        self.conn.commit()

    def get(self, name: str) -> ScenarioBlob:
        """Load a scenario by name.

        A payload that no longer parses loads as the default scenario rather
        than failing, so one bad row never locks the user out.
        """
        row = self.conn.execute(
            "SELECT payload FROM scenarios WHERE name = ?", (name,)
        ).fetchone()
        if row is None:
            raise ScenarioNotFoundError(name)
        try:
            return ScenarioBlob.model_validate_json(row[0])
        except ValidationError as exc:
            logger.warning("Scenario %s has an unreadable payload (%s); using defaults",
                           name, exc.error_count())
            return ScenarioBlob()

    def exists(self, name: str) -> bool:
        row = self.conn.execute(
            "SELECT 1 FROM scenarios WHERE name = ?", (name,)
        ).fetchone()
        return row is not None

    def list_scenarios(self) -> list[dict]:
        """Names and timestamps of every saved scenario, newest first."""
        cursor = self.conn.execute(
            "SELECT name, created_at, updated_at FROM scenarios ORDER BY updated_at DESC, name"
        )
        columns = [desc[0] for desc in cursor.description]
        return [dict(zip(columns, row)) for row in cursor.fetchall()]

    def list_names(self) -> list[str]:
        return [row[0] for row in self.conn.execute("SELECT name FROM scenarios ORDER BY name")]

    def delete(self, name: str) -> None:
        cursor = self.conn.execute("DELETE FROM scenarios WHERE name = ?", (name,))
        if cursor.rowcount == 0:
            raise ScenarioNotFoundError(name)
        self.conn.commit()
