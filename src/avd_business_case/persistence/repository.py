"""Repository for saved scenario persistence."""

import json
import logging
import uuid
from typing import Any

from avd_business_case.persistence.database import Database

logger = logging.getLogger(__name__)

SCENARIO_KINDS = ("timeline", "business_case")


class ScenarioRepository:
    """
    Repository for storing and retrieving named calculation snapshots.

    Inputs and results are stored as JSON produced by the records' ``to_dict()``.
    """

    def __init__(self, database: Database | None = None):
        """
        Initialize repository.

        Args:
            database: Database instance (creates new one if not provided)
        """
        self.db = database or Database()

    def save_scenario(
        self,
        kind: str,
        name: str,
        inputs: dict[str, Any],
        result: dict[str, Any],
        company_name: str | None = None,
        user_count: int | None = None,
    ) -> str:
        """
        Save a scenario.

        Args:
            kind: Scenario kind (timeline, business_case)
            name: Display name
            inputs: Calculation inputs
            result: Calculation result
            company_name: Customer name, for listings
            user_count: User count, for listings

        Returns:
            Scenario ID

        Raises:
            ValueError: If the kind is not recognized
        """
        if kind not in SCENARIO_KINDS:
            raise ValueError(f"Unknown scenario kind '{kind}', expected one of {SCENARIO_KINDS}")

        scenario_id = str(uuid.uuid4())[:8]

        with self.db.transaction() as conn:
            conn.execute(
                """
                INSERT INTO scenarios (id, name, kind, company_name, user_count)
                VALUES (?, ?, ?, ?, ?)
                """,
                (scenario_id, name, kind, company_name, user_count),
            )
            conn.execute(
                """
                INSERT INTO scenario_data (scenario_id, inputs_json, result_json)
                VALUES (?, ?, ?)
                """,
                (scenario_id, json.dumps(inputs), json.dumps(result)),
            )

        logger.info("Saved %s scenario %s (%s)", kind, scenario_id, name)
        return scenario_id

    def get_scenario(self, scenario_id: str) -> dict[str, Any] | None:
        """
        Get scenario by ID.

        Args:
            scenario_id: Scenario identifier

        Returns:
            Scenario data with decoded inputs and result, or None if not found
        """
        row = self.db.fetch_one(
            """
            SELECT s.*, d.inputs_json, d.result_json
            FROM scenarios s
            JOIN scenario_data d ON d.scenario_id = s.id
            WHERE s.id = ?
            """,
            (scenario_id,),
        )

        if not row:
            return None

        return {
            "id": row["id"],
            "name": row["name"],
            "kind": row["kind"],
            "created_at": row["created_at"],
            "company_name": row["company_name"],
            "user_count": row["user_count"],
            "inputs": json.loads(row["inputs_json"]),
            "result": json.loads(row["result_json"]),
        }

    def list_scenarios(
        self,
        limit: int = 20,
        offset: int = 0,
        kind: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        List saved scenarios, newest first.

        Args:
            limit: Maximum number of results
            offset: Number of results to skip
            kind: Only list scenarios of this kind

        Returns:
            List of scenario summaries (without inputs and results)
        """
        if kind:
            rows = self.db.fetch_all(
                """
                SELECT * FROM scenarios
                WHERE kind = ?
                ORDER BY created_at DESC, rowid DESC
                LIMIT ? OFFSET ?
                """,
                (kind, limit, offset),
            )
        else:
            rows = self.db.fetch_all(
                """
                SELECT * FROM scenarios
                ORDER BY created_at DESC, rowid DESC
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )

        return [dict(row) for row in rows]

    def delete_scenario(self, scenario_id: str) -> bool:
        """
        Delete a scenario and its stored data.

        Args:
            scenario_id: Scenario identifier

        Returns:
            True if deleted, False if not found
        """
        with self.db.transaction() as conn:
            cursor = conn.cursor()

            cursor.execute("SELECT id FROM scenarios WHERE id = ?", (scenario_id,))
            if not cursor.fetchone():
                return False

            cursor.execute("DELETE FROM scenario_data WHERE scenario_id = ?", (scenario_id,))
            cursor.execute("DELETE FROM scenarios WHERE id = ?", (scenario_id,))

        logger.info("Deleted scenario %s", scenario_id)
        return True
