"""Tests for scenario persistence."""

import pytest


class TestDatabase:
    """Tests for Database."""

    def test_schema_created(self, test_database):
        rows = test_database.fetch_all(
            "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name"
        )
        tables = {row["name"] for row in rows}
        assert {"scenarios", "scenario_data", "schema_version"} <= tables

    def test_schema_version(self, test_database):
        row = test_database.fetch_one("SELECT version FROM schema_version")
        assert row["version"] == test_database.SCHEMA_VERSION

    def test_transaction_rolls_back(self, test_database):
        with pytest.raises(RuntimeError):
            with test_database.transaction() as conn:
                conn.execute(
                    "INSERT INTO scenarios (id, name, kind) VALUES ('x', 'x', 'timeline')"
                )
                raise RuntimeError("boom")

        assert test_database.fetch_one("SELECT * FROM scenarios WHERE id = 'x'") is None

    def test_reopen_existing(self, test_database):
        from avd_business_case.persistence.database import Database

        Database(test_database.db_path)


class TestScenarioRepository:
    """Tests for ScenarioRepository."""

    def test_save_and_get(self, test_repository):
        scenario_id = test_repository.save_scenario(
            kind="business_case",
            name="Contoso Q1",
            inputs={"users": 1000},
            result={"tco": {"savings": {"total": 1.5}}},
            company_name="Contoso",
            user_count=1000,
        )

        assert len(scenario_id) == 8
        scenario = test_repository.get_scenario(scenario_id)
        assert scenario["name"] == "Contoso Q1"
        assert scenario["kind"] == "business_case"
        assert scenario["company_name"] == "Contoso"
        assert scenario["user_count"] == 1000
        assert scenario["inputs"] == {"users": 1000}
        assert scenario["result"]["tco"]["savings"]["total"] == 1.5

    def test_get_missing(self, test_repository):
        assert test_repository.get_scenario("nope") is None

    def test_unknown_kind(self, test_repository):
        with pytest.raises(ValueError):
            test_repository.save_scenario("forecast", "x", {}, {})

    def test_list_newest_first(self, test_repository):
        first = test_repository.save_scenario("timeline", "first", {}, {})
        second = test_repository.save_scenario("timeline", "second", {}, {})

        ids = [s["id"] for s in test_repository.list_scenarios()]
        assert ids == [second, first]

    def test_list_filter_and_paging(self, test_repository):
        test_repository.save_scenario("timeline", "t1", {}, {})
        test_repository.save_scenario("business_case", "b1", {}, {})
        test_repository.save_scenario("timeline", "t2", {}, {})

        timelines = test_repository.list_scenarios(kind="timeline")
        assert [s["name"] for s in timelines] == ["t2", "t1"]
        assert len(test_repository.list_scenarios(limit=1)) == 1
        assert len(test_repository.list_scenarios(limit=10, offset=2)) == 1

    def test_list_excludes_payload(self, test_repository):
        test_repository.save_scenario("timeline", "t1", {"a": 1}, {"b": 2})
        summary = test_repository.list_scenarios()[0]
        assert "inputs" not in summary
        assert "result" not in summary

    def test_delete(self, test_repository):
        scenario_id = test_repository.save_scenario("timeline", "t1", {}, {})

        assert test_repository.delete_scenario(scenario_id) is True
        assert test_repository.get_scenario(scenario_id) is None
        assert test_repository.delete_scenario(scenario_id) is False

    def test_clear_all(self, test_database, test_repository):
        test_repository.save_scenario("timeline", "t1", {}, {})
        test_database.clear_all()
        assert test_repository.list_scenarios() == []
