"""Persistence module for SQLite storage."""

from avd_business_case.persistence.database import Database
from avd_business_case.persistence.repository import SCENARIO_KINDS, ScenarioRepository

__all__ = [
    "Database",
    "SCENARIO_KINDS",
    "ScenarioRepository",
]
