"""Scenario persistence for HomeTax."""

from hometax.db.repository import ScenarioRepository
from hometax.db.schema import create_schema

__all__ = ["ScenarioRepository", "create_schema"]
