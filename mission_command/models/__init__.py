"""Pydantic domain models: bars, environment snapshots, mission types and missions."""
