"""
Mission Command - telemetry-to-mission scoring engine.

Turns an ordered series of indicator bars into five bounded vessel stats
(Hull, Firepower, Sensors, Fuel, Threat), ranks the mission archetypes
against them, and manages persisted Mission records.
"""

__version__ = "0.1.0"
