"""
Mission archetype model.

``MissionType`` rows are static catalog data: they are built once in
``mission_command.missions.catalog`` and never mutated. Each describes
what the mission teaches, what it is "betting on", and which duration
bands and stat conditions suit it.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from mission_command.taxonomy.mission_taxonomy import DurationBand, MissionTypeId, StatName


class MissionType(BaseModel):
    """A mission archetype in the fixed catalog.

    Attributes:
        id: Archetype identifier.
        name: Display name, e.g. ``"RECON SWEEP"``.
        icon: Single emoji shown next to the name.
        concept: One-line teaching concept.
        description: Flavour description of the mission.
        teaches: What the player learns about derivatives by running it.
        betting_on: The thesis the mission expresses.
        duration_bands: Allowed bar intervals for this archetype.
        ideal_conditions: ``(stat, level)`` pairs describing the ideal
            environment, e.g. ``(StatName.SENSORS, "high")``.
        risk_profile: Plain-language risk summary.
    """

    model_config = ConfigDict(frozen=True)

    id: MissionTypeId
    name: str
    icon: str
    concept: str
    description: str
    teaches: str
    betting_on: str
    duration_bands: tuple[DurationBand, ...]
    ideal_conditions: tuple[tuple[StatName, str], ...]
    risk_profile: str

    @field_validator("duration_bands")
    @classmethod
    def validate_duration_bands(cls, v: tuple[DurationBand, ...]) -> tuple[DurationBand, ...]:
        if not v:
            raise ValueError("duration_bands must not be empty.")
        return v

    @property
    def ideal_conditions_map(self) -> dict[str, str]:
        """Ideal conditions as a fresh ``{stat: level}`` dict."""
        return {stat.value: level for stat, level in self.ideal_conditions}
