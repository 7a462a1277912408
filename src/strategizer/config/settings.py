"""Configuration settings using Pydantic Settings.

Every threshold the engine and managers use is tunable here, with
environment variable support.

Usage:
    from strategizer.config import StrategizerSettings

    # Load from environment variables (STRATEGIZER_*)
    settings = StrategizerSettings()

    # Or override with explicit values
    settings = StrategizerSettings(supply_headroom_threshold=4)
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from strategizer.core.manager.models import ManagerKey
from strategizer.host.unit_types import UnitTypes


class StrategizerSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the assignment engine and its managers.

    Attributes:
        supply_headroom_threshold: Supply headroom strictly below this value
            counts as supply pressure, both for the engine's override rule
            and for the supply manager's build decision.
        supply_worker_cap: Supply override fires while the supply manager
            holds at most this many workers.
        expansion_supply_threshold: Expansion override fires once supply used
            strictly exceeds this value.
        expansion_worker_cap: Expansion override fires while the combat
            manager holds at most this many workers.
        gatherers_per_source: Workers per resource source before it counts
            as saturated.
        throughput_window: Ticks of gathered-minerals history used for the
            collection rate.
        supply_structure: Unit type built to raise supply capacity.
        combat_structure: Unit type the combat manager builds to produce
            combat units.
        max_producers: Combat manager stops constructing producers once this
            many exist or are under construction.
        skipped_managers: Managers left out of the drive phase.
        draw_diagnostics: Write per-manager lines to the diagnostic sink.
        history_size: Ticks kept by the default in-memory history store
            (0 disables recording unless a store is passed explicitly).

    Environment Variables:
        STRATEGIZER_SUPPLY_HEADROOM_THRESHOLD
        STRATEGIZER_SUPPLY_WORKER_CAP
        STRATEGIZER_EXPANSION_SUPPLY_THRESHOLD
        STRATEGIZER_EXPANSION_WORKER_CAP
        STRATEGIZER_GATHERERS_PER_SOURCE
        STRATEGIZER_THROUGHPUT_WINDOW
        STRATEGIZER_SUPPLY_STRUCTURE
        STRATEGIZER_COMBAT_STRUCTURE
        STRATEGIZER_MAX_PRODUCERS
        STRATEGIZER_SKIPPED_MANAGERS (JSON list, e.g. '["scout"]')
        STRATEGIZER_DRAW_DIAGNOSTICS
        STRATEGIZER_HISTORY_SIZE
    """

    model_config = SettingsConfigDict(
        env_prefix="STRATEGIZER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    supply_headroom_threshold: int = Field(default=6, ge=0)
    supply_worker_cap: int = Field(default=1, ge=0)
    expansion_supply_threshold: int = Field(default=20, ge=0)
    expansion_worker_cap: int = Field(default=1, ge=0)
    gatherers_per_source: int = Field(default=2, ge=1)
    throughput_window: int = Field(default=24, ge=2)
    supply_structure: str = UnitTypes.TERRAN_SUPPLY_DEPOT.name
    combat_structure: str = UnitTypes.TERRAN_BARRACKS.name
    max_producers: int = Field(default=1, ge=0)
    skipped_managers: frozenset[ManagerKey] = frozenset()
    draw_diagnostics: bool = False
    history_size: int = Field(default=0, ge=0)

    @field_validator("supply_structure", "combat_structure")
    @classmethod
    def _known_unit_type(cls, value: str) -> str:
        try:
            UnitTypes.by_name(value)
        except KeyError as e:
            raise ValueError(str(e)) from e
        return value
