"""Static unit type catalog.

Unit types are immutable descriptions of what a unit is. Agents derive their
role from these flags once, at creation time.

Usage:
    scv = UnitTypes.TERRAN_SCV
    depot = UnitTypes.by_name("Terran Supply Depot")
    UnitTypes.trained_by(UnitTypes.TERRAN_BARRACKS)  # (TERRAN_MARINE,)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UnitType:
    """Static classification of a unit.

    Attributes:
        name: Unique display name, also the catalog key.
        is_worker: Can gather resources and construct buildings.
        is_resource_depot: Accepts gathered resources.
        is_building: Immobile structure.
        is_resource: Resource source (mineral field).
        can_attack: Has a weapon.
        supply_required: Supply consumed while alive.
        supply_provided: Supply capacity added once completed.
        mineral_cost: Minerals spent to build or train.
        trains: Names of unit types this structure can train.
    """

    name: str
    is_worker: bool = False
    is_resource_depot: bool = False
    is_building: bool = False
    is_resource: bool = False
    can_attack: bool = False
    supply_required: int = 0
    supply_provided: int = 0
    mineral_cost: int = 0
    trains: tuple[str, ...] = ()

    def __str__(self) -> str:
        return self.name


class UnitTypes:
    """Well-known unit types. Lookup by name via by_name()."""

    TERRAN_SCV = UnitType(
        "Terran SCV", is_worker=True, can_attack=True, supply_required=1, mineral_cost=50
    )
    TERRAN_MARINE = UnitType("Terran Marine", can_attack=True, supply_required=1, mineral_cost=50)
    TERRAN_COMMAND_CENTER = UnitType(
        "Terran Command Center",
        is_resource_depot=True,
        is_building=True,
        supply_provided=10,
        mineral_cost=400,
        trains=("Terran SCV",),
    )
    TERRAN_BARRACKS = UnitType(
        "Terran Barracks", is_building=True, mineral_cost=150, trains=("Terran Marine",)
    )
    TERRAN_SUPPLY_DEPOT = UnitType(
        "Terran Supply Depot", is_building=True, supply_provided=8, mineral_cost=100
    )
    MINERAL_FIELD = UnitType("Mineral Field", is_resource=True)

    _BY_NAME: dict[str, UnitType] = {}

    @classmethod
    def all(cls) -> tuple[UnitType, ...]:
        """All catalog entries in declaration order."""
        return tuple(v for v in vars(cls).values() if isinstance(v, UnitType))

    @classmethod
    def by_name(cls, name: str) -> UnitType:
        """Look up a unit type by its name.

        Raises:
            KeyError: If no catalog entry has that name.
        """
        if not cls._BY_NAME:
            cls._BY_NAME.update((ut.name, ut) for ut in cls.all())
        try:
            return cls._BY_NAME[name]
        except KeyError:
            raise KeyError(f"Unknown unit type: {name!r}") from None

    @classmethod
    def trained_by(cls, unit_type: UnitType) -> tuple[UnitType, ...]:
        """Resolve the types a structure can train."""
        return tuple(cls.by_name(name) for name in unit_type.trains)
