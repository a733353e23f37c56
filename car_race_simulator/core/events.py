from dataclasses import dataclass

from car_race_simulator.core.types import VehicleKind


class RaceEvent:
    """Marker base class for everything a vehicle reports."""

    vehicle_name: str


@dataclass(frozen=True, slots=True)
class PrepareEvent(RaceEvent):
    vehicle_name: str
    kind: VehicleKind
    base_speed: int
    speed: int
    note: str | None = None


@dataclass(frozen=True, slots=True)
class RaceStartEvent(RaceEvent):
    vehicle_name: str


@dataclass(frozen=True, slots=True)
class ProgressEvent(RaceEvent):
    vehicle_name: str
    tick: int
    position: int


@dataclass(frozen=True, slots=True)
class FinishEvent(RaceEvent):
    vehicle_name: str
    tick: int
