from collections.abc import Callable

from car_race_simulator.core.vehicle import Vehicle
from car_race_simulator.engine.coordinator import RaceCoordinator
from car_race_simulator.simulation.config import RaceSettings


def build_race(
    settings: RaceSettings,
    output: Callable[[str], None] = print,
) -> RaceCoordinator:
    """Create a coordinator with every roster entry registered in order."""
    coordinator = RaceCoordinator(output=output)
    for spec in settings.roster:
        coordinator.register(
            Vehicle(
                name=spec.name,
                kind=spec.kind,
                tick_seconds=settings.tick_seconds,
            ),
        )
    return coordinator
