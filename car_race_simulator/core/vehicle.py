import logging
import random
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from car_race_simulator.core.errors import InvalidTransitionError
from car_race_simulator.core.events import (
    FinishEvent,
    PrepareEvent,
    ProgressEvent,
    RaceEvent,
    RaceStartEvent,
)
from car_race_simulator.core.registry import (
    BASE_SPEED_RANGE,
    FINISH_LINE,
    PREPARATION_NOTES,
    SPEED_MODIFIERS,
    STEP_DELTA_RANGE,
    TICK_SECONDS,
)
from car_race_simulator.core.types import VehicleKind, VehicleStatus

logger = logging.getLogger("car_race.vehicle")


@dataclass(slots=True)
class Vehicle:
    """
    A single race participant.

    The vehicle owns its random generator and is only ever mutated by the
    execution unit that drives it, so nothing in here needs a lock.
    """

    name: str
    kind: VehicleKind = "Standard"
    rng: random.Random = field(default_factory=random.Random, repr=False)
    tick_seconds: float = TICK_SECONDS
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    base_speed: int = 0
    speed: int = 0
    position: int = 0
    ticks: int = 0
    status: VehicleStatus = "Idle"

    @property
    def repr(self) -> str:
        return f"{self.name}({self.kind})"

    @property
    def finished(self) -> bool:
        return self.status == "Finished"

    def prepare(self) -> PrepareEvent:
        """Draw the base speed and apply this kind's modifier, exactly once."""
        if self.status != "Idle":
            raise InvalidTransitionError(
                f"{self.repr} cannot prepare while {self.status}",
            )
        self.status = "Preparing"

        self.base_speed = self.rng.randrange(*BASE_SPEED_RANGE)
        self.speed = self.base_speed + SPEED_MODIFIERS[self.kind]
        logger.debug(
            "%s prepared: base speed %d, final speed %d",
            self.repr,
            self.base_speed,
            self.speed,
        )

        return PrepareEvent(
            vehicle_name=self.name,
            kind=self.kind,
            base_speed=self.base_speed,
            speed=self.speed,
            note=PREPARATION_NOTES.get(self.kind),
        )

    def run(self) -> Iterator[RaceEvent]:
        """Check the lifecycle eagerly, then return the lazy lap sequence."""
        if self.status != "Preparing":
            raise InvalidTransitionError(
                f"{self.repr} cannot race while {self.status}",
            )
        self.status = "Racing"
        return self._laps()

    def _laps(self) -> Iterator[RaceEvent]:
        yield RaceStartEvent(self.name)

        while self.position < FINISH_LINE:
            self.sleep(self.tick_seconds)
            self.ticks += 1

            # A slow vehicle with a bad draw stands still, it never rolls back
            step = max(0, self.speed + self.rng.randint(*STEP_DELTA_RANGE))
            self.position = min(self.position + step, FINISH_LINE)
            yield ProgressEvent(self.name, self.ticks, self.position)

        self.status = "Finished"
        yield FinishEvent(self.name, self.ticks)
