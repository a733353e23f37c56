import logging
import queue
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Protocol

from car_race_simulator.core.errors import RaceInProgressError
from car_race_simulator.core.events import (
    FinishEvent,
    PrepareEvent,
    ProgressEvent,
    RaceEvent,
    RaceStartEvent,
)
from car_race_simulator.core.vehicle import Vehicle
from car_race_simulator.engine import RACE_ID_COUNTER
from car_race_simulator.engine.console import (
    PREPARATION_HEADER,
    RACE_HEADER,
    format_event,
    format_winner,
)
from car_race_simulator.engine.latch import WinnerLatch
from car_race_simulator.engine.logging import RaceLogAdapter

logger = logging.getLogger("car_race.engine")

# Posted by every execution unit when its vehicle's sequence ends
_UNIT_DONE = object()


class RaceObserver(Protocol):
    def on_event(self, event: RaceEvent) -> None: ...


@dataclass(slots=True)
class RaceResult:
    winner: str | None = None
    finish_order: list[str] = field(default_factory=list)
    ticks: dict[str, int] = field(default_factory=dict)


class RaceCoordinator:
    """
    Owns the roster, runs the race and announces the winner exactly once.

    Each vehicle is driven by its own worker thread. Workers never print or
    touch shared state: they push events onto a single channel, and the
    thread that called `start()` drains it and reacts.
    """

    def __init__(self, output: Callable[[str], None] = print) -> None:
        self.output: Callable[[str], None] = output
        self.vehicles: list[Vehicle] = []
        self.observers: list[RaceObserver] = []
        self.latch: WinnerLatch = WinnerLatch()

        self.coordinator_id: int = next(RACE_ID_COUNTER)
        self.races_run: int = 0
        self._race_lock: threading.Lock = threading.Lock()

        self.logger: RaceLogAdapter = RaceLogAdapter(logger, self)

    @property
    def racing(self) -> bool:
        return self._race_lock.locked()

    # ---------- Setup ----------

    def register(self, vehicle: Vehicle) -> None:
        if self.racing:
            raise RaceInProgressError(
                f"Cannot register {vehicle.repr} while a race is running",
            )
        self.vehicles.append(vehicle)
        self.logger.debug("Registered %s", vehicle.repr)

    def add_observer(self, observer: RaceObserver) -> None:
        self.observers.append(observer)

    # ---------- Main Loop ----------

    def start(self) -> RaceResult:
        """Prepare every vehicle, race them all and block until all finish."""
        if not self._race_lock.acquire(blocking=False):
            raise RaceInProgressError("A race is already running")

        try:
            self.races_run += 1
            self.latch.reset()
            result = RaceResult()

            self._prepare_all()
            self._emit(RACE_HEADER)
            if self.vehicles:
                self._race_all(result)

            if self.latch.is_set:
                result.winner = self.latch.winner
                self.logger.info(
                    "Race over: winner=%s, finish order=%s",
                    result.winner,
                    result.finish_order,
                )
            else:
                self.logger.info("Race over without a finisher")
            return result
        finally:
            self._race_lock.release()

    def _prepare_all(self) -> None:
        self._emit(PREPARATION_HEADER)
        for vehicle in self.vehicles:
            self._dispatch(vehicle.prepare(), None)

    def _race_all(self, result: RaceResult) -> None:
        channel: queue.Queue[object] = queue.Queue()

        with ThreadPoolExecutor(
            max_workers=len(self.vehicles),
            thread_name_prefix=f"race{self.coordinator_id}",
        ) as pool:
            futures = [
                pool.submit(self._drive, vehicle, channel) for vehicle in self.vehicles
            ]
            self._collect(channel, len(futures), result)

        # Surface the first worker failure, if any
        for future in futures:
            future.result()

    def _drive(self, vehicle: Vehicle, channel: queue.Queue[object]) -> None:
        """Body of one execution unit."""
        self.logger.debug("Unit for %s launched", vehicle.repr)
        try:
            for event in vehicle.run():
                channel.put(event)
        finally:
            channel.put(_UNIT_DONE)
            self.logger.debug("Unit for %s completed", vehicle.repr)

    def _collect(
        self,
        channel: queue.Queue[object],
        units: int,
        result: RaceResult,
    ) -> None:
        remaining = units
        while remaining:
            match channel.get():
                case message if message is _UNIT_DONE:
                    remaining -= 1
                case RaceEvent() as event:
                    self._dispatch(event, result)
                case message:
                    self.logger.warning("Dropping unknown message: %r", message)

    # ---------- Event Handling ----------

    def _dispatch(self, event: RaceEvent, result: RaceResult | None) -> None:
        match event:
            case PrepareEvent() | RaceStartEvent() | ProgressEvent():
                for line in format_event(event):
                    self._emit(line)
            case FinishEvent(vehicle_name=name, tick=tick):
                if result is not None:
                    result.finish_order.append(name)
                    result.ticks[name] = tick
                self._on_finish(name)
            case _:
                self.logger.warning("Unhandled event type: %s", event)

        for observer in self.observers:
            observer.on_event(event)

    def _on_finish(self, vehicle_name: str) -> None:
        if self.latch.try_claim(vehicle_name):
            self._emit(format_winner(vehicle_name))

    def _emit(self, line: str) -> None:
        self.output(line)
