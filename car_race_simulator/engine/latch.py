import logging
import threading

logger = logging.getLogger("car_race.engine")


class WinnerLatch:
    """Once-only flag naming the first finisher of a race."""

    def __init__(self) -> None:
        self._lock: threading.Lock = threading.Lock()
        self._winner: str | None = None

    @property
    def winner(self) -> str | None:
        with self._lock:
            return self._winner

    @property
    def is_set(self) -> bool:
        return self.winner is not None

    def try_claim(self, vehicle_name: str) -> bool:
        """Return True only for the first caller since the last reset."""
        with self._lock:
            if self._winner is not None:
                logger.debug(
                    "Latch already held by %s; ignoring %s",
                    self._winner,
                    vehicle_name,
                )
                return False
            self._winner = vehicle_name

        logger.debug("Latch claimed by %s", vehicle_name)
        return True

    def reset(self) -> None:
        with self._lock:
            self._winner = None
