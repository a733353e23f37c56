from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, get_args, override

from rich.logging import RichHandler

from car_race_simulator.core.types import VehicleKind
from car_race_simulator.engine.console import WINNER_SUFFIX

if TYPE_CHECKING:
    from car_race_simulator.engine.coordinator import RaceCoordinator

VEHICLE_KINDS = set(get_args(VehicleKind))

KIND_PATTERN = re.compile(rf"\(({'|'.join(map(re.escape, VEHICLE_KINDS))})\)")


# Simple color theme for Rich
COLOR = {
    "winner": "bold green",
    "latch": "bold magenta",
    "warning": "bold red",
    "kind": "yellow",
    "prefix": "dim",
}


class RaceLogAdapter(logging.LoggerAdapter):
    """Inject the owning coordinator's identity into every log record."""

    def __init__(self, logger: logging.Logger, coordinator: RaceCoordinator) -> None:
        super().__init__(logger)
        self.coordinator: RaceCoordinator = coordinator

    @override
    def process(self, msg, kwargs):
        kwargs["extra"] = {
            **kwargs.get("extra", {}),
            "coordinator_id": self.coordinator.coordinator_id,
            "race_number": self.coordinator.races_run,
        }
        return msg, kwargs


class RichMarkupFormatter(logging.Formatter):
    @override
    def format(self, record: logging.LogRecord) -> str:
        coordinator_id = getattr(record, "coordinator_id", 0)
        race_number = getattr(record, "race_number", 0)
        prefix = f"{coordinator_id}.{race_number} {record.threadName}"

        styled = record.getMessage()

        styled = re.sub(
            rf"\b{re.escape(WINNER_SUFFIX)}",
            f"[{COLOR['winner']}]{WINNER_SUFFIX}[/{COLOR['winner']}]",
            styled,
        )
        styled = re.sub(
            r"\bLatch\b", f"[{COLOR['latch']}]Latch[/{COLOR['latch']}]", styled
        )
        styled = KIND_PATTERN.sub(rf"([{COLOR['kind']}]\1[/{COLOR['kind']}])", styled)

        if record.levelno >= logging.WARNING:
            styled = f"[{COLOR['warning']}]{styled}[/{COLOR['warning']}]"

        return f"[{COLOR['prefix']}]{prefix}[/{COLOR['prefix']}]  {styled}"


def configure_logging(level: int | str = logging.WARNING) -> None:
    logger = logging.getLogger()
    logger.setLevel(level)
    handler = RichHandler(markup=True, show_path=False, show_time=False)
    handler.setFormatter(RichMarkupFormatter())
    logger.handlers.clear()
    logger.addHandler(handler)
