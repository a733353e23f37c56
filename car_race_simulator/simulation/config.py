"""Race settings schema using msgspec."""

from __future__ import annotations

import logging
from pathlib import Path

import msgspec

from car_race_simulator.core.errors import ConfigError
from car_race_simulator.core.registry import DEFAULT_ROSTER, TICK_SECONDS
from car_race_simulator.core.types import VehicleKind


class VehicleSpec(msgspec.Struct):
    """One roster entry."""

    name: str
    kind: VehicleKind = "Standard"


def _default_roster() -> list[VehicleSpec]:
    return [VehicleSpec(name=name, kind=kind) for name, kind in DEFAULT_ROSTER]


class RaceSettings(msgspec.Struct):
    """
    TOML-backed settings for a single race run.

    The finish line is fixed at 100 and is not part of this schema.
    """

    # Real-time pause between two steps of every vehicle
    tick_seconds: float = TICK_SECONDS
    log_level: str = "WARNING"
    roster: list[VehicleSpec] = msgspec.field(default_factory=_default_roster)

    def __post_init__(self) -> None:
        if self.tick_seconds < 0:
            raise ValueError(f"tick_seconds must be >= 0, got {self.tick_seconds}")

        level = self.log_level.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log_level {self.log_level!r}")
        self.log_level = level

    @classmethod
    def from_toml(cls, path: str | Path) -> RaceSettings:
        """Load settings from a TOML file path."""
        try:
            with Path(path).open("rb") as f:
                return msgspec.toml.decode(f.read(), type=cls)
        except OSError as exc:
            raise ConfigError(f"Cannot read config {path}: {exc}") from exc
        except (msgspec.ValidationError, msgspec.DecodeError) as exc:
            raise ConfigError(f"Invalid config {path}: {exc}") from exc
