"""Threaded car race simulator with a companion card game."""

from car_race_simulator.core.vehicle import Vehicle
from car_race_simulator.engine.coordinator import RaceCoordinator, RaceResult

__all__ = ["RaceCoordinator", "RaceResult", "Vehicle"]
