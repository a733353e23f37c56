from car_race_simulator.core.types import VehicleKind

FINISH_LINE: int = 100
TICK_SECONDS: float = 0.2

# Half-open, as drawn by random.randrange
BASE_SPEED_RANGE: tuple[int, int] = (5, 20)
# Closed, as drawn by random.randint
STEP_DELTA_RANGE: tuple[int, int] = (-3, 3)

SPEED_MODIFIERS: dict[VehicleKind, int] = {
    "Performance": 5,
    "Standard": 0,
    "Cargo": -3,
    "Transit": -2,
}

PREPARATION_NOTES: dict[VehicleKind, str] = {
    "Performance": "tunes the turbo",
    "Cargo": "checks the cargo",
    "Transit": "closes the doors",
}

DEFAULT_ROSTER: list[tuple[str, VehicleKind]] = [
    ("Ferrari", "Performance"),
    ("Toyota", "Standard"),
    ("Volvo", "Cargo"),
    ("Ikarus", "Transit"),
]
