from typing import Literal

VehicleKind = Literal[
    "Performance",
    "Standard",
    "Cargo",
    "Transit",
]

VehicleStatus = Literal[
    "Idle",
    "Preparing",
    "Racing",
    "Finished",
]
