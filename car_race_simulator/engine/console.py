from car_race_simulator.core.events import (
    PrepareEvent,
    ProgressEvent,
    RaceEvent,
    RaceStartEvent,
)

PREPARATION_HEADER = "=== PREPARING FOR THE RACE ==="
RACE_HEADER = "\n=== THE RACE HAS STARTED! ==="
WINNER_SUFFIX = "FINISHED FIRST!"


def format_winner(vehicle_name: str) -> str:
    return f"\n{vehicle_name} {WINNER_SUFFIX}"


def format_event(event: RaceEvent) -> list[str]:
    """Plain text lines for an event; finishes are announced by the latch instead."""
    match event:
        case PrepareEvent(vehicle_name=name, note=note):
            lines = [f"{name} is getting ready for the race"]
            if note:
                lines.append(f"{name} {note}")
            return lines
        case RaceStartEvent(vehicle_name=name):
            return [f"{name} started!"]
        case ProgressEvent(vehicle_name=name, position=position):
            return [f"{name} at position {position}"]
        case _:
            return []
