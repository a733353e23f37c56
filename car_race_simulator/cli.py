"""Command-line interface for the race and card game demos."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated

import cappa
from rich.prompt import Prompt
from tqdm import tqdm

from car_race_simulator.cards.game import CardGame
from car_race_simulator.core.errors import ConfigError, NotEnoughPlayersError
from car_race_simulator.core.events import PrepareEvent, ProgressEvent, RaceEvent
from car_race_simulator.core.registry import FINISH_LINE
from car_race_simulator.engine.logging import configure_logging
from car_race_simulator.simulation.config import RaceSettings
from car_race_simulator.simulation.factory import build_race

logger = logging.getLogger("car_race.cli")


@dataclass
class ProgressBoard:
    """One tqdm bar per vehicle, fed by the race collector."""

    bars: dict[str, tqdm] = field(default_factory=dict)

    def on_event(self, event: RaceEvent) -> None:
        match event:
            case PrepareEvent(vehicle_name=name):
                self.bars[name] = tqdm(
                    total=FINISH_LINE,
                    desc=name,
                    unit="pos",
                    position=len(self.bars),
                )
            case ProgressEvent(vehicle_name=name, position=position):
                bar = self.bars[name]
                bar.update(position - bar.n)
            case _:
                pass

    def close(self) -> None:
        for bar in self.bars.values():
            bar.close()


def parse_player_names(raw: str | None) -> list[str]:
    """Split a comma separated list, dropping blank entries."""
    if not raw:
        return []
    return [name.strip() for name in raw.split(",") if name.strip()]


def run_race(settings: RaceSettings, *, progress_bars: bool = False) -> int:
    configure_logging(settings.log_level)

    if not progress_bars:
        build_race(settings).start()
        return 0

    board = ProgressBoard()
    coordinator = build_race(settings, output=tqdm.write)
    coordinator.add_observer(board)
    try:
        coordinator.start()
    finally:
        board.close()
    return 0


def run_cards(raw_names: str | None) -> int:
    configure_logging(logging.WARNING)
    try:
        game = CardGame(parse_player_names(raw_names))
    except NotEnoughPlayersError as exc:
        logger.debug("Card game rejected: %s", exc)
        print("Not enough players!", file=sys.stderr)
        return 1

    game.play()
    return 0


def run_menu() -> int:
    choice = Prompt.ask("Choose a game:\n1. Car race\n2. Card game\nYour choice")

    if choice == "1":
        return run_race(RaceSettings())
    if choice == "2":
        names = Prompt.ask(
            "\nEnter player names separated by commas (at least 2)",
        )
        return run_cards(names)

    print("Invalid choice!")
    return 1


@cappa.command(name="race", help="Run the threaded car race.")
@dataclass
class RaceCommand:
    config: Annotated[Path | None, cappa.Arg(long=True)] = None
    """TOML settings file"""

    tick_seconds: Annotated[float | None, cappa.Arg(long=True)] = None
    """Override: pause between two steps of every vehicle"""

    log_level: Annotated[str | None, cappa.Arg(long=True)] = None
    """Override: logging level"""

    progress_bars: Annotated[bool, cappa.Arg(long=True)] = False
    """Draw one progress bar per vehicle"""

    def __call__(self) -> int:
        try:
            settings = (
                RaceSettings.from_toml(self.config) if self.config else RaceSettings()
            )
            # Rebuild so the overrides are validated like file values
            settings = RaceSettings(
                tick_seconds=(
                    settings.tick_seconds
                    if self.tick_seconds is None
                    else self.tick_seconds
                ),
                log_level=settings.log_level if self.log_level is None else self.log_level,
                roster=settings.roster,
            )
        except (ConfigError, ValueError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

        return run_race(settings, progress_bars=self.progress_bars)


@cappa.command(name="cards", help="Play the card game.")
@dataclass
class CardsCommand:
    players: Annotated[str | None, cappa.Arg(long=True)] = None
    """Comma separated player names, at least two"""

    def __call__(self) -> int:
        return run_cards(self.players)


@dataclass
class CarRace:
    """Car race and card game demos. Without a subcommand an interactive menu is shown."""

    command: cappa.Subcommands[RaceCommand | CardsCommand | None] = None

    def __call__(self) -> int:
        return run_menu()


def main() -> int:
    """Entry point for CLI."""
    return cappa.invoke(CarRace)


if __name__ == "__main__":
    sys.exit(main())
