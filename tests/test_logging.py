import gc
import logging
import weakref

from rich.logging import RichHandler

from car_race_simulator.engine.coordinator import RaceCoordinator
from car_race_simulator.engine.logging import (
    RaceLogAdapter,
    RichMarkupFormatter,
    configure_logging,
)


def make_record(message: str, level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord("car_race.test", level, __file__, 1, message, None, None)


def test_adapter_injects_coordinator_identity(caplog):
    caplog.set_level(logging.DEBUG, logger="car_race.engine")
    coordinator = RaceCoordinator(output=lambda line: None)
    coordinator.races_run = 3

    coordinator.logger.debug("hello")

    (record,) = [r for r in caplog.records if r.getMessage() == "hello"]
    assert record.name == "car_race.engine"
    assert record.coordinator_id == coordinator.coordinator_id
    assert record.race_number == 3


def test_adapter_keeps_caller_extra():
    coordinator = RaceCoordinator(output=lambda line: None)
    adapter = RaceLogAdapter(logging.getLogger("car_race.engine"), coordinator)

    _, kwargs = adapter.process("msg", {"extra": {"lap": 7}})

    assert kwargs["extra"]["lap"] == 7
    assert kwargs["extra"]["coordinator_id"] == coordinator.coordinator_id


def test_finished_coordinators_are_released():
    before = set(logging.root.manager.loggerDict)
    coordinator = RaceCoordinator(output=lambda line: None)
    coordinator.start()
    ref = weakref.ref(coordinator)

    del coordinator
    gc.collect()

    assert ref() is None
    assert not {
        name for name in logging.root.manager.loggerDict if name not in before
    }


def test_formatter_highlights_kinds_and_winner():
    text = RichMarkupFormatter().format(make_record("Volvo(Cargo) FINISHED FIRST!"))

    assert "([yellow]Cargo[/yellow])" in text
    assert "[bold green]FINISHED FIRST![/bold green]" in text


def test_formatter_marks_warnings():
    text = RichMarkupFormatter().format(make_record("odd", logging.WARNING))

    assert "[bold red]odd[/bold red]" in text


def test_configure_logging_installs_single_rich_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging("DEBUG")

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], RichHandler)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
