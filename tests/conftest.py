import logging
from typing import Callable

import pytest

from tests.test_utils import RaceScenario, VehicleConfig


@pytest.fixture
def scenario() -> Callable[..., RaceScenario]:
    """Factory fixture to create scenarios."""

    def _builder(vehicles_config: list[VehicleConfig]) -> RaceScenario:
        return RaceScenario(vehicles_config)

    return _builder


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """CLI entry points reconfigure the root logger; undo that after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
