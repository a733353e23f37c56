class RaceError(Exception):
    """Base class for misuse of the race engine."""


class InvalidTransitionError(RaceError):
    """A vehicle lifecycle call was made in the wrong state."""


class RaceInProgressError(RaceError):
    """The coordinator was asked to change while a race is running."""


class NotEnoughPlayersError(ValueError):
    """A card game needs at least two players."""


class ConfigError(ValueError):
    """A settings file could not be read or validated."""
