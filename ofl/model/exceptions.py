"""
General exceptions that can occur while building or querying the fixture
model.
"""


class FixtureError(Exception):
    """
    Base class of every error raised by the fixture model.
    """

    def __init__(self, msg: str, *args):
        super().__init__(msg, *args)
        self.msg = msg

    def __str__(self) -> str:
        return self.msg


class FixtureConfigurationError(FixtureError):
    """
    Something being wrong with the fixture definition itself.
    This is fixture-format related data, a validator reports it instead of
    crashing.
    """


class InvariantViolation(FixtureError, ValueError):
    """
    A caller broke a precondition of the model, e.g. asked for a fineness a
    channel doesn't have. This is a programming error and is never caught by
    the library.
    """
