"""Custom exceptions for timer token construction."""


class TimerTokenError(ValueError):
    """Base class for timer token errors."""
    pass


class InvalidTimerDurationError(TimerTokenError):
    """Raised when a duration is not an unsigned 32-bit number of seconds."""

    def __init__(self, duration_seconds=None, message: str = None):
        self.duration_seconds = duration_seconds

        if message is None:
            message = (
                f"Invalid timer duration {duration_seconds!r}: "
                f"expected an integer between 0 and 4294967295 seconds"
            )

        super().__init__(message)


class InvalidTimerFlagError(TimerTokenError):
    """Raised when the enabled flag is not a boolean."""

    def __init__(self, value=None, message: str = None):
        self.value = value

        if message is None:
            message = f"Invalid timer flag {value!r}: expected True or False"

        super().__init__(message)
