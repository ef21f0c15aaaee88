class TimerError(Exception):
	"""Base class for everything the timer core reports to its caller."""


class AlreadyRunning(TimerError):
	pass


class InvalidState(TimerError):
	pass


class InvalidDuration(TimerError):
	pass


class PersistenceError(TimerError):
	"""The session store is unavailable or a write failed."""


class UnknownSession(TimerError):
	"""A completion was reported for a session the store never created or already finalised."""
