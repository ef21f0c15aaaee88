import logging
import math
import time
from enum import Enum

from PySide6.QtCore import QObject, Signal

from BackEnd.core.clock import format_countdown, local_time_str, local_today_str
from BackEnd.core.errors import AlreadyRunning, InvalidDuration, InvalidState, PersistenceError
from BackEnd.core.paths import NO_WORKSPACE
from BackEnd.core.scheduler import QtScheduler

log = logging.getLogger("timeforge.timer")

BUFFER_SEC = 3  # finishing window before the countdown reaches zero
UPDATE_INTERVAL_MS = 100
SETTLE_DELAY_MS = 1000


class TimerPhase(str, Enum):
	IDLE = "idle"
	RUNNING = "running"
	PAUSED = "paused"
	FINISHING = "finishing"
	STOPPED = "stopped"


ACTIVE_PHASES = (TimerPhase.RUNNING, TimerPhase.PAUSED, TimerPhase.FINISHING)


def _parse_duration(value) -> float:
	if isinstance(value, bool):
		raise InvalidDuration(f"Not a duration: {value!r}")
	try:
		seconds = float(value)
	except (TypeError, ValueError):
		raise InvalidDuration(f"Not a duration: {value!r}") from None
	if not math.isfinite(seconds) or seconds <= 0:
		raise InvalidDuration(f"Duration must be positive, got {value!r}")
	return seconds


class TimerEngine(QObject):
	"""Countdown for one session at a time, recording its elapsed time in a SessionStore.

	Elapsed time is always derived from the clock, never from counting
	ticks, so a late or skipped tick cannot drift the countdown.
	"""

	progress = Signal(float)  # emits remaining seconds
	finishing = Signal(float)  # emits remaining seconds when the buffer window opens
	finished = Signal(int)  # emits recorded seconds
	stopped = Signal(int)  # emits recorded seconds
	state_changed = Signal(str)  # emits a TimerPhase value
	persistence_failed = Signal(str)

	def __init__(self, store, workspace_id=NO_WORKSPACE, scheduler=None, clock=time.monotonic, parent=None):
		super().__init__(parent)
		self._store = store
		self.workspace_id = workspace_id
		self._scheduler = scheduler if scheduler is not None else QtScheduler(self)
		self._clock = clock
		self.phase = TimerPhase.IDLE
		self.total_time = 0.0
		self.started_at = None
		self.paused_accumulated = 0.0
		self.pause_started_at = None
		self.session_id = None
		self._final_elapsed = 0.0
		self._finishing_started_at = None
		self._recorded = None

	@property
	def is_active(self) -> bool:
		return self.phase in ACTIVE_PHASES

	def _set_phase(self, phase):
		self.phase = phase
		log.debug("Timer phase -> %s", phase.value)
		self.state_changed.emit(phase.value)

	def elapsed(self) -> float:
		"""Seconds counted toward work so far: wall time since start minus time paused."""
		if self.phase in (TimerPhase.IDLE, TimerPhase.STOPPED):
			return self._final_elapsed
		if self.phase is TimerPhase.FINISHING:
			# keeps counting down through the window; nothing is recorded from here
			return self._final_elapsed + (self._clock() - self._finishing_started_at)
		now = self._clock()
		paused = self.paused_accumulated
		if self.phase is TimerPhase.PAUSED:
			paused += now - self.pause_started_at
		return (now - self.started_at) - paused

	def remaining(self) -> float:
		if self.phase is TimerPhase.IDLE:
			return 0.0
		return max(0.0, self.total_time - self.elapsed())

	def countdown_text(self) -> str:
		if self.phase is TimerPhase.IDLE:
			return "TimeForge"
		return f"TimeForge: {format_countdown(self.remaining())}"

	def start(self, duration_seconds):
		"""Start a countdown and open its session row. Returns the session id (None if logging failed)."""
		if self.is_active:
			raise AlreadyRunning("Timer is already running.")
		total = _parse_duration(duration_seconds)
		self._scheduler.cancel_all()
		self.total_time = total
		self.started_at = self._clock()
		self.paused_accumulated = 0.0
		self.pause_started_at = None
		self._final_elapsed = 0.0
		self._recorded = None
		self._set_phase(TimerPhase.RUNNING)
		self.session_id = self._create_session()
		self._scheduler.start_repeating(UPDATE_INTERVAL_MS, self.tick)
		log.info("Timer started for %ss in %s (session %s)", total, self.workspace_id, self.session_id)
		return self.session_id

	def _create_session(self):
		try:
			return self._store.create_session(local_today_str(), local_time_str(), self.workspace_id)
		except PersistenceError as e:
			log.error("Could not create session, time will not be recorded: %s", e)
			self.persistence_failed.emit(str(e))
			return None

	def tick(self):
		if self.phase is not TimerPhase.RUNNING:
			return
		elapsed = self.elapsed()
		if elapsed >= self.total_time - BUFFER_SEC:
			self._scheduler.stop_repeating()
			self._final_elapsed = elapsed
			self._finishing_started_at = self._clock()
			self._set_phase(TimerPhase.FINISHING)
			self.finishing.emit(max(0.0, self.total_time - elapsed))
			# the buffer is assumed to run out while the finishing window plays
			self._recorded = self._complete(elapsed + BUFFER_SEC)
			self._scheduler.call_later(BUFFER_SEC * 1000, self._on_finish_window_elapsed)
			self._scheduler.start_repeating(UPDATE_INTERVAL_MS, self._refresh_finishing)
			return
		self.progress.emit(self.total_time - elapsed)

	def _refresh_finishing(self):
		if self.phase is TimerPhase.FINISHING:
			self.progress.emit(self.remaining())

	def _on_finish_window_elapsed(self):
		seconds = self._recorded
		log.info("Time is up, %ss recorded", seconds)
		self.finished.emit(seconds)
		self.reset()

	def toggle_pause(self):
		now = self._clock()
		if self.phase is TimerPhase.RUNNING:
			self.pause_started_at = now
			self._scheduler.stop_repeating()
			self._set_phase(TimerPhase.PAUSED)
		elif self.phase is TimerPhase.PAUSED:
			self.paused_accumulated += now - self.pause_started_at
			self.pause_started_at = None
			self._set_phase(TimerPhase.RUNNING)
			self._scheduler.start_repeating(UPDATE_INTERVAL_MS, self.tick)
		else:
			raise InvalidState(f"Cannot pause or resume while {self.phase.value}")

	def stop(self) -> int:
		"""Stop the countdown early, record the exact elapsed time and settle back to idle."""
		if not self.is_active:
			raise InvalidState(f"Cannot stop while {self.phase.value}")
		self._scheduler.cancel_all()
		if self.phase is TimerPhase.FINISHING:
			# already recorded when the finishing window opened
			log.warning("Stop during finishing window; keeping the %ss already recorded", self._recorded)
			self._final_elapsed = self.elapsed()
			seconds = self._recorded
		else:
			now = self._clock()
			if self.phase is TimerPhase.PAUSED:
				self.paused_accumulated += now - self.pause_started_at
				self.pause_started_at = None
			self._final_elapsed = (now - self.started_at) - self.paused_accumulated
			seconds = self._complete(self._final_elapsed)
		self._set_phase(TimerPhase.STOPPED)
		self.stopped.emit(seconds)
		self._scheduler.call_later(SETTLE_DELAY_MS, self.reset)
		return seconds

	def _complete(self, elapsed) -> int:
		seconds = int(math.floor(max(0.0, elapsed)))
		session_id, self.session_id = self.session_id, None
		try:
			self._store.record_elapsed(session_id, seconds)
		except PersistenceError as e:
			log.error("Could not record %ss for session %s: %s", seconds, session_id, e)
			self.persistence_failed.emit(str(e))
		return seconds

	def reset(self):
		self._scheduler.cancel_all()
		self.total_time = 0.0
		self.started_at = None
		self.paused_accumulated = 0.0
		self.pause_started_at = None
		self.session_id = None
		self._final_elapsed = 0.0
		self._finishing_started_at = None
		self._recorded = None
		if self.phase is not TimerPhase.IDLE:
			self._set_phase(TimerPhase.IDLE)
