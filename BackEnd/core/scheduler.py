from PySide6.QtCore import QObject, QTimer


class QtScheduler(QObject):
	"""Repeating tick plus one pending delayed call, both cancellable.

	Runs on the Qt event loop, so callbacks never overlap each other.
	"""

	def __init__(self, parent=None):
		super().__init__(parent)
		self._repeat_cb = None
		self._later_cb = None
		self._repeat = QTimer(self)
		self._repeat.timeout.connect(self._on_repeat)
		self._later = QTimer(self)
		self._later.setSingleShot(True)
		self._later.timeout.connect(self._on_later)

	def start_repeating(self, interval_ms: int, callback) -> None:
		self._repeat_cb = callback
		self._repeat.setInterval(interval_ms)
		self._repeat.start()

	def stop_repeating(self) -> None:
		self._repeat.stop()
		self._repeat_cb = None

	def call_later(self, delay_ms: int, callback) -> None:
		"""Schedule callback once; replaces any call still pending."""
		self._later_cb = callback
		self._later.start(delay_ms)

	def cancel_later(self) -> None:
		self._later.stop()
		self._later_cb = None

	def cancel_all(self) -> None:
		self.stop_repeating()
		self.cancel_later()

	@property
	def is_repeating(self) -> bool:
		return self._repeat.isActive()

	def _on_repeat(self):
		if self._repeat_cb is not None:
			self._repeat_cb()

	def _on_later(self):
		cb, self._later_cb = self._later_cb, None
		if cb is not None:
			cb()
