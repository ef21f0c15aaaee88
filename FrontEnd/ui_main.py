import logging
from datetime import date

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
	QMainWindow, QWidget, QLabel, QPushButton, QVBoxLayout, QHBoxLayout, QInputDialog, QMessageBox
)

from BackEnd.core.clock import format_time, local_today_str, parse_minutes
from BackEnd.core.errors import PersistenceError, TimerError
from BackEnd.services.timer_service import TimerPhase
from FrontEnd.components.footer_today import FooterToday
from FrontEnd.styles.design_tokens import COLORS, FONTS, PHASE_BG

log = logging.getLogger("timeforge.ui")


class MainWindow(QMainWindow):
	"""Small always-visible bar that drives a TimerEngine: Start, Pause/Resume, Stop."""

	def __init__(self, engine, store, settings):
		super().__init__()
		self.engine = engine
		self.store = store
		self.settings = settings
		self.setWindowTitle(f"TimeForge - {engine.workspace_id}")
		self.setStyleSheet(f"background: {COLORS['background']}; color: {COLORS['text']}; font-family: {FONTS['family']};")

		central = QWidget()
		outer = QVBoxLayout()
		outer.setContentsMargins(12, 12, 12, 12)

		self.timer_label = QLabel(engine.countdown_text())
		self.timer_label.setObjectName("TimerLabel")
		self.timer_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
		outer.addWidget(self.timer_label)

		btn_layout = QHBoxLayout()
		self.start_pause_btn = QPushButton("Start")
		self.stop_btn = QPushButton("Stop")
		for btn in (self.start_pause_btn, self.stop_btn):
			btn.setStyleSheet(f"font-size: {FONTS['button_size']}px; padding: 4px 16px; border: 1px solid {COLORS['border']};")
			btn_layout.addWidget(btn)
		outer.addLayout(btn_layout)

		self.footer_today = FooterToday()
		outer.addWidget(self.footer_today)
		central.setLayout(outer)
		self.setCentralWidget(central)

		self.engine.progress.connect(self._on_progress)
		self.engine.finishing.connect(self._on_progress)
		self.engine.state_changed.connect(self._on_state)
		self.engine.finished.connect(self._on_finished)
		self.engine.stopped.connect(self._on_stopped)
		self.engine.persistence_failed.connect(self._on_persistence_failed)
		self.start_pause_btn.clicked.connect(self._start_pause)
		self.stop_btn.clicked.connect(self._stop)

		self._on_state(engine.phase.value)
		self._update_today_label()
		self._report_orphaned_session()

	def _report_orphaned_session(self):
		try:
			orphan = self.store.active_session()
		except PersistenceError as e:
			log.error("Could not read session store: %s", e)
			return
		if orphan:
			log.warning(
				"Session %s (%s %s, %s) was never finished; its time is lost",
				orphan['id'], orphan['day'], orphan['start_time'], orphan['workspace_id'],
			)

	def _start_pause(self):
		if self.engine.is_active:
			self._run(self.engine.toggle_pause)
			return
		text, ok = QInputDialog.getText(
			self, "TimeForge", "Enter timer duration in minutes", text=f"{self.settings.default_minutes:g}"
		)
		if not ok:
			return
		try:
			seconds = parse_minutes(text)
		except TimerError as e:
			self.statusBar().showMessage(str(e), 4000)
			return
		self._run(self.engine.start, seconds)

	def _stop(self):
		self._run(self.engine.stop)

	def _run(self, action, *args):
		try:
			return action(*args)
		except TimerError as e:
			log.info("Rejected %s: %s", action.__name__, e)
			self.statusBar().showMessage(str(e), 4000)

	def _on_progress(self, remaining):
		self.timer_label.setText(self.engine.countdown_text())

	def _on_state(self, state):
		self.timer_label.setStyleSheet(
			f"background: {PHASE_BG[state]}; font-size: {FONTS['timer_size']}px; border-radius: 4px; padding: 6px;"
		)
		self.timer_label.setText(self.engine.countdown_text())
		self._set_buttons(state)

	def _set_buttons(self, state):
		if state == "running":
			self.start_pause_btn.setText("Pause")
			self.start_pause_btn.setEnabled(True)
			self.stop_btn.setEnabled(True)
		elif state == "paused":
			self.start_pause_btn.setText("Resume")
			self.start_pause_btn.setEnabled(True)
			self.stop_btn.setEnabled(True)
		elif state in ("finishing", "stopped"):
			# no stop while the finishing window plays; it would race the natural completion
			self.start_pause_btn.setEnabled(False)
			self.stop_btn.setEnabled(False)
		else:
			self.start_pause_btn.setText("Start")
			self.start_pause_btn.setEnabled(True)
			self.stop_btn.setEnabled(False)

	def _on_finished(self, seconds):
		self._update_today_label()
		QMessageBox.information(self, "TimeForge", "Time is up! Well done!")

	def _on_stopped(self, seconds):
		self.statusBar().showMessage(f"Stopped after {format_time(seconds)}", 4000)
		self._update_today_label()

	def _on_persistence_failed(self, message):
		self.statusBar().showMessage(f"Time is not being saved: {message}", 6000)

	def _update_today_label(self):
		try:
			totals = self.store.per_workspace_totals_for_day(local_today_str())
			year_total = self.store.total_seconds_for_workspace(self.engine.workspace_id, date.today().year)
		except PersistenceError as e:
			log.error("Could not load today's totals: %s", e)
			return
		self.footer_today.set_totals(totals, f"{self.engine.workspace_id} this year: {format_time(year_total)}")

	def closeEvent(self, event):
		# Record whatever ran so far; an open row would otherwise be left behind.
		if self.engine.phase in (TimerPhase.RUNNING, TimerPhase.PAUSED):
			self.engine.stop()
		self.engine.reset()
		super().closeEvent(event)
