import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from BackEnd.repos.session_repo import SessionStore


@pytest.fixture(scope="session", autouse=True)
def qt_app():
	app = QApplication.instance() or QApplication([])
	yield app


class FakeClock:
	def __init__(self, now=1000.0):
		self.now = now

	def __call__(self):
		return self.now

	def advance(self, seconds):
		self.now += seconds


class FakeScheduler:
	"""Stands in for QtScheduler; tests fire ticks and delayed calls by hand."""

	def __init__(self):
		self.repeating = None
		self.interval_ms = None
		self.later = None
		self.delay_ms = None

	def start_repeating(self, interval_ms, callback):
		self.interval_ms = interval_ms
		self.repeating = callback

	def stop_repeating(self):
		self.repeating = None

	def call_later(self, delay_ms, callback):
		self.delay_ms = delay_ms
		self.later = callback

	def cancel_later(self):
		self.later = None

	def cancel_all(self):
		self.stop_repeating()
		self.cancel_later()

	def run_later(self):
		callback, self.later = self.later, None
		callback()


@pytest.fixture
def clock():
	return FakeClock()


@pytest.fixture
def scheduler():
	return FakeScheduler()


@pytest.fixture
def store(tmp_path):
	s = SessionStore(tmp_path / "timeforge.db").open()
	yield s
	s.close()
