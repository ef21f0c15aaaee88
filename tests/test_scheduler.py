from PySide6.QtTest import QTest

from BackEnd.core.scheduler import QtScheduler


def test_repeating_until_stopped() -> None:
	scheduler = QtScheduler()
	calls = []
	scheduler.start_repeating(10, lambda: calls.append(1))
	QTest.qWait(200)
	scheduler.stop_repeating()
	seen = len(calls)
	QTest.qWait(60)

	assert seen >= 2
	assert len(calls) == seen
	assert not scheduler.is_repeating


def test_call_later_fires_once_and_can_be_cancelled() -> None:
	scheduler = QtScheduler()
	fired = []
	scheduler.call_later(10, lambda: fired.append("first"))
	QTest.qWait(100)
	scheduler.call_later(10, lambda: fired.append("second"))
	scheduler.cancel_all()
	QTest.qWait(100)

	assert fired == ["first"]
