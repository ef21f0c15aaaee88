import sys

import pytest

import app as timeforge_app


def test_main_starts_without_a_usable_database(tmp_path, monkeypatch, caplog) -> None:
	monkeypatch.setenv("TIMEFORGE_DATA_DIR", str(tmp_path))
	(tmp_path / "timeforge.db").mkdir()
	monkeypatch.setattr(sys, "excepthook", sys.excepthook)
	monkeypatch.setattr(timeforge_app, "setup_logging", lambda *args, **kwargs: None)
	executed, stores = [], []

	class FakeApplication:
		def __init__(self, argv):
			pass

		def exec(self):
			executed.append(True)
			return 0

	class FakeWindow:
		def __init__(self, engine, store, settings):
			stores.append(store)

		def show(self):
			pass

	monkeypatch.setattr(timeforge_app, "QApplication", FakeApplication)
	monkeypatch.setattr(timeforge_app, "MainWindow", FakeWindow)

	with pytest.raises(SystemExit) as exit_info:
		timeforge_app.main()

	assert exit_info.value.code == 0
	assert executed == [True]
	assert not stores[0].is_open
	assert "Running without a session store" in caplog.text
