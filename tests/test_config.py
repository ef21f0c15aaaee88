import logging

from BackEnd.core.log import LOGGER, setup_logging
from BackEnd.core.paths import NO_WORKSPACE, current_workspace_id, db_path, user_data_dir
from BackEnd.core.settings import AppSettings


def test_data_dir_override(tmp_path, monkeypatch) -> None:
	monkeypatch.setenv("TIMEFORGE_DATA_DIR", str(tmp_path / "data"))

	assert user_data_dir() == tmp_path / "data"
	assert (tmp_path / "data").is_dir()
	assert db_path() == tmp_path / "data" / "timeforge.db"


def test_workspace_id(tmp_path, monkeypatch) -> None:
	monkeypatch.delenv("TIMEFORGE_WORKSPACE", raising=False)
	project = tmp_path / "my-project"
	project.mkdir()
	monkeypatch.chdir(project)

	assert current_workspace_id() == "my-project"
	assert current_workspace_id("other") == "other"
	monkeypatch.setenv("TIMEFORGE_WORKSPACE", "from-env")
	assert current_workspace_id() == "from-env"
	monkeypatch.delenv("TIMEFORGE_WORKSPACE")
	monkeypatch.chdir("/")
	assert current_workspace_id() == NO_WORKSPACE


def test_settings_defaults_when_missing(tmp_path) -> None:
	s = AppSettings.load(tmp_path / "settings.ini")
	assert s == AppSettings()


def test_settings_round_trip(tmp_path) -> None:
	path = tmp_path / "settings.ini"
	AppSettings(default_minutes=45, workspace="client-x", log_level="debug", console_log=True).save(path)

	s = AppSettings.load(path)

	assert s.default_minutes == 45
	assert s.workspace == "client-x"
	assert s.log_level == "DEBUG"
	assert s.console_log is True


def test_settings_reject_bad_minutes(tmp_path) -> None:
	path = tmp_path / "settings.ini"
	path.write_text("[timer]\ndefault_minutes=soon\n", encoding="utf-8")
	assert AppSettings.load(path).default_minutes == 25.0

	path.write_text("[timer]\ndefault_minutes=-4\n", encoding="utf-8")
	assert AppSettings.load(path).default_minutes == 25.0


def test_setup_logging_writes_file(tmp_path) -> None:
	log_file = tmp_path / "timeforge.log"
	handlers, level, propagate = LOGGER.handlers[:], LOGGER.level, LOGGER.propagate
	LOGGER.handlers.clear()
	try:
		setup_logging(log_file, logging.INFO)
		logging.getLogger("timeforge.timer").info("Timer started")
		for h in LOGGER.handlers:
			h.flush()
	finally:
		for h in LOGGER.handlers:
			h.close()
		LOGGER.handlers[:] = handlers
		LOGGER.setLevel(level)
		LOGGER.propagate = propagate

	text = log_file.read_text(encoding="utf-8")
	assert "INFO timeforge.timer Timer started" in text
