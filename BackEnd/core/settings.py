from dataclasses import dataclass

from PySide6.QtCore import QSettings

from BackEnd.core.paths import settings_path


def parse_bool(value, fallback: bool) -> bool:
	if value is None:
		return fallback
	if isinstance(value, bool):
		return value
	if isinstance(value, (int, float)):
		return bool(value)
	if isinstance(value, str):
		return value.strip().lower() in ("1", "true", "yes", "on")
	return fallback


@dataclass
class AppSettings:
	default_minutes: float = 25.0
	workspace: str = ""
	log_level: str = "INFO"
	console_log: bool = False

	@classmethod
	def load(cls, path=None) -> "AppSettings":
		settings = QSettings(str(path or settings_path()), QSettings.IniFormat)
		s = cls()
		try:
			s.default_minutes = float(settings.value("timer/default_minutes", s.default_minutes))
		except (TypeError, ValueError):
			pass
		if s.default_minutes <= 0:
			s.default_minutes = cls.default_minutes
		s.workspace = str(settings.value("workspace/id", s.workspace) or "")
		s.log_level = str(settings.value("logging/level", s.log_level)).upper()
		s.console_log = parse_bool(settings.value("logging/console"), s.console_log)
		return s

	def save(self, path=None) -> None:
		settings = QSettings(str(path or settings_path()), QSettings.IniFormat)
		settings.setValue("timer/default_minutes", self.default_minutes)
		settings.setValue("workspace/id", self.workspace)
		settings.setValue("logging/level", self.log_level)
		settings.setValue("logging/console", self.console_log)
		settings.sync()
