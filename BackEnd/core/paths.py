import os
from pathlib import Path

APP_NAME = "TimeForge"
NO_WORKSPACE = "No Workspace"

def user_data_dir(app_name=APP_NAME):
	"""Return per-user data dir (Windows/macOS/Linux), or TIMEFORGE_DATA_DIR when set."""
	override = os.environ.get("TIMEFORGE_DATA_DIR")
	if override:
		path = Path(override)
	else:
		if os.name == "nt":
			base = os.environ.get("LOCALAPPDATA", os.path.expanduser("~\\AppData\\Local"))
		elif os.name == "posix":
			base = os.environ.get("XDG_DATA_HOME", os.path.expanduser("~/.local/share"))
		else:
			base = os.path.expanduser("~")
		path = Path(base) / app_name
	path.mkdir(parents=True, exist_ok=True)
	return path

def db_path():
	"""Return Path to timeforge.db inside user data dir."""
	return user_data_dir() / "timeforge.db"

def log_path():
	return user_data_dir() / "timeforge.log"

def settings_path():
	return user_data_dir() / "settings.ini"

def current_workspace_id(override=None):
	"""Name of the folder being worked in, used to group recorded time."""
	name = override or os.environ.get("TIMEFORGE_WORKSPACE")
	if not name:
		name = Path.cwd().name
	return name or NO_WORKSPACE
