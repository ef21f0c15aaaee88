import logging
import sys

from PySide6.QtWidgets import QApplication

from BackEnd.core.errors import PersistenceError
from BackEnd.core.log import LOGGER, log_unhandled_exception, setup_logging
from BackEnd.core.paths import current_workspace_id, log_path
from BackEnd.core.settings import AppSettings
from BackEnd.repos.session_repo import SessionStore
from BackEnd.services.timer_service import TimerEngine
from FrontEnd.ui_main import MainWindow

def main():
    settings = AppSettings.load()
    setup_logging(log_path(), getattr(logging, settings.log_level, logging.INFO), settings.console_log)
    sys.excepthook = log_unhandled_exception

    app = QApplication(sys.argv)
    store = SessionStore()
    try:
        store.open()
    except PersistenceError as e:
        # the countdown still works; sessions just are not recorded
        LOGGER.error("Running without a session store: %s", e)
    engine = TimerEngine(store, current_workspace_id(settings.workspace or None))
    LOGGER.info("TimeForge started for workspace %s", engine.workspace_id)

    win = MainWindow(engine, store, settings)
    win.show()
    try:
        code = app.exec()
    finally:
        store.close()
    sys.exit(code)

if __name__ == "__main__":
    main()
