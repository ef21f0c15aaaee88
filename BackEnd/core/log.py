import logging

LOGGER = logging.getLogger("timeforge")
FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(log_path, level=logging.INFO, console: bool = False) -> None:
	LOGGER.setLevel(level)
	if LOGGER.handlers:
		return
	formatter = logging.Formatter(FORMAT)
	handler = logging.FileHandler(log_path, encoding="utf-8")
	handler.setFormatter(formatter)
	LOGGER.addHandler(handler)
	if console:
		stream = logging.StreamHandler()
		stream.setFormatter(formatter)
		LOGGER.addHandler(stream)
	LOGGER.propagate = False


def log_unhandled_exception(exc_type, exc, tb) -> None:
	LOGGER.error("Unhandled exception", exc_info=(exc_type, exc, tb))
