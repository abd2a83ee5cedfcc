import logging
import os
from logging.handlers import RotatingFileHandler

_FORMAT = "[%(asctime)s] [%(name)s] %(levelname)s %(message)s"
_LOGGER_NAMES = ("summarizer", "uvicorn", "uvicorn.error", "uvicorn.access")


def _build_stream_handler() -> logging.StreamHandler:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT, "%H:%M:%S"))
    handler.setLevel(logging.INFO)
    handler.name = "summarizer_stream"
    return handler


def _build_file_handler(log_path: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=3)
    handler.setFormatter(logging.Formatter(_FORMAT, "%Y-%m-%d %H:%M:%S"))
    handler.setLevel(logging.DEBUG)
    handler.name = "summarizer_file"
    return handler


def _replace_handlers(logger: logging.Logger, handlers: list[logging.Handler]) -> None:
    for old in logger.handlers:
        if old not in handlers:
            old.close()
    logger.handlers = []
    for handler in handlers:
        logger.addHandler(handler)
    logger.propagate = False


def configure_logging(log_dir: str = "") -> str | None:
    """Route the app and uvicorn loggers to stderr, plus a file when log_dir is set.

    Returns the log file path, if any. Safe to call more than once: handlers
    from a previous call are closed.
    """
    handlers: list[logging.Handler] = [_build_stream_handler()]
    log_path = None
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_path = os.path.join(log_dir, "summarizer.log")
        handlers.append(_build_file_handler(log_path))

    for name in _LOGGER_NAMES:
        named_logger = logging.getLogger(name)
        named_logger.setLevel(logging.DEBUG if name == "summarizer" else logging.INFO)
        _replace_handlers(named_logger, handlers)

    logging.getLogger("summarizer").info(
        "Logging initialized%s", f": {log_path}" if log_path else ""
    )
    return log_path
