# clab_editor/utils/logging_config.py

import logging.config
from pathlib import Path

# Loggers that trace every allocation and merge at DEBUG
CORE_LOGGER = "clab_editor.core"


def setup_logging(log_level: str = "INFO", log_file: str | None = None):
    """
    Configure console (Rich) and optional file logging.

    Console lines carry the logger name, so DEBUG traces from the allocator
    and the resolver can be told apart. ``clab_editor.core`` stays at WARNING
    unless ``log_level`` is DEBUG.

    Parameters
    ----------
    log_level : str
        Desired logging level (e.g. "WARNING", "INFO", "DEBUG").
    log_file : str | None
        Path to the log file. If ``None``, logs are not written to a file.
    """
    debug = logging.getLevelName(log_level) == logging.DEBUG
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {
                "format": "%(name)s: %(message)s",
            },
            "file": {
                "format": "%(asctime)s %(levelname)-8s %(name)s %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "rich.logging.RichHandler",
                "level": log_level,
                "formatter": "console",
                "rich_tracebacks": True,
                "show_path": False,
                "markup": False,
                "log_time_format": "[%X]",
            },
        },
        "loggers": {
            "": {  # Root logger
                "handlers": ["console"],
                "level": log_level,
            },
            CORE_LOGGER: {
                "level": log_level if debug else "WARNING",
            },
        },
    }

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logging_config["handlers"]["file"] = {
            "class": "logging.FileHandler",
            "filename": str(log_path),
            "level": log_level,
            "formatter": "file",
        }
        logging_config["loggers"][""]["handlers"].append("file")

    logging.config.dictConfig(logging_config)
