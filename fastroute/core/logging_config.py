"""
Logging da API via dictConfig.

As linhas de requisição (access log do uvicorn e o middleware ``log_requests``)
passam por ``QuietPathsFilter``: o health check é chamado pelo balanceador a
cada poucos segundos e só polui o log.
"""

import logging
import logging.config
from typing import Any, Dict, Iterable

QUIET_PATHS = ("/health",)


class QuietPathsFilter(logging.Filter):
    """Descarta registros cujo path (argumento do log) está em ``paths``."""

    def __init__(self, paths: Iterable[str] = QUIET_PATHS):
        super().__init__()
        self.paths = tuple(paths)

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno >= logging.WARNING:
            return True
        args = record.args if isinstance(record.args, tuple) else ()
        for arg in args:
            if isinstance(arg, str) and arg.split("?", 1)[0] in self.paths:
                return False
        return True


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    request_loggers = ("uvicorn.access", "fastroute.main")
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"quiet_paths": {"()": QuietPathsFilter, "paths": QUIET_PATHS}},
        "formatters": {
            "default": {"format": "%(asctime)s %(levelname)s [%(name)s] %(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
            "requests": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
                "filters": ["quiet_paths"],
            },
        },
        "loggers": {
            **{name: {"handlers": ["requests"], "level": level, "propagate": False}
               for name in request_loggers},
            "uvicorn.error": {"handlers": ["console"], "level": level, "propagate": False},
        },
        "root": {"level": level, "handlers": ["console"]},
    }


def setup_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(get_logging_config(level.upper()))
