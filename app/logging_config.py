import logging, logging.config

def setup_logging(level: str = "INFO", access_log: bool = True):
    """Route app, uvicorn and httpx logs to the console.

    Per-request lines ("<path> request from <addr>") come from
    ``app.middleware``; with ``access_log=False`` both they and uvicorn's
    access log are raised to WARNING.
    """
    level = level.upper()
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                        "datefmt": "%H:%M:%S"},
            # Uvicorn pre-formats access log lines; don't expect extra fields
            "access_simple": {"format": "%(message)s"},
        },
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "default"},
            "access":  {"class": "logging.StreamHandler", "formatter": "access_simple"},
        },
        "loggers": {
            "app": {"level": level},
            "app.middleware": {"level": ("INFO" if access_log else "WARNING")},
            "uvicorn.error":  {"level": level, "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": ("INFO" if access_log else "WARNING"),
                               "handlers": ["access"], "propagate": False},
            # httpx logs every request at INFO; the seed scrape only needs warnings
            "httpx": {"level": "WARNING"},
        },
        "root": {"level": level, "handlers": ["console"]},
    })
