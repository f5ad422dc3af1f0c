"""
Logging configuration for the Django LOGGING setting.

Environment variables:
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO, DEBUG when debugging)
"""
import os


def get_logging_config(debug: bool = False) -> dict:
    log_level = os.environ.get("LOG_LEVEL", "DEBUG" if debug else "INFO")

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "verbose": {
                "format": "[{asctime}] {levelname} {name} {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "verbose",
            },
            "null": {
                "class": "logging.NullHandler",
            },
        },
        "loggers": {
            "": {
                "handlers": ["console"],
                "level": log_level,
            },
            "django": {
                "handlers": ["console"],
                "level": log_level,
                "propagate": False,
            },
            "django.db.backends": {
                "handlers": ["null"],
                "level": "INFO",
                "propagate": False,
            },
            # posting, numbering, treasury and task loggers
            "ledger_core": {
                "handlers": ["console"],
                "level": log_level,
                "propagate": False,
            },
            "celery": {
                "handlers": ["console"],
                "level": log_level,
                "propagate": False,
            },
        },
    }
