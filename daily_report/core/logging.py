# daily_report/core/logging.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Sets up the root logger once; uvicorn's own handlers are left alone."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("daily_report").setLevel(level.upper())
