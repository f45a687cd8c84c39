"""Logging setup shared by the app entry point and every chapter page."""
import logging
import sys
from pathlib import Path

from modeling_notes.settings import LOG_FILE, LOG_LEVEL

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level=None, log_file=None, format_string=None):
    """
    Configure root logging once per process.

    Args:
        level: Logging level name or number; defaults to ``settings.LOG_LEVEL``
        log_file: Optional file to also write logs to
        format_string: Optional custom format string
    """
    if level is None:
        level = LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    log_file = log_file or LOG_FILE

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    # Streamlit reruns every page script on each interaction; only the first
    # call installs handlers.
    logging.basicConfig(
        level=level,
        format=format_string or DEFAULT_FORMAT,
        handlers=handlers,
    )
    logging.getLogger("modeling_notes").setLevel(level)
    return logging.getLogger("modeling_notes")
