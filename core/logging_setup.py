from __future__ import annotations
import logging

# Clients poll the session view for the countdown every second
NOISY_LOGGERS = ("uvicorn.access",)


def _level_number(level: int | str) -> int:
    if isinstance(level, int):
        return level
    number = logging.getLevelName(level.upper())
    return number if isinstance(number, int) else logging.INFO


def setup_console_logging(level: int | str = logging.INFO) -> None:
    """
    Call once at app start. Session, clock and results activity go to the console;
    per-request access lines only show up at DEBUG.
    """
    level = _level_number(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)

    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] %(levelname)s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root.addHandler(handler)
