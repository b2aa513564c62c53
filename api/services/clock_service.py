"""Background clock driving session timers, autosave and idle cleanup."""
import logging
import threading

from api.config import (
    AUTOSAVE_INTERVAL_SECONDS,
    SESSION_IDLE_TIMEOUT_MINUTES,
    TICK_INTERVAL_SECONDS,
)
from api.services.session_service import SessionRegistry

logger = logging.getLogger(__name__)

# Idle sessions are looked for once a minute
PURGE_EVERY_TICKS = 60


def run_clock_step(registry: SessionRegistry, step: int) -> None:
    """Work done on the given one-based clock step."""
    registry.tick_all()
    if AUTOSAVE_INTERVAL_SECONDS > 0 and step % AUTOSAVE_INTERVAL_SECONDS == 0:
        registry.autosave_all()
    if SESSION_IDLE_TIMEOUT_MINUTES > 0 and step % PURGE_EVERY_TICKS == 0:
        registry.purge_idle(SESSION_IDLE_TIMEOUT_MINUTES * 60)


def schedule_session_clock(
    registry: SessionRegistry, stop_event: threading.Event
) -> threading.Thread:
    """Start the clock thread; setting stop_event ends it."""

    def _worker() -> None:
        step = 0
        while not stop_event.wait(TICK_INTERVAL_SECONDS):
            step += 1
            try:
                run_clock_step(registry, step)
            except Exception as e:
                logger.error(f"Session clock step {step} failed: {e}")

    thread = threading.Thread(
        target=_worker,
        name="session_clock",
        daemon=True,
    )
    thread.start()
    logger.info("Session clock started")
    return thread
