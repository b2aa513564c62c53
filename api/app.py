"""Main FastAPI application with modularized routes."""
import threading
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.config import LOG_LEVEL, SESSION_CLOCK_ENABLED
from api.routes import exams, flashcards, results, sessions
from api.services.catalog_service import get_catalog
from api.services.clock_service import schedule_session_clock
from api.services.session_service import SessionRegistry, get_session_registry
from core.errors import InvalidTransition, NotFound
from core.logging_setup import setup_console_logging

setup_console_logging(LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load content and run the session clock for the app's lifetime."""
    get_catalog()
    stop_event = threading.Event()
    if SESSION_CLOCK_ENABLED:
        schedule_session_clock(get_session_registry(), stop_event)
    yield
    stop_event.set()


app = FastAPI(title="Study Desk API", lifespan=lifespan)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidTransition)
def invalid_transition_handler(request: Request, exc: InvalidTransition) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(NotFound)
def not_found_handler(request: Request, exc: NotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


# Health check
@app.get("/api/health")
def health(
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> dict[str, object]:
    """Liveness probe."""
    return {"status": "ok", "activeSessions": len(registry)}


# Include routers
app.include_router(exams.router)
app.include_router(flashcards.router)
app.include_router(sessions.router)
app.include_router(results.router)
