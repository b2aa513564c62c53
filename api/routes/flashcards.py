"""Flashcard deck endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from api.services.catalog_service import Catalog, get_catalog
from api.services.session_service import SessionRegistry, get_session_registry
from api.utils import validate_id
from serialization import serialize_deck, serialize_session

router = APIRouter(prefix="/api/flashcards/decks", tags=["flashcards"])


@router.get("")
def list_decks(
    catalog: Annotated[Catalog, Depends(get_catalog)],
    search: str | None = Query(None),
) -> list[dict[str, object]]:
    """List flashcard decks, optionally filtered by title or subject."""
    return [serialize_deck(deck) for deck in catalog.list_decks(search)]


@router.get("/{deck_id}")
def get_deck(
    deck_id: str,
    catalog: Annotated[Catalog, Depends(get_catalog)],
) -> dict[str, object]:
    """Get a deck with its cards."""
    deck = catalog.get_deck(validate_id("deckId", deck_id))
    return serialize_deck(deck, include_cards=True)


@router.post("/{deck_id}/sessions", status_code=201)
def start_study_session(
    deck_id: str,
    catalog: Annotated[Catalog, Depends(get_catalog)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> dict[str, object]:
    """Start studying a deck."""
    deck = catalog.get_deck(validate_id("deckId", deck_id))
    hosted = registry.start_flashcards(deck)
    return serialize_session(hosted, registry.elapsed_seconds(hosted))
