"""Card management and billing previews - /v1/cards"""

from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from nossos_gastos.api.v1.schemas import (
    BillingInfoResponse,
    CardCreate,
    CardResponse,
    CardScheduleResponse,
    CardUpdate,
)
from nossos_gastos.api.dependencies import get_card_repository
from nossos_gastos.infrastructure.database.session import get_db
from nossos_gastos.infrastructure.database.repositories import CardRepository
from nossos_gastos.domain.billing import card_schedule, resolve_billing
from nossos_gastos.domain.models import Card

router = APIRouter()


def _require_card(cards: CardRepository, card_id: str) -> Card:
    card = cards.get_card(card_id)
    if card is None:
        raise HTTPException(status_code=404, detail="Card not found")
    return card


@router.post("/cards", response_model=CardResponse, status_code=201)
def create_card(
    body: CardCreate,
    db: Session = Depends(get_db),
    cards: CardRepository = Depends(get_card_repository),
):
    card = cards.create_card(**body.model_dump())
    db.commit()
    return CardResponse.model_validate(card)


@router.get("/cards", response_model=List[CardResponse])
def list_cards(cards: CardRepository = Depends(get_card_repository)):
    return [CardResponse.model_validate(c) for c in cards.list_cards()]


@router.patch("/cards/{card_id}", response_model=CardResponse)
def update_card(
    card_id: str,
    body: CardUpdate,
    db: Session = Depends(get_db),
    cards: CardRepository = Depends(get_card_repository),
):
    card = cards.update_card(card_id, body.changes())
    if card is None:
        raise HTTPException(status_code=404, detail="Card not found")
    db.commit()
    return CardResponse.model_validate(card)


@router.delete("/cards/{card_id}", status_code=204)
def delete_card(
    card_id: str,
    db: Session = Depends(get_db),
    cards: CardRepository = Depends(get_card_repository),
):
    """Delete a card. Transactions charged to it are kept."""
    if not cards.delete_card(card_id):
        raise HTTPException(status_code=404, detail="Card not found")
    db.commit()
    return Response(status_code=204)


@router.get("/cards/{card_id}/billing", response_model=BillingInfoResponse)
def preview_billing(
    card_id: str,
    purchase_date: date = Query(..., description="Purchase date (YYYY-MM-DD)"),
    cards: CardRepository = Depends(get_card_repository),
):
    """Which statement a purchase made on `purchase_date` falls into"""
    card = _require_card(cards, card_id)
    return BillingInfoResponse.model_validate(resolve_billing(purchase_date, card))


@router.get("/cards/{card_id}/schedule", response_model=CardScheduleResponse)
def get_card_schedule(
    card_id: str,
    today: Optional[date] = Query(None, description="Reference day, defaults to today"),
    cards: CardRepository = Depends(get_card_repository),
):
    card = _require_card(cards, card_id)
    return CardScheduleResponse.model_validate(card_schedule(card, today))
