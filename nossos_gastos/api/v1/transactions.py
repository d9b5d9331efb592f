"""Ledger transactions - /v1/transactions"""

import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from nossos_gastos.api.v1.schemas import (
    BillingInfoResponse,
    InterestSchema,
    TransactionBatchResponse,
    TransactionCreate,
    TransactionSchema,
    TransactionUpdate,
)
from nossos_gastos.api.dependencies import get_card_repository, get_request_id, get_transaction_repository
from nossos_gastos.config import settings
from nossos_gastos.infrastructure.database.session import get_db
from nossos_gastos.infrastructure.database.repositories import CardRepository, TransactionRepository
from nossos_gastos.domain.billing import resolve_billing
from nossos_gastos.domain.exceptions import InvalidDateError, ValidationError
from nossos_gastos.domain.installments import (
    build_transaction,
    edit_transaction,
    generate_installments,
    quote_installments,
)
from nossos_gastos.domain.models import EXPENSE, TransactionDraft
from nossos_gastos.infrastructure.observability.metrics import record_transactions, validation_failures_counter
from nossos_gastos.infrastructure.observability.logging import log_transactions_created
from nossos_gastos.utils.date_utils import last_day_of_month, parse_month_key

router = APIRouter()


@router.post("/transactions", response_model=TransactionBatchResponse, status_code=201)
def create_transaction(
    body: TransactionCreate,
    request: Request,
    db: Session = Depends(get_db),
    cards: CardRepository = Depends(get_card_repository),
    ledger: TransactionRepository = Depends(get_transaction_repository),
):
    """
    Record an expense or income.

    Flow:
    1. Look up the card; unknown card IDs (pix, debit...) have no billing cycle
    2. Expenses with `installment_total` become an installment group dated on
       the card's statements; everything else is a single row
    3. Save all rows in one database transaction
    """
    request_id = get_request_id(request)

    draft = TransactionDraft(
        type=body.type,
        description=body.description,
        amount=body.amount,
        category_id=body.category_id,
        purchase_date=body.date,
        person=body.person,
        card_id=body.card_id,
    )
    is_installment = body.type == EXPENSE and body.installment_total is not None

    try:
        card = cards.get_card(body.card_id) if body.card_id and body.type == EXPENSE else None
        billing = resolve_billing(body.date, card)
        interest = None

        if is_installment:
            reconcile = body.reconcile_rounding
            if reconcile is None:
                reconcile = settings.reconcile_installment_rounding

            rows = generate_installments(
                draft,
                body.installment_total,
                card=card,
                explicit_dates=body.installment_dates,
                installment_amount=body.installment_amount,
                reconcile_rounding=reconcile,
                max_installments=settings.max_installments,
            )
            interest = quote_installments(body.amount, body.installment_total, body.installment_amount)
        else:
            rows = [build_transaction(draft, card)]

        ledger.create_many(rows)
        db.commit()

    except (ValidationError, InvalidDateError) as e:
        db.rollback()
        validation_failures_counter.inc()
        logging.warning(f"Rejected transaction: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error saving transaction: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    group_id = rows[0].installment_group_id
    record_transactions(len(rows), is_installment)
    log_transactions_created(request_id, len(rows), sum(t.amount for t in rows), group_id, body.card_id)

    return TransactionBatchResponse(
        installment_group_id=group_id,
        billing=BillingInfoResponse.model_validate(billing) if billing else None,
        interest=InterestSchema.model_validate(interest) if interest else None,
        transactions=[TransactionSchema.model_validate(t) for t in rows],
    )


@router.get("/transactions", response_model=List[TransactionSchema])
def list_transactions(
    month: Optional[str] = Query(None, description="Statement month (YYYY-MM)"),
    ledger: TransactionRepository = Depends(get_transaction_repository),
):
    start = end = None
    if month is not None:
        try:
            year, month_number = parse_month_key(month)
        except InvalidDateError as e:
            raise HTTPException(status_code=422, detail=str(e))
        start = date(year, month_number, 1)
        end = date(year, month_number, last_day_of_month(year, month_number))

    return [TransactionSchema.model_validate(t) for t in ledger.list_transactions(start, end)]


@router.delete("/transactions/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: str,
    db: Session = Depends(get_db),
    ledger: TransactionRepository = Depends(get_transaction_repository),
):
    """Delete a single row. Installment groups are removed via /v1/installments."""
    if not ledger.delete_transaction(transaction_id):
        raise HTTPException(status_code=404, detail="Transaction not found")
    db.commit()
    return Response(status_code=204)


@router.patch("/transactions/{transaction_id}", response_model=TransactionSchema)
def update_transaction(
    transaction_id: str,
    body: TransactionUpdate,
    request: Request,
    db: Session = Depends(get_db),
    ledger: TransactionRepository = Depends(get_transaction_repository),
):
    """
    Edit a single row.

    Lump-sum rows can change any field. Installment rows only take
    description, amount, category and person; their dates, card and type
    belong to the plan.
    """
    request_id = get_request_id(request)

    txn = ledger.get_transaction(transaction_id)
    if txn is None:
        raise HTTPException(status_code=404, detail="Transaction not found")

    try:
        updated = ledger.update_transaction(edit_transaction(txn, body.changes()))
        db.commit()

    except ValidationError as e:
        db.rollback()
        validation_failures_counter.inc()
        logging.warning(f"Rejected transaction edit: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error editing transaction: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    return TransactionSchema.model_validate(updated)
