"""Installment plans - /v1/installments"""

import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from nossos_gastos.api.v1.schemas import GroupDeletedResponse, InstallmentPlanSchema, TransactionSchema
from nossos_gastos.api.dependencies import get_request_id, get_transaction_repository
from nossos_gastos.infrastructure.database.session import get_db
from nossos_gastos.infrastructure.database.repositories import TransactionRepository
from nossos_gastos.domain.plans import group_installments
from nossos_gastos.infrastructure.observability.metrics import installment_groups_deleted_counter
from nossos_gastos.infrastructure.observability.logging import log_group_deleted

router = APIRouter()


@router.get("/installments", response_model=List[InstallmentPlanSchema])
def list_installment_plans(
    today: Optional[date] = Query(None, description="Reference day for paid/next due, defaults to today"),
    ledger: TransactionRepository = Depends(get_transaction_repository),
):
    """
    Installment plans with progress.

    Returns:
        Plans ordered by next due installment, fully paid plans last
    """
    plans = group_installments(ledger.list_transactions(), today)

    return [
        InstallmentPlanSchema(
            group_id=plan.group_id,
            description=plan.description,
            category_id=plan.category_id,
            card_id=plan.card_id,
            per_installment_amount=plan.per_installment_amount,
            total=plan.total,
            paid_count=plan.paid_count,
            progress=plan.progress,
            remaining_amount=plan.remaining_amount,
            next_due_installment=(
                TransactionSchema.model_validate(plan.next_due_installment)
                if plan.next_due_installment
                else None
            ),
            installments=[TransactionSchema.model_validate(t) for t in plan.installments],
        )
        for plan in plans
    ]


@router.delete("/installments/{group_id}", response_model=GroupDeletedResponse)
def delete_installment_group(
    group_id: str,
    request: Request,
    db: Session = Depends(get_db),
    ledger: TransactionRepository = Depends(get_transaction_repository),
):
    """Delete every installment of a group at once"""
    request_id = get_request_id(request)

    try:
        deleted = ledger.delete_group(group_id)
        if deleted == 0:
            raise HTTPException(status_code=404, detail="Installment group not found")
        db.commit()
    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logging.error(f"Failed to delete installment group: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    installment_groups_deleted_counter.inc()
    log_group_deleted(request_id, group_id, deleted)

    return GroupDeletedResponse(group_id=group_id, deleted=deleted)
