"""Investments and their deposits/withdrawals - /v1/investments"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from nossos_gastos.api.v1.schemas import (
    InvestmentCreate,
    InvestmentSchema,
    InvestmentsResponse,
    InvestmentUpdate,
    MovementCreate,
    MovementSchema,
)
from nossos_gastos.api.dependencies import get_investment_repository, get_request_id
from nossos_gastos.infrastructure.database.session import get_db
from nossos_gastos.infrastructure.database.repositories import InvestmentRepository
from nossos_gastos.domain.exceptions import ValidationError
from nossos_gastos.domain.investments import goal_progress, investment_balance, new_movement, portfolio_total
from nossos_gastos.domain.models import DEPOSIT, WITHDRAW, Investment
from nossos_gastos.infrastructure.observability.metrics import investment_movements_counter

router = APIRouter()


def _to_schema(investment: Investment) -> InvestmentSchema:
    return InvestmentSchema(
        id=investment.id,
        name=investment.name,
        icon=investment.icon,
        color=investment.color,
        goal=investment.goal,
        balance=investment_balance(investment),
        goal_progress=goal_progress(investment),
        transactions=[MovementSchema.model_validate(t) for t in investment.transactions],
    )


@router.post("/investments", response_model=InvestmentSchema, status_code=201)
def create_investment(
    body: InvestmentCreate,
    db: Session = Depends(get_db),
    investments: InvestmentRepository = Depends(get_investment_repository),
):
    investment = investments.create_investment(**body.model_dump())
    db.commit()
    return _to_schema(investment)


@router.get("/investments", response_model=InvestmentsResponse)
def list_investments(investments: InvestmentRepository = Depends(get_investment_repository)):
    """All investments with their balances and the combined total"""
    items = investments.list_investments()
    return InvestmentsResponse(
        total=portfolio_total(items),
        investments=[_to_schema(inv) for inv in items],
    )


@router.patch("/investments/{investment_id}", response_model=InvestmentSchema)
def update_investment(
    investment_id: str,
    body: InvestmentUpdate,
    db: Session = Depends(get_db),
    investments: InvestmentRepository = Depends(get_investment_repository),
):
    investment = investments.update_investment(investment_id, body.changes())
    if investment is None:
        raise HTTPException(status_code=404, detail="Investment not found")
    db.commit()
    return _to_schema(investment)


@router.delete("/investments/{investment_id}", status_code=204)
def delete_investment(
    investment_id: str,
    db: Session = Depends(get_db),
    investments: InvestmentRepository = Depends(get_investment_repository),
):
    """Delete an investment and its deposit/withdrawal history"""
    if not investments.delete_investment(investment_id):
        raise HTTPException(status_code=404, detail="Investment not found")
    db.commit()
    return Response(status_code=204)


def _record_movement(
    movement_type: str,
    investment_id: str,
    body: MovementCreate,
    request: Request,
    db: Session,
    investments: InvestmentRepository,
) -> InvestmentSchema:
    request_id = get_request_id(request)

    try:
        movement = new_movement(movement_type, body.amount, body.date)
        investment = investments.add_movement(investment_id, movement)
        if investment is None:
            raise HTTPException(status_code=404, detail="Investment not found")
        db.commit()
    except HTTPException:
        db.rollback()
        raise
    except ValidationError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        db.rollback()
        logging.error(f"Failed to record {movement_type}: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    investment_movements_counter.labels(type=movement_type).inc()
    logging.info(
        "Investment movement recorded",
        extra={
            "request_id": request_id,
            "step": f"investment_{movement_type}",
            "investment_id": investment_id,
            "amount": movement.amount,
        },
    )
    return _to_schema(investment)


@router.post("/investments/{investment_id}/deposits", response_model=InvestmentSchema, status_code=201)
def deposit(
    investment_id: str,
    body: MovementCreate,
    request: Request,
    db: Session = Depends(get_db),
    investments: InvestmentRepository = Depends(get_investment_repository),
):
    return _record_movement(DEPOSIT, investment_id, body, request, db, investments)


@router.post("/investments/{investment_id}/withdrawals", response_model=InvestmentSchema, status_code=201)
def withdraw(
    investment_id: str,
    body: MovementCreate,
    request: Request,
    db: Session = Depends(get_db),
    investments: InvestmentRepository = Depends(get_investment_repository),
):
    """Withdraw from an investment; the balance is allowed to go negative"""
    return _record_movement(WITHDRAW, investment_id, body, request, db, investments)
