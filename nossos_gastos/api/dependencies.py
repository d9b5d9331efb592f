"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from nossos_gastos.infrastructure.database.session import get_db
from nossos_gastos.infrastructure.database.repositories import (
    CardRepository,
    InvestmentRepository,
    RecurringRepository,
    SalaryRepository,
    TransactionRepository,
)


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_card_repository(db: Session = Depends(get_db)) -> CardRepository:
    return CardRepository(db)


def get_transaction_repository(db: Session = Depends(get_db)) -> TransactionRepository:
    return TransactionRepository(db)


def get_salary_repository(db: Session = Depends(get_db)) -> SalaryRepository:
    return SalaryRepository(db)


def get_recurring_repository(db: Session = Depends(get_db)) -> RecurringRepository:
    return RecurringRepository(db)


def get_investment_repository(db: Session = Depends(get_db)) -> InvestmentRepository:
    return InvestmentRepository(db)
