"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker, Session
from nossos_gastos.api.main import create_app
from nossos_gastos.infrastructure.database.models import Base
from nossos_gastos.infrastructure.database.session import build_engine, get_db
from nossos_gastos.domain.models import Card, Transaction, TransactionDraft


# Test database: one shared in-memory SQLite connection
engine = build_engine("sqlite://")
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def nubank() -> Card:
    """Card closing on the 26th, due on the 5th"""
    return Card(id="card-nubank", name="Nubank", color="#8b5cf6", closing_day=26, due_day=5)


@pytest.fixture
def inter() -> Card:
    """Card with a best purchase day"""
    return Card(id="card-inter", name="Inter", color="#f97316", closing_day=26, due_day=5, best_purchase_day=27)


@pytest.fixture
def draft() -> TransactionDraft:
    """Expense draft for a 1200.00 purchase"""
    return TransactionDraft(
        type="expense",
        description="Geladeira",
        amount=1200.0,
        category_id="3",
        purchase_date=date(2024, 12, 7),
        person="nos",
        card_id="card-nubank",
    )


@pytest.fixture
def transaction_factory():
    """Factory for ledger rows"""
    return make_transaction


def make_transaction(
    id: str,
    txn_date: date,
    amount: float = 100.0,
    type: str = "expense",
    card_id: str | None = None,
    group_id: str | None = None,
    current: int | None = None,
    total: int | None = None,
    description: str = "Compra",
) -> Transaction:
    """Build a ledger row with sensible defaults"""
    return Transaction(
        id=id,
        type=type,
        description=description,
        amount=amount,
        category_id="7",
        date=txn_date,
        person="nos",
        card_id=card_id,
        is_installment=group_id is not None,
        installment_current=current,
        installment_total=total,
        installment_group_id=group_id,
    )
