"""Data access layer for cards, transactions, salaries, recurring items and investments"""

from datetime import date
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from nossos_gastos.infrastructure.database.models import (
    InvestmentMovement,
    InvestmentRecord,
    LedgerTransaction,
    RecurringRecord,
    SalaryRecord,
    UserCard,
)
from nossos_gastos.domain.installments import EDITABLE_FIELDS
from nossos_gastos.domain.models import (
    Card,
    Investment,
    InvestmentTransaction,
    RecurringTransaction,
    Salary,
    Transaction,
)


def to_card(row: UserCard) -> Card:
    return Card(
        id=row.id,
        name=row.name,
        color=row.color,
        closing_day=row.closing_day,
        due_day=row.due_day,
        best_purchase_day=row.best_purchase_day,
    )


def to_transaction(row: LedgerTransaction) -> Transaction:
    return Transaction(
        id=row.id,
        type=row.type,
        description=row.description,
        amount=row.amount,
        category_id=row.category_id,
        date=row.date,
        person=row.person,
        card_id=row.card_id,
        is_installment=row.is_installment,
        installment_current=row.installment_current,
        installment_total=row.installment_total,
        installment_group_id=row.installment_group_id,
    )


class CardRepository:
    """Repository for registered credit cards"""

    def __init__(self, db: Session):
        self.db = db

    def create_card(self, **fields: Any) -> Card:
        db_card = UserCard(**fields)
        self.db.add(db_card)
        self.db.flush()
        return to_card(db_card)

    def list_cards(self) -> List[Card]:
        return [to_card(row) for row in self.db.query(UserCard).order_by(UserCard.created_at).all()]

    def get_card(self, card_id: str) -> Optional[Card]:
        row = self.db.get(UserCard, card_id)
        return to_card(row) if row else None

    def update_card(self, card_id: str, changes: Dict[str, Any]) -> Optional[Card]:
        """Apply partial changes; returns None when the card does not exist"""
        row = self.db.get(UserCard, card_id)
        if row is None:
            return None
        for name, value in changes.items():
            setattr(row, name, value)
        self.db.flush()
        return to_card(row)

    def delete_card(self, card_id: str) -> bool:
        """Delete a card; its transactions are kept as orphaned references"""
        row = self.db.get(UserCard, card_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.flush()
        return True


class TransactionRepository:
    """Repository for ledger transactions and installment groups"""

    def __init__(self, db: Session):
        self.db = db

    def create_many(self, transactions: List[Transaction]) -> List[Transaction]:
        """
        Stage every row of a batch (one installment group or a single
        lump-sum row). Nothing is committed here: the caller commits once or
        rolls back, so a group is never stored partially.
        """
        for txn in transactions:
            self.db.add(
                LedgerTransaction(
                    id=txn.id,
                    type=txn.type,
                    description=txn.description,
                    amount=txn.amount,
                    category_id=txn.category_id,
                    date=txn.date,
                    person=txn.person,
                    card_id=txn.card_id,
                    is_installment=txn.is_installment,
                    installment_current=txn.installment_current,
                    installment_total=txn.installment_total,
                    installment_group_id=txn.installment_group_id,
                )
            )
        self.db.flush()
        return transactions

    def list_transactions(self, start: date | None = None, end: date | None = None) -> List[Transaction]:
        """All transactions, optionally limited to dates in [start, end]"""
        query = self.db.query(LedgerTransaction)
        if start is not None:
            query = query.filter(LedgerTransaction.date >= start)
        if end is not None:
            query = query.filter(LedgerTransaction.date <= end)
        rows = query.order_by(LedgerTransaction.date, LedgerTransaction.installment_current).all()
        return [to_transaction(row) for row in rows]

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        row = self.db.get(LedgerTransaction, transaction_id)
        return to_transaction(row) if row else None

    def update_transaction(self, txn: Transaction) -> Optional[Transaction]:
        """Write the editable fields of an already validated transaction"""
        row = self.db.get(LedgerTransaction, txn.id)
        if row is None:
            return None
        for name in EDITABLE_FIELDS:
            setattr(row, name, getattr(txn, name))
        self.db.flush()
        return to_transaction(row)

    def delete_transaction(self, transaction_id: str) -> bool:
        row = self.db.get(LedgerTransaction, transaction_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.flush()
        return True

    def delete_group(self, group_id: str) -> int:
        """Delete every row of an installment group in one statement"""
        deleted = (
            self.db.query(LedgerTransaction)
            .filter(LedgerTransaction.installment_group_id == group_id)
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return deleted


class SalaryRepository:
    """Repository for salaries"""

    def __init__(self, db: Session):
        self.db = db

    def create_salary(self, **fields: Any) -> Salary:
        row = SalaryRecord(**fields)
        self.db.add(row)
        self.db.flush()
        return self._to_domain(row)

    def list_salaries(self) -> List[Salary]:
        rows = self.db.query(SalaryRecord).order_by(SalaryRecord.created_at.desc()).all()
        return [self._to_domain(row) for row in rows]

    def update_salary(self, salary_id: str, changes: Dict[str, Any]) -> Optional[Salary]:
        row = self.db.get(SalaryRecord, salary_id)
        if row is None:
            return None
        for name, value in changes.items():
            setattr(row, name, value)
        self.db.flush()
        return self._to_domain(row)

    def delete_salary(self, salary_id: str) -> bool:
        row = self.db.get(SalaryRecord, salary_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.flush()
        return True

    @staticmethod
    def _to_domain(row: SalaryRecord) -> Salary:
        return Salary(
            id=row.id,
            person=row.person,
            description=row.description,
            amount=row.amount,
            due_day=row.due_day,
            is_active=row.is_active,
        )


class RecurringRepository:
    """Repository for recurring bills and income"""

    def __init__(self, db: Session):
        self.db = db

    def create_recurring(self, **fields: Any) -> RecurringTransaction:
        row = RecurringRecord(**fields)
        self.db.add(row)
        self.db.flush()
        return self._to_domain(row)

    def list_recurring(self) -> List[RecurringTransaction]:
        rows = self.db.query(RecurringRecord).order_by(RecurringRecord.day_of_month).all()
        return [self._to_domain(row) for row in rows]

    def update_recurring(self, recurring_id: str, changes: Dict[str, Any]) -> Optional[RecurringTransaction]:
        """Apply partial changes; `is_active=False` pauses the item"""
        row = self.db.get(RecurringRecord, recurring_id)
        if row is None:
            return None
        for name, value in changes.items():
            setattr(row, name, value)
        self.db.flush()
        return self._to_domain(row)

    def delete_recurring(self, recurring_id: str) -> bool:
        row = self.db.get(RecurringRecord, recurring_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.flush()
        return True

    @staticmethod
    def _to_domain(row: RecurringRecord) -> RecurringTransaction:
        return RecurringTransaction(
            id=row.id,
            type=row.type,
            description=row.description,
            amount=row.amount,
            category_id=row.category_id,
            person=row.person,
            card_id=row.card_id,
            day_of_month=row.day_of_month,
            is_active=row.is_active,
        )


class InvestmentRepository:
    """Repository for investments and their deposits/withdrawals"""

    def __init__(self, db: Session):
        self.db = db

    def create_investment(self, **fields: Any) -> Investment:
        row = InvestmentRecord(**fields)
        self.db.add(row)
        self.db.flush()
        return self._to_domain(row, [])

    def list_investments(self) -> List[Investment]:
        rows = self.db.query(InvestmentRecord).order_by(InvestmentRecord.created_at).all()
        movements: Dict[str, List[InvestmentMovement]] = {}
        for movement in self.db.query(InvestmentMovement).order_by(
            InvestmentMovement.date, InvestmentMovement.created_at
        ):
            movements.setdefault(movement.investment_id, []).append(movement)
        return [self._to_domain(row, movements.get(row.id, [])) for row in rows]

    def get_investment(self, investment_id: str) -> Optional[Investment]:
        row = self.db.get(InvestmentRecord, investment_id)
        return self._to_domain(row, self._movements_of(investment_id)) if row else None

    def update_investment(self, investment_id: str, changes: Dict[str, Any]) -> Optional[Investment]:
        row = self.db.get(InvestmentRecord, investment_id)
        if row is None:
            return None
        for name, value in changes.items():
            setattr(row, name, value)
        self.db.flush()
        return self._to_domain(row, self._movements_of(investment_id))

    def add_movement(self, investment_id: str, movement: InvestmentTransaction) -> Optional[Investment]:
        """Record a deposit or withdrawal; None when the investment does not exist"""
        if self.db.get(InvestmentRecord, investment_id) is None:
            return None
        self.db.add(
            InvestmentMovement(
                id=movement.id,
                investment_id=investment_id,
                type=movement.type,
                amount=movement.amount,
                date=movement.date,
            )
        )
        self.db.flush()
        return self.get_investment(investment_id)

    def delete_investment(self, investment_id: str) -> bool:
        """Delete an investment together with its movements"""
        row = self.db.get(InvestmentRecord, investment_id)
        if row is None:
            return False
        self.db.query(InvestmentMovement).filter(
            InvestmentMovement.investment_id == investment_id
        ).delete(synchronize_session=False)
        self.db.delete(row)
        self.db.flush()
        return True

    def _movements_of(self, investment_id: str) -> List[InvestmentMovement]:
        return (
            self.db.query(InvestmentMovement)
            .filter(InvestmentMovement.investment_id == investment_id)
            .order_by(InvestmentMovement.date, InvestmentMovement.created_at)
            .all()
        )

    @staticmethod
    def _to_domain(row: InvestmentRecord, movements: List[InvestmentMovement]) -> Investment:
        return Investment(
            id=row.id,
            name=row.name,
            icon=row.icon,
            color=row.color,
            goal=row.goal,
            transactions=[
                InvestmentTransaction(id=m.id, type=m.type, amount=m.amount, date=m.date)
                for m in movements
            ],
        )
