"""SQLAlchemy ORM models"""

import uuid
from sqlalchemy import Column, String, Boolean, Date, DateTime, Float, ForeignKey, Integer, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


def _uuid() -> str:
    return str(uuid.uuid4())


class UserCard(Base):
    """Registered credit card"""

    __tablename__ = "user_card"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(Text, nullable=False)
    color = Column(String(16), nullable=False, default="#22c55e")
    closing_day = Column(Integer, nullable=False)
    due_day = Column(Integer, nullable=False)
    best_purchase_day = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class LedgerTransaction(Base):
    """Expense or income row; installment rows share installment_group_id"""

    __tablename__ = "ledger_transaction"

    id = Column(String(36), primary_key=True, default=_uuid)
    type = Column(String(16), nullable=False)
    description = Column(Text, nullable=False)
    amount = Column(Float, nullable=False)
    category_id = Column(Text, nullable=False)
    date = Column(Date, nullable=False, index=True)
    person = Column(String(16), nullable=False, default="nos")
    # No foreign key: deleting a card leaves its transactions in place
    card_id = Column(String(36), nullable=True)
    is_installment = Column(Boolean, nullable=False, default=False)
    installment_current = Column(Integer, nullable=True)
    installment_total = Column(Integer, nullable=True)
    installment_group_id = Column(String(36), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class SalaryRecord(Base):
    """Monthly salary"""

    __tablename__ = "salary"

    id = Column(String(36), primary_key=True, default=_uuid)
    person = Column(String(16), nullable=False)
    description = Column(Text, nullable=False)
    amount = Column(Float, nullable=False)
    due_day = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class RecurringRecord(Base):
    """Bill or income repeating every month"""

    __tablename__ = "recurring_transaction"

    id = Column(String(36), primary_key=True, default=_uuid)
    type = Column(String(16), nullable=False)
    description = Column(Text, nullable=False)
    amount = Column(Float, nullable=False)
    category_id = Column(Text, nullable=False)
    person = Column(String(16), nullable=False, default="nos")
    card_id = Column(String(36), nullable=True)
    day_of_month = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class InvestmentRecord(Base):
    """Savings box with an optional goal"""

    __tablename__ = "investment"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(Text, nullable=False)
    icon = Column(String(16), nullable=False, default="💰")
    color = Column(String(16), nullable=False, default="#22c55e")
    goal = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class InvestmentMovement(Base):
    """Deposit or withdrawal of an investment"""

    __tablename__ = "investment_transaction"

    id = Column(String(36), primary_key=True, default=_uuid)
    investment_id = Column(String(36), ForeignKey("investment.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(16), nullable=False)
    amount = Column(Float, nullable=False)
    date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
