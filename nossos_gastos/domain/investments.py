"""Investment balances and goal progress"""

from datetime import date
from typing import Callable, Iterable

from nossos_gastos.domain.exceptions import ValidationError
from nossos_gastos.domain.installments import new_id
from nossos_gastos.domain.models import DEPOSIT, WITHDRAW, Investment, InvestmentTransaction


def new_movement(
    movement_type: str,
    amount: float,
    on: date | None = None,
    id_factory: Callable[[], str] = new_id,
) -> InvestmentTransaction:
    """
    Build a deposit or withdrawal dated `on` (today by default).

    Withdrawals are not limited by the current balance, so a balance may go
    negative.

    Raises:
        ValidationError: Unknown movement type or non-positive amount
    """
    if movement_type not in (DEPOSIT, WITHDRAW):
        raise ValidationError(f"Unknown movement type: {movement_type!r}")
    if amount is None or amount <= 0:
        raise ValidationError("Amount must be greater than zero")

    return InvestmentTransaction(
        id=id_factory(),
        type=movement_type,
        amount=amount,
        date=on or date.today(),
    )


def investment_balance(investment: Investment) -> float:
    """Deposits minus withdrawals"""
    return sum(
        t.amount if t.type == DEPOSIT else -t.amount
        for t in investment.transactions
    )


def goal_progress(investment: Investment) -> float:
    """Percent of the goal reached, between 0 and 100; 0 without a goal"""
    if not investment.goal:
        return 0.0
    progress = investment_balance(investment) / investment.goal * 100
    return min(max(progress, 0.0), 100.0)


def portfolio_total(investments: Iterable[Investment]) -> float:
    return sum(investment_balance(inv) for inv in investments)
