"""Monthly totals and balance projection"""

from typing import Iterable, List, Tuple

from nossos_gastos.domain.models import (
    EXPENSE,
    INCOME,
    FinancialSummary,
    MonthProjection,
    RecurringTransaction,
    Salary,
    Transaction,
)
from nossos_gastos.utils.date_utils import month_key_of


def _in_month(transactions: Iterable[Transaction], month: str) -> List[Transaction]:
    return [t for t in transactions if month_key_of(t.date) == month]


def calculate_summary(transactions: List[Transaction], current_month: str, next_month: str) -> FinancialSummary:
    """Income, expenses and balance of `current_month`, plus installments due in `next_month`"""
    month_transactions = _in_month(transactions, current_month)

    total_income = sum(t.amount for t in month_transactions if t.type == INCOME)
    total_expenses = sum(t.amount for t in month_transactions if t.type == EXPENSE)

    upcoming_installments = [
        t for t in _in_month(transactions, next_month)
        if t.is_installment and t.type == EXPENSE
    ]

    return FinancialSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        balance=total_income - total_expenses,
        upcoming_installments=upcoming_installments,
    )


def recurring_totals(recurring: Iterable[RecurringTransaction]) -> Tuple[float, float]:
    """(income, expenses) of the active recurring items; they repeat every month"""
    active = [r for r in recurring if r.is_active]
    income = sum(r.amount for r in active if r.type == INCOME)
    expenses = sum(r.amount for r in active if r.type == EXPENSE)
    return income, expenses


def salary_total(salaries: Iterable[Salary]) -> float:
    return sum(s.amount for s in salaries if s.is_active)


def project_month(
    transactions: List[Transaction],
    month: str,
    recurring: Iterable[RecurringTransaction] = (),
    salaries: Iterable[Salary] = (),
) -> MonthProjection:
    """
    Expected balance of a month.

    Ledger rows dated in the month are combined with every active recurring
    bill/income and every active salary.
    """
    month_transactions = _in_month(transactions, month)
    recurring_income, recurring_expenses = recurring_totals(recurring)

    return MonthProjection(
        month_key=month,
        ledger_income=sum(t.amount for t in month_transactions if t.type == INCOME),
        ledger_expenses=sum(t.amount for t in month_transactions if t.type == EXPENSE),
        recurring_income=recurring_income,
        recurring_expenses=recurring_expenses,
        salary_income=salary_total(salaries),
    )
