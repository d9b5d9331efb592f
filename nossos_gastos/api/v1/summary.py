"""GET /v1/summary - monthly totals and projected balance"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from nossos_gastos.api.v1.schemas import SummaryResponse, TransactionSchema
from nossos_gastos.api.dependencies import (
    get_recurring_repository,
    get_salary_repository,
    get_transaction_repository,
)
from nossos_gastos.infrastructure.database.repositories import (
    RecurringRepository,
    SalaryRepository,
    TransactionRepository,
)
from nossos_gastos.domain.exceptions import InvalidDateError
from nossos_gastos.domain.summary import calculate_summary, project_month
from nossos_gastos.utils.date_utils import month_key, month_key_of, parse_month_key, shift_month

router = APIRouter()


@router.get("/summary", response_model=SummaryResponse)
def get_summary(
    month: Optional[str] = Query(None, description="Month (YYYY-MM), defaults to current"),
    ledger: TransactionRepository = Depends(get_transaction_repository),
    salaries: SalaryRepository = Depends(get_salary_repository),
    recurring: RecurringRepository = Depends(get_recurring_repository),
):
    """Ledger totals of a month, next month's installments and the projected balance"""
    if month is None:
        month = month_key_of(date.today())
    try:
        next_month = month_key(*shift_month(*parse_month_key(month), 1))
    except InvalidDateError as e:
        raise HTTPException(status_code=422, detail=str(e))

    transactions = ledger.list_transactions()
    summary = calculate_summary(transactions, month, next_month)
    projection = project_month(transactions, month, recurring.list_recurring(), salaries.list_salaries())

    return SummaryResponse(
        month=month,
        total_income=summary.total_income,
        total_expenses=summary.total_expenses,
        balance=summary.balance,
        recurring_income=projection.recurring_income,
        recurring_expenses=projection.recurring_expenses,
        salary_income=projection.salary_income,
        projected_balance=projection.projected_balance,
        upcoming_installments=[TransactionSchema.model_validate(t) for t in summary.upcoming_installments],
    )
