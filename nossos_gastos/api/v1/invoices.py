"""GET /v1/invoices - upcoming card statements"""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from nossos_gastos.api.v1.schemas import InvoicesResponse, MonthlyInvoiceSchema
from nossos_gastos.api.dependencies import get_card_repository, get_transaction_repository
from nossos_gastos.config import settings
from nossos_gastos.infrastructure.database.repositories import CardRepository, TransactionRepository
from nossos_gastos.domain.exceptions import InvalidDateError
from nossos_gastos.domain.invoices import aggregate_invoices, invoices_total

router = APIRouter()


@router.get("/invoices", response_model=InvoicesResponse)
def get_invoices(
    month: Optional[str] = Query(None, description="First month of the horizon (YYYY-MM), defaults to current"),
    cards: CardRepository = Depends(get_card_repository),
    ledger: TransactionRepository = Depends(get_transaction_repository),
):
    """
    Card statements for the current month and the following ones.

    Returns:
        One entry per month (6 by default), each split by card into
        installment and à vista items
    """
    try:
        invoices = aggregate_invoices(
            ledger.list_transactions(),
            cards.list_cards(),
            today_month=month,
            horizon=settings.invoice_horizon_months,
        )
    except InvalidDateError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return InvoicesResponse(
        total=invoices_total(invoices),
        months=[MonthlyInvoiceSchema.model_validate(invoice) for invoice in invoices],
    )
