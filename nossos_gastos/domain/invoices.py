"""Upcoming credit card statements grouped by month and card"""

from datetime import date
from typing import Dict, Iterable, List, Optional

from nossos_gastos.domain.models import EXPENSE, Card, CardInvoice, InvoiceItem, MonthlyInvoice, Transaction
from nossos_gastos.utils.date_utils import (
    month_key_of,
    month_label,
    parse_month_key,
    upcoming_month_keys,
)

INVOICE_HORIZON_MONTHS = 6


def aggregate_invoices(
    transactions: Iterable[Transaction],
    cards: Iterable[Card],
    today_month: Optional[str] = None,
    horizon: int = INVOICE_HORIZON_MONTHS,
) -> List[MonthlyInvoice]:
    """
    Build the statements of `today_month` and the following months.

    Only expenses on a registered card count. A transaction's `date` is
    already its statement date, so its month key picks the bucket directly.
    Transactions on deleted cards or outside the window are skipped.

    Returns exactly `horizon` months in chronological order, each with its
    cards sorted by total (largest first).
    """
    if today_month is None:
        today_month = month_key_of(date.today())

    start_year, start_month = parse_month_key(today_month)
    cards_by_id = {card.id: card for card in cards}

    invoices: Dict[str, MonthlyInvoice] = {}
    for key in upcoming_month_keys(start_year, start_month, horizon):
        year, month = parse_month_key(key)
        invoices[key] = MonthlyInvoice(month_key=key, year=year, month=month, label=month_label(year, month))

    for txn in transactions:
        if txn.type != EXPENSE or txn.card_id not in cards_by_id:
            continue

        invoice = invoices.get(month_key_of(txn.date))
        if invoice is None:
            continue

        card_invoice = _card_entry(invoice, cards_by_id[txn.card_id])
        item = InvoiceItem(
            transaction_id=txn.id,
            description=txn.description,
            amount=txn.amount,
            date=txn.date,
            is_installment=txn.is_installment,
            installment_current=txn.installment_current,
            installment_total=txn.installment_total,
        )
        if txn.is_installment:
            card_invoice.installments.append(item)
        else:
            card_invoice.a_vista.append(item)
        card_invoice.total += txn.amount
        invoice.total += txn.amount

    result = list(invoices.values())
    for invoice in result:
        for card_invoice in invoice.cards:
            card_invoice.installments.sort(key=lambda i: i.date)
            card_invoice.a_vista.sort(key=lambda i: i.date)
        invoice.cards.sort(key=lambda c: c.total, reverse=True)

    return result


def _card_entry(invoice: MonthlyInvoice, card: Card) -> CardInvoice:
    for card_invoice in invoice.cards:
        if card_invoice.card_id == card.id:
            return card_invoice

    card_invoice = CardInvoice(card_id=card.id, card_name=card.name, card_color=card.color)
    invoice.cards.append(card_invoice)
    return card_invoice


def invoices_total(invoices: Iterable[MonthlyInvoice]) -> float:
    """Grand total across a statement horizon"""
    return sum(invoice.total for invoice in invoices)
