"""Credit card billing cycle resolution"""

from datetime import date
from typing import List, Optional

from nossos_gastos.domain.models import BillingInfo, Card, CardSchedule
from nossos_gastos.utils.date_utils import clamp_day, shift_month


def resolve_billing(purchase_date: date, card: Optional[Card]) -> Optional[BillingInfo]:
    """
    Map a purchase to the statement it will be charged on.

    Rules:
    - The due date is always in a later month than the purchase: base case is
      the month right after the purchase month
    - A purchase after the closing day misses this cycle and moves one more
      month forward; a purchase on the closing day itself stays in the sooner
      cycle
    - The due date is the card's due day in that month, clamped to month end

    Returns None when there is no card (cash, debit, pix).

    Example:
        closing 26, due 5: 2024-12-07 -> 2025-01-05, 2024-12-27 -> 2025-02-05
    """
    if card is None:
        return None

    purchase_day = purchase_date.day
    goes_to_next_month = purchase_day > card.closing_day

    months_ahead = 2 if goes_to_next_month else 1
    billing_year, billing_month = shift_month(purchase_date.year, purchase_date.month, months_ahead)
    billing_date = clamp_day(billing_year, billing_month, card.due_day)

    if card.best_purchase_day is not None:
        is_best_day = purchase_day >= card.best_purchase_day
    else:
        is_best_day = goes_to_next_month

    return BillingInfo(
        billing_month=billing_month,
        billing_year=billing_year,
        billing_date=billing_date,
        is_best_day=is_best_day,
        goes_to_next_month=goes_to_next_month,
    )


def installment_due_dates(purchase_date: date, card: Card, num_installments: int) -> List[date]:
    """
    Due dates of each installment of a card purchase.

    The first one is the resolved billing date; each following installment is
    due one month later on the card's due day. Months are counted from the
    billing month, so a due day clamped in February is back to the 31st in
    March.
    """
    billing = resolve_billing(purchase_date, card)
    return [
        clamp_day(*shift_month(billing.billing_year, billing.billing_month, i), card.due_day)
        for i in range(num_installments)
    ]


def statement_date(purchase_date: date, card: Optional[Card]) -> date:
    """Date stored on a lump-sum transaction: billing date on a card, else the purchase date"""
    billing = resolve_billing(purchase_date, card)
    return billing.billing_date if billing else purchase_date


def card_schedule(card: Card, today: date | None = None) -> CardSchedule:
    """Next closing and due dates of a card as seen from `today`"""
    if today is None:
        today = date.today()

    # Closing already reached this month (clamped, so day 31 closes on Feb 28)
    this_closing = clamp_day(today.year, today.month, card.closing_day)
    closing_offset = 1 if today >= this_closing else 0
    next_closing = clamp_day(*shift_month(today.year, today.month, closing_offset), card.closing_day)

    next_due = clamp_day(today.year, today.month, card.due_day)
    if next_due < today:
        next_due = clamp_day(*shift_month(today.year, today.month, 1), card.due_day)

    return CardSchedule(
        card_id=card.id,
        next_closing_date=next_closing,
        next_due_date=next_due,
        days_until_closing=(next_closing - today).days,
        days_until_due=(next_due - today).days,
    )
