"""Installment schedule generation for parceled purchases"""

import uuid
from dataclasses import asdict, replace
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Sequence

from nossos_gastos.domain.billing import installment_due_dates, statement_date
from nossos_gastos.domain.exceptions import ValidationError
from nossos_gastos.domain.models import PERSONS, TRANSACTION_TYPES, Card, InterestBreakdown, Transaction, TransactionDraft
from nossos_gastos.utils.date_utils import add_months

MIN_INSTALLMENTS = 2
MAX_INSTALLMENTS = 48

EDITABLE_FIELDS = ("type", "description", "amount", "category_id", "date", "person", "card_id")
INSTALLMENT_EDITABLE_FIELDS = ("description", "amount", "category_id", "person")


def new_id() -> str:
    return str(uuid.uuid4())


def validate_draft(base: TransactionDraft) -> None:
    """Reject drafts missing description, amount or category"""
    if base.type not in TRANSACTION_TYPES:
        raise ValidationError(f"Unknown transaction type: {base.type!r}")
    if base.person not in PERSONS:
        raise ValidationError(f"Unknown person: {base.person!r}")
    if not base.description or not base.description.strip():
        raise ValidationError("Description is required")
    if base.amount is None or base.amount <= 0:
        raise ValidationError("Amount must be greater than zero")
    if not base.category_id:
        raise ValidationError("Category is required")


def validate_installment_count(num_installments: int, max_installments: int = MAX_INSTALLMENTS) -> None:
    if num_installments < MIN_INSTALLMENTS:
        raise ValidationError(f"Installment purchases need at least {MIN_INSTALLMENTS} parts")
    if num_installments > max_installments:
        raise ValidationError(f"At most {max_installments} installments are allowed")


def split_amount(amount: float, num_installments: int, reconcile_rounding: bool = False) -> List[float]:
    """
    Split an at-sight amount into equal installments.

    Default is plain float division, so the parts may not add back to the
    exact amount. With `reconcile_rounding` the split is done in cents and
    the last installment absorbs the remainder:
        100.00 / 3 -> [33.33, 33.33, 33.34]
    """
    if not reconcile_rounding:
        return [amount / num_installments] * num_installments

    amount_cents = round(amount * 100)
    base_cents = amount_cents // num_installments
    remainder = amount_cents % num_installments

    amounts = []
    for i in range(num_installments):
        cents = base_cents + (remainder if i == num_installments - 1 else 0)
        amounts.append(cents / 100)
    return amounts


def quote_installments(
    amount: float,
    num_installments: int,
    installment_amount: Optional[float] = None,
) -> InterestBreakdown:
    """
    Total paid and implied interest of an installment purchase.

    Interest is the flat difference between what is paid over all
    installments and the at-sight price. A per-installment amount below the
    equal split yields negative interest (a discount), reported as is.
    """
    if installment_amount is None:
        installment_amount = amount / num_installments
        total_paid = amount
    else:
        total_paid = installment_amount * num_installments

    return InterestBreakdown(
        at_sight_amount=amount,
        installment_amount=installment_amount,
        num_installments=num_installments,
        total_paid=total_paid,
        interest=total_paid - amount,
    )


def _schedule_dates(
    base: TransactionDraft,
    num_installments: int,
    card: Optional[Card],
    explicit_dates: Optional[Sequence[date]],
) -> List[date]:
    if explicit_dates is not None:
        dates = list(explicit_dates)
        if len(dates) != num_installments:
            raise ValidationError(f"Expected {num_installments} installment dates, got {len(dates)}")
        if any(later < earlier for earlier, later in zip(dates, dates[1:])):
            raise ValidationError("Installment dates must not go backwards")
        return dates

    if card is not None:
        return installment_due_dates(base.purchase_date, card, num_installments)

    return [add_months(base.purchase_date, i) for i in range(num_installments)]


def generate_installments(
    base: TransactionDraft,
    num_installments: int,
    card: Optional[Card] = None,
    explicit_dates: Optional[Sequence[date]] = None,
    installment_amount: Optional[float] = None,
    reconcile_rounding: bool = False,
    max_installments: int = MAX_INSTALLMENTS,
    id_factory: Callable[[], str] = new_id,
) -> List[Transaction]:
    """
    Generate the transactions of a parceled purchase.

    Dates:
    - `explicit_dates` are used verbatim when given
    - with a card, the first installment is due on the resolved billing date
      and each following one a month later on the card's due day
    - otherwise installment i falls i months after the purchase date

    Amounts:
    - `installment_amount` (purchase with interest) is used for every row
    - otherwise the amount is divided equally (see `split_amount`)

    All rows share one group id and carry their 1-based position.

    Raises:
        ValidationError: Missing purchase data, bad installment count or bad
            explicit dates. Nothing is generated in that case.
    """
    validate_draft(base)
    validate_installment_count(num_installments, max_installments)
    if installment_amount is not None and installment_amount <= 0:
        raise ValidationError("Installment amount must be greater than zero")

    dates = _schedule_dates(base, num_installments, card, explicit_dates)
    if installment_amount is not None:
        amounts = [installment_amount] * num_installments
    else:
        amounts = split_amount(base.amount, num_installments, reconcile_rounding)

    group_id = id_factory()
    return [
        Transaction(
            id=id_factory(),
            type=base.type,
            description=base.description,
            amount=amounts[i],
            category_id=base.category_id,
            date=dates[i],
            person=base.person,
            card_id=base.card_id,
            is_installment=True,
            installment_current=i + 1,
            installment_total=num_installments,
            installment_group_id=group_id,
        )
        for i in range(num_installments)
    ]


def edit_transaction(txn: Transaction, changes: Dict[str, Any]) -> Transaction:
    """
    Apply a partial edit to a stored transaction.

    Lump-sum rows accept every field in EDITABLE_FIELDS. Installment rows
    keep their type, date and card so the plan and its statements stay
    consistent. The edited row goes through the same checks as a new draft.

    Raises:
        ValidationError: Field not editable on this row, or invalid result
    """
    allowed = INSTALLMENT_EDITABLE_FIELDS if txn.is_installment else EDITABLE_FIELDS
    locked = sorted(set(changes) - set(allowed))
    if locked:
        raise ValidationError(f"Cannot edit {', '.join(locked)} on this transaction")

    updated = replace(txn, **changes)
    validate_draft(
        TransactionDraft(
            type=updated.type,
            description=updated.description,
            amount=updated.amount,
            category_id=updated.category_id,
            purchase_date=updated.date,
            person=updated.person,
            card_id=updated.card_id,
        )
    )
    return updated


def build_transaction(
    base: TransactionDraft,
    card: Optional[Card] = None,
    id_factory: Callable[[], str] = new_id,
) -> Transaction:
    """Lump-sum ("à vista") transaction dated on the statement it is charged to"""
    validate_draft(base)

    fields = asdict(base)
    fields.pop("purchase_date")
    return Transaction(
        id=id_factory(),
        date=statement_date(base.purchase_date, card),
        **fields,
    )
