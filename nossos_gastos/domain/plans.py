"""Rebuild installment plans from a flat transaction list"""

from datetime import date
from typing import Dict, Iterable, List

from nossos_gastos.domain.models import InstallmentPlan, Transaction


def group_installments(transactions: Iterable[Transaction], today: date | None = None) -> List[InstallmentPlan]:
    """
    Group installment rows by group id into progress-tracked plans.

    - Installments dated on or before `today` count as paid
    - The next due installment is the first one dated after `today`
    - Plans are ordered by next due date; fully paid plans go last

    The displayed total comes from the rows' own `installment_total`, so a
    group with missing rows still reads "N of M".
    """
    if today is None:
        today = date.today()

    buckets: Dict[str, List[Transaction]] = {}
    for txn in transactions:
        if txn.is_installment and txn.installment_group_id:
            buckets.setdefault(txn.installment_group_id, []).append(txn)

    plans = []
    for group_id, items in buckets.items():
        installments = sorted(items, key=lambda t: t.date)
        first = installments[0]
        upcoming = [t for t in installments if t.date > today]

        plans.append(
            InstallmentPlan(
                group_id=group_id,
                description=first.description,
                category_id=first.category_id,
                card_id=first.card_id,
                per_installment_amount=first.amount,
                total=first.installment_total or len(installments),
                paid_count=len(installments) - len(upcoming),
                installments=installments,
                next_due_installment=upcoming[0] if upcoming else None,
            )
        )

    plans.sort(
        key=lambda p: (
            p.next_due_installment is None,
            p.next_due_installment.date if p.next_due_installment else date.max,
        )
    )
    return plans


def delete_group(transactions: Iterable[Transaction], group_id: str) -> List[Transaction]:
    """Every transaction except the rows of `group_id`"""
    return [t for t in transactions if t.installment_group_id != group_id]
