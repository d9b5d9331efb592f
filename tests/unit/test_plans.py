"""Unit tests for installment plan grouping and group deletion"""

from datetime import date
from nossos_gastos.domain.installments import generate_installments
from nossos_gastos.domain.models import TransactionDraft
from nossos_gastos.domain.plans import delete_group, group_installments


def test_group_installments_progress(transaction_factory):
    rows = [
        transaction_factory("a1", date(2025, 1, 5), group_id="a", current=1, total=3),
        transaction_factory("a2", date(2025, 2, 5), group_id="a", current=2, total=3),
        transaction_factory("a3", date(2025, 3, 5), group_id="a", current=3, total=3),
    ]

    [plan] = group_installments(rows, today=date(2025, 2, 5))

    assert plan.paid_count == 2  # installment due today counts as paid
    assert plan.total == 3
    assert plan.next_due_installment.id == "a3"
    assert plan.remaining_count == 1
    assert plan.remaining_amount == 100.0
    assert plan.total_amount == 300.0


def test_group_installments_sorts_rows_by_date(transaction_factory):
    rows = [
        transaction_factory("a3", date(2025, 3, 5), group_id="a", current=3, total=3),
        transaction_factory("a1", date(2025, 1, 5), group_id="a", current=1, total=3),
        transaction_factory("a2", date(2025, 2, 5), group_id="a", current=2, total=3),
    ]

    [plan] = group_installments(rows, today=date(2024, 12, 1))

    assert [t.id for t in plan.installments] == ["a1", "a2", "a3"]
    assert plan.paid_count == 0
    assert plan.next_due_installment.id == "a1"


def test_group_installments_ignores_lump_sum_rows(transaction_factory):
    rows = [
        transaction_factory("x", date(2025, 1, 5)),
        transaction_factory("a1", date(2025, 1, 5), group_id="a", current=1, total=2),
        transaction_factory("a2", date(2025, 2, 5), group_id="a", current=2, total=2),
    ]

    plans = group_installments(rows, today=date(2025, 1, 1))

    assert [p.group_id for p in plans] == ["a"]


def test_group_installments_orders_by_next_due_with_paid_last(transaction_factory):
    rows = [
        # Fully paid
        transaction_factory("p1", date(2024, 10, 5), group_id="paid", current=1, total=2),
        transaction_factory("p2", date(2024, 11, 5), group_id="paid", current=2, total=2),
        # Next due in April
        transaction_factory("l1", date(2025, 3, 5), group_id="later", current=1, total=2),
        transaction_factory("l2", date(2025, 4, 5), group_id="later", current=2, total=2),
        # Next due in February
        transaction_factory("s1", date(2025, 2, 10), group_id="sooner", current=1, total=2),
        transaction_factory("s2", date(2025, 3, 10), group_id="sooner", current=2, total=2),
    ]

    plans = group_installments(rows, today=date(2025, 3, 5))

    assert [p.group_id for p in plans] == ["sooner", "later", "paid"]
    assert plans[-1].next_due_installment is None
    assert plans[-1].paid_count == 2


def test_group_installments_tolerates_missing_rows(transaction_factory):
    """A broken group still reports its members' own total"""
    rows = [
        transaction_factory("a1", date(2025, 1, 5), group_id="a", current=1, total=4),
        transaction_factory("a3", date(2025, 3, 5), group_id="a", current=3, total=4),
    ]

    [plan] = group_installments(rows, today=date(2025, 2, 1))

    assert plan.total == 4
    assert plan.paid_count == 1
    assert len(plan.installments) == 2


def test_group_installments_from_generated_plan():
    draft = TransactionDraft("expense", "Sofá", 3000.0, "3", date(2025, 1, 15))
    rows = generate_installments(draft, 6)

    [plan] = group_installments(rows, today=date(2025, 3, 20))

    assert plan.per_installment_amount == 500.0
    assert plan.paid_count == 3
    assert plan.next_due_installment.installment_current == 4


def test_group_installments_empty():
    assert group_installments([], today=date(2025, 1, 1)) == []


def test_delete_group_removes_every_row(transaction_factory):
    draft = TransactionDraft("expense", "TV", 2400.0, "7", date(2025, 1, 15))
    group = generate_installments(draft, 12)
    other = generate_installments(draft, 3)
    lump = transaction_factory("lump", date(2025, 1, 15))
    group_id = group[0].installment_group_id

    remaining = delete_group(group + other + [lump], group_id)

    assert not any(t.installment_group_id == group_id for t in remaining)
    assert len(remaining) == 4
    assert lump in remaining


def test_delete_group_unknown_id_keeps_everything(transaction_factory):
    rows = [transaction_factory("a1", date(2025, 1, 5), group_id="a", current=1, total=1)]
    assert delete_group(rows, "missing") == rows
