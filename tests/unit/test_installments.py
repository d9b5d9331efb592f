"""Unit tests for installment schedule generation"""

import pytest
from dataclasses import replace
from datetime import date
from nossos_gastos.domain.exceptions import ValidationError
from nossos_gastos.domain.installments import (
    build_transaction,
    edit_transaction,
    generate_installments,
    quote_installments,
    split_amount,
)
from nossos_gastos.domain.models import Card, TransactionDraft


def test_generate_installments_count_and_group(draft: TransactionDraft):
    """All rows share one group id and positions cover 1..n"""
    installments = generate_installments(draft, 10)

    assert len(installments) == 10
    assert len({t.installment_group_id for t in installments}) == 1
    assert {t.installment_current for t in installments} == set(range(1, 11))
    assert all(t.installment_total == 10 for t in installments)
    assert all(t.is_installment for t in installments)
    assert len({t.id for t in installments}) == 10


def test_generate_installments_copies_draft_fields(draft: TransactionDraft):
    installments = generate_installments(draft, 3)

    for txn in installments:
        assert txn.description == "Geladeira"
        assert txn.category_id == "3"
        assert txn.person == "nos"
        assert txn.card_id == "card-nubank"
        assert txn.type == "expense"


def test_generate_installments_equal_split(draft: TransactionDraft):
    installments = generate_installments(draft, 4)

    assert all(t.amount == 300.0 for t in installments)
    assert sum(t.amount for t in installments) == 1200.0


def test_generate_installments_split_is_not_reconciled():
    """Float division: every part is amount / n and the sum only approximates the total"""
    draft = TransactionDraft("expense", "Curso", 100.0, "5", date(2024, 3, 10))
    installments = generate_installments(draft, 3)

    assert all(t.amount == 100.0 / 3 for t in installments)
    assert sum(t.amount for t in installments) == pytest.approx(100.0)


def test_generate_installments_reconciled_rounding():
    """Last installment absorbs the cents remainder"""
    draft = TransactionDraft("expense", "Curso", 100.0, "5", date(2024, 3, 10))
    installments = generate_installments(draft, 3, reconcile_rounding=True)

    assert [t.amount for t in installments] == [33.33, 33.33, 33.34]
    assert round(sum(t.amount for t in installments), 2) == 100.0


def test_generate_installments_dates_without_card():
    """No card: installment i is i months after the purchase, clamped"""
    draft = TransactionDraft("expense", "Celular", 900.0, "7", date(2024, 1, 31))
    installments = generate_installments(draft, 3)

    assert [t.date for t in installments] == [date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 31)]


def test_generate_installments_dates_follow_card_statements(draft: TransactionDraft, nubank: Card):
    late_purchase = replace(draft, purchase_date=date(2024, 12, 27))
    installments = generate_installments(late_purchase, 3, card=nubank)

    assert [t.date for t in installments] == [date(2025, 2, 5), date(2025, 3, 5), date(2025, 4, 5)]


def test_generate_installments_dates_are_non_decreasing(draft: TransactionDraft, nubank: Card):
    installments = generate_installments(draft, 24, card=nubank)
    dates = [t.date for t in sorted(installments, key=lambda t: t.installment_current)]
    assert dates == sorted(dates)


def test_generate_installments_explicit_dates_used_verbatim(draft: TransactionDraft, nubank: Card):
    explicit = [date(2025, 1, 10), date(2025, 2, 10)]
    installments = generate_installments(draft, 2, card=nubank, explicit_dates=explicit)

    assert [t.date for t in installments] == explicit


def test_generate_installments_explicit_dates_wrong_length(draft: TransactionDraft):
    with pytest.raises(ValidationError):
        generate_installments(draft, 3, explicit_dates=[date(2025, 1, 10)])


def test_generate_installments_explicit_dates_going_backwards(draft: TransactionDraft):
    with pytest.raises(ValidationError):
        generate_installments(draft, 2, explicit_dates=[date(2025, 2, 10), date(2025, 1, 10)])


def test_generate_installments_with_interest(draft: TransactionDraft):
    installments = generate_installments(draft, 10, installment_amount=132.5)
    assert all(t.amount == 132.5 for t in installments)


def test_generate_installments_requires_two_parts(draft: TransactionDraft):
    with pytest.raises(ValidationError):
        generate_installments(draft, 1)
    with pytest.raises(ValidationError):
        generate_installments(draft, 0)


def test_generate_installments_respects_maximum(draft: TransactionDraft):
    with pytest.raises(ValidationError):
        generate_installments(draft, 49)
    assert len(generate_installments(draft, 48)) == 48


@pytest.mark.parametrize(
    "changes",
    [
        {"description": ""},
        {"description": "   "},
        {"amount": None},
        {"amount": 0},
        {"category_id": ""},
        {"type": "transfer"},
        {"person": "everyone"},
    ],
)
def test_generate_installments_rejects_incomplete_draft(draft: TransactionDraft, changes):
    with pytest.raises(ValidationError):
        generate_installments(replace(draft, **changes), 3)


def test_quote_installments_with_interest():
    quote = quote_installments(1200.0, 10, installment_amount=132.5)

    assert quote.total_paid == 1325.0
    assert quote.interest == 125.0


def test_quote_installments_discount_reported_as_negative():
    quote = quote_installments(1200.0, 10, installment_amount=100.0)
    assert quote.interest == -200.0


def test_quote_installments_without_override():
    quote = quote_installments(1200.0, 4)

    assert quote.installment_amount == 300.0
    assert quote.total_paid == 1200.0
    assert quote.interest == 0.0


def test_split_amount_plain_division():
    assert split_amount(10.0, 4) == [2.5, 2.5, 2.5, 2.5]


def test_build_transaction_on_card_uses_statement_date(draft: TransactionDraft, nubank: Card):
    txn = build_transaction(replace(draft, purchase_date=date(2024, 12, 27)), nubank)

    assert txn.date == date(2025, 2, 5)
    assert txn.amount == 1200.0
    assert txn.is_installment is False
    assert txn.installment_group_id is None


def test_build_transaction_without_card_keeps_purchase_date(draft: TransactionDraft):
    txn = build_transaction(replace(draft, card_id=None))
    assert txn.date == date(2024, 12, 7)


def test_build_transaction_validates(draft: TransactionDraft):
    with pytest.raises(ValidationError):
        build_transaction(replace(draft, description=""))


def test_edit_transaction_lump_sum_any_field(draft: TransactionDraft):
    txn = build_transaction(replace(draft, card_id=None))

    edited = edit_transaction(txn, {"amount": 999.0, "date": date(2025, 1, 3), "card_id": "pix"})

    assert edited.amount == 999.0
    assert edited.date == date(2025, 1, 3)
    assert edited.card_id == "pix"
    assert edited.id == txn.id
    assert txn.amount == 1200.0


def test_edit_transaction_installment_descriptive_fields(draft: TransactionDraft):
    first = generate_installments(draft, 3)[0]

    edited = edit_transaction(first, {"description": "Geladeira Inox", "amount": 410.0})

    assert edited.description == "Geladeira Inox"
    assert edited.amount == 410.0
    assert edited.installment_group_id == first.installment_group_id
    assert edited.installment_current == 1


@pytest.mark.parametrize("changes", [{"date": date(2025, 6, 1)}, {"card_id": None}, {"type": "income"}])
def test_edit_transaction_installment_locked_fields(draft: TransactionDraft, changes):
    first = generate_installments(draft, 3)[0]

    with pytest.raises(ValidationError):
        edit_transaction(first, changes)


@pytest.mark.parametrize("changes", [{"amount": 0}, {"description": " "}, {"person": "vizinho"}])
def test_edit_transaction_validates_result(draft: TransactionDraft, changes):
    txn = build_transaction(draft)

    with pytest.raises(ValidationError):
        edit_transaction(txn, changes)
