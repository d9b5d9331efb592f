"""Unit tests for billing cycle resolution"""

import pytest
from datetime import date
from nossos_gastos.domain.billing import card_schedule, installment_due_dates, resolve_billing, statement_date
from nossos_gastos.domain.exceptions import InvalidDateError
from nossos_gastos.domain.models import Card


def test_purchase_before_closing_due_next_month(nubank: Card):
    billing = resolve_billing(date(2024, 12, 7), nubank)

    assert billing.billing_date == date(2025, 1, 5)
    assert (billing.billing_year, billing.billing_month) == (2025, 1)
    assert billing.goes_to_next_month is False


def test_purchase_on_closing_day_stays_in_sooner_cycle(nubank: Card):
    billing = resolve_billing(date(2024, 12, 26), nubank)

    assert billing.billing_date == date(2025, 1, 5)
    assert billing.goes_to_next_month is False


def test_purchase_after_closing_moves_one_more_month(nubank: Card):
    billing = resolve_billing(date(2024, 12, 27), nubank)

    assert billing.billing_date == date(2025, 2, 5)
    assert (billing.billing_year, billing.billing_month) == (2025, 2)
    assert billing.goes_to_next_month is True


def test_due_date_never_in_purchase_month():
    """Even with due day after the purchase day, payment is next month"""
    card = Card(id="c", name="C", color="#000000", closing_day=10, due_day=20)
    billing = resolve_billing(date(2024, 5, 2), card)
    assert billing.billing_date == date(2024, 6, 20)


def test_due_day_clamped_to_short_month():
    card = Card(id="c", name="C", color="#000000", closing_day=20, due_day=31)
    billing = resolve_billing(date(2024, 1, 10), card)
    assert billing.billing_date == date(2024, 2, 29)


def test_best_day_with_configured_best_purchase_day(inter: Card):
    assert resolve_billing(date(2024, 12, 27), inter).is_best_day is True
    assert resolve_billing(date(2024, 12, 20), inter).is_best_day is False


def test_best_day_falls_back_to_closing_day(nubank: Card):
    assert resolve_billing(date(2024, 12, 27), nubank).is_best_day is True
    assert resolve_billing(date(2024, 12, 26), nubank).is_best_day is False


def test_no_card_means_no_billing():
    assert resolve_billing(date(2024, 12, 7), None) is None


def test_statement_date_uses_billing_date_only_with_card(nubank: Card):
    assert statement_date(date(2024, 12, 27), nubank) == date(2025, 2, 5)
    assert statement_date(date(2024, 12, 27), None) == date(2024, 12, 27)


def test_installment_due_dates_monthly_from_billing_date(nubank: Card):
    dates = installment_due_dates(date(2024, 12, 27), nubank, 3)
    assert dates == [date(2025, 2, 5), date(2025, 3, 5), date(2025, 4, 5)]


def test_installment_due_dates_recover_after_clamped_month():
    card = Card(id="c", name="C", color="#000000", closing_day=25, due_day=31)
    dates = installment_due_dates(date(2024, 1, 10), card, 3)
    assert dates == [date(2024, 2, 29), date(2024, 3, 31), date(2024, 4, 30)]


def test_card_day_out_of_range_rejected():
    with pytest.raises(InvalidDateError):
        Card(id="c", name="C", color="#000000", closing_day=0, due_day=5)
    with pytest.raises(InvalidDateError):
        Card(id="c", name="C", color="#000000", closing_day=10, due_day=32)


def test_card_schedule_before_closing(nubank: Card):
    schedule = card_schedule(nubank, today=date(2024, 12, 10))

    assert schedule.next_closing_date == date(2024, 12, 26)
    assert schedule.next_due_date == date(2025, 1, 5)
    assert schedule.days_until_closing == 16
    assert schedule.days_until_due == 26


def test_card_schedule_due_today_counts_as_zero_days(nubank: Card):
    schedule = card_schedule(nubank, today=date(2024, 12, 5))

    assert schedule.next_due_date == date(2024, 12, 5)
    assert schedule.days_until_due == 0


def test_card_schedule_after_closing(nubank: Card):
    schedule = card_schedule(nubank, today=date(2024, 12, 26))

    assert schedule.next_closing_date == date(2025, 1, 26)
    assert schedule.next_due_date == date(2025, 1, 5)
    assert schedule.days_until_closing == 31
    assert schedule.days_until_due == 10


@pytest.mark.parametrize(
    "today, expected_closing",
    [
        (date(2025, 2, 27), date(2025, 2, 28)),
        (date(2025, 2, 28), date(2025, 3, 31)),
        (date(2025, 3, 31), date(2025, 4, 30)),
        (date(2025, 4, 30), date(2025, 5, 31)),
    ],
)
def test_card_schedule_month_end_closing_day(today, expected_closing):
    """A closing day past the month end closes on the month's last day"""
    card = Card(id="c", name="C", color="#000000", closing_day=31, due_day=10)

    schedule = card_schedule(card, today=today)

    assert schedule.next_closing_date == expected_closing
    assert schedule.days_until_closing > 0
