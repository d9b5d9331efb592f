"""Unit tests for monthly summary and projection"""

from datetime import date
from nossos_gastos.domain.categories import expense_categories, find_category, income_categories
from nossos_gastos.domain.models import RecurringTransaction, Salary
from nossos_gastos.domain.summary import calculate_summary, project_month, recurring_totals, salary_total


def test_calculate_summary_current_month(transaction_factory):
    rows = [
        transaction_factory("salary", date(2025, 1, 5), amount=5000.0, type="income"),
        transaction_factory("market", date(2025, 1, 12), amount=800.0),
        transaction_factory("rent", date(2025, 1, 10), amount=2000.0),
        transaction_factory("december", date(2024, 12, 30), amount=999.0),
    ]

    summary = calculate_summary(rows, "2025-01", "2025-02")

    assert summary.total_income == 5000.0
    assert summary.total_expenses == 2800.0
    assert summary.balance == 2200.0


def test_calculate_summary_upcoming_installments(transaction_factory):
    rows = [
        transaction_factory("i1", date(2025, 2, 5), group_id="g", current=1, total=2),
        transaction_factory("lump", date(2025, 2, 5)),
        transaction_factory("i0", date(2025, 1, 5), group_id="h", current=1, total=2),
    ]

    summary = calculate_summary(rows, "2025-01", "2025-02")

    assert [t.id for t in summary.upcoming_installments] == ["i1"]


def test_recurring_totals_only_active():
    recurring = [
        RecurringTransaction("r1", "expense", "Internet", 120.0, "8"),
        RecurringTransaction("r2", "expense", "Academia", 90.0, "4", is_active=False),
        RecurringTransaction("r3", "income", "Aluguel recebido", 700.0, "12"),
    ]

    assert recurring_totals(recurring) == (700.0, 120.0)


def test_salary_total_only_active():
    salaries = [
        Salary("s1", "amanda", "CLT", 4000.0, 5),
        Salary("s2", "gustavo", "PJ", 6000.0, 10),
        Salary("s3", "gustavo", "Antigo", 3000.0, 10, is_active=False),
    ]
    assert salary_total(salaries) == 10000.0


def test_project_month_combines_ledger_recurring_and_salaries(transaction_factory):
    rows = [transaction_factory("market", date(2025, 1, 12), amount=800.0)]
    recurring = [RecurringTransaction("r1", "expense", "Internet", 120.0, "8")]
    salaries = [Salary("s1", "amanda", "CLT", 4000.0, 5)]

    projection = project_month(rows, "2025-01", recurring, salaries)

    assert projection.total_income == 4000.0
    assert projection.total_expenses == 920.0
    assert projection.projected_balance == 3080.0


def test_category_catalogue():
    expense_ids = {c.id for c in expense_categories()}
    income_ids = {c.id for c in income_categories()}

    assert "10" not in expense_ids and "11" not in expense_ids
    assert income_ids == {"10", "11", "12"}
    assert find_category("1").name == "Alimentação"
    assert find_category("999") is None
