"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from nossos_gastos.domain.exceptions import InvalidDateError

EXPENSE = "expense"
INCOME = "income"
TRANSACTION_TYPES = (EXPENSE, INCOME)
PERSONS = ("amanda", "gustavo", "nos")
DEPOSIT = "deposit"
WITHDRAW = "withdraw"


def _check_card_day(name: str, value: Optional[int]) -> None:
    if value is not None and not 1 <= value <= 31:
        raise InvalidDateError(f"{name} must be between 1 and 31, got {value}")


@dataclass
class Card:
    """Credit card statement configuration"""

    id: str
    name: str
    color: str
    closing_day: int
    due_day: int
    best_purchase_day: Optional[int] = None

    def __post_init__(self) -> None:
        _check_card_day("closing_day", self.closing_day)
        _check_card_day("due_day", self.due_day)
        _check_card_day("best_purchase_day", self.best_purchase_day)


@dataclass
class TransactionDraft:
    """Purchase data as entered, before it is placed on a statement"""

    type: str  # "expense" or "income"
    description: str
    amount: Optional[float]
    category_id: str
    purchase_date: date
    person: str = "nos"
    card_id: Optional[str] = None


@dataclass
class Transaction:
    """Ledger entry; `date` is the statement date, not the purchase date"""

    id: str
    type: str
    description: str
    amount: float
    category_id: str
    date: date
    person: str = "nos"
    card_id: Optional[str] = None
    is_installment: bool = False
    installment_current: Optional[int] = None
    installment_total: Optional[int] = None
    installment_group_id: Optional[str] = None


@dataclass
class BillingInfo:
    """Statement a purchase lands in (billing_month is 1-based)"""

    billing_month: int
    billing_year: int
    billing_date: date
    is_best_day: bool
    goes_to_next_month: bool


@dataclass
class CardSchedule:
    """Upcoming closing and due dates of a card relative to a given day"""

    card_id: str
    next_closing_date: date
    next_due_date: date
    days_until_closing: int
    days_until_due: int


@dataclass
class InterestBreakdown:
    """Implied interest of paying a purchase in installments"""

    at_sight_amount: float
    installment_amount: float
    num_installments: int
    total_paid: float
    interest: float


@dataclass
class InstallmentPlan:
    """Installment group rebuilt from its transactions"""

    group_id: str
    description: str
    category_id: str
    card_id: Optional[str]
    per_installment_amount: float
    total: int
    paid_count: int
    installments: List[Transaction]
    next_due_installment: Optional[Transaction] = None

    @property
    def remaining_count(self) -> int:
        return max(self.total - self.paid_count, 0)

    @property
    def total_amount(self) -> float:
        return sum(t.amount for t in self.installments)

    @property
    def remaining_amount(self) -> float:
        return sum(t.amount for t in self.installments[self.paid_count:])

    @property
    def progress(self) -> float:
        return self.paid_count / self.total if self.total else 0.0


@dataclass
class InvoiceItem:
    """Single transaction shown on a statement"""

    transaction_id: str
    description: str
    amount: float
    date: date
    is_installment: bool
    installment_current: Optional[int] = None
    installment_total: Optional[int] = None


@dataclass
class CardInvoice:
    """One card's share of a monthly statement"""

    card_id: str
    card_name: str
    card_color: str
    total: float = 0.0
    installments: List[InvoiceItem] = field(default_factory=list)
    a_vista: List[InvoiceItem] = field(default_factory=list)

    @property
    def installments_total(self) -> float:
        return sum(i.amount for i in self.installments)

    @property
    def a_vista_total(self) -> float:
        return sum(i.amount for i in self.a_vista)


@dataclass
class MonthlyInvoice:
    """All card statements due in one month"""

    month_key: str
    year: int
    month: int
    label: str
    total: float = 0.0
    cards: List[CardInvoice] = field(default_factory=list)


@dataclass
class Salary:
    """Monthly salary of one person"""

    id: str
    person: str
    description: str
    amount: float
    due_day: int
    is_active: bool = True


@dataclass
class RecurringTransaction:
    """Bill or income repeating every month on `day_of_month`"""

    id: str
    type: str
    description: str
    amount: float
    category_id: str
    person: str = "nos"
    card_id: Optional[str] = None
    day_of_month: int = 1
    is_active: bool = True


@dataclass
class FinancialSummary:
    """Ledger totals of a month plus next month's installments"""

    total_income: float
    total_expenses: float
    balance: float
    upcoming_installments: List[Transaction]


@dataclass
class MonthProjection:
    """Month totals including active recurring items and salaries"""

    month_key: str
    ledger_income: float
    ledger_expenses: float
    recurring_income: float
    recurring_expenses: float
    salary_income: float

    @property
    def total_income(self) -> float:
        return self.ledger_income + self.recurring_income + self.salary_income

    @property
    def total_expenses(self) -> float:
        return self.ledger_expenses + self.recurring_expenses

    @property
    def projected_balance(self) -> float:
        return self.total_income - self.total_expenses


@dataclass
class InvestmentTransaction:
    """Deposit into or withdrawal from an investment"""

    id: str
    type: str  # deposit | withdraw
    amount: float
    date: date


@dataclass
class Investment:
    """Savings box with an optional goal; the balance comes from its movements"""

    id: str
    name: str
    icon: str = "💰"
    color: str = "#22c55e"
    goal: Optional[float] = None
    transactions: List[InvestmentTransaction] = field(default_factory=list)
