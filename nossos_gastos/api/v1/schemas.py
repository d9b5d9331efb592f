"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from datetime import date
from typing import Any, ClassVar, Dict, List, Literal, Optional, Tuple

TransactionType = Literal["expense", "income"]
Person = Literal["amanda", "gustavo", "nos"]
# Alias so a field named `date` can default to None
OptionalDate = Optional[date]


class PartialUpdate(BaseModel):
    """
    PATCH body: only the fields sent are changed.

    Fields outside `nullable` may be omitted but not cleared with null.
    """

    model_config = ConfigDict(extra="forbid")

    nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_cleared_fields(self):
        cleared = sorted(
            name for name in self.model_fields_set
            if getattr(self, name) is None and name not in self.nullable
        )
        if cleared:
            raise ValueError(f"Cannot clear required fields: {', '.join(cleared)}")
        return self

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class CardCreate(BaseModel):
    """Request body for POST /v1/cards"""

    name: str = Field(..., min_length=1)
    color: str = Field("#22c55e", pattern=r"^#[0-9a-fA-F]{6}$")
    closing_day: int = Field(..., ge=1, le=31, description="Statement closing day")
    due_day: int = Field(..., ge=1, le=31, description="Payment due day")
    best_purchase_day: Optional[int] = Field(None, ge=1, le=31)


class CardUpdate(PartialUpdate):
    """Request body for PATCH /v1/cards/{card_id}"""

    nullable = ("best_purchase_day",)

    name: Optional[str] = Field(None, min_length=1)
    color: Optional[str] = Field(None, pattern=r"^#[0-9a-fA-F]{6}$")
    closing_day: Optional[int] = Field(None, ge=1, le=31)
    due_day: Optional[int] = Field(None, ge=1, le=31)
    best_purchase_day: Optional[int] = Field(None, ge=1, le=31)


class CardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    color: str
    closing_day: int
    due_day: int
    best_purchase_day: Optional[int] = None


class BillingInfoResponse(BaseModel):
    """Response for GET /v1/cards/{card_id}/billing"""

    model_config = ConfigDict(from_attributes=True)

    billing_month: int
    billing_year: int
    billing_date: date
    is_best_day: bool
    goes_to_next_month: bool


class CardScheduleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    card_id: str
    next_closing_date: date
    next_due_date: date
    days_until_closing: int
    days_until_due: int


class TransactionCreate(BaseModel):
    """
    Request body for POST /v1/transactions.

    `date` is the purchase date; the stored date is the statement date when
    the expense goes on a registered card. Sending `installment_total` turns
    an expense into an installment plan.
    """

    type: TransactionType
    description: str
    amount: float
    category_id: str
    date: date
    person: Person = "nos"
    card_id: Optional[str] = None
    installment_total: Optional[int] = None
    installment_amount: Optional[float] = Field(None, description="Per-installment amount when there is interest")
    installment_dates: Optional[List[date]] = None
    reconcile_rounding: Optional[bool] = None


class TransactionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: TransactionType
    description: str
    amount: float
    category_id: str
    date: date
    person: str
    card_id: Optional[str] = None
    is_installment: bool = False
    installment_current: Optional[int] = None
    installment_total: Optional[int] = None
    installment_group_id: Optional[str] = None


class TransactionUpdate(PartialUpdate):
    """
    Request body for PATCH /v1/transactions/{transaction_id}.

    `date` replaces the stored date as is. Installment rows only accept
    description, amount, category and person; group fields are not editable.
    """

    nullable = ("card_id",)

    type: Optional[TransactionType] = None
    description: Optional[str] = None
    amount: Optional[float] = None
    category_id: Optional[str] = None
    date: OptionalDate = None
    person: Optional[Person] = None
    card_id: Optional[str] = None


class InterestSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    at_sight_amount: float
    installment_amount: float
    num_installments: int
    total_paid: float
    interest: float


class TransactionBatchResponse(BaseModel):
    """Response for POST /v1/transactions"""

    installment_group_id: Optional[str] = None
    billing: Optional[BillingInfoResponse] = None
    interest: Optional[InterestSchema] = None
    transactions: List[TransactionSchema]


class InstallmentPlanSchema(BaseModel):
    """Single installment plan with progress"""

    group_id: str
    description: str
    category_id: str
    card_id: Optional[str] = None
    per_installment_amount: float
    total: int
    paid_count: int
    progress: float
    remaining_amount: float
    next_due_installment: Optional[TransactionSchema] = None
    installments: List[TransactionSchema]


class GroupDeletedResponse(BaseModel):
    group_id: str
    deleted: int


class InvoiceItemSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    transaction_id: str
    description: str
    amount: float
    date: date
    is_installment: bool
    installment_current: Optional[int] = None
    installment_total: Optional[int] = None


class CardInvoiceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    card_id: str
    card_name: str
    card_color: str
    total: float
    installments_total: float
    a_vista_total: float
    installments: List[InvoiceItemSchema]
    a_vista: List[InvoiceItemSchema]


class MonthlyInvoiceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month_key: str
    year: int
    month: int
    label: str
    total: float
    cards: List[CardInvoiceSchema]


class InvoicesResponse(BaseModel):
    """Response for GET /v1/invoices"""

    total: float
    months: List[MonthlyInvoiceSchema]


class SummaryResponse(BaseModel):
    """Response for GET /v1/summary"""

    month: str
    total_income: float
    total_expenses: float
    balance: float
    recurring_income: float
    recurring_expenses: float
    salary_income: float
    projected_balance: float
    upcoming_installments: List[TransactionSchema]


class SalaryCreate(BaseModel):
    person: Literal["amanda", "gustavo"]
    description: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    due_day: int = Field(..., ge=1, le=31)
    is_active: bool = True


class SalaryUpdate(PartialUpdate):
    person: Optional[Literal["amanda", "gustavo"]] = None
    description: Optional[str] = Field(None, min_length=1)
    amount: Optional[float] = Field(None, gt=0)
    due_day: Optional[int] = Field(None, ge=1, le=31)
    is_active: Optional[bool] = None


class SalarySchema(SalaryCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str


class RecurringCreate(BaseModel):
    type: TransactionType
    description: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    category_id: str = Field(..., min_length=1)
    person: Person = "nos"
    card_id: Optional[str] = None
    day_of_month: int = Field(1, ge=1, le=31)
    is_active: bool = True


class RecurringUpdate(PartialUpdate):
    """Request body for PATCH /v1/recurring/{recurring_id}; `is_active` pauses an item"""

    nullable = ("card_id",)

    type: Optional[TransactionType] = None
    description: Optional[str] = Field(None, min_length=1)
    amount: Optional[float] = Field(None, gt=0)
    category_id: Optional[str] = Field(None, min_length=1)
    person: Optional[Person] = None
    card_id: Optional[str] = None
    day_of_month: Optional[int] = Field(None, ge=1, le=31)
    is_active: Optional[bool] = None


class RecurringSchema(RecurringCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str


class InvestmentCreate(BaseModel):
    """Request body for POST /v1/investments"""

    name: str = Field(..., min_length=1)
    icon: str = "💰"
    color: str = Field("#22c55e", pattern=r"^#[0-9a-fA-F]{6}$")
    goal: Optional[float] = Field(None, gt=0, description="Target balance")


class InvestmentUpdate(PartialUpdate):
    nullable = ("goal",)

    name: Optional[str] = Field(None, min_length=1)
    icon: Optional[str] = None
    color: Optional[str] = Field(None, pattern=r"^#[0-9a-fA-F]{6}$")
    goal: Optional[float] = Field(None, gt=0)


class MovementCreate(BaseModel):
    """Request body for deposits and withdrawals; `date` defaults to today"""

    amount: float = Field(..., gt=0)
    date: OptionalDate = None


class MovementSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: Literal["deposit", "withdraw"]
    amount: float
    date: date


class InvestmentSchema(BaseModel):
    id: str
    name: str
    icon: str
    color: str
    goal: Optional[float] = None
    balance: float
    goal_progress: float = Field(..., description="Percent of the goal reached, capped at 100")
    transactions: List[MovementSchema]


class InvestmentsResponse(BaseModel):
    """Response for GET /v1/investments"""

    total: float
    investments: List[InvestmentSchema]


class CategorySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    icon: str
    color: str


class CategoriesResponse(BaseModel):
    expense: List[CategorySchema]
    income: List[CategorySchema]
