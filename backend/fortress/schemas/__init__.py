from __future__ import annotations
import datetime
from decimal import Decimal
from typing import Annotated, Any, List, Literal, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from fortress.core.errors import FortressError
from fortress.core.money import to_money
from fortress.models.finance import AccountType, DebtAttackMode, PayFrequency, TransactionType


def _parse_money(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        value = str(value)
    try:
        return to_money(value)
    except FortressError as e:
        raise ValueError(e.message)


def _non_negative(value: Decimal) -> Decimal:
    if value < 0:
        raise ValueError("Amount must not be negative")
    return value


def _percentage(value: Decimal) -> Decimal:
    if value < 0 or value > 100:
        raise ValueError("Interest rate must be between 0 and 100")
    return value


# --- FIELD TYPES ---
# Money crosses the boundary as a decimal string ("850.00"), never as a float.
Money = Annotated[
    Decimal,
    BeforeValidator(_parse_money),
    PlainSerializer(lambda d: f"{d:.2f}", return_type=str),
]
Amount = Annotated[Money, AfterValidator(_non_negative)]
Rate = Annotated[Money, AfterValidator(_percentage)]
DayOfMonth = Annotated[int, Field(ge=1, le=31)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# --- ENVELOPE SCHEMAS ---
class EnvelopeBase(CamelModel):
    name: str = Field(..., min_length=1)
    budget_amount: Amount
    is_strict: bool = False
    category: str = "general"
    color: str = "#22c55e"

class EnvelopeCreate(EnvelopeBase):
    # Defaults to budget_amount
    current_balance: Optional[Money] = None

class EnvelopeUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    budget_amount: Optional[Amount] = None
    current_balance: Optional[Money] = None
    is_strict: Optional[bool] = None
    category: Optional[str] = None
    color: Optional[str] = None

class EnvelopeOut(EnvelopeBase):
    id: int
    user_id: str
    current_balance: Money


# --- ACCOUNT SCHEMAS ---
class AccountUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    balance: Optional[Money] = None

class AccountOut(CamelModel):
    id: int
    user_id: str
    name: str
    type: AccountType
    balance: Money


# --- DEBT SCHEMAS ---
class DebtBase(CamelModel):
    name: str = Field(..., min_length=1)
    total_amount: Amount
    current_balance: Amount
    interest_rate: Rate = Decimal("0.00")
    minimum_payment: Amount
    due_day: DayOfMonth
    biweekly_payment: bool = False
    category: str = "other"

class DebtCreate(DebtBase):
    pass

class DebtUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    total_amount: Optional[Amount] = None
    current_balance: Optional[Amount] = None
    interest_rate: Optional[Rate] = None
    minimum_payment: Optional[Amount] = None
    due_day: Optional[DayOfMonth] = None
    biweekly_payment: Optional[bool] = None
    category: Optional[str] = None

class DebtOut(DebtBase):
    id: int
    user_id: str


# --- BILL SCHEMAS ---
class BillBase(CamelModel):
    name: str = Field(..., min_length=1)
    amount: Amount
    due_day: DayOfMonth
    must_have_by_day: Optional[DayOfMonth] = None
    is_auto_pay: bool = False
    auto_fund_from_paycheck: bool = True
    envelope_id: Optional[int] = None
    is_paid: bool = False
    paid_date: Optional[datetime.datetime] = None
    category: str = "utilities"

class BillCreate(BillBase):
    pass

class BillUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    amount: Optional[Amount] = None
    due_day: Optional[DayOfMonth] = None
    must_have_by_day: Optional[DayOfMonth] = None
    is_auto_pay: Optional[bool] = None
    auto_fund_from_paycheck: Optional[bool] = None
    envelope_id: Optional[int] = None
    is_paid: Optional[bool] = None
    paid_date: Optional[datetime.datetime] = None
    category: Optional[str] = None

class BillOut(BillBase):
    id: int
    user_id: str


# --- TRANSACTION SCHEMAS ---
class TransactionBase(CamelModel):
    description: str = Field(..., min_length=1)
    amount: Amount
    type: TransactionType
    envelope_id: Optional[int] = None
    account_id: Optional[int] = None
    is_write_off: bool = False
    write_off_category: Optional[str] = None
    date: Optional[datetime.datetime] = None

class TransactionCreate(TransactionBase):
    pass

class TransactionUpdate(CamelModel):
    description: Optional[str] = Field(None, min_length=1)
    amount: Optional[Amount] = None
    type: Optional[TransactionType] = None
    envelope_id: Optional[int] = None
    account_id: Optional[int] = None
    is_write_off: Optional[bool] = None
    write_off_category: Optional[str] = None
    date: Optional[datetime.datetime] = None

class TransactionOut(TransactionBase):
    id: int
    user_id: str


# --- PAY SCHEDULE SCHEMAS ---
class PayScheduleBase(CamelModel):
    name: str = Field(..., min_length=1)
    amount: Amount
    frequency: PayFrequency
    next_payday: datetime.date

class PayScheduleCreate(PayScheduleBase):
    pass

class PayScheduleUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    amount: Optional[Amount] = None
    frequency: Optional[PayFrequency] = None
    next_payday: Optional[datetime.date] = None

class PayScheduleOut(PayScheduleBase):
    id: int
    user_id: str


# --- SETTINGS SCHEMAS ---
class SettingsUpdate(CamelModel):
    debt_attack_mode: Optional[DebtAttackMode] = None
    safe_to_spend_warning: Optional[bool] = None

class SettingsOut(CamelModel):
    user_id: str
    debt_attack_mode: DebtAttackMode = DebtAttackMode.AVALANCHE
    safe_to_spend_warning: bool = True


# --- DECISION SCHEMAS ---
Verdict = Literal["yes", "warning", "no"]
Urgency = Literal["today", "urgent", "warning"]

class AffordabilityRequest(BaseModel):
    # Parsed by the evaluator so malformed amounts surface as a ValidationError
    amount: Any = None

class AffordabilityResult(CamelModel):
    can_buy: bool
    status: Verdict
    safe_to_spend: Money
    purchase_amount: Money
    remaining_after: Money
    warnings: List[str] = []
    recommendation: str
    strict_obligations: Money
    upcoming_bills: Money
    debt_payments: Money

class FundedBill(CamelModel):
    id: int
    name: str
    amount: Money
    due_day: int
    must_have_by_day: Optional[int] = None
    is_urgent: bool

class FundedDebt(CamelModel):
    id: int
    name: str
    minimum_payment: Money
    due_day: int
    is_urgent: bool

class FundingPlan(CamelModel):
    expected_income: Money
    bills_total: Money
    debt_payments_total: Money
    savings_target: Money
    tax_reserve: Money
    total_obligations: Money
    safe_to_spend: Money
    next_payday: Optional[datetime.date] = None
    bills: List[FundedBill] = []
    debts: List[FundedDebt] = []

class UrgentAction(CamelModel):
    type: Literal["bill", "debt"]
    urgency: Urgency
    title: str
    description: str
    amount: Money
    days_until: int
    must_have_days_until: Optional[int] = None
    source_id: int

class SafeToSpendSummary(CamelModel):
    safe_to_spend: Money
    strict_envelopes: int
    strict_obligations: Money


# --- ADVISOR SCHEMAS ---
class AdvisorRequest(BaseModel):
    message: str = Field(..., min_length=1)

class AdvisorResponse(BaseModel):
    response: str
