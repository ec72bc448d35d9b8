from sqlalchemy import Column, Integer, String, Numeric, DateTime, Date, Boolean
from datetime import datetime
import enum
from fortress.database import Base

# Numeric(10, 2) comes back as Decimal, never float.
Money = Numeric(10, 2)

class AccountType(str, enum.Enum):
    BILLS = "bills"
    SPENDING = "spending"
    SAVINGS = "savings"

class PayFrequency(str, enum.Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    SEMIMONTHLY = "semimonthly"
    MONTHLY = "monthly"

class TransactionType(str, enum.Enum):
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"

class DebtAttackMode(str, enum.Enum):
    AVALANCHE = "avalanche"
    SNOWBALL = "snowball"

class Envelope(Base):
    __tablename__ = "envelopes"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    budget_amount = Column(Money, nullable=False)
    current_balance = Column(Money, nullable=False, default=0) # May go negative (over budget)
    is_strict = Column(Boolean, nullable=False, default=False)
    category = Column(String, nullable=False, default="general")
    color = Column(String, nullable=False, default="#22c55e")
    created_at = Column(DateTime, default=datetime.utcnow)

class VirtualAccount(Base):
    __tablename__ = "virtual_accounts"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False) # bills, spending, savings
    balance = Column(Money, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)

class Debt(Base):
    __tablename__ = "debts"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    total_amount = Column(Money, nullable=False)
    current_balance = Column(Money, nullable=False)
    interest_rate = Column(Numeric(5, 2), nullable=False, default=0) # Annual %
    minimum_payment = Column(Money, nullable=False)
    due_day = Column(Integer, nullable=False)
    biweekly_payment = Column(Boolean, nullable=False, default=False)
    category = Column(String, nullable=False, default="other")
    created_at = Column(DateTime, default=datetime.utcnow)

class Transaction(Base):
    __tablename__ = "transactions"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False)
    amount = Column(Money, nullable=False)
    type = Column(String, nullable=False) # income, expense, transfer
    envelope_id = Column(Integer, nullable=True) # Soft reference
    account_id = Column(Integer, nullable=True) # Soft reference
    is_write_off = Column(Boolean, nullable=False, default=False)
    write_off_category = Column(String, nullable=True)
    date = Column(DateTime, default=datetime.utcnow)
    created_at = Column(DateTime, default=datetime.utcnow)

class Bill(Base):
    __tablename__ = "bills"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    amount = Column(Money, nullable=False)
    due_day = Column(Integer, nullable=False)
    must_have_by_day = Column(Integer, nullable=True)
    is_auto_pay = Column(Boolean, nullable=False, default=False)
    auto_fund_from_paycheck = Column(Boolean, nullable=False, default=True)
    envelope_id = Column(Integer, nullable=True) # Soft reference
    is_paid = Column(Boolean, nullable=False, default=False)
    paid_date = Column(DateTime, nullable=True)
    category = Column(String, nullable=False, default="utilities")
    created_at = Column(DateTime, default=datetime.utcnow)

class PaySchedule(Base):
    __tablename__ = "pay_schedules"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    amount = Column(Money, nullable=False)
    frequency = Column(String, nullable=False)
    next_payday = Column(Date, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

class UserSettings(Base):
    __tablename__ = "user_settings"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, unique=True, nullable=False)
    debt_attack_mode = Column(String, nullable=False, default=DebtAttackMode.AVALANCHE.value)
    safe_to_spend_warning = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
