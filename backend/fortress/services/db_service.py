"""
Record store queries, all scoped by owner id.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Type

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fortress.models.finance import (
    AccountType,
    Bill,
    Debt,
    DebtAttackMode,
    Envelope,
    UserSettings,
    VirtualAccount,
)

logger = logging.getLogger(__name__)


def list_for_user(db: Session, model: Type, user_id: str) -> List:
    return db.query(model).filter(model.user_id == user_id).order_by(model.id).all()


def get_owned(db: Session, model: Type, record_id: int, user_id: str):
    return db.query(model).filter(model.id == record_id, model.user_id == user_id).first()


def create_record(db: Session, model: Type, user_id: str, data: dict):
    record = model(user_id=user_id, **data)
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def update_record(db: Session, record, changes: dict):
    columns = record.__table__.columns
    for key, value in changes.items():
        if value is None and key in columns and not columns[key].nullable:
            continue
        setattr(record, key, value)
    db.commit()
    db.refresh(record)
    return record


def delete_record(db: Session, record) -> None:
    db.delete(record)
    db.commit()


def list_unpaid_bills(db: Session, user_id: str) -> List[Bill]:
    return (
        db.query(Bill)
        .filter(Bill.user_id == user_id, Bill.is_paid.is_(False))
        .order_by(Bill.id)
        .all()
    )


def get_or_create_settings(db: Session, user_id: str) -> UserSettings:
    """Returns the user's settings, persisting the defaults on first read."""
    settings = db.query(UserSettings).filter(UserSettings.user_id == user_id).first()
    if settings:
        return settings

    settings = UserSettings(
        user_id=user_id,
        debt_attack_mode=DebtAttackMode.AVALANCHE.value,
        safe_to_spend_warning=True,
    )
    db.add(settings)
    try:
        db.commit()
    except IntegrityError:
        # Another request created them first
        db.rollback()
        return db.query(UserSettings).filter(UserSettings.user_id == user_id).one()
    db.refresh(settings)
    logger.info("Created default settings for user %s", user_id)
    return settings


def update_settings(db: Session, user_id: str, changes: dict) -> UserSettings:
    settings = get_or_create_settings(db, user_id)
    for key, value in changes.items():
        if value is None:
            continue
        setattr(settings, key, value.value if hasattr(value, "value") else value)
    db.commit()
    db.refresh(settings)
    return settings


def mark_paid_date(changes: dict, now: Optional[datetime] = None) -> dict:
    """Stamps paid_date when a bill is marked paid without one."""
    if changes.get("is_paid") and not changes.get("paid_date"):
        changes["paid_date"] = now or datetime.utcnow()
    if changes.get("is_paid") is False:
        changes["paid_date"] = None
    return changes


# --- ONBOARDING ---
STARTER_ACCOUNTS = [
    ("Bills Account", AccountType.BILLS, "2500.00"),
    ("Spending Account", AccountType.SPENDING, "850.00"),
    ("Savings Account", AccountType.SAVINGS, "1200.00"),
]

STARTER_ENVELOPES = [
    # (name, budget, strict, category, color)
    ("Rent/Mortgage", "1500.00", True, "housing", "#ef4444"),
    ("Car Payment", "450.00", True, "transportation", "#f59e0b"),
    ("Insurance", "200.00", True, "insurance", "#3b82f6"),
    ("Utilities", "250.00", True, "utilities", "#8b5cf6"),
    ("Employee Pay", "300.00", True, "employee", "#22c55e"),
    ("Groceries", "500.00", False, "groceries", "#06b6d4"),
    ("Entertainment", "150.00", False, "entertainment", "#ec4899"),
]

STARTER_DEBTS = [
    # (name, total, balance, rate, minimum, due_day, biweekly, category)
    ("IRS Tax Debt", "17000.00", "17000.00", "0", "500.00", 15, False, "tax"),
    ("Credit Card", "5000.00", "3200.00", "19.99", "100.00", 20, False, "credit_card"),
    ("Car Loan", "25000.00", "18500.00", "6.5", "450.00", 5, True, "car_loan"),
]

STARTER_BILLS = [
    # (name, amount, due_day, auto_pay, category)
    ("Rent", "1500.00", 1, False, "housing"),
    ("Electric", "120.00", 15, True, "utilities"),
    ("Internet", "80.00", 10, True, "utilities"),
    ("Car Insurance", "150.00", 20, True, "insurance"),
]


def seed_user_data(db: Session, user_id: str) -> bool:
    """Creates the starter data set for a user who has no accounts yet."""
    has_accounts = db.query(VirtualAccount).filter(VirtualAccount.user_id == user_id).first()
    if has_accounts:
        return False

    for name, acc_type, balance in STARTER_ACCOUNTS:
        db.add(VirtualAccount(user_id=user_id, name=name, type=acc_type.value, balance=Decimal(balance)))

    for name, budget, strict, category, color in STARTER_ENVELOPES:
        db.add(Envelope(
            user_id=user_id, name=name,
            budget_amount=Decimal(budget), current_balance=Decimal(budget),
            is_strict=strict, category=category, color=color,
        ))

    for name, total_amount, balance, rate, minimum, due_day, biweekly, category in STARTER_DEBTS:
        db.add(Debt(
            user_id=user_id, name=name,
            total_amount=Decimal(total_amount), current_balance=Decimal(balance),
            interest_rate=Decimal(rate), minimum_payment=Decimal(minimum),
            due_day=due_day, biweekly_payment=biweekly, category=category,
        ))

    for name, amount, due_day, auto_pay, category in STARTER_BILLS:
        db.add(Bill(
            user_id=user_id, name=name, amount=Decimal(amount),
            due_day=due_day, is_auto_pay=auto_pay, category=category,
        ))

    db.commit()
    logger.info("Seeded starter data for user %s", user_id)
    return True
