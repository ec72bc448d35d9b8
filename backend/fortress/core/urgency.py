"""
Urgent actions: unpaid bills and debt payments ranked by how soon they land.

Due days are day-of-month numbers. When measuring distance, a due day earlier
than today is taken to mean next month.
"""
import calendar
from datetime import date
from typing import List, Optional

from fortress.core.config import Policy
from fortress.core.money import fmt
from fortress.schemas import BillOut, DebtOut, UrgentAction

TODAY = "today"
URGENT = "urgent"
WARNING = "warning"

URGENCY_RANK = {TODAY: 0, URGENT: 1, WARNING: 2}


def days_until(due_day: int, current_day: int, days_in_month: int) -> int:
    if due_day >= current_day:
        return due_day - current_day
    return days_in_month - current_day + due_day


def _plural(n: int) -> str:
    return "day" if n == 1 else "days"


def bill_action(bill: BillOut, current_day: int, days_in_month: int, policy: Policy) -> Optional[UrgentAction]:
    due_in = days_until(bill.due_day, current_day, days_in_month)
    must_have_in = days_until(bill.must_have_by_day or bill.due_day, current_day, days_in_month)
    funds_first = must_have_in < due_in

    if due_in == 0 or must_have_in == 0:
        urgency = TODAY
        if due_in == 0:
            title = f"{bill.name.upper()} DUE TODAY"
        else:
            title = f"FUND {bill.name.upper()} TODAY"
    elif due_in <= policy.urgent_days or must_have_in <= policy.must_have_urgent_days:
        urgency = URGENT
        title = f"{bill.name} due in {due_in} {_plural(due_in)}"
    elif due_in <= policy.warning_days:
        urgency = WARNING
        title = f"{bill.name} coming up in {due_in} {_plural(due_in)}"
    else:
        return None

    description = f"{fmt(bill.amount)} due on day {bill.due_day}"
    if funds_first:
        description += f"; funds needed by day {bill.must_have_by_day}"
    if bill.is_auto_pay:
        description += " (auto-pay)"

    return UrgentAction(
        type="bill",
        urgency=urgency,
        title=title,
        description=description,
        amount=bill.amount,
        days_until=due_in,
        must_have_days_until=must_have_in,
        source_id=bill.id,
    )


def debt_action(debt: DebtOut, current_day: int, days_in_month: int, policy: Policy) -> Optional[UrgentAction]:
    # Plain day comparison: any due day up to today+window is urgent, including
    # days earlier in the month. due_in still wraps and only drives ordering.
    due_in = days_until(debt.due_day, current_day, days_in_month)
    if due_in == 0:
        urgency = TODAY
        title = f"{debt.name.upper()} PAYMENT DUE TODAY"
    elif debt.due_day < current_day:
        urgency = URGENT
        title = f"{debt.name} payment due on day {debt.due_day}"
    elif debt.due_day <= current_day + policy.urgent_days:
        urgency = URGENT
        title = f"{debt.name} payment due in {due_in} {_plural(due_in)}"
    else:
        # Debts have no early-warning tier
        return None

    return UrgentAction(
        type="debt",
        urgency=urgency,
        title=title,
        description=f"Minimum payment of {fmt(debt.minimum_payment)} due on day {debt.due_day}",
        amount=debt.minimum_payment,
        days_until=due_in,
        source_id=debt.id,
    )


def rank_urgent_actions(
    bills: List[BillOut],
    debts: List[DebtOut],
    current_day: int,
    days_in_month: int,
    policy: Optional[Policy] = None,
) -> List[UrgentAction]:
    policy = policy or Policy()
    actions = []
    for bill in bills:
        if bill.is_paid:
            continue
        action = bill_action(bill, current_day, days_in_month, policy)
        if action:
            actions.append(action)
    for debt in debts:
        action = debt_action(debt, current_day, days_in_month, policy)
        if action:
            actions.append(action)
    actions.sort(key=lambda a: (URGENCY_RANK[a.urgency], a.days_until))
    return actions


def urgent_actions_for(bills: List[BillOut], debts: List[DebtOut], today: date, policy: Optional[Policy] = None) -> List[UrgentAction]:
    days_in_month = calendar.monthrange(today.year, today.month)[1]
    return rank_urgent_actions(bills, debts, today.day, days_in_month, policy)
