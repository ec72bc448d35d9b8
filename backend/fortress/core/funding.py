"""
Payday funding plan: what is left of the next paychecks once bills, minimum
debt payments and the savings/tax set-asides are covered.
"""
import logging
from datetime import date
from typing import List, Optional

from fortress.core.config import Policy
from fortress.core.money import ZERO, quantize, total
from fortress.core.snapshot import Snapshot
from fortress.schemas import BillOut, DebtOut, FundedBill, FundedDebt, FundingPlan, PayScheduleOut

logger = logging.getLogger(__name__)


def next_payday(schedules: List[PayScheduleOut], today: date) -> Optional[date]:
    """Soonest payday on or after today; the earliest one overall if all have passed."""
    if not schedules:
        return None
    upcoming = [s.next_payday for s in schedules if s.next_payday >= today]
    if upcoming:
        return min(upcoming)
    return min(s.next_payday for s in schedules)


def bill_is_urgent(bill: BillOut, day: int, policy: Policy) -> bool:
    # No month wraparound here; the urgency ranker handles that.
    if bill.due_day <= day + policy.funding_urgent_days:
        return True
    return bill.must_have_by_day is not None and bill.must_have_by_day <= day


def debt_is_urgent(debt: DebtOut, day: int, policy: Policy) -> bool:
    return debt.due_day <= day + policy.funding_urgent_days


def plan_funding(snapshot: Snapshot, today: date, policy: Optional[Policy] = None) -> FundingPlan:
    policy = policy or Policy()

    bills_total = total(b.amount for b in snapshot.bills)
    debt_payments_total = total(d.minimum_payment for d in snapshot.debts)
    total_obligations = quantize(bills_total + debt_payments_total + policy.savings_target + policy.tax_reserve)
    expected_income = total(s.amount for s in snapshot.pay_schedules)
    safe_to_spend = max(ZERO, quantize(expected_income - total_obligations))

    plan = FundingPlan(
        expected_income=expected_income,
        bills_total=bills_total,
        debt_payments_total=debt_payments_total,
        savings_target=policy.savings_target,
        tax_reserve=policy.tax_reserve,
        total_obligations=total_obligations,
        safe_to_spend=safe_to_spend,
        next_payday=next_payday(snapshot.pay_schedules, today),
        bills=[
            FundedBill(
                id=b.id,
                name=b.name,
                amount=b.amount,
                due_day=b.due_day,
                must_have_by_day=b.must_have_by_day,
                is_urgent=bill_is_urgent(b, today.day, policy),
            )
            for b in snapshot.bills
        ],
        debts=[
            FundedDebt(
                id=d.id,
                name=d.name,
                minimum_payment=d.minimum_payment,
                due_day=d.due_day,
                is_urgent=debt_is_urgent(d, today.day, policy),
            )
            for d in snapshot.debts
        ],
    )
    logger.info("Funding plan for %s: income %s, obligations %s, safe %s",
                snapshot.user_id, expected_income, total_obligations, safe_to_spend)
    return plan
