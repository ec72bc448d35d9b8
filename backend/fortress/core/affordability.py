"""
Purchase affordability ("Can I buy this?").

Rules are applied in a fixed order and each one can only keep or worsen the
verdict, so a larger purchase never gets a better answer than a smaller one.
"""
import logging
from decimal import Decimal
from typing import Any, List, Optional

from fortress.core.config import Policy
from fortress.core.errors import ValidationError
from fortress.core.money import fmt, quantize, to_money, total
from fortress.core.snapshot import Snapshot
from fortress.models.finance import AccountType
from fortress.schemas import AffordabilityResult, EnvelopeOut

logger = logging.getLogger(__name__)

YES = "yes"
WARNING = "warning"
NO = "no"


def parse_purchase_amount(raw: Any) -> Decimal:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValidationError("Purchase amount is required")
    amount = to_money(raw)
    if amount <= 0:
        raise ValidationError("Purchase amount must be greater than zero")
    return amount


def affected_envelopes(envelopes: List[EnvelopeOut], purchase_amount: Decimal) -> List[EnvelopeOut]:
    """Flexible envelopes that still have money but not enough for the purchase."""
    return [
        e for e in envelopes
        if not e.is_strict and 0 < e.current_balance < purchase_amount
    ]


def evaluate_purchase(purchase_amount: Any, snapshot: Snapshot, policy: Optional[Policy] = None) -> AffordabilityResult:
    policy = policy or Policy()
    amount = parse_purchase_amount(purchase_amount)

    spending_balance = snapshot.balance_of(AccountType.SPENDING)
    remaining_after = quantize(spending_balance - amount)
    warnings: List[str] = []
    status = YES

    if amount > spending_balance:
        status = NO
        warnings.append(f"Purchase exceeds your available spending balance of {fmt(spending_balance)}")
    elif remaining_after < policy.low_balance_threshold and snapshot.settings.safe_to_spend_warning:
        status = WARNING
        warnings.append(f"Remaining balance after purchase would be low: {fmt(remaining_after)}")

    short_envelopes = affected_envelopes(snapshot.envelopes, amount)
    if short_envelopes:
        if status != NO:
            status = WARNING
        names = ", ".join(e.name for e in short_envelopes)
        warnings.append(f"This purchase would exceed the remaining budget in: {names}")

    unpaid_bills_total = total(b.amount for b in snapshot.bills)
    bills_balance = snapshot.balance_of(AccountType.BILLS)
    if (
        bills_balance < unpaid_bills_total
        and amount > remaining_after
        and amount > spending_balance * policy.bills_pressure_ratio
    ):
        if status == YES:
            status = WARNING
        warnings.append(
            f"Your bills account ({fmt(bills_balance)}) is short of upcoming bills "
            f"({fmt(unpaid_bills_total)}); you may need this money for bills"
        )

    result = AffordabilityResult(
        can_buy=status != NO,
        status=status,
        safe_to_spend=spending_balance,
        purchase_amount=amount,
        remaining_after=remaining_after,
        warnings=warnings,
        recommendation=_recommendation(status, warnings, remaining_after),
        strict_obligations=total(e.budget_amount for e in snapshot.envelopes if e.is_strict),
        upcoming_bills=unpaid_bills_total,
        debt_payments=total(d.minimum_payment for d in snapshot.debts),
    )
    logger.info("Affordability for %s: %s on %s (%d warnings)", snapshot.user_id, status, amount, len(warnings))
    return result


def _recommendation(status: str, warnings: List[str], remaining_after: Decimal) -> str:
    if status == YES:
        return f"You can afford this. You'll have {fmt(remaining_after)} left in your spending account."
    if status == WARNING:
        return f"Proceed with caution. {warnings[0]}."
    if warnings:
        return f"This purchase isn't in your budget right now. {warnings[0]}."
    return "This purchase isn't in your budget right now."
