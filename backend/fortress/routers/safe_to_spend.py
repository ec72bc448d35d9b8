from typing import List

from fastapi import APIRouter, Depends

from fortress.core.affordability import evaluate_purchase
from fortress.core.clock import Clock
from fortress.core.config import Policy
from fortress.core.funding import plan_funding
from fortress.core.money import ZERO, total
from fortress.core.snapshot import SnapshotProvider, read_snapshot
from fortress.core.urgency import urgent_actions_for
from fortress.deps import get_clock, get_policy, get_snapshot_provider, get_user_id
from fortress.models.finance import AccountType
from fortress.schemas import (
    AffordabilityRequest,
    AffordabilityResult,
    FundingPlan,
    SafeToSpendSummary,
    UrgentAction,
)

router = APIRouter(tags=["safe-to-spend"])


@router.post("/safe-to-spend-check", response_model=AffordabilityResult)
async def check_affordability(
    payload: AffordabilityRequest,
    user_id: str = Depends(get_user_id),
    provider: SnapshotProvider = Depends(get_snapshot_provider),
    policy: Policy = Depends(get_policy),
):
    """
    "Can I buy this?" for the given amount, against current balances.
    """
    snapshot = await read_snapshot(provider, user_id)
    return evaluate_purchase(payload.amount, snapshot, policy)


@router.get("/funding-plan", response_model=FundingPlan)
async def get_funding_plan(
    user_id: str = Depends(get_user_id),
    provider: SnapshotProvider = Depends(get_snapshot_provider),
    clock: Clock = Depends(get_clock),
    policy: Policy = Depends(get_policy),
):
    snapshot = await read_snapshot(provider, user_id)
    return plan_funding(snapshot, clock.today(), policy)


@router.get("/urgent-actions", response_model=List[UrgentAction])
async def get_urgent_actions(
    user_id: str = Depends(get_user_id),
    provider: SnapshotProvider = Depends(get_snapshot_provider),
    clock: Clock = Depends(get_clock),
    policy: Policy = Depends(get_policy),
):
    """
    Unpaid bills and debt payments coming due, most urgent first.
    """
    snapshot = await read_snapshot(provider, user_id)
    return urgent_actions_for(snapshot.bills, snapshot.debts, clock.today(), policy)


@router.get("/safe-to-spend", response_model=SafeToSpendSummary)
async def get_safe_to_spend(
    user_id: str = Depends(get_user_id),
    provider: SnapshotProvider = Depends(get_snapshot_provider),
):
    snapshot = await read_snapshot(provider, user_id)
    strict = [e for e in snapshot.envelopes if e.is_strict]
    return SafeToSpendSummary(
        safe_to_spend=max(ZERO, snapshot.balance_of(AccountType.SPENDING)),
        strict_envelopes=len(strict),
        strict_obligations=total(e.budget_amount for e in strict),
    )
