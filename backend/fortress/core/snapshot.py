"""
Financial snapshot: everything a safe-to-spend decision reads, gathered in one go.

The six reads are independent, so they are issued concurrently and the
caller waits for all of them. There is no consistency guarantee across the
reads; a write landing mid-gather may or may not be visible.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Protocol

from fortress.core.money import ZERO
from fortress.models.finance import AccountType
from fortress.schemas import (
    AccountOut,
    BillOut,
    DebtOut,
    EnvelopeOut,
    PayScheduleOut,
    SettingsOut,
)

logger = logging.getLogger(__name__)


class SnapshotProvider(Protocol):
    async def list_accounts(self, user_id: str) -> List[AccountOut]: ...
    async def list_envelopes(self, user_id: str) -> List[EnvelopeOut]: ...
    async def list_debts(self, user_id: str) -> List[DebtOut]: ...
    async def list_unpaid_bills(self, user_id: str) -> List[BillOut]: ...
    async def list_pay_schedules(self, user_id: str) -> List[PayScheduleOut]: ...
    async def get_settings(self, user_id: str) -> SettingsOut: ...


@dataclass
class Snapshot:
    user_id: str
    settings: SettingsOut
    accounts: List[AccountOut] = field(default_factory=list)
    envelopes: List[EnvelopeOut] = field(default_factory=list)
    debts: List[DebtOut] = field(default_factory=list)
    bills: List[BillOut] = field(default_factory=list)  # unpaid only
    pay_schedules: List[PayScheduleOut] = field(default_factory=list)

    def account(self, account_type: AccountType) -> Optional[AccountOut]:
        return next((a for a in self.accounts if a.type == account_type), None)

    def balance_of(self, account_type: AccountType) -> Decimal:
        """Balance of the first account of that type, $0 when there is none."""
        acc = self.account(account_type)
        return acc.balance if acc else ZERO


async def read_snapshot(provider: SnapshotProvider, user_id: str) -> Snapshot:
    """Fans out the six reads and assembles the snapshot.

    Any DataUnavailable raised by the provider propagates unchanged.
    """
    accounts, envelopes, debts, bills, schedules, settings = await asyncio.gather(
        provider.list_accounts(user_id),
        provider.list_envelopes(user_id),
        provider.list_debts(user_id),
        provider.list_unpaid_bills(user_id),
        provider.list_pay_schedules(user_id),
        provider.get_settings(user_id),
    )
    snapshot = Snapshot(
        user_id=user_id,
        settings=settings or SettingsOut(user_id=user_id),
        accounts=list(accounts or []),
        envelopes=list(envelopes or []),
        debts=list(debts or []),
        bills=list(bills or []),
        pay_schedules=list(schedules or []),
    )
    logger.debug(
        "Snapshot for %s: %d accounts, %d envelopes, %d debts, %d unpaid bills, %d pay schedules",
        user_id, len(snapshot.accounts), len(snapshot.envelopes), len(snapshot.debts),
        len(snapshot.bills), len(snapshot.pay_schedules),
    )
    return snapshot
