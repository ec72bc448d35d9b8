"""
SQL-backed snapshot provider.

Each read runs in the threadpool with its own session, so the six reads of a
snapshot can proceed side by side.
"""
import logging
from typing import Callable, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from fortress.core.errors import DataUnavailable
from fortress.models.finance import Debt, Envelope, PaySchedule, VirtualAccount
from fortress.schemas import AccountOut, BillOut, DebtOut, EnvelopeOut, PayScheduleOut, SettingsOut
from fortress.services import db_service

logger = logging.getLogger(__name__)


class SqlSnapshotProvider:
    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def _read(self, what: str, query: Callable[[Session], object]):
        db = self.session_factory()
        try:
            return query(db)
        except SQLAlchemyError as e:
            logger.error("Snapshot read '%s' failed: %s", what, e)
            raise DataUnavailable(f"Could not read {what}") from e
        finally:
            db.close()

    async def _run(self, what: str, query: Callable[[Session], object]):
        return await run_in_threadpool(self._read, what, query)

    async def list_accounts(self, user_id: str) -> List[AccountOut]:
        return await self._run("accounts", lambda db: [
            AccountOut.model_validate(a) for a in db_service.list_for_user(db, VirtualAccount, user_id)
        ])

    async def list_envelopes(self, user_id: str) -> List[EnvelopeOut]:
        return await self._run("envelopes", lambda db: [
            EnvelopeOut.model_validate(e) for e in db_service.list_for_user(db, Envelope, user_id)
        ])

    async def list_debts(self, user_id: str) -> List[DebtOut]:
        return await self._run("debts", lambda db: [
            DebtOut.model_validate(d) for d in db_service.list_for_user(db, Debt, user_id)
        ])

    async def list_unpaid_bills(self, user_id: str) -> List[BillOut]:
        return await self._run("bills", lambda db: [
            BillOut.model_validate(b) for b in db_service.list_unpaid_bills(db, user_id)
        ])

    async def list_pay_schedules(self, user_id: str) -> List[PayScheduleOut]:
        return await self._run("pay schedules", lambda db: [
            PayScheduleOut.model_validate(s) for s in db_service.list_for_user(db, PaySchedule, user_id)
        ])

    async def get_settings(self, user_id: str) -> SettingsOut:
        return await self._run("settings", lambda db: SettingsOut.model_validate(
            db_service.get_or_create_settings(db, user_id)
        ))
