from typing import Optional

from fastapi import Depends, Header, HTTPException

from fortress.core.clock import Clock, SystemClock
from fortress.core.config import Policy
from fortress.database import get_session_factory
from fortress.services.advisor_service import CompletionClient, get_completion_client
from fortress.services.snapshot_service import SqlSnapshotProvider

_system_clock = SystemClock()


def get_user_id(x_user_id: Optional[str] = Header(None, alias="X-User-Id")) -> str:
    """
    Owner id of every record touched by the request.
    Authentication happens upstream; this only reads the resolved id.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Authentication required (X-User-Id)")
    return x_user_id.strip()


def get_clock() -> Clock:
    return _system_clock


def get_policy() -> Policy:
    return Policy.from_settings()


def get_snapshot_provider(session_factory=Depends(get_session_factory)) -> SqlSnapshotProvider:
    return SqlSnapshotProvider(session_factory)


def get_advisor_client() -> Optional[CompletionClient]:
    return get_completion_client()
