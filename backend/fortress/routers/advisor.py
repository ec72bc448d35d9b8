from typing import Optional

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from fortress.core.snapshot import SnapshotProvider, read_snapshot
from fortress.deps import get_advisor_client, get_snapshot_provider, get_user_id
from fortress.schemas import AdvisorRequest, AdvisorResponse
from fortress.services.advisor_service import CompletionClient, ask_advisor

router = APIRouter(tags=["advisor"])


@router.post("/advisor", response_model=AdvisorResponse)
async def chat_with_advisor(
    payload: AdvisorRequest,
    user_id: str = Depends(get_user_id),
    provider: SnapshotProvider = Depends(get_snapshot_provider),
    client: Optional[CompletionClient] = Depends(get_advisor_client),
):
    """
    Forwards the question to the advisor with the user's current numbers as context.
    """
    snapshot = await read_snapshot(provider, user_id)
    text = await run_in_threadpool(ask_advisor, client, snapshot, payload.message)
    return {"response": text}
