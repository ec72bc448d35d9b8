from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
from typing import List
from fortress.database import get_db
from fortress.deps import get_user_id
from fortress.models.finance import Envelope
from fortress.schemas import EnvelopeCreate, EnvelopeOut, EnvelopeUpdate
from fortress.services import db_service

router = APIRouter(tags=["envelopes"])


@router.get("/envelopes", response_model=List[EnvelopeOut])
def get_envelopes(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    """
    All envelopes of the user. First visit seeds the starter budget.
    """
    db_service.seed_user_data(db, user_id)
    return db_service.list_for_user(db, Envelope, user_id)


@router.post("/envelopes", response_model=EnvelopeOut, status_code=201)
def create_envelope(
    envelope: EnvelopeCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    data = envelope.model_dump()
    if data["current_balance"] is None:
        data["current_balance"] = data["budget_amount"]
    return db_service.create_record(db, Envelope, user_id, data)


@router.patch("/envelopes/{envelope_id}", response_model=EnvelopeOut)
def update_envelope(
    envelope_id: int,
    update_data: EnvelopeUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    envelope = db_service.get_owned(db, Envelope, envelope_id, user_id)
    if not envelope:
        raise HTTPException(status_code=404, detail="Envelope not found")
    return db_service.update_record(db, envelope, update_data.model_dump(exclude_unset=True))


@router.delete("/envelopes/{envelope_id}", status_code=204)
def delete_envelope(
    envelope_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    envelope = db_service.get_owned(db, Envelope, envelope_id, user_id)
    if not envelope:
        raise HTTPException(status_code=404, detail="Envelope not found")
    db_service.delete_record(db, envelope)
    return Response(status_code=204)
