from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
from typing import List
from fortress.database import get_db
from fortress.deps import get_user_id
from fortress.models.finance import Transaction
from fortress.schemas import TransactionCreate, TransactionOut, TransactionUpdate
from fortress.services import db_service

router = APIRouter(tags=["transactions"])

# Recording a transaction does not move account or envelope balances.

@router.get("/transactions", response_model=List[TransactionOut])
def get_transactions(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    return (
        db.query(Transaction)
        .filter(Transaction.user_id == user_id)
        .order_by(Transaction.date.desc(), Transaction.id.desc())
        .all()
    )


@router.post("/transactions", response_model=TransactionOut, status_code=201)
def create_transaction(
    transaction: TransactionCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    data = transaction.model_dump()
    data["type"] = transaction.type.value
    if data["date"] is None:
        data["date"] = datetime.utcnow()
    if not data["is_write_off"]:
        data["write_off_category"] = None
    return db_service.create_record(db, Transaction, user_id, data)


@router.patch("/transactions/{transaction_id}", response_model=TransactionOut)
def update_transaction(
    transaction_id: int,
    update_data: TransactionUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    transaction = db_service.get_owned(db, Transaction, transaction_id, user_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    changes = update_data.model_dump(exclude_unset=True)
    if changes.get("type") is not None:
        changes["type"] = changes["type"].value
    return db_service.update_record(db, transaction, changes)


@router.delete("/transactions/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    transaction = db_service.get_owned(db, Transaction, transaction_id, user_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    db_service.delete_record(db, transaction)
    return Response(status_code=204)
