from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
from typing import List
from fortress.database import get_db
from fortress.deps import get_user_id
from fortress.models.finance import Bill
from fortress.schemas import BillCreate, BillOut, BillUpdate
from fortress.services import db_service

router = APIRouter(tags=["bills"])


@router.get("/bills", response_model=List[BillOut])
def get_bills(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    db_service.seed_user_data(db, user_id)
    return db_service.list_for_user(db, Bill, user_id)


@router.post("/bills", response_model=BillOut, status_code=201)
def create_bill(
    bill: BillCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    data = db_service.mark_paid_date(bill.model_dump())
    return db_service.create_record(db, Bill, user_id, data)


@router.patch("/bills/{bill_id}", response_model=BillOut)
def update_bill(
    bill_id: int,
    update_data: BillUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    """
    Partial update. Marking a bill paid stamps paidDate unless one is given.
    """
    bill = db_service.get_owned(db, Bill, bill_id, user_id)
    if not bill:
        raise HTTPException(status_code=404, detail="Bill not found")
    changes = db_service.mark_paid_date(update_data.model_dump(exclude_unset=True))
    return db_service.update_record(db, bill, changes)


@router.delete("/bills/{bill_id}", status_code=204)
def delete_bill(
    bill_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    bill = db_service.get_owned(db, Bill, bill_id, user_id)
    if not bill:
        raise HTTPException(status_code=404, detail="Bill not found")
    db_service.delete_record(db, bill)
    return Response(status_code=204)
