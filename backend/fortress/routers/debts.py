from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
from typing import List
from fortress.database import get_db
from fortress.deps import get_user_id
from fortress.models.finance import Debt
from fortress.schemas import DebtCreate, DebtOut, DebtUpdate
from fortress.services import db_service

router = APIRouter(tags=["debts"])


@router.get("/debts", response_model=List[DebtOut])
def get_debts(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    db_service.seed_user_data(db, user_id)
    return db_service.list_for_user(db, Debt, user_id)


@router.post("/debts", response_model=DebtOut, status_code=201)
def create_debt(
    debt: DebtCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    return db_service.create_record(db, Debt, user_id, debt.model_dump())


@router.patch("/debts/{debt_id}", response_model=DebtOut)
def update_debt(
    debt_id: int,
    update_data: DebtUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    """
    Partial update, e.g. register a payment by lowering currentBalance.
    """
    debt = db_service.get_owned(db, Debt, debt_id, user_id)
    if not debt:
        raise HTTPException(status_code=404, detail="Debt not found")
    return db_service.update_record(db, debt, update_data.model_dump(exclude_unset=True))


@router.delete("/debts/{debt_id}", status_code=204)
def delete_debt(
    debt_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    debt = db_service.get_owned(db, Debt, debt_id, user_id)
    if not debt:
        raise HTTPException(status_code=404, detail="Debt not found")
    db_service.delete_record(db, debt)
    return Response(status_code=204)
