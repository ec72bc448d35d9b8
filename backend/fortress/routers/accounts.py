from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from fortress.database import get_db
from fortress.deps import get_user_id
from fortress.models.finance import VirtualAccount
from fortress.schemas import AccountOut, AccountUpdate
from fortress.services import db_service

router = APIRouter(tags=["accounts"])

# Accounts are created at onboarding and never deleted.

@router.get("/accounts", response_model=List[AccountOut])
def get_accounts(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    db_service.seed_user_data(db, user_id)
    return db_service.list_for_user(db, VirtualAccount, user_id)


@router.patch("/accounts/{account_id}", response_model=AccountOut)
def update_account(
    account_id: int,
    update_data: AccountUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    account = db_service.get_owned(db, VirtualAccount, account_id, user_id)
    if not account:
        raise HTTPException(status_code=404, detail="Account not found")
    return db_service.update_record(db, account, update_data.model_dump(exclude_unset=True))
