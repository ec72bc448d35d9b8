from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
from typing import List
from fortress.database import get_db
from fortress.deps import get_user_id
from fortress.models.finance import PaySchedule
from fortress.schemas import (
    PayScheduleCreate,
    PayScheduleOut,
    PayScheduleUpdate,
    SettingsOut,
    SettingsUpdate,
)
from fortress.services import db_service

router = APIRouter(tags=["pay-schedules", "settings"])


@router.get("/pay-schedules", response_model=List[PayScheduleOut])
def get_pay_schedules(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    return db_service.list_for_user(db, PaySchedule, user_id)


@router.post("/pay-schedules", response_model=PayScheduleOut, status_code=201)
def create_pay_schedule(
    schedule: PayScheduleCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    data = schedule.model_dump()
    data["frequency"] = schedule.frequency.value
    return db_service.create_record(db, PaySchedule, user_id, data)


@router.patch("/pay-schedules/{schedule_id}", response_model=PayScheduleOut)
def update_pay_schedule(
    schedule_id: int,
    update_data: PayScheduleUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    schedule = db_service.get_owned(db, PaySchedule, schedule_id, user_id)
    if not schedule:
        raise HTTPException(status_code=404, detail="Pay schedule not found")
    changes = update_data.model_dump(exclude_unset=True)
    if changes.get("frequency") is not None:
        changes["frequency"] = changes["frequency"].value
    return db_service.update_record(db, schedule, changes)


@router.delete("/pay-schedules/{schedule_id}", status_code=204)
def delete_pay_schedule(
    schedule_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    schedule = db_service.get_owned(db, PaySchedule, schedule_id, user_id)
    if not schedule:
        raise HTTPException(status_code=404, detail="Pay schedule not found")
    db_service.delete_record(db, schedule)
    return Response(status_code=204)


@router.get("/settings", response_model=SettingsOut)
def get_settings(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    return db_service.get_or_create_settings(db, user_id)


@router.patch("/settings", response_model=SettingsOut)
def update_settings(
    update_data: SettingsUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    return db_service.update_settings(db, user_id, update_data.model_dump(exclude_unset=True))
