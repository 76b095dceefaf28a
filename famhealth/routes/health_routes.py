# famhealth/routes/health_routes.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from famhealth.auth.deps import get_current_user
from famhealth.db.session import get_db
from famhealth.models.health_history import HealthHistory
from famhealth.schemas.conditions import ConditionDetailIn
from famhealth.schemas.health import HealthHistoryIn, HealthHistoryOut
from famhealth.services.conditions import (
    build_condition_detail,
    conditions_from_details,
    details_to_display_list,
)
from famhealth.utils.app import get_health_history, get_or_create_health_history

router = APIRouter(prefix="/api/health", tags=["health"])


def history_out(history: HealthHistory | None) -> HealthHistoryOut:
    if history is None:
        return HealthHistoryOut()
    return HealthHistoryOut(
        current_conditions=list(history.current_conditions or []),
        condition_details=list(history.condition_details or []),
        medications=list(history.medications or []),
        allergies=list(history.allergies or []),
        surgeries=list(history.surgeries or []),
        display_conditions=details_to_display_list(history.condition_details, history.current_conditions or []),
    )


@router.get("", response_model=HealthHistoryOut)
def get_history(db: Session = Depends(get_db), user=Depends(get_current_user)):
    return history_out(get_health_history(db, user.id))


@router.put("", response_model=HealthHistoryOut)
def update_history(payload: HealthHistoryIn, db: Session = Depends(get_db), user=Depends(get_current_user)):
    history = get_or_create_health_history(db, user.id)
    history.current_conditions = [c for c in payload.current_conditions if c]
    history.medications = [m.strip() for m in payload.medications if m.strip()]
    history.allergies = [a.strip() for a in payload.allergies if a.strip()]
    history.surgeries = [s.strip() for s in payload.surgeries if s.strip()]
    db.commit()
    db.refresh(history)
    return history_out(history)


@router.post("/conditions", status_code=201, response_model=HealthHistoryOut)
def add_condition(payload: ConditionDetailIn, db: Session = Depends(get_db), user=Depends(get_current_user)):
    try:
        detail = build_condition_detail(payload.condition, payload.subtype, payload.age_at_diagnosis, payload.notes)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    history = get_or_create_health_history(db, user.id)
    history.condition_details = list(history.condition_details or []) + [detail]
    history.current_conditions = list(history.current_conditions or []) + [detail.get("category") or detail["label"]]
    db.commit()
    db.refresh(history)
    return history_out(history)


@router.delete("/conditions/{index}", response_model=HealthHistoryOut)
def remove_condition(index: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    history = get_health_history(db, user.id)
    details = list(history.condition_details or []) if history else []
    if index < 0 or index >= len(details):
        raise HTTPException(status_code=404, detail="Condition not found")
    del details[index]
    history.condition_details = details
    history.current_conditions = conditions_from_details(details)
    db.commit()
    db.refresh(history)
    return history_out(history)
