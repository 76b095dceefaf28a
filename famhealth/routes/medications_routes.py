# famhealth/routes/medications_routes.py
from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from famhealth.auth.deps import get_current_user
from famhealth.db.session import get_db
from famhealth.services.medications import medication_insights
from famhealth.utils.app import get_health_history, list_family_members

router = APIRouter(prefix="/api/medications", tags=["medications"])


@router.get("", response_model=Dict[str, Any])
def get_medications(db: Session = Depends(get_db), user=Depends(get_current_user)):
    return medication_insights(get_health_history(db, user.id), list_family_members(db, user.id))
