# famhealth/routes/conditions_routes.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from famhealth.auth.deps import get_current_user
from famhealth.schemas.conditions import ConditionLookupOut, ConditionOptionOut
from famhealth.services.conditions import (
    ALL_CONDITIONS,
    category_for_condition,
    condition_label,
    lookup_condition,
)

router = APIRouter(prefix="/api/conditions", tags=["conditions"])


@router.get("", response_model=List[ConditionOptionOut])
def list_conditions(user=Depends(get_current_user)):
    return [c.to_dict() for c in ALL_CONDITIONS]


@router.get("/{key}", response_model=ConditionLookupOut)
def get_condition(key: str, user=Depends(get_current_user)):
    """Resolve an id, label or category name against the catalog."""
    category = category_for_condition(key, strict=True)
    if category is None:
        raise HTTPException(status_code=404, detail="Unknown condition")
    option = lookup_condition(key)
    return {
        "key": key,
        "label": condition_label(key),
        "category": category,
        "option": option.to_dict() if option else None,
    }
