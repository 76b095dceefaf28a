# famhealth/routes/profile_routes.py
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from famhealth.auth.deps import get_current_user
from famhealth.db.session import get_db
from famhealth.models.family_member import FamilyMember
from famhealth.models.test_result import TestResult
from famhealth.models.user import UserProfile
from famhealth.routes.results_routes import result_out
from famhealth.schemas.profile import DashboardOut, OnboardingIn, UserProfileIn, UserProfileOut
from famhealth.services.conditions import details_from_labels, details_to_display_list
from famhealth.services.recommendations import recommend, top_recommendations
from famhealth.utils.app import (
    get_or_create_health_history,
    get_or_create_profile,
    load_recommendation_inputs,
    split_csv,
)

router = APIRouter(prefix="/api", tags=["profile"])
logger = logging.getLogger("famhealth")

PROFILE_FIELDS = ("age", "sex", "height", "weight", "lifestyle")


def _profile_out(prof: UserProfile, user) -> UserProfileOut:
    out = UserProfileOut.model_validate(prof, from_attributes=True)
    out.name = getattr(user, "name", None)
    return out


def _apply_profile(prof: UserProfile, user, payload: UserProfileIn) -> None:
    for field in PROFILE_FIELDS:
        setattr(prof, field, getattr(payload, field))
    if payload.name is not None:
        # the current user row is loaded through the same session
        user.name = payload.name.strip() or None


@router.get("/profile", response_model=UserProfileOut)
def get_profile(db: Session = Depends(get_db), user=Depends(get_current_user)):
    prof = get_or_create_profile(db, user.id)
    return _profile_out(prof, user)


@router.put("/profile", response_model=UserProfileOut)
def upsert_profile(
    payload: UserProfileIn,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    prof = get_or_create_profile(db, user.id)
    _apply_profile(prof, user, payload)
    db.commit()
    db.refresh(prof)
    return _profile_out(prof, user)


@router.post("/onboarding", response_model=UserProfileOut)
def complete_onboarding(
    payload: OnboardingIn,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    """Store the first-run wizard answers and mark onboarding as done."""
    prof = get_or_create_profile(db, user.id)
    _apply_profile(prof, user, payload)

    added = 0
    for entry in payload.family_members:
        relation = (entry.relation or "").strip()
        if not relation:
            continue
        labels = [c for c in entry.conditions if c]
        db.add(FamilyMember(
            user_id=str(user.id),
            relation=relation,
            name=(entry.name or "").strip() or None,
            age=entry.age,
            is_alive=entry.is_alive,
            condition_list=labels,
            condition_details=details_from_labels(labels),
        ))
        added += 1

    history = get_or_create_health_history(db, user.id)
    history.current_conditions = [c for c in payload.current_conditions if c]
    history.medications = split_csv(payload.medications)
    history.allergies = split_csv(payload.allergies)
    history.surgeries = split_csv(payload.surgeries)

    prof.onboarding_completed = True
    db.commit()
    db.refresh(prof)
    logger.info({"function": "complete_onboarding", "user_id": str(user.id), "family_members": added})
    return _profile_out(prof, user)


@router.get("/dashboard", response_model=DashboardOut)
def dashboard(db: Session = Depends(get_db), user=Depends(get_current_user)):
    profile, family, history = load_recommendation_inputs(db, user.id)
    if not profile.onboarding_completed:
        raise HTTPException(status_code=409, detail="Onboarding not completed")

    my_conditions = details_to_display_list(
        history.condition_details if history else None,
        history.current_conditions if history else [],
    )
    recs = recommend(profile, family, history)
    results = (
        db.query(TestResult)
        .filter(TestResult.user_id == str(user.id))
        .order_by(TestResult.created_at.desc())
        .limit(3)
        .all()
    )
    return {
        "profile": _profile_out(profile, user),
        "my_conditions": my_conditions,
        "recommendations": top_recommendations(recs, 6),
        "recent_results": [result_out(r) for r in results],
        "family_count": len(family),
        "stats": {
            "recommendations_total": len(recs),
            "high_priority": sum(1 for r in recs if r["priority"] == "high"),
            "medications": len(history.medications or []) if history else 0,
        },
    }
