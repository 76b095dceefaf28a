"""Per-user record loaders shared by the route modules."""
from typing import List, Tuple

from sqlalchemy.orm import Session

from famhealth.models.family_member import FamilyMember
from famhealth.models.health_history import HealthHistory
from famhealth.models.user import UserProfile


def get_or_create_profile(db: Session, user_id: str) -> UserProfile:
    prof = db.query(UserProfile).filter(UserProfile.user_id == str(user_id)).first()
    if not prof:
        # empty profile on first read
        prof = UserProfile(user_id=str(user_id), onboarding_completed=False)
        db.add(prof)
        db.commit()
        db.refresh(prof)
    return prof


def get_health_history(db: Session, user_id: str) -> HealthHistory | None:
    return db.query(HealthHistory).filter(HealthHistory.user_id == str(user_id)).first()


def get_or_create_health_history(db: Session, user_id: str) -> HealthHistory:
    history = get_health_history(db, user_id)
    if not history:
        history = HealthHistory(
            user_id=str(user_id),
            current_conditions=[],
            condition_details=[],
            medications=[],
            allergies=[],
            surgeries=[],
        )
        db.add(history)
        db.flush()
    return history


def list_family_members(db: Session, user_id: str) -> List[FamilyMember]:
    return (
        db.query(FamilyMember)
        .filter(FamilyMember.user_id == str(user_id))
        .order_by(FamilyMember.created_at.asc())
        .all()
    )


def load_recommendation_inputs(db: Session, user_id: str) -> Tuple[UserProfile, List[FamilyMember], HealthHistory | None]:
    """Profile, family members and health history, in the order the engine takes them."""
    return (
        get_or_create_profile(db, user_id),
        list_family_members(db, user_id),
        get_health_history(db, user_id),
    )


def split_csv(value: str | None) -> List[str]:
    """Split comma-separated free text into trimmed, non-empty items."""
    return [part.strip() for part in (value or "").split(",") if part.strip()]
