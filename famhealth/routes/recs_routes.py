# famhealth/routes/recs_routes.py
import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from famhealth.auth.deps import get_current_user
from famhealth.db.session import get_db
from famhealth.schemas.recommendations import Recommendation, RecommendationsOut
from famhealth.services.recommendations import group_by_priority, recommend, top_recommendations
from famhealth.utils.app import load_recommendation_inputs

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])
logger = logging.getLogger("famhealth")


@router.get("", response_model=RecommendationsOut)
def get_recommendations(db: Session = Depends(get_db), user=Depends(get_current_user)):
    """
    Screening-test suggestions from the user's profile, family and own history.

    Computed on every request; nothing is persisted.
    """
    profile, family, history = load_recommendation_inputs(db, user.id)
    recs = recommend(profile, family, history)
    logger.info({"function": "get_recommendations", "user_id": str(user.id), "count": len(recs)})
    return {"recommendations": recs, "grouped": group_by_priority(recs)}


@router.get("/top", response_model=List[Recommendation])
def get_top_recommendations(
    limit: int = Query(6, ge=1, le=50),
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    profile, family, history = load_recommendation_inputs(db, user.id)
    return top_recommendations(recommend(profile, family, history), limit)
