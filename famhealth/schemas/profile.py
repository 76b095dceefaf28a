# famhealth/schemas/profile.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from famhealth.schemas.recommendations import Recommendation
from famhealth.schemas.results import TestResultOut


class UserProfileIn(BaseModel):
    name: Optional[str] = Field(default=None, max_length=120)
    age: Optional[int] = Field(default=None, ge=0, le=130)
    sex: Optional[str] = Field(default=None, description="male|female|other")
    height: Optional[str] = None
    weight: Optional[str] = None
    lifestyle: Optional[str] = None


class UserProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    name: Optional[str] = None
    age: Optional[int] = None
    sex: Optional[str] = None
    height: Optional[str] = None
    weight: Optional[str] = None
    lifestyle: Optional[str] = None
    onboarding_completed: bool = False


class OnboardingFamilyIn(BaseModel):
    relation: Optional[str] = None
    name: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0)
    is_alive: bool = True
    conditions: List[str] = Field(default_factory=list)


class OnboardingIn(UserProfileIn):
    """Everything collected by the first-run wizard.

    Medications, allergies and surgeries arrive as comma-separated text.
    """

    family_members: List[OnboardingFamilyIn] = Field(default_factory=list)
    current_conditions: List[str] = Field(default_factory=list)
    medications: Optional[str] = None
    allergies: Optional[str] = None
    surgeries: Optional[str] = None


class DashboardOut(BaseModel):
    profile: UserProfileOut
    my_conditions: List[str]
    recommendations: List[Recommendation]
    recent_results: List[TestResultOut]
    family_count: int
    stats: Dict[str, Any] = Field(default_factory=dict)
