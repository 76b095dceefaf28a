# famhealth/schemas/conditions.py
from typing import List, Optional

from pydantic import BaseModel, Field


class ConditionDetail(BaseModel):
    """One logged condition with its optional follow-up answers."""

    id: str
    label: str
    category: Optional[str] = None
    subtype: Optional[str] = None
    age_at_diagnosis: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None


class ConditionDetailIn(BaseModel):
    """Request body for adding a condition by catalog id or label."""

    condition: str = Field(..., min_length=1, max_length=120)
    subtype: Optional[str] = None
    age_at_diagnosis: Optional[int] = None
    notes: Optional[str] = Field(default=None, max_length=1000)


class ConditionOptionOut(BaseModel):
    id: str
    label: str
    category: Optional[str] = None
    follow_ups: List[str] = Field(default_factory=list)
    subtypes: List[str] = Field(default_factory=list)


class ConditionLookupOut(BaseModel):
    key: str
    label: str
    category: Optional[str] = None
    option: Optional[ConditionOptionOut] = None
