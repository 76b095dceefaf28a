# famhealth/schemas/family.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from famhealth.schemas.conditions import ConditionDetail


class FamilyMemberIn(BaseModel):
    relation: str = Field(..., min_length=1, max_length=40)
    name: Optional[str] = Field(default=None, max_length=120)
    age: Optional[int] = Field(default=None, ge=0, le=130)
    is_alive: bool = True
    age_at_death: Optional[int] = Field(default=None, ge=0, le=130)
    cause_of_death: Optional[str] = None
    condition_list: List[str] = Field(default_factory=list)


class FamilyMemberOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    relation: str
    name: Optional[str] = None
    age: Optional[int] = None
    is_alive: bool = True
    age_at_death: Optional[int] = None
    cause_of_death: Optional[str] = None
    condition_list: List[str] = Field(default_factory=list)
    condition_details: List[ConditionDetail] = Field(default_factory=list)
    display_conditions: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
