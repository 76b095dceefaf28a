# famhealth/schemas/health.py
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from famhealth.schemas.conditions import ConditionDetail


class HealthHistoryIn(BaseModel):
    current_conditions: List[str] = Field(default_factory=list)
    medications: List[str] = Field(default_factory=list)
    allergies: List[str] = Field(default_factory=list)
    surgeries: List[str] = Field(default_factory=list)


class HealthHistoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    current_conditions: List[str] = Field(default_factory=list)
    condition_details: List[ConditionDetail] = Field(default_factory=list)
    medications: List[str] = Field(default_factory=list)
    allergies: List[str] = Field(default_factory=list)
    surgeries: List[str] = Field(default_factory=list)
    display_conditions: List[str] = Field(default_factory=list)
