# famhealth/schemas/results.py
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ManualResultIn(BaseModel):
    content: str = Field(..., max_length=10000)
    family_member_id: Optional[str] = None


class TestResultOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    family_member_id: Optional[str] = None
    type: Literal["manual", "file"]
    content: Optional[str] = None
    file_path: Optional[str] = None
    public_url: Optional[str] = None
    created_at: Optional[datetime] = None
