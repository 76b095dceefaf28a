# famhealth/schemas/recommendations.py
from typing import Dict, List, Literal

from pydantic import BaseModel

Priority = Literal["high", "medium", "routine"]


class Recommendation(BaseModel):
    test: str
    reason: str
    frequency: str
    priority: Priority


class RecommendationsOut(BaseModel):
    recommendations: List[Recommendation]
    grouped: Dict[str, List[Recommendation]]
