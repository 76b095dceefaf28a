# famhealth/schemas/chat.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatTurn(BaseModel):
    role: str
    content: str


class ChatIn(BaseModel):
    message: str = Field(..., max_length=8000)
    messages: List[ChatTurn] = Field(default_factory=list)


class ChatOut(BaseModel):
    text: str


class AskIn(BaseModel):
    """Either a free-form message or a guided topic plus details."""

    message: Optional[str] = Field(default=None, max_length=4000)
    topic: Optional[str] = None
    details: Optional[str] = Field(default=None, max_length=4000)


class AskOut(BaseModel):
    question: str
    answer: str


class ChatLogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    message: str
    response: str
    source: Literal["model", "canned"]
    created_at: Optional[datetime] = None
