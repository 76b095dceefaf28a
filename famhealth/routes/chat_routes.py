"""Chat with the hosted model plus the guided, model-free "Ask" flow."""

import logging
from typing import List

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from famhealth.auth.deps import get_current_user
from famhealth.db.session import get_db
from famhealth.models.chat_log import ChatLog
from famhealth.schemas.chat import AskIn, AskOut, ChatIn, ChatLogOut, ChatOut
from famhealth.services import gemini
from famhealth.services.ask import build_question, generate_canned_response
from famhealth.utils.app import load_recommendation_inputs
from famhealth.utils.limiter import limiter

router = APIRouter(prefix="/api", tags=["chat"])
logger = logging.getLogger("famhealth")


def _log_exchange(db: Session, user_id: str, message: str, response: str, source: str) -> None:
    db.add(ChatLog(user_id=str(user_id), message=message, response=response, source=source))
    db.commit()


@router.post("/chat", response_model=ChatOut)
@limiter.limit("30/minute")
async def chat(
    request: Request,
    payload: ChatIn = Body(...),
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    if not gemini.gemini_api_key():
        raise HTTPException(status_code=503, detail="Chat is not configured. Missing GEMINI_API_KEY.")
    message = (payload.message or "").strip()
    if not message:
        raise HTTPException(status_code=400, detail="Message cannot be empty.")

    history = [turn.model_dump() for turn in payload.messages]
    try:
        text = await gemini.generate_reply(message, history)
    except gemini.GeminiError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)

    await run_in_threadpool(_log_exchange, db, user.id, message, text, "model")
    logger.info({"function": "chat", "user_id": str(user.id), "turns": len(history) + 1})
    return {"text": text}


@router.post("/ask", response_model=AskOut)
def ask(payload: AskIn = Body(...), db: Session = Depends(get_db), user=Depends(get_current_user)):
    """Answer from canned templates filled with the user's records; no model call."""
    question = (payload.message or "").strip()
    if not question:
        if not payload.topic:
            raise HTTPException(status_code=400, detail="Provide a message or a topic.")
        question = build_question(payload.topic, payload.details)

    profile, family, history = load_recommendation_inputs(db, user.id)
    answer = generate_canned_response(question, profile, family, history)
    _log_exchange(db, user.id, question, answer, "canned")
    return {"question": question, "answer": answer}


@router.get("/chat/logs", response_model=List[ChatLogOut])
def chat_logs(
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return (
        db.query(ChatLog)
        .filter(ChatLog.user_id == str(user.id))
        .order_by(ChatLog.created_at.desc())
        .limit(limit)
        .all()
    )
