"""Thin client for the Gemini generateContent REST endpoint."""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger("famhealth")

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_MODEL = "gemini-2.5-flash-lite"
GENERATION_CONFIG = {"temperature": 0.7, "maxOutputTokens": 2048}


class GeminiError(Exception):
    """Upstream or configuration failure, carrying the HTTP status to report."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def gemini_api_key() -> str:
    return (os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or "").strip()


def gemini_model() -> str:
    return (os.getenv("GEMINI_MODEL") or DEFAULT_MODEL).strip()


def build_contents(message: str, history: Optional[List[Dict[str, Any]]] = None) -> List[Dict[str, Any]]:
    """Map prior turns to Gemini roles and append the new user message."""
    contents: List[Dict[str, Any]] = []
    for turn in history or []:
        role = turn.get("role")
        content = turn.get("content")
        if not role or not content:
            continue
        contents.append({
            "role": "user" if role == "user" else "model",
            "parts": [{"text": content}],
        })
    contents.append({"role": "user", "parts": [{"text": message}]})
    return contents


def _error_message(resp: httpx.Response) -> str:
    text = resp.text or ""
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
    if text:
        return text[:200]
    return "AI service error. Try again later."


def extract_text(data: Any) -> str:
    """First candidate's first text part, or "" when the body has another shape."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return ""
    text = parts[0].get("text")
    return text.strip() if isinstance(text, str) else ""


async def generate_reply(
    message: str,
    history: Optional[List[Dict[str, Any]]] = None,
    timeout_s: float = 30,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Send the transcript to Gemini and return the next assistant message.

    Raises GeminiError with 503 when no API key is configured, 502 for
    upstream errors or empty answers and 500 for transport failures.
    """
    api_key = gemini_api_key()
    if not api_key:
        raise GeminiError(503, "Chat is not configured. Missing GEMINI_API_KEY.")

    url = f"{GEMINI_BASE_URL}/{gemini_model()}:generateContent"
    payload = {
        "contents": build_contents(message, history),
        "generationConfig": GENERATION_CONFIG,
    }

    try:
        async with httpx.AsyncClient(timeout=timeout_s, transport=transport) as client:
            resp = await client.post(url, params={"key": api_key}, json=payload)
    except httpx.HTTPError as exc:
        logger.error({"function": "generate_reply", "error": str(exc)})
        raise GeminiError(500, str(exc) or "Network or server error.") from exc

    if resp.status_code >= 400:
        logger.warning({"function": "generate_reply", "upstream_status": resp.status_code})
        raise GeminiError(502, _error_message(resp))

    try:
        data = resp.json()
    except ValueError:
        logger.warning({"function": "generate_reply", "error": "non-JSON upstream body"})
        data = None

    text = extract_text(data)
    if not text:
        raise GeminiError(502, "No response from the model.")
    return text


__all__ = ["GeminiError", "build_contents", "generate_reply", "gemini_api_key"]
