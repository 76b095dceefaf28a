from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address, default_limits=[])


def user_rate_key(request: Request) -> str:
    """Per-user key when a route recorded the user id on request state; otherwise the client IP."""
    uid = getattr(request.state, "user_id", None)
    if uid:
        return str(uid)
    return get_remote_address(request)
