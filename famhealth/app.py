# --- imports (top of famhealth/app.py) ---
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

# Resolve paths early so env vars are available before importing the app modules
BASE_DIR = Path(__file__).resolve().parent
ROOT_DIR = BASE_DIR.parent
ENV_PATH = BASE_DIR / ".env"

if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

# values already in the environment (CI, tests) win over .env
load_dotenv(ENV_PATH, override=False)

from slowapi.middleware import SlowAPIMiddleware  # noqa: E402

from famhealth.auth.jwt import hash_password  # noqa: E402
from famhealth.db.session import SessionLocal  # noqa: E402
from famhealth.middleware.tracing import TracingMiddleware  # noqa: E402
from famhealth.models import init_db  # noqa: E402
from famhealth.models.user import User, UserProfile  # noqa: E402
from famhealth.routes import (  # noqa: E402
    auth_routes,
    chat_routes,
    conditions_routes,
    family_routes,
    health_routes,
    medications_routes,
    profile_routes,
    recs_routes,
    results_routes,
)
from famhealth.services.storage import DEFAULT_UPLOAD_DIR  # noqa: E402
from famhealth.utils.exceptions import register_exception_handlers  # noqa: E402
from famhealth.utils.limiter import limiter  # noqa: E402
from famhealth.utils.logging import configure_logging  # noqa: E402

logger = configure_logging()

app = FastAPI(title="FamHealth Backend", version="0.1.0")

# ---- Rate limiting (slowapi) ----
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(TracingMiddleware)
register_exception_handlers(app)


def _cors_origins() -> list:
    raw = os.getenv("CORS_ORIGINS") or "http://localhost:5173,http://127.0.0.1:5173"
    return [o.strip() for o in raw.split(",") if o.strip()]


app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _maybe_seed_demo_user() -> None:
    email = (os.getenv("DEMO_USER_EMAIL") or "").strip().lower()
    password = os.getenv("DEMO_USER_PASSWORD") or ""
    name = (os.getenv("DEMO_USER_NAME", "Demo User") or "").strip()

    if not email or not password:
        return

    with SessionLocal() as db:
        if db.query(User).filter(User.email == email).first():
            return
        user = User(email=email, hashed_password=hash_password(password), name=name or None)
        db.add(user)
        db.flush()
        db.add(UserProfile(user_id=user.id, onboarding_completed=False))
        db.commit()
    logger.info({"function": "seed_demo_user", "email": email})


@app.on_event("startup")
def _init_db():
    DEFAULT_UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    init_db()
    _maybe_seed_demo_user()


app.include_router(auth_routes.router)
app.include_router(profile_routes.router)
app.include_router(family_routes.router)
app.include_router(health_routes.router)
app.include_router(conditions_routes.router)
app.include_router(recs_routes.router)
app.include_router(medications_routes.router)
app.include_router(results_routes.router)
app.include_router(chat_routes.router)

# uploaded results are served as static files under FILES_BASE_URL
app.mount("/files", StaticFiles(directory=str(DEFAULT_UPLOAD_DIR), check_dir=False), name="files")


@app.get("/healthz")
def healthz():
    return {"status": "ok"}
