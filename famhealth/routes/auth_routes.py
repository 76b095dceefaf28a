# famhealth/routes/auth_routes.py
import logging

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from famhealth.auth.jwt import (
    create_access_token,
    hash_password,
    issue_tokens,
    verify_password,
    verify_refresh_token,
)
from famhealth.auth.schemas import AccessToken, LoginIn, RefreshIn, RegisterIn, TokenPair
from famhealth.db.session import get_db
from famhealth.models.user import User, UserProfile

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger("famhealth")


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=TokenPair)
def register(payload: RegisterIn = Body(...), db: Session = Depends(get_db)):
    """Create an account with an empty profile and return a token pair."""
    email = str(payload.email).lower()
    existing = db.query(User).filter(User.email == email).first()
    if existing:
        raise HTTPException(status_code=409, detail="User with this email already exists")

    user = User(
        email=email,
        hashed_password=hash_password(payload.password),
        name=(payload.name or "").strip() or None,
    )
    db.add(user)
    db.flush()
    db.add(UserProfile(user_id=user.id, onboarding_completed=False))
    db.commit()
    logger.info({"function": "register", "user_id": user.id})
    return issue_tokens(user)


@router.post("/login", response_model=TokenPair)
def login(payload: LoginIn = Body(...), db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == str(payload.email).lower()).first()
    if not user or not verify_password(payload.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return issue_tokens(user)


@router.post("/refresh", response_model=AccessToken)
def refresh(payload: RefreshIn, db: Session = Depends(get_db)):
    """Exchange a refresh token for a new access token."""
    data = verify_refresh_token(payload.refresh_token)
    if not data or not data.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid refresh token")
    user = db.query(User).filter(User.id == str(data["sub"])).first()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    access = create_access_token({"sub": str(user.id), "email": user.email})
    return {"access_token": access, "token_type": "bearer"}


@router.post("/logout")
def logout():
    # tokens are stateless; the client drops them
    return {"status": "signed_out"}
