import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from famhealth.db.session import Base
from famhealth.utils.encryption import EncryptedJSON, EncryptedText


def uuid_col_type():
    # String(36) everywhere so ids compare the same on SQLite and Postgres
    return String(36)


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
    )

    id: Mapped[str] = mapped_column(
        uuid_col_type(),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP")
    )

    profile: Mapped["UserProfile"] = relationship(
        "UserProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan"
    )
    health_history: Mapped[Optional["HealthHistory"]] = relationship(
        "HealthHistory",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan"
    )
    family_members: Mapped[List["FamilyMember"]] = relationship(
        "FamilyMember",
        back_populates="user",
        cascade="all, delete-orphan"
    )
    test_results: Mapped[List["TestResult"]] = relationship(
        "TestResult",
        back_populates="user",
        cascade="all, delete-orphan"
    )
    chat_logs: Mapped[List["ChatLog"]] = relationship(
        "ChatLog",
        back_populates="user",
        cascade="all, delete-orphan"
    )


class UserProfile(Base):
    """
    Demographics used by the recommendation rules, plus onboarding state.
    """
    __tablename__ = "user_profile"

    user_id: Mapped[str] = mapped_column(
        uuid_col_type(),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )

    age: Mapped[Optional[int]] = mapped_column(EncryptedJSON, nullable=True)
    sex: Mapped[Optional[str]] = mapped_column(EncryptedText, nullable=True)  # "male"|"female"|"other"|None
    height: Mapped[Optional[str]] = mapped_column(EncryptedText, nullable=True)
    weight: Mapped[Optional[str]] = mapped_column(EncryptedText, nullable=True)
    lifestyle: Mapped[Optional[str]] = mapped_column(EncryptedText, nullable=True)
    onboarding_completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        server_onupdate=text("CURRENT_TIMESTAMP")
    )

    user: Mapped["User"] = relationship("User", back_populates="profile")
