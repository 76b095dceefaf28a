import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from famhealth.db.session import Base
from famhealth.utils.encryption import EncryptedJSON, EncryptedText

CHILD_RELATIONS = ("Son", "Daughter")


class FamilyMember(Base):
    __tablename__ = "family_members"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )

    relation: Mapped[str] = mapped_column(String(40), nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    age: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    is_alive: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=text("true"))
    age_at_death: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    cause_of_death: Mapped[Optional[str]] = mapped_column(EncryptedText, nullable=True)

    # flat category/label list used for matching; details carry follow-up answers
    condition_list: Mapped[Optional[list]] = mapped_column(EncryptedJSON, nullable=True, default=list)
    condition_details: Mapped[Optional[list]] = mapped_column(EncryptedJSON, nullable=True, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    user = relationship("User", back_populates="family_members")
