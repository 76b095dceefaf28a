import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from famhealth.db.session import Base
from famhealth.utils.encryption import EncryptedJSON


class HealthHistory(Base):
    """The user's own conditions, medications, allergies and surgeries (one row per user)."""
    __tablename__ = "health_history"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, index=True, nullable=False
    )

    current_conditions: Mapped[Optional[list]] = mapped_column(EncryptedJSON, nullable=True, default=list)
    condition_details: Mapped[Optional[list]] = mapped_column(EncryptedJSON, nullable=True, default=list)
    medications: Mapped[Optional[list]] = mapped_column(EncryptedJSON, nullable=True, default=list)
    allergies: Mapped[Optional[list]] = mapped_column(EncryptedJSON, nullable=True, default=list)
    surgeries: Mapped[Optional[list]] = mapped_column(EncryptedJSON, nullable=True, default=list)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        server_onupdate=text("CURRENT_TIMESTAMP"),
    )

    user = relationship("User", back_populates="health_history")
