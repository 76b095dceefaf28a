import uuid
from datetime import datetime

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from famhealth.db.session import Base
from famhealth.utils.encryption import EncryptedText


class ChatLog(Base):
    __tablename__ = "chat_logs"

    id: Mapped[str] = mapped_column(sa.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(sa.ForeignKey("users.id", ondelete="CASCADE"), index=True)

    message: Mapped[str] = mapped_column(EncryptedText, nullable=False)
    response: Mapped[str] = mapped_column(EncryptedText, nullable=False)
    source: Mapped[str] = mapped_column(sa.String(16), nullable=False, default="model")  # "model" | "canned"

    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=func.now()
    )

    user = relationship("User", back_populates="chat_logs")
