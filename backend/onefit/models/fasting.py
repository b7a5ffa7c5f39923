from datetime import datetime
from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, DateTime, String, Text, Boolean, Enum as SAEnum, false
from onefit.db import Base
from onefit.models.base import SoftDeleteMixin

class FastingStatus(str, Enum):
    ongoing = "ONGOING"
    completed = "COMPLETED"
    cancelled = "CANCELLED"

class FastType(SoftDeleteMixin, Base):
    """Fasting protocol such as 16:8."""

    __tablename__ = "fast_types"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    target_hours: Mapped[int] = mapped_column(Integer, nullable=False)
    is_custom: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=True)

class FastSession(SoftDeleteMixin, Base):
    __tablename__ = "fast_sessions"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    fast_type_id: Mapped[int | None] = mapped_column(ForeignKey("fast_types.id"), nullable=True)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    target_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False)  # "16:8", "OMAD", "custom", ...
    status: Mapped[FastingStatus] = mapped_column(
        SAEnum(FastingStatus, name="fasting_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=FastingStatus.ongoing,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    fast_type = relationship("FastType", lazy="selectin")
