from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, ForeignKey, String, Text, Boolean, false
from onefit.db import Base
from onefit.models.base import SoftDeleteMixin

class Exercise(SoftDeleteMixin, Base):
    """Catalog entry. Built-ins have no creator; customs belong to ``created_by_user_id``."""

    __tablename__ = "exercises"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    # Comma-separated, e.g. "chest,shoulders,triceps"
    muscle_groups: Mapped[str] = mapped_column(String(255), nullable=False, default="", server_default="")
    equipment: Mapped[str] = mapped_column(String(120), nullable=False, default="", server_default="")
    instructions: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    is_custom: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    created_by_user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )
