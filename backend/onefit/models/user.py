from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, Float, Text
from onefit.db import Base
from onefit.models.base import SoftDeleteMixin

class User(SoftDeleteMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    # Subject claim of the identity provider's token
    external_uid: Mapped[str] = mapped_column(String(128), unique=True, index=True, nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), index=True, nullable=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, server_default="")

    # Body metrics (cm / kg)
    height: Mapped[float | None] = mapped_column(Float, nullable=True)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Free-form client blobs
    goals: Mapped[str | None] = mapped_column(Text, nullable=True)
    settings: Mapped[str | None] = mapped_column(Text, nullable=True)
