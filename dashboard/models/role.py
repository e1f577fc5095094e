"""Role ORM — flat role label referenced by users. Read-only for the pipeline."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dashboard.db.base import Base, new_id


class Role(Base):
    __tablename__ = "roles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
