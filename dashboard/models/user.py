"""User ORM — a team member with an optional role.

Invariants:
    - email is unique across all users
    - password is "" until set by the (separate) credential flow
    - role_id is nullable: a member may have no role
"""

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from dashboard.db.base import Base, new_id

USERS_EMAIL_CONSTRAINT = "uq_users_email"


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", name=USERS_EMAIL_CONSTRAINT),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password: Mapped[str] = mapped_column(Text, nullable=False, default="")
    role_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("roles.id"), nullable=True, index=True,
    )
