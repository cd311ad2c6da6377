"""
User Model
Stores user credentials, confirmation state and role memberships.
"""

import secrets
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Integer, ForeignKey, Table, Index
from sqlalchemy.orm import relationship
from app.database import Base


def new_security_stamp() -> str:
    return secrets.token_hex(16)


user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base):
    """
    Named role. The application knows two: Admin and User.
    """
    __tablename__ = "roles"

    ADMIN = "Admin"
    USER = "User"

    id = Column(Integer, primary_key=True)
    name = Column(String(50), unique=True, nullable=False)

    def __repr__(self):
        return f"<Role(id={self.id}, name='{self.name}')>"


class User(Base):
    """
    User model for authentication.
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String(256), nullable=False)
    email = Column(String(256), nullable=False)
    # Upper-cased email, carries the case-insensitive unique constraint
    normalized_email = Column(String(256), nullable=False)
    hashed_password = Column(String(1024), nullable=False)
    full_name = Column(String(100), nullable=False, default="")
    email_confirmed = Column(Boolean, default=False, nullable=False)
    profile_picture = Column(String(512), nullable=True)
    security_stamp = Column(String(64), nullable=False, default=new_security_stamp)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    roles = relationship("Role", secondary=user_roles, lazy="selectin")

    __table_args__ = (
        Index('ix_users_normalized_email', 'normalized_email', unique=True),
    )

    @property
    def role_names(self) -> list[str]:
        return sorted(role.name for role in self.roles)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
