"""
User Entity

Identity and credential record for a CMS account.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - identity, credentials and the current session.

    Business Rules:
    - Email is unique and stored lower-cased
    - Password stored as an Argon2id hash, never returned to clients
    - refresh_token holds the single live refresh token (None when logged out);
      login and refresh overwrite it, logout clears it
    - Users are never hard-deleted
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=255)

    role: UserRole = Field(default=UserRole.user)

    # Current refresh token
    refresh_token: Optional[str] = Field(default=None, max_length=1024)

    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookup (case-insensitive emails)"""
    return email.strip().lower()
