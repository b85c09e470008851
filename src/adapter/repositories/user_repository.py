from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository, StorageError
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        try:
            result = await self.session.exec(stmt)
            return result.one_or_none()
        except SQLAlchemyError as exc:
            raise StorageError("Failed to load user by email") from exc

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        try:
            result = await self.session.exec(stmt)
            return result.one_or_none()
        except SQLAlchemyError as exc:
            raise StorageError("Failed to load user by id") from exc

    async def create(self, user: User) -> User:
        """Create a new user"""
        try:
            self.session.add(user)
            await self.session.flush()
            await self.session.refresh(user)
        except SQLAlchemyError as exc:
            raise StorageError("Failed to create user") from exc
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        try:
            self.session.add(user)
            await self.session.flush()
            await self.session.refresh(user)
        except SQLAlchemyError as exc:
            raise StorageError("Failed to update user") from exc
        return user

    async def swap_refresh_token(
        self, user_id: UUID, expected: Optional[str], new: Optional[str]
    ) -> bool:
        """Conditional UPDATE so concurrent rotations of the same token have one winner"""
        if expected is None:
            condition = User.refresh_token.is_(None)
        else:
            condition = User.refresh_token == expected
        stmt = (
            update(User)
            .where(User.id == user_id, condition)
            .values(refresh_token=new)
        )
        try:
            # rowcount comes from the CursorResult that execute() returns
            result = await self.session.execute(stmt)
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise StorageError("Failed to rotate refresh token") from exc
        return result.rowcount > 0
