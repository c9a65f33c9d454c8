"""
User Repository

Lookup of ledger account owners.
"""
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from loguru import logger

from cryptoledger.db.models.user import User


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        result = await self.db.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        email: str,
        full_name: str,
        phone: Optional[str] = None,
        is_verified: bool = False,
    ) -> User:
        """Insert a user row (flush only)."""
        user = User(
            email=email.lower(),
            full_name=full_name,
            phone=phone,
            is_verified=is_verified,
        )
        self.db.add(user)
        await self.db.flush()
        logger.info(f"Created ledger user {user.id}")
        return user
