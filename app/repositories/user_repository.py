"""Repository for staff account data access."""

from sqlalchemy import func, select

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Data access layer for users. Passwords arrive here already hashed."""

    model = User
    duplicate_message = "Email is already registered"

    async def get_by_email(self, email: str) -> User | None:
        query = select(User).where(func.lower(User.email) == email.lower())
        result = await self.session.execute(query)
        return result.scalar_one_or_none()
