"""Repository for mentor data access."""

from sqlalchemy.orm import selectinload

from app.models.mentor import Mentor
from app.repositories.base import BaseRepository


class MentorRepository(BaseRepository[Mentor]):
    model = Mentor
    list_options = (selectinload(Mentor.classes),)
    detail_options = list_options
