from typing import Optional, Sequence
from sqlmodel import select

from app.db.repositories.base import BaseRepository
from app.db.models.videos import Video


class VideoRepository(BaseRepository[Video]):
    """CRUD Vidéos + requêtes spécifiques."""
    model = Video

    def get_by_url(self, url: str) -> Optional[Video]:
        return self.session.exec(
            select(self.model).where(self.model.url == url)
        ).first()

    def exists_by_url(self, url: str) -> bool:
        return self.get_by_url(url) is not None

    def list_newest(self, offset: int = 0, limit: int = 100) -> Sequence[Video]:
        statement = (
            select(self.model)
            .order_by(self.model.upload_date.desc(), self.model.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return self.session.exec(statement).all()
