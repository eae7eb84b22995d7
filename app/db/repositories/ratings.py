from typing import Sequence
from sqlmodel import select

from app.db.repositories.base import BaseRepository
from app.db.models.ratings import VideoRating


class RatingRepository(BaseRepository[VideoRating]):
    """Notes des vidéos (clé composite video_id + user_id)."""
    model = VideoRating

    def list_by_video(self, video_id: int) -> Sequence[VideoRating]:
        return self.session.exec(
            select(self.model)
            .where(self.model.video_id == video_id)
            .order_by(self.model.rated_at.asc())
        ).all()
