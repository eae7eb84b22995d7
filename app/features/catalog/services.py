"""
➡️ But : Lectures du catalogue (catégories, vidéos, notes). Aucune écriture ici :
la création des vidéos d'exemple est du ressort du seed.
"""

from typing import Sequence

from app.db.models.categories import Category
from app.db.models.ratings import VideoRating
from app.db.models.videos import Video
from app.db.repositories.categories import CategoryRepository
from app.db.repositories.ratings import RatingRepository
from app.db.repositories.videos import VideoRepository


class CatalogService:
    def __init__(
        self,
        video_repo: VideoRepository,
        category_repo: CategoryRepository,
        rating_repo: RatingRepository,
    ):
        self.video_repo = video_repo
        self.category_repo = category_repo
        self.rating_repo = rating_repo

    def list_categories(self) -> Sequence[Category]:
        return self.category_repo.list_all()

    def list_videos(self, offset: int, limit: int):
        items = self.video_repo.list_newest(offset, limit)
        total = self.video_repo.count()
        return {"items": items, "total": total}

    def get_video(self, video_id: int) -> Video:
        video = self.video_repo.get(video_id)
        if not video:
            raise LookupError("Video not found.")
        return video

    def list_ratings(self, video_id: int) -> Sequence[VideoRating]:
        self.get_video(video_id)
        return self.rating_repo.list_by_video(video_id)
