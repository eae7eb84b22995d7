from datetime import datetime
from sqlmodel import SQLModel, Field

from .base import utcnow


class VideoRating(SQLModel, table=True):
    """Note d'un utilisateur sur une vidéo ; clé composite (video_id, user_id)."""

    __tablename__ = "video_rating"

    video_id: int = Field(foreign_key="video.id", primary_key=True)
    user_id: int = Field(foreign_key="user.id", primary_key=True)
    rating: int = Field(ge=1, le=5, description="Note de 1 à 5")
    rated_at: datetime = Field(default_factory=utcnow)
