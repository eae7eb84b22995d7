from datetime import datetime
from typing import Optional
from sqlmodel import Field
from sqlalchemy import Column, ForeignKey, Integer

from .base import BaseModelDB, utcnow


class Video(BaseModelDB, table=True):
    """Métadonnées d'une vidéo. L'URL est la clé naturelle (unique)."""

    title: str = Field(index=True, description="Titre de la vidéo")
    description: Optional[str] = Field(default=None, description="Description")
    upload_date: datetime = Field(default_factory=utcnow, description="Date de mise en ligne")
    duration_seconds: int = Field(default=0, ge=0, description="Durée en secondes")
    url: str = Field(index=True, unique=True, description="URL du fichier vidéo (ex: /videos/x.mp4)")
    thumbnail_url: Optional[str] = Field(default=None, description="URL de la miniature")

    uploader_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("user.id"),
            nullable=False,
            index=True,
        ),
        description="Utilisateur ayant mis en ligne la vidéo",
    )
    category_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("category.id"),
            nullable=False,
            index=True,
        ),
        description="Catégorie de la vidéo",
    )
