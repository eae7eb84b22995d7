from sqlmodel import Field

from .base import BaseModelDB


class Category(BaseModelDB, table=True):
    """Catégories de vidéos (ex: 'Music', 'Sports')."""

    name: str = Field(index=True, unique=True, description="Nom de la catégorie")
