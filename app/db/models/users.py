"""
➡️ But : Définir la structure des tables de la base (ORM).

Représente les objets persistés. Ici on représente les tables ayant un rapport avec les users.

Le mot de passe n'est jamais stocké en clair : seule la colonne `hashed_password` existe.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, Relationship

from .base import BaseModelDB, utcnow
from .roles import Role, ROLE_ADMIN

DEFAULT_AVATAR_URL = "/resources/static/images/avatars/default-avatar.jpg"


class User(BaseModelDB, table=True):
    username: str = Field(index=True, unique=True)
    email: str = Field(index=True, unique=True)
    hashed_password: str
    registration_date: datetime = Field(default_factory=utcnow)
    avatar_url: str = Field(default=DEFAULT_AVATAR_URL)

    role_id: int = Field(foreign_key="role.id", index=True)

    # Relation ORM (exactement un rôle)
    role: Optional[Role] = Relationship()

    @property
    def is_admin(self) -> bool:
        return self.role is not None and self.role.role_name == ROLE_ADMIN
