"""
➡️ But : Encapsuler toutes les opérations de base de données.

UserRepository : CRUD (create, read, update, delete) sur la table User.

Ne contient aucune logique métier, juste de la persistance.
"""

# app/db/repositories/users.py
from __future__ import annotations

from typing import Optional
from sqlmodel import select

from app.db.repositories.base import BaseRepository
from app.db.models.users import User

class UserRepository(BaseRepository[User]):
    """
    Repository pour la table User.
    Hérite du CRUD générique de BaseRepository.
    Contient uniquement les requêtes spécifiques à User.
    """
    model = User

    def get_by_username(self, username: str) -> Optional[User]:
        """Retourne un utilisateur par son nom d'utilisateur."""
        return self.session.exec(
            select(self.model).where(self.model.username == username)
        ).first()

    def get_by_email(self, email: str) -> Optional[User]:
        """Retourne un utilisateur par son email."""
        return self.session.exec(
            select(self.model).where(self.model.email == email)
        ).first()

    def exists_by_username(self, username: str) -> bool:
        return self.get_by_username(username) is not None

    def delete_by_id(self, user_id: int) -> None:
        """Suppression inconditionnelle ; silencieuse si l'id n'existe pas."""
        user = self.get(user_id)
        if user is not None:
            self.delete(user)
