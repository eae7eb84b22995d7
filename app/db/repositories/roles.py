from typing import Optional
from sqlmodel import select

from app.db.repositories.base import BaseRepository
from app.db.models.roles import Role


class RoleRepository(BaseRepository[Role]):
    """CRUD Rôles + recherche par nom."""
    model = Role

    def get_by_name(self, role_name: str) -> Optional[Role]:
        return self.session.exec(
            select(self.model).where(self.model.role_name == role_name)
        ).first()
