from sqlmodel import Field

from .base import BaseModelDB

ROLE_USER = "ROLE_USER"
ROLE_ADMIN = "ROLE_ADMIN"


class Role(BaseModelDB, table=True):
    """Rôle (autorité) attaché à un utilisateur. Immuable après création."""

    role_name: str = Field(index=True, unique=True, description="Nom du rôle (ex: 'ROLE_USER', 'ROLE_ADMIN')")
