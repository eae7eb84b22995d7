"""
➡️ But : Définir les formats d’entrée/sortie de l’API (couche validation).

Contient les modèles Pydantic utilisés par FastAPI :

UserCreate → corps de requête POST (inscription / création)

UserUpdate → corps PATCH (profil)

RoleUpdateIn / ChangePasswordIn → corps PUT des opérations sensibles

UserOut → réponse de l’API (jamais le hash du mot de passe)

Le JSON échangé est en camelCase (roleName, currentPassword…), les champs Python restent en snake_case.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field as PydField
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ---------- Rôles ----------

class RoleRef(CamelModel):
    """Référence de rôle fournie par le client : par id, ou à défaut par nom."""
    id: Optional[int] = None
    role_name: Optional[str] = PydField(None, examples=["ROLE_USER"])

class RoleOut(CamelModel):
    id: int
    role_name: str


# ---------- IN / UPDATE ----------

class UserCreate(CamelModel):
    username: str = PydField(..., min_length=1, examples=["alice"])
    email: str = PydField(..., min_length=3, examples=["alice@example.com"])
    password: Optional[str] = None
    registration_date: Optional[datetime] = None
    avatar_url: Optional[str] = None
    role: Optional[RoleRef] = None

class UserUpdate(CamelModel):
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    password: Optional[str] = None

class ProfileUpdateIn(CamelModel):
    email: Optional[str] = None
    avatar_url: Optional[str] = None

class RoleUpdateIn(CamelModel):
    role_name: Optional[str] = None

class ChangePasswordIn(CamelModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None


# ---------- OUT ----------

class UserOut(CamelModel):
    id: int
    username: str
    email: str
    registration_date: datetime
    avatar_url: str
    role: Optional[RoleOut] = None

class MessageOut(BaseModel):
    message: str
