"""
➡️ But : Contenir la logique métier du cycle de vie des utilisateurs.

UserService : CRUD + deux opérations sensibles (changement de rôle, changement de mot de passe).
Garantit les invariants que la base seule ne peut pas garantir :
mot de passe toujours haché, exactement un rôle résolu, hash jamais ré-haché à l'identique.

Aucune règle dépendant de "qui appelle" ici : c'est le rôle de UserAdminService (admin.py).
"""

from enum import Enum
from typing import Callable, List, Optional
from datetime import datetime

from app.db.models.base import as_utc, utcnow
from app.db.models.roles import Role, ROLE_USER
from app.db.models.users import User, DEFAULT_AVATAR_URL
from app.db.repositories.roles import RoleRepository
from app.db.repositories.users import UserRepository
from app.features.users.schemas import RoleRef, UserCreate, UserUpdate
from app.security.password import hash_password, verify_password


class UserNotFoundError(LookupError):
    pass

class RoleNotFoundError(LookupError):
    pass

class UserConflictError(ValueError):
    """Nom d'utilisateur ou email déjà utilisé."""


class PasswordChangeResult(str, Enum):
    SUCCESS = "success"
    WRONG_PASSWORD = "wrong_password"
    USER_NOT_FOUND = "user_not_found"


class UserService:
    def __init__(
        self,
        repo: UserRepository,
        role_repo: RoleRepository,
        now_fn: Callable[[], datetime] = utcnow,
    ):
        self.repo = repo
        self.role_repo = role_repo
        self.now_fn = now_fn

    # ---------- Lectures ----------

    def find_by_email(self, email: str) -> Optional[User]:
        return self.repo.get_by_email(email)

    def find_all(self) -> List[User]:
        return list(self.repo.list_all())

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.repo.get(user_id)

    # ---------- Helpers ----------

    def _get_or_raise(self, user_id: int) -> User:
        user = self.repo.get(user_id)
        if not user:
            raise UserNotFoundError("User not found")
        return user

    def resolve_role(self, ref: Optional[RoleRef]) -> Role:
        """
        Absent -> ROLE_USER ; id fourni -> par id ; sinon -> par nom.
        """
        if ref is None:
            role = self.role_repo.get_by_name(ROLE_USER)
            if role is None:
                raise RoleNotFoundError("Default role not found")
            return role

        if ref.id is not None:
            role = self.role_repo.get(ref.id)
        elif ref.role_name:
            role = self.role_repo.get_by_name(ref.role_name)
        else:
            role = None

        if role is None:
            raise RoleNotFoundError("Role not found")
        return role

    # ---------- Écritures ----------

    def create(self, payload: UserCreate) -> User:
        if not payload.password:
            raise ValueError("Password is required")

        if self.repo.exists_by_username(payload.username):
            raise UserConflictError("Username already exists")
        if self.repo.get_by_email(payload.email):
            raise UserConflictError("Email already exists")

        role = self.resolve_role(payload.role)

        return self.repo.create(
            username=payload.username,
            email=payload.email,
            hashed_password=hash_password(payload.password),
            registration_date=as_utc(payload.registration_date) if payload.registration_date else self.now_fn(),
            avatar_url=payload.avatar_url or DEFAULT_AVATAR_URL,
            role_id=role.id,
        )

    def update(self, user_id: int, payload: UserUpdate) -> User:
        user = self._get_or_raise(user_id)
        changes = {}
        if payload.email is not None:
            owner = self.repo.get_by_email(payload.email)
            if owner is not None and owner.id != user.id:
                raise UserConflictError("Email already exists")
            changes["email"] = payload.email
        if payload.avatar_url is not None:
            changes["avatar_url"] = payload.avatar_url
        # comparaison avec le hash stocké : un hash renvoyé tel quel n'est pas ré-haché
        if payload.password is not None and payload.password != user.hashed_password:
            changes["hashed_password"] = hash_password(payload.password)
        changes["updated_at"] = self.now_fn()
        return self.repo.update(user, **changes)

    def update_role(self, user_id: int, role: Role) -> User:
        user = self._get_or_raise(user_id)
        return self.repo.update(user, role_id=role.id, updated_at=self.now_fn())

    def change_password(self, user_id: int, current_password: str, new_password: str) -> PasswordChangeResult:
        user = self.repo.get(user_id)
        if user is None:
            return PasswordChangeResult.USER_NOT_FOUND

        if not verify_password(current_password, user.hashed_password):
            return PasswordChangeResult.WRONG_PASSWORD

        self.repo.update(
            user,
            hashed_password=hash_password(new_password),
            updated_at=self.now_fn(),
        )
        return PasswordChangeResult.SUCCESS

    def delete(self, user_id: int) -> None:
        self.repo.delete_by_id(user_id)
