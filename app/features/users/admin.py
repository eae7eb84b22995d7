"""
➡️ But : Couche "administration des utilisateurs" entre les routes et UserService.

C'est ici, et non dans UserService, que vivent les règles qui dépendent de l'appelant :
- changement de rôle et suppression réservés aux admins ;
- le compte "admin" d'origine ne peut jamais être supprimé ;
- un non-admin ne peut changer que son propre mot de passe.

L'identité de l'appelant est passée explicitement (Caller) : testable sans FastAPI.
Les refus sont des exceptions métier (ForbiddenError, BadRequestError, LookupError)
que le router traduit en codes HTTP.
"""

from dataclasses import dataclass
from typing import List, Optional

from app.db.models.users import User
from app.db.repositories.roles import RoleRepository
from app.features.users.schemas import ProfileUpdateIn, UserCreate, UserUpdate
from app.features.users.services import (
    PasswordChangeResult,
    RoleNotFoundError,
    UserNotFoundError,
    UserService,
)

PROTECTED_USERNAME = "admin"
MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class Caller:
    user_id: int
    username: str
    is_admin: bool = False


class ForbiddenError(Exception):
    pass

class BadRequestError(ValueError):
    pass


class UserAdminService:
    def __init__(self, users: UserService, role_repo: RoleRepository):
        self.users = users
        self.role_repo = role_repo

    # ---------- Lectures (tout appelant authentifié) ----------

    def list_users(self) -> List[User]:
        return self.users.find_all()

    def get_user(self, user_id: int) -> User:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError("User not found")
        return user

    def get_user_by_email(self, email: str) -> User:
        user = self.users.find_by_email(email)
        if user is None:
            raise UserNotFoundError("User not found")
        return user

    # ---------- Création (ouverte) ----------

    def create_user(self, payload: UserCreate) -> User:
        if not payload.password:
            raise BadRequestError("Password is required")
        return self.users.create(payload)

    # ---------- Profil (soi-même ou admin) ----------

    def update_profile(self, caller: Caller, user_id: int, payload: ProfileUpdateIn) -> User:
        if not caller.is_admin and caller.user_id != user_id:
            raise ForbiddenError("You can only update your own profile")
        return self.users.update(
            user_id,
            UserUpdate(email=payload.email, avatar_url=payload.avatar_url),
        )

    # ---------- Rôle (admin) ----------

    def update_role(self, caller: Caller, user_id: int, role_name: Optional[str]) -> User:
        if not caller.is_admin:
            raise ForbiddenError("Only admins can update user roles")
        if not role_name:
            raise BadRequestError("Role name is required")

        role = self.role_repo.get_by_name(role_name)
        if role is None:
            raise RoleNotFoundError(f"Role not found: {role_name}")
        return self.users.update_role(user_id, role)

    # ---------- Suppression (admin, compte d'origine protégé) ----------

    def delete_user(self, caller: Caller, user_id: int) -> None:
        if not caller.is_admin:
            raise ForbiddenError("Only admins can delete users")

        user = self.get_user(user_id)
        if user.username == PROTECTED_USERNAME:
            raise ForbiddenError("The original admin account cannot be deleted")
        self.users.delete(user_id)

    # ---------- Mot de passe (soi-même, ou admin pour tout compte) ----------

    def change_password(
        self,
        caller: Caller,
        user_id: int,
        current_password: Optional[str],
        new_password: Optional[str],
    ) -> None:
        if not caller.is_admin and caller.user_id != user_id:
            raise ForbiddenError("You can only change your own password")

        if current_password is None or new_password is None:
            raise BadRequestError("Current password and new password are required")
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise BadRequestError(f"New password must be at least {MIN_PASSWORD_LENGTH} characters")

        result = self.users.change_password(user_id, current_password, new_password)
        if result is PasswordChangeResult.WRONG_PASSWORD:
            raise BadRequestError("Current password is incorrect")
        if result is PasswordChangeResult.USER_NOT_FOUND:
            raise UserNotFoundError("User not found")
