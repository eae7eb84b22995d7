"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_user_admin_service() : crée un UserAdminService à partir d’une session DB.

get_current_caller() : identité explicite de l'appelant (id, username, admin ?) depuis le bearer token.

pagination() : paramètres communs page et size.
"""

from typing import Optional

from fastapi import Depends, HTTPException, Query, status, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from app.db.session import get_session

from app.db.repositories.users import UserRepository
from app.db.repositories.roles import RoleRepository
from app.features.users.services import UserService
from app.features.users.admin import Caller, UserAdminService

from app.features.authentication.services import AuthService

from app.db.repositories.videos import VideoRepository
from app.db.repositories.categories import CategoryRepository
from app.db.repositories.ratings import RatingRepository
from app.features.catalog.services import CatalogService

from app.core.config import jwt_settings

def pagination(
    page: int = Query(1, ge=1, description="Numéro de page", examples=[1]),
    size: int = Query(20, ge=1, le=100, description="Taille de page", examples=[20]),
):
    offset = (page - 1) * size
    return {"offset": offset, "limit": size}


# -----------------------------
# Users
# -----------------------------
def get_user_service(session: Session = Depends(get_session)) -> UserService:
    return UserService(UserRepository(session), RoleRepository(session))

def get_user_admin_service(
    session: Session = Depends(get_session),
    user_svc: UserService = Depends(get_user_service),
) -> UserAdminService:
    return UserAdminService(users=user_svc, role_repo=RoleRepository(session))


# -----------------------------
# Auth
# -----------------------------
def get_auth_service(session: Session = Depends(get_session)) -> AuthService:
    return AuthService(user_repo=UserRepository(session), jwt_settings=jwt_settings)


# -----------------------------
# Catalog
# -----------------------------
def get_catalog_service(session: Session = Depends(get_session)) -> CatalogService:
    return CatalogService(
        video_repo=VideoRepository(session),
        category_repo=CategoryRepository(session),
        rating_repo=RatingRepository(session),
    )


# -----------------------------
# Authentication data
# -----------------------------
bearer_scheme = HTTPBearer(auto_error=False)

def get_access_token_from_bearer(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> str:
    if not credentials or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return credentials.credentials


def get_current_caller(
    access_token: str = Depends(get_access_token_from_bearer),
    auth_svc: AuthService = Depends(get_auth_service),
) -> Caller:
    """
    L'autorité est relue en base à chaque requête : un rôle retiré prend effet immédiatement.
    """
    user = auth_svc.get_current_user(access_token=access_token)
    return Caller(user_id=user.id, username=user.username, is_admin=user.is_admin)
