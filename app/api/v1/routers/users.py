"""
➡️ But : Définir les endpoints d'administration des utilisateurs.

Les routes ne contiennent ni SQL ni logique métier : elles récupèrent l'appelant,
délèguent à UserAdminService et traduisent les exceptions métier en codes HTTP :

ForbiddenError → 403, BadRequestError → 400, LookupError → 404, UserConflictError → 409.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from app.api.v1.dependencies import get_current_caller, get_user_admin_service
from app.features.users.admin import BadRequestError, Caller, ForbiddenError, UserAdminService
from app.features.users.schemas import (
    ChangePasswordIn,
    MessageOut,
    ProfileUpdateIn,
    RoleUpdateIn,
    UserCreate,
    UserOut,
)
from app.features.users.services import RoleNotFoundError, UserConflictError

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={404: {"description": "Not Found"}},
)

# -------- Helpers --------

def _not_found(e: LookupError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e) or "Not Found")

def _forbidden(e: ForbiddenError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e) or "Forbidden")

def _bad_request(e: ValueError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

def _conflict(e: UserConflictError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


# -----------------------------
# Lectures (authentifié)
# -----------------------------
@router.get(
    "/email/{email}",
    summary="Récupérer un utilisateur par email",
    response_model=UserOut,
)
def get_user_by_email(
    email: str,
    _: Caller = Depends(get_current_caller),
    svc: UserAdminService = Depends(get_user_admin_service),
):
    try:
        return UserOut.model_validate(svc.get_user_by_email(email))
    except LookupError as e:
        raise _not_found(e)

@router.get(
    "",
    summary="Lister les utilisateurs",
    response_model=List[UserOut],
)
def list_users(
    _: Caller = Depends(get_current_caller),
    svc: UserAdminService = Depends(get_user_admin_service),
):
    return [UserOut.model_validate(u) for u in svc.list_users()]

@router.get(
    "/{user_id}",
    summary="Récupérer un utilisateur",
    response_model=UserOut,
)
def get_user(
    user_id: int = Path(..., ge=1),
    _: Caller = Depends(get_current_caller),
    svc: UserAdminService = Depends(get_user_admin_service),
):
    try:
        return UserOut.model_validate(svc.get_user(user_id))
    except LookupError as e:
        raise _not_found(e)


# -----------------------------
# Création (ouverte : inscription)
# -----------------------------
@router.post(
    "",
    summary="Créer un utilisateur",
    status_code=status.HTTP_201_CREATED,
    response_model=UserOut,
    responses={
        400: {"description": "Mot de passe manquant"},
        409: {"description": "Nom d'utilisateur ou email déjà utilisé"},
        500: {"description": "Rôle introuvable"},
    },
)
def create_user(payload: UserCreate, svc: UserAdminService = Depends(get_user_admin_service)):
    try:
        return UserOut.model_validate(svc.create_user(payload))
    except UserConflictError as e:
        raise _conflict(e)
    except BadRequestError as e:
        raise _bad_request(e)
    except RoleNotFoundError as e:
        # rôle irrésolvable = configuration serveur incomplète, pas une erreur client
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error processing request: {e}",
        )


# -----------------------------
# Profil (soi-même ou admin)
# -----------------------------
@router.patch(
    "/{user_id}",
    summary="Mettre à jour le profil (email, avatar)",
    response_model=UserOut,
    responses={409: {"description": "Email déjà utilisé"}},
)
def update_profile(
    payload: ProfileUpdateIn,
    user_id: int = Path(..., ge=1),
    caller: Caller = Depends(get_current_caller),
    svc: UserAdminService = Depends(get_user_admin_service),
):
    try:
        return UserOut.model_validate(svc.update_profile(caller, user_id, payload))
    except ForbiddenError as e:
        raise _forbidden(e)
    except LookupError as e:
        raise _not_found(e)
    except UserConflictError as e:
        raise _conflict(e)


# -----------------------------
# Rôle (admin)
# -----------------------------
@router.put(
    "/{user_id}/role",
    summary="Changer le rôle d'un utilisateur (admin)",
    response_model=UserOut,
    responses={403: {"description": "Admin only"}, 400: {"description": "roleName manquant"}},
)
def update_role(
    payload: RoleUpdateIn,
    user_id: int = Path(..., ge=1),
    caller: Caller = Depends(get_current_caller),
    svc: UserAdminService = Depends(get_user_admin_service),
):
    try:
        return UserOut.model_validate(svc.update_role(caller, user_id, payload.role_name))
    except ForbiddenError as e:
        raise _forbidden(e)
    except BadRequestError as e:
        raise _bad_request(e)
    except LookupError as e:
        raise _not_found(e)


# -----------------------------
# Suppression (admin, compte "admin" protégé)
# -----------------------------
@router.delete(
    "/{user_id}",
    summary="Supprimer un utilisateur (admin)",
    response_model=MessageOut,
    responses={403: {"description": "Admin only / compte protégé"}},
)
def delete_user(
    user_id: int = Path(..., ge=1),
    caller: Caller = Depends(get_current_caller),
    svc: UserAdminService = Depends(get_user_admin_service),
):
    try:
        svc.delete_user(caller, user_id)
    except ForbiddenError as e:
        raise _forbidden(e)
    except LookupError as e:
        raise _not_found(e)
    return MessageOut(message="User deleted successfully")


# -----------------------------
# Mot de passe (soi-même, ou admin)
# -----------------------------
@router.put(
    "/{user_id}/password",
    summary="Changer le mot de passe",
    response_model=MessageOut,
    responses={
        400: {"description": "Champs manquants, mot de passe trop court ou mot de passe actuel incorrect"},
        403: {"description": "Mot de passe d'un autre utilisateur"},
    },
)
def change_password(
    payload: ChangePasswordIn,
    user_id: int = Path(..., ge=1),
    caller: Caller = Depends(get_current_caller),
    svc: UserAdminService = Depends(get_user_admin_service),
):
    try:
        svc.change_password(caller, user_id, payload.current_password, payload.new_password)
    except ForbiddenError as e:
        raise _forbidden(e)
    except BadRequestError as e:
        raise _bad_request(e)
    except LookupError as e:
        raise _not_found(e)
    return MessageOut(message="Password changed successfully")
