from fastapi import APIRouter, Depends, status

from app.api.v1.dependencies import get_auth_service, get_access_token_from_bearer
from app.features.authentication.services import AuthService
from app.features.authentication.schemas import SignInIn, TokenOut
from app.features.users.schemas import UserOut  # pour /me

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
    responses={401: {"description": "Non authentifié"}},
)

# -----------------------------
# Sign-in
# -----------------------------
@router.post(
    "/sign-in",
    summary="Se connecter",
    description="Retourne un access token à passer en `Authorization: Bearer <token>`.",
    status_code=status.HTTP_200_OK,
    response_model=TokenOut,
)
def sign_in(payload: SignInIn, svc: AuthService = Depends(get_auth_service)):
    return svc.sign_in(payload)

# -----------------------------
# Me (profil courant)
# -----------------------------
@router.get(
    "/me",
    summary="Récupérer l'utilisateur courant",
    response_model=UserOut,
    responses={
        200: {"description": "Utilisateur courant"},
        401: {"description": "Token invalide ou expiré"},
    },
)
def me(
    access_token: str = Depends(get_access_token_from_bearer),
    svc: AuthService = Depends(get_auth_service),
):
    return UserOut.model_validate(svc.get_current_user(access_token=access_token))
