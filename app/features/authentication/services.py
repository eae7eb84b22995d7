from fastapi import HTTPException, status

from app.db.models.roles import ROLE_USER
from app.db.models.users import User
from app.db.repositories.users import UserRepository
from app.features.authentication.schemas import SignInIn, TokenOut
from app.security.password import verify_password
from app.security.tokens import JWTError, JWTSettings, create_access_token, decode_token, is_access_token


class AuthService:
    """
    Service d'authentification : vérifie les identifiants et émet / lit les access tokens.
    Ne contient pas d'accès SQL direct et lève des HTTPException propres.
    """

    def __init__(self, *, user_repo: UserRepository, jwt_settings: JWTSettings):
        self.user_repo = user_repo
        self.jwt = jwt_settings

    # ---------- Sign in ----------
    def sign_in(self, payload: SignInIn) -> TokenOut:
        user = self.user_repo.get_by_username(payload.username)
        if not user or not verify_password(payload.password, user.hashed_password):
            # Ne pas révéler si l'utilisateur existe
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
            )

        access = create_access_token(
            user_id=user.id,
            username=user.username,
            role=user.role.role_name if user.role else ROLE_USER,
            settings=self.jwt,
        )
        return TokenOut(
            access_token=access,
            token_type="bearer",
            expires_in=int(self.jwt.access_ttl.total_seconds()),
        )

    # ---------- Current user depuis access token ----------
    def get_current_user(self, *, access_token: str) -> User:
        try:
            claims = decode_token(access_token, self.jwt)
        except JWTError:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

        if not is_access_token(claims):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token type")

        user = self.user_repo.get(int(claims["sub"]))
        if not user:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User no longer exists")
        return user
