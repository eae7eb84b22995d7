"""
➡️ But : Émettre et lire les access tokens JWT (bearer).

Le token porte l'id (sub), le nom et le rôle de l'utilisateur. Le rôle n'y est qu'à titre
informatif : les décisions d'autorisation relisent toujours l'utilisateur en base.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TypedDict

from jose import jwt, JWTError

ACCESS_TOKEN_TYPE = "access"


@dataclass(frozen=True)
class JWTSettings:
    secret: str
    issuer: str = "vid-back"
    algorithm: str = "HS256"
    access_ttl: timedelta = timedelta(minutes=60)


class DecodedToken(TypedDict, total=False):
    iss: str
    sub: str            # id utilisateur
    username: str
    role: str           # "ROLE_USER" | "ROLE_ADMIN"
    typ: str
    jti: str
    iat: int
    exp: int


def create_access_token(*, user_id: int, username: str, role: str, settings: JWTSettings) -> str:
    issued_at = datetime.now(timezone.utc)
    claims: DecodedToken = {
        "iss": settings.issuer,
        "sub": str(user_id),
        "username": username,
        "role": role,
        "typ": ACCESS_TOKEN_TYPE,
        "jti": uuid.uuid4().hex,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + settings.access_ttl).timestamp()),
    }
    return jwt.encode(claims, settings.secret, algorithm=settings.algorithm)


def decode_token(token: str, settings: JWTSettings) -> DecodedToken:
    """
    Vérifie signature, expiration et émetteur.
    Lève JWTError si l'une des trois est invalide.
    """
    return jwt.decode(
        token,
        settings.secret,
        algorithms=[settings.algorithm],
        issuer=settings.issuer,
        options={"verify_aud": False},
    )


def is_access_token(claims: DecodedToken) -> bool:
    return claims.get("typ") == ACCESS_TOKEN_TYPE and bool(claims.get("sub"))


__all__ = ["JWTSettings", "DecodedToken", "JWTError", "create_access_token", "decode_token", "is_access_token"]
