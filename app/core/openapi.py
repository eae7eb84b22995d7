"""
➡️ But : Documentation Swagger/OpenAPI enrichie des conventions de l'API.
"""

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from app.core.config import settings

API_CONVENTIONS = [
    "Les dates sont en UTC.",
    "Le JSON est en camelCase (`avatarUrl`, `roleName`, `currentPassword`...).",
    "Authentification : `POST {prefix}/auth/sign-in`, puis header `Authorization: Bearer <access_token>`.",
    "Changement de rôle et suppression de compte exigent `ROLE_ADMIN` ; le compte `admin` ne peut pas être supprimé.",
    "Catalogue en lecture libre ; pagination des vidéos par `page` & `size`.",
]


def custom_openapi(app: FastAPI):
    if app.openapi_schema:
        return app.openapi_schema

    conventions = "\n".join(f"- {line.format(prefix=settings.API_PREFIX)}" for line in API_CONVENTIONS)
    app.openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=f"API de partage de vidéos.\n\n### Conventions\n{conventions}\n",
        routes=app.routes,
        tags=app.openapi_tags,
    )
    return app.openapi_schema
