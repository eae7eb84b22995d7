"""
➡️ But : assembler toutes les pièces du puzzle.

Crée l’instance FastAPI (app).

Configure :

CORS, logs, titre, version, tags, schéma OpenAPI personnalisé

Inclut les routers (ex : /api/users).

Au démarrage : crée les tables puis réconcilie les données de référence (seed),
avant que la moindre requête ne soit servie. Une SeedConfigurationError arrête le démarrage.

Point unique d’exécution : uvicorn app.main:app --reload.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.logging import configure_logging
from app.core.openapi import custom_openapi
from app.db.session import engine, init_db
from app.db.seed import run_seed

from app.api.v1.routers import users, authentication, catalog

import uvicorn

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    openapi_tags=[
        {"name": "users", "description": "Gestion des utilisateurs (rôles, mots de passe)"},
        {"name": "auth", "description": "Opérations liées à l'authentification"},
        {"name": "catalog", "description": "Catégories, vidéos et notes (lecture)"},
    ],
)

# CORS (ajustez selon vos besoins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"],
)

# Routers
app.include_router(users.router, prefix=settings.API_PREFIX)
app.include_router(authentication.router, prefix=settings.API_PREFIX)
app.include_router(catalog.router, prefix=settings.API_PREFIX)

# Génération du schéma OpenAPI custom (facultatif, mais propre)
app.openapi = lambda: custom_openapi(app)


# Filet de sécurité : toute exception non prévue -> 500 avec le message brut
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Erreur non gérée sur %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": f"Error processing request: {exc}"},
    )


# Démarrage
@app.on_event("startup")
def on_startup():
    init_db()
    if settings.SEED_ON_STARTUP:
        report = run_seed(engine, settings.SEED_PATH)
        logger.info(
            "Seed terminé : rôles=%d admin=%s catégories=%d vidéos=%d",
            len(report.roles_created),
            report.admin_created,
            len(report.categories_created),
            len(report.videos_created),
        )

if __name__ == "__main__":
    uvicorn.run("app.main:app", host="127.0.0.1", port=8080, reload=(settings.ENV == "dev")) # http://localhost:8080
