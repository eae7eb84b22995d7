"""
➡️ But : Moteur de base de données et sessions.

build_engine(url) : moteur SQLAlchemy adapté à l'URL (SQLite fichier, SQLite mémoire, autre SGBD).

init_db() : crée les tables de tous les modèles.

get_session() : dépendance FastAPI, une session par requête.
"""

from typing import Any, Dict, Optional
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

# Les modèles doivent être importés pour être enregistrés dans SQLModel.metadata
from app.db.models.roles import Role  # noqa: F401
from app.db.models.users import User  # noqa: F401
from app.db.models.categories import Category  # noqa: F401
from app.db.models.videos import Video  # noqa: F401
from app.db.models.ratings import VideoRating  # noqa: F401

from app.core.config import settings


def build_engine(url: str, *, echo: bool = False) -> Engine:
    if not url.startswith("sqlite:"):
        return create_engine(url, echo=echo, pool_pre_ping=True)

    kwargs: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # une seule connexion partagée, sinon chaque connexion voit une base vide
        kwargs["poolclass"] = StaticPool
    return create_engine(url, echo=echo, **kwargs)


engine: Engine = build_engine(settings.DATABASE_URL, echo=(settings.ENV == "dev"))


def init_db(bind: Optional[Engine] = None) -> None:
    """Crée les tables manquantes (pas de migrations)."""
    SQLModel.metadata.create_all(bind or engine)


def get_session():
    with Session(engine) as session:
        yield session
