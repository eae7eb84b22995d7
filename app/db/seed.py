"""
➡️ But : Réconcilier la base avec un socle de données de référence (rôles, compte admin,
catégories, vidéos d'exemple).

Chaque étape est idempotente : relancer le seed n'ajoute que ce qui manque, ne supprime jamais rien.
Les insertions passent par `create_if_absent` (contraintes d'unicité) : deux seeds concurrents
ne peuvent pas dupliquer une ligne.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml
from sqlalchemy.engine import Engine
from sqlmodel import Session

from app.db.models.base import utcnow
from app.db.models.categories import Category
from app.db.models.users import DEFAULT_AVATAR_URL
from app.db.repositories.categories import CategoryRepository
from app.db.repositories.roles import RoleRepository
from app.db.repositories.users import UserRepository
from app.db.repositories.videos import VideoRepository
from app.security.password import hash_password

logger = logging.getLogger(__name__)


class SeedConfigurationError(RuntimeError):
    """Donnée de référence absente alors qu'elle est requise : le démarrage doit s'arrêter."""


# -----------------------------
# Socle cible
# -----------------------------
@dataclass(frozen=True)
class AdminSeed:
    username: str
    email: str
    password: str
    role: str
    avatar_url: str = DEFAULT_AVATAR_URL


@dataclass(frozen=True)
class SampleVideoSeed:
    title: str
    description: str
    age: timedelta
    duration_seconds: int
    url: str
    thumbnail_url: str
    category: str


@dataclass(frozen=True)
class SeedBaseline:
    roles: Tuple[str, ...]
    admin: AdminSeed
    categories: Tuple[str, ...]
    sample_videos: Tuple[SampleVideoSeed, ...] = ()


@dataclass
class SeedReport:
    roles_created: List[str] = field(default_factory=list)
    admin_created: bool = False
    categories_created: List[str] = field(default_factory=list)
    videos_created: List[str] = field(default_factory=list)
    videos_skipped: bool = False


# -----------------------------
# YAML loader
# -----------------------------
def load_seed_yaml(seed_path: str | Path) -> Dict[str, Any]:
    path = Path(seed_path)
    if not path.exists():
        raise FileNotFoundError(f"Seed YAML introuvable: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Le YAML de seed doit contenir un objet racine (mapping).")
    return data


def baseline_from_dict(data: Dict[str, Any]) -> SeedBaseline:
    admin = data.get("admin")
    if not isinstance(admin, dict):
        raise ValueError("Clé 'admin' manquante ou invalide dans le YAML de seed.")

    videos: List[SampleVideoSeed] = []
    for i, v in enumerate(data.get("sample_videos") or []):
        try:
            videos.append(
                SampleVideoSeed(
                    title=v["title"],
                    description=v.get("description", ""),
                    age=timedelta(**(v.get("age") or {})),
                    duration_seconds=int(v["duration_seconds"]),
                    url=v["url"],
                    thumbnail_url=v["thumbnail_url"],
                    category=v["category"],
                )
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Entrée 'sample_videos' invalide à l'index {i}: {e}") from e

    return SeedBaseline(
        roles=tuple(data.get("roles") or ()),
        admin=AdminSeed(
            username=admin["username"],
            email=admin["email"],
            password=str(admin["password"]),
            role=admin["role"],
            avatar_url=admin.get("avatar_url") or DEFAULT_AVATAR_URL,
        ),
        categories=tuple(data.get("categories") or ()),
        sample_videos=tuple(videos),
    )


def load_seed_baseline(seed_path: str | Path) -> SeedBaseline:
    return baseline_from_dict(load_seed_yaml(seed_path))


# -----------------------------
# Seed Roles
# -----------------------------
def seed_roles(session: Session, baseline: SeedBaseline) -> List[str]:
    repo = RoleRepository(session)
    created: List[str] = []

    if repo.count() == 0:
        for name in baseline.roles:
            if repo.create_if_absent(role_name=name):
                created.append(name)
        logger.info("✅ Rôles par défaut créés : %s", ", ".join(created))
        return created

    # Des rôles existent déjà : on complète individuellement ceux qui manquent
    for name in baseline.roles:
        if repo.get_by_name(name) is None and repo.create_if_absent(role_name=name):
            created.append(name)
            logger.info("✅ Rôle manquant ajouté : %s", name)

    if not created:
        logger.info("ℹ️ Les rôles existent déjà, aucune insertion effectuée.")
    return created


# -----------------------------
# Seed Admin
# -----------------------------
def seed_admin(session: Session, baseline: SeedBaseline) -> bool:
    users = UserRepository(session)
    admin = baseline.admin

    if users.exists_by_username(admin.username):
        logger.info("ℹ️ Le compte '%s' existe déjà.", admin.username)
        return False

    role = RoleRepository(session).get_by_name(admin.role)
    if role is None:
        raise SeedConfigurationError(f"Admin role not found: {admin.role}")

    created = users.create_if_absent(
        username=admin.username,
        email=admin.email,
        hashed_password=hash_password(admin.password),
        registration_date=utcnow(),
        avatar_url=admin.avatar_url,
        role_id=role.id,
    )
    if created is None:
        # username ou email pris entre-temps (seed concurrent ou email déjà utilisé)
        logger.warning("⚠️ Compte '%s' non créé : conflit d'unicité.", admin.username)
        return False

    logger.info("✅ Compte admin créé avec le nom d'utilisateur : %s", admin.username)
    return True


# -----------------------------
# Seed Categories
# -----------------------------
def seed_categories(session: Session, baseline: SeedBaseline) -> List[str]:
    repo = CategoryRepository(session)
    if repo.count() > 0:
        logger.info("ℹ️ Les catégories existent déjà, aucune insertion effectuée.")
        return []

    created = [name for name in baseline.categories if repo.create_if_absent(name=name)]
    logger.info("✅ %d catégories insérées.", len(created))
    return created


# -----------------------------
# Seed Sample videos
# -----------------------------
def _find_category(categories: Sequence[Category], name: str) -> Category:
    for category in categories:
        if category.name.lower() == name.lower():
            return category
    fallback = categories[0]
    logger.warning(
        "⚠️ Catégorie '%s' introuvable, repli sur '%s'.", name, fallback.name
    )
    return fallback


def seed_sample_videos(session: Session, baseline: SeedBaseline) -> Optional[List[str]]:
    """
    Toujours exécuté : recrée les vidéos d'exemple manquantes (clé naturelle = url).
    Retourne None si l'étape est ignorée (admin ou catégories absents).
    """
    uploader = UserRepository(session).get_by_username(baseline.admin.username)
    if uploader is None:
        logger.warning("⚠️ Utilisateur admin introuvable, vidéos d'exemple ignorées.")
        return None

    categories = CategoryRepository(session).list_all()
    if not categories:
        logger.warning("⚠️ Aucune catégorie trouvée, vidéos d'exemple ignorées.")
        return None

    videos = VideoRepository(session)
    now = utcnow()
    created: List[str] = []

    for entry in baseline.sample_videos:
        if videos.exists_by_url(entry.url):
            continue
        category = _find_category(categories, entry.category)
        video = videos.create_if_absent(
            title=entry.title,
            description=entry.description,
            upload_date=now - entry.age,
            duration_seconds=entry.duration_seconds,
            url=entry.url,
            thumbnail_url=entry.thumbnail_url,
            uploader_id=uploader.id,
            category_id=category.id,
        )
        if video is not None:
            created.append(entry.url)

    if created:
        logger.info("✅ %d vidéos d'exemple manquantes créées.", len(created))
    else:
        logger.info("ℹ️ Toutes les vidéos d'exemple existent déjà.")
    return created


# -----------------------------
# Main entrypoint
# -----------------------------
def seed_all(session: Session, baseline: SeedBaseline) -> SeedReport:
    """Exécute les quatre étapes dans l'ordre. SeedConfigurationError interrompt la séquence."""
    report = SeedReport()
    report.roles_created = seed_roles(session, baseline)
    report.admin_created = seed_admin(session, baseline)
    report.categories_created = seed_categories(session, baseline)

    videos = seed_sample_videos(session, baseline)
    report.videos_skipped = videos is None
    report.videos_created = videos or []
    return report


def run_seed(bind: Engine, seed_path: str | Path) -> SeedReport:
    """Charge le socle YAML et l'applique dans une session dédiée."""
    baseline = load_seed_baseline(seed_path)
    with Session(bind) as session:
        return seed_all(session, baseline)
