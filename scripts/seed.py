"""Applique le seed hors du serveur web : python scripts/seed.py [chemin/vers/seed.yaml]"""

import sys

from app.core.config import settings
from app.core.logging import configure_logging
from app.db.session import engine, init_db
from app.db.seed import run_seed


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    seed_path = sys.argv[1] if len(sys.argv) > 1 else settings.SEED_PATH
    init_db()
    report = run_seed(engine, seed_path)
    print(
        f"✅ Seed OK | rôles créés : {len(report.roles_created)} | "
        f"admin créé : {report.admin_created} | "
        f"catégories créées : {len(report.categories_created)} | "
        f"vidéos créées : {len(report.videos_created)}"
    )


if __name__ == "__main__":
    main()
