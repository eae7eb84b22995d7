"""
➡️ But : Encapsuler toutes les opérations de base de données.

CategoryRepository : lecture / création des catégories de vidéos.
Le CRUD générique (count, list_all, create_if_absent…) suffit : pas de requête spécifique.
"""

from app.db.repositories.base import BaseRepository
from app.db.models.categories import Category

class CategoryRepository(BaseRepository[Category]):
    model = Category
