"""
➡️ But : Hachage et vérification des mots de passe (bcrypt).

Le mot de passe en clair n'est jamais stocké : seul le hash bcrypt (sel inclus) l'est.
"""

import bcrypt


def hash_password(plain: str) -> str:
    """Retourne le hash bcrypt (str) du mot de passe en clair."""
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Vrai si `plain` correspond à `hashed`. Un hash illisible ne correspond à rien."""
    if not plain or not hashed:
        return False
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False
