from typing import Any, Generic, Optional, Sequence, Type, TypeVar
from sqlalchemy.exc import IntegrityError
from sqlmodel import SQLModel, Session, select, func

# Type générique pour le modèle (User, Role, Video, etc.)
ModelT = TypeVar("ModelT", bound=SQLModel)

class BaseRepository(Generic[ModelT]):
    """
    Repository de base : persistance générique d'une table.

    👉 Aucune logique métier, chaque écriture est committée immédiatement.
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`
       et ajoutent leurs recherches par clé naturelle (nom, email, url...).
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    # ---------- READ ----------

    def list_all(self) -> Sequence[ModelT]:
        """Tous les enregistrements, dans l'ordre des identifiants (= ordre d'insertion)."""
        return self.session.exec(select(self.model).order_by(self.model.id.asc())).all()

    def count(self) -> int:
        return self.session.exec(select(func.count()).select_from(self.model)).one()

    def get(self, id_: Any) -> Optional[ModelT]:
        return self.session.get(self.model, id_)

    # ---------- WRITE ----------

    def _save(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        self.session.commit()
        self.session.refresh(entity)
        return entity

    def create(self, **fields) -> ModelT:
        return self._save(self.model(**fields))

    def create_if_absent(self, **fields) -> Optional[ModelT]:
        """
        Insertion conditionnelle atomique, arbitrée par les contraintes d'unicité de la table.
        Retourne l'entité créée, ou None si une ligne avec la même clé existe déjà
        (la session est remise en état par un rollback).
        """
        try:
            return self._save(self.model(**fields))
        except IntegrityError:
            self.session.rollback()
            return None

    def update(self, entity: ModelT, **changes) -> ModelT:
        for key, value in changes.items():
            setattr(entity, key, value)
        return self._save(entity)

    def delete(self, entity: ModelT) -> None:
        self.session.delete(entity)
        self.session.commit()
