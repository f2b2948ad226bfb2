from __future__ import annotations

from typing import Generic, Sequence, Type

from sqlalchemy import inspect, select
from sqlalchemy.orm import Session

from france_geo.domain.repositories.base import ID, IRepository, T


class SQLAlchemyRepository(Generic[T, ID], IRepository[T, ID]):
    """Generic SQLAlchemy repository with basic CRUD."""

    def __init__(self, model: Type[T], db: Session):
        self.model = model
        self.db = db

    # ----- CRUD --------------------------------------------------------
    def add(self, obj: T) -> T:
        self.db.add(obj)
        return obj

    def save(self, obj: T) -> T:
        """Insert when the object has no identity yet, otherwise update."""
        identity = inspect(obj).identity
        if identity is None or all(part is None for part in identity):
            self.db.add(obj)
            self.db.flush()
            return obj
        return self.db.merge(obj)

    def get(self, id_: ID) -> T | None:
        return self.db.get(self.model, id_)

    def exists(self, id_: ID) -> bool:
        return self.get(id_) is not None

    def get_all(
        self, offset: int = 0, limit: int | None = None
    ) -> Sequence[T]:
        stmt = select(self.model).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return self.db.scalars(stmt).all()

    def delete(self, obj: T) -> None:
        self.db.delete(obj)

    def delete_by_id(self, id_: ID) -> None:
        obj = self.get(id_)
        if obj is not None:
            self.db.delete(obj)

    def flush(self) -> None:
        self.db.flush()
