from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from sqlalchemy.orm import Session

from france_geo.domain.repositories.geo_repository import (
    CityRepository,
    DepartmentRepository,
)


class IUnitOfWork(ABC):
    @abstractmethod
    def __enter__(self): ...
    @abstractmethod
    def __exit__(self, exc_type, exc_val, exc_tb): ...
    @abstractmethod
    def commit(self): ...
    @abstractmethod
    def rollback(self): ...


class UnitOfWork(AbstractContextManager, IUnitOfWork):
    """Coordinates repositories & transaction boundaries."""

    def __init__(self, db: Session):
        self.db = db
        self.departments = DepartmentRepository(db)
        self.cities = CityRepository(db)

    # ---- context‑manager API -----------------------------------------
    def __enter__(self):
        return self

    def __exit__(self, exc_type, *_):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    # ---- public -------------------------------------------------------
    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
