from fastapi import Depends
from sqlalchemy.orm import Session

from france_geo.db.session import get_db
from france_geo.domain.unit_of_work import UnitOfWork


__all__ = ["get_db", "get_uow"]


def get_uow(db: Session = Depends(get_db)) -> UnitOfWork:
    """Get a Unit of Work instance for dependency injection."""
    return UnitOfWork(db)
