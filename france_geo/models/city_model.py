import datetime as dt
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .department_model import Department

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from france_geo.db.base import Base


def city_name_key(name: str) -> str:
    """Comparison key of a city name: whitespace collapsed, Unicode casefolded.

    'Évreux', ' évreux ' and 'ÉVREUX' share the key 'évreux'.
    """
    return " ".join(name.split()).casefold() if name else name


def _name_key_default(context) -> str:
    return city_name_key(context.get_current_parameters()["city_name"])


class City(Base):
    __tablename__ = "city"
    city_id: Mapped[int] = mapped_column(primary_key=True)
    city_name: Mapped[str] = mapped_column(String(100), nullable=False)
    # Casefolded city_name; city names are unique regardless of case
    city_name_key: Mapped[str] = mapped_column(
        String(100), unique=True, nullable=False, index=True, default=_name_key_default
    )
    population: Mapped[int] = mapped_column(nullable=False, default=0)

    department_id: Mapped[int] = mapped_column(
        ForeignKey("department.department_id"), nullable=False, index=True
    )
    department: Mapped["Department"] = relationship(back_populates="cities")

    created_at: Mapped[dt.datetime] = mapped_column(
        default=lambda: dt.datetime.now(dt.timezone.utc)
    )

    @property
    def department_code(self) -> str | None:
        return self.department.department_code if self.department else None

    def __str__(self):
        return f"{self.city_name} ({self.population})"
