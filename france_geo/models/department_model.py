import datetime as dt
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .city_model import City

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from france_geo.db.base import Base


class Department(Base):
    __tablename__ = "department"
    department_id: Mapped[int] = mapped_column(primary_key=True)
    department_code: Mapped[str] = mapped_column(
        String(3), unique=True, nullable=False, index=True
    )
    department_name: Mapped[str] = mapped_column(String(100), nullable=False)

    created_at: Mapped[dt.datetime] = mapped_column(
        default=lambda: dt.datetime.now(dt.timezone.utc)
    )

    # No cascade: deleting a department with cities is refused upstream
    cities: Mapped[list["City"]] = relationship(
        back_populates="department", passive_deletes="all"
    )

    @property
    def population(self) -> int:
        """Sum of the populations of the department's current cities."""
        return sum(city.population or 0 for city in self.cities)

    def __str__(self):
        return f"{self.department_name} ({self.department_code})"
