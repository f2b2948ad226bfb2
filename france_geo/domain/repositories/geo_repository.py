from typing import List, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload, selectinload

from france_geo.domain.repositories.base_sqlalchemy import SQLAlchemyRepository
from france_geo.models.city_model import City, city_name_key
from france_geo.models.department_model import Department


class DepartmentRepository(SQLAlchemyRepository[Department, int]):
    def __init__(self, db: Session):
        super().__init__(Department, db)

    def get_all(self, offset: int = 0, limit: int | None = None) -> Sequence[Department]:
        stmt = (
            select(Department)
            .options(selectinload(Department.cities))
            .order_by(Department.department_code)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return self.db.scalars(stmt).all()

    def get_by_code(self, code: str) -> Department | None:
        stmt = (
            select(Department)
            .options(selectinload(Department.cities))
            .where(Department.department_code == code)
        )
        return self.db.scalar(stmt)

    def exists_by_code(self, code: str) -> bool:
        stmt = select(func.count(Department.department_id)).where(
            Department.department_code == code
        )
        return self.db.scalar(stmt) > 0

    def count_cities(self, department_id: int) -> int:
        stmt = select(func.count(City.city_id)).where(
            City.department_id == department_id
        )
        return self.db.scalar(stmt)


class CityRepository(SQLAlchemyRepository[City, int]):
    def __init__(self, db: Session):
        super().__init__(City, db)

    def _select(self):
        return select(City).options(joinedload(City.department))

    def _by_department_code(self, code: str):
        return self._select().join(City.department).where(
            Department.department_code == code
        )

    def _by_department_id(self, department_id: int):
        return self._select().where(City.department_id == department_id)

    def get_all(self, offset: int = 0, limit: int | None = None) -> Sequence[City]:
        stmt = self._select().order_by(City.city_id).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return self.db.scalars(stmt).all()

    def get_by_name(self, name: str) -> City | None:
        """Case-insensitive exact match on the city name."""
        stmt = self._select().where(City.city_name_key == city_name_key(name))
        return self.db.scalars(stmt).first()

    def exists_by_name(self, name: str) -> bool:
        stmt = select(func.count(City.city_id)).where(
            City.city_name_key == city_name_key(name)
        )
        return self.db.scalar(stmt) > 0

    # ---------- population queries ------------------------------------
    def _top(self, stmt, n: int) -> List[City]:
        """The n most populated cities of ``stmt``; ties by name, then id."""
        stmt = stmt.order_by(
            City.population.desc(), City.city_name, City.city_id
        ).limit(n)
        return list(self.db.scalars(stmt).all())

    def _in_range(self, stmt, min_population: int, max_population: int) -> List[City]:
        stmt = stmt.where(
            City.population.between(min_population, max_population)
        ).order_by(City.population.desc(), City.city_name)
        return list(self.db.scalars(stmt).all())

    def _at_least(self, stmt, min_population: int) -> List[City]:
        stmt = stmt.where(City.population >= min_population).order_by(
            City.population.desc(), City.city_name
        )
        return list(self.db.scalars(stmt).all())

    def top_by_department(self, code: str, n: int) -> List[City]:
        return self._top(self._by_department_code(code), n)

    def top_by_department_id(self, department_id: int, n: int) -> List[City]:
        return self._top(self._by_department_id(department_id), n)

    def by_department_and_population_range(
        self, code: str, min_population: int, max_population: int
    ) -> List[City]:
        return self._in_range(
            self._by_department_code(code), min_population, max_population
        )

    def by_department_id_and_population_range(
        self, department_id: int, min_population: int, max_population: int
    ) -> List[City]:
        return self._in_range(
            self._by_department_id(department_id), min_population, max_population
        )

    def by_department_and_min_population(
        self, code: str, min_population: int
    ) -> List[City]:
        return self._at_least(self._by_department_code(code), min_population)

    def by_department_id_and_min_population(
        self, department_id: int, min_population: int
    ) -> List[City]:
        return self._at_least(self._by_department_id(department_id), min_population)

    def with_min_population(self, min_population: int) -> List[City]:
        return self._at_least(self._select(), min_population)

    def with_population_between(
        self, min_population: int, max_population: int
    ) -> List[City]:
        return self._in_range(self._select(), min_population, max_population)

    def starting_with(self, prefix: str) -> List[City]:
        key = city_name_key(prefix)
        pattern = key.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        stmt = (
            self._select()
            .where(City.city_name_key.like(f"{pattern}%", escape="\\"))
            .order_by(City.city_name)
        )
        return list(self.db.scalars(stmt).all())
