from typing import List

from sqlalchemy.exc import IntegrityError

from france_geo.core.config import settings
from france_geo.domain.exceptions import (
    CityNotFound,
    DepartmentNotFound,
    DuplicateKey,
    InvalidArgument,
)
from france_geo.domain.mappers import CityMapper, normalize_name
from france_geo.domain.unit_of_work import UnitOfWork
from france_geo.models.city_model import City
from france_geo.models.department_model import Department
from france_geo.schemas.geo_schema import CitySchema
from france_geo.services.department_service import validate_id
from france_geo.services.integrity import raise_duplicate_key
from france_geo.utils.logger import get_logger


logger = get_logger("city_service")

MIN_NAME_LENGTH = 2


def validate_population_range(min_population: int, max_population: int) -> None:
    if min_population < 0 or max_population < 0:
        raise InvalidArgument("Population bounds must be zero or positive")
    if min_population > max_population:
        raise InvalidArgument(
            f"Minimum population ({min_population}) must not exceed "
            f"maximum population ({max_population})"
        )


def validate_min_population(min_population: int) -> None:
    if min_population is None or min_population < 0:
        raise InvalidArgument("Minimum population must be zero or positive")


def validate_top_n(n: int) -> None:
    if n is None or n <= 0:
        raise InvalidArgument("Number of cities must be positive")
    if n > settings.geo.max_top_n:
        raise InvalidArgument(
            f"Number of cities must not exceed {settings.geo.max_top_n}"
        )


def require_department_code(code: str) -> str:
    if code is None or not code.strip():
        raise InvalidArgument("Department code must not be blank")
    return code.strip()


class CityService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    # -------- lookups -------------------------------------------------
    def get_all(self) -> List[CitySchema.Out]:
        return CityMapper.to_out_list(self.uow.cities.get_all())

    def get_by_id(self, city_id: int) -> CitySchema.Out:
        return CityMapper.to_out(self._get_entity(city_id))

    def get_by_name(self, name: str) -> CitySchema.Out:
        if name is None or not name.strip():
            raise InvalidArgument("City name must not be blank")
        name = normalize_name(name)
        if len(name) < MIN_NAME_LENGTH:
            raise InvalidArgument(
                f"City name must contain at least {MIN_NAME_LENGTH} characters"
            )
        city = self.uow.cities.get_by_name(name)
        if not city:
            raise CityNotFound("name", name)
        return CityMapper.to_out(city)

    # -------- commands ------------------------------------------------
    def create(self, payload: CitySchema.Create) -> CitySchema.Out:
        self._validate(payload)
        name = normalize_name(payload.city_name)
        if self.uow.cities.get_by_name(name):
            raise DuplicateKey("City", "name", name)

        with self.uow:
            department = self._resolve_department(payload.department_code)
            city = CityMapper.to_entity(payload, department)
            self.uow.cities.add(city)
            self._commit(city)
            logger.info(f"Created city {city.city_name} in {department.department_code}")
            return CityMapper.to_out(city)

    def update(self, city_id: int, payload: CitySchema.Create) -> CitySchema.Out:
        validate_id(city_id, "City")
        self._validate(payload)
        with self.uow:
            city = self._get_entity(city_id)
            name = normalize_name(payload.city_name)
            same_name = self.uow.cities.get_by_name(name)
            if same_name and same_name.city_id != city_id:
                raise DuplicateKey("City", "name", name)

            # Resolve before touching the entity so a failure leaves it intact
            department = self._resolve_department(payload.department_code)
            CityMapper.update_entity(payload, city, department)
            self._commit(city)
            logger.info(f"Updated city {city_id}")
            return CityMapper.to_out(city)

    def delete(self, city_id: int) -> dict:
        with self.uow:
            city = self._get_entity(city_id)
            self.uow.cities.delete(city)
            self.uow.commit()
            logger.info(f"Deleted city {city_id}")
            return {"detail": "City deleted"}

    # -------- population queries --------------------------------------
    def get_top_by_department(self, department_code: str, n: int) -> List[CitySchema.Out]:
        """The ``n`` most populated cities of a department.

        Cities with equal population are ordered by name, then id.
        """
        code = require_department_code(department_code)
        validate_top_n(n)
        self._resolve_department(code)
        return CityMapper.to_out_list(self.uow.cities.top_by_department(code, n))

    def get_top_by_department_id(
        self, department_id: int, n: int
    ) -> List[CitySchema.Out]:
        validate_top_n(n)
        self._resolve_department_id(department_id)
        return CityMapper.to_out_list(
            self.uow.cities.top_by_department_id(department_id, n)
        )

    def get_by_population_range(
        self, department_code: str, min_population: int, max_population: int
    ) -> List[CitySchema.Out]:
        """Cities of a department within ``[min_population, max_population]``."""
        code = require_department_code(department_code)
        validate_population_range(min_population, max_population)
        self._resolve_department(code)
        cities = self.uow.cities.by_department_and_population_range(
            code, min_population, max_population
        )
        return CityMapper.to_out_list(cities)

    def get_by_department_id_and_population_range(
        self, department_id: int, min_population: int, max_population: int
    ) -> List[CitySchema.Out]:
        validate_population_range(min_population, max_population)
        self._resolve_department_id(department_id)
        cities = self.uow.cities.by_department_id_and_population_range(
            department_id, min_population, max_population
        )
        return CityMapper.to_out_list(cities)

    def get_by_department_and_min_population(
        self, department_code: str, min_population: int
    ) -> List[CitySchema.Out]:
        code = require_department_code(department_code)
        validate_min_population(min_population)
        self._resolve_department(code)
        cities = self.uow.cities.by_department_and_min_population(code, min_population)
        return CityMapper.to_out_list(cities)

    def get_by_department_id_and_min_population(
        self, department_id: int, min_population: int
    ) -> List[CitySchema.Out]:
        validate_min_population(min_population)
        self._resolve_department_id(department_id)
        cities = self.uow.cities.by_department_id_and_min_population(
            department_id, min_population
        )
        return CityMapper.to_out_list(cities)

    def get_with_min_population(self, min_population: int) -> List[CitySchema.Out]:
        validate_min_population(min_population)
        return CityMapper.to_out_list(
            self.uow.cities.with_min_population(min_population)
        )

    def get_with_population_between(
        self, min_population: int, max_population: int
    ) -> List[CitySchema.Out]:
        validate_population_range(min_population, max_population)
        return CityMapper.to_out_list(
            self.uow.cities.with_population_between(min_population, max_population)
        )

    def get_starting_with(self, prefix: str) -> List[CitySchema.Out]:
        if prefix is None or not prefix.strip():
            raise InvalidArgument("Prefix must not be blank")
        return CityMapper.to_out_list(self.uow.cities.starting_with(prefix.strip()))

    # -------- helpers -------------------------------------------------
    def _get_entity(self, city_id: int) -> City:
        validate_id(city_id, "City")
        city = self.uow.cities.get(city_id)
        if not city:
            raise CityNotFound("id", city_id)
        return city

    def _resolve_department(self, code: str) -> Department:
        code = code.strip()
        department = self.uow.departments.get_by_code(code)
        if not department:
            raise DepartmentNotFound("code", code)
        return department

    def _resolve_department_id(self, department_id: int) -> Department:
        validate_id(department_id, "Department")
        department = self.uow.departments.get(department_id)
        if not department:
            raise DepartmentNotFound("id", department_id)
        return department

    def _commit(self, city: City) -> None:
        try:
            self.uow.commit()
        except IntegrityError as e:
            self.uow.rollback()
            raise_duplicate_key(
                e, "City", {"city_name": ("name", city.city_name)}
            )

    @staticmethod
    def _validate(payload: CitySchema.Create) -> None:
        """Collect one message per invalid field."""
        if payload is None:
            raise InvalidArgument("City data must not be empty")
        errors = []
        name = payload.city_name
        if name is None or not name.strip():
            errors.append("City name must not be blank")
        elif len(normalize_name(name)) < MIN_NAME_LENGTH:
            errors.append(
                f"City name must contain at least {MIN_NAME_LENGTH} characters"
            )
        if payload.population is None or payload.population < 0:
            errors.append("Population must be zero or positive")
        elif payload.population > settings.geo.max_population:
            errors.append(
                f"Population must not exceed {settings.geo.max_population}"
            )
        if payload.department_code is None or not payload.department_code.strip():
            errors.append("Department code is required")
        if errors:
            raise InvalidArgument("; ".join(errors))
