"""Conversion between persisted entities and transfer objects."""

import re
from typing import Iterable, List

from france_geo.models.city_model import City, city_name_key
from france_geo.models.department_model import Department
from france_geo.schemas.geo_schema import CitySchema, DepartmentSchema


def normalize_name(name: str) -> str:
    return re.sub(r"\s+", " ", name.strip()) if name else name


class CityMapper:

    @staticmethod
    def to_out(city: City) -> CitySchema.Out:
        return CitySchema.Out(
            city_id=city.city_id,
            city_name=city.city_name,
            population=city.population,
            department_code=city.department.department_code,
        )

    @classmethod
    def to_out_list(cls, cities: Iterable[City]) -> List[CitySchema.Out]:
        return [cls.to_out(city) for city in cities]

    @staticmethod
    def to_entity(payload: CitySchema.Create, department: Department) -> City:
        return City(
            city_name=normalize_name(payload.city_name),
            city_name_key=city_name_key(payload.city_name),
            population=payload.population,
            department=department,
        )

    @staticmethod
    def update_entity(
        payload: CitySchema.Create, city: City, department: Department
    ) -> None:
        city.city_name = normalize_name(payload.city_name)
        city.city_name_key = city_name_key(payload.city_name)
        city.population = payload.population
        city.department = department


class DepartmentMapper:

    @staticmethod
    def to_out(department: Department) -> DepartmentSchema.Out:
        # Population is derived from the cities on every read, never stored
        return DepartmentSchema.Out(
            department_id=department.department_id,
            department_code=department.department_code,
            department_name=department.department_name,
            population=department.population,
            cities=[city.city_name for city in department.cities],
        )

    @classmethod
    def to_out_list(
        cls, departments: Iterable[Department]
    ) -> List[DepartmentSchema.Out]:
        return [cls.to_out(department) for department in departments]

    @staticmethod
    def to_entity(payload: DepartmentSchema.Create) -> Department:
        return Department(
            department_code=payload.department_code.strip(),
            department_name=normalize_name(payload.department_name),
        )

    @staticmethod
    def update_entity(
        payload: DepartmentSchema.Create, department: Department
    ) -> None:
        department.department_code = payload.department_code.strip()
        department.department_name = normalize_name(payload.department_name)
