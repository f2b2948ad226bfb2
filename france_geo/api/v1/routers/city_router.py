from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from france_geo.api.v1.dependencies import get_uow
from france_geo.domain.unit_of_work import UnitOfWork
from france_geo.schemas.geo_schema import CitySchema, DeleteResponse
from france_geo.services.city_service import CityService
from france_geo.services.export_service import ExportService
from france_geo.utils.logger import get_logger


logger = get_logger("city_router")


class CityRouter:
    def __init__(self):
        self.router = APIRouter(prefix="/cities", tags=["Cities"])
        self._register()

    def _register(self):
        # Fixed paths go before "/{city_id}" so they are matched first
        self.router.get("", response_model=List[CitySchema.Out])(
            self._get_cities
        )
        self.router.get("/top", response_model=List[CitySchema.Out])(
            self._get_top_cities
        )
        self.router.get("/by-population", response_model=List[CitySchema.Out])(
            self._get_by_population_range
        )
        self.router.get("/export/csv", response_class=Response)(
            self._export_csv
        )
        self.router.get(
            "/starts-with/{prefix}", response_model=List[CitySchema.Out]
        )(self._get_starting_with)
        self.router.get("/population-min", response_model=List[CitySchema.Out])(
            self._get_with_min_population
        )
        self.router.get(
            "/population-between", response_model=List[CitySchema.Out]
        )(self._get_with_population_between)
        self.router.get(
            "/code/{department_code}/population-min",
            response_model=List[CitySchema.Out],
        )(self._get_by_department_and_min_population)
        self.router.get(
            "/code/{department_code}/population-between",
            response_model=List[CitySchema.Out],
        )(self._get_by_department_and_population_between)
        self.router.get(
            "/code/{department_code}/top-cities",
            response_model=List[CitySchema.Out],
        )(self._get_top_cities_by_code)
        self.router.get(
            "/department/{department_id}/population-min",
            response_model=List[CitySchema.Out],
        )(self._get_by_department_id_and_min_population)
        self.router.get(
            "/department/{department_id}/population-between",
            response_model=List[CitySchema.Out],
        )(self._get_by_department_id_and_population_between)
        self.router.get(
            "/department/{department_id}/top-cities",
            response_model=List[CitySchema.Out],
        )(self._get_top_cities_by_department_id)
        self.router.get("/name/{name}", response_model=CitySchema.Out)(
            self._get_city_by_name
        )
        self.router.get("/{city_id}", response_model=CitySchema.Out)(
            self._get_city
        )
        self.router.post(
            "",
            response_model=CitySchema.Out,
            status_code=status.HTTP_201_CREATED,
        )(self._create_city)
        self.router.put("/{city_id}", response_model=CitySchema.Out)(
            self._update_city
        )
        self.router.delete("/{city_id}", response_model=DeleteResponse)(
            self._delete_city
        )

    async def _get_cities(self, uow: UnitOfWork = Depends(get_uow)):
        logger.info("Getting cities")
        return CityService(uow).get_all()

    async def _get_city(self, city_id: int, uow: UnitOfWork = Depends(get_uow)):
        logger.info(f"Getting city {city_id}")
        return CityService(uow).get_by_id(city_id)

    async def _get_city_by_name(self, name: str, uow: UnitOfWork = Depends(get_uow)):
        logger.info(f"Getting city named {name}")
        return CityService(uow).get_by_name(name)

    async def _create_city(
        self, payload: CitySchema.Create, uow: UnitOfWork = Depends(get_uow)
    ):
        logger.info("Creating city")
        return CityService(uow).create(payload)

    async def _update_city(
        self,
        city_id: int,
        payload: CitySchema.Create,
        uow: UnitOfWork = Depends(get_uow),
    ):
        logger.info(f"Updating city {city_id}")
        return CityService(uow).update(city_id, payload)

    async def _delete_city(self, city_id: int, uow: UnitOfWork = Depends(get_uow)):
        logger.info(f"Deleting city {city_id}")
        return CityService(uow).delete(city_id)

    async def _get_top_cities(
        self,
        department_code: str = Query(..., alias="departmentCode"),
        n: int = Query(..., description="Number of cities to return"),
        uow: UnitOfWork = Depends(get_uow),
    ):
        logger.info(f"Getting top {n} cities of department {department_code}")
        return CityService(uow).get_top_by_department(department_code, n)

    async def _get_by_population_range(
        self,
        department_code: str = Query(..., alias="departmentCode"),
        min_population: int = Query(..., alias="min"),
        max_population: int = Query(..., alias="max"),
        uow: UnitOfWork = Depends(get_uow),
    ):
        logger.info(
            f"Getting cities of {department_code} between "
            f"{min_population} and {max_population}"
        )
        return CityService(uow).get_by_population_range(
            department_code, min_population, max_population
        )

    async def _get_starting_with(self, prefix: str, uow: UnitOfWork = Depends(get_uow)):
        logger.info(f"Getting cities starting with {prefix}")
        return CityService(uow).get_starting_with(prefix)

    async def _get_with_min_population(
        self,
        min_population: int = Query(..., alias="minPopulation"),
        uow: UnitOfWork = Depends(get_uow),
    ):
        logger.info(f"Getting cities with at least {min_population} inhabitants")
        return CityService(uow).get_with_min_population(min_population)

    async def _get_with_population_between(
        self,
        min_population: int = Query(..., alias="minPopulation"),
        max_population: int = Query(..., alias="maxPopulation"),
        uow: UnitOfWork = Depends(get_uow),
    ):
        logger.info(
            f"Getting cities between {min_population} and {max_population}"
        )
        return CityService(uow).get_with_population_between(
            min_population, max_population
        )

    async def _get_by_department_and_min_population(
        self,
        department_code: str,
        min_population: int = Query(..., alias="minPopulation"),
        uow: UnitOfWork = Depends(get_uow),
    ):
        logger.info(
            f"Getting cities of {department_code} with at least {min_population}"
        )
        return CityService(uow).get_by_department_and_min_population(
            department_code, min_population
        )

    async def _get_by_department_and_population_between(
        self,
        department_code: str,
        min_population: int = Query(..., alias="minPopulation"),
        max_population: int = Query(..., alias="maxPopulation"),
        uow: UnitOfWork = Depends(get_uow),
    ):
        logger.info(
            f"Getting cities of {department_code} between "
            f"{min_population} and {max_population}"
        )
        return CityService(uow).get_by_population_range(
            department_code, min_population, max_population
        )

    async def _get_top_cities_by_code(
        self,
        department_code: str,
        limit: int = Query(..., description="Number of cities to return"),
        uow: UnitOfWork = Depends(get_uow),
    ):
        logger.info(f"Getting top {limit} cities of department {department_code}")
        return CityService(uow).get_top_by_department(department_code, limit)

    async def _get_by_department_id_and_min_population(
        self,
        department_id: int,
        min_population: int = Query(..., alias="minPopulation"),
        uow: UnitOfWork = Depends(get_uow),
    ):
        logger.info(
            f"Getting cities of department {department_id} "
            f"with at least {min_population}"
        )
        return CityService(uow).get_by_department_id_and_min_population(
            department_id, min_population
        )

    async def _get_by_department_id_and_population_between(
        self,
        department_id: int,
        min_population: int = Query(..., alias="minPopulation"),
        max_population: int = Query(..., alias="maxPopulation"),
        uow: UnitOfWork = Depends(get_uow),
    ):
        logger.info(
            f"Getting cities of department {department_id} between "
            f"{min_population} and {max_population}"
        )
        return CityService(uow).get_by_department_id_and_population_range(
            department_id, min_population, max_population
        )

    async def _get_top_cities_by_department_id(
        self,
        department_id: int,
        limit: int = Query(..., description="Number of cities to return"),
        uow: UnitOfWork = Depends(get_uow),
    ):
        logger.info(f"Getting top {limit} cities of department {department_id}")
        return CityService(uow).get_top_by_department_id(department_id, limit)

    async def _export_csv(
        self,
        min_population: int = Query(..., alias="minPopulation"),
        uow: UnitOfWork = Depends(get_uow),
    ):
        logger.info(f"Exporting cities with at least {min_population} to CSV")
        content = ExportService(uow).cities_csv(min_population)
        filename = f"cities_population_min_{min_population}.csv"
        return Response(
            content=content,
            media_type="text/csv",
            headers={
                "Content-Disposition": f"attachment; filename={filename}",
                "Content-Type": "text/csv; charset=utf-8",
            },
        )


city_router = CityRouter().router
