from fastapi import APIRouter
from france_geo.api.v1.routers.city_router import city_router
from france_geo.api.v1.routers.department_router import department_router

api_router = APIRouter()

api_router.include_router(city_router)
api_router.include_router(department_router)
