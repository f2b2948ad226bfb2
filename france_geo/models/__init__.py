# Departments first so the City foreign key resolves
from france_geo.models.department_model import Department
from france_geo.models.city_model import City

__all__ = [
    "Department",
    "City",
]
