"""CSV and PDF exports joining cities to their departments."""

import csv
import io
from typing import Dict, List

from france_geo.core.config import settings
from france_geo.domain.exceptions import DomainException, ExportFailure
from france_geo.domain.unit_of_work import UnitOfWork
from france_geo.schemas.geo_schema import CitySchema
from france_geo.services.city_service import CityService, validate_min_population
from france_geo.services.department_service import DepartmentService
from france_geo.utils.logger import get_logger
from france_geo.utils.pdf_report import render_pdf


logger = get_logger("export_service")

CSV_HEADER = ["Name", "Population", "DepartmentCode", "DepartmentName"]
DEPARTMENT_REPORT_TEMPLATE = "department_report.html"


class ExportService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.cities = CityService(uow)
        self.departments = DepartmentService(uow)

    # -------- CSV -----------------------------------------------------
    def cities_csv(self, min_population: int) -> str:
        """Cities with at least ``min_population`` inhabitants as CSV.

        A department that cannot be resolved does not abort the export: the
        row carries a placeholder name instead.
        """
        validate_min_population(min_population)
        cities = self.cities.get_with_min_population(min_population)
        names: Dict[str, str] = {}

        output = io.StringIO()
        try:
            output.write(",".join(CSV_HEADER) + "\n")
            # Strings are quoted with doubled inner quotes; numbers stay bare
            writer = csv.writer(
                output, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n"
            )
            for city in cities:
                code = city.department_code
                if code not in names:
                    names[code] = self._department_name(code)
                writer.writerow(
                    [city.city_name, int(city.population), code, names[code]]
                )
            return output.getvalue()
        except (csv.Error, OSError) as e:
            raise ExportFailure("CSV", str(e)) from e
        finally:
            output.close()

    def _department_name(self, code: str) -> str:
        try:
            department = self.departments.get_by_code(code)
        except DomainException as e:
            logger.warning(f"Department {code} unresolved for CSV export: {e.message}")
            return settings.geo.unknown_department_label
        if not department.department_name or not department.department_name.strip():
            return f"Department {code}"
        return department.department_name

    # -------- PDF -----------------------------------------------------
    def department_pdf(self, department_code: str) -> bytes:
        """PDF report of a department and its cities, most populated first."""
        department = self.departments.get_by_code(department_code)
        cities: List[CitySchema.Out] = self.cities.get_by_department_and_min_population(
            department.department_code, 0
        )
        context = {
            "title": f"Department {department.department_name}",
            "department": department,
            "cities": cities,
        }
        try:
            return render_pdf(DEPARTMENT_REPORT_TEMPLATE, context)
        except Exception as e:
            logger.error(f"PDF generation failed for {department.department_code}: {e}")
            raise ExportFailure("PDF", str(e)) from e
