from unittest.mock import MagicMock, patch

import pytest

from france_geo.core.config import settings
from france_geo.domain.exceptions import (
    DepartmentNotFound,
    ExportFailure,
    InvalidArgument,
)
from france_geo.models.department_model import Department
from france_geo.schemas.geo_schema import CitySchema, DepartmentSchema
from france_geo.services.export_service import ExportService

HEADER = "Name,Population,DepartmentCode,DepartmentName"


class TestCitiesCsv:

    @pytest.fixture
    def export_service(self, uow):
        return ExportService(uow)

    def test_only_cities_above_threshold(self, export_service, paris, montpellier):
        content = export_service.cities_csv(1_000_000)

        assert content.splitlines() == [HEADER, '"Paris",2165423,"75","Paris"']

    def test_rows_follow_population_order(self, export_service, paris, montpellier):
        lines = export_service.cities_csv(0).splitlines()

        assert lines[0] == HEADER
        assert lines[1:] == [
            '"Paris",2165423,"75","Paris"',
            '"Montpellier",295542,"34","Hérault"',
        ]

    def test_threshold_is_inclusive(self, export_service, montpellier):
        lines = export_service.cities_csv(295542).splitlines()

        assert len(lines) == 2

    def test_header_only_when_nothing_matches(self, export_service, montpellier):
        assert export_service.cities_csv(10_000_000) == HEADER + "\n"

    def test_quoted_department_name(self, export_service, db_session, montpellier, herault):
        herault.department_name = 'Hérault "Sud"'
        db_session.commit()

        lines = export_service.cities_csv(0).splitlines()

        assert lines[1] == '"Montpellier",295542,"34","Hérault ""Sud"""'

    def test_negative_threshold_rejected(self, export_service):
        with pytest.raises(InvalidArgument):
            export_service.cities_csv(-1)


class TestCitiesCsvFallbacks:

    @pytest.fixture
    def export_service(self):
        service = ExportService(MagicMock())
        service.cities = MagicMock()
        service.departments = MagicMock()
        return service

    def test_unresolved_department_gets_placeholder(self, export_service):
        export_service.cities.get_with_min_population.return_value = [
            CitySchema.Out(city_id=1, city_name="Ghost Town", population=12, department_code="99"),
            CitySchema.Out(city_id=2, city_name="Other", population=10, department_code="99"),
        ]
        export_service.departments.get_by_code.side_effect = DepartmentNotFound("code", "99")

        lines = export_service.cities_csv(0).splitlines()

        label = settings.geo.unknown_department_label
        assert lines[1] == f'"Ghost Town",12,"99","{label}"'
        assert lines[2] == f'"Other",10,"99","{label}"'
        # One lookup per department code
        export_service.departments.get_by_code.assert_called_once_with("99")

    def test_blank_department_name_uses_code(self, export_service):
        export_service.cities.get_with_min_population.return_value = [
            CitySchema.Out(city_id=1, city_name="Ajaccio", population=70000, department_code="2A"),
        ]
        export_service.departments.get_by_code.return_value = DepartmentSchema.Out(
            department_id=1, department_code="2A", department_name="  "
        )

        lines = export_service.cities_csv(0).splitlines()

        assert lines[1] == '"Ajaccio",70000,"2A","Department 2A"'


class TestDepartmentPdf:

    @pytest.fixture
    def export_service(self, uow):
        return ExportService(uow)

    def test_renders_department_report(self, export_service, herault_cities):
        with patch(
            "france_geo.services.export_service.render_pdf", return_value=b"%PDF-1.7"
        ) as mock_render:
            content = export_service.department_pdf("34")

        assert content == b"%PDF-1.7"
        template_name, context = mock_render.call_args.args
        assert template_name == "department_report.html"
        assert context["title"] == "Department Hérault"
        assert context["department"].population == sum(c.population for c in herault_cities)
        assert [c.city_name for c in context["cities"]][:2] == ["Montpellier", "Béziers"]
        assert len(context["cities"]) == len(herault_cities)

    def test_unknown_department(self, export_service, herault):
        with pytest.raises(DepartmentNotFound):
            export_service.department_pdf("99")

    def test_render_error_becomes_export_failure(self, export_service, herault):
        with patch(
            "france_geo.services.export_service.render_pdf",
            side_effect=OSError("disk full"),
        ):
            with pytest.raises(ExportFailure) as exc_info:
                export_service.department_pdf("34")

        assert "disk full" in exc_info.value.message

    def test_department_entity_str(self):
        department = Department(department_code="34", department_name="Hérault")

        assert str(department) == "Hérault (34)"
