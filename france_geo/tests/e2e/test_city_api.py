"""End-to-end tests for the /cities endpoints."""

CITIES_URL = "/api/v1/cities"


def _create_city(client, name, population, code="34"):
    response = client.post(
        CITIES_URL,
        json={"city_name": name, "population": population, "department_code": code},
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestCityCrud:

    def test_create_and_get(self, client, herault):
        created = _create_city(client, "Montpellier", 295542)

        assert created["city_name"] == "Montpellier"
        assert created["department_code"] == "34"

        response = client.get(f"{CITIES_URL}/{created['city_id']}")
        assert response.status_code == 200
        assert response.json() == created

    def test_list_cities(self, client, paris, montpellier):
        response = client.get(CITIES_URL)

        assert response.status_code == 200
        assert {c["city_name"] for c in response.json()} == {"Paris", "Montpellier"}

    def test_get_by_name_case_insensitive(self, client, montpellier):
        response = client.get(f"{CITIES_URL}/name/MONTPELLIER")

        assert response.status_code == 200
        assert response.json()["city_id"] == montpellier.city_id

    def test_get_unknown_city(self, client, herault):
        response = client.get(f"{CITIES_URL}/999")

        body = response.json()
        assert response.status_code == 404
        assert body["status"] == 404
        assert body["error"] == "Not Found"
        assert body["path"] == f"{CITIES_URL}/999"
        assert body["error_code"] == "CITY_NOT_FOUND"
        assert "999" in body["message"]
        assert body["timestamp"]

    def test_non_numeric_id_is_bad_request(self, client):
        response = client.get(f"{CITIES_URL}/abc")

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_create_with_invalid_fields(self, client, herault):
        response = client.post(
            CITIES_URL,
            json={"city_name": "", "population": -5, "department_code": "34"},
        )

        body = response.json()
        assert response.status_code == 400
        assert "City name must not be blank" in body["message"]
        assert "Population must be zero or positive" in body["message"]

    def test_create_with_malformed_body(self, client, herault):
        response = client.post(
            CITIES_URL,
            json={"city_name": "Lattes", "population": "many", "department_code": "34"},
        )

        assert response.status_code == 400
        assert "population" in response.json()["message"]

    def test_create_duplicate_name(self, client, montpellier):
        response = client.post(
            CITIES_URL,
            json={"city_name": "montpellier", "population": 1, "department_code": "34"},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "DUPLICATE_KEY"

    def test_create_in_unknown_department(self, client, herault):
        response = client.post(
            CITIES_URL,
            json={"city_name": "Ajaccio", "population": 70000, "department_code": "2A"},
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "DEPARTMENT_NOT_FOUND"

    def test_update_city(self, client, montpellier):
        response = client.put(
            f"{CITIES_URL}/{montpellier.city_id}",
            json={"city_name": "Montpellier", "population": 300000, "department_code": "34"},
        )

        assert response.status_code == 200
        assert response.json()["population"] == 300000

    def test_failed_update_leaves_city_unchanged(self, client, montpellier):
        response = client.put(
            f"{CITIES_URL}/{montpellier.city_id}",
            json={"city_name": "Montpellier", "population": 1, "department_code": "99"},
        )
        assert response.status_code == 404

        current = client.get(f"{CITIES_URL}/{montpellier.city_id}").json()
        assert current["population"] == 295542
        assert current["department_code"] == "34"

    def test_update_unknown_city(self, client, herault):
        response = client.put(
            f"{CITIES_URL}/999",
            json={"city_name": "Ghost", "population": 1, "department_code": "34"},
        )

        assert response.status_code == 404

    def test_delete_twice(self, client, montpellier):
        url = f"{CITIES_URL}/{montpellier.city_id}"

        response = client.delete(url)
        assert response.status_code == 200
        assert response.json() == {"detail": "City deleted"}

        assert client.delete(url).status_code == 404
        assert client.get(url).status_code == 404


class TestCityQueries:

    def test_top_cities(self, client, herault_cities):
        response = client.get(f"{CITIES_URL}/top", params={"departmentCode": "34", "n": 3})

        assert response.status_code == 200
        assert [c["city_name"] for c in response.json()] == ["Montpellier", "Béziers", "Sète"]

    def test_top_one(self, client, montpellier):
        response = client.get(f"{CITIES_URL}/top", params={"departmentCode": "34", "n": 1})

        assert [c["city_name"] for c in response.json()] == ["Montpellier"]

    def test_top_with_zero_n(self, client, montpellier):
        response = client.get(f"{CITIES_URL}/top", params={"departmentCode": "34", "n": 0})

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_ARGUMENT"

    def test_top_unknown_department(self, client, herault):
        response = client.get(f"{CITIES_URL}/top", params={"departmentCode": "99", "n": 3})

        assert response.status_code == 404

    def test_top_missing_parameter(self, client, herault):
        response = client.get(f"{CITIES_URL}/top", params={"n": 3})

        assert response.status_code == 400
        assert "departmentCode" in response.json()["message"]

    def test_population_range(self, client, montpellier):
        response = client.get(
            f"{CITIES_URL}/by-population",
            params={"departmentCode": "34", "min": 0, "max": 1_000_000},
        )

        assert response.status_code == 200
        assert [c["city_name"] for c in response.json()] == ["Montpellier"]

    def test_population_range_min_above_max(self, client, montpellier):
        response = client.get(
            f"{CITIES_URL}/by-population",
            params={"departmentCode": "34", "min": 10, "max": 5},
        )

        assert response.status_code == 400

    def test_population_min(self, client, paris, montpellier):
        response = client.get(
            f"{CITIES_URL}/population-min", params={"minPopulation": 1_000_000}
        )

        assert [c["city_name"] for c in response.json()] == ["Paris"]

    def test_population_between(self, client, paris, montpellier):
        response = client.get(
            f"{CITIES_URL}/population-between",
            params={"minPopulation": 200_000, "maxPopulation": 300_000},
        )

        assert [c["city_name"] for c in response.json()] == ["Montpellier"]

    def test_department_population_min(self, client, herault_cities):
        response = client.get(
            f"{CITIES_URL}/code/34/population-min", params={"minPopulation": 50_000}
        )

        assert [c["city_name"] for c in response.json()] == ["Montpellier", "Béziers"]

    def test_starts_with(self, client, herault_cities):
        response = client.get(f"{CITIES_URL}/starts-with/mont")

        assert [c["city_name"] for c in response.json()] == ["Montpellier"]


class TestCityCsvExport:

    def test_export_csv(self, client, paris, montpellier):
        response = client.get(
            f"{CITIES_URL}/export/csv", params={"minPopulation": 1_000_000}
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert (
            response.headers["content-disposition"]
            == "attachment; filename=cities_population_min_1000000.csv"
        )
        assert response.text.splitlines() == [
            "Name,Population,DepartmentCode,DepartmentName",
            '"Paris",2165423,"75","Paris"',
        ]

    def test_export_csv_negative_threshold(self, client):
        response = client.get(f"{CITIES_URL}/export/csv", params={"minPopulation": -1})

        assert response.status_code == 400


class TestCityQueriesByDepartment:

    def test_code_population_between(self, client, herault_cities):
        response = client.get(
            f"{CITIES_URL}/code/34/population-between",
            params={"minPopulation": 29000, "maxPopulation": 44558},
        )

        assert response.status_code == 200
        assert [c["city_name"] for c in response.json()] == ["Sète", "Agde", "Lunel"]

    def test_code_top_cities(self, client, herault_cities):
        response = client.get(f"{CITIES_URL}/code/34/top-cities", params={"limit": 2})

        assert [c["city_name"] for c in response.json()] == ["Montpellier", "Béziers"]

    def test_department_id_population_min(self, client, herault_cities, herault, paris):
        response = client.get(
            f"{CITIES_URL}/department/{herault.department_id}/population-min",
            params={"minPopulation": 79041},
        )

        assert response.status_code == 200
        assert [c["city_name"] for c in response.json()] == ["Montpellier", "Béziers"]

    def test_department_id_population_between(self, client, herault_cities, herault):
        response = client.get(
            f"{CITIES_URL}/department/{herault.department_id}/population-between",
            params={"minPopulation": 0, "maxPopulation": 29000},
        )

        assert [c["city_name"] for c in response.json()] == ["Agde", "Lunel", "Hameau"]

    def test_department_id_top_cities(self, client, herault_cities, herault, paris):
        response = client.get(
            f"{CITIES_URL}/department/{herault.department_id}/top-cities",
            params={"limit": 1},
        )

        assert [c["city_name"] for c in response.json()] == ["Montpellier"]

    def test_unknown_department_id(self, client, herault):
        for path, params in [
            ("population-min", {"minPopulation": 0}),
            ("population-between", {"minPopulation": 0, "maxPopulation": 10}),
            ("top-cities", {"limit": 3}),
        ]:
            response = client.get(f"{CITIES_URL}/department/999/{path}", params=params)

            assert response.status_code == 404
            assert response.json()["error_code"] == "DEPARTMENT_NOT_FOUND"

    def test_department_id_top_cities_zero_limit(self, client, herault):
        response = client.get(
            f"{CITIES_URL}/department/{herault.department_id}/top-cities",
            params={"limit": 0},
        )

        assert response.status_code == 400


class TestAccentedCityNames:

    def test_duplicate_accented_name_rejected(self, client, herault):
        client.post(
            CITIES_URL,
            json={"city_name": "Évry", "population": 53000, "department_code": "34"},
        )

        response = client.post(
            CITIES_URL,
            json={"city_name": "évry", "population": 1, "department_code": "34"},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "DUPLICATE_KEY"

    def test_lookup_by_accented_name(self, client, herault):
        created = client.post(
            CITIES_URL,
            json={"city_name": "Évreux", "population": 46000, "department_code": "34"},
        ).json()

        response = client.get(f"{CITIES_URL}/name/évreux")

        assert response.status_code == 200
        assert response.json()["city_id"] == created["city_id"]
