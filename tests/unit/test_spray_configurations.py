import jsondiff
import pytest
from utils import add_spray_total


@pytest.mark.spray_configurations
class TestSprayConfigurations:
    @pytest.fixture
    def national_configuration(self, client, login_admin, csrf_token):
        """
        Add a configuration with no province or district and return it
        """

        response = client.post(
            "/api/spray-configurations",
            json={
                "year": 2025,
                "proposed_spray_days": 45,
                "spray_target": 5000,
                "start_date": "2025-02-01",
                "end_date": "2025-03-31",
                "spray_rounds": 2,
                "days_between_rounds": 14,
                "description": "National 2025 campaign",
            },
            headers={"X-CSRF-Token": csrf_token},
        )
        assert response.status_code == 201

        return response.json["data"]

    def test_create_configuration(self, national_configuration, seed_data):
        expected_configuration = {
            "spray_configuration_uid": national_configuration[
                "spray_configuration_uid"
            ],
            "year": 2025,
            "province_uid": None,
            "province_name": "Nacional",
            "district_uid": None,
            "district_name": None,
            "spray_target": 5000,
            "proposed_spray_days": 45,
            "start_date": "2025-02-01",
            "end_date": "2025-03-31",
            "spray_rounds": 2,
            "days_between_rounds": 14,
            "description": "National 2025 campaign",
            "notes": None,
            "active": True,
            "created_by": seed_data["admin_uid"],
            "created_by_name": "Admin User",
        }

        checkdiff = jsondiff.diff(expected_configuration, national_configuration)
        assert checkdiff == {}

    def test_create_configuration_defaults(self, client, login_supervisor, csrf_token):
        """
        Target, rounds and days between rounds have defaults
        """

        response = client.post(
            "/api/spray-configurations",
            json={"year": 2025, "proposed_spray_days": 30},
            headers={"X-CSRF-Token": csrf_token},
        )
        assert response.status_code == 201
        assert response.json["data"]["spray_target"] == 0
        assert response.json["data"]["spray_rounds"] == 1
        assert response.json["data"]["days_between_rounds"] == 0

    def test_create_duplicate_national_configuration(
        self, client, national_configuration, csrf_token
    ):
        """
        Two configurations with no location for the same year conflict
        Expected behavior: 409 conflict
        """

        response = client.post(
            "/api/spray-configurations",
            json={"year": 2025, "proposed_spray_days": 30},
            headers={"X-CSRF-Token": csrf_token},
        )
        assert response.status_code == 409

    def test_create_duplicate_district_configuration(
        self, client, login_admin, csrf_token, seed_data
    ):
        response = client.post(
            "/api/spray-configurations",
            json={
                "year": seed_data["year"],
                "province_uid": seed_data["province_uid"],
                "district_uid": seed_data["district_uid"],
                "proposed_spray_days": 30,
            },
            headers={"X-CSRF-Token": csrf_token},
        )
        assert response.status_code == 409

        # Same year, province only scope
        response = client.post(
            "/api/spray-configurations",
            json={
                "year": seed_data["year"],
                "province_uid": seed_data["province_uid"],
                "proposed_spray_days": 30,
            },
            headers={"X-CSRF-Token": csrf_token},
        )
        assert response.status_code == 201

    def test_create_configuration_dates_reversed(
        self, client, login_admin, csrf_token
    ):
        response = client.post(
            "/api/spray-configurations",
            json={
                "year": 2025,
                "proposed_spray_days": 30,
                "start_date": "2025-03-31",
                "end_date": "2025-02-01",
            },
            headers={"X-CSRF-Token": csrf_token},
        )
        assert response.status_code == 400

    def test_create_configuration_out_of_range(self, client, login_admin, csrf_token):
        response = client.post(
            "/api/spray-configurations",
            json={"year": 2019, "proposed_spray_days": 30},
            headers={"X-CSRF-Token": csrf_token},
        )
        assert response.status_code == 400

        response = client.post(
            "/api/spray-configurations",
            json={"year": 2025, "proposed_spray_days": 400},
            headers={"X-CSRF-Token": csrf_token},
        )
        assert response.status_code == 400

    def test_create_configuration_missing_district(
        self, client, login_admin, csrf_token
    ):
        response = client.post(
            "/api/spray-configurations",
            json={"year": 2025, "proposed_spray_days": 30, "district_uid": 999},
            headers={"X-CSRF-Token": csrf_token},
        )
        assert response.status_code == 400

    def test_create_configuration_sprayer(self, client, login_sprayer, csrf_token):
        response = client.post(
            "/api/spray-configurations",
            json={"year": 2025, "proposed_spray_days": 30},
            headers={"X-CSRF-Token": csrf_token},
        )
        assert response.status_code == 403

    def test_get_configurations(self, client, national_configuration, seed_data):
        """
        Configurations are listed newest year first
        """

        response = client.get("/api/spray-configurations")
        assert response.status_code == 200
        assert [
            configuration["year"] for configuration in response.json["data"]
        ] == [2025, seed_data["year"]]
        assert response.json["data"][1]["district_name"] == "Chokwe"

    def test_update_configuration(self, client, national_configuration, csrf_token):
        spray_configuration_uid = national_configuration["spray_configuration_uid"]

        response = client.put(
            f"/api/spray-configurations/{spray_configuration_uid}",
            json={"spray_target": 6000, "notes": "Raised target"},
            headers={"X-CSRF-Token": csrf_token},
        )
        assert response.status_code == 200
        assert response.json["data"]["spray_target"] == 6000
        assert response.json["data"]["notes"] == "Raised target"
        assert response.json["data"]["proposed_spray_days"] == 45
        assert response.json["data"]["active"] is True

    def test_update_configuration_end_before_start(
        self, client, national_configuration, csrf_token
    ):
        """
        The new end date is checked against the stored start date
        """

        spray_configuration_uid = national_configuration["spray_configuration_uid"]

        response = client.put(
            f"/api/spray-configurations/{spray_configuration_uid}",
            json={"end_date": "2025-01-15"},
            headers={"X-CSRF-Token": csrf_token},
        )
        assert response.status_code == 400

    def test_update_configuration_into_duplicate(
        self, client, national_configuration, csrf_token, seed_data
    ):
        spray_configuration_uid = national_configuration["spray_configuration_uid"]

        response = client.put(
            f"/api/spray-configurations/{spray_configuration_uid}",
            json={
                "year": seed_data["year"],
                "province_uid": seed_data["province_uid"],
                "district_uid": seed_data["district_uid"],
            },
            headers={"X-CSRF-Token": csrf_token},
        )
        assert response.status_code == 409

    def test_get_missing_configuration(self, client, login_admin):
        response = client.get("/api/spray-configurations/999")
        assert response.status_code == 404

    def test_delete_configuration(self, client, national_configuration, csrf_token):
        spray_configuration_uid = national_configuration["spray_configuration_uid"]

        response = client.delete(
            f"/api/spray-configurations/{spray_configuration_uid}",
            headers={"X-CSRF-Token": csrf_token},
        )
        assert response.status_code == 200

        response = client.get(f"/api/spray-configurations/{spray_configuration_uid}")
        assert response.status_code == 404

    def test_delete_configuration_with_spray_records(
        self, app, client, login_admin, csrf_token, seed_data
    ):
        """
        Configurations referenced by spray records are kept
        Expected behavior: 400
        """

        add_spray_total(app, seed_data)

        response = client.delete(
            f"/api/spray-configurations/{seed_data['spray_configuration_uid']}",
            headers={"X-CSRF-Token": csrf_token},
        )
        assert response.status_code == 400

        response = client.get(
            f"/api/spray-configurations/{seed_data['spray_configuration_uid']}"
        )
        assert response.status_code == 200
