import jsondiff
from utils import logout, get_csrf_token
import pytest


@pytest.mark.profile
class TestProfile:
    def test_change_password(self, user_credentials, client, login_admin, csrf_token):
        """
        Check the change-password endpoint
        """

        new_password = "newpassword"
        old_password = user_credentials["admin"]["password"]

        request_body = {
            "cur_password": old_password,
            "new_password": new_password,
            "confirm": new_password,
        }

        response = client.post(
            "/api/change-password",
            headers={"X-CSRF-Token": csrf_token},
            json=request_body,
        )

        assert response.status_code == 200

        logout(client)

        # GET a new CSRF token
        csrf_token = get_csrf_token(client)

        response = client.post(
            "/api/login",
            json={
                "email": user_credentials["admin"]["email"],
                "password": new_password,
            },
            headers={"X-CSRF-Token": csrf_token},
        )

        assert response.status_code == 200

    def test_change_password_mismatch(
        self, user_credentials, client, login_admin, csrf_token
    ):
        """
        Check the change-password endpoint for a mismatched password
        """

        request_body = {
            "cur_password": user_credentials["admin"]["password"],
            "new_password": "newpassword",
            "confirm": "newpassword_mismatch",
        }

        response = client.post(
            "/api/change-password",
            headers={"X-CSRF-Token": csrf_token},
            json=request_body,
        )

        assert response.status_code == 400

    def test_change_password_wrong_current_password(
        self, client, login_admin, csrf_token
    ):
        """
        Check the change-password endpoint for an incorrect current password
        """

        request_body = {
            "cur_password": "wrongpassword",
            "new_password": "newpassword",
            "confirm": "newpassword",
        }

        response = client.post(
            "/api/change-password",
            headers={"X-CSRF-Token": csrf_token},
            json=request_body,
        )

        assert response.status_code == 403
        assert response.json == {"success": False, "error": "Wrong password"}

    def test_profile_response(self, client, login_supervisor, user_credentials, seed_data):
        """
        Check profile endpoint response
        """

        response = client.get("/api/profile")
        assert response.status_code == 200

        expected_response = {
            "user_uid": seed_data["supervisor_uid"],
            "email": user_credentials["supervisor"]["email"],
            "name": "Supervisor User",
            "role": "SUPERVISOR",
            "number": None,
            "description": None,
            "actor_type_uid": None,
            "actor_type_name": None,
            "active": True,
        }

        checkdiff = jsondiff.diff(expected_response, response.json)

        assert checkdiff == {}
