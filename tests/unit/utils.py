from datetime import date, datetime

from werkzeug.http import parse_cookie

from app import db
from app.blueprints.spray_totals.models import SprayTotals


def get_csrf_token(client):
    """
    Get the CSRF token
    """
    response = client.get("/api/get-csrf")
    assert response.status_code == 200
    cookies = response.headers.getlist("Set-Cookie")
    cookie = next((cookie for cookie in cookies if "CSRF-TOKEN" in cookie), None)
    assert cookie is not None
    cookie_attrs = parse_cookie(cookie)
    csrf_token = cookie_attrs["CSRF-TOKEN"]

    return csrf_token


def logout(client):
    """
    Log a user out of the app
    """
    response = client.get(
        "/api/logout",
    )
    assert response.status_code == 200
    client.delete_cookie("session")
    client.delete_cookie("remember_token")
    client.delete_cookie("CSRF-TOKEN")

    return


def login_user(client, test_user_credentials):
    """
    Log in a user with the provided test user credentials
    """

    csrf_token = get_csrf_token(client)

    response = client.post(
        "/api/login",
        json={
            "email": test_user_credentials["email"],
            "password": test_user_credentials["password"],
        },
        content_type="application/json",
        headers={"X-CSRF-Token": csrf_token},
    )
    assert response.status_code == 200


def set_user_active_status(app, email, active):
    """
    Set a user's active status directly in the database. Needed to set up certain tests.
    """
    from app.blueprints.auth.models import User

    if active is not True and active is not False:
        raise Exception("A non-boolean value was provided for 'active' parameter")

    with app.app_context():
        user = User.query.filter_by(email=email).first()
        user.active = active
        db.session.commit()


def get_spray_totals_payload(seed_data, **overrides):
    """
    Request body for a valid spray record against the seeded data
    """

    payload = {
        "sprayer_uid": seed_data["sprayer_uid"],
        "brigade_chief_uid": seed_data["brigade_chief_uid"],
        "community_uid": seed_data["community_uid"],
        "spray_configuration_uid": seed_data["spray_configuration_uid"],
        "spray_date": f"{seed_data['year']}-03-10",
        "spray_type": "PRINCIPAL",
        "spray_status": "IN_PROGRESS",
        "spray_round": 1,
        "insecticide_used": "Actellic 300CS",
        "structures_found": 100,
        "structures_sprayed": 80,
        "structures_not_sprayed": 20,
        "compartments_sprayed": 150,
        "walls_type": "MATOPE",
        "roofs_type": "ZINCO",
        "number_of_persons": 400,
        "children_under_5": 60,
        "pregnant_women": 12,
    }
    payload.update(overrides)

    return payload


def add_spray_total(app, seed_data, **overrides):
    """
    Insert a spray record directly in the database and return its uid
    """

    values = {
        "sprayer_uid": seed_data["sprayer_uid"],
        "brigade_chief_uid": seed_data["brigade_chief_uid"],
        "community_uid": seed_data["community_uid"],
        "spray_configuration_uid": seed_data["spray_configuration_uid"],
        "spray_date": date(seed_data["year"], 3, 10),
        "created_by": seed_data["admin_uid"],
        "spray_status": "COMPLETED",
        "structures_found": 100,
        "structures_sprayed": 80,
        "structures_not_sprayed": 20,
        "number_of_persons": 400,
        "children_under_5": 60,
        "pregnant_women": 12,
    }
    values.update(overrides)

    with app.app_context():
        spray_total = SprayTotals(**values)
        db.session.add(spray_total)
        db.session.commit()

        return spray_total.spray_totals_uid


def add_deleted_spray_total(app, seed_data, **overrides):
    """
    Insert a spray record that has already been soft deleted
    """

    spray_totals_uid = add_spray_total(app, seed_data, **overrides)

    with app.app_context():
        spray_total = db.session.get(SprayTotals, spray_totals_uid)
        spray_total.is_deleted = True
        spray_total.deleted_at = datetime.utcnow()
        spray_total.deleted_by = seed_data["admin_uid"]
        db.session.commit()

    return spray_totals_uid
