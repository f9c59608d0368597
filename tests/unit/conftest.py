import os
from datetime import date

import pytest
from passlib.hash import pbkdf2_sha256
from werkzeug.http import parse_cookie

os.environ.setdefault("CONFIG_TYPE", "app.config.UnitTestConfig")

from app import create_app, db  # noqa: E402
from app.blueprints.actors.models import ActorType  # noqa: E402
from app.blueprints.auth.models import User  # noqa: E402
from app.blueprints.locations.models import (  # noqa: E402
    Community,
    District,
    Locality,
    Province,
)
from app.blueprints.spray_configurations.models import (  # noqa: E402
    SprayConfiguration,
)
from utils import login_user  # noqa: E402

TEST_YEAR = 2024


@pytest.fixture()
def app():
    app = create_app()
    # other setup can go here

    yield app

    # clean up / reset resources here


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()


@pytest.fixture(scope="session")
def user_credentials():
    """
    Create credentials for the login users, one per role
    """

    users = {
        "admin": {
            "email": "admin@spraytrack.test",
            "name": "Admin User",
            "role": "ADMIN",
            "password": "asdfasdf",
        },
        "supervisor": {
            "email": "supervisor@spraytrack.test",
            "name": "Supervisor User",
            "role": "SUPERVISOR",
            "password": "asdfasdf",
        },
        "sprayer": {
            "email": "sprayer@spraytrack.test",
            "name": "Sprayer User",
            "role": "SPRAYER",
            "password": "asdfasdf",
        },
        "other_sprayer": {
            "email": "other.sprayer@spraytrack.test",
            "name": "Other Sprayer User",
            "role": "SPRAYER",
            "password": "asdfasdf",
        },
    }

    for user_type in users.keys():
        users[user_type]["pw_hash"] = pbkdf2_sha256.hash(users[user_type]["password"])

    yield users


@pytest.fixture()
def csrf_token(client):
    """
    Get a CSRF token for non-GET requests
    """

    # Get a CSRF token
    response = client.get("/api/get-csrf")
    assert response.status_code == 200
    cookies = response.headers.getlist("Set-Cookie")
    cookie = next((cookie for cookie in cookies if "CSRF-TOKEN" in cookie), None)
    assert cookie is not None
    cookie_attrs = parse_cookie(cookie)
    csrf_token = cookie_attrs["CSRF-TOKEN"]

    yield csrf_token


@pytest.fixture()
def login_admin(user_credentials, client):
    """
    Log in the admin user as a setup step for certain tests
    """

    login_user(client, user_credentials["admin"])

    yield


@pytest.fixture()
def login_supervisor(user_credentials, client):
    login_user(client, user_credentials["supervisor"])

    yield


@pytest.fixture()
def login_sprayer(user_credentials, client):
    login_user(client, user_credentials["sprayer"])

    yield


@pytest.fixture(autouse=True)
def setup_database(app, user_credentials):
    """
    Set up the schema and data in the database on a per-test basis

    Yields the uids of the seeded rows
    """

    with app.app_context():
        db.create_all()

        sprayer_type = ActorType(actor_type_name="Sprayer")
        brigade_chief_type = ActorType(actor_type_name="Brigade Chief")
        db.session.add_all([sprayer_type, brigade_chief_type])
        db.session.flush()

        # Login users, stored with the precomputed password hashes
        login_users = {}
        for user_type, credentials in user_credentials.items():
            user = User(
                email=credentials["email"],
                name=credentials["name"],
                role=credentials["role"],
            )
            user.password_secure = credentials["pw_hash"]
            db.session.add(user)
            login_users[user_type] = user

        # Field actors without a password
        sprayer_actor = User(
            email="joao.machava@spray.local",
            name="Joao Machava",
            number="SP-001",
            actor_type_uid=sprayer_type.actor_type_uid,
        )
        brigade_chief_actor = User(
            email="maria.cossa@spray.local",
            name="Maria Cossa",
            number="BC-001",
            actor_type_uid=brigade_chief_type.actor_type_uid,
        )
        db.session.add_all([sprayer_actor, brigade_chief_actor])
        db.session.flush()

        province = Province(province_name="Gaza", province_code="GZ")
        db.session.add(province)
        db.session.flush()

        district = District(
            district_name="Chokwe",
            district_code="CHK",
            province_uid=province.province_uid,
        )
        db.session.add(district)
        db.session.flush()

        locality = Locality(locality_name="Lionde", district_uid=district.district_uid)
        db.session.add(locality)
        db.session.flush()

        community = Community(
            community_name="Bairro 1", locality_uid=locality.locality_uid
        )
        db.session.add(community)
        db.session.flush()

        spray_configuration = SprayConfiguration(
            year=TEST_YEAR,
            proposed_spray_days=30,
            spray_target=1000,
            province_uid=province.province_uid,
            district_uid=district.district_uid,
            start_date=date(TEST_YEAR, 3, 1),
            end_date=date(TEST_YEAR, 4, 30),
            description="Chokwe 2024 campaign",
            created_by=login_users["admin"].user_uid,
        )
        db.session.add(spray_configuration)
        db.session.commit()

        seeded = {
            "year": TEST_YEAR,
            "admin_uid": login_users["admin"].user_uid,
            "supervisor_uid": login_users["supervisor"].user_uid,
            "sprayer_user_uid": login_users["sprayer"].user_uid,
            "other_sprayer_user_uid": login_users["other_sprayer"].user_uid,
            "sprayer_type_uid": sprayer_type.actor_type_uid,
            "brigade_chief_type_uid": brigade_chief_type.actor_type_uid,
            "sprayer_uid": sprayer_actor.user_uid,
            "brigade_chief_uid": brigade_chief_actor.user_uid,
            "province_uid": province.province_uid,
            "district_uid": district.district_uid,
            "locality_uid": locality.locality_uid,
            "community_uid": community.community_uid,
            "spray_configuration_uid": spray_configuration.spray_configuration_uid,
        }

    yield seeded

    # Clean up the database after each test
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def seed_data(setup_database):
    return setup_database
