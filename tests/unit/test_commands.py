import pytest

from app import db
from app.blueprints.actors.models import ActorType
from app.blueprints.auth.models import User


@pytest.mark.commands
class TestCommands:
    def test_create_user(self, app, runner):
        result = runner.invoke(
            args=[
                "create-user",
                "--email",
                "new.admin@spraytrack.test",
                "--name",
                "New Admin",
                "--password",
                "asdfasdf",
            ]
        )

        assert result.exit_code == 0
        assert "Created ADMIN user new.admin@spraytrack.test" in result.output

        with app.app_context():
            user = User.query.filter_by(email="new.admin@spraytrack.test").first()
            assert user.role == "ADMIN"
            assert user.verify_password("asdfasdf")

    def test_create_user_duplicate_email(self, runner, user_credentials):
        result = runner.invoke(
            args=[
                "create-user",
                "--email",
                user_credentials["admin"]["email"],
                "--name",
                "Admin Again",
                "--role",
                "SUPERVISOR",
                "--password",
                "asdfasdf",
            ]
        )

        assert result.exit_code != 0
        assert "already exists" in result.output

    def test_seed_actor_types_existing(self, app, runner):
        result = runner.invoke(args=["seed-actor-types"])

        assert result.exit_code == 0
        assert "Added actor type" not in result.output

        with app.app_context():
            assert ActorType.query.count() == 2

    def test_seed_actor_types_missing(self, app, runner):
        """
        Only the missing default actor types are added
        """

        with app.app_context():
            actor_type = ActorType.query.filter_by(
                actor_type_name="Brigade Chief"
            ).first()
            actor_type.actor_type_name = "Chefe de Brigada"
            db.session.commit()

        result = runner.invoke(args=["seed-actor-types"])

        assert result.exit_code == 0
        assert "Added actor type Brigade Chief" in result.output
        assert "Added actor type Sprayer" not in result.output

        with app.app_context():
            assert ActorType.query.count() == 3
