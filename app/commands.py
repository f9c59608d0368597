import click
from flask import current_app
from flask.cli import with_appcontext

from app import db

DEFAULT_ACTOR_TYPES = ("Sprayer", "Brigade Chief")


def register_commands(app):
    app.cli.add_command(create_user)
    app.cli.add_command(seed_actor_types)


@click.command("create-user")
@click.option("--email", required=True)
@click.option("--name", required=True)
@click.option(
    "--role",
    type=click.Choice(["ADMIN", "SUPERVISOR", "SPRAYER"]),
    default="ADMIN",
    show_default=True,
)
@click.password_option()
@with_appcontext
def create_user(email, name, role, password):
    """
    Create a login account, used to bootstrap the first admin
    """

    from app.blueprints.auth.models import User

    if User.query.filter_by(email=email).first() is not None:
        raise click.ClickException(f"A user with email {email} already exists")

    user = User(email=email, name=name, role=role, password=password)
    db.session.add(user)
    db.session.commit()

    current_app.logger.info("Created %s user %s", role, email)
    click.echo(f"Created {role} user {email} (user_uid {user.user_uid})")


@click.command("seed-actor-types")
@with_appcontext
def seed_actor_types():
    """
    Add the default actor types that are missing
    """

    from app.blueprints.actors.models import ActorType

    for actor_type_name in DEFAULT_ACTOR_TYPES:
        if ActorType.query.filter_by(actor_type_name=actor_type_name).first():
            continue

        db.session.add(ActorType(actor_type_name=actor_type_name))
        click.echo(f"Added actor type {actor_type_name}")

    db.session.commit()
