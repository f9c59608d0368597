"""
This contains the application factory for creating flask application instances.
Using the application factory allows for the creation of flask applications configured
for different environments based on the value of the CONFIG_TYPE environment variable
"""

import os
import logging.config
import sqlite3
import wtforms_json
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask import Flask, jsonify
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect, CSRFError
from sqlalchemy import MetaData, event
from sqlalchemy.engine import Engine
import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration


db = SQLAlchemy(
    metadata=MetaData(
        naming_convention={
            "pk": "pk_%(table_name)s",
            "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
            "ix": "ix_%(table_name)s_%(column_0_name)s",
            "uq": "uq_%(table_name)s_%(column_0_name)s",
            "ck": "ck_%(table_name)s_%(constraint_name)s",
        }
    )
)
migrate = Migrate()
csrf = CSRFProtect()
login_manager = LoginManager()
wtforms_json.init()


@event.listens_for(Engine, "connect")
def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """
    SQLite ignores foreign keys unless asked, the unit tests rely on them
    """

    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


### Application Factory ###
def create_app():
    app = Flask(__name__)

    # Configure the flask app instance
    CONFIG_TYPE = os.getenv("CONFIG_TYPE", default="app.config.DevelopmentConfig")
    app.config.from_object(CONFIG_TYPE)

    # Configure logging
    logging.config.dictConfig(app.config["LOGGING_CONFIG"])

    # Configure Sentry
    sentry_sdk.init(
        integrations=[FlaskIntegration(), SqlalchemyIntegration()],
        **app.config["SENTRY_CONFIG"]
    )

    # Register blueprints
    register_blueprints(app)

    # Initialize flask extension objects
    db.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)
    login_manager.init_app(app)

    # Configure login manager
    from app.blueprints.auth.models import User

    @login_manager.user_loader
    def user_loader(user_uid):
        """
        Given user_uid, return the associated User object.
        :param unicode user_uid: user_uid of user to retrieve
        """
        return (
            db.session.query(User)
            .filter(
                User.user_uid == user_uid,
                User.active.is_(True),
                User.deleted_at.is_(None),
            )
            .one_or_none()
        )

    @login_manager.unauthorized_handler
    def unauthorized_callback():
        return jsonify(success=False, error="UNAUTHORIZED"), 401

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    from app.commands import register_commands

    register_commands(app)

    return app


### Helper Functions ###
def register_blueprints(app):
    from app.blueprints.auth import auth_bp

    from app.blueprints.actors import actors_bp
    from app.blueprints.dashboard import dashboard_bp
    from app.blueprints.healthcheck import healthcheck_bp
    from app.blueprints.locations import locations_bp
    from app.blueprints.profile import profile_bp
    from app.blueprints.reports import reports_bp
    from app.blueprints.spray_configurations import spray_configurations_bp
    from app.blueprints.spray_totals import spray_totals_bp

    # Auth needs to be registered first to avoid circular imports
    app.register_blueprint(auth_bp)
    app.register_blueprint(actors_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(healthcheck_bp)
    app.register_blueprint(locations_bp)
    app.register_blueprint(profile_bp)
    app.register_blueprint(reports_bp)
    app.register_blueprint(spray_configurations_bp)
    app.register_blueprint(spray_totals_bp)


def register_error_handlers(app):
    def bad_request(e):
        return jsonify(success=False, error=str(e)), 400

    def unauthorized(e):
        return jsonify(success=False, error=str(e)), 401

    def forbidden(e):
        return jsonify(success=False, error=str(e)), 403

    def page_not_found(e):
        return jsonify(success=False, error=str(e)), 404

    def csrf_error(e):
        return jsonify(success=False, error=e.description), 400

    def internal_server_error(e):
        app.logger.error("Unhandled error: %s", e)
        return jsonify(success=False, error="Internal server error"), 500

    app.register_error_handler(400, bad_request)
    app.register_error_handler(401, unauthorized)
    app.register_error_handler(403, forbidden)
    app.register_error_handler(404, page_not_found)
    app.register_error_handler(CSRFError, csrf_error)
    app.register_error_handler(500, internal_server_error)
