#!/usr/bin/env python

import os


class Config:
    """
    Base configuration class. Contains default configuration settings + configuration settings applicable to all environments.
    """

    # Default Flask settings
    DEBUG = False
    TESTING = False
    WTF_CSRF_ENABLED = True
    WTF_CSRF_HEADERS = ["X-CSRF-Token", "X-CSRFToken"]

    # Flask secret key
    SECRET_KEY = os.getenv("SECRET_KEY")

    # DB login details
    DB_HOST = os.getenv("DB_HOST")
    DB_USER = os.getenv("DB_USER")
    DB_PASS = os.getenv("DB_PASS")
    DB_NAME = os.getenv("DB_NAME")

    # DB settings
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_recycle": 300,
    }

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Domain used for the generated login emails of field actors
    ACTOR_EMAIL_DOMAIN = "spray.local"

    LOGGING_CONFIG = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s [%(process)d] [%(levelname)s] in %(module)s: %(message)s",
                "datefmt": "[%Y-%m-%d %H:%M:%S %z]",
                "class": "logging.Formatter",
            },
        },
        "handlers": {
            "stream": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "formatter": "default",
            },
        },
        "root": {"handlers": ["stream"], "level": "INFO"},
    }

    SENTRY_CONFIG = {"dsn": ""}


class DevelopmentConfig(Config):
    DEBUG = True

    SQLALCHEMY_DATABASE_URI = "postgresql://%s:%s@%s:%s/%s" % (
        Config.DB_USER,
        Config.DB_PASS,
        "host.docker.internal",
        5432,
        Config.DB_NAME,
    )


class UnitTestConfig(Config):
    TESTING = True
    SECRET_KEY = "unit-test-secret-key"

    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URI", "sqlite://")
    SQLALCHEMY_ENGINE_OPTIONS = {}

    LOGGING_CONFIG = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": "%(levelname)s %(message)s"}},
        "handlers": {
            "stream": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": "default",
            },
        },
        "root": {"handlers": ["stream"], "level": "WARNING"},
    }


class StagingConfig(Config):
    SQLALCHEMY_DATABASE_URI = "postgresql://%s:%s@%s:%s/%s" % (
        Config.DB_USER,
        Config.DB_PASS,
        Config.DB_HOST,
        5432,
        Config.DB_NAME,
    )

    SENTRY_CONFIG = {
        "dsn": os.getenv("SENTRY_DSN", ""),
        "traces_sample_rate": 1.0,
        "environment": "staging",
    }


class ProductionConfig(Config):
    SQLALCHEMY_DATABASE_URI = "postgresql://%s:%s@%s:%s/%s" % (
        Config.DB_USER,
        Config.DB_PASS,
        Config.DB_HOST,
        5432,
        Config.DB_NAME,
    )

    SENTRY_CONFIG = {
        "dsn": os.getenv("SENTRY_DSN", ""),
        "traces_sample_rate": 1.0,
        "environment": "production",
    }
