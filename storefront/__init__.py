# coding: utf8
from logging import DEBUG
import os

import click
from flask import Flask
from flask_cors import CORS
from werkzeug.exceptions import default_exceptions

import const
from .errors.handler import api_error_handler
from .extensions import bcrypt, db, jwt
from .tasks.celery_app import init_celery


def create_app(config_app):
    app = Flask(__name__)

    cors_scheme = os.environ.get("CORS_SCHEME") or config_app.CORS_SCHEME

    CORS(app, resources={r"/*": {"origins": cors_scheme}})
    app.config.from_object(config_app)
    __init_app(app)
    __config_logging(app)
    __register_blueprint(app)
    __config_error_handlers(app)
    __register_commands(app)

    return app


def __config_logging(app):
    app.logger.setLevel(DEBUG)
    app.logger.info("Start flask...")


def __register_blueprint(app):
    from storefront.api import bp as api_bp

    app.register_blueprint(api_bp)


def __init_app(app):
    # Models have to be imported before create_all() sees their tables
    from storefront.models import order, order_item, product, promo_code, user  # noqa: F401

    db.init_app(app)
    bcrypt.init_app(app)
    jwt.init_app(app)
    init_celery(app)

    app.logger.info("Initial app...")


def __config_error_handlers(app):
    for exp in default_exceptions:
        app.register_error_handler(exp, api_error_handler)
    app.register_error_handler(Exception, api_error_handler)


def __register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("create-admin")
    @click.argument("email")
    @click.argument("password")
    @click.option("--name", default="Admin")
    def create_admin(email, password, name):
        """Create a back-office admin account."""
        from storefront.errors.exceptions import ConflictError
        from storefront.services.auth import AuthService

        try:
            user = AuthService.create_user(
                email, password, name=name, role=const.ROLE_ADMIN
            )
        except ConflictError as e:
            raise click.ClickException(e.message)
        click.echo(f"Admin {user.email} created.")
