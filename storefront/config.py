# coding: utf8
import os


def _database_uri():
    if os.environ.get("DATABASE_URL"):
        return os.environ.get("DATABASE_URL")
    return "{engine}://{user}:{password}@{host}:{port}/{db}".format(
        engine=os.environ.get("SQLALCHEMY_ENGINE") or "mysql+pymysql",
        user=os.environ.get("SQLALCHEMY_USER") or "root",
        password=os.environ.get("SQLALCHEMY_PASSWORD") or "",
        host=os.environ.get("SQLALCHEMY_HOST") or "127.0.0.1",
        port=int(os.environ.get("SQLALCHEMY_PORT", 3306)),
        db=os.environ.get("SQLALCHEMY_DATABASE") or "storefront",
    )


class Config(object):
    SECRET_KEY = os.environ.get("SECRET_KEY") or "<your secret key>"

    SQLALCHEMY_DATABASE_URI = _database_uri()

    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_size": 20,
        "max_overflow": 50,
        "pool_timeout": 10,
        "pool_recycle": 900,
        "pool_pre_ping": True,
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY") or "secret"
    JWT_ACCESS_TOKEN_EXPIRES = int(os.environ.get("JWT_ACCESS_TOKEN_EXPIRES") or 86400)

    CELERY_BROKER_URL = (
        os.environ.get("CELERY_BROKER_URL") or "redis://localhost:6379/0"
    )
    CELERY_RESULT_BACKEND = (
        os.environ.get("CELERY_RESULT_BACKEND") or "redis://localhost:6379/0"
    )
    CELERY_TASK_ALWAYS_EAGER = False

    # Seconds a single order-creation transaction may take before it is aborted.
    ORDER_TRANSACTION_TIMEOUT = int(os.environ.get("ORDER_TRANSACTION_TIMEOUT") or 10)
    ORDER_NUMBER_ATTEMPTS = 3

    CORS_SCHEME = os.environ.get("CORS_SCHEME") or "*"

    RESTX_ERROR_404_HELP = False
    ERROR_INCLUDE_MESSAGE = True

    PROPAGATE_EXCEPTIONS = os.environ.get("FLASK_CONFIG") == "production"


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.environ.get("TEST_DATABASE_URL") or "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    CELERY_TASK_ALWAYS_EAGER = True
    BCRYPT_LOG_ROUNDS = 4
    JWT_SECRET_KEY = "testing-secret-key-with-enough-length"


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False
    TESTING = False


configs = {
    "develop": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}
