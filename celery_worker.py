# celery_worker.py
# celery -A celery_worker.celery worker -Q notifications --loglevel=info
import os
from dotenv import load_dotenv

load_dotenv()

from storefront import create_app  # noqa
from storefront.config import configs  # noqa
from storefront.tasks.celery_app import celery_app  # noqa

config_name = os.getenv("FLASK_CONFIG", "develop")
flask_app = create_app(configs[config_name])
celery = celery_app
