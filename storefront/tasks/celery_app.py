import os

from celery import Celery

from storefront.config import configs

config_name = os.environ.get("FLASK_CONFIG") or "develop"
config_app = configs[config_name]


celery_app = Celery(
    "storefront",
    broker=config_app.CELERY_BROKER_URL,
    backend=config_app.CELERY_RESULT_BACKEND,
    include=["storefront.tasks.send_sms"],
)

celery_app.conf.update(
    task_ignore_result=True,
    # Publishing happens on the request path; give up instead of retrying.
    task_publish_retry=False,
    task_always_eager=config_app.CELERY_TASK_ALWAYS_EAGER,
    task_routes={"send_sms": {"queue": "notifications"}},
)


def init_celery(app):
    celery_app.conf.update(
        broker_url=app.config["CELERY_BROKER_URL"],
        result_backend=app.config["CELERY_RESULT_BACKEND"],
        task_always_eager=app.config.get("CELERY_TASK_ALWAYS_EAGER", False),
    )
    app.extensions["celery"] = celery_app
    return celery_app
