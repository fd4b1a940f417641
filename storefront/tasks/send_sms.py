from storefront.lib.logger import logger
from storefront.tasks.celery_app import celery_app
from storefront.third_parties.sms import SmsGateway


@celery_app.task(name="send_sms", ignore_result=True)
def send_sms(phone, message):
    result = SmsGateway.send(phone, message)
    if not result["success"]:
        logger.warning(f"SMS to {phone} not delivered: {result['error']}")
    return result
