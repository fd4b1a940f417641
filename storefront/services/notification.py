from storefront.enums.messages import SmsMessage
from storefront.enums.order import OrderStatus
from storefront.lib.logger import logger
from storefront.tasks.send_sms import send_sms

STATUS_MESSAGES = {
    OrderStatus.CONFIRMED.value: SmsMessage.ORDER_CONFIRMED,
    OrderStatus.SHIPPED.value: SmsMessage.ORDER_SHIPPED,
}


class NotificationServices:

    @staticmethod
    def send_sms(phone, message):
        """Hand the SMS to the worker queue and return immediately.

        Called only after the order is committed; a broker failure is logged
        and has no effect on the order.
        """
        try:
            send_sms.delay(phone, message)
            return True
        except Exception as e:
            logger.error(f"Could not queue SMS to {phone}: {e}")
            return False

    @staticmethod
    def notify_order_placed(order):
        return NotificationServices.send_sms(
            order.customer_phone,
            SmsMessage.ORDER_PLACED.format(order_number=order.order_number),
        )

    @staticmethod
    def notify_status_change(order, previous_status):
        if order.order_status == previous_status:
            return False
        template = STATUS_MESSAGES.get(order.order_status)
        if template is None:
            return False
        return NotificationServices.send_sms(
            order.customer_phone, template.format(order_number=order.order_number)
        )
