import os

import requests

import const
from storefront.lib.logger import logger
from storefront.lib.string import normalize_phone


class SmsGateway:
    """HTTP SMS gateway client (bd-SMS / muthofun style GET API)."""

    @staticmethod
    def get_settings():
        return {
            "api_key": (os.environ.get("SMS_API_KEY") or "").strip(),
            "base_url": (os.environ.get("SMS_BASE_URL") or "").strip(),
            "sender_id": (os.environ.get("SMS_SENDER_ID") or "").strip(),
            "timeout": int(os.environ.get("SMS_TIMEOUT") or const.SMS_TIMEOUT),
        }

    @staticmethod
    def send(to, message):
        """
        Send one SMS through the gateway. Never raises.

        Args:
            to (str): Recipient number, e.g. 01XXXXXXXXX.
            message (str): Plain-text body.

        Returns:
            dict: {"success": bool, "error": str | None}
        """
        settings = SmsGateway.get_settings()
        if not settings["api_key"] or not settings["base_url"] or not settings["sender_id"]:
            logger.warning(
                "SMS gateway not configured: missing one of SMS_API_KEY, SMS_BASE_URL, SMS_SENDER_ID"
            )
            return {"success": False, "error": "SMS not configured"}

        params = {
            "api_key": settings["api_key"],
            "senderid": settings["sender_id"],
            "number": normalize_phone(to),
            "message": message,
            "type": "text",
        }
        try:
            response = requests.get(
                settings["base_url"],
                params=params,
                headers={"Accept": "application/json"},
                timeout=settings["timeout"],
            )
            if not response.ok:
                error = f"Gateway responded with HTTP {response.status_code}: {response.text}"[:200]
                logger.error(f"SMS delivery failed: {error}")
                return {"success": False, "error": error}
            logger.info(f"SMS sent to {params['number']}")
            return {"success": True, "error": None}
        except Exception as e:
            logger.error(f"SMS delivery error: {str(e)}")
            return {"success": False, "error": str(e)}
