from storefront.lib.logger import logger


class Response:

    def __init__(self, code=200, message="", data=None, status=200, error=None):
        try:
            self.status = status
            self.message = message
            self.data = data if data is not None else {}
            self.code = code
            self.error = error
        except Exception as e:
            logger.opt(exception=e).error(f"Error in Response __init__: {e}")
            self.status = 500
            self.message = "Internal Server Error"
            self.data = {}
            self.code = 500
            self.error = "internal_error"

    def to_dict(self):
        body = {
            "code": self.code,
            "message": self.message,
            "data": self.data,
        }
        if self.error:
            body["error"] = self.error
        return body, self.status
