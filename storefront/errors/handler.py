# coding: utf8
from werkzeug.exceptions import HTTPException

from storefront.errors.exceptions import BaseError
from storefront.lib.logger import logger
from storefront.lib.response import Response


def api_error_handler(error):
    if isinstance(error, BaseError):
        if error.status >= 500:
            logger.opt(exception=error).error(f"{error.kind}: {error.message}")
        else:
            logger.info(f"{error.kind} ({error.status}): {error.message}")
        return Response(
            code=error.status,
            status=error.status,
            error=error.kind,
            message=error.message,
            data=error.to_dict(),
        ).to_dict()

    if isinstance(error, HTTPException):
        code = error.code or 500
        kind = "validation_error" if code == 400 else "http_error"
        return Response(
            code=code,
            status=code,
            error=kind,
            message=error.description or error.name,
        ).to_dict()

    logger.opt(exception=error).error(f"Unhandled error: {error}")
    return Response(
        code=500,
        status=500,
        error="internal_error",
        message="Internal server error",
    ).to_dict()
