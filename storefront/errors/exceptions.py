# coding: utf8


class BaseError(Exception):
    """Error that maps directly onto an API response.

    `errors` holds per-field problems for validation failures and `extra`
    any additional machine-readable details (e.g. a promo rejection reason).
    """

    status = 500
    kind = "internal_error"
    default_message = "Internal server error"

    def __init__(self, message=None, errors=None, extra=None):
        self.message = message or self.default_message
        self.errors = errors or []
        self.extra = extra or {}
        super().__init__(self.message)

    def to_dict(self):
        payload = dict(self.extra)
        if self.errors:
            payload["errors"] = self.errors
        return payload


class BadRequest(BaseError):
    status = 400
    kind = "bad_request"
    default_message = "Bad request"


class ValidationError(BadRequest):
    kind = "validation_error"
    default_message = "Validation failed"


class Unauthorized(BaseError):
    status = 401
    kind = "unauthorized"
    default_message = "Unauthenticated"


class Forbidden(BaseError):
    status = 403
    kind = "forbidden"
    default_message = "Forbidden"


class NotFoundError(BaseError):
    status = 404
    kind = "not_found"
    default_message = "Not found"


class ConflictError(BaseError):
    status = 409
    kind = "conflict"
    default_message = "Conflict"


class PromoCodeRejected(ConflictError):
    """Promo code failed one of its eligibility rules."""

    def __init__(self, rejection, **kwargs):
        self.rejection = rejection
        super().__init__(
            message=rejection.message(**kwargs),
            extra={"reason": rejection.reason_code},
        )

    @property
    def reason_code(self):
        return self.rejection.reason_code


class InternalError(BaseError):
    pass


class TransactionTimeout(InternalError):
    default_message = "Order could not be completed in time"
